from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .extractor import extract_assessment
from .prompt_builder import build_prompt, resolve_assessment_type
from .schemas import AssessmentRequest, GeneratedAssessment
from .scoring import score
from .settings import Settings, settings as default_settings
from .store import AssessmentStore

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
	async def generate(self, prompt: str, *, temperature: Optional[float] = None, max_output_tokens: Optional[int] = None) -> str: ...


async def generate_assessment(
	req: AssessmentRequest,
	generator: TextGenerator,
	store: AssessmentStore,
	settings: Optional[Settings] = None,
) -> GeneratedAssessment:
	"""Build the prompt, make one generation call, validate the output and persist it.

	Nothing is retried. A failed write raises PersistenceWriteFailed carrying
	the validated questions.
	"""
	settings = settings or default_settings
	kind = resolve_assessment_type(req.assessment_type)
	prompt = build_prompt(req)
	logger.debug("Generating assessment with prompt: %s", prompt)
	text = await generator.generate(
		prompt,
		temperature=settings.generation_temperature,
		max_output_tokens=settings.generation_max_tokens,
	)
	logger.debug("Raw generator response: %s", text)
	questions = extract_assessment(text, kind)
	if len(questions) != req.question_count:
		logger.info("Requested %d questions, generator returned %d", req.question_count, len(questions))
	record_id = store.create(req, questions)
	return GeneratedAssessment(id=record_id, assessment_type=kind, questions=questions)


def submit_answers(
	record_id: str,
	answers: Sequence[Any],
	store: AssessmentStore,
	learning_outcomes: Optional[List[str]] = None,
) -> Dict[str, Any]:
	record = store.update_answers(record_id, answers, learning_outcomes)
	questions = record.get("questions") or []
	record["score"] = score(record.get("assessment_type"), questions, record.get("answers") or [])
	record["total"] = len(questions)
	logger.info("Answers saved for %s: %d/%d", record_id, record["score"], record["total"])
	return record
