from __future__ import annotations
import json
import logging
from typing import Any, List

from pydantic import ValidationError

from .errors import MalformedPayload, NoStructuredPayload, UnexpectedShape
from .prompt_builder import resolve_assessment_type
from .schemas import Question, QUESTION_FORMATS

logger = logging.getLogger(__name__)


def extract_payload(text: str) -> List[Any]:
	"""Return the JSON array embedded in free-form generator output.

	Takes everything from the first '[' to the last ']', so prose and
	markdown fences around the array are discarded.
	"""
	first = text.find("[")
	last = text.rfind("]")
	if first == -1 or last == -1 or last < first:
		raise NoStructuredPayload()
	candidate = text[first : last + 1]
	try:
		data = json.loads(candidate)
	except (json.JSONDecodeError, RecursionError) as e:
		raise MalformedPayload(f"Could not parse JSON payload: {e}") from e
	if not isinstance(data, list):
		raise UnexpectedShape("Invalid assessment format: Expected an array of questions")
	return data


def extract_assessment(text: str, assessment_type: Any) -> List[Question]:
	kind = resolve_assessment_type(assessment_type)
	fmt = QUESTION_FORMATS[kind]
	items = extract_payload(text)
	questions: List[Question] = []
	for i, item in enumerate(items):
		try:
			questions.append(fmt.model.model_validate(item))
		except ValidationError as e:
			errors = "; ".join(f"{'.'.join(str(p) for p in err['loc']) or 'item'}: {err['msg']}" for err in e.errors())
			raise UnexpectedShape(f"Question {i + 1} does not match the {fmt.model.__name__} format ({errors})") from e
	logger.info("Parsed %d %s questions", len(questions), kind.value)
	return questions
