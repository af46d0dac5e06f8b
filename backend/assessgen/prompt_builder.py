from __future__ import annotations
from typing import Any, List

from .errors import InvalidAssessmentType
from .schemas import AssessmentRequest, AssessmentType, QUESTION_FORMATS


def resolve_assessment_type(value: Any) -> AssessmentType:
	try:
		return AssessmentType(value)
	except ValueError:
		raise InvalidAssessmentType(value) from None


def _numbered(outcomes: List[str]) -> str:
	return "\n".join(f"{i}. {outcome}" for i, outcome in enumerate(outcomes, start=1))


def build_prompt(req: AssessmentRequest) -> str:
	"""Turn request parameters into the generation prompt.

	The trailing block is the output contract for the requested type; the
	extractor validates generator output against the same QUESTION_FORMATS
	entry. Raises InvalidAssessmentType for an unknown type.
	"""
	fmt = QUESTION_FORMATS[resolve_assessment_type(req.assessment_type)]
	return (
		f"Generate a {req.difficulty} difficulty {req.subject} assessment for {req.class_level} students in {req.country} "
		f"following the {req.board} curriculum, on the topic of \"{req.topic}\" with {req.question_count} questions. "
		"The assessment should address the following learning outcomes:\n"
		f"{_numbered(req.learning_outcomes)}\n\n"
		f"{fmt.instructions}"
	)
