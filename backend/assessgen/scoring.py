from __future__ import annotations
import logging
from typing import Any, List, Optional, Sequence

logger = logging.getLogger(__name__)

_MISSING = object()


def align_answers(answers: Sequence[Any], length: int) -> List[Any]:
	"""Pad with unanswered slots or drop surplus ones so there is one slot per question."""
	aligned = list(answers[:length])
	if len(answers) > length:
		logger.warning("Dropping %d answers beyond the %d questions", len(answers) - length, length)
	aligned.extend([None] * (length - len(aligned)))
	return aligned


def _field(question: Any, *names: str) -> Any:
	# Questions are typed models when fresh from the extractor, plain dicts when loaded from the store
	for name in names:
		if isinstance(question, dict):
			if name in question:
				return question[name]
		elif hasattr(question, name):
			return getattr(question, name)
	return _MISSING


def _is_int(value: Any) -> bool:
	return isinstance(value, int) and not isinstance(value, bool)


def _as_index(value: Any) -> Any:
	# JSON clients may send 2.0 for 2
	if isinstance(value, float) and value.is_integer():
		return int(value)
	return value


def is_correct(assessment_type: Any, question: Any, answer: Any) -> bool:
	kind = getattr(assessment_type, "value", assessment_type)
	if kind == "mcq":
		expected = _field(question, "correct_answer", "correctAnswer")
		answer = _as_index(answer)
		return _is_int(expected) and _is_int(answer) and answer == expected
	if kind == "truefalse":
		expected = _field(question, "correct_answer", "correctAnswer")
		return isinstance(expected, bool) and isinstance(answer, bool) and answer == expected
	if kind == "fillintheblank":
		expected = _field(question, "answer")
		# Case-insensitive only; surrounding whitespace is significant
		return isinstance(expected, str) and bool(expected) and isinstance(answer, str) and answer.lower() == expected.lower()
	return False


def score(assessment_type: Any, questions: Sequence[Any], answers: Any) -> int:
	"""Count correct answers. Never raises; anything unusable scores zero."""
	if not isinstance(answers, (list, tuple)):
		logger.error("Answers is not a list: %r", answers)
		return 0
	if not isinstance(questions, (list, tuple)):
		logger.error("Questions is not a list: %r", questions)
		return 0
	total = 0
	for index, answer in enumerate(answers):
		if index >= len(questions) or questions[index] is None:
			logger.warning("Answer at index %d has no matching question", index)
			continue
		try:
			if is_correct(assessment_type, questions[index], answer):
				total += 1
		except Exception:
			logger.exception("Could not score answer at index %d", index)
	return total


def grade(assessment_type: Any, questions: Sequence[Any], answers: Optional[Sequence[Any]]) -> List[bool]:
	"""Per-question correctness for result rendering; unanswered questions are False."""
	answers = list(answers or [])
	results: List[bool] = []
	for index, question in enumerate(questions):
		answer = answers[index] if index < len(answers) else None
		try:
			results.append(is_correct(assessment_type, question, answer))
		except Exception:
			logger.exception("Could not grade question %d", index)
			results.append(False)
	return results
