from __future__ import annotations
from typing import Any, List, Optional


class AssessmentError(Exception):
	"""Base class for failures in the generate / submit lifecycle."""

	status_code: int = 500


class InvalidAssessmentType(AssessmentError):
	status_code = 400

	def __init__(self, assessment_type: Any) -> None:
		super().__init__(f"Invalid assessment type: {assessment_type!r}")
		self.assessment_type = assessment_type


class GenerationFailed(AssessmentError):
	pass


class NoStructuredPayload(AssessmentError):
	def __init__(self, message: str = "No valid JSON found in the response") -> None:
		super().__init__(message)


class MalformedPayload(AssessmentError):
	pass


class UnexpectedShape(AssessmentError):
	pass


class PersistenceWriteFailed(AssessmentError):
	def __init__(self, message: str, questions: Optional[List[Any]] = None) -> None:
		super().__init__(message)
		# Validated questions survive a failed write so in-process callers still have them
		self.questions = questions if questions is not None else []


class PersistenceUpdateFailed(AssessmentError):
	pass


class RecordNotFound(PersistenceUpdateFailed):
	status_code = 404

	def __init__(self, record_id: str) -> None:
		super().__init__(f"Assessment {record_id} not found")
		self.record_id = record_id


class AnswersAlreadySubmitted(PersistenceUpdateFailed):
	status_code = 409

	def __init__(self, record_id: str) -> None:
		super().__init__(f"Answers for assessment {record_id} were already submitted")
		self.record_id = record_id
