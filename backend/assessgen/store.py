from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .errors import AnswersAlreadySubmitted, PersistenceUpdateFailed, PersistenceWriteFailed, RecordNotFound
from .models import AssessmentRecord
from .schemas import AssessmentRequest, Question
from .scoring import align_answers

logger = logging.getLogger(__name__)


class AssessmentStore:
	"""Data-store handle for assessment records.

	Built once at startup and handed to request handlers. A record is created
	once and updated at most once, when answers are attached.
	"""

	def __init__(self, session_factory: sessionmaker) -> None:
		self._session_factory = session_factory

	def create(self, req: AssessmentRequest, questions: Sequence[Question]) -> str:
		row = AssessmentRecord(
			country=req.country,
			board=req.board,
			class_level=req.class_level,
			subject=req.subject,
			topic=req.topic,
			assessment_type=req.assessment_type,
			difficulty=req.difficulty,
			questions=[q.model_dump(by_alias=True) for q in questions],
			learning_outcomes=list(req.learning_outcomes),
		)
		with self._session_factory() as db:
			try:
				db.add(row)
				db.commit()
				record_id = row.id
			except SQLAlchemyError as e:
				db.rollback()
				logger.error("Failed to save assessment: %s", e)
				raise PersistenceWriteFailed(f"Failed to save assessment: {e}", questions=list(questions)) from e
		logger.info("Assessment saved to database: %s", record_id)
		return record_id

	def get(self, record_id: str) -> Dict[str, Any]:
		with self._session_factory() as db:
			row = db.get(AssessmentRecord, record_id)
			if row is None:
				raise RecordNotFound(record_id)
			return row.to_dict()

	def update_answers(self, record_id: str, answers: Sequence[Any], learning_outcomes: Optional[List[str]] = None) -> Dict[str, Any]:
		with self._session_factory() as db:
			try:
				row = db.get(AssessmentRecord, record_id)
				if row is None:
					raise RecordNotFound(record_id)
				if row.answers is not None:
					raise AnswersAlreadySubmitted(record_id)
				row.answers = align_answers(answers, len(row.questions or []))
				if learning_outcomes is not None:
					row.learning_outcomes = list(learning_outcomes)
				db.commit()
				return row.to_dict()
			except SQLAlchemyError as e:
				db.rollback()
				logger.error("Failed to update answers for %s: %s", record_id, e)
				raise PersistenceUpdateFailed(str(e)) from e
