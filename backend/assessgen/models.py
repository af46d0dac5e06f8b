from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON
from .db import Base


def _new_id() -> str:
	return uuid.uuid4().hex


class AssessmentRecord(Base):
	__tablename__ = "assessments"
	id = Column(String(32), primary_key=True, default=_new_id)
	country = Column(String(128), nullable=False)
	board = Column(String(128), nullable=False)
	class_level = Column(String(64), nullable=False)
	subject = Column(String(128), nullable=False)
	topic = Column(String(256), nullable=False)
	assessment_type = Column(String(32), nullable=False)
	difficulty = Column(String(64), nullable=False)
	# Question objects as returned to the caller (camelCase keys)
	questions = Column(JSON, nullable=False)
	learning_outcomes = Column(JSON, nullable=False)
	# Null until the single answer submission
	answers = Column(JSON, nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

	def to_dict(self) -> dict:
		return {
			"id": self.id,
			"country": self.country,
			"board": self.board,
			"class_level": self.class_level,
			"subject": self.subject,
			"topic": self.topic,
			"assessment_type": self.assessment_type,
			"difficulty": self.difficulty,
			"questions": self.questions,
			"learning_outcomes": self.learning_outcomes,
			"answers": self.answers,
			"created_at": self.created_at.isoformat() if self.created_at else None,
			"updated_at": self.updated_at.isoformat() if self.updated_at else None,
		}
