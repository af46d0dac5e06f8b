from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


BLANK_MARKER = "___"
OPTION_COUNT = 4


class AssessmentType(str, Enum):
	MCQ = "mcq"
	TRUE_FALSE = "truefalse"
	FILL_IN_THE_BLANK = "fillintheblank"


class AssessmentRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True, frozen=True, coerce_numbers_to_str=True)

	country: str
	board: str
	class_level: str = Field(alias="classLevel")
	subject: str
	topic: str
	# Kept as a plain string: unknown types are rejected by the prompt builder, not by request parsing
	assessment_type: str = Field(alias="assessmentType")
	difficulty: str
	question_count: int = Field(alias="questionCount", gt=0)
	learning_outcomes: List[str] = Field(alias="learningOutcomes", min_length=1)


class _QuestionBase(BaseModel):
	model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

	question: str = Field(min_length=1)


class MCQQuestion(_QuestionBase):
	options: List[str] = Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)
	correct_answer: int = Field(alias="correctAnswer", ge=0, lt=OPTION_COUNT, strict=True)


class TrueFalseQuestion(_QuestionBase):
	correct_answer: bool = Field(alias="correctAnswer", strict=True)


class FillInBlankQuestion(_QuestionBase):
	answer: str = Field(min_length=1)
	options: List[str] = Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)

	@field_validator("question")
	@classmethod
	def _has_blank(cls, value: str) -> str:
		if BLANK_MARKER not in value:
			raise ValueError(f"question must contain the blank marker {BLANK_MARKER!r}")
		return value

	@model_validator(mode="after")
	def _answer_in_options(self) -> "FillInBlankQuestion":
		lowered = {o.lower() for o in self.options}
		if self.answer.lower() not in lowered:
			raise ValueError("answer must be one of the options")
		return self


Question = Union[MCQQuestion, TrueFalseQuestion, FillInBlankQuestion]


class QuestionFormat(BaseModel):
	"""Output contract for one assessment type: what the prompt asks for and the model that enforces it."""

	model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

	model: Type[BaseModel]
	instructions: str


QUESTION_FORMATS: Dict[AssessmentType, QuestionFormat] = {
	AssessmentType.MCQ: QuestionFormat(
		model=MCQQuestion,
		instructions=(
			"Create multiple-choice questions. For each question, provide 4 options (A, B, C, D) with one correct answer. "
			"Format the output as a JSON array of objects, where each object has 'question', 'options' (an array of 4 strings), "
			"and 'correctAnswer' (index of the correct option) fields."
		),
	),
	AssessmentType.TRUE_FALSE: QuestionFormat(
		model=TrueFalseQuestion,
		instructions=(
			"Create true/false questions. Format the output as a JSON array of objects, where each object has 'question' "
			"and 'correctAnswer' (boolean) fields."
		),
	),
	AssessmentType.FILL_IN_THE_BLANK: QuestionFormat(
		model=FillInBlankQuestion,
		instructions=(
			"Create fill-in-the-blank questions. Format the output as a JSON array of objects, where each object has "
			f"'question' (with a blank represented by '{BLANK_MARKER}'), 'answer' (the correct word or phrase to fill the blank), "
			"and 'options' (an array of 4 strings including the correct answer) fields."
		),
	),
}


class GeneratedAssessment(BaseModel):
	id: str
	assessment_type: AssessmentType
	questions: List[Question]


class SubmitAnswersRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	id: str
	# Slots stay untyped: scoring compares them strictly against the stored answer key
	answers: List[Any]
	learning_outcomes: Optional[List[str]] = Field(default=None, alias="learningOutcomes")
