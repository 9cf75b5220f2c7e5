"""Pydantic schemas for exam import and manual authoring."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.exam import ExamSource
from app.services.importer import QuestionRecord, QuestionType

# Validation caps (input hardening)
TITLE_MAX_LENGTH = 200
QUESTION_TEXT_MAX_LENGTH = 4000
OPTION_MAX_LENGTH = 1000
CORRECT_ANSWERS_MAX_ITEMS = 8
MANUAL_QUESTIONS_MAX_ITEMS = 500


# ============================================================================
# Question Schemas
# ============================================================================


class QuestionBase(BaseModel):
    """Question fields accepted from clients."""

    question: str = Field(default="", max_length=QUESTION_TEXT_MAX_LENGTH)
    # Plain string: unknown types are reported by the batch validator, not rejected here
    type: str = Field(default=QuestionType.SINGLE.value, max_length=32)
    option_a: str | None = Field(default=None, max_length=OPTION_MAX_LENGTH)
    option_b: str | None = Field(default=None, max_length=OPTION_MAX_LENGTH)
    option_c: str | None = Field(default=None, max_length=OPTION_MAX_LENGTH)
    option_d: str | None = Field(default=None, max_length=OPTION_MAX_LENGTH)
    correct_answers: list[str] = Field(default_factory=list, max_length=CORRECT_ANSWERS_MAX_ITEMS)


class QuestionIn(QuestionBase):
    """Manually authored question."""

    id: str | None = Field(default=None, max_length=64, description="Client-side identifier")

    def to_record(self) -> QuestionRecord:
        return QuestionRecord(
            question=self.question.strip(),
            type=self.type,
            option_a=self.option_a,
            option_b=self.option_b,
            option_c=self.option_c,
            option_d=self.option_d,
            correct_answers=list(self.correct_answers),
            id=self.id,
        )


class QuestionOut(BaseModel):
    """Mapped question shown in the import preview (uncapped, mirrors the record)."""

    model_config = ConfigDict(from_attributes=True)

    question: str
    type: str
    option_a: str | None = None
    option_b: str | None = None
    option_c: str | None = None
    option_d: str | None = None
    correct_answers: list[str]
    row_number: int | None = None


class ValidationErrorOut(BaseModel):
    """One validation problem."""

    code: str
    message: str
    row_number: int | None = None
    field: str | None = None


# ============================================================================
# Import Schemas
# ============================================================================


class ImportPreviewOut(BaseModel):
    """Result of parsing and validating an uploaded CSV."""

    is_valid: bool
    errors: list[str]
    error_details: list[ValidationErrorOut]
    warnings: list[str]
    total_rows: int
    accepted_rows: int
    skipped_rows: list[int]
    questions: list[QuestionOut]


# ============================================================================
# Exam Schemas
# ============================================================================


class ManualExamIn(BaseModel):
    """Manually authored exam."""

    title: str = Field(default="", max_length=TITLE_MAX_LENGTH)
    questions: list[QuestionIn] = Field(default_factory=list, max_length=MANUAL_QUESTIONS_MAX_ITEMS)


class ExamQuestionOut(BaseModel):
    """Stored exam question."""

    model_config = ConfigDict(from_attributes=True)

    position: int
    question_text: str
    question_type: str
    option_a: str | None
    option_b: str | None
    option_c: str | None
    option_d: str | None
    correct_answers: list[str]


class ExamSavedOut(BaseModel):
    """Immediate response after an exam is stored."""

    exam_id: UUID
    title: str
    source: ExamSource
    question_count: int


class ExamOut(BaseModel):
    """Stored exam with its questions."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    source: ExamSource
    question_count: int
    created_at: datetime
    questions: list[ExamQuestionOut]
