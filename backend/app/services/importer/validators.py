"""Validators for import engine."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from app.services.importer.records import QuestionRecord, QuestionType

TYPE_CHOICES = "'true-false', 'single', or 'multiple'"


class ValidationError:
    """Validation error for a specific row."""

    def __init__(
        self,
        code: str,
        message: str,
        row_number: int | None = None,
        field: str | None = None,
    ):
        """
        Initialize validation error.

        Args:
            code: Error code (stable identifier)
            message: Human-readable message
            row_number: Document row the error refers to
            field: Field name that failed validation
        """
        self.code = code
        self.message = message
        self.row_number = row_number
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON responses."""
        return {
            "code": self.code,
            "message": self.message,
            "row_number": self.row_number,
            "field": self.field,
        }

    def __repr__(self) -> str:
        return f"ValidationError({self.code!r}, {self.message!r})"


@dataclass
class ValidationResult:
    """Outcome of validating a batch: valid exactly when there are no errors."""

    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]


class QuestionValidator:
    """Validate a batch of question records before saving."""

    # Error codes (stable)
    NO_QUESTIONS = "NO_QUESTIONS"
    MISSING_QUESTION = "MISSING_QUESTION"
    INVALID_TYPE = "INVALID_TYPE"
    UNRECOGNIZED_TYPE = "UNRECOGNIZED_TYPE"
    MISSING_OPTIONS = "MISSING_OPTIONS"
    MISSING_CORRECT = "MISSING_CORRECT"
    TOO_MANY_CORRECT = "TOO_MANY_CORRECT"
    INVALID_CORRECT = "INVALID_CORRECT"

    def __init__(self, strict_types: bool = False):
        """
        Initialize validator.

        Args:
            strict_types: Also report CSV rows whose `type` literal was present
                but unrecognized (the mapper silently falls back to "single")
        """
        self.strict_types = strict_types

    def validate(self, records: Sequence[QuestionRecord]) -> ValidationResult:
        """
        Validate a batch of question records.

        Every rule is checked on every record so the full list of problems can
        be shown at once. An empty batch yields a single error.

        Args:
            records: Mapped or manually built question records

        Returns:
            Validation result with errors in row order
        """
        result = ValidationResult()

        if not records:
            result.errors.append(
                ValidationError(self.NO_QUESTIONS, "No valid questions found in CSV")
            )
            return result

        for index, record in enumerate(records):
            # +2: positions start at 0 and the header occupies row 1
            row_number = record.row_number if record.row_number is not None else index + 2
            result.errors.extend(self.validate_record(record, row_number))

        return result

    def validate_record(self, record: QuestionRecord, row_number: int) -> list[ValidationError]:
        """Run every rule against one record."""
        errors: list[ValidationError] = []

        def add(code: str, message: str, field_name: str) -> None:
            errors.append(ValidationError(code, f"Row {row_number}: {message}", row_number, field_name))

        if not record.question:
            add(self.MISSING_QUESTION, "Question text is required", "question")

        if record.type not in QuestionType.values():
            add(self.INVALID_TYPE, f"Invalid question type. Must be {TYPE_CHOICES}", "type")
        elif (
            self.strict_types
            and record.raw_type
            and record.raw_type not in QuestionType.values()
        ):
            add(
                self.UNRECOGNIZED_TYPE,
                f"Unrecognized question type '{record.raw_type}'. Must be {TYPE_CHOICES}",
                "type",
            )

        if not (record.option_a and record.option_b):
            add(self.MISSING_OPTIONS, "Questions must have at least optionA and optionB", "options")

        if not record.correct_answers:
            add(self.MISSING_CORRECT, "At least one correct answer is required", "correct_answers")

        if record.type == QuestionType.SINGLE.value and len(record.correct_answers) > 1:
            add(
                self.TOO_MANY_CORRECT,
                "Single-choice questions can only have one correct answer",
                "correct_answers",
            )

        valid_options = record.populated_options()
        invalid_answers = [a for a in record.correct_answers if a not in valid_options]
        if invalid_answers:
            add(
                self.INVALID_CORRECT,
                f"Invalid correct answers: {', '.join(invalid_answers)}",
                "correct_answers",
            )

        return errors
