"""Manual exam authoring: build a question batch one question at a time."""

import uuid
from dataclasses import replace

from app.services.importer import QuestionRecord, QuestionType, QuestionValidator, ValidationResult

TRUE_FALSE_DEFAULTS = ("True", "False")


class DraftError(ValueError):
    """A draft action was rejected; the message is shown to the author."""

    pass


class ExamDraft:
    """An exam being authored by hand before it is saved."""

    def __init__(self, title: str = ""):
        self.title = title
        self.questions: list[QuestionRecord] = []

    def new_question(self, question_type: str = QuestionType.SINGLE.value) -> QuestionRecord:
        """Return a blank question with a fresh local id."""
        record = QuestionRecord(
            type=question_type,
            option_a="",
            option_b="",
            option_c="",
            option_d="",
            id=uuid.uuid4().hex,
        )
        if question_type == QuestionType.TRUE_FALSE.value:
            record.option_a, record.option_b = TRUE_FALSE_DEFAULTS
        return record

    @staticmethod
    def change_type(record: QuestionRecord, question_type: str) -> None:
        """Switch question type; previously selected answers no longer apply."""
        record.type = question_type
        record.correct_answers = []

    @staticmethod
    def toggle_correct_answer(record: QuestionRecord, option: str, checked: bool) -> None:
        """Mark or unmark `option` as correct (single-choice keeps at most one)."""
        if record.type == QuestionType.SINGLE.value:
            record.correct_answers = [option] if checked else []
        elif checked:
            if option not in record.correct_answers:
                record.correct_answers.append(option)
        else:
            record.correct_answers = [a for a in record.correct_answers if a != option]

    def add_question(self, record: QuestionRecord) -> QuestionRecord:
        """
        Append a copy of `record` to the draft.

        Raises:
            DraftError: If text, options A/B or a correct answer is missing
        """
        if not record.question.strip():
            raise DraftError("Question text is required.")
        if not record.option_a or not record.option_b:
            raise DraftError("At least options A and B are required.")
        if not record.correct_answers:
            raise DraftError("Please select at least one correct answer.")

        added = replace(record, correct_answers=list(record.correct_answers))
        if added.id is None:
            added.id = uuid.uuid4().hex
        self.questions.append(added)
        return added

    def remove_question(self, question_id: str) -> QuestionRecord:
        """Remove a question by its local id."""
        for index, record in enumerate(self.questions):
            if record.id == question_id:
                return self.questions.pop(index)
        raise KeyError(question_id)

    def finalize(self, strict_types: bool = False) -> ValidationResult:
        """
        Check the draft is ready to save and validate its questions.

        Raises:
            DraftError: If the title is blank or no question was added
        """
        if not self.title.strip():
            raise DraftError("Exam title is required.")
        if not self.questions:
            raise DraftError("Please add at least one question.")
        return QuestionValidator(strict_types=strict_types).validate(self.questions)
