"""Writer for import engine - store a titled question batch as an exam."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.exam import Exam, ExamQuestion, ExamSource
from app.services.importer.records import QuestionRecord

logger = get_logger(__name__)


class ExamWriter:
    """Write validated question batches to the database."""

    def __init__(self, db: Session):
        """
        Initialize writer.

        Args:
            db: Database session
        """
        self.db = db

    def save(
        self,
        title: str,
        records: Sequence[QuestionRecord],
        source: ExamSource = ExamSource.CSV,
    ) -> Exam:
        """
        Store an exam and its questions in one transaction.

        Callers validate the batch first; the writer does not re-check
        question invariants.

        Args:
            title: Exam title (non-blank)
            records: Validated question records, in display order
            source: How the questions were authored

        Returns:
            The stored exam
        """
        exam = Exam(title=title.strip(), source=source, question_count=len(records))
        for position, record in enumerate(records, start=1):
            exam.questions.append(
                ExamQuestion(
                    position=position,
                    question_text=record.question,
                    question_type=str(getattr(record.type, "value", record.type)),
                    option_a=record.option_a or None,
                    option_b=record.option_b or None,
                    option_c=record.option_c or None,
                    option_d=record.option_d or None,
                    correct_answers=list(record.correct_answers),
                )
            )

        try:
            self.db.add(exam)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(exam)

        logger.info(
            "Exam saved",
            extra={"exam_id": str(exam.id), "source": source.value, "question_count": len(records)},
        )
        return exam

    def get(self, exam_id) -> Exam | None:
        """Load a stored exam with its questions."""
        return self.db.get(Exam, exam_id)
