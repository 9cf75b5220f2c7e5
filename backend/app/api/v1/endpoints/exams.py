"""Manual exam authoring and stored exam lookup."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AppError
from app.db.session import get_db
from app.models.exam import ExamSource
from app.schemas.exam import ExamOut, ExamSavedOut, ManualExamIn
from app.services.exam_builder import DraftError, ExamDraft
from app.services.importer import ExamWriter

router = APIRouter(prefix="/exams", tags=["Exams"])


@router.post("", response_model=ExamSavedOut, status_code=status.HTTP_201_CREATED)
async def create_exam(
    exam_in: ManualExamIn,
    db: Session = Depends(get_db),
) -> ExamSavedOut:
    """Save a manually authored exam after validating every question."""
    draft = ExamDraft(title=exam_in.title)
    draft.questions = [q.to_record() for q in exam_in.questions]

    try:
        result = draft.finalize(strict_types=settings.IMPORT_STRICT_TYPES)
    except DraftError as e:
        code = "TITLE_REQUIRED" if not exam_in.title.strip() else "NO_QUESTIONS"
        raise AppError(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, code=code, message=str(e)
        ) from e

    if not result.is_valid:
        raise AppError(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="QUESTION_VALIDATION_FAILED",
            message="Question validation failed",
            details={"errors": result.messages},
        )

    exam = ExamWriter(db).save(draft.title, draft.questions, source=ExamSource.MANUAL)
    return ExamSavedOut(
        exam_id=exam.id,
        title=exam.title,
        source=exam.source,
        question_count=exam.question_count,
    )


@router.get("/{exam_id}", response_model=ExamOut)
async def get_exam(exam_id: UUID, db: Session = Depends(get_db)) -> ExamOut:
    """Get a stored exam with its questions."""
    exam = ExamWriter(db).get(exam_id)
    if not exam:
        raise AppError(
            status_code=status.HTTP_404_NOT_FOUND, code="NOT_FOUND", message="Exam not found"
        )
    return ExamOut.model_validate(exam)
