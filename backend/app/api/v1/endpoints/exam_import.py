"""CSV exam import endpoints: template download, preview and save."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AppError
from app.core.etag import check_if_none_match, compute_etag, create_not_modified_response
from app.core.logging import get_logger
from app.db.session import get_db
from app.models.exam import ExamSource
from app.schemas.exam import ExamSavedOut, ImportPreviewOut, QuestionOut, ValidationErrorOut
from app.services.exam_import import SAMPLE_CSV, SAMPLE_FILENAME, ImportPreview, build_preview
from app.services.importer import CSVParseError, CSVParser, ExamWriter

router = APIRouter(prefix="/exams/import", tags=["Exam Import"])
logger = get_logger(__name__)


async def _read_upload(file: UploadFile) -> str:
    """Read and decode an uploaded CSV, enforcing the size limit."""
    max_bytes = settings.MAX_BODY_BYTES_IMPORT
    file.file.seek(0, 2)
    file_size = file.file.tell()
    file.file.seek(0)

    if file_size > max_bytes:
        raise AppError(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            code="PAYLOAD_TOO_LARGE",
            message="File too large",
            details={"limit": max_bytes},
        )

    content = await file.read()
    try:
        return CSVParser(encoding=settings.IMPORT_ENCODING).decode(content)
    except CSVParseError as e:
        raise AppError(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="CSV_DECODE_ERROR",
            message="Failed to parse CSV file. Please check the format.",
            details={"reason": str(e)},
        ) from e


def _preview(text: str) -> ImportPreview:
    max_rows = settings.IMPORT_MAX_ROWS
    if CSVParser().count_rows(text) > max_rows:
        raise AppError(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="VALIDATION_LIMIT_EXCEEDED",
            message="Import row count exceeds maximum allowed",
            details={"limit": max_rows},
        )
    return build_preview(text)


def _preview_out(preview: ImportPreview) -> ImportPreviewOut:
    return ImportPreviewOut(
        is_valid=preview.is_valid,
        errors=preview.validation.messages,
        error_details=[ValidationErrorOut(**e.to_dict()) for e in preview.validation.errors],
        warnings=preview.warnings,
        total_rows=preview.document.total_rows,
        accepted_rows=len(preview.records),
        skipped_rows=[row_number for row_number, _ in preview.document.skipped_rows],
        questions=[QuestionOut.model_validate(r) for r in preview.records],
    )


@router.get("/template")
async def download_template(request: Request) -> Response:
    """Download the sample CSV template. Supports ETag/If-None-Match for caching."""
    etag = compute_etag(SAMPLE_CSV)
    if check_if_none_match(request, etag):
        return create_not_modified_response(etag)

    return Response(
        content=SAMPLE_CSV,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{SAMPLE_FILENAME}"',
            "ETag": etag,
        },
    )


@router.post("/preview", response_model=ImportPreviewOut)
async def preview_import(file: UploadFile = File(...)) -> ImportPreviewOut:
    """Parse and validate an uploaded CSV without saving anything."""
    text = await _read_upload(file)
    return _preview_out(_preview(text))


@router.post("", response_model=ExamSavedOut, status_code=status.HTTP_201_CREATED)
async def import_exam(
    file: UploadFile = File(...),
    title: Annotated[str, Form(max_length=200)] = "",
    db: Session = Depends(get_db),
) -> ExamSavedOut:
    """Import an exam from CSV. Nothing is stored unless every row is valid."""
    if not title.strip():
        raise AppError(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="TITLE_REQUIRED",
            message="Exam title is required.",
        )

    preview = _preview(await _read_upload(file))
    if not preview.is_valid:
        logger.info(
            "CSV import rejected",
            extra={"filename": file.filename, "error_count": len(preview.validation.errors)},
        )
        raise AppError(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="CSV_VALIDATION_FAILED",
            message="CSV validation failed",
            details={"errors": preview.validation.messages, "warnings": preview.warnings},
        )

    exam = ExamWriter(db).save(title, preview.records, source=ExamSource.CSV)
    return ExamSavedOut(
        exam_id=exam.id,
        title=exam.title,
        source=exam.source,
        question_count=exam.question_count,
    )
