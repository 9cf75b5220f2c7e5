"""CSV exam import: parse, map and validate an uploaded question document."""

from dataclasses import dataclass, field

from app.core.config import settings
from app.core.logging import get_logger
from app.services.importer import (
    CSVParser,
    ParsedDocument,
    QuestionRecord,
    QuestionValidator,
    RowMapper,
    ValidationResult,
)

logger = get_logger(__name__)

SAMPLE_CSV = """question,type,optionA,optionB,optionC,optionD,correctAnswers
Is the sky blue?,true-false,True,False,,,A
Which of these are fruits?,multiple,Apple,Car,Orange,Train,A|C
What is the capital of India?,single,Mumbai,Delhi,Kolkata,Chennai,B
The Earth is flat,true-false,True,False,,,B
Which are programming languages?,multiple,Python,Chair,JavaScript,Table,A|C"""

SAMPLE_FILENAME = "exam_template.csv"


@dataclass
class ImportPreview:
    """Everything the preview screen needs about one uploaded document."""

    document: ParsedDocument
    records: list[QuestionRecord]
    validation: ValidationResult = field(default_factory=ValidationResult)

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid

    @property
    def warnings(self) -> list[str]:
        expected = len(self.document.headers)
        return [
            f"Row {row_number}: skipped, expected {expected} fields but found {found}"
            for row_number, found in self.document.skipped_rows
        ]


def parse_csv_content(text: str, parser: CSVParser | None = None) -> list[QuestionRecord]:
    """Parse CSV text into the question records that have text and answers."""
    document = (parser or CSVParser()).parse(text)
    return RowMapper().map_rows(document.headers, document.rows)


def validate_csv_data(
    records: list[QuestionRecord], strict_types: bool | None = None
) -> ValidationResult:
    """Validate a batch of question records."""
    if strict_types is None:
        strict_types = settings.IMPORT_STRICT_TYPES
    return QuestionValidator(strict_types=strict_types).validate(records)


def build_preview(text: str, strict_types: bool | None = None) -> ImportPreview:
    """
    Run the full import pipeline on decoded CSV text.

    Args:
        text: Decoded CSV document
        strict_types: Override IMPORT_STRICT_TYPES

    Returns:
        Preview with mapped records, validation result and skipped rows
    """
    document = CSVParser().parse(text)
    records = RowMapper().map_rows(document.headers, document.rows)
    validation = validate_csv_data(records, strict_types=strict_types)

    logger.info(
        "CSV parsed",
        extra={
            "total_rows": document.total_rows,
            "accepted_rows": len(records),
            "skipped_rows": len(document.skipped_rows),
            "error_count": len(validation.errors),
        },
    )
    return ImportPreview(document=document, records=records, validation=validation)
