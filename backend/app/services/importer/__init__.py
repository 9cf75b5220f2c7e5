"""Import engine for bulk question imports."""

from app.services.importer.csv_parser import CSVParseError, CSVParser, ParsedDocument, tokenize_line
from app.services.importer.records import OPTION_LABELS, QuestionRecord, QuestionType
from app.services.importer.row_mapper import RowMapper
from app.services.importer.validators import QuestionValidator, ValidationError, ValidationResult
from app.services.importer.writer import ExamWriter

__all__ = [
    "CSVParseError",
    "CSVParser",
    "ParsedDocument",
    "tokenize_line",
    "OPTION_LABELS",
    "QuestionRecord",
    "QuestionType",
    "RowMapper",
    "QuestionValidator",
    "ValidationError",
    "ValidationResult",
    "ExamWriter",
]
