"""CSV parser for import engine."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from app.core.logging import get_logger

logger = get_logger(__name__)

DELIMITER = ","
QUOTE_CHAR = '"'


class CSVParseError(Exception):
    """CSV parsing error."""

    pass


def tokenize_line(line: str) -> list[str]:
    """
    Split one CSV line into trimmed field values.

    A quote at the start of the line or right after a delimiter opens a quoted
    field; the next quote closes it. Delimiters inside a quoted field are kept
    literally. Escaped quotes are not supported and malformed quoting never
    raises: characters simply keep accumulating into the current field.

    Args:
        line: A single line of text (no embedded newlines)

    Returns:
        Ordered list of field values, each stripped of surrounding whitespace
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for i, char in enumerate(line):
        if char == QUOTE_CHAR and (i == 0 or line[i - 1] == DELIMITER):
            in_quotes = True
        elif char == QUOTE_CHAR and in_quotes:
            in_quotes = False
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def parse_header(line: str) -> list[str]:
    """Split the header row on commas, lower-casing and trimming each name."""
    return [name.strip().lower() for name in line.split(DELIMITER)]


@dataclass
class ParsedDocument:
    """Header names plus the data rows that have at least as many fields."""

    headers: list[str]
    rows: list[tuple[int, list[str]]] = field(default_factory=list)
    skipped_rows: list[tuple[int, int]] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.rows) + len(self.skipped_rows)


class CSVParser:
    """Parse exam question CSV documents."""

    def __init__(self, encoding: str = "utf-8"):
        """
        Initialize CSV parser.

        Args:
            encoding: Encoding used to decode uploaded bytes
        """
        self.encoding = encoding

    def decode(self, file_content: bytes) -> str:
        """
        Decode uploaded file content.

        Raises:
            CSVParseError: If file cannot be decoded
        """
        try:
            text_content = file_content.decode(self.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise CSVParseError(f"Failed to decode file with encoding {self.encoding}: {e}")
        return text_content.lstrip("\ufeff")

    @staticmethod
    def _lines(text: str) -> list[str]:
        return text.strip().split("\n")

    def read_headers(self, text: str) -> list[str]:
        """Return the normalized header names of a document."""
        return parse_header(self._lines(text)[0])

    def count_rows(self, text: str) -> int:
        """Count data lines without tokenizing them."""
        return len(self._lines(text)) - 1

    def iter_rows(self, text: str) -> Iterator[tuple[int, list[str]]]:
        """
        Tokenize the data rows of a document one at a time.

        Yields:
            Tuple of (row_number, fields). Row numbers are 1-based document
            line numbers, so the first data row is 2.
        """
        for row_number, line in enumerate(self._lines(text)[1:], start=2):  # Start at 2 (1 is header)
            yield row_number, tokenize_line(line)

    def parse(self, text: str) -> ParsedDocument:
        """
        Parse a whole CSV document.

        Rows with fewer fields than the header are dropped from `rows` and
        recorded in `skipped_rows` as (row_number, field_count).
        """
        document = ParsedDocument(headers=self.read_headers(text))
        expected = len(document.headers)

        for row_number, fields in self.iter_rows(text):
            if len(fields) < expected:
                document.skipped_rows.append((row_number, len(fields)))
                logger.warning(
                    "Skipping short CSV row",
                    extra={
                        "row_number": row_number,
                        "field_count": len(fields),
                        "expected": expected,
                    },
                )
                continue
            document.rows.append((row_number, fields))

        return document
