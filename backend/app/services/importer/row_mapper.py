"""Row mapper for import engine."""

from collections.abc import Iterable

from app.services.importer.records import QuestionRecord, QuestionType

# Normalized (lower-cased) header name -> QuestionRecord attribute
COLUMN_FIELDS = {
    "question": "question",
    "type": "type",
    "optiona": "option_a",
    "optionb": "option_b",
    "optionc": "option_c",
    "optiond": "option_d",
    "correctanswers": "correct_answers",
}

ANSWER_SEPARATOR = "|"


def parse_correct_answers(value: str) -> list[str]:
    """Split a pipe-delimited answer cell, keeping order and duplicates."""
    return [part.strip() for part in value.split(ANSWER_SEPARATOR) if part.strip()]


class RowMapper:
    """Map tokenized CSV rows to question records."""

    def map_row(
        self, headers: list[str], values: list[str], row_number: int | None = None
    ) -> QuestionRecord:
        """
        Map one data row to a question record.

        Headers are paired with values by position. Unrecognized headers are
        ignored. An unrecognized `type` leaves the default ("single") in place;
        the literal is kept on `raw_type` for strict validation.

        Args:
            headers: Normalized header names
            values: Field values of the row
            row_number: Source line number of the row

        Returns:
            Mapped question record
        """
        record = QuestionRecord(row_number=row_number)

        for index, header in enumerate(headers):
            attr = COLUMN_FIELDS.get(header)
            if attr is None:
                continue
            value = values[index].strip() if index < len(values) else ""

            if attr == "type":
                record.raw_type = value
                if value in QuestionType.values():
                    record.type = value
            elif attr == "correct_answers":
                record.correct_answers = parse_correct_answers(value)
            else:
                setattr(record, attr, value)

        return record

    def map_rows(
        self, headers: list[str], rows: Iterable[tuple[int, list[str]]]
    ) -> list[QuestionRecord]:
        """
        Map data rows, keeping only records with question text and answers.

        Rows without question text or without any correct answer are dropped
        without being reported.
        """
        records: list[QuestionRecord] = []
        for row_number, values in rows:
            record = self.map_row(headers, values, row_number)
            if record.question and record.correct_answers:
                records.append(record)
        return records
