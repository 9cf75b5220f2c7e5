"""Question records produced by the import pipeline and the manual builder."""

from dataclasses import dataclass, field
from enum import Enum


class QuestionType(str, Enum):
    """Supported question types (values are the CSV literals)."""

    TRUE_FALSE = "true-false"
    SINGLE = "single"
    MULTIPLE = "multiple"

    @classmethod
    def values(cls) -> list[str]:
        return [t.value for t in cls]


OPTION_LABELS = ("A", "B", "C", "D")


@dataclass
class QuestionRecord:
    """
    One question as mapped from a CSV row or authored by hand.

    Domain invariants (options A/B present, answer consistency) are not
    enforced here; a record may violate them until it is validated.
    """

    question: str = ""
    type: str = QuestionType.SINGLE.value
    option_a: str | None = None
    option_b: str | None = None
    option_c: str | None = None
    option_d: str | None = None
    correct_answers: list[str] = field(default_factory=list)
    row_number: int | None = None
    raw_type: str = ""
    id: str | None = None

    def option(self, label: str) -> str | None:
        """Return the text of option slot `label` (A-D), or None."""
        if label not in OPTION_LABELS:
            return None
        return getattr(self, f"option_{label.lower()}")

    def populated_options(self) -> list[str]:
        """Labels of the option slots that hold a non-empty value."""
        return [label for label in OPTION_LABELS if self.option(label)]
