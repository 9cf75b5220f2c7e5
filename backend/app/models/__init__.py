"""Database models."""

from app.models.exam import Exam, ExamQuestion, ExamSource

__all__ = [
    "Exam",
    "ExamQuestion",
    "ExamSource",
]
