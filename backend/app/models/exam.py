"""Exam storage models."""

import uuid
from enum import Enum as PyEnum

from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


class ExamSource(str, PyEnum):
    """How an exam's questions were authored."""

    CSV = "csv"
    MANUAL = "manual"


class Exam(Base):
    """A titled batch of questions handed over for storage."""

    __tablename__ = "exams"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    source = Column(
        Enum(
            ExamSource,
            name="exam_source",
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
        default=ExamSource.CSV,
    )
    question_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    questions = relationship(
        "ExamQuestion",
        back_populates="exam",
        cascade="all, delete-orphan",
        order_by="ExamQuestion.position",
    )


class ExamQuestion(Base):
    """One question of a stored exam, in authoring order."""

    __tablename__ = "exam_questions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    exam_id = Column(
        Uuid(as_uuid=True), ForeignKey("exams.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False)
    question_text = Column(Text, nullable=False)
    question_type = Column(String(20), nullable=False)
    option_a = Column(Text, nullable=True)
    option_b = Column(Text, nullable=True)
    option_c = Column(Text, nullable=True)
    option_d = Column(Text, nullable=True)
    correct_answers = Column(JSON, nullable=False, default=list)

    exam = relationship("Exam", back_populates="questions")
