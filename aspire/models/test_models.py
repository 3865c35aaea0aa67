# aspire/models/test_models.py
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, Index, Integer, String, Text, TIMESTAMP
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import Base
from .auth_models import utcnow

if TYPE_CHECKING:
    from .auth_models import User

# jsonb on Postgres, plain JSON elsewhere (tests run on SQLite)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Test(Base):
    __tablename__ = "tests"
    __test__ = False  # keep pytest from collecting the model

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    test_name: Mapped[str] = mapped_column(String(255), nullable=False)
    num_questions: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    subject_topic: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    test_category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    date_scheduled: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=utcnow, nullable=False
    )

    questions: Mapped[List["Question"]] = relationship(
        back_populates="test",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Question.id",
    )
    results: Mapped[List["Result"]] = relationship(
        back_populates="test",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Question(Base):
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    test_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tests.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[Any] = mapped_column(JSONType, nullable=False)
    correct_option: Mapped[str] = mapped_column(String(255), nullable=False)
    marks: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    image_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    test: Mapped["Test"] = relationship(back_populates="questions")


class Result(Base):
    __tablename__ = "results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    test_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tests.id", ondelete="CASCADE"),
        nullable=False,
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    highest_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=utcnow, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="results")
    test: Mapped["Test"] = relationship(back_populates="results")


Index("ix_results_user_test", Result.user_id, Result.test_id)
