# aspire/models/auth_models.py
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import Boolean, Date, ForeignKey, Integer, String, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import Base

if TYPE_CHECKING:
    from .test_models import Result, Test


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email_or_phone: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    school_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # profile page
    dob: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    mobile_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    # set by the admin when a bundle is paid for offline
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    assigned_testid: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("tests.id", ondelete="SET NULL"),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=utcnow, nullable=False
    )

    assigned_test: Mapped[Optional["Test"]] = relationship()
    results: Mapped[List["Result"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Otp(Base):
    """Latest code per email; replaced on every request, deleted on registration."""
    __tablename__ = "otps"

    email: Mapped[str] = mapped_column(String(255), primary_key=True)
    otp: Mapped[str] = mapped_column(String(6), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=utcnow, nullable=False
    )
