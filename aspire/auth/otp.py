# aspire/auth/otp.py
from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..email_templates import OTP_VALID_MINUTES, compose_otp_email
from ..errors import DeliveryError, DuplicateAccount, OtpExpired, OtpMismatch, OtpNotFound
from ..models import Otp, User

logger = logging.getLogger(__name__)

OTP_TTL = timedelta(minutes=OTP_VALID_MINUTES)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands timestamps back naive
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def generate_code() -> str:
    """Uniform 000000..999999, zero padded."""
    return f"{secrets.randbelow(1_000_000):06d}"


def normalize_email(value: str) -> str:
    """
    The form EmailStr stores at registration (domain lowercased). Values that
    are not email addresses, such as phone numbers, come back stripped only.
    """
    value = (value or "").strip()
    try:
        return validate_email(value, check_deliverability=False).normalized
    except EmailNotValidError:
        return value


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalars(select(User).where(User.email_or_phone == normalize_email(email))).first()


def request_otp(db: Session, mailer, email: str, now: Optional[datetime] = None) -> None:
    """
    Issue a fresh code for ``email`` and mail it.

    The row is committed before sending, so a failed send leaves the code in
    place and the next request simply replaces it.
    """
    email = normalize_email(email)
    if find_user_by_email(db, email):
        raise DuplicateAccount()

    code = generate_code()
    ts = now or _now()

    found = db.get(Otp, email)
    if found:
        found.otp = code
        found.created_at = ts
    else:
        db.add(Otp(email=email, otp=code, created_at=ts))
    db.commit()

    subject, html = compose_otp_email(otp=code)
    ok, msg = mailer.send(to=email, subject=subject, html=html, categories=["otp"])
    if not ok:
        logger.error("OTP email to %s failed: %s", email, msg)
        raise DeliveryError()
    logger.info("OTP issued for %s (%s)", email, msg)


def verify_otp(db: Session, email: str, code: str, now: Optional[datetime] = None) -> Otp:
    email = normalize_email(email)
    record = db.get(Otp, email)
    if record is None:
        raise OtpNotFound()
    if record.otp != code:
        raise OtpMismatch()
    if (now or _now()) - _as_utc(record.created_at) > OTP_TTL:
        raise OtpExpired()
    return record
