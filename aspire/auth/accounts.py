# aspire/auth/accounts.py
from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import Settings
from ..errors import DuplicateAccount, InvalidCredentials, InvalidSession, Unauthenticated
from ..models import User
from .auth_utils import create_access_token, create_refresh_token, decode_refresh_token
from .google import GoogleVerifier
from .otp import find_user_by_email, normalize_email, verify_otp

logger = logging.getLogger(__name__)

GOOGLE_SCHOOL_PLACEHOLDER = "Not specified"


def session_user(user: User) -> dict:
    return {"id": user.id, "full_name": user.full_name, "email": user.email_or_phone}


def register(db: Session, *, full_name: str, email: str, school: str, otp: str) -> User:
    email = normalize_email(email)
    record = verify_otp(db, email, otp)

    user = User(full_name=full_name, email_or_phone=email, school_name=school)
    db.add(user)
    db.delete(record)
    try:
        db.commit()
    except IntegrityError:
        # someone registered this email after the OTP was issued
        db.rollback()
        raise DuplicateAccount()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def login(db: Session, settings: Settings, email: str) -> Tuple[str, User]:
    """Email-only login; no password or OTP is checked here."""
    user = find_user_by_email(db, email)
    if not user:
        raise InvalidCredentials()
    return create_access_token(settings, user.id, user.email_or_phone), user


def google_login(
    db: Session, settings: Settings, verifier: GoogleVerifier, token: str
) -> Tuple[str, str, User]:
    """Returns (access_token, refresh_token, user); creates the user on first sign-in."""
    identity = verifier.verify(token)

    email = normalize_email(identity.email)

    user = find_user_by_email(db, email)
    if not user:
        user = User(
            full_name=identity.name,
            email_or_phone=email,
            school_name=GOOGLE_SCHOOL_PLACEHOLDER,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # a concurrent first sign-in created the row
            db.rollback()
            user = find_user_by_email(db, email)
            if user is None:
                raise
        else:
            db.refresh(user)
            logger.info("Provisioned user %s from Google sign-in", user.id)

    return (
        create_access_token(settings, user.id, user.email_or_phone),
        create_refresh_token(settings, user.id, user.email_or_phone),
        user,
    )


def refresh_session(db: Session, settings: Settings, cookie: Optional[str]) -> Tuple[str, User]:
    if not cookie:
        raise Unauthenticated()

    claims = decode_refresh_token(settings, cookie)
    if not claims:
        raise InvalidSession()

    user = db.get(User, claims["id"])
    if not user:
        raise InvalidSession()
    return create_access_token(settings, user.id, user.email_or_phone), user
