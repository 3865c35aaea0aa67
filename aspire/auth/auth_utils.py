# aspire/auth/auth_utils.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Response

from ..config import Settings

ACCESS_TOKEN_MINUTES = 15
REFRESH_TOKEN_DAYS = 7
ADMIN_TOKEN_HOURS = 8

REFRESH_COOKIE = "refreshToken"
REFRESH_COOKIE_PATH = "/"


def _encode(payload: dict, secret: str, alg: str, lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    claims = {**payload, "iat": now, "exp": now + lifetime}
    return jwt.encode(claims, secret, algorithm=alg)


def _decode(token: str, secret: str, alg: str) -> Optional[dict]:
    try:
        return jwt.decode(token, secret, algorithms=[alg])
    except jwt.PyJWTError:
        return None


# === user session tokens ====================================================
def create_access_token(settings: Settings, user_id: int, email: str) -> str:
    return _encode(
        {"id": user_id, "email": email, "type": "access"},
        settings.access_secret,
        settings.jwt_alg,
        timedelta(minutes=ACCESS_TOKEN_MINUTES),
    )


def create_refresh_token(settings: Settings, user_id: int, email: str) -> str:
    return _encode(
        {"id": user_id, "email": email, "type": "refresh"},
        settings.refresh_secret,
        settings.jwt_alg,
        timedelta(days=REFRESH_TOKEN_DAYS),
    )


def decode_access_token(settings: Settings, token: str) -> Optional[dict]:
    claims = _decode(token, settings.access_secret, settings.jwt_alg)
    if not claims or claims.get("type") != "access" or "id" not in claims:
        return None
    return claims


def decode_refresh_token(settings: Settings, token: str) -> Optional[dict]:
    claims = _decode(token, settings.refresh_secret, settings.jwt_alg)
    if not claims or claims.get("type") != "refresh" or "id" not in claims:
        return None
    return claims


# === admin credential =======================================================
def create_admin_token(settings: Settings, username: str) -> str:
    return _encode(
        {"user": {"username": username, "role": "admin"}},
        settings.jwt_secret,
        settings.jwt_alg,
        timedelta(hours=ADMIN_TOKEN_HOURS),
    )


def decode_admin_token(settings: Settings, token: str) -> Optional[dict]:
    claims = _decode(token, settings.jwt_secret, settings.jwt_alg)
    if not claims or not isinstance(claims.get("user"), dict):
        return None
    return claims


# === refresh cookie =========================================================
def set_refresh_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        REFRESH_COOKIE,
        token,
        max_age=REFRESH_TOKEN_DAYS * 24 * 60 * 60,
        path=REFRESH_COOKIE_PATH,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        REFRESH_COOKIE,
        path=REFRESH_COOKIE_PATH,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
