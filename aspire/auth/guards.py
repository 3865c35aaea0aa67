# aspire/auth/guards.py
"""Bearer-token guards for user and admin endpoints."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import Settings
from ..deps import get_settings
from ..errors import Forbidden, Unauthenticated
from .auth_utils import decode_access_token, decode_admin_token

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    id: int
    email: str


@dataclass(frozen=True)
class CurrentAdmin:
    username: str


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    if creds is None or not creds.credentials:
        raise Unauthenticated()
    claims = decode_access_token(settings, creds.credentials)
    if not claims:
        raise Unauthenticated("Token is not valid or has expired.")
    return CurrentUser(id=int(claims["id"]), email=str(claims.get("email", "")))


def require_admin(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    settings: Settings = Depends(get_settings),
) -> CurrentAdmin:
    if creds is None or not creds.credentials:
        raise Unauthenticated()

    claims = decode_admin_token(settings, creds.credentials)
    if claims is None:
        if decode_access_token(settings, creds.credentials):
            # a valid user session, just not an admin one
            raise Forbidden()
        raise Unauthenticated("Token is not valid or has expired.")

    if claims["user"].get("role") != "admin":
        raise Forbidden()
    return CurrentAdmin(username=str(claims["user"].get("username", "")))
