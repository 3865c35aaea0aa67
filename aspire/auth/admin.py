# aspire/auth/admin.py
from __future__ import annotations

import hmac
import logging

import bcrypt
from fastapi import APIRouter, Depends

from ..config import Settings
from ..deps import get_settings
from ..errors import BadRequest, InvalidCredentials, ServerConfigurationError
from ..schemas import AdminLoginIn, AdminTokenOut
from .auth_utils import create_admin_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


class AdminCredentialsRejected(InvalidCredentials):
    status_code = 401
    message = "Invalid credentials. Please try again."


def admin_login(settings: Settings, username: str, password: str) -> str:
    if not username or not password:
        raise BadRequest("Username and password are required.")

    if not settings.admin_username or not settings.admin_password_hash:
        logger.critical("ADMIN_USERNAME / ADMIN_PASSWORD_HASH are not set")
        raise ServerConfigurationError()

    try:
        password_ok = bcrypt.checkpw(
            password.encode("utf-8"), settings.admin_password_hash.encode("utf-8")
        )
    except ValueError:
        logger.critical("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
        raise ServerConfigurationError()

    username_ok = hmac.compare_digest(username.encode("utf-8"), settings.admin_username.encode("utf-8"))
    if not (username_ok and password_ok):
        logger.warning("Rejected admin login for %r", username)
        raise AdminCredentialsRejected()

    return create_admin_token(settings, settings.admin_username)


@router.post("/login", response_model=AdminTokenOut)
def login(body: AdminLoginIn, settings: Settings = Depends(get_settings)):
    return {"token": admin_login(settings, body.username, body.password)}
