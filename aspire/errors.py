# aspire/errors.py
"""
Error taxonomy shared by the services and routers.

Services raise these; ``register_error_handlers`` turns them into a JSON body
of the form ``{"error": <kind>, "message": <text>}``.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    kind = "ServerError"
    message = "An internal server error occurred."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class BadRequest(AppError):
    status_code = 400
    kind = "BadRequest"
    message = "Bad request."


class DuplicateAccount(AppError):
    status_code = 400
    kind = "DuplicateAccount"
    message = "An account with this email already exists."


class InvalidCredentials(AppError):
    status_code = 400
    kind = "InvalidCredentials"
    message = "Invalid Credentials"


class OtpMismatch(AppError):
    status_code = 400
    kind = "Mismatch"
    message = "Invalid OTP provided. Please try again."


class OtpExpired(AppError):
    status_code = 400
    kind = "Expired"
    message = "OTP has expired. Please request a new one."


class Unauthenticated(AppError):
    status_code = 401
    kind = "Unauthenticated"
    message = "Not authenticated."


class InvalidToken(AppError):
    status_code = 401
    kind = "InvalidToken"
    message = "Google authentication failed."


class InvalidSession(AppError):
    status_code = 403
    kind = "InvalidSession"
    message = "Session is no longer valid. Please log in again."


class Forbidden(AppError):
    status_code = 403
    kind = "Forbidden"
    message = "Admin access required."


class NotFound(AppError):
    status_code = 404
    kind = "NotFound"
    message = "Not found."


class OtpNotFound(NotFound):
    message = "Invalid OTP or it has expired. Please request a new one."


class DeliveryError(AppError):
    kind = "DeliveryError"
    message = "Could not send OTP email. Please try again later."


class ServerConfigurationError(AppError):
    kind = "ServerConfigurationError"
    message = "Server configuration error."


def _body(kind: str, message: str, **extra) -> dict:
    return {"error": kind, "message": message, **extra}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=_body(exc.kind, exc.message))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        errors = []
        for e in exc.errors():
            loc = [str(p) for p in e.get("loc", ()) if p not in ("body", "query", "path")]
            errors.append({"field": ".".join(loc), "message": e.get("msg", "invalid value")})
        return JSONResponse(
            status_code=400,
            content=_body("ValidationError", "Request validation failed.", errors=errors),
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=_body(AppError.kind, AppError.message))
