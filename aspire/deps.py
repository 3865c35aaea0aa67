# aspire/deps.py
"""FastAPI dependencies that hand out the collaborators built in create_app()."""
from __future__ import annotations

from fastapi import Request

from .config import Settings
from .errors import ServerConfigurationError


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_mailer(request: Request):
    return request.app.state.mailer


def get_google_verifier(request: Request):
    return request.app.state.google_verifier


def get_uploader(request: Request):
    uploader = request.app.state.uploader
    if uploader is None:
        raise ServerConfigurationError("Image storage is not configured.")
    return uploader
