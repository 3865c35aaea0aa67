# aspire/main.py
"""
Application factory.

    uvicorn aspire.main:create_app --factory
    python -m aspire
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.engine import Engine

from .auth import admin_router, auth_router
from .auth.google import GoogleVerifier
from .config import Settings
from .database import build_engine, build_session_factory
from .errors import register_error_handlers
from .mailer_sendgrid import SendGridMailer
from .routers import bundles_router, results_router, tests_router, uploads_router, users_router
from .storage import build_uploader

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("aspire").setLevel(level.upper())


def create_app(
    settings: Optional[Settings] = None,
    *,
    engine: Optional[Engine] = None,
    mailer=None,
    google_verifier=None,
    uploader=None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="AspireClasses API",
        version=os.getenv("APP_VERSION", "0.1.0"),
    )

    engine = engine or build_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.mailer = mailer or SendGridMailer(
        settings.sendgrid_api_key, settings.email_from, settings.email_from_name
    )
    app.state.google_verifier = google_verifier or GoogleVerifier(settings.google_client_id)
    app.state.uploader = uploader if uploader is not None else build_uploader(settings)

    if settings.frontend_url:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[o.strip() for o in settings.frontend_url.split(",") if o.strip()],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        logger.warning("FRONTEND_URL is not set; cross-origin requests will be refused")

    register_error_handlers(app)

    # every API route lives under /api
    app.include_router(auth_router, prefix="/api")
    app.include_router(admin_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(tests_router, prefix="/api")
    app.include_router(results_router, prefix="/api")
    app.include_router(bundles_router, prefix="/api")
    app.include_router(uploads_router, prefix="/api")

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "aspire-classes-api OK"

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app
