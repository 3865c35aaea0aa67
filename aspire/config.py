# aspire/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def need(name: str) -> str:
    v = os.getenv(name)
    if not v:
        raise RuntimeError(f"Missing environment variable: {name}")
    return v


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once from the environment."""

    database_url: str
    jwt_secret: str              # admin credential
    access_secret: str
    refresh_secret: str
    jwt_alg: str = "HS256"

    google_client_id: Optional[str] = None

    admin_username: Optional[str] = None
    admin_password_hash: Optional[str] = None

    frontend_url: Optional[str] = None
    port: int = 5000
    cookie_secure: bool = True
    log_level: str = "INFO"

    # SendGrid
    sendgrid_api_key: Optional[str] = None
    email_from: Optional[str] = None
    email_from_name: str = "AspireClasses"

    # S3 / R2 bucket for question images
    s3_bucket: Optional[str] = None
    s3_access_key: Optional[str] = None
    s3_secret_key: Optional[str] = None
    s3_endpoint: Optional[str] = None
    s3_region: str = "auto"
    s3_public_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            database_url=need("DATABASE_URL"),
            jwt_secret=need("JWT_SECRET"),
            access_secret=need("ACCESS_SECRET"),
            refresh_secret=need("REFRESH_SECRET"),
            jwt_alg=os.getenv("JWT_ALG", "HS256"),
            google_client_id=os.getenv("GOOGLE_CLIENT_ID") or None,
            admin_username=os.getenv("ADMIN_USERNAME") or None,
            admin_password_hash=os.getenv("ADMIN_PASSWORD_HASH") or None,
            frontend_url=os.getenv("FRONTEND_URL") or None,
            port=int(os.getenv("PORT", "5000")),
            cookie_secure=_flag("COOKIE_SECURE", "true"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            sendgrid_api_key=os.getenv("SENDGRID_API_KEY") or os.getenv("EMAIL_PASS") or None,
            email_from=os.getenv("EMAIL_FROM") or os.getenv("EMAIL_USER") or None,
            email_from_name=os.getenv("EMAIL_FROM_NAME", "AspireClasses"),
            s3_bucket=os.getenv("S3_BUCKET") or None,
            s3_access_key=os.getenv("S3_ACCESS_KEY") or None,
            s3_secret_key=os.getenv("S3_SECRET_KEY") or None,
            s3_endpoint=os.getenv("S3_ENDPOINT") or None,
            s3_region=os.getenv("S3_REGION", "auto"),
            s3_public_url=os.getenv("S3_PUBLIC_URL") or None,
        )
