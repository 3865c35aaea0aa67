# aspire/storage.py
from __future__ import annotations

import logging
import mimetypes
import uuid
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .config import Settings
from .errors import AppError

logger = logging.getLogger(__name__)

PREFIX = "question-images/"
ALLOWED_TYPES = {"image/png", "image/jpeg", "image/gif", "image/webp", "image/svg+xml"}
MAX_BYTES = 5 * 1024 * 1024


class UploadFailed(AppError):
    status_code = 502
    kind = "UploadFailed"
    message = "Image upload failed."


class S3ImageUploader:
    """Puts question images into an S3/R2 bucket and returns their public URL."""

    def __init__(self, client, bucket: str, public_url: Optional[str] = None):
        self.s3 = client
        self.bucket = bucket
        self.public_url = (public_url or f"https://{bucket}.r2.cloudflarestorage.com").rstrip("/")

    def key_for(self, filename: str, content_type: str) -> str:
        ext = mimetypes.guess_extension(content_type) or ""
        if not ext and "." in (filename or ""):
            ext = "." + filename.rsplit(".", 1)[-1].lower()
        return f"{PREFIX}{uuid.uuid4().hex}{ext}"

    def upload(self, content: bytes, content_type: str, filename: str = "") -> str:
        key = self.key_for(filename, content_type)
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 put_object failed for %s: %s", key, e)
            raise UploadFailed()
        return f"{self.public_url}/{key}"


def build_uploader(settings: Settings) -> Optional[S3ImageUploader]:
    if not settings.s3_bucket:
        return None
    client = boto3.client(
        "s3",
        endpoint_url=settings.s3_endpoint or None,
        aws_access_key_id=settings.s3_access_key,
        aws_secret_access_key=settings.s3_secret_key,
        region_name=settings.s3_region,
        config=Config(s3={"addressing_style": "path"}),
    )
    return S3ImageUploader(client, settings.s3_bucket, settings.s3_public_url)
