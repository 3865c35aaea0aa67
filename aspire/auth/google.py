# aspire/auth/google.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from google.auth.exceptions import GoogleAuthError
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from ..errors import InvalidToken, ServerConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoogleIdentity:
    email: str
    name: str
    sub: Optional[str] = None
    picture: Optional[str] = None


class GoogleVerifier:
    """Checks a Google Sign-In ID token against our OAuth client id."""

    def __init__(self, client_id: Optional[str]):
        self.client_id = client_id
        self._transport = google_requests.Request()

    def verify(self, token: str) -> GoogleIdentity:
        if not self.client_id:
            logger.error("GOOGLE_CLIENT_ID is not set; rejecting Google sign-in")
            raise ServerConfigurationError()
        try:
            info = id_token.verify_oauth2_token(token, self._transport, self.client_id)
        except (ValueError, GoogleAuthError) as e:
            logger.info("Google ID token rejected: %s", e)
            raise InvalidToken()

        email = info.get("email")
        if not email:
            raise InvalidToken()
        return GoogleIdentity(
            email=email,
            name=info.get("name") or email.split("@")[0],
            sub=info.get("sub"),
            picture=info.get("picture"),
        )
