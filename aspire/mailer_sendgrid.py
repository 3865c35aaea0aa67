# aspire/mailer_sendgrid.py
from __future__ import annotations

import json
import logging
import re
from html import unescape
from typing import Iterable, Optional, Sequence, Tuple

import requests

logger = logging.getLogger(__name__)

SEND_URL = "https://api.sendgrid.com/v3/mail/send"


def _html_to_text(html: str) -> str:
    """Ultra-light HTML→text, sent as the text/plain part for deliverability."""
    text = re.sub(r"(?i)<br\s*/?>", "\n", html)
    text = re.sub(r"(?i)</p\s*>", "\n\n", text)
    text = re.sub(r"<[^>]+>", "", text)
    return unescape(text).strip()


def _ensure_list(emails: Iterable[str] | str | None) -> list[str]:
    if not emails:
        return []
    if isinstance(emails, str):
        return [emails.strip()]
    return [str(x).strip() for x in emails if str(x).strip()]


class SendGridMailer:
    """
    Thin client for SendGrid's v3 mail/send endpoint.

    ``send`` never raises for delivery problems; it returns ``(ok, message)``:
      - ok=True, message may carry SendGrid's X-Message-Id
      - ok=False, message describes the failure (status code and body)
    """

    def __init__(
        self,
        api_key: Optional[str],
        from_email: Optional[str],
        from_name: str = "AspireClasses",
        *,
        timeout_sec: int = 20,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.timeout_sec = timeout_sec
        self.http = session or requests.Session()

    def send(
        self,
        to: str | Sequence[str],
        subject: str,
        html: str,
        *,
        categories: Optional[Sequence[str]] = None,
    ) -> Tuple[bool, str]:
        if not self.api_key:
            return False, "Missing SENDGRID_API_KEY"
        if not self.from_email:
            return False, "Missing EMAIL_FROM"

        to_list = _ensure_list(to)
        if not to_list:
            return False, "Missing recipient(s)"

        payload: dict = {
            "personalizations": [{"to": [{"email": e} for e in to_list]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": _html_to_text(html)},
                {"type": "text/html", "value": html},
            ],
            # OTP mails must not be rewritten by click tracking
            "tracking_settings": {
                "click_tracking": {"enable": False},
                "open_tracking": {"enable": False},
                "subscription_tracking": {"enable": False},
            },
        }
        if categories:
            payload["categories"] = list(categories)[:10]  # SendGrid allows up to 10

        try:
            r = self.http.post(
                SEND_URL,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
                timeout=self.timeout_sec,
            )
        except requests.RequestException as e:
            return False, f"network error: {e}"

        if r.status_code == 202:
            msg_id = r.headers.get("X-Message-Id") or ""
            return True, f"accepted{(' id=' + msg_id) if msg_id else ''}"

        try:
            body_str = json.dumps(r.json(), ensure_ascii=False)
        except ValueError:
            body_str = r.text
        return False, f"{r.status_code}: {body_str}"
