# aspire/client/api.py
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response or transport failure talking to the API."""

    def __init__(self, status: Optional[int], message: str, body: Any = None):
        super().__init__(f"{status}: {message}" if status else message)
        self.status = status
        self.message = message
        self.body = body


class AspireClient:
    """
    HTTP client for the AspireClasses API.

    The requests.Session keeps the HttpOnly ``refreshToken`` cookie, so a new
    client can call ``restore_session()`` once at startup to pick up where a
    previous login left off.
    """

    def __init__(self, base_url: str, *, session: Optional[requests.Session] = None, timeout: int = 20):
        self.base_url = base_url.rstrip("/")
        self.http = session or requests.Session()
        self.timeout = timeout
        self.access_token: Optional[str] = None
        self.admin_token: Optional[str] = None
        self.user: Optional[dict] = None

    # --- plumbing -----------------------------------------------------------
    def _request(self, method: str, path: str, *, token: Optional[str] = None, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            r = self.http.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            raise ApiError(None, f"network error: {e}")

        try:
            body = r.json()
        except ValueError:
            body = r.text
        if r.status_code >= 400:
            message = body.get("message", r.reason) if isinstance(body, dict) else (body or r.reason)
            raise ApiError(r.status_code, str(message), body)
        return body

    def _user(self, method: str, path: str, **kwargs) -> Any:
        return self._request(method, path, token=self.access_token, **kwargs)

    def _admin(self, method: str, path: str, **kwargs) -> Any:
        return self._request(method, path, token=self.admin_token, **kwargs)

    def _take_session(self, data: dict) -> dict:
        self.access_token = data["accessToken"]
        self.user = data["user"]
        return data

    # --- auth ---------------------------------------------------------------
    def send_otp(self, email: str) -> dict:
        return self._request("POST", "/api/send-otp", json={"email": email})

    def register(self, full_name: str, email: str, school: str, otp: str) -> dict:
        return self._request(
            "POST",
            "/api/register",
            json={"fullName": full_name, "email": email, "school": school, "otp": otp},
        )

    def login(self, email: str) -> dict:
        return self._take_session(self._request("POST", "/api/login", json={"email": email}))

    def google_auth(self, id_token: str) -> dict:
        return self._take_session(self._request("POST", "/api/google-auth", json={"token": id_token}))

    def restore_session(self) -> bool:
        """Silent refresh; False when there is no usable refresh cookie."""
        try:
            self._take_session(self._request("POST", "/api/refresh"))
        except ApiError as e:
            logger.debug("session restore failed: %s", e)
            return False
        return True

    def logout(self) -> None:
        self._request("POST", "/api/logout")
        self.access_token = None
        self.user = None

    # --- user ---------------------------------------------------------------
    def profile(self) -> dict:
        return self._user("GET", "/api/user")

    def update_profile(self, **fields) -> dict:
        return self._user("POST", "/api/user/details", json=fields)

    def my_tests(self) -> list:
        return self._user("GET", "/api/user/mytests")

    def bundles(self) -> list:
        return self._user("GET", "/api/test_bundles")

    def tests(self) -> list:
        return self._user("GET", "/api/tests")

    def test(self, test_id: int) -> dict:
        return self._user("GET", f"/api/tests/{test_id}")

    def questions(self, test_id: int) -> list:
        return self._user("GET", f"/api/tests/{test_id}/questions")

    def submit_answers(self, test_id: int, answers: list[dict]) -> dict:
        return self._user(
            "POST",
            f"/api/tests/{test_id}/submit",
            json={"answers": answers, "testId": test_id},
        )

    def results(self) -> list:
        return self._user("GET", "/api/results")

    # --- admin --------------------------------------------------------------
    def admin_login(self, username: str, password: str) -> str:
        data = self._request("POST", "/api/admin/login", json={"username": username, "password": password})
        self.admin_token = data["token"]
        return self.admin_token

    def create_test(self, **fields) -> dict:
        return self._admin("POST", "/api/tests", json=fields)

    def add_question(self, test_id: int, **fields) -> dict:
        return self._admin("POST", f"/api/tests/{test_id}/questions", json=fields)

    def assign_test(self, user_id: int, test_id: int, is_paid: bool) -> dict:
        return self._admin(
            "POST",
            "/api/user/assigntest",
            json={"userId": user_id, "testId": test_id, "isPaid": is_paid},
        )
