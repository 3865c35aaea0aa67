import requests

from aspire.email_templates import compose_otp_email
from aspire.mailer_sendgrid import SEND_URL, SendGridMailer, _html_to_text


class FakeResponse:
    def __init__(self, status_code, body=None, headers=None):
        self.status_code = status_code
        self._body = body
        self.headers = headers or {}
        self.text = "" if body is None else str(body)

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def _mailer(session, **kw):
    return SendGridMailer(kw.pop("api_key", "SG.key"), kw.pop("from_email", "noreply@aspire.test"), session=session)


def test_accepted_mail():
    session = FakeSession(FakeResponse(202, headers={"X-Message-Id": "abc"}))
    ok, msg = _mailer(session).send("new@x.com", "Hi", "<p>Hello</p>", categories=["otp"])

    assert ok is True
    assert msg == "accepted id=abc"
    url, kwargs = session.calls[0]
    assert url == SEND_URL
    assert kwargs["headers"]["Authorization"] == "Bearer SG.key"
    payload = kwargs["json"]
    assert payload["personalizations"] == [{"to": [{"email": "new@x.com"}]}]
    assert payload["categories"] == ["otp"]
    assert payload["tracking_settings"]["click_tracking"] == {"enable": False}


def test_rejected_mail_reports_status_and_body():
    session = FakeSession(FakeResponse(400, {"errors": [{"message": "bad from"}]}))
    ok, msg = _mailer(session).send("new@x.com", "Hi", "<p>Hello</p>")
    assert ok is False
    assert msg.startswith("400: ")
    assert "bad from" in msg


def test_network_error_is_not_raised():
    session = FakeSession(error=requests.ConnectionError("refused"))
    ok, msg = _mailer(session).send("new@x.com", "Hi", "<p>Hello</p>")
    assert ok is False
    assert msg.startswith("network error")
    assert len(session.calls) == 1


def test_missing_configuration_short_circuits():
    session = FakeSession(FakeResponse(202))
    assert _mailer(session, api_key=None).send("a@x.com", "s", "h") == (False, "Missing SENDGRID_API_KEY")
    assert _mailer(session, from_email="").send("a@x.com", "s", "h") == (False, "Missing EMAIL_FROM")
    assert _mailer(session).send([], "s", "h") == (False, "Missing recipient(s)")
    assert session.calls == []


def test_otp_email_carries_code_in_both_parts():
    subject, html = compose_otp_email(otp="012345", brand="AspireClasses")
    assert "OTP" in subject
    assert "The AspireClasses Team" in html
    assert "012345" in html
    assert "012345" in _html_to_text(html)
