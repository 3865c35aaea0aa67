from datetime import datetime, timedelta, timezone

import pytest

from aspire.auth import otp as otp_service
from aspire.errors import DuplicateAccount, OtpExpired, OtpMismatch, OtpNotFound
from aspire.models import Otp, User

from conftest import register_user


def test_send_otp_mails_a_six_digit_code(client, mailer, db):
    r = client.post("/api/send-otp", json={"email": "new@x.com"})
    assert r.status_code == 200
    assert r.json() == {"message": "OTP sent successfully to your email."}

    code = mailer.last_code("new@x.com")
    assert len(code) == 6 and code.isdigit()
    assert db.get(Otp, "new@x.com").otp == code


def test_code_keeps_leading_zeros(monkeypatch):
    monkeypatch.setattr(otp_service.secrets, "randbelow", lambda n: 42)
    assert otp_service.generate_code() == "000042"


def test_second_request_replaces_code(client, mailer, db, monkeypatch):
    codes = iter([111111, 222222])
    monkeypatch.setattr(otp_service.secrets, "randbelow", lambda n: next(codes))

    client.post("/api/send-otp", json={"email": "new@x.com"})
    client.post("/api/send-otp", json={"email": "new@x.com"})

    assert db.query(Otp).count() == 1
    assert db.get(Otp, "new@x.com").otp == "222222"


def test_existing_account_cannot_request_otp(client, mailer):
    register_user(client, mailer)
    mailer.sent.clear()

    r = client.post("/api/send-otp", json={"email": "new@x.com"})
    assert r.status_code == 400
    assert r.json()["error"] == "DuplicateAccount"
    assert mailer.sent == []


def test_delivery_failure_is_generic_500_and_keeps_code(client, mailer, db):
    mailer.fail = True
    r = client.post("/api/send-otp", json={"email": "new@x.com"})

    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "DeliveryError"
    assert "503" not in body["message"]
    assert db.get(Otp, "new@x.com") is not None


def test_send_otp_rejects_bad_email(client):
    r = client.post("/api/send-otp", json={"email": "not-an-email"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "email"


# === verify_otp ==============================================================
def _store(db, code="123456", age=timedelta(0)):
    db.add(Otp(email="new@x.com", otp=code, created_at=datetime.now(timezone.utc) - age))
    db.commit()


def test_verify_missing_record(db):
    with pytest.raises(OtpNotFound):
        otp_service.verify_otp(db, "new@x.com", "123456")


def test_verify_mismatch(db):
    _store(db)
    with pytest.raises(OtpMismatch):
        otp_service.verify_otp(db, "new@x.com", "654321")


def test_verify_expired_after_ten_minutes(db):
    _store(db, age=timedelta(minutes=10, seconds=1))
    with pytest.raises(OtpExpired):
        otp_service.verify_otp(db, "new@x.com", "123456")


def test_verify_within_window(db):
    _store(db, age=timedelta(minutes=9, seconds=59))
    assert otp_service.verify_otp(db, "new@x.com", "123456").email == "new@x.com"


def test_request_otp_service_checks_users_first(db, mailer):
    db.add(User(full_name="Taken", email_or_phone="new@x.com"))
    db.commit()
    with pytest.raises(DuplicateAccount):
        otp_service.request_otp(db, mailer, "new@x.com")
