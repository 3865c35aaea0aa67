import re

import bcrypt
import pytest
from fastapi.testclient import TestClient

import aspire.models  # noqa: F401
from aspire.config import Settings
from aspire.database import Base, build_engine
from aspire.errors import InvalidToken
from aspire.auth.google import GoogleIdentity
from aspire.main import create_app

ADMIN_USER = "admin"
ADMIN_PASSWORD = "correct horse battery"
ADMIN_HASH = bcrypt.hashpw(ADMIN_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, to, subject, html, *, categories=None):
        self.sent.append({"to": to, "subject": subject, "html": html})
        if self.fail:
            return False, "503: service unavailable"
        return True, "accepted"

    def last_code(self, email):
        for mail in reversed(self.sent):
            if mail["to"] == email:
                return re.search(r">\s*(\d{6})\s*<", mail["html"]).group(1)
        raise AssertionError(f"no mail sent to {email}")


class FakeGoogle:
    def __init__(self):
        self.identities = {}

    def verify(self, token):
        if token not in self.identities:
            raise InvalidToken()
        return self.identities[token]

    def allow(self, token, email, name):
        self.identities[token] = GoogleIdentity(email=email, name=name, sub="g-" + token)


class FakeUploader:
    def __init__(self):
        self.uploads = []

    def upload(self, content, content_type, filename=""):
        self.uploads.append((content, content_type, filename))
        return f"https://cdn.aspire.test/question-images/{len(self.uploads)}.png"


def make_settings(**overrides):
    base = dict(
        database_url="sqlite://",
        jwt_secret="admin-secret",
        access_secret="access-secret",
        refresh_secret="refresh-secret",
        google_client_id="google-client",
        admin_username=ADMIN_USER,
        admin_password_hash=ADMIN_HASH,
        frontend_url="http://localhost:5173",
        log_level="WARNING",
    )
    base.update(overrides)
    return Settings(**base)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def google():
    return FakeGoogle()


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def app(settings, mailer, google, uploader):
    engine = build_engine(settings.database_url)
    Base.metadata.create_all(engine)
    app = create_app(settings, engine=engine, mailer=mailer, google_verifier=google, uploader=uploader)
    yield app
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def client(app):
    # https so the Secure refresh cookie is sent back
    with TestClient(app, base_url="https://testserver") as c:
        yield c


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def register_user(client, mailer, email="new@x.com", name="Asha Rao", school="DPS Pune"):
    assert client.post("/api/send-otp", json={"email": email}).status_code == 200
    code = mailer.last_code(email)
    r = client.post(
        "/api/register",
        json={"fullName": name, "email": email, "school": school, "otp": code},
    )
    assert r.status_code == 201, r.text


def login(client, email="new@x.com"):
    r = client.post("/api/login", json={"email": email})
    assert r.status_code == 200, r.text
    return r.json()


def admin_token(client):
    r = client.post("/api/admin/login", json={"username": ADMIN_USER, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest.fixture
def user_session(client, mailer):
    register_user(client, mailer)
    return login(client)


@pytest.fixture
def admin_headers(client):
    return bearer(admin_token(client))
