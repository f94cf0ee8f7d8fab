"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config, Settings  # noqa: E402
from models import db  # noqa: E402
from services.errors import NotificationError  # noqa: E402
from services.notifications import AbstractNotifier  # noqa: E402

TEST_SECRET = "test-secret"
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    APP_SECRET = TEST_SECRET
    JWT_ALGORITHM = "HS256"
    PASSWORD_HASH_METHOD = FAST_HASH_METHOD
    NOTIFICATION_BACKEND = "log"
    RATE_LIMIT = "1000 per minute"
    AUTO_CREATE_TABLES = False


class FakeNotifier(AbstractNotifier):
    """Records outgoing messages instead of sending them."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []
        self.fail = False

    def send_sms(self, phone: str, message: str) -> None:
        if self.fail:
            raise NotificationError()
        self.messages.append((phone, message))

    @property
    def last_code(self) -> int:
        _, message = self.messages[-1]
        return int(message.rsplit(":", 1)[-1].strip())


class FrozenClock:
    """A controllable clock for expiry tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> None:
        self.now = self.now + timedelta(**delta)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def settings() -> Settings:
    return Settings(app_secret=TEST_SECRET, password_hash_method=FAST_HASH_METHOD)


@pytest.fixture()
def app(notifier: FakeNotifier) -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig, notifier=notifier)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_context(app: Flask):
    """Push an application context for service-level tests."""

    with app.app_context():
        yield app


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register(client: FlaskClient, email: str, password: str = "secret123", phone: str = "555-0100") -> str:
    """Register a user through the API and return the issued token."""

    response = client.post(
        "/users/register",
        json={"email": email, "password": password, "phone": phone},
    )
    assert response.status_code == 200, response.get_json()
    return response.get_json()["token"]


def become_seller(client: FlaskClient, token: str, **overrides) -> str:
    payload = {
        "first_name": "Sam",
        "last_name": "Seller",
        "phone_number": "555-0199",
        "bank_account_number": "000123456789",
        "swift_code": "DEMOUS33",
        "payment_type": "bank_transfer",
    }
    payload.update(overrides)
    response = client.post("/users/become-seller", json=payload, headers=auth_headers(token))
    assert response.status_code == 200, response.get_json()
    return response.get_json()["token"]
