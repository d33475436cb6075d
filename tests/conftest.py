"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from models.user import ROLE_PARTICIPANT, User  # noqa: E402
from notifications import MemoryMailer  # noqa: E402
from services.credentials import issue_token  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-jwt-secret-key-that-is-long-enough-for-hs256"
    MAIL_SUPPRESS_SEND = True
    RATE_LIMIT = "1000 per minute"
    SEED_ADMIN_EMAIL = "admin@example.com"
    SEED_ADMIN_PASSWORD = "admin123"


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(_BaseTestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def mailer(app: Flask) -> MemoryMailer:
    """The in-memory mailer capturing outgoing messages."""

    return app.extensions["mailer"]


@pytest.fixture()
def make_user(app: Flask):
    """Persist a user and return its id."""

    def _make_user(
        email: str,
        password: str = "Password123",
        role: str = ROLE_PARTICIPANT,
        *,
        name: str = "Test User",
        verified: bool = True,
    ) -> int:
        with app.app_context():
            user = User(
                email=email,
                name=name,
                role=role,
                is_verified=verified,
                verification_code="ABC123",
            )
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            return user.id

    return _make_user


@pytest.fixture()
def auth_headers(app: Flask):
    """Return Authorization headers carrying a fresh token for a user id."""

    def _auth_headers(user_id: int) -> dict[str, str]:
        with app.app_context():
            token = issue_token(db.session.get(User, user_id))
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
