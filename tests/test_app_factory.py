"""Tests for the Flask application factory."""
from __future__ import annotations

from app import create_app
from config import Config
from models.user import User
from notifications import MemoryMailer, SmtpMailer


class _SmtpConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    MAIL_SUPPRESS_SEND = False
    MAIL_SERVER = "smtp.example.com"
    MAIL_PORT = 2525
    MAIL_TIMEOUT = 3


def test_health_endpoint_returns_ok(client):
    """The health endpoint should respond with an OK payload."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_blueprints_registered(app):
    """Application factory should register expected blueprints."""
    bps = set(app.blueprints.keys())
    assert {"auth", "users", "events", "meta"}.issubset(bps)


def test_suppressed_mail_uses_memory_mailer(app):
    assert isinstance(app.extensions["mailer"], MemoryMailer)


def test_smtp_mailer_configured_from_settings():
    smtp_app = create_app(_SmtpConfig)
    mailer = smtp_app.extensions["mailer"]

    assert isinstance(mailer, SmtpMailer)
    assert mailer.host == "smtp.example.com"
    assert mailer.port == 2525
    assert mailer.timeout == 3


def test_unexpected_errors_return_generic_500(client, make_user, auth_headers, monkeypatch):
    """Internal failures are logged, never echoed to the caller."""
    headers = auth_headers(make_user("boom@example.com", role="ADMIN"))

    def _explode(self, *args, **kwargs):
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(User, "to_dict", _explode)

    response = client.get("/users", headers=headers)

    assert response.status_code == 500
    payload = response.get_json()
    assert payload["error"] == "Internal Server Error"
    assert payload["detail"] == "An unexpected error occurred."
    assert "hunter2" not in response.get_data(as_text=True)
    assert payload["request_id"]
