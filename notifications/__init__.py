"""Mail backends and the per-application mailer registry."""

from __future__ import annotations

from flask import Flask, current_app

from .abstract_mailer import AbstractMailer
from .memory_mailer import MemoryMailer, OutgoingMessage
from .smtp_mailer import SmtpMailer

__all__ = [
    "AbstractMailer",
    "MemoryMailer",
    "OutgoingMessage",
    "SmtpMailer",
    "get_mailer",
    "init_mailer",
]


def init_mailer(app: Flask) -> AbstractMailer:
    """Build the mailer described by the app config and register it."""

    sender = app.config.get("MAIL_DEFAULT_SENDER", "noreply@example.com")
    if app.config.get("MAIL_SUPPRESS_SEND"):
        mailer: AbstractMailer = MemoryMailer(sender)
    else:
        mailer = SmtpMailer(
            app.config.get("MAIL_SERVER", "localhost"),
            int(app.config.get("MAIL_PORT", 587)),
            default_sender=sender,
            username=app.config.get("MAIL_USERNAME"),
            password=app.config.get("MAIL_PASSWORD"),
            use_tls=bool(app.config.get("MAIL_USE_TLS", True)),
            use_ssl=bool(app.config.get("MAIL_USE_SSL", False)),
            timeout=float(app.config.get("MAIL_TIMEOUT", 10)),
        )
    app.extensions["mailer"] = mailer
    return mailer


def get_mailer() -> AbstractMailer:
    return current_app.extensions["mailer"]
