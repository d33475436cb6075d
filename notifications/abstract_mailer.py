"""Mailer abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod

from markupsafe import escape


class AbstractMailer(ABC):
    """Interface for outgoing mail backends."""

    def __init__(self, default_sender: str):
        self.default_sender = default_sender

    @abstractmethod
    def send_message(self, to: str, subject: str, html: str) -> None:
        """Deliver a single HTML message or raise on transport failure."""

    def send_verification_email(self, to: str, name: str, verification_code: str) -> None:
        """Send the code a new user must submit to verify their account."""

        self.send_message(
            to,
            "Verify your account",
            f"<h1>Welcome, {escape(name)}!</h1>"
            "<p>Thanks for signing up.</p>"
            f"<p>Your verification code is: <strong>{verification_code}</strong></p>"
            "<p>Use this code to verify your account.</p>",
        )

    def send_confirmation_email(self, to: str, name: str, verification_code: str) -> None:
        """Confirm verification, repeating the code as the user's access code."""

        self.send_message(
            to,
            "Your account is verified",
            f"<h1>Congratulations, {escape(name)}!</h1>"
            "<p>Your account has been verified.</p>"
            f"<p>Your access code is: <strong>{verification_code}</strong></p>"
            "<p>Keep this code for future reference.</p>",
        )
