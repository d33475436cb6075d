"""Mail backend that records messages instead of sending them."""

from __future__ import annotations

from dataclasses import dataclass

from .abstract_mailer import AbstractMailer


@dataclass
class OutgoingMessage:
    sender: str
    to: str
    subject: str
    html: str


class MemoryMailer(AbstractMailer):
    """Keep every message in ``outbox``. Used when MAIL_SUPPRESS_SEND is set."""

    def __init__(self, default_sender: str):
        super().__init__(default_sender)
        self.outbox: list[OutgoingMessage] = []

    def send_message(self, to: str, subject: str, html: str) -> None:
        self.outbox.append(OutgoingMessage(self.default_sender, to, subject, html))
