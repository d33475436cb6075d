"""SMTP mail backend."""

from __future__ import annotations

import smtplib
from email.message import EmailMessage

from .abstract_mailer import AbstractMailer


class SmtpMailer(AbstractMailer):
    """Send mail through an SMTP relay, one connection per message."""

    def __init__(
        self,
        host: str,
        port: int,
        *,
        default_sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        use_ssl: bool = False,
        timeout: float = 10.0,
    ):
        super().__init__(default_sender)
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.use_ssl = use_ssl
        self.timeout = timeout

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        connection = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        if self.use_tls:
            connection.starttls()
        return connection

    def send_message(self, to: str, subject: str, html: str) -> None:
        message = EmailMessage()
        message["From"] = self.default_sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable mail client.")
        message.add_alternative(html, subtype="html")

        with self._connect() as connection:
            if self.username:
                connection.login(self.username, self.password or "")
            connection.send_message(message)
