"""SMTP email notifier."""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from services.errors import TransportError

from .abstract_notifier import AbstractNotifier, EmailMessage, redact_email

logger = logging.getLogger(__name__)


class SMTPNotifier(AbstractNotifier):
    """Send email through an SMTP relay with a bounded connection timeout."""

    def __init__(
        self,
        *,
        sender: str,
        host: str = "localhost",
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.sender = sender
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build(self, message: EmailMessage) -> MIMEMultipart:
        mime = MIMEMultipart("alternative")
        mime["Subject"] = message.subject
        mime["From"] = self.sender
        mime["To"] = message.to
        mime.attach(MIMEText(message.text, "plain"))
        if message.html:
            mime.attach(MIMEText(message.html, "html"))
        return mime

    def send(self, message: EmailMessage) -> None:
        mime = self._build(message)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls(context=ssl.create_default_context())
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.sendmail(self.sender, [message.to], mime.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            # OSError covers refused connections, ssl.SSLError and timeouts.
            logger.error(
                "Email delivery to %s failed: %s",
                redact_email(message.to),
                type(exc).__name__,
            )
            raise TransportError() from exc

        logger.info("Email sent to %s", redact_email(message.to))
