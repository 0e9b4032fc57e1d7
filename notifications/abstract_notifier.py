"""Email notifier abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    text: str
    html: str | None = None


class AbstractNotifier(ABC):
    """Interface for email transports."""

    @abstractmethod
    def send(self, message: EmailMessage) -> None:
        """Deliver a message or raise :class:`services.errors.TransportError`."""


def redact_email(email: str) -> str:
    """Redact an email address for logging."""

    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"
