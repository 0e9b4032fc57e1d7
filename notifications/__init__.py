"""Outbound email notifiers."""

from .abstract_notifier import AbstractNotifier, EmailMessage
from .smtp_notifier import SMTPNotifier

__all__ = ["AbstractNotifier", "EmailMessage", "SMTPNotifier"]
