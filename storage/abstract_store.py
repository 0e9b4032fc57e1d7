"""Credential store abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from models.account import Account


class AbstractCredentialStore(ABC):
    """Interface for account persistence backends.

    Implementations own the uniqueness of ``Account.email``: ``add`` must raise
    :class:`services.errors.ConflictError` when the email is already taken,
    enforced by the backend itself rather than a prior lookup.
    """

    @abstractmethod
    def add(self, account: Account) -> Account:
        """Persist a new account and return it."""

    @abstractmethod
    def save(self, account: Account) -> Account:
        """Persist changes to an existing account."""

    @abstractmethod
    def get_by_id(self, account_id: str) -> Account | None:
        """Return the account with the given identifier, if any."""

    @abstractmethod
    def get_by_email(self, email: str) -> Account | None:
        """Return the account registered under ``email``, if any."""

    @abstractmethod
    def get_by_verification_token(self, token: str) -> Account | None:
        """Return the account whose current or already-consumed token is ``token``."""

    @abstractmethod
    def revoke_token(self, account: Account, jti: str, expires_at: datetime) -> None:
        """Record a token identifier as revoked for ``account``."""

    @abstractmethod
    def is_token_revoked(self, jti: str) -> bool:
        """Return whether the token identifier has been revoked."""

    @abstractmethod
    def prune_revoked_tokens(self, account: Account, now: datetime) -> int:
        """Drop revocations whose token expired before ``now``; return the count."""
