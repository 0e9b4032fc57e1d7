"""Account registration, activation and session workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from werkzeug.security import check_password_hash, generate_password_hash

from models.account import Account, utcnow
from notifications.abstract_notifier import AbstractNotifier, EmailMessage, redact_email
from storage.abstract_store import AbstractCredentialStore

from .errors import (
    AlreadyVerifiedError,
    AuthenticationError,
    NotFoundError,
    TransportError,
    ValidationError,
    VerificationRequiredError,
)
from .tokens import ACCESS, REFRESH, TokenIssuer
from .verification import generate_verification_token, gravatar_url, verification_link

logger = logging.getLogger(__name__)

# Checked against when the email is unknown so both rejections cost one hash.
_DUMMY_PASSWORD_HASH = generate_password_hash("unknown-account-placeholder")

REGISTERED_MESSAGE = (
    "Registration successful. Please check your email to verify your account."
)
REGISTERED_EMAIL_FAILED_MESSAGE = (
    "Registration successful. Please check your email to verify your account. "
    "However, email sending failed."
)


@dataclass(frozen=True)
class RegistrationResult:
    account: Account
    email_sent: bool

    @property
    def message(self) -> str:
        return REGISTERED_MESSAGE if self.email_sent else REGISTERED_EMAIL_FAILED_MESSAGE


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class LoginResult:
    account: Account
    tokens: TokenPair


class IdentityService:
    """Orchestrates the account lifecycle over injected collaborators."""

    def __init__(
        self,
        store: AbstractCredentialStore,
        tokens: TokenIssuer,
        notifier: AbstractNotifier,
        *,
        base_url: str,
        token_generator: Callable[[], str] = generate_verification_token,
    ):
        self.store = store
        self.tokens = tokens
        self.notifier = notifier
        self.base_url = base_url
        self.token_generator = token_generator

    def _activation_message(self, email: str, token: str) -> EmailMessage:
        link = verification_link(self.base_url, token)
        return EmailMessage(
            to=email,
            subject="Verify your email address",
            text=f"Please verify your email address by visiting {link}",
            html=f'<p>Click <a href="{link}">here</a> to verify your email address.</p>',
        )

    def register(self, username: str, email: str, password: str) -> RegistrationResult:
        """Create an unverified account and try to send its activation email.

        Email delivery failure does not fail registration; it is reported
        through ``RegistrationResult.email_sent``.
        """

        account = Account(
            username=username,
            email=email,
            avatar_url=gravatar_url(email),
            verified=False,
            verification_token=self.token_generator(),
        )
        account.set_password(password)
        self.store.add(account)
        logger.info("Registered account %s", account.id)

        try:
            self.notifier.send(
                self._activation_message(account.email, account.verification_token)
            )
        except TransportError:
            logger.warning(
                "Activation email to %s failed; account %s stays unverified",
                redact_email(account.email),
                account.id,
            )
            return RegistrationResult(account=account, email_sent=False)

        return RegistrationResult(account=account, email_sent=True)

    def login(self, email: str, password: str) -> LoginResult:
        account = self.store.get_by_email(email)
        # Unknown email and wrong password must be indistinguishable.
        if account is None:
            check_password_hash(_DUMMY_PASSWORD_HASH, password)
            raise AuthenticationError()
        if not account.check_password(password):
            raise AuthenticationError()
        if not account.verified:
            raise VerificationRequiredError()

        tokens = TokenPair(
            access_token=self.tokens.issue(account.id, account.username, ACCESS),
            refresh_token=self.tokens.issue(account.id, account.username, REFRESH),
        )
        logger.info("Issued session for account %s", account.id)
        return LoginResult(account=account, tokens=tokens)

    def verify(self, token: str) -> Account:
        """Activate the account holding ``token``."""

        account = self.store.get_by_verification_token(token) if token else None
        if account is None:
            raise NotFoundError("User not found.")
        if account.verified:
            raise AlreadyVerifiedError("User already verified.")

        account.mark_verified()
        self.store.save(account)
        logger.info("Account %s verified", account.id)
        return account

    def resend_verification(self, email: str) -> Account:
        """Replace the account's verification token and email the new link.

        Unlike registration, a transport failure here propagates.
        """

        account = self.store.get_by_email(email)
        if account is None:
            raise NotFoundError("User not found.")
        if account.verified:
            raise AlreadyVerifiedError()

        account.verification_token = self.token_generator()
        self.store.save(account)
        self.notifier.send(
            self._activation_message(account.email, account.verification_token)
        )
        return account

    def send_verification_email(self, email: str) -> None:
        """Email the current activation link, or a plain notice for other addresses."""

        account = self.store.get_by_email(email)
        if account is not None and not account.verified and account.verification_token:
            message = self._activation_message(email, account.verification_token)
        else:
            message = EmailMessage(
                to=email,
                subject="Verification request",
                text=(
                    "We received a verification request for this address. "
                    "If you registered, your account may already be active."
                ),
            )
        self.notifier.send(message)

    def refresh(self, refresh_token: str) -> str:
        return self.tokens.refresh(refresh_token)

    def logout(self, account: Account, jti: str, expires_at: datetime) -> None:
        """Revoke the token used for the current request."""

        self.store.revoke_token(account, jti, expires_at)
        pruned = self.store.prune_revoked_tokens(account, utcnow())
        if pruned:
            logger.debug("Pruned %d expired revocations for %s", pruned, account.id)
        logger.info("Account %s logged out", account.id)

    def is_token_revoked(self, jti: str | None) -> bool:
        if not jti:
            return False
        return self.store.is_token_revoked(jti)

    def resolve_account(self, account_id: str | None) -> Account | None:
        if not account_id:
            return None
        return self.store.get_by_id(account_id)

    def update_daily_kcal(self, account: Account, kcal: float) -> Account:
        if isinstance(kcal, bool) or not isinstance(kcal, (int, float)) or kcal <= 0:
            raise ValidationError("Invalid kcal value.")
        account.daily_kcal = float(kcal)
        return self.store.save(account)
