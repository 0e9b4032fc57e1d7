"""Flask-SQLAlchemy credential store implementation."""

from __future__ import annotations

import logging
from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.account import Account
from models.revoked_token import RevokedToken
from services.errors import ConflictError, InternalError

from .abstract_store import AbstractCredentialStore

logger = logging.getLogger(__name__)


class SQLCredentialStore(AbstractCredentialStore):
    """Persist accounts through the request-scoped SQLAlchemy session."""

    def __init__(self, database: SQLAlchemy):
        self.db = database

    def _commit(self) -> None:
        try:
            self.db.session.commit()
        except IntegrityError:
            self.db.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            logger.exception("Credential store commit failed")
            raise InternalError() from exc

    def add(self, account: Account) -> Account:
        """Insert an account; the unique constraint on email decides duplicates."""

        self.db.session.add(account)
        try:
            self._commit()
        except IntegrityError as exc:
            raise ConflictError() from exc
        return account

    def save(self, account: Account) -> Account:
        self.db.session.add(account)
        try:
            self._commit()
        except IntegrityError as exc:
            logger.error("Integrity violation while saving account %s", account.id)
            raise InternalError() from exc
        return account

    def get_by_id(self, account_id: str) -> Account | None:
        return self.db.session.get(Account, account_id)

    def get_by_email(self, email: str) -> Account | None:
        return Account.query.filter_by(email=email).first()

    def get_by_verification_token(self, token: str) -> Account | None:
        return Account.query.filter(
            or_(
                Account.verification_token == token,
                Account.consumed_verification_token == token,
            )
        ).first()

    def revoke_token(self, account: Account, jti: str, expires_at: datetime) -> None:
        if self.is_token_revoked(jti):
            return
        self.db.session.add(
            RevokedToken(account_id=account.id, jti=jti, expires_at=expires_at)
        )
        try:
            self._commit()
        except IntegrityError:
            # A concurrent logout with the same token already recorded it.
            logger.debug("Token %s already revoked", jti)

    def is_token_revoked(self, jti: str) -> bool:
        return (
            self.db.session.query(RevokedToken.id).filter_by(jti=jti).first()
            is not None
        )

    def prune_revoked_tokens(self, account: Account, now: datetime) -> int:
        removed = RevokedToken.query.filter(
            RevokedToken.account_id == account.id,
            RevokedToken.expires_at <= now,
        ).delete(synchronize_session=False)
        self._commit()
        return removed
