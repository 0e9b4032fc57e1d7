"""Tests for the SQLAlchemy credential store."""

from __future__ import annotations

from datetime import timedelta

import pytest

from models import db
from models.account import Account, utcnow
from models.revoked_token import RevokedToken
from services.errors import ConflictError
from storage import SQLCredentialStore


def _account(email: str = "s@example.com", **kwargs) -> Account:
    account = Account(username="s", email=email, **kwargs)
    account.set_password("pw")
    return account


@pytest.fixture()
def store(app):
    with app.app_context():
        yield SQLCredentialStore(db)


def test_unique_constraint_rejects_second_insert(store):
    store.add(_account())

    with pytest.raises(ConflictError):
        store.add(_account())

    assert Account.query.count() == 1


def test_store_remains_usable_after_conflict(store):
    store.add(_account())
    with pytest.raises(ConflictError):
        store.add(_account())

    store.add(_account("other@example.com"))

    assert Account.query.count() == 2


def test_lookup_by_email_id_and_token(store):
    account = store.add(_account(verification_token="tok-1"))

    assert store.get_by_email("s@example.com").id == account.id
    assert store.get_by_id(account.id).email == "s@example.com"
    assert store.get_by_verification_token("tok-1").id == account.id
    assert store.get_by_verification_token("tok-2") is None
    assert store.get_by_email("missing@example.com") is None


def test_consumed_token_still_resolves_the_account(store):
    account = store.add(_account(verification_token="tok-1"))
    account.mark_verified()
    store.save(account)

    assert store.get_by_verification_token("tok-1").id == account.id


def test_revoke_is_idempotent(store):
    account = store.add(_account())
    expires_at = utcnow() + timedelta(minutes=30)

    store.revoke_token(account, "jti-1", expires_at)
    store.revoke_token(account, "jti-1", expires_at)

    assert store.is_token_revoked("jti-1") is True
    assert store.is_token_revoked("jti-2") is False
    assert RevokedToken.query.count() == 1


def test_prune_drops_only_expired_revocations(store):
    account = store.add(_account())
    other = store.add(_account("o@example.com"))
    now = utcnow()
    store.revoke_token(account, "old", now - timedelta(minutes=1))
    store.revoke_token(account, "live", now + timedelta(minutes=30))
    store.revoke_token(other, "other-old", now - timedelta(minutes=1))

    removed = store.prune_revoked_tokens(account, now)

    assert removed == 1
    assert store.is_token_revoked("old") is False
    assert store.is_token_revoked("live") is True
    assert store.is_token_revoked("other-old") is True
