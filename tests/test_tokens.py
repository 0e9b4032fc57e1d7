"""Unit tests for the token issuer."""

from __future__ import annotations

import json
from datetime import timedelta

import jwt
import pytest
from jwt.utils import base64url_encode

from services.errors import InvalidTokenError
from services.tokens import ACCESS, REFRESH, TokenIssuer

ACCESS_SECRET = "access-secret-for-unit-tests-000000"
REFRESH_SECRET = "refresh-secret-for-unit-tests-00000"


@pytest.fixture()
def issuer() -> TokenIssuer:
    return TokenIssuer(ACCESS_SECRET, REFRESH_SECRET)


def test_issue_and_validate_round_trip(issuer):
    token = issuer.issue("acc-1", "alice", ACCESS)

    claims = issuer.validate(token, ACCESS)

    assert claims.account_id == "acc-1"
    assert claims.username == "alice"
    assert claims.kind == ACCESS
    assert claims.jti


def test_each_token_gets_a_unique_identifier(issuer):
    first = issuer.validate(issuer.issue("acc-1", "alice", ACCESS), ACCESS)
    second = issuer.validate(issuer.issue("acc-1", "alice", ACCESS), ACCESS)

    assert first.jti != second.jti


def test_kinds_use_independent_secrets_and_lifetimes():
    issuer = TokenIssuer(
        ACCESS_SECRET,
        REFRESH_SECRET,
        access_expires=timedelta(minutes=5),
        refresh_expires=timedelta(days=3),
    )
    access = issuer.validate(issuer.issue("acc-1", "alice", ACCESS), ACCESS)
    refresh = issuer.validate(issuer.issue("acc-1", "alice", REFRESH), REFRESH)

    assert refresh.expires_at - access.expires_at > timedelta(days=2)


@pytest.mark.parametrize("issued, expected", [(ACCESS, REFRESH), (REFRESH, ACCESS)])
def test_token_of_other_kind_is_rejected(issuer, issued, expected):
    token = issuer.issue("acc-1", "alice", issued)

    with pytest.raises(InvalidTokenError):
        issuer.validate(token, expected)


def test_expired_token_is_rejected():
    issuer = TokenIssuer(
        ACCESS_SECRET, REFRESH_SECRET, refresh_expires=timedelta(seconds=-1)
    )
    token = issuer.issue("acc-1", "alice", REFRESH)

    with pytest.raises(InvalidTokenError):
        issuer.validate(token, REFRESH)
    with pytest.raises(InvalidTokenError):
        issuer.refresh(token)


def test_tampered_token_is_rejected(issuer):
    token = issuer.issue("acc-1", "alice", REFRESH)
    header, _, signature = token.split(".")
    forged_payload = base64url_encode(
        json.dumps({"sub": "acc-2", "type": REFRESH, "jti": "x", "exp": 4102444800}).encode()
    ).decode()
    tampered = ".".join([header, forged_payload, signature])

    with pytest.raises(InvalidTokenError):
        issuer.refresh(tampered)


def test_token_signed_with_another_secret_is_rejected(issuer):
    forged = jwt.encode(
        {"sub": "acc-1", "type": REFRESH, "jti": "x", "exp": 4102444800},
        "not-the-refresh-secret-0000000000000",
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        issuer.refresh(forged)


@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_is_rejected(issuer, garbage):
    with pytest.raises(InvalidTokenError):
        issuer.validate(garbage, ACCESS)


def test_refresh_issues_a_new_valid_access_token(issuer):
    refresh_token = issuer.issue("acc-1", "alice", REFRESH)

    access_token = issuer.refresh(refresh_token)

    claims = issuer.validate(access_token, ACCESS)
    assert claims.account_id == "acc-1"
    assert claims.username == "alice"
    # Refresh tokens are not rotated.
    assert issuer.validate(refresh_token, REFRESH).account_id == "acc-1"


def test_unknown_kind_is_a_programming_error(issuer):
    with pytest.raises(ValueError):
        issuer.issue("acc-1", "alice", "id")


def test_secrets_are_required():
    with pytest.raises(ValueError):
        TokenIssuer("", REFRESH_SECRET)
