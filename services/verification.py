"""Verification token and avatar helpers."""

from __future__ import annotations

import hashlib
import secrets

VERIFICATION_TOKEN_BYTES = 16
GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar/"


def generate_verification_token() -> str:
    """Return an unguessable, URL-safe single-use activation token."""

    return secrets.token_urlsafe(VERIFICATION_TOKEN_BYTES)


def gravatar_url(email: str) -> str:
    """Return the gravatar image URL for an email address."""

    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"{GRAVATAR_BASE_URL}{digest}"


def verification_link(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/users/verify/{token}"
