"""Signed bearer token issuance and validation."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from .errors import InvalidTokenError

ACCESS = "access"
REFRESH = "refresh"
TOKEN_KINDS = (ACCESS, REFRESH)
ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a validated token."""

    account_id: str
    username: str
    kind: str
    jti: str
    expires_at: datetime


class TokenIssuer:
    """Issue and validate access/refresh tokens, each kind with its own secret.

    Access tokens use the claim layout flask-jwt-extended expects (``sub``,
    ``type``, ``jti``, ``fresh``), so the request gate can verify them with
    the access secret configured as ``JWT_SECRET_KEY``.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        *,
        access_expires: timedelta = timedelta(hours=1),
        refresh_expires: timedelta = timedelta(days=7),
    ):
        if not access_secret or not refresh_secret:
            raise ValueError("Both access and refresh signing secrets are required.")
        self._secrets = {ACCESS: access_secret, REFRESH: refresh_secret}
        self._lifetimes = {ACCESS: access_expires, REFRESH: refresh_expires}

    def _check_kind(self, kind: str) -> None:
        if kind not in TOKEN_KINDS:
            raise ValueError(f"Unknown token kind: {kind!r}")

    def issue(self, account_id: str, username: str, kind: str) -> str:
        """Sign a token for the account with the lifetime of ``kind``."""

        self._check_kind(kind)
        now = datetime.now(UTC)
        payload = {
            "sub": str(account_id),
            "username": username,
            "type": kind,
            "fresh": False,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "nbf": now,
            "exp": now + self._lifetimes[kind],
        }
        return jwt.encode(payload, self._secrets[kind], algorithm=ALGORITHM)

    def validate(self, token: str, kind: str) -> TokenClaims:
        """Verify signature, expiry and kind; raise InvalidTokenError otherwise."""

        self._check_kind(kind)
        if not token or not isinstance(token, str):
            raise InvalidTokenError("Token is required.")
        try:
            data = jwt.decode(
                token,
                self._secrets[kind],
                algorithms=[ALGORITHM],
                options={"require": ["sub", "exp", "jti", "type"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError() from exc

        if data.get("type") != kind:
            raise InvalidTokenError()

        return TokenClaims(
            account_id=data["sub"],
            username=data.get("username", ""),
            kind=kind,
            jti=data["jti"],
            expires_at=datetime.fromtimestamp(data["exp"], UTC),
        )

    def refresh(self, refresh_token: str) -> str:
        """Mint a new access token from a valid refresh token.

        The refresh token itself is not rotated and stays usable until expiry.
        """

        claims = self.validate(refresh_token, REFRESH)
        return self.issue(claims.account_id, claims.username, ACCESS)
