"""Request gate for bearer-token protected endpoints.

flask-jwt-extended performs the header parsing and access token verification
(signature, expiry and ``type == "access"``) with the access signing secret.
The callbacks registered here add the revocation check and account lookup,
and render every rejection as a 401 in the application's error envelope.
"""

from __future__ import annotations

from datetime import UTC, datetime

from flask import current_app
from flask_jwt_extended import JWTManager, get_current_user, get_jwt, jwt_required

from models.account import Account
from utils.error_responses import build_error_response

from .errors import UnauthorizedError

login_required = jwt_required


def _identity_service():
    return current_app.extensions["identity"]


def _reject(message: str):
    return build_error_response(UnauthorizedError(message))


def init_auth_gate(jwt: JWTManager) -> None:
    """Register the gate callbacks on the application's JWTManager."""

    @jwt.token_in_blocklist_loader
    def _token_revoked(jwt_header: dict, jwt_payload: dict) -> bool:
        return _identity_service().is_token_revoked(jwt_payload.get("jti"))

    @jwt.user_lookup_loader
    def _load_account(jwt_header: dict, jwt_payload: dict) -> Account | None:
        return _identity_service().resolve_account(jwt_payload.get("sub"))

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _reject(reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _reject("Invalid token.")

    @jwt.expired_token_loader
    def _expired_token(jwt_header: dict, jwt_payload: dict):
        return _reject("Token has expired.")

    @jwt.revoked_token_loader
    def _revoked_token(jwt_header: dict, jwt_payload: dict):
        return _reject("Token has been revoked.")

    @jwt.needs_fresh_token_loader
    def _stale_token(jwt_header: dict, jwt_payload: dict):
        return _reject("Fresh token required.")

    @jwt.user_lookup_error_loader
    def _unknown_account(jwt_header: dict, jwt_payload: dict):
        return _reject("User not found.")


def current_account() -> Account:
    """Return the account resolved by the gate for this request."""

    return get_current_user()


def current_token_id() -> tuple[str, datetime]:
    """Return the ``jti`` and naive-UTC expiry of the token on this request."""

    claims = get_jwt()
    expires_at = datetime.fromtimestamp(claims["exp"], UTC).replace(tzinfo=None)
    return claims["jti"], expires_at
