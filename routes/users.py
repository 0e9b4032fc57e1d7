"""Users blueprint: registration, activation, login and session endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request

from services.auth_gate import current_account, current_token_id, login_required
from services.identity import IdentityService
from utils.request_validation import (
    DailyKcalRequest,
    EmailRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    parse_json_request,
)

users_bp = Blueprint("users", __name__)


def _identity() -> IdentityService:
    return current_app.extensions["identity"]


@users_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new account and send its activation email."""
    payload = RegisterRequest.from_payload(parse_json_request(request))

    result = _identity().register(payload.username, payload.email, payload.password)

    return (
        jsonify(
            {
                "message": result.message,
                "user": {
                    "email": result.account.email,
                    "verified": result.account.verified,
                },
            }
        ),
        HTTPStatus.CREATED,
    )


@users_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a verified account and return an access/refresh token pair."""
    payload = LoginRequest.from_payload(parse_json_request(request))

    result = _identity().login(payload.email, payload.password)
    account = result.account

    return (
        jsonify(
            {
                "access_token": result.tokens.access_token,
                "refresh_token": result.tokens.refresh_token,
                "token_type": "Bearer",
                "user": {
                    "username": account.username,
                    "email": account.email,
                    "daily_kcal": account.daily_kcal,
                },
            }
        ),
        HTTPStatus.OK,
    )


@users_bp.route("/logout", methods=["POST"])
@login_required()
def logout() -> tuple:
    """Revoke the bearer token used for this request."""
    jti, expires_at = current_token_id()
    _identity().logout(current_account(), jti, expires_at)
    return jsonify({"message": "Successfully logged out"}), HTTPStatus.OK


@users_bp.route("/current", methods=["GET"])
@login_required()
def current() -> tuple:
    """Return the authenticated account's profile."""
    return jsonify(current_account().to_profile()), HTTPStatus.OK


@users_bp.route("/daily-kcal", methods=["POST"])
@login_required()
def update_daily_kcal() -> tuple:
    """Store the authenticated account's daily calorie target."""
    payload = DailyKcalRequest.from_payload(parse_json_request(request))

    account = _identity().update_daily_kcal(current_account(), payload.kcal)

    return (
        jsonify(
            {
                "message": "Daily kcal updated successfully",
                "daily_kcal": account.daily_kcal,
            }
        ),
        HTTPStatus.OK,
    )


@users_bp.route("/verify", methods=["POST"])
def send_verification_email() -> tuple:
    """Email the activation link, or a notice, to the given address."""
    payload = EmailRequest.from_payload(parse_json_request(request))

    _identity().send_verification_email(payload.email)

    return jsonify({"message": "Verification email sent"}), HTTPStatus.CREATED


@users_bp.route("/verify/<string:verification_token>", methods=["GET"])
def verify(verification_token: str) -> tuple:
    """Activate the account that owns the verification token."""
    _identity().verify(verification_token)
    return jsonify({"message": "Verification successful"}), HTTPStatus.OK


@users_bp.route("/resend-verify", methods=["POST"])
def resend_verification() -> tuple:
    """Issue a new verification token and email it."""
    payload = EmailRequest.from_payload(parse_json_request(request))

    _identity().resend_verification(payload.email)

    return jsonify({"message": "Verification email sent"}), HTTPStatus.OK


@users_bp.route("/refresh-token", methods=["POST"])
def refresh_token() -> tuple:
    """Exchange a refresh token for a new access token."""
    payload = RefreshRequest.from_payload(parse_json_request(request, allow_empty=True))

    access_token = _identity().refresh(payload.refresh_token)

    return jsonify({"access_token": access_token}), HTTPStatus.OK
