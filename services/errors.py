"""Error taxonomy for the identity workflows.

Every error is a werkzeug ``HTTPException`` so the application's JSON error
handler can render it directly, the same way the blueprints raise
``BadRequest`` or ``Conflict``.
"""

from __future__ import annotations

from werkzeug.exceptions import (
    BadRequest,
    Conflict,
    Forbidden,
    InternalServerError,
    NotFound,
    Unauthorized,
)


class ConfigurationError(RuntimeError):
    """Raised at startup when a required setting is missing."""


class ValidationError(BadRequest):
    """Malformed request input; raised before any store access."""

    description = "Request payload is invalid."


class AlreadyVerifiedError(BadRequest):
    description = "Verification has already been passed."


class AuthenticationError(Unauthorized):
    description = "Incorrect email or password."


class UnauthorizedError(Unauthorized):
    description = "Not authorized."


class VerificationRequiredError(Forbidden):
    description = "Email not verified. Please verify your email before logging in."


class InvalidTokenError(Forbidden):
    description = "Invalid or expired token."


class NotFoundError(NotFound):
    description = "Resource not found."


class ConflictError(Conflict):
    description = "Email already in use."


class TransportError(InternalServerError):
    description = "Failed to send email."


class InternalError(InternalServerError):
    description = "An unexpected error occurred."
