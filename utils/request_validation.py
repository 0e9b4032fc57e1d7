"""Utilities for validating incoming Flask requests.

Each endpoint that accepts a body has a request contract below: a frozen
dataclass built by ``from_payload``, which checks fields in declaration order
and raises ``ValidationError`` naming the first field that fails.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from flask import Request

from services.errors import InvalidTokenError, ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise ValidationError("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise ValidationError("Request JSON body is required.")

    if not isinstance(data, dict):
        raise ValidationError("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise ValidationError("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if not data.get(key)]
        if missing:
            raise ValidationError(
                "Missing required fields: {}.".format(", ".join(sorted(missing)))
            )

    return data


def require_string(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None or value == "":
        raise ValidationError(f'"{key}" is required.')
    if not isinstance(value, str):
        raise ValidationError(f'"{key}" must be a string.')
    if not value.strip():
        raise ValidationError(f'"{key}" is not allowed to be empty.')
    return value


def require_email(data: dict, key: str = "email") -> str:
    value = require_string(data, key).strip()
    if not EMAIL_PATTERN.match(value):
        raise ValidationError(f'"{key}" must be a valid email.')
    return value


def require_positive_number(data: dict, key: str) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ValidationError(f'"{key}" must be a positive number.')
    return float(value)


@dataclass(frozen=True)
class RegisterRequest:
    username: str
    email: str
    password: str

    @classmethod
    def from_payload(cls, data: dict) -> "RegisterRequest":
        return cls(
            username=require_string(data, "username"),
            email=require_email(data),
            password=require_string(data, "password"),
        )


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    @classmethod
    def from_payload(cls, data: dict) -> "LoginRequest":
        return cls(email=require_email(data), password=require_string(data, "password"))


@dataclass(frozen=True)
class EmailRequest:
    email: str

    @classmethod
    def from_payload(cls, data: dict) -> "EmailRequest":
        return cls(email=require_email(data))


@dataclass(frozen=True)
class RefreshRequest:
    refresh_token: str

    @classmethod
    def from_payload(cls, data: dict) -> "RefreshRequest":
        token = data.get("refresh_token")
        if not token or not isinstance(token, str):
            raise InvalidTokenError("Refresh token is required.")
        return cls(refresh_token=token)


@dataclass(frozen=True)
class DailyKcalRequest:
    kcal: float

    @classmethod
    def from_payload(cls, data: dict) -> "DailyKcalRequest":
        return cls(kcal=require_positive_number(data, "kcal"))
