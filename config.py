"""Application configuration module."""

import os
from datetime import timedelta


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Base configuration for the Flask application."""

    # Required at startup; create_app refuses to run without them.
    ACCESS_TOKEN_SECRET = os.getenv("JWT_SECRET")
    REFRESH_TOKEN_SECRET = os.getenv("JWT_REFRESH_SECRET")
    BASE_URL = os.getenv("BASE_URL")
    MAIL_SENDER = os.getenv("MAIL_SENDER")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Tokens
    ACCESS_TOKEN_EXPIRES = timedelta(
        minutes=int(os.getenv("ACCESS_TOKEN_EXPIRES_MINUTES", "60"))
    )
    REFRESH_TOKEN_EXPIRES = timedelta(
        days=int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "7"))
    )

    # Outbound email
    SMTP_HOST = os.getenv("SMTP_HOST", "localhost")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME = os.getenv("SMTP_USERNAME")
    SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
    SMTP_USE_TLS = _env_bool("SMTP_USE_TLS", True)
    MAIL_TIMEOUT = float(os.getenv("MAIL_TIMEOUT", "10"))

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


REQUIRED_SETTINGS = (
    "ACCESS_TOKEN_SECRET",
    "REFRESH_TOKEN_SECRET",
    "BASE_URL",
    "MAIL_SENDER",
    "SQLALCHEMY_DATABASE_URI",
)
