"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402
from notifications import AbstractNotifier, EmailMessage  # noqa: E402
from services.errors import TransportError  # noqa: E402


class AppTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    ACCESS_TOKEN_SECRET = "test-access-secret-0123456789abcdef"
    REFRESH_TOKEN_SECRET = "test-refresh-secret-0123456789abcdef"
    ACCESS_TOKEN_EXPIRES = timedelta(minutes=15)
    REFRESH_TOKEN_EXPIRES = timedelta(days=7)
    BASE_URL = "https://diet.example.com"
    MAIL_SENDER = "noreply@diet.example.com"


class RecordingNotifier(AbstractNotifier):
    """Keeps sent messages in memory; ``fail`` simulates a transport outage."""

    def __init__(self):
        self.sent: list[EmailMessage] = []
        self.fail = False

    def send(self, message: EmailMessage) -> None:
        if self.fail:
            raise TransportError()
        self.sent.append(message)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def app(notifier) -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(AppTestConfig, notifier=notifier)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()
