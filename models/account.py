"""Account model definition."""

import uuid
from datetime import UTC, datetime

from werkzeug.security import check_password_hash, generate_password_hash

from . import db


def _new_account_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""

    return datetime.now(UTC).replace(tzinfo=None)


class Account(db.Model):
    """A registered diet tracker user."""

    __tablename__ = "accounts"

    id = db.Column(db.String(32), primary_key=True, default=_new_account_id)
    username = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    avatar_url = db.Column(db.String(512), nullable=True)
    verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    verification_token = db.Column(db.String(64), unique=True, nullable=True)
    consumed_verification_token = db.Column(db.String(64), unique=True, nullable=True)
    daily_kcal = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    revoked_tokens = db.relationship(
        "RevokedToken",
        back_populates="account",
        cascade="all, delete-orphan",
    )

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def mark_verified(self) -> None:
        """Complete activation; the token is kept only to recognise replays."""

        self.verified = True
        self.consumed_verification_token = self.verification_token
        self.verification_token = None

    def to_profile(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "avatar_url": self.avatar_url,
            "verified": self.verified,
            "daily_kcal": self.daily_kcal,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Account {self.email}>"
