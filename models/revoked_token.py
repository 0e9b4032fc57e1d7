"""Revoked bearer token model."""

from . import db
from .account import utcnow


class RevokedToken(db.Model):
    """A still-signed token that logout has invalidated."""

    __tablename__ = "revoked_tokens"

    id = db.Column(db.Integer, primary_key=True)
    account_id = db.Column(
        db.String(32),
        db.ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    )
    jti = db.Column(db.String(64), unique=True, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    account = db.relationship("Account", back_populates="revoked_tokens")
