"""Seed a verified demo account."""

from app import create_app
from models import db
from models.account import Account
from services.verification import gravatar_url

DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "DemoPass123"


def main() -> None:
    app = create_app()
    with app.app_context():
        account = Account.query.filter_by(email=DEMO_EMAIL).first()
        if account is None:
            account = Account(
                username=DEMO_USERNAME,
                email=DEMO_EMAIL,
                avatar_url=gravatar_url(DEMO_EMAIL),
            )
            db.session.add(account)
            action = "created"
        else:
            action = "updated"
        account.set_password(DEMO_PASSWORD)
        account.mark_verified()
        db.session.commit()
        print(f"Demo account {action}: {DEMO_EMAIL}")


if __name__ == "__main__":
    main()
