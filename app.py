"""Application factory."""

import os
import uuid

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import REQUIRED_SETTINGS, Config
from models import db
from notifications import AbstractNotifier, SMTPNotifier
from routes.users import users_bp
from services.auth_gate import init_auth_gate
from services.errors import ConfigurationError, InternalError
from services.identity import IdentityService
from services.tokens import TokenIssuer
from storage import SQLCredentialStore
from utils.error_responses import build_error_response

migrate = Migrate()
jwt = JWTManager()


def create_app(
    config_class: type[Config] = Config,
    notifier: AbstractNotifier | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Raises ConfigurationError when a required setting (signing secrets, base
    URL, sender address, database URL) is missing.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    _check_required_settings(app)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # The request gate verifies access tokens with the access signing secret.
    app.config["JWT_SECRET_KEY"] = app.config["ACCESS_TOKEN_SECRET"]

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    init_auth_gate(jwt)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    app.extensions["identity"] = _build_identity_service(app, notifier)

    # Blueprints
    app.register_blueprint(users_bp, url_prefix="/users")

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)

    return app


def _check_required_settings(app: Flask) -> None:
    missing = [key for key in REQUIRED_SETTINGS if not app.config.get(key)]
    if missing:
        raise ConfigurationError(
            "Missing required configuration: {}.".format(", ".join(missing))
        )


def _build_identity_service(
    app: Flask, notifier: AbstractNotifier | None
) -> IdentityService:
    config = app.config
    tokens = TokenIssuer(
        config["ACCESS_TOKEN_SECRET"],
        config["REFRESH_TOKEN_SECRET"],
        access_expires=config["ACCESS_TOKEN_EXPIRES"],
        refresh_expires=config["REFRESH_TOKEN_EXPIRES"],
    )
    if notifier is None:
        notifier = SMTPNotifier(
            sender=config["MAIL_SENDER"],
            host=config["SMTP_HOST"],
            port=config["SMTP_PORT"],
            username=config.get("SMTP_USERNAME"),
            password=config.get("SMTP_PASSWORD"),
            use_tls=config.get("SMTP_USE_TLS", True),
            timeout=config.get("MAIL_TIMEOUT", 10),
        )
    return IdentityService(
        SQLCredentialStore(db),
        tokens,
        notifier,
        base_url=config["BASE_URL"],
    )


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():  # pragma: no cover
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):  # pragma: no cover
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        return build_error_response(error)

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        app.logger.exception("Unhandled application error", exc_info=error)
        return build_error_response(InternalError())


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
