"""Flask application entry point.

create_app() builds the app from a Settings instance. Configuration is read
once here and handed to the store, signers, hasher and services through
their constructors; nothing below this module reads the settings global.

    flask --app "easysearch_core.main:create_app()" run
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .api.v1 import api_v1_bp
from .auth.guard import AccessGuard
from .auth.hashing import PasswordHasher
from .auth.service import REFRESH_SESSION_TTL, AuthService
from .auth.token import TokenSigner
from .config import Settings, settings
from .db.store import SQLiteCredentialStore
from .exceptions import (
    ConflictError,
    EasySearchError,
    ForbiddenError,
    ResourceNotFound,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Status code per error class; subclasses resolve through the MRO
ERROR_STATUS: dict[type[EasySearchError], int] = {
    ValidationError: 400,
    UnauthorizedError: 401,
    ForbiddenError: 403,
    ResourceNotFound: 404,
    ConflictError: 409,
}


def configure_logging(config: Settings) -> None:
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def build_auth_service(config: Settings) -> tuple[AuthService, AccessGuard]:
    """Wire store, signers and hasher from one Settings instance."""
    store = SQLiteCredentialStore(config.database_path)
    access_signer = TokenSigner(
        config.jwt_access_secret,
        config.jwt_access_expires_in,
        token_type="access",
        algorithm=config.jwt_algorithm,
    )
    refresh_signer = TokenSigner(
        config.jwt_refresh_secret,
        config.jwt_refresh_expires_in,
        token_type="refresh",
        algorithm=config.jwt_algorithm,
    )
    hasher = PasswordHasher(config.bcrypt_work_factor)

    if config.jwt_refresh_expires_in != REFRESH_SESSION_TTL:
        logger.warning(
            f"JWT_REFRESH_EXPIRES_IN ({config.jwt_refresh_expires_in}) differs from "
            f"the stored session lifetime ({REFRESH_SESSION_TTL}); the shorter one wins"
        )

    service = AuthService(store, access_signer, refresh_signer, hasher)
    guard = AccessGuard(store, access_signer)
    return service, guard


def _error_response(error: EasySearchError, status: int):
    response = {
        "success": False,
        "error": {
            "type": error.__class__.__name__,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response), status


def register_error_handlers(app: Flask, config: Settings) -> None:
    """Map EasySearchError subclasses and unexpected exceptions to JSON."""

    @app.errorhandler(EasySearchError)
    def handle_easysearch_error(error):
        for cls in type(error).__mro__:
            if cls in ERROR_STATUS:
                return _error_response(error, ERROR_STATUS[cls])

        logger.error(f"{error.__class__.__name__}: {error.message}")
        if config.is_production:
            return _error_response(EasySearchError("An internal error occurred"), 500)
        return _error_response(error, 500)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        """Routing and protocol errors (404, 405, ...) in the same JSON shape."""
        return jsonify({
            "success": False,
            "error": {
                "type": error.__class__.__name__,
                "message": error.description or error.name
            }
        }), error.code

    @app.errorhandler(Exception)
    def handle_internal_error(error):
        """Handle uncaught exceptions; details go to the log only in production."""
        logger.exception(f"Internal error: {error}")
        message = "An internal error occurred" if config.is_production else str(error)
        return jsonify({
            "success": False,
            "error": {
                "type": "InternalServerError",
                "message": message or "An internal error occurred"
            }
        }), 500


def create_app(config: Settings | None = None) -> Flask:
    """Create the Flask app.

    Args:
        config: Settings to use (defaults to the environment-loaded settings)
    """
    config = config or settings
    configure_logging(config)

    app = Flask(__name__)
    CORS(app, origins=config.cors_origins, supports_credentials=True)

    service, guard = build_auth_service(config)
    app.extensions["easysearch"] = {
        "settings": config,
        "auth_service": service,
        "guard": guard,
    }
    logger.info(f"Database ready at {config.database_path}")

    register_error_handlers(app, config)

    @app.get("/")
    def root():
        return jsonify({
            "statusCode": 200,
            "success": True,
            "message": "Welcome to Easy Search server",
        })

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok"})

    app.register_blueprint(api_v1_bp, url_prefix=config.api_v1_prefix)
    return app


if __name__ == "__main__":
    create_app(settings).run(port=settings.port, debug=not settings.is_production)
