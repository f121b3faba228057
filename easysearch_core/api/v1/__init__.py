"""API v1 endpoints for Easy Search Core.

This module provides the ApiV1 blueprint that aggregates all v1 resources:
- Auth (/auth/*)
- Users (/users/*)

The ApiV1 blueprint is registered in main.py under settings.api_v1_prefix
and logs every request it serves. Authentication is applied per endpoint
(@auth_required), since registration, login and refresh are public.
"""

import logging
import time

from flask import Blueprint, g, request

from ...auth.api import auth_bp, users_bp

logger = logging.getLogger(__name__)

api_v1_bp = Blueprint("api_v1", __name__)


@api_v1_bp.before_request
def start_timer():
    g.request_started = time.perf_counter()


@api_v1_bp.after_request
def log_request(response):
    """Log method, path, status and duration of every v1 request."""
    started = g.pop("request_started", None)
    elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
    logger.info(
        f"{request.method} {request.path} {response.status_code} {elapsed_ms:.1f}ms"
    )
    return response


api_v1_bp.register_blueprint(auth_bp)
api_v1_bp.register_blueprint(users_bp)

__all__ = ["api_v1_bp"]
