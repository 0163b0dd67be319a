from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def ok(message: str, data: Any = None, status: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return fail(str(error), status_for(error))

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return fail(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception("unhandled error: %s", error)
        if bool(app.config.get("DEBUG", False)):
            return fail(f"Server error: {error}", 500)
        return fail("Server error", 500)
