"""Error taxonomy and the single exception-to-response boundary."""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from .config import ConfigError

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Failure raised by the service boundary.

    ``status_code`` is optional; errors without one are rendered as 500.
    """

    status_code: int | None = None

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


def _json_error(message: str, status: int):
    return jsonify({"message": message}), status


def _handle_service_error(exc: ServiceError):
    status = exc.status_code or 500
    if status >= 500:
        logger.exception("Service failure: %s", exc.message)
    return _json_error(exc.message, status)


def _handle_config_error(exc: ConfigError):
    logger.exception("Missing configuration for MongoDB")
    return _json_error(str(exc), 500)


def _handle_db_error(exc: PyMongoError):
    logger.exception("Request failed due to MongoDB error")
    return _json_error("Database unavailable. Please try again later.", 503)


def _handle_http_error(exc: HTTPException):
    return _json_error(exc.description or exc.name, exc.code or 500)


def _handle_unexpected_error(exc: Exception):
    logger.exception("Unhandled error while processing request")
    return _json_error("Internal server error", 500)


def register_error_handlers(app: Flask) -> None:
    """Install the JSON ``{message}`` error handlers on ``app``."""

    app.register_error_handler(ServiceError, _handle_service_error)
    app.register_error_handler(ConfigError, _handle_config_error)
    app.register_error_handler(PyMongoError, _handle_db_error)
    app.register_error_handler(HTTPException, _handle_http_error)
    app.register_error_handler(Exception, _handle_unexpected_error)


__all__ = [
    "ConflictError",
    "NotFoundError",
    "ServiceError",
    "ValidationError",
    "register_error_handlers",
]
