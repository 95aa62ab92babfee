from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from mysql.connector import errors as mysql_errors

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CapabilityDenied,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (CapabilityDenied, 403),
    (AuthorizationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def bearer_token() -> Optional[str]:
    """Token from ``Authorization: Bearer <token>``; None if missing or malformed."""
    header = request.headers.get("Authorization", "")
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def json_body() -> dict[str, Any]:
    """Request payload as a dict: JSON body, or form fields for multipart posts."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    if request.form:
        return request.form.to_dict()
    return {}


def error_response(exc: DomainError):
    status = 400
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status = code
            break
    return jsonify({"error": str(exc), "code": type(exc).__name__}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        return error_response(exc)

    @app.errorhandler(mysql_errors.Error)
    def _storage_error(exc: mysql_errors.Error):
        logger.exception("Storage unavailable")
        return jsonify({"error": "Storage unavailable, try again later", "code": "StorageUnavailable"}), 503
