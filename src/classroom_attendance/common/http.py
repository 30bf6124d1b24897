from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, session

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    DuplicateKeyViolation,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (DuplicateKeyViolation, 409),
)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user" not in session:
            return jsonify({"message": "Login required"}), 401
        return view(*args, **kwargs)

    return wrapper


def error_response(exc: Exception, *, action: str):
    """Translate an exception raised by a service into a JSON response."""
    if isinstance(exc, DomainError):
        for error_type, code in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return jsonify({"message": str(exc)}), code

    logger.exception("Failed to %s", action)
    return jsonify({"message": f"Failed to {action}", "error": str(exc)}), 500
