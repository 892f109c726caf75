"""Shared Flask helpers: JSON envelopes, session guard and error mapping."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    InvalidSequenceError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def success(data: Any = None, message: str = "Success", code: int = 200, **extra):
    body = {"success": True, "message": message, "data": data}
    body.update(extra)
    return jsonify(body), code


def error(message: str, code: int = 400, errors: Optional[dict] = None):
    return jsonify({"success": False, "message": message, "errors": errors or {}}), code


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role"))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error("Unauthenticated", 401)
        return view(*args, **kwargs)

    return wrapper


# Most specific first: InvalidSequenceError before ValidationError, etc.
_STATUS_BY_ERROR = (
    (InvalidSequenceError, 409),
    (ValidationError, 422),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (DomainError, 400),
)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        for exc_type, code in _STATUS_BY_ERROR:
            if isinstance(exc, exc_type):
                return error(str(exc), code)
        return error(str(exc), 400)

    @app.errorhandler(StoreUnavailableError)
    def handle_store_error(exc: StoreUnavailableError):
        logger.error("Store unavailable: %s", exc)
        return error("Service temporarily unavailable, please retry", 503)
