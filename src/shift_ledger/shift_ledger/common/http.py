from __future__ import annotations

import logging

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AlreadyDecided,
    AlreadyStamped,
    AuthorizationError,
    DomainError,
    NotFound,
    SelfApproval,
    StorageConflict,
    ValidationError,
)
from ..employees.model import Identity
from ..employees.service import IdentityResolver

logger = logging.getLogger(__name__)

USER_HEADER = "X-User-Id"

# Most specific first.
_STATUS_BY_ERROR = (
    (AlreadyStamped, 409),
    (AlreadyDecided, 409),
    (SelfApproval, 403),
    (AuthorizationError, 403),
    (NotFound, 404),
    (StorageConflict, 503),
    (ValidationError, 400),
)


def ok(message: str, status: int = 200, **data):
    return jsonify({"success": True, "message": message, **data}), status


def fail(message: str, status: int, **data):
    return jsonify({"success": False, "message": message, **data}), status


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def current_identity(resolver: IdentityResolver) -> Identity:
    """Resolve the acting identity from the request header (set by the chat layer)."""

    return resolver.resolve(request.headers.get(USER_HEADER, ""))


def require_admin(identity: Identity) -> None:
    if not identity.is_admin:
        raise AuthorizationError("Administrators only")


def status_for(error: DomainError) -> int:
    for error_cls, status in _STATUS_BY_ERROR:
        if isinstance(error, error_cls):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return fail(str(e), status_for(e), error=type(e).__name__)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return fail(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return fail("Internal error, please try again later", 500)
