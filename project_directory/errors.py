"""Centralised error handling and custom exceptions.

This module defines custom exception classes and provides Flask error
handlers that serialise them into JSON responses of the form
``{"e": "<short message>"}``. The service layer raises these to signal
specific failures without coupling itself to HTTP response codes; the
app registers the handlers during application factory initialisation.
"""
from __future__ import annotations

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound, RequestEntityTooLarge

from .db import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self):
        return jsonify({"e": self.message}), self.status_code


class BadRequestError(ApiError):
    """Raised when the request cannot be processed as sent."""

    status_code = 400
    default_message = "Bad Request"


class EditingForbidden(BadRequestError):
    """Raised while project editing is globally disabled."""

    default_message = "Bad Request: Project editing is not currently allowed"


class Unauthenticated(ApiError):
    """Raised when no authenticated identity accompanies the request."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(ApiError):
    """Raised when a requested resource cannot be found."""

    status_code = 404
    default_message = "Not Found"


class PayloadTooLarge(ApiError):
    """Raised when an upload exceeds the size ceiling.

    ``close_connection`` is set when the body was only partially read,
    so the client connection must not be reused.
    """

    status_code = 413
    default_message = "Resource size exceeds limit (5MB)"

    def __init__(self, message: str | None = None, close_connection: bool = False) -> None:
        super().__init__(message)
        self.close_connection = close_connection

    def to_response(self):
        response = jsonify({"e": self.message})
        response.status_code = self.status_code
        if self.close_connection:
            response.headers["Connection"] = "close"
        return response


class InternalError(ApiError):
    """Raised when storage or another backing service fails."""


def register_error_handlers(app) -> None:
    """Register custom error handlers on the given Flask app."""
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        if err.status_code >= 500:
            logger.error("Request failed: %s", err, exc_info=err)
        return err.to_response()

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(err: MethodNotAllowed):
        response = jsonify({"e": "Method Not Allowed"})
        response.status_code = 405
        if err.valid_methods:
            response.headers["Allow"] = ", ".join(err.valid_methods)
        return response

    @app.errorhandler(NotFound)
    def handle_not_found(err: NotFound):
        return NotFoundError().to_response()

    @app.errorhandler(RequestEntityTooLarge)
    def handle_entity_too_large(err: RequestEntityTooLarge):
        return PayloadTooLarge().to_response()

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        if isinstance(err, HTTPException):
            return jsonify({"e": err.name}), err.code
        logger.exception("Unhandled error while processing request")
        db.session.rollback()
        return InternalError().to_response()


def register_jwt_callbacks(jwt) -> None:
    """Answer every token failure with the same 401 body."""
    def _unauthorized():
        return Unauthenticated().to_response()

    @jwt.unauthorized_loader
    def handle_missing_token(reason: str):
        return _unauthorized()

    @jwt.invalid_token_loader
    def handle_invalid_token(reason: str):
        return _unauthorized()

    @jwt.expired_token_loader
    def handle_expired_token(jwt_header: dict, jwt_payload: dict):
        return _unauthorized()

    @jwt.user_lookup_error_loader
    def handle_unknown_user(jwt_header: dict, jwt_payload: dict):
        return _unauthorized()
