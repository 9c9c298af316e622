from __future__ import annotations

import logging
import uuid

from flask import current_app, g, jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)

OPERATION_FAILED_MESSAGE = "Something went wrong, please try again later."


class ValidationError(Exception):
    """Input rejected before any transaction was opened."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        first = next(iter(errors.values()), ["The given data was invalid."])
        super().__init__(first[0])

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})


class OperationFailure(Exception):
    """A mutating operation failed and its transaction was rolled back."""


class StoragePathError(ValueError):
    """A storage path escapes the storage root."""


def _json_error(status: int, message: str | None = None):
    return (
        jsonify(
            error={
                "code": status,
                "message": message or request.environ.get("werkzeug.exception", "error"),
                "path": request.path,
                "request_id": getattr(g, "request_id", None),
            }
        ),
        status,
    )


def register_instrumentation(app):
    @app.before_request
    def _assign_request_id():
        rid = request.headers.get("X-Request-Id") or uuid.uuid4().hex
        g.request_id = rid

    @app.after_request
    def _attach_request_id(resp):
        rid = getattr(g, "request_id", None)
        if rid:
            resp.headers["X-Request-Id"] = rid
        return resp


def register_error_handlers(app):
    register_instrumentation(app)

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify(message=str(e), errors=e.errors), 422

    @app.errorhandler(OperationFailure)
    def _operation_failure(e: OperationFailure):
        cause = e.__cause__ or e
        if current_app.config.get("EXPOSE_OPERATION_ERRORS", True):
            detail = str(cause)
        else:
            detail = type(cause).__name__
        return jsonify(message=OPERATION_FAILED_MESSAGE, error=detail), 400

    @app.errorhandler(400)
    def _400(e):  # pragma: no cover - message comes from Werkzeug
        return _json_error(400, getattr(e, "description", "Bad Request"))

    @app.errorhandler(404)
    def _404(e):
        return _json_error(404, getattr(e, "description", "Not Found"))

    @app.errorhandler(405)
    def _405(e):
        return _json_error(405, getattr(e, "description", "Method Not Allowed"))

    @app.errorhandler(413)
    def _413(e):
        return _json_error(413, getattr(e, "description", "Payload Too Large"))

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return _json_error(e.code or 500, e.description)

    @app.errorhandler(Exception)
    def _500(e):
        logger.exception("Unhandled exception | rid=%s", getattr(g, "request_id", "-"), exc_info=e)
        return _json_error(500, "Internal Server Error")
