"""
Global Flask error handling middleware.

All exceptions (custom or unexpected) are returned as JSON payloads:
{
    "success": false,
    "status": "error",
    "error": "ErrorClassName",
    "message": "Human readable message",
    "details": { ... optional context ... }
}
"""

import logging
import os
import traceback

from flask import jsonify
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError
from werkzeug.exceptions import HTTPException

from middleware.errors import (
    BaseAppError,
    DatabaseError,
    DuplicateRecordError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_payload(name, message, details=None):
    return {
        "success": False,
        "status": "error",
        "error": name,
        "message": message,
        "details": details or {},
    }


def register_error_handlers(app):
    """Attach all JSON error handlers to a Flask app instance."""

    @app.errorhandler(BaseAppError)
    def handle_custom_error(err):
        """Handle custom, domain-specific errors."""
        logger.warning("%s: %s", err.__class__.__name__, err.message)
        response = jsonify(err.to_dict())
        response.status_code = err.code
        return response

    @app.errorhandler(PydanticValidationError)
    def handle_model_validation_error(err):
        """Payloads that fail model validation are client errors."""
        wrapped = ValidationError(
            "Invalid request payload",
            details={"errors": err.errors(
                include_url=False, include_context=False, include_input=False
            )},
        )
        return handle_custom_error(wrapped)

    @app.errorhandler(DuplicateKeyError)
    def handle_duplicate_key(err):
        return handle_custom_error(DuplicateRecordError())

    @app.errorhandler(PyMongoError)
    def handle_database_error(err):
        logger.error("Database operation failed: %s", err, exc_info=True)
        return handle_custom_error(DatabaseError())

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        """Render werkzeug errors (abort(404), 405, ...) as JSON."""
        payload = _error_payload(err.__class__.__name__, err.description or err.name)
        return jsonify(payload), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        """Catch-all handler for unexpected exceptions."""
        logger.error("Unhandled exception: %s", err, exc_info=True)
        details = {}
        if app.debug or os.getenv("FLASK_DEBUG") == "1":
            details["traceback"] = traceback.format_exc()

        payload = _error_payload(
            err.__class__.__name__,
            str(err) or "Unexpected internal error",
            details,
        )
        return jsonify(payload), 500
