"""
Centralized custom exception definitions for the blog backend.

Each exception inherits from BaseAppError, which itself extends Werkzeug's
HTTPException, allowing clean integration with Flask's error system and
JSON-formatted API responses.

Domain Groups:
--------------
1. Validation Errors (400)
2. Authentication Errors (401)
3. Database Errors (404, 409, 503)
4. Anything else is rendered as a 500 by middleware.handlers
"""

from werkzeug.exceptions import HTTPException


class BaseAppError(HTTPException):
    """Root application error, base for all custom exceptions."""
    code = 500
    description = "Application error"

    def __init__(self, message=None, details=None, code=None):
        super().__init__(description=message or self.description)
        self.message = message or self.description
        self.details = details or {}
        if code:
            self.code = code

    def to_dict(self):
        """Serialize error info into a JSON-safe dictionary."""
        return {
            "success": False,
            "status": "error",
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# ==============================================================================
# 1. VALIDATION ERRORS (HTTP 400)
# ==============================================================================

class ValidationError(BaseAppError):
    code = 400
    description = "Validation error"


class InvalidIdentifierError(ValidationError):
    description = "Invalid identifier"


# ==============================================================================
# 2. AUTHENTICATION ERRORS (HTTP 401)
# ==============================================================================

class AuthenticationError(BaseAppError):
    code = 401
    description = "Authentication required"


# ==============================================================================
# 3. DATABASE ERRORS (HTTP 404, 409, 503)
# ==============================================================================

class RecordNotFoundError(BaseAppError):
    code = 404
    description = "Requested record not found"


class DuplicateRecordError(BaseAppError):
    code = 409
    description = "Duplicate record detected"


class DatabaseError(BaseAppError):
    code = 503
    description = "Database operation failed"
