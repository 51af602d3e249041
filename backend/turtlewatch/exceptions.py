"""
TurtleWatch Backend - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions, one per failure class of the API.
How:   Each exception carries a client-safe message and an optional context
       dict. Exception handlers registered in main.py turn them into
       `{"error": message}` responses with the matching status code.
Who:   Raised by services; caught by the handlers in main.py.

Exception Hierarchy:
    TurtleWatchError (base)
    ├── ValidationError   → 400 Bad Request (missing/invalid field)
    ├── ConflictError     → 400 Bad Request (duplicate email / nest code)
    ├── AuthError         → 401 Unauthorized (bad credentials)
    ├── ForbiddenError    → 403 Forbidden (inactive account)
    ├── NotFoundError     → 404 Not Found
    └── InternalError     → 500 Internal Server Error
"""

from typing import Any, Dict, Iterable, Optional


class TurtleWatchError(Exception):
    """
    Base exception for all TurtleWatch application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TurtleWatchError):
    """
    Raised when a request payload is missing required fields or carries
    a value outside its allowed set.

    Example response:
        {"error": "Missing required fields: species, scl_max"}
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field

    @classmethod
    def missing(cls, fields: Iterable[str]) -> "ValidationError":
        names = list(fields)
        return cls(
            message=f"Missing required fields: {', '.join(names)}",
            context={"missing": names},
        )


class ConflictError(TurtleWatchError):
    """
    Raised when an insert/update hits a uniqueness constraint.

    HTTP 400 (not 409): clients of this API treat duplicates as input errors.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Record already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthError(TurtleWatchError):
    """
    Raised when login credentials do not match.

    The message is identical for an unknown email and a wrong password.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Invalid email or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(TurtleWatchError):
    """Raised when a valid login belongs to a deactivated account."""

    status_code = 403

    def __init__(
        self,
        message: str = "Account is inactive",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(TurtleWatchError):
    """
    Raised when a requested record (or a referenced parent) does not exist.

    When:    GET /api/turtles/{id} with an unknown id, nest event for an
             unknown nest code, survey event for an unknown turtle.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Record",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} '{resource_id}' not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource


class InternalError(TurtleWatchError):
    """
    Raised when a database operation fails unexpectedly.

    Security Note:
        The message returned to the client is always generic.
        Driver errors, SQL and constraint names are logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
