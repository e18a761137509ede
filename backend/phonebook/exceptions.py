"""
Phonebook Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the contact directory.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       turn them into the HTTP responses the API promises.
Who:   Raised by the service layer; caught by global handlers.

Exception Hierarchy:
    PhonebookError (base)
    ├── ValidationError   → 400 Bad Request, body {"error": message}
    └── NotFoundError     → 404 Not Found, empty body
"""

from typing import Any, Dict, Optional


class PhonebookError(Exception):
    """
    Base exception for all Phonebook application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PhonebookError):
    """
    Raised when a create request fails a presence or uniqueness check.

    HTTP:    400 Bad Request

    The message is returned verbatim as the `error` field, so it must be one
    of the documented strings ("name is missing", "number is missing",
    "name must be unique").
    """

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


class NotFoundError(PhonebookError):
    """
    Raised when a requested contact does not exist.

    HTTP:    404 Not Found (empty body; the message is only logged)
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
