"""
Menu API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       structured JSON error responses with the matching HTTP status code.
Who:   Raised by services; caught by the global handlers.

Exception Hierarchy:
    MenuAPIError (base)
    ├── ValidationError           → 400 Bad Request
    ├── MalformedIdentifierError  → 400 Bad Request
    ├── AuthenticationError       → 401 Unauthorized
    ├── NotFoundError             → 404 Not Found
    └── StorageError              → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class MenuAPIError(Exception):
    """
    Base exception for all Menu API errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MenuAPIError):
    """
    Raised when a dish payload fails validation.

    When:    Missing name/price on create, non-numeric price, or a bulk
             request in which no candidate survives filtering.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Name and Price are required",
            "details": {"missing": ["price"]}
        }
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


class MalformedIdentifierError(MenuAPIError):
    """
    Raised when a dish identifier is neither a UUID nor an integer.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        identifier: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["identifier"] = identifier
        super().__init__(
            message=f"Invalid dish identifier '{identifier}'. Expected a UUID or an integer.",
            context=ctx,
        )
        self.identifier = identifier


class AuthenticationError(MenuAPIError):
    """Raised when admin credentials do not match. HTTP: 401 Unauthorized."""

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(MenuAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/dishes/{id} with an identifier that matches no dish.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the service layer converts
    that None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(MenuAPIError):
    """
    Raised when a database operation fails.

    When:    Connection lost, query failure, constraint violation.
    HTTP:    500 Internal Server Error

    The response always carries a generic message. The context (operation,
    underlying exception type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
