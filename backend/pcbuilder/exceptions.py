"""
PC Builder Catalog API — Custom Exception Hierarchy
====================================================

What:  Application-specific exceptions for the error scenarios of the catalog.
Why:   Each exception maps to one HTTP status in the global handlers
       (registered in main.py), so services never build responses themselves
       and internal details never reach the client.
How:   Each exception carries a user-safe message and an optional context dict
       that is logged server-side only.

Exception Hierarchy:
    CatalogError (base)
    ├── ValidationError      → 400 Bad Request (malformed identifier)
    ├── NotFoundError        → 404 Not Found
    ├── DatabaseError        → 500 Internal Server Error (generic message)
    └── ConfigurationError   → fatal at startup, never served
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all catalog application errors.

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


class ValidationError(CatalogError):
    """
    Raised when client input fails validation.

    When:    GET /api/v1/products/{id} with an id that is not a UUID.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "'abc' is not a valid product id",
            "details": {"field": "product_id"}
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


class NotFoundError(CatalogError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; the service layer converts that
    into this exception so the route stays free of status-code logic.
    HTTP:    404 Not Found
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


class DatabaseError(CatalogError):
    """
    Raised when a database operation fails or returns unusable data.

    When:    Connection lost mid-query, query error, or a stored document that
             does not fit the schema (e.g. a review with a non-numeric rating).
    HTTP:    500 Internal Server Error

    The client always gets a generic message; table names and driver errors
    stay in the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(CatalogError):
    """Raised at startup when required settings are missing or unusable."""

    def __init__(
        self,
        message: str = "Configuration validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
