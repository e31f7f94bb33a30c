"""
Product Catalog Backend — Custom Exception Hierarchy
=====================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-facing message and an optional context
       dict. The ordered table in `catalog.errors` maps them to HTTP status
       codes and JSON bodies.
Who:   Raised by the repository and routes; translated by `catalog.errors`.

Exception Hierarchy:
    CatalogError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
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
    Raised when a product payload fails validation.

    HTTP:    400 Bad Request
    Example: {"message": "Product validation failed: name: Field required"}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(CatalogError):
    """
    Raised when no record exists at the requested identifier.

    Covers malformed identifiers too: an id that could never have been
    assigned by the store is reported exactly like a missing one.

    HTTP:    404 Not Found
    Example: {"message": "Product with id 6436b60c28268a437baf0b7e not found!"}
    """

    def __init__(
        self,
        resource: str = "Product",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found!"
        if resource_id is not None:
            message = f"{resource} with id {resource_id} not found!"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(CatalogError):
    """
    Raised when a store operation fails unexpectedly.

    HTTP:    500 Internal Server Error
    The response body is always generic; the original error type and the
    operation are kept in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
