"""
Notes API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for each failure a request can hit.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by NoteService and the stores; caught by the global handlers.

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError   → 400 Bad Request (missing or malformed fields)
    ├── NotFoundError     → 400 Bad Request (referenced user/note absent)
    ├── EmptyResultError  → 400 Bad Request (nothing to list)
    ├── ConflictError     → 409 Conflict (duplicate note title)
    └── DatabaseError     → 500 Internal Server Error

    Referential failures are reported as 400, not 404: the request body
    named a user or note that does not exist, so the client sent bad data.
"""

from typing import Any, Dict, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, and returned as `details`
                  only by handlers that opt in)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAPIError):
    """
    Raised when the request body is missing fields or carries wrong types.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "All fields are required",
            "details": {"missing": ["title"]}
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


class NotFoundError(NotesAPIError):
    """
    Raised when a referenced user or note does not exist.

    HTTP:    400 Bad Request

    The stores return None for missing records; the service converts
    that None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class EmptyResultError(NotesAPIError):
    """Raised when a listing has nothing to return. HTTP: 400 Bad Request."""

    def __init__(
        self,
        message: str = "No content to return",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(NotesAPIError):
    """
    Raised when a write would break a uniqueness rule.

    When:    Create/update with a title already used by another note, either
             caught by the read-before-write check or by the unique index on
             notes.title when two writers race past the check.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(NotesAPIError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Detailed error
    info (statement, constraint name, driver error) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
