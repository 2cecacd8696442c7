"""
PhotoStash Backend - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the failure modes of a request.
How:   Each exception carries a human-readable message and an optional context
       dict. Global handlers registered in main.py turn them into
       `{"error": message}` responses with the matching HTTP status.
Who:   Raised by the stores, PhotoService and route helpers.

Exception Hierarchy:
    PhotoStashError (base)
    ├── ValidationError    → 400 Bad Request
    ├── NotFoundError      → 404 Not Found
    ├── FileStorageError   → 500 Internal Server Error
    └── DatabaseError      → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PhotoStashError(Exception):
    """
    Base exception for all PhotoStash application errors.

    Attributes:
        message:  Client-facing error description (returned as `error`)
        context:  Additional debug info (logged, never returned to the client)
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


class ValidationError(PhotoStashError):
    """
    Raised when client input cannot be used.

    When:    Non-numeric photo id, missing `file` upload, malformed form body.
    HTTP:    400 Bad Request
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


class NotFoundError(PhotoStashError):
    """
    Raised when a requested photo row or image file does not exist.

    The message is "<Resource> not found" (e.g. "Photo not found"); the id
    goes into the context only.
    """

    status_code = 404

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


class FileStorageError(PhotoStashError):
    """
    Raised when the image directory cannot be written, read or cleaned.

    When:    Disk full, permission denied, removing a file that is gone.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PhotoStashError):
    """
    Raised when a Record Store operation fails.

    The message stays generic; the driver error text and statement details
    go into `context` and are logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
