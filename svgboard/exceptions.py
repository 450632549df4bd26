"""
SVGboard Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the project/snapshot error cases.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    SVGboardError (base)
    ├── ValidationError              → 400 Bad Request
    ├── NotFoundError                → 404 Not Found
    │   └── SnapshotOwnershipError   → 404 Not Found (snapshot under another project)
    ├── ConflictError                → 409 Conflict
    └── DatabaseError                → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class SVGboardError(Exception):
    """
    Base exception for all SVGboard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SVGboardError):
    """
    Raised when client input fails validation.

    When:    Missing or blank title, missing shapesData, malformed body.
    HTTP:    400 Bad Request
    """

    error_code = "validation_error"

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


class NotFoundError(SVGboardError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; the service layer converts
    that None into this exception.
    HTTP:    404 Not Found
    """

    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
        message: Optional[str] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id is not None:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class SnapshotOwnershipError(NotFoundError):
    """
    Raised when a snapshot exists but belongs to a different project than
    the one named in the request path.

    HTTP:    404 Not Found, with its own error code so clients (and tests)
             can tell it apart from a missing snapshot.
    """

    error_code = "snapshot_project_mismatch"

    def __init__(self, snapshot_id: int, project_id: int):
        super().__init__(
            resource="snapshot",
            resource_id=snapshot_id,
            context={"project_id": str(project_id)},
            message=f"snapshot with ID '{snapshot_id}' does not belong to project '{project_id}'",
        )
        self.snapshot_id = snapshot_id
        self.project_id = project_id


class ConflictError(SVGboardError):
    """
    Raised when a request conflicts with the current state of a resource.

    When:    Deleting a project that still has snapshots while the
             `forbid` delete policy is configured.
    HTTP:    409 Conflict
    """

    error_code = "conflict"

    def __init__(
        self,
        message: str = "The request conflicts with the current state of the resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(SVGboardError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; the detailed
    error is logged server-side only.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
