"""
Application error taxonomy.

Services raise these; the handler registered in ``ferrecloud.main`` renders
them as ``{"error": {...}}`` with the matching HTTP status.
"""

from datetime import datetime, timezone
from typing import Any, Optional


class AppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        code: Error code (e.g., "PRICE_UPDATE_LOG_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp,
            }
        }


class ParseError(AppError):
    """Uploaded file could not be read (400)."""

    def __init__(
        self,
        message: str = "Could not read file",
        details: Optional[dict] = None,
    ):
        super().__init__(
            code="PARSE_ERROR",
            message=message,
            status_code=400,
            details=details,
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details,
        )


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: Any,
        code: Optional[str] = None,
    ):
        super().__init__(
            code=code or f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier},
        )


class InvalidStateError(AppError):
    """Operation not allowed in the resource's current state (409)."""

    def __init__(
        self,
        message: str,
        current_state: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        extra = {"current_state": current_state} if current_state else {}
        super().__init__(
            code="INVALID_STATE",
            message=message,
            status_code=409,
            details={**extra, **(details or {})},
        )


class StorageError(AppError):
    """Persistence failed and the unit of work was rolled back (500)."""

    def __init__(
        self,
        operation: str,
        message: str = "database operation failed",
        details: Optional[dict] = None,
    ):
        super().__init__(
            code="STORAGE_ERROR",
            message=f"Storage {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})},
        )
