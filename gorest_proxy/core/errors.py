"""Error Hierarchy — typed, categorized exceptions for all proxy failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400/404) are recoverable; infrastructure errors (500) are critical
    - to_response() produces the REST envelope used by every error response

Design Decisions:
    - Single hierarchy with GoRestProxyError base: the API layer maps all of them
      through the same normalizer (ADR: uniform error shape)
    - Expected conditions (bad id, not found, invalid fields) are normally returned
      as outcome variants (core/outcomes.py); these classes exist for the
      raise-path and for building the envelope
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    page: int | None = None


class GoRestProxyError(Exception):
    """Base exception for all proxy errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self, details: list[dict] | None = None) -> dict:
        """Convert to standardized REST error response."""
        body: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "status": self.http_status,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if details:
            body["details"] = details
        return {"error": body}


# ─── Client Errors (400-level) ──────────────────────────────────

class ClientInputError(GoRestProxyError):
    """Malformed id, missing required field, or invalid enum value."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CLIENT_INPUT_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class ResourceNotFoundError(GoRestProxyError):
    """Requested record does not exist, locally or on GoREST."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(GoRestProxyError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class RemoteAPIError(GoRestProxyError):
    """GoREST call failed or returned an unusable payload."""
    def __init__(
        self,
        message: str,
        remote_status: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"GoREST API error: {message}",
            "REMOTE_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.remote_status = remote_status

