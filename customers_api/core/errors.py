"""Error Hierarchy — typed, kind-tagged exceptions for every customer failure mode.

Invariants:
    - Every error has a code (str), kind (ErrorKind), severity (ErrorSeverity)
    - Errors never carry HTTP status codes; the transport maps ErrorKind → status
    - to_response() produces the REST error envelope
    - DuplicateKeyError is a store-level signal, not a domain error: the service
      consumes it and re-raises ConflictError

Design Decisions:
    - Single hierarchy with CustomerApiError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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


class ErrorKind(str, Enum):
    """Failure taxonomy. The transport owns the kind → status table."""
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"
    DATABASE_UNAVAILABLE = "database_unavailable"
    RATE_LIMITED = "rate_limited"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    customer_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class CustomerApiError(Exception):
    """Base exception for all customer API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "status": "error",
            "message": self.message,
            "error": {
                "code": self.code,
                "kind": self.kind.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Domain Errors ──────────────────────────────────────────────

class InvalidArgumentError(CustomerApiError):
    """Malformed identifier, pagination or field value. Caller-correctable."""
    def __init__(
        self, message: str, field: str | None = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorKind.INVALID_ARGUMENT,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class ResourceNotFoundError(CustomerApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorKind.NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(CustomerApiError):
    """Unique field collision (email)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorKind.CONFLICT,
            ErrorSeverity.WARNING, context,
        )


class InternalError(CustomerApiError):
    """Store affected zero rows after a successful existence check."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorKind.INTERNAL,
            ErrorSeverity.CRITICAL, context,
        )


# ─── Infrastructure Errors ──────────────────────────────────────

class RateLimitExceededError(CustomerApiError):
    """Client exceeded its request quota for the current window."""
    def __init__(self, retry_after: int, context: ErrorContext | None = None):
        super().__init__(
            "Too many requests from this IP, please try again later.",
            "RATE_LIMITED", ErrorKind.RATE_LIMITED,
            ErrorSeverity.WARNING, context,
        )
        self.retry_after = retry_after


class DatabaseError(CustomerApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorKind.DATABASE_UNAVAILABLE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation


class DuplicateKeyError(Exception):
    """Store-level unique constraint violation."""

    def __init__(self, constraint: str = "email"):
        super().__init__(f"Unique constraint violated: {constraint}")
        self.constraint = constraint
