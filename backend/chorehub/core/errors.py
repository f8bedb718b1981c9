"""Error Hierarchy — typed, categorized exceptions for all ChoreHub failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"error": {...}}
    - UnauthorizedError carries no household detail: same shape whether the
      household exists or not

Design Decisions:
    - Single hierarchy with ChoreHubError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
    - Malformed pin credentials never raise; verify_pin returns False instead
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    household_id: str | None = None
    stream_key: str | None = None
    event_type: str | None = None
    debug_info: dict[str, Any] | None = None


class ChoreHubError(Exception):
    """Base exception for all ChoreHub errors."""

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

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "household_id": self.context.household_id,
                    "stream_key": self.context.stream_key,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(ChoreHubError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


class UnauthorizedError(ChoreHubError):
    """Pin check failed or household unknown. Deliberately detail-free."""
    def __init__(self):
        super().__init__(
            "Access denied", "UNAUTHORIZED", ErrorCategory.UNAUTHORIZED,
            ErrorSeverity.WARNING, None, 401,
        )


class ForbiddenError(ChoreHubError):
    """Admin pin required for this operation and not supplied correctly."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid admin PIN", "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


class BusinessRuleError(ChoreHubError):
    """Command rejected by a domain rule (invalid invite, self-removal, ...)."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class ConcurrencyError(ChoreHubError):
    """Append precondition failed: the stream is not at the expected version."""
    def __init__(
        self,
        stream_key: str,
        expected: str,
        actual: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.stream_key = stream_key
        super().__init__(
            f"Stream '{stream_key}' expected {expected} but is at version {actual}",
            "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.stream_key = stream_key
        self.expected = expected
        self.actual = actual


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ChoreHubError):
    """Event log or read model storage failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class EventDecodeError(ChoreHubError):
    """Stored payload does not match any fact in the event catalog."""
    def __init__(self, event_type: str, detail: str | None = None):
        ctx = ErrorContext(event_type=event_type)
        if detail:
            ctx.debug_info = {"detail": detail}
        super().__init__(
            f"Cannot decode stored event of type '{event_type}'",
            "EVENT_DECODE_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.event_type = event_type
