"""Error Hierarchy — typed, categorized exceptions for all wardrobe calendar failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - Ownership denials are NOT errors here: the service returns them as values
      (core/enforce_ownership.Denied); only the HTTP layer turns them into 404s

Design Decisions:
    - Single hierarchy with WardrobeError base: FastAPI global handler catches all
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


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    day_plan_id: str | None = None
    entity_kind: str | None = None
    attempt: int | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class WardrobeError(Exception):
    """Base exception for all wardrobe calendar errors."""

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

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "day_plan_id": self.context.day_plan_id,
                    "entity_kind": self.context.entity_kind,
                    "attempt": self.context.attempt,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class AuthenticationError(WardrobeError):
    """Request carries no usable user identity."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "NOT_AUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context, 401,
        )


class ResourceNotFoundError(WardrobeError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class DayPlanNotFoundError(ResourceNotFoundError):
    """Day plan missing or owned by someone else (presented identically)."""
    def __init__(self, day_plan_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.day_plan_id = day_plan_id
        super().__init__("DayPlan", day_plan_id, ctx)


class ConcurrencyError(WardrobeError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class PersistentConflictError(ConcurrencyError):
    """Conflict still present after the bounded retry."""
    def __init__(
        self,
        day_plan_id: str,
        attempts: int,
        retry_after_ms: int | None = 250,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.day_plan_id = day_plan_id
        ctx.attempt = attempts
        ctx.retry_after_ms = retry_after_ms
        ctx.user_message = "The day plan was changed concurrently. Try again."
        super().__init__(
            f"Day plan {day_plan_id} still conflicting after {attempts} attempt(s)",
            ctx,
        )
        self.code = "PERSISTENT_CONFLICT"
        self.severity = ErrorSeverity.ERROR
        self.attempts = attempts


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(WardrobeError):
    """Database unreachable or the operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
