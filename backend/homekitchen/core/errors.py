"""Error Hierarchy — typed, categorized exceptions for every marketplace failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller-correctable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every endpoint
    - NotFoundError never says whether the record exists for someone else

Design Decisions:
    - Single hierarchy with HomeKitchenError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Lifecycle conflicts (not cancellable, invalid transition, already processed) are 409:
      the request was well-formed, the record's state disagrees with it
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    order_id: str | None = None
    kitchen_id: str | None = None
    request_id: str | None = None
    current_status: str | None = None
    debug_info: dict[str, Any] | None = None


class HomeKitchenError(Exception):
    """Base exception for all marketplace core errors."""

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
                    "order_id": self.context.order_id,
                    "kitchen_id": self.context.kitchen_id,
                    "request_id": self.context.request_id,
                    "current_status": self.context.current_status,
                },
            }
        }


# ─── Delivery Errors (400-level, user-correctable) ──────────────

class InvalidCoordinateError(HomeKitchenError):
    """Latitude or longitude outside its valid range."""
    def __init__(self, field: str, value: float, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid {field}: {value}",
            "INVALID_COORDINATE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field
        self.value = value


# Missing coordinates are not an exception: quote_delivery returns an unavailable
# quote with QuoteUnavailableReason.MISSING_COORDINATES (core/delivery_pricing.py).


# ─── Lifecycle Errors ───────────────────────────────────────────

class NotFoundError(HomeKitchenError):
    """Record does not exist or is not owned by the caller."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ReasonRequiredError(HomeKitchenError):
    """Cancellation attempted without a reason."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cancellation reason is required",
            "REASON_REQUIRED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class NotCancellableError(HomeKitchenError):
    """Order is past the point where the buyer may cancel."""
    def __init__(self, current_status: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.current_status = current_status
        super().__init__(
            f"Order cannot be cancelled in status {current_status}",
            "NOT_CANCELLABLE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.current_status = current_status


class InvalidTransitionError(HomeKitchenError):
    """Requested order status change is not an edge of the lifecycle."""
    def __init__(
        self, current_status: str, target_status: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.current_status = current_status
        super().__init__(
            f"Invalid status transition from {current_status} to {target_status}",
            "INVALID_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.current_status = current_status
        self.target_status = target_status


class AlreadyProcessedError(HomeKitchenError):
    """Subscription request has already been approved or rejected."""
    def __init__(self, current_status: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.current_status = current_status
        super().__init__(
            f"Subscription request is already {current_status.lower()}",
            "ALREADY_PROCESSED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.current_status = current_status


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(HomeKitchenError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ConcurrencyError(HomeKitchenError):
    """Concurrent modification detected and the winner's state could not be read back."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
