"""Error Hierarchy: typed, categorized exceptions for every User API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Gateway implementations raise only GatewayError (or subclasses) for backend failures
    - NotFoundError and ConflictError are distinct subclasses so handlers can
      pattern-match on the kind instead of guessing from a generic exception
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UserApiError base: one global handler shape
    - HTTP status is NOT stored on gateway errors: the same NotFoundError maps to
      404, 400 or 500 depending on the operation (see core/map_outcomes.py)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from user_api.core.domain_types import Operation, UserId


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
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    operation: Operation | None = None


class UserApiError(Exception):
    """Base exception for all User API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "user_id": self.context.user_id,
            "operation": (
                self.context.operation.value if self.context.operation else None
            ),
        }


# ─── Client Input Errors ────────────────────────────────────────

class UserValidationError(UserApiError):
    """Request body failed one or more field rules."""
    def __init__(self, violations: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Invalid user payload: {'; '.join(violations)}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )
        self.violations = violations


# ─── Persistence Errors ─────────────────────────────────────────

class GatewayError(UserApiError):
    """Persistence operation failed for a reason other than not-found or conflict."""
    def __init__(
        self,
        message: str,
        operation: Operation,
        code: str = "GATEWAY_ERROR",
        category: ErrorCategory = ErrorCategory.DATABASE,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        user_id: str | None = None,
    ):
        super().__init__(
            message, code, category, severity,
            ErrorContext(user_id=user_id, operation=operation),
        )
        self.operation = operation


class NotFoundError(GatewayError):
    """No User with the given id exists."""
    def __init__(self, user_id: UserId, operation: Operation):
        super().__init__(
            f"User '{user_id}' not found", operation,
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, user_id,
        )
        self.user_id = user_id


class ConflictError(GatewayError):
    """A uniqueness constraint rejected the write."""
    def __init__(
        self, field: str, operation: Operation, user_id: str | None = None,
    ):
        super().__init__(
            f"Unique constraint violated on '{field}'", operation,
            "UNIQUE_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, user_id,
        )
        self.field = field
