"""Error Hierarchy — typed, categorized exceptions for all review failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are raised at the point of violation, never clamped or retried
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PerfReviewError base: FastAPI global handler catches all
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    cycle_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class PerfReviewError(Exception):
    """Base exception for all performance review errors."""

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
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "cycle_id": self.context.cycle_id,
                },
            }
        }


# ─── Core Validation & State Errors (400-level) ─────────────────

class InvalidScoreError(PerfReviewError):
    """Pillar score is not an integer in [0, 4]."""
    def __init__(
        self, message: str, pillar: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_SCORE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.pillar = pillar


class InvalidDeadlineOrderError(PerfReviewError):
    """Two adjacent cycle deadlines are not in strict chronological order."""
    def __init__(
        self, earlier_phase: str, later_phase: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{later_phase} deadline must be after {earlier_phase} deadline",
            "INVALID_DEADLINE_ORDER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.earlier_phase = earlier_phase
        self.later_phase = later_phase


class InvalidCycleTransitionError(PerfReviewError):
    """State-machine transition attempted from a state that does not permit it."""
    def __init__(
        self, action: str, current: str, required: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot {action} from {current} status. Must be {required}",
            "INVALID_STATE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.action = action
        self.current = current
        self.required = required


class NoFeedbackError(PerfReviewError):
    """Aggregation attempted on an empty or missing feedback collection."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No peer feedback available for aggregation",
            "NO_PEER_FEEDBACK", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Workflow Errors (raised by the submission/lifecycle workflows) ──

class DeadlinePassedError(PerfReviewError):
    """Submission attempted after the phase deadline."""
    def __init__(self, phase: str, context: ErrorContext | None = None):
        super().__init__(
            f"{phase} deadline has passed",
            "DEADLINE_PASSED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.phase = phase


class NominationNotActiveError(PerfReviewError):
    """No active nomination links the reviewer to the reviewee."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "NOMINATION_NOT_ACTIVE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 403,
        )


class DuplicateFeedbackError(PerfReviewError):
    """Reviewer already submitted feedback for this reviewee in this cycle."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Peer feedback already submitted for this reviewee",
            "FEEDBACK_ALREADY_SUBMITTED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class InvalidNominationError(PerfReviewError):
    """Peer nomination request violates a nomination rule."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_NOMINATION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class ActiveCycleConflictError(PerfReviewError):
    """Another review cycle is already ACTIVE."""
    def __init__(self, active_cycle_id: str, context: ErrorContext | None = None):
        super().__init__(
            "Another review cycle is already active. Please complete it first.",
            "ACTIVE_CYCLE_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.active_cycle_id = active_cycle_id


class ResourceNotFoundError(PerfReviewError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PerfReviewError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
