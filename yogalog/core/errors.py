"""Error Hierarchy — typed, categorized exceptions for all YogaLog failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - Ownership failures raise ResourceNotFoundError, never a distinct "forbidden" error
    - to_response() produces the REST envelope; structured details live in `details`

Design Decisions:
    - Single hierarchy with YogaLogError base: FastAPI global handler catches all
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
    UNAUTHORIZED = "unauthorized"
    COMPLETENESS = "completeness"
    MISSING_REFERENCE_DATA = "missing_reference_data"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: str | None = None
    score_card_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class YogaLogError(Exception):
    """Base exception for all YogaLog errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.context.user_message or self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "session_id": self.context.session_id,
                "score_card_id": self.context.score_card_id,
            },
        }
        if self.details is not None:
            body["details"] = self.details
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(YogaLogError):
    """Input shape or range is invalid."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None, code: str = "VALIDATION_ERROR",
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
            details={"field": field} if field else None,
        )
        self.field = field


class CutoffNotFoundError(ValidationFailedError):
    """A cutoff slug does not match any pose in the segment."""
    def __init__(self, slug: str, segment: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cutoff slug '{slug}' not found in segment {segment}",
            field="up_to_slug", context=context, code="CUTOFF_NOT_FOUND",
        )
        self.slug = slug
        self.segment = segment


class InvalidRangeError(ValidationFailedError):
    """A slice would end before it starts."""
    def __init__(
        self, from_slug: str, up_to_slug: str, segment: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Invalid range in {segment}: '{up_to_slug}' occurs before '{from_slug}'",
            field="from_slug", context=context, code="INVALID_RANGE",
        )


class UnknownSegmentError(ValidationFailedError):
    """A custom block names a segment that is not a series-specific block."""
    def __init__(self, segment: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown segment '{segment}' for a custom block",
            field="segment", context=context, code="UNKNOWN_SEGMENT",
        )


class UnauthorizedError(YogaLogError):
    """No caller identity was supplied."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required",
            "UNAUTHORIZED", ErrorCategory.UNAUTHORIZED,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(YogaLogError):
    """Requested resource does not exist or is not owned by the caller."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class IncompleteSessionError(YogaLogError):
    """Publish attempted while non-skipped cards still have unrated axes."""
    def __init__(self, incomplete_cards: list[dict], context: ErrorContext | None = None):
        super().__init__(
            f"{len(incomplete_cards)} score card(s) are missing ratings",
            "SESSION_INCOMPLETE", ErrorCategory.COMPLETENESS,
            ErrorSeverity.WARNING, context, 422,
            details={"incomplete_cards": incomplete_cards},
        )
        self.incomplete_cards = incomplete_cards


class InvalidTransitionError(YogaLogError):
    """Status change not allowed from the current state."""
    def __init__(self, current: str, target: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot move session from {current} to {target}",
            "INVALID_TRANSITION", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class ConcurrencyError(YogaLogError):
    """Concurrent modification detected."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class MissingReferenceDataError(YogaLogError):
    """Plan references pose slugs absent from the seeded catalog."""
    def __init__(self, missing_slugs: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Missing pose(s) for slugs: {', '.join(missing_slugs)}",
            "MISSING_REFERENCE_DATA", ErrorCategory.MISSING_REFERENCE_DATA,
            ErrorSeverity.CRITICAL, context, 500,
            details={"missing_slugs": missing_slugs},
        )
        self.missing_slugs = missing_slugs


class DatabaseError(YogaLogError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
