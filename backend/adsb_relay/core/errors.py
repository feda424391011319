"""Error Hierarchy - typed, categorized exceptions for every relay failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Payload errors are recovered by the relay handler; transport errors reach
      the global handler and become 502/504 responses
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with RelayError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    UPSTREAM_PAYLOAD = "upstream_payload"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    upstream_url: str | None = None


class RelayError(Exception):
    """Base exception for all relay errors."""

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
                    "upstream_url": self.context.upstream_url,
                },
            }
        }


# ─── Payload Errors (recovered locally) ─────────────────────────

INVALID_FLIGHT_MESSAGE = "Invalid Flight"


class InvalidUpstreamPayloadError(RelayError):
    """Upstream body is empty or not syntactically valid JSON."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            INVALID_FLIGHT_MESSAGE, "INVALID_FLIGHT", ErrorCategory.UPSTREAM_PAYLOAD,
            ErrorSeverity.WARNING, context, 404,
        )
        self.reason = reason


# ─── Transport Errors (502/504) ─────────────────────────────────

class UpstreamUnavailableError(RelayError):
    """Upstream could not be reached (DNS, refused connection, protocol error)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Upstream unavailable: {message}",
            "UPSTREAM_UNAVAILABLE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )


class UpstreamTimeoutError(RelayError):
    """Upstream did not answer within the configured timeout."""
    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"Upstream did not respond within {timeout_seconds:g}s",
            "UPSTREAM_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.CRITICAL, context, 504,
        )
        self.timeout_seconds = timeout_seconds
