"""Error Hierarchy — typed, categorized exceptions for all Pokebin failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Codec errors are fatal to the single encode/decode call that raised them
    - Parser errors (StatValueError) never escape the grammar module
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with PokebinError base: FastAPI global handler catches all
    - StatValueError subclasses ValueError, not PokebinError: it is recovered locally
      and never reaches a response
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
    RECORD = "record"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    paste_id: int | None = None
    field_name: str | None = None
    offset: int | None = None
    debug_info: dict[str, Any] | None = None


class PokebinError(Exception):
    """Base exception for all Pokebin errors."""

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
                    "paste_id": self.context.paste_id,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Record Codec Errors ────────────────────────────────────────

class MalformedRecordError(PokebinError):
    """Stored record bytes do not follow the record layout."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_RECORD", ErrorCategory.RECORD,
            ErrorSeverity.CRITICAL, context, 500,
        )


class RentalTooLongError(PokebinError):
    """Rental code does not fit its 8-bit length prefix."""
    def __init__(self, length: int, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"Rental code is {length} bytes; the limit is {limit}",
            "RENTAL_TOO_LONG", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.length = length
        self.limit = limit


# ─── Parser Errors (recovered locally) ──────────────────────────

class StatValueError(ValueError):
    """Stat digits do not fit an unsigned 32-bit value."""
    def __init__(self, digits: str):
        shown = digits if len(digits) <= 20 else f"{digits[:20]}... ({len(digits)} digits)"
        super().__init__(f"Stat value out of range: {shown}")
        self.digits = digits


# ─── Lookup / Resource Errors ───────────────────────────────────

class LookupTableError(PokebinError):
    """A lookup table file could not be loaded at startup."""
    def __init__(self, table: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Lookup table '{table}' unusable: {reason}",
            "LOOKUP_TABLE_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.table = table


class ResourceNotFoundError(PokebinError):
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

class DatabaseError(PokebinError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
