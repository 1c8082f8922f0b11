"""Error Hierarchy — typed, categorized exceptions for all config store failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No storage engine details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ConfigStoreError base: FastAPI global handler catches all
    - StorageError carries a closed StorageFailure kind: services branch on the
      kind instead of inspecting driver exceptions or message strings
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from configstore.core.domain_types import StorageFailure


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
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    project: str | None = None
    name: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ConfigStoreError(Exception):
    """Base exception for all config store errors."""

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
                    "project": self.context.project,
                    "name": self.context.name,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class BadRequestError(ConfigStoreError):
    """Malformed request: wrong variant, failed validation, identity mismatch."""
    def __init__(
        self, message: str, code: str = "BAD_REQUEST",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"bad request: {message}", code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.detail = message


class SchemaValidationError(BadRequestError):
    """Datasource rejected by the schema validator."""
    def __init__(
        self, message: str, fields: list[str] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message, "SCHEMA_VALIDATION_ERROR", context)
        self.fields = fields or []


class ConflictError(ConfigStoreError):
    """A resource with the same (project, name) already exists."""
    def __init__(self, resource_type: str, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} '{name}' already exists",
            "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class ResourceNotFoundError(ConfigStoreError):
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

class InternalError(ConfigStoreError):
    """Unexpected failure. The cause is logged, never returned."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "internal server error",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


class StorageError(ConfigStoreError):
    """Repository operation failed with a classified condition."""
    def __init__(
        self, kind: StorageFailure, message: str, operation: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.kind = kind
        self.operation = operation

    @property
    def is_key_conflict(self) -> bool:
        return self.kind is StorageFailure.KEY_CONFLICT

    @property
    def is_key_not_found(self) -> bool:
        return self.kind is StorageFailure.KEY_NOT_FOUND
