"""Error Hierarchy — typed, categorized exceptions for all villa API failure modes.

Invariants:
    - Every error class fixes its code, category, severity, and http_status
    - 4xx errors describe the request; 5xx errors describe the service and are CRITICAL
    - to_response() produces the same APIResponse envelope shape the routes return
    - str(error) is the user-facing message (the handler boundary stringifies errors as-is)

Design Decisions:
    - Single hierarchy with VillaApiError base: one global handler renders all of them
    - Classification lives on the class, so raising sites pass only what varies
    - ErrorContext carries who/what/which villa for logs; it is never sent to clients
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Where an error happened, for structured logs."""
    villa_no: int | None = None
    operation: str | None = None
    username: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class VillaApiError(Exception):
    """Base exception for all villa API errors."""

    code = "INTERNAL_ERROR"
    category: ErrorCategory
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Render as the failed APIResponse envelope (camelCase wire names)."""
        return {
            "isSuccess": False,
            "statusCode": self.http_status,
            "result": None,
            "errorMessages": [self.message],
        }

    def log_extra(self, **fields: Any) -> dict[str, Any]:
        """extra= payload for logging calls; unset context fields are dropped."""
        extra = {
            k: v for k, v in asdict(self.context).items()
            if v is not None and k != "timestamp"
        }
        extra["error_code"] = self.code
        extra.update(fields)
        return extra


# ─── Request Errors (400-level) ─────────────────────────────────

class ResourceNotFoundError(VillaApiError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(self, resource_type: str, resource_id: str, context: ErrorContext | None = None):
        super().__init__(f"{resource_type} '{resource_id}' not found", context)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(VillaApiError):
    """Natural key already taken; raised by storage when a concurrent insert won."""
    code = "CONFLICT"
    category = ErrorCategory.CONFLICT
    http_status = 409

    def __init__(self, resource_type: str, resource_id: str, context: ErrorContext | None = None):
        super().__init__(f"{resource_type} '{resource_id}' already exists", context)
        self.resource_type = resource_type
        self.resource_id = resource_id


class AuthenticationError(VillaApiError):
    code = "NOT_AUTHENTICATED"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 401

    def __init__(self, message: str = "Not authenticated", context: ErrorContext | None = None):
        super().__init__(message, context)


class AuthorizationError(VillaApiError):
    """Authenticated principal lacks the role an operation requires."""
    code = "FORBIDDEN"
    category = ErrorCategory.AUTHORIZATION
    severity = ErrorSeverity.WARNING
    http_status = 403

    def __init__(self, required_role: str, context: ErrorContext | None = None):
        super().__init__(f"Access denied. Required role: {required_role}", context)
        self.required_role = required_role


# ─── Service Errors (500-level) ─────────────────────────────────

class DatabaseError(VillaApiError):
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(message, context or ErrorContext(operation=operation))
        self.operation = operation
