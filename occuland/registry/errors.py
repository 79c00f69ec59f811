"""Error taxonomy for registry calls.

Every failed call raises a RegistryError subclass before any state is
touched, so a failure never leaves a partial mutation behind. The message
is the revert reason and is surfaced verbatim.

Callers that need a serializable form (for example to hand a failure to
another process) can use ``to_response()``, which follows the standard
``{"success": False, "error": ..., "code": ..., "category": ...}`` shape.

Usage:
    from occuland.registry.errors import NotFound, Unauthorized

    try:
        registry.bridge_back(caller, token_id)
    except Unauthorized as exc:
        log.warning("rejected: %s", exc.to_response())
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error classification.

    - VALIDATION: Caller provided bad input
    - PERMISSION: Caller not authorized
    - RESOURCE: Token not found, already exists
    """

    VALIDATION = "validation"
    PERMISSION = "permission"
    RESOURCE = "resource"


class ErrorCode(str, Enum):
    """Specific error codes for programmatic handling."""

    # Validation errors
    INVALID_ARGUMENT = "invalid_argument"
    INDEX_OUT_OF_RANGE = "index_out_of_range"

    # Permission errors
    NOT_OWNER = "not_owner"
    NOT_AUTHORIZED = "not_authorized"

    # Resource errors
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"


@dataclass
class ErrorResponse:
    """Standardized error response.

    All error responses include:
    - success: Always False
    - error: Human-readable message (the revert reason)
    - code: Machine-readable error code
    - category: Error category (validation, permission, resource)
    - retriable: Always False; registry failures are terminal for the call
    - details: Optional additional context
    """

    success: bool = False
    error: str = ""
    code: str = ""
    category: str = ""
    retriable: bool = False
    details: dict[str, object] | None = None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        result: dict[str, object] = {
            "success": self.success,
            "error": self.error,
            "code": self.code,
            "category": self.category,
            "retriable": self.retriable,
        }
        if self.details:
            result["details"] = self.details
        return result


class RegistryError(Exception):
    """Base class for every rejected registry call."""

    category: ErrorCategory = ErrorCategory.VALIDATION
    default_code: ErrorCode = ErrorCode.INVALID_ARGUMENT

    def __init__(
        self,
        message: str = "",
        code: ErrorCode | None = None,
        **details: object,
    ) -> None:
        self.message = message
        self.code = code or self.default_code
        self.details = dict(details)
        super().__init__(message)

    def to_response(self) -> dict[str, object]:
        """Convert to the standard error response dict."""
        return ErrorResponse(
            error=self.message,
            code=self.code.value,
            category=self.category.value,
            retriable=False,
            details=self.details or None,
        ).to_dict()


class Unauthorized(RegistryError):
    """Role or ownership check failed."""

    category = ErrorCategory.PERMISSION
    default_code = ErrorCode.NOT_AUTHORIZED


class NotFound(RegistryError):
    """The target token id does not exist."""

    category = ErrorCategory.RESOURCE
    default_code = ErrorCode.NOT_FOUND


class AlreadyExists(RegistryError):
    """A mint collided with a live or previously burned token id."""

    category = ErrorCategory.RESOURCE
    default_code = ErrorCode.ALREADY_EXISTS


class InvalidArgument(RegistryError):
    """Bad input: zero address, malformed id, self-approval."""

    category = ErrorCategory.VALIDATION
    default_code = ErrorCode.INVALID_ARGUMENT


class IndexOutOfRange(RegistryError):
    """Enumeration index past the end of the token list."""

    category = ErrorCategory.VALIDATION
    default_code = ErrorCode.INDEX_OUT_OF_RANGE
