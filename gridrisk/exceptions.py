"""
GridRisk Exceptions Module.

Every failure a job can end in maps to one of these. The worker reports
``message`` back to the workflow engine; ``details`` stay in the logs.
"""

from enum import Enum
from typing import Any, Dict, Optional


# ============================================================================
# ERROR CODES
# ============================================================================


class ErrorCode(str, Enum):
    """Worker error codes."""

    INTERNAL_ERROR = "E1000"
    VALIDATION_ERROR = "E1001"

    # External service errors (5xxx)
    EXTERNAL_SERVICE_ERROR = "E5000"
    SERVICE_UNAVAILABLE = "E5003"

    # Data errors (6xxx)
    INVALID_DATA = "E6000"


# ============================================================================
# BASE EXCEPTION
# ============================================================================


class GridRiskError(Exception):
    """Base exception for the risk analysis worker."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        field: Optional[str] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.field = field
        super().__init__(message)


# ============================================================================
# SPECIFIC EXCEPTIONS
# ============================================================================


class InvalidInputError(GridRiskError):
    """A job variable is missing, out of range, or not a known value."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            field=field,
            details=details,
        )


class ProfileUnavailableError(GridRiskError):
    """The analysis profile could not be fetched.

    The message is deliberately opaque; the cause is kept in ``details``.
    """

    MESSAGE = "Risk analysis service unavailable"

    def __init__(self, mode: str, reason: str = ""):
        super().__init__(
            message=self.MESSAGE,
            code=ErrorCode.SERVICE_UNAVAILABLE,
            details={"mode": mode, "reason": reason},
        )


class InvalidProfileError(GridRiskError):
    """A fetched profile is malformed or lacks a required weight."""

    def __init__(
        self,
        message: str,
        mode: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_DATA,
            details={"mode": mode, **(details or {})},
        )


class JobClientError(GridRiskError):
    """The workflow engine rejected or did not answer a job request."""

    def __init__(self, operation: str, reason: str = ""):
        super().__init__(
            message=f"Workflow engine request failed: {operation}",
            code=ErrorCode.EXTERNAL_SERVICE_ERROR,
            details={"operation": operation, "reason": reason},
        )
