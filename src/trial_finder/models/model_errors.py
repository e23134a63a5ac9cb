"""Closed error taxonomy returned by the tool handlers."""

from enum import Enum

from trial_finder.models.base import CamelModel


class ErrorCode(str, Enum):
    """Every failure surfaced to a caller carries exactly one of these."""

    VALIDATION = "VALIDATION"  # malformed input, or registry HTTP 400
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMIT = "RATE_LIMIT"
    NETWORK = "NETWORK"  # no HTTP response at all
    API_ERROR = "API_ERROR"  # any other registry-side failure
    UNKNOWN = "UNKNOWN"


class ErrorRecord(CamelModel):
    """Structured failure attached to a tool response instead of raising."""

    message: str
    code: ErrorCode
    status_code: int | None = None
    retry_after: str | None = None
