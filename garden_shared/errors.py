"""
Structured API errors.

Every failed request returns the same body: a human ``error`` message,
which the browser client displays, plus a machine-readable ``error_code``,
optional ``details`` and a ``request_id`` for finding the matching log line.
Failures of the vector index or the generative models map onto the
``SERVICE_*`` and ``UPSTREAM_*`` codes.
"""

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

SERVICE_NAME = "herbal-garden"


class ErrorCode(str, Enum):
    """Error codes, grouped by prefix."""

    # Request problems
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Hosted services
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    SERVICE_TIMEOUT = "SERVICE_TIMEOUT"
    SERVICE_UPSTREAM_ERROR = "SERVICE_UPSTREAM_ERROR"
    UPSTREAM_PARSE_ERROR = "UPSTREAM_PARSE_ERROR"

    # Our side
    INTERNAL_ERROR = "INTERNAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


ERROR_STATUS_CODES: dict[str, int] = {
    ErrorCode.VALIDATION_ERROR.value: 400,
    ErrorCode.PAYLOAD_TOO_LARGE.value: 413,
    ErrorCode.RESOURCE_NOT_FOUND.value: 404,
    ErrorCode.SERVICE_UNAVAILABLE.value: 503,
    ErrorCode.SERVICE_TIMEOUT.value: 504,
    ErrorCode.SERVICE_UPSTREAM_ERROR.value: 502,
    ErrorCode.UPSTREAM_PARSE_ERROR.value: 502,
    ErrorCode.INTERNAL_ERROR.value: 500,
    ErrorCode.CONFIGURATION_ERROR.value: 500,
}


def get_status_code(error_code: str) -> int:
    """HTTP status for an error code; unknown codes are 500."""
    return ERROR_STATUS_CODES.get(error_code, 500)


class APIError(BaseModel):
    """Serialized body of a failed request."""

    error_code: str = Field(..., examples=["UPSTREAM_PARSE_ERROR"])
    message: str = Field(..., examples=["Failed to parse AI response. Please try again."])
    details: dict[str, Any] | None = Field(default=None, examples=[{"field": "query"}])
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")
    service: str = SERVICE_NAME


class APIException(Exception):
    """
    Raise-ready API error.

    Subclasses only change ``default_code``; the status code follows from
    the error code unless given explicitly.

    Example:
        >>> raise NotFoundError("Unknown bed 'xx-9'", details={"bed_id": "xx-9"})
    """

    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
    ):
        code = error_code or self.default_code
        self.error = APIError(
            error_code=code.value if isinstance(code, ErrorCode) else code,
            message=message,
            details=details,
        )
        self.status_code = status_code or get_status_code(self.error.error_code)
        super().__init__(message)

    def to_response(self) -> dict[str, Any]:
        """JSON body, with the message mirrored under ``error``."""
        return {"error": self.error.message, **self.error.model_dump()}


class ValidationError(APIException):
    default_code = ErrorCode.VALIDATION_ERROR


class NotFoundError(APIException):
    default_code = ErrorCode.RESOURCE_NOT_FOUND


class PayloadTooLargeError(APIException):
    default_code = ErrorCode.PAYLOAD_TOO_LARGE


class ConfigurationError(APIException):
    """A required setting, usually an API key, is missing."""

    default_code = ErrorCode.CONFIGURATION_ERROR


class UpstreamServiceError(APIException):
    """A hosted service answered with an error or an unusable payload."""

    default_code = ErrorCode.SERVICE_UPSTREAM_ERROR


class UpstreamUnavailableError(UpstreamServiceError):
    """No hosted service could be reached at all."""

    default_code = ErrorCode.SERVICE_UNAVAILABLE


class UpstreamParseError(UpstreamServiceError):
    """A model answered, but not with the JSON object it was asked for."""

    default_code = ErrorCode.UPSTREAM_PARSE_ERROR


class ValidationErrorDetail(BaseModel):
    """One rejected request field."""

    field: str
    message: str


def create_validation_error(
    message: str,
    field_errors: list[ValidationErrorDetail] | None = None,
) -> ValidationError:
    """ValidationError carrying per-field details under ``details.fields``."""
    details = {"fields": [e.model_dump() for e in field_errors]} if field_errors else None
    return ValidationError(message, details=details)
