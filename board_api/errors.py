"""Error taxonomy and the uniform result envelope.

Services never raise to their callers: every outcome is a ``ServiceResult``
carrying ``success``, a human-readable ``message``, optional ``data`` and,
on failure, an ``ErrorCode``. The HTTP layer picks the status code from the
error code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

T = TypeVar("T")


class ErrorCode(str, Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    DUPLICATE_EMAIL = "duplicate_email"
    USER_NOT_FOUND = "user_not_found"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    VALIDATION_FAILED = "validation_failed"
    UNAUTHORIZED = "unauthorized"
    INTERNAL_FAILURE = "internal_failure"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INTERNAL_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None
    error: Optional[ErrorCode] = None

    @classmethod
    def ok(cls, message: str, data: Optional[T] = None) -> "ServiceResult[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, error: ErrorCode, message: str) -> "ServiceResult[T]":
        return cls(success=False, message=message, error=error)

    def envelope(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.data is not None:
            body["data"] = jsonable_encoder(self.data, by_alias=True)
        return body

    def to_response(self, success_status: int = status.HTTP_200_OK) -> JSONResponse:
        code = success_status if self.success else self.error.http_status
        return JSONResponse(status_code=code, content=self.envelope())


def failure_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


def error_response(error: ErrorCode, message: str, headers: Optional[dict] = None) -> JSONResponse:
    """Envelope for failures raised outside the services (auth, validation)."""
    return failure_response(error.http_status, message, headers)


class AuthenticationRequired(Exception):
    """Raised by the bearer-token guard when no valid token is presented."""

    def __init__(self, message: str = "Authentication is required."):
        super().__init__(message)
        self.message = message
