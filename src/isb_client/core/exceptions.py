"""
ISB Client Exception Hierarchy

All custom exceptions raised by the Innovation Sandbox client.

Three families:
- APIRequestError: the request never produced a usable response
  (bad parameters, transport failure, non-JSON payload)
- JSONDecodingError: a success envelope could not be decoded
- APIResponseError: the service answered with a failure status; the
  classifier picks the concrete subclass
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Discriminant shared by every classified response error."""
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    FAIL_RESPONSE = "fail_response"
    RESPONSE = "response"


class ResourceType(str, Enum):
    """Resource a not-found or conflict error refers to."""
    LEASE = "lease"
    LEASE_TEMPLATE = "lease_template"
    ACCOUNT = "account"


class ISBError(Exception):
    """Base exception for all client errors."""

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging or reporting."""
        return {
            "error": self.__class__.__name__,
            "message": str(self),
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Request-side errors
# =============================================================================


class APIRequestError(ISBError):
    """Error making an API request (parameters, transport, non-JSON body)."""

    def __init__(self, op: str, url: str, cause: BaseException | str) -> None:
        if isinstance(cause, str):
            cause = ValueError(cause)
        super().__init__(
            f"api request error [{op} {url}]: {cause}",
            details={"op": op, "url": url},
            cause=cause,
        )
        self.op = op
        self.url = url


class ParameterError(APIRequestError):
    """Required request fields are missing; nothing was sent."""

    def __init__(self, message: str) -> None:
        super().__init__("param", "", message)


class NonJSONResponseError(APIRequestError):
    """The service answered with a non-empty body that is not JSON."""

    max_preview = 512

    def __init__(
        self,
        op: str,
        url: str,
        *,
        status_code: int,
        content_type: str,
        body: str,
    ) -> None:
        preview = body[: self.max_preview] + "..." if len(body) > self.max_preview else body
        super().__init__(op, url, f"non-JSON response ({content_type}): {preview}")
        self.status_code = status_code
        self.content_type = content_type
        self.body = preview
        self.details["status_code"] = status_code
        self.details["content_type"] = content_type


class JSONDecodingError(ISBError):
    """A response envelope did not decode into the expected shape."""

    def __init__(self, cause: BaseException | str) -> None:
        if isinstance(cause, str):
            cause = ValueError(cause)
        super().__init__(f"json decoding error: {cause}", cause=cause)


# =============================================================================
# Classified response errors
# =============================================================================


def _format_errors(errors: list[Any]) -> str:
    return "[" + " ".join("{" + e.message + "}" for e in errors) + "]"


class APIResponseError(ISBError):
    """Generic error for an unexpected HTTP response."""

    kind = ErrorKind.RESPONSE
    resource: ResourceType | None = None

    def __init__(self, status_code: int, message: str = "", *, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message, details={"status_code": status_code})

    def __str__(self) -> str:
        if self.message:
            return f"api response error: {self.message} (status {self.status_code})"
        return f"api response error: status {self.status_code}, body: {self.body}"


class _DetailedResponseError(APIResponseError):
    """Response error carrying the fail envelope's detail list."""

    label = ""

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        *,
        errors: list[Any] | None = None,
    ) -> None:
        super().__init__(status_code, message if message is not None else self.label)
        self.errors = list(errors or [])

    def __str__(self) -> str:
        if self.errors:
            return (
                f"{self.label}: {self.message} (status {self.status_code}) "
                f"errors: {_format_errors(self.errors)}"
            )
        return f"{self.label}: {self.message} (status {self.status_code})"


class BadRequestError(_DetailedResponseError):
    """400 Bad Request; echoes the request body for diagnostics."""

    kind = ErrorKind.BAD_REQUEST
    label = "bad request"

    def __init__(
        self,
        *,
        errors: list[Any] | None = None,
        request_body: str = "",
    ) -> None:
        super().__init__(400, errors=errors)
        self.request_body = request_body

    def __str__(self) -> str:
        if self.errors:
            return (
                f"bad request: {self.message} (status {self.status_code}) "
                f"errors: {_format_errors(self.errors)} body: {self.request_body}"
            )
        return f"bad request: {self.message} (status {self.status_code}) body: {self.request_body}"


class UnauthorizedError(APIResponseError):
    """401 or 403."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, status_code: int) -> None:
        super().__init__(status_code, "unauthorized")

    def __str__(self) -> str:
        return f"unauthorized: {self.message} (status {self.status_code})"


class NotFoundError(_DetailedResponseError):
    kind = ErrorKind.NOT_FOUND
    label = "not found"

    def __init__(self, *, errors: list[Any] | None = None) -> None:
        super().__init__(404, errors=errors)


class LeaseNotFoundError(NotFoundError):
    resource = ResourceType.LEASE
    label = "lease not found"


class LeaseTemplateNotFoundError(NotFoundError):
    resource = ResourceType.LEASE_TEMPLATE
    label = "lease template not found"


class AccountNotFoundError(NotFoundError):
    resource = ResourceType.ACCOUNT
    label = "account not found"


class ConflictError(_DetailedResponseError):
    kind = ErrorKind.CONFLICT
    label = "conflict"

    def __init__(self, *, errors: list[Any] | None = None) -> None:
        super().__init__(409, errors=errors)


class LeaseConflictError(ConflictError):
    resource = ResourceType.LEASE
    label = "lease conflict"


class LeaseTemplateConflictError(ConflictError):
    resource = ResourceType.LEASE_TEMPLATE
    label = "lease template conflict"


class AccountConflictError(ConflictError):
    resource = ResourceType.ACCOUNT
    label = "account conflict"


class ServerError(APIResponseError):
    """Error envelope response (500, or any status answered with one)."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        code: int = 0,
        data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(status_code, message)
        self.code = code
        self.data = data
        self.details["code"] = code

    def __str__(self) -> str:
        return f"server error: {self.message} (status {self.status_code}, code {self.code})"


class FailResponseError(APIResponseError):
    """Fail envelope on a status with no dedicated error type."""

    kind = ErrorKind.FAIL_RESPONSE

    def __init__(
        self,
        status_code: int,
        *,
        status: str = "fail",
        errors: list[Any] | None = None,
    ) -> None:
        super().__init__(status_code, status)
        self.status = status
        self.errors = list(errors or [])

    def __str__(self) -> str:
        return (
            f"fail response: {self.status} (status {self.status_code}) "
            f"errors: {_format_errors(self.errors)}"
        )
