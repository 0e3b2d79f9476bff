"""
Failure response classification.

The service mixes two failure envelopes ("fail" and "error") across
endpoints and status codes, so no status code is assumed to carry a
particular envelope. Each status gets a first attempt at its expected
shape; anything that does not match falls through to a chain that always
produces some APIResponseError.
"""

from __future__ import annotations

import httpx

from isb_client.core.exceptions import (
    APIResponseError,
    AccountConflictError,
    AccountNotFoundError,
    BadRequestError,
    ConflictError,
    FailResponseError,
    LeaseConflictError,
    LeaseNotFoundError,
    LeaseTemplateConflictError,
    LeaseTemplateNotFoundError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
)
from isb_client.envelope import (
    ErrorEnvelope,
    FailErrorDetail,
    try_decode_error,
    try_decode_fail,
)

_NOT_FOUND_BY_PREFIX: tuple[tuple[str, type[NotFoundError]], ...] = (
    ("/leases/", LeaseNotFoundError),
    ("/leaseTemplates/", LeaseTemplateNotFoundError),
    ("/accounts/", AccountNotFoundError),
)

_CONFLICT_BY_PREFIX: tuple[tuple[str, type[ConflictError]], ...] = (
    ("/leases/", LeaseConflictError),
    ("/leaseTemplates/", LeaseTemplateConflictError),
    ("/accounts/", AccountConflictError),
)


def _not_found(path: str, errors: list[FailErrorDetail]) -> NotFoundError:
    for prefix, error_cls in _NOT_FOUND_BY_PREFIX:
        if path.startswith(prefix):
            return error_cls(errors=errors)
    return NotFoundError(errors=errors)


def _conflict(path: str, errors: list[FailErrorDetail]) -> ConflictError:
    for prefix, error_cls in _CONFLICT_BY_PREFIX:
        if path.startswith(prefix):
            return error_cls(errors=errors)
    return ConflictError(errors=errors)


def _server_error(status_code: int, envelope: ErrorEnvelope) -> ServerError:
    return ServerError(
        status_code,
        envelope.message,
        code=envelope.code,
        data=envelope.data,
    )


def classify_error(
    status_code: int,
    body: bytes,
    path: str,
    request_body: bytes | None = None,
) -> APIResponseError:
    """
    Pick the error type for a failed response.

    Args:
        status_code: HTTP status of the response
        body: Fully buffered response body
        path: URL path of the original request, used to tell resources apart
        request_body: Body that was sent, echoed back on 400 errors

    Returns:
        The classified error; never raises.
    """
    if status_code == 400:
        fail = try_decode_fail(body)
        if fail is not None:
            return BadRequestError(
                errors=fail.errors,
                request_body=(request_body or b"").decode("utf-8", errors="replace"),
            )
    elif status_code in (401, 403):
        if try_decode_fail(body) is not None:
            return UnauthorizedError(status_code)
    elif status_code == 404:
        fail = try_decode_fail(body)
        if fail is not None:
            return _not_found(path, fail.errors)
    elif status_code == 409:
        fail = try_decode_fail(body)
        if fail is not None:
            return _conflict(path, fail.errors)
    elif status_code == 500:
        error = try_decode_error(body)
        if error is not None:
            return _server_error(500, error)

    fail = try_decode_fail(body)
    if fail is not None:
        return FailResponseError(status_code, status=fail.status, errors=fail.errors)

    error = try_decode_error(body)
    if error is not None:
        return _server_error(status_code, error)

    return APIResponseError(status_code, body=body.decode("utf-8", errors="replace"))


def decode_api_error(response: httpx.Response, request_body: bytes | None = None) -> APIResponseError:
    """Classify a failed httpx response; the body must already be read."""
    return classify_error(
        response.status_code,
        response.content,
        response.request.url.path,
        request_body,
    )
