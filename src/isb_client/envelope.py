"""
JSON envelope codec.

The service wraps every body in one of three envelopes:

    success: {"status": "success", "data": ...}
    fail:    {"status": "fail", "data": {"errors": [{"message": ...}]}}
    error:   {"status": "error", "message": ..., "code": ..., "data": {...}}
"""

from __future__ import annotations

import json
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from isb_client.core.exceptions import JSONDecodingError

T = TypeVar("T")

FAIL_STATUS = "fail"
ERROR_STATUS = "error"


class SuccessEnvelope(BaseModel, Generic[T]):
    status: str = ""
    data: T


class FailErrorDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str = ""


class FailData(BaseModel):
    errors: list[FailErrorDetail] | None = None


class FailEnvelope(BaseModel):
    status: str = ""
    data: FailData | None = None

    @property
    def errors(self) -> list[FailErrorDetail]:
        if self.data is None or self.data.errors is None:
            return []
        return list(self.data.errors)


class ErrorEnvelope(BaseModel):
    status: str = ""
    message: str = ""
    code: int = 0
    data: dict[str, Any] | None = None


def decode_data(body: bytes, model: type[T]) -> T:
    """Unwrap the success envelope's ``data`` into ``model``.

    Raises:
        JSONDecodingError: empty body, malformed JSON or wrong shape
    """
    if not body:
        raise JSONDecodingError("empty response body")
    try:
        envelope = SuccessEnvelope[model].model_validate_json(body)  # type: ignore[valid-type]
    except ValidationError as e:
        raise JSONDecodingError(e) from e
    return envelope.data


def try_decode_fail(body: bytes) -> FailEnvelope | None:
    """Decode a fail envelope, or None when the body is not one."""
    envelope = _try_decode(body, FailEnvelope)
    if envelope is None or envelope.status != FAIL_STATUS:
        return None
    return envelope


def try_decode_error(body: bytes) -> ErrorEnvelope | None:
    """Decode an error envelope, or None when the body is not one."""
    envelope = _try_decode(body, ErrorEnvelope)
    if envelope is None or envelope.status != ERROR_STATUS:
        return None
    return envelope


def _try_decode(body: bytes, model: type[BaseModel]) -> Any:
    if not body:
        return None
    try:
        return model.model_validate_json(body)
    except ValidationError:
        return None


def encode_body(payload: dict[str, Any] | None) -> bytes | None:
    """Compact JSON request body; None stays None."""
    if payload is None:
        return None
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")
