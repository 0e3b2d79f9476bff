"""Shared fixtures for the ISB client tests."""

from __future__ import annotations

from typing import Any

import pytest

from isb_client import SandboxClient
from isb_client.core.config import reset_config

BASE_URL = "https://isb.test"
TOKEN = "static-test-token"
JWT_SECRET = "a-test-secret-that-is-at-least-32-bytes-long"


def success(data: Any) -> dict[str, Any]:
    return {"status": "success", "data": data}


def fail(*messages: str) -> dict[str, Any]:
    return {"status": "fail", "data": {"errors": [{"message": m} for m in messages]}}


def error(message: str = "server error", code: int = 500, data: dict | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "error", "message": message, "code": code}
    if data is not None:
        body["data"] = data
    return body


def lease_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "userEmail": "user@example.com",
        "uuid": "lease123",
        "status": "Active",
        "originalLeaseTemplateUuid": "tpl",
        "originalLeaseTemplateName": "tplname",
        "leaseDurationInHours": 24,
        "maxSpend": 50.0,
        "awsAccountId": "123456789012",
    }
    payload.update(overrides)
    return payload


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Keep ISB_* environment variables from leaking into tests."""
    import os

    for var in list(os.environ):
        if var.startswith("ISB_"):
            monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
async def client():
    async with SandboxClient(BASE_URL, token=TOKEN) as c:
        yield c
