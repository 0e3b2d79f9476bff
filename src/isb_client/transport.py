"""
HTTP transport for the Innovation Sandbox API.

Sends one request per call over httpx, buffers the whole response body,
rejects non-JSON payloads and hands failure statuses to the classifier.
No retries: every failure goes straight back to the caller.
"""

from __future__ import annotations

from typing import Any

import httpx

from isb_client.classifier import decode_api_error
from isb_client.core.exceptions import APIRequestError, NonJSONResponseError
from isb_client.core.logging import get_logger

logger = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"

# Success statuses per verb.
_GET_OK = frozenset({200})
_POST_OK = frozenset({200, 201})
_PATCH_OK = frozenset({200})
_PUT_OK = frozenset({200})
_DELETE_OK = frozenset({200, 204})


class Transport:
    """
    Authenticated JSON transport bound to one bearer token.

    The underlying httpx.AsyncClient is created lazily and carries the
    Authorization header for every request it sends.
    """

    def __init__(self, token: str | None = None, timeout: float = 15.0) -> None:
        self._token = token
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def timeout(self) -> float:
        return self._timeout

    async def __aenter__(self) -> Transport:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def connect(self) -> None:
        """Create the HTTP client."""
        if self._client is not None:
            return
        headers: dict[str, str] = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(self._timeout),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ========================================================================
    # Verbs
    # ========================================================================

    async def get(self, url: str, params: dict[str, str] | None = None) -> httpx.Response:
        return await self._request("GET", url, _GET_OK, params=params)

    async def post(self, url: str, body: bytes | None = None) -> httpx.Response:
        return await self._request("POST", url, _POST_OK, body=body)

    async def patch(self, url: str, body: bytes | None = None) -> httpx.Response:
        return await self._request("PATCH", url, _PATCH_OK, body=body)

    async def put(self, url: str, body: bytes | None = None) -> httpx.Response:
        return await self._request("PUT", url, _PUT_OK, body=body)

    async def delete(self, url: str) -> httpx.Response:
        return await self._request("DELETE", url, _DELETE_OK)

    # ========================================================================
    # Internals
    # ========================================================================

    async def _request(
        self,
        method: str,
        url: str,
        ok_statuses: frozenset[int],
        *,
        params: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> httpx.Response:
        await self.connect()
        if not self._client:
            raise APIRequestError("connect", url, "HTTP client is not initialised")

        headers: dict[str, str] = {}
        if method in ("POST", "PATCH", "PUT"):
            headers["Content-Type"] = JSON_CONTENT_TYPE

        try:
            request = self._client.build_request(
                method,
                url,
                params=params or None,
                content=body,
                headers=headers,
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise APIRequestError("new_request", url, e) from e

        logger.debug("api_request", method=method, url=str(request.url))
        try:
            response = await self._client.send(request)
        except httpx.HTTPError as e:
            raise APIRequestError("do", url, e) from e

        content = response.content
        content_type = response.headers.get("Content-Type", "")
        logger.debug(
            "api_response",
            method=method,
            url=str(request.url),
            status_code=response.status_code,
            content_type=content_type,
            size=len(content),
        )

        if content and JSON_CONTENT_TYPE not in content_type:
            raise NonJSONResponseError(
                "do" + method.capitalize(),
                url,
                status_code=response.status_code,
                content_type=content_type,
                body=content.decode("utf-8", errors="replace"),
            )

        if response.status_code not in ok_statuses:
            error = decode_api_error(response, body)
            logger.warning(
                "api_error",
                method=method,
                url=str(request.url),
                status_code=response.status_code,
                error_kind=error.kind.value,
            )
            raise error

        return response
