"""
Outbound HTTP client with categorised failures and structured logging.

Usage:
    async with ServiceClient(timeout=60.0) as client:
        resp = await client.post(url, headers=headers, json=payload, expected_status=200)
        if not resp.success:
            ...  # inspect resp.error_kind
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)


class ErrorKind(str, Enum):
    transport = "transport"
    status = "status"
    decode = "decode"


@dataclass
class ServiceResponse:
    """Result of an outbound call: parsed JSON on success, error category otherwise."""

    success: bool
    data: Any = None
    status_code: int | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    headers: dict[str, str] = field(default_factory=dict)


class ServiceClient:
    """
    Async wrapper around httpx.AsyncClient that never raises for HTTP problems.

    Every failure is logged and reported through ``ServiceResponse.error_kind``:
    - transport: the request never produced a response
    - status: the response status was not one of ``expected_status``
    - decode: the body was not valid JSON
    """

    def __init__(
        self,
        timeout: float | httpx.Timeout = 20.0,
        follow_redirects: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if isinstance(timeout, int | float):
            self._timeout = httpx.Timeout(timeout)
        else:
            self._timeout = timeout
        self._follow_redirects = follow_redirects
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ServiceClient:
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=self._follow_redirects,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def post(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        json: Any = None,
        expected_status: int | tuple[int, ...] = (200, 201),
        **log_context: Any,
    ) -> ServiceResponse:
        """POST a JSON body and parse the JSON response."""
        if isinstance(expected_status, int):
            expected_status = (expected_status,)
        if self._client is None:
            raise RuntimeError("ServiceClient must be used as an async context manager")

        try:
            response = await self._client.post(url, headers=headers, json=json)
        except httpx.HTTPError as exc:
            logger.error("http_request_failed", url=url, error=str(exc), **log_context)
            return ServiceResponse(success=False, error=str(exc) or type(exc).__name__, error_kind=ErrorKind.transport)

        if response.status_code not in expected_status:
            logger.error(
                "unexpected_status_code",
                url=url,
                status_code=response.status_code,
                expected=expected_status,
                body_preview=response.text[:500] if response.text else "",
                **log_context,
            )
            return ServiceResponse(
                success=False,
                status_code=response.status_code,
                error=f"Unexpected status {response.status_code}",
                error_kind=ErrorKind.status,
            )

        try:
            data = response.json()
        except ValueError:
            logger.error(
                "json_parse_failed",
                url=url,
                status_code=response.status_code,
                body_preview=response.text[:500] if response.text else "",
                **log_context,
            )
            return ServiceResponse(
                success=False,
                status_code=response.status_code,
                error="JSON parse failed",
                error_kind=ErrorKind.decode,
            )

        return ServiceResponse(
            success=True,
            data=data,
            status_code=response.status_code,
            headers=dict(response.headers),
        )
