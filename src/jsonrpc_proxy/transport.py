"""Transports deliver one request envelope and return one response envelope."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

import httpx

from jsonrpc_proxy.logging import redact_headers
from jsonrpc_proxy.protocol import RPCRequest, RPCResponse, parse_response

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Protocol for delivering a request. Must be safe to call concurrently."""

    async def __call__(self, request: RPCRequest) -> RPCResponse: ...


class HTTPTransport:
    """Sends each request as one HTTP POST of the JSON-encoded envelope.

    Non-2xx statuses raise httpx.HTTPStatusError. Nothing is retried and no
    headers are added beyond those supplied.

    When an httpx.AsyncClient is supplied it is reused for every call (and
    owned by the caller); otherwise a short-lived client is opened per call.
    """

    def __init__(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.headers = dict(headers or {})
        self._client = client

    async def __call__(self, request: RPCRequest) -> RPCResponse:
        logger.debug(
            "http_rpc_post",
            extra={
                "rpc.method": request.method,
                "rpc.id": request.id,
                "http.url": self.url,
                "http.headers": redact_headers(self.headers),
            },
        )
        if self._client is not None:
            response = await self._post(self._client, request)
        else:
            async with httpx.AsyncClient() as client:
                response = await self._post(client, request)

        response.raise_for_status()
        return parse_response(response.json())

    async def _post(
        self, client: httpx.AsyncClient, request: RPCRequest
    ) -> httpx.Response:
        return await client.post(
            self.url, json=request.to_dict(), headers=self.headers
        )

    def __repr__(self) -> str:
        return f"HTTPTransport({self.url!r})"
