"""Shared test fixtures and factories."""

import itertools
from collections.abc import Awaitable, Callable
from typing import Any

import pytest

from jsonrpc_proxy import RPCError, RPCFailure, RPCRequest, RPCResponse, RPCSuccess

Responder = Callable[[RPCRequest], Awaitable[RPCResponse]]


class RecordingTransport:
    """Transport double that records every request it receives."""

    def __init__(self, responder: Responder):
        self.requests: list[RPCRequest] = []
        self._responder = responder

    async def __call__(self, request: RPCRequest) -> RPCResponse:
        self.requests.append(request)
        return await self._responder(request)


def success(result: Any) -> Responder:
    async def respond(request: RPCRequest) -> RPCResponse:
        return RPCSuccess(id=request.id, result=result)

    return respond


def failure(code: int, message: str, data: Any = None) -> Responder:
    async def respond(request: RPCRequest) -> RPCResponse:
        return RPCFailure(
            id=request.id, error=RPCError(code=code, message=message, data=data)
        )

    return respond


# =============================================================================
# Transport Fixtures
# =============================================================================


@pytest.fixture
def make_transport() -> Callable[[Responder], RecordingTransport]:
    """Factory for recording transports."""
    return RecordingTransport


@pytest.fixture
def echo_transport() -> RecordingTransport:
    """Transport that answers with the request's params."""

    async def respond(request: RPCRequest) -> RPCResponse:
        return RPCSuccess(id=request.id, result=request.params)

    return RecordingTransport(respond)


@pytest.fixture
def sequential_ids() -> Callable[[], str]:
    """Deterministic id factory: req-1, req-2, ..."""
    counter = itertools.count(1)
    return lambda: f"req-{next(counter)}"
