"""Exceptions raised by proxied calls.

Transport failures (connection errors, HTTP status errors) are not wrapped:
they reach the caller as whatever the transport raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jsonrpc_proxy.protocol import RPCError


class RPCCallError(Exception):
    """The remote side answered with an error envelope."""

    def __init__(self, error: RPCError, request_id: int | str | None = None):
        super().__init__(error.message)
        self.error = error
        self.request_id = request_id

    @property
    def code(self) -> int:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def data(self) -> Any:
        return self.error.data


class RPCTimeoutError(TimeoutError):
    """A call did not settle within its time limit."""

    def __init__(self, method: str, request_id: int | str, time_limit: int):
        super().__init__(f"RPC call {method!r} timed out after {time_limit}ms")
        self.method = method
        self.request_id = request_id
        self.time_limit = time_limit


class InvalidResponseError(ValueError):
    """Response body is not a JSON-RPC 2.0 envelope."""

    pass
