"""Request lifecycle for a single proxied call.

Each call races its transport against a timer. Whichever finishes first
settles the call; the loser is ignored:

    PENDING -> TIMED_OUT   timer fired first, RPCTimeoutError raised
    PENDING -> SETTLED     transport finished first, result or error raised

On timeout the transport is not cancelled. It runs to completion and its
outcome is observed and discarded.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from jsonrpc_proxy.errors import RPCCallError, RPCTimeoutError
from jsonrpc_proxy.options import Options, resolve_options
from jsonrpc_proxy.protocol import (
    RPCFailure,
    RPCRequest,
    RPCResponse,
    RPCSuccess,
    parse_response,
)
from jsonrpc_proxy.transport import Transport

logger = logging.getLogger(__name__)


class CallState(Enum):
    PENDING = "pending"
    TIMED_OUT = "timed_out"
    SETTLED = "settled"


class PendingCall:
    """Single-assignment result slot shared by the timer and the transport."""

    def __init__(self, request: RPCRequest, options: Options) -> None:
        self.request = request
        self.options = options
        self.state = CallState.PENDING
        self._loop = asyncio.get_running_loop()
        self._future: asyncio.Future[Any] = self._loop.create_future()
        self._timer: asyncio.TimerHandle | None = None
        # Strong reference keeps the transport task alive until it finishes
        self._task: asyncio.Future[Any] | None = None

    async def run(self, transport: Transport) -> Any:
        self._timer = self._loop.call_later(
            self.options.time_limit / 1000, self._on_timeout
        )
        # Releases the timer on every exit path, including caller cancellation
        self._future.add_done_callback(self._on_settled)

        try:
            sent = transport(self.request)
            if not inspect.isawaitable(sent):
                raise TypeError(
                    f"Transport returned {type(sent).__name__}, expected an awaitable"
                )
        except Exception as e:
            self._settle_error(e)
        else:
            self._task = asyncio.ensure_future(sent)
            self._task.add_done_callback(self._on_transport_done)

        return await self._future

    def _on_settled(self, future: asyncio.Future[Any]) -> None:
        self._release_timer()
        if future.cancelled() and self.state is CallState.PENDING:
            self.state = CallState.SETTLED

    def _release_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timeout(self) -> None:
        self._timer = None
        if self.state is not CallState.PENDING or self._future.done():
            return
        self.state = CallState.TIMED_OUT
        logger.warning(
            "rpc_timeout",
            extra={
                "rpc.method": self.request.method,
                "rpc.id": self.request.id,
                "rpc.time_limit_ms": self.options.time_limit,
            },
        )
        self._future.set_exception(
            RPCTimeoutError(
                self.request.method, self.request.id, self.options.time_limit
            )
        )

    def _on_transport_done(self, task: asyncio.Future[Any]) -> None:
        self._release_timer()

        if task.cancelled():
            if self.state is CallState.PENDING and not self._future.done():
                self.state = CallState.SETTLED
                self._future.cancel()
            return

        # Retrieve the exception even when discarding it
        exc = task.exception()

        if self.state is not CallState.PENDING or self._future.done():
            logger.debug(
                "rpc_late_result_discarded",
                extra={
                    "rpc.method": self.request.method,
                    "rpc.id": self.request.id,
                    "error.type": type(exc).__name__ if exc else None,
                },
            )
            return

        if exc is not None:
            self._settle_error(exc)
            return

        try:
            value = self._interpret(task.result())
        except Exception as e:
            self._settle_error(e)
        else:
            self.state = CallState.SETTLED
            self._future.set_result(value)

    def _interpret(self, response: RPCResponse | Mapping[str, Any]) -> Any:
        if isinstance(response, Mapping):
            response = parse_response(response)

        match response:
            case RPCFailure(error=error):
                logger.debug(
                    "rpc_error_response",
                    extra={
                        "rpc.method": self.request.method,
                        "rpc.id": self.request.id,
                        "rpc.error_code": error.code,
                        "error.message": error.message,
                    },
                )
                raise RPCCallError(error, request_id=response.id)
            case RPCSuccess(result=result):
                logger.debug(
                    "rpc_response",
                    extra={
                        "rpc.method": self.request.method,
                        "rpc.id": self.request.id,
                    },
                )
                if self.options.format_value is not None:
                    return self.options.format_value(result)
                return result
            case _:
                raise TypeError(
                    f"Unexpected response type {type(response).__name__}"
                )

    def _settle_error(self, exc: BaseException) -> None:
        if self.state is not CallState.PENDING or self._future.done():
            return
        self.state = CallState.SETTLED
        self._future.set_exception(exc)


async def request(
    transport: Transport,
    method: str,
    params: Any = None,
    options: Options | Mapping[str, Any] | None = None,
) -> Any:
    """Issue one JSON-RPC call through a transport.

    Args:
        transport: Capability that delivers the request envelope.
        method: Remote method name.
        params: Method parameters; None omits them from the envelope.
        options: Call options (time limit, formatters, id factory).

    Returns:
        The call's result, passed through ``format_value`` when configured.

    Raises:
        RPCTimeoutError: If the call did not settle within the time limit.
        RPCCallError: If the remote side returned an error envelope.
        ValueError: If method is empty.
        Any exception raised by the transport, unchanged.
    """
    if not method:
        raise ValueError("RPC method name must not be empty")

    opts = resolve_options(options)
    request_id = opts.id_factory()
    if opts.format_params is not None:
        params = opts.format_params(params)

    rpc_request = RPCRequest(method=method, params=params, id=request_id)
    logger.debug("rpc_request", extra={"rpc.method": method, "rpc.id": request_id})

    return await PendingCall(rpc_request, opts).run(transport)

