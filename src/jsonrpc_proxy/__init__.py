"""JSON-RPC 2.0 client proxies over pluggable transports.

Public API:
- client, post: Build a proxy whose attributes are remote methods
- request: Issue one call explicitly
- Options: Time limit, param/value formatters, id factory

Protocol:
- RPCRequest, RPCSuccess, RPCFailure, RPCError: JSON-RPC 2.0 message types
- parse_response: Decode a wire response into a tagged envelope

Transports:
- Transport: Protocol every transport satisfies
- HTTPTransport: POST over httpx
"""

from jsonrpc_proxy.dispatcher import request
from jsonrpc_proxy.errors import InvalidResponseError, RPCCallError, RPCTimeoutError
from jsonrpc_proxy.options import DEFAULT_TIME_LIMIT_MS, Options
from jsonrpc_proxy.protocol import (
    ErrorCode,
    RPCError,
    RPCFailure,
    RPCRequest,
    RPCResponse,
    RPCSuccess,
    new_request_id,
    parse_response,
)
from jsonrpc_proxy.proxy import RemoteMethod, RPCProxy, client, post
from jsonrpc_proxy.transport import HTTPTransport, Transport

__all__ = [
    # Proxies
    "client",
    "post",
    "request",
    "RPCProxy",
    "RemoteMethod",
    "Options",
    "DEFAULT_TIME_LIMIT_MS",
    # Protocol
    "ErrorCode",
    "RPCError",
    "RPCFailure",
    "RPCRequest",
    "RPCResponse",
    "RPCSuccess",
    "new_request_id",
    "parse_response",
    # Transports
    "Transport",
    "HTTPTransport",
    # Errors
    "RPCCallError",
    "RPCTimeoutError",
    "InvalidResponseError",
]
