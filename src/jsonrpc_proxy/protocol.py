"""JSON-RPC 2.0 message types."""

import secrets
import string
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from jsonrpc_proxy.errors import InvalidResponseError

JSONRPC_VERSION = "2.0"

# Same alphabet and length as a nanoid
_ID_ALPHABET = string.ascii_letters + string.digits + "_-"
_ID_LENGTH = 21


# JSON-RPC 2.0 error codes
class ErrorCode:
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


def new_request_id() -> str:
    """Generate a random, URL-safe request id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


@dataclass
class RPCRequest:
    """JSON-RPC 2.0 request."""

    method: str
    params: Any = None
    id: int | str = field(default_factory=new_request_id)
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "method": self.method,
        }
        # Omitted params are dropped from the wire form
        if self.params is not None:
            d["params"] = self.params
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RPCRequest":
        return cls(
            method=data.get("method", ""),
            params=data.get("params"),
            id=data.get("id", ""),
            jsonrpc=data.get("jsonrpc", JSONRPC_VERSION),
        )


@dataclass
class RPCError:
    """JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        d = {"code": self.code, "message": self.message}
        if self.data is not None:
            d["data"] = self.data
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RPCError":
        return cls(
            code=data.get("code", ErrorCode.INTERNAL_ERROR),
            message=data.get("message", "Unknown error"),
            data=data.get("data"),
        )


@dataclass
class RPCSuccess:
    """JSON-RPC 2.0 success response."""

    id: int | str | None
    result: Any = None
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {"jsonrpc": self.jsonrpc, "result": self.result, "id": self.id}


@dataclass
class RPCFailure:
    """JSON-RPC 2.0 error response."""

    id: int | str | None
    error: RPCError
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {"jsonrpc": self.jsonrpc, "error": self.error.to_dict(), "id": self.id}


RPCResponse: TypeAlias = RPCSuccess | RPCFailure


def parse_response(data: Any) -> RPCResponse:
    """Decode a wire response into a success or failure envelope.

    An ``error`` key marks a failure; anything else is a success.

    Raises:
        InvalidResponseError: If the payload is not a response envelope.
    """
    if not isinstance(data, Mapping):
        raise InvalidResponseError(
            f"Expected a JSON-RPC response object, got {type(data).__name__}"
        )

    jsonrpc = data.get("jsonrpc", JSONRPC_VERSION)
    if "error" in data:
        err = data["error"]
        if not isinstance(err, Mapping):
            raise InvalidResponseError(f"Malformed error object: {err!r}")
        return RPCFailure(
            id=data.get("id"), error=RPCError.from_dict(err), jsonrpc=jsonrpc
        )
    return RPCSuccess(id=data.get("id"), result=data.get("result"), jsonrpc=jsonrpc)
