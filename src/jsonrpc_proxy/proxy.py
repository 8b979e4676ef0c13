"""Proxy objects that turn attribute access into remote calls.

Example:
    api = post("https://example.com/rpc", {"time_limit": 2000})
    total = await api.add([1, 2])
    user = await api.get_user(user_id=7)
    await getattr(api, "class")()  # keyword-named methods

Any attribute name is forwarded as the method name, except dunder names,
which are left to Python's own object protocols.
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from typing import Any

import httpx

from jsonrpc_proxy.dispatcher import request
from jsonrpc_proxy.options import Options, resolve_options
from jsonrpc_proxy.transport import HTTPTransport, Transport


def _pack_params(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
    """Map Python call arguments onto a JSON-RPC params value."""
    if args and kwargs:
        raise TypeError(
            "JSON-RPC params are either by-position or by-name; "
            "pass positional or keyword arguments, not both"
        )
    if kwargs:
        return kwargs
    if len(args) == 1:
        return args[0]
    if args:
        return list(args)
    return None


class RemoteMethod:
    """A remote method bound to a proxy's transport and options."""

    __slots__ = ("_transport", "_options", "name")

    def __init__(self, transport: Transport, options: Options, name: str) -> None:
        self._transport = transport
        self._options = options
        self.name = name

    def __call__(self, *args: Any, **kwargs: Any) -> Awaitable[Any]:
        """Send one request and return its awaitable result.

        A single argument is sent verbatim as params. Calling with no arguments
        and calling with an explicit None both omit params from the envelope,
        since JSON-RPC 2.0 does not allow a null params value.
        """
        params = _pack_params(args, kwargs)
        return request(self._transport, self.name, params, self._options)

    def __repr__(self) -> str:
        return f"RemoteMethod({self.name!r})"


class RPCProxy:
    """Object whose every attribute is a remote method.

    Dunder names and the slot names ``_transport`` and ``_options`` are not
    forwarded. Call remote methods with those names through
    ``jsonrpc_proxy.request()``.
    """

    __slots__ = ("_transport", "_options")

    def __init__(self, transport: Transport, options: Options) -> None:
        object.__setattr__(self, "_transport", transport)
        object.__setattr__(self, "_options", options)

    def __getattr__(self, name: str) -> RemoteMethod:
        # Unset slots land here during copy/unpickle
        if name in RPCProxy.__slots__ or (
            name.startswith("__") and name.endswith("__")
        ):
            raise AttributeError(name)
        return RemoteMethod(self._transport, self._options, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in RPCProxy.__slots__:
            object.__setattr__(self, name, value)
        else:
            raise AttributeError(f"Cannot set attribute {name!r} on RPCProxy")

    def __repr__(self) -> str:
        return f"RPCProxy({self._transport!r})"


def client(
    transport: Transport, options: Options | Mapping[str, Any] | None = None
) -> RPCProxy:
    """Create a transport-agnostic proxy."""
    return RPCProxy(transport, resolve_options(options))


def post(
    url: str,
    options: Options | Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> RPCProxy:
    """Create a proxy that sends requests with HTTP POST."""
    return client(HTTPTransport(url, headers, client=http_client), options)
