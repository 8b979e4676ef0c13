"""Call options using Pydantic."""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jsonrpc_proxy.protocol import new_request_id

DEFAULT_TIME_LIMIT_MS = 5000


class Options(BaseModel):
    """Options shared by a proxy and every request it issues.

    Formatters run at call time: ``format_params`` on outgoing params before
    the request is built, ``format_value`` on the result before it is returned.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    time_limit: int = Field(default=DEFAULT_TIME_LIMIT_MS, gt=0)  # milliseconds
    format_params: Callable[[Any], Any] | None = None
    format_value: Callable[[Any], Any] | None = None
    id_factory: Callable[[], int | str] = new_request_id

    @field_validator("time_limit", mode="before")
    @classmethod
    def default_when_unset(cls, value: Any) -> Any:
        # 0 and None both mean "use the default"
        return value or DEFAULT_TIME_LIMIT_MS


def resolve_options(options: "Options | Mapping[str, Any] | None") -> Options:
    """Coerce None or a plain mapping into validated Options."""
    if options is None:
        return Options()
    if isinstance(options, Options):
        return options
    return Options.model_validate(dict(options))
