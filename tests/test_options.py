"""Tests for call options."""

import pytest
from pydantic import ValidationError

from jsonrpc_proxy import DEFAULT_TIME_LIMIT_MS, Options, new_request_id
from jsonrpc_proxy.options import resolve_options


class TestOptions:
    def test_defaults(self):
        options = Options()
        assert options.time_limit == DEFAULT_TIME_LIMIT_MS == 5000
        assert options.format_params is None
        assert options.format_value is None
        assert options.id_factory is new_request_id

    @pytest.mark.parametrize("time_limit", [0, None])
    def test_unset_time_limit_uses_default(self, time_limit):
        assert Options(time_limit=time_limit).time_limit == DEFAULT_TIME_LIMIT_MS

    def test_unset_time_limit_in_mapping_uses_default(self):
        options = resolve_options({"time_limit": None})
        assert options.time_limit == DEFAULT_TIME_LIMIT_MS

    @pytest.mark.parametrize("time_limit", [-1, -5000])
    def test_negative_time_limit_rejected(self, time_limit):
        with pytest.raises(ValidationError):
            Options(time_limit=time_limit)

    def test_frozen(self):
        options = Options()
        with pytest.raises(ValidationError):
            options.time_limit = 10

    def test_formatters_must_be_callable(self):
        with pytest.raises(ValidationError):
            Options(format_value="not callable")


class TestResolveOptions:
    def test_none_gives_defaults(self):
        assert resolve_options(None) == Options()

    def test_options_returned_as_is(self):
        options = Options(time_limit=10)
        assert resolve_options(options) is options

    def test_mapping_validated(self):
        options = resolve_options({"time_limit": 250})
        assert isinstance(options, Options)
        assert options.time_limit == 250

    def test_invalid_mapping_rejected(self):
        with pytest.raises(ValidationError):
            resolve_options({"time_limit": "soon"})
