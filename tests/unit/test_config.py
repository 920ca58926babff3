"""Tests for port resolution and settings."""

import pytest

from webapi_util.config import (
    ServerSettings,
    bind_address,
    get_port,
    parse_bind_address,
    parse_int32,
    resolve_port,
)
from webapi_util.errors import PortParseError


class TestResolvePort:
    def test_env_override_wins(self):
        assert resolve_port({"PORT": "18080"}, 9000) == "18080"

    def test_default_when_unset(self):
        assert resolve_port({}, 9000) == "9000"

    def test_default_when_empty(self):
        assert resolve_port({"PORT": ""}, 9000) == "9000"

    def test_non_numeric_port_fails(self):
        with pytest.raises(PortParseError) as exc_info:
            resolve_port({"PORT": "abc"}, 9000)
        assert exc_info.value.value == "abc"

    def test_tcp_range_not_enforced(self):
        assert resolve_port({"PORT": "70000"}, 9000) == "70000"
        assert resolve_port({}, -1) == "-1"

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.setenv("PORT", "8181")
        assert resolve_port(None, 9000) == "8181"
        monkeypatch.delenv("PORT")
        assert resolve_port(None, 9000) == "9000"


@pytest.mark.parametrize("value", ["+80", "-80", "2147483647", "-2147483648", "0080"])
def test_parse_int32_accepts(value):
    assert parse_int32(value) == int(value)


@pytest.mark.parametrize("value", ["", " 80", "80 ", "8_0", "0x50", "2147483648", "-2147483649", "８０"])
def test_parse_int32_rejects(value):
    with pytest.raises(PortParseError):
        parse_int32(value)


def test_port_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_int32("abc")


def test_get_port_empty_when_unset():
    assert get_port({}) == ""
    assert get_port({"PORT": "1"}) == "1"


def test_bind_address_listens_on_all_interfaces():
    assert bind_address("18080") == ":18080"
    assert parse_bind_address(":18080") == ("", 18080)
    assert parse_bind_address("127.0.0.1:80") == ("127.0.0.1", 80)


def test_parse_bind_address_requires_port():
    with pytest.raises(PortParseError):
        parse_bind_address("localhost")


def test_settings_normalize_log_level(monkeypatch):
    monkeypatch.setenv("WEBAPI_UTIL_LOG_LEVEL", "debug")
    settings = ServerSettings.from_env()
    assert settings.log_level == "DEBUG"
    assert settings.timeout_keep_alive == 5


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("WEBAPI_UTIL_LOG_LEVEL", "verbose")
    with pytest.raises(ValueError, match="unknown log level"):
        ServerSettings.from_env()
