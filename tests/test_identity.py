"""Tests for environment and host identity."""

import platform
import socket
from unittest.mock import patch

import pytest

from jobby.core.identity import get_environment_name, get_host, get_identity


class TestEnvironmentName:
    """Tests for get_environment_name."""

    def test_reads_application_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APPLICATION_ENV", "foo")
        assert get_environment_name() == "foo"

    def test_none_if_undefined(self) -> None:
        assert get_environment_name() is None

    def test_reads_fresh_each_call(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Changes to the variable are visible immediately."""
        monkeypatch.setenv("APPLICATION_ENV", "staging")
        assert get_environment_name() == "staging"
        monkeypatch.setenv("APPLICATION_ENV", "production")
        assert get_environment_name() == "production"
        monkeypatch.delenv("APPLICATION_ENV")
        assert get_environment_name() is None

    def test_explicit_mapping(self) -> None:
        assert get_environment_name({"APPLICATION_ENV": "dev"}) == "dev"
        assert get_environment_name({}) is None


class TestHost:
    """Tests for get_host."""

    def test_matches_os_hostname(self) -> None:
        assert get_host() in (socket.gethostname(), platform.node())

    def test_stable_across_calls(self) -> None:
        assert get_host() == get_host()

    def test_falls_back_to_platform_node(self) -> None:
        get_host.cache_clear()
        try:
            with (
                patch("jobby.core.identity.socket.gethostname", return_value=""),
                patch("jobby.core.identity.platform.node", return_value="node-name"),
            ):
                assert get_host() == "node-name"
        finally:
            get_host.cache_clear()

    def test_falls_back_when_gethostname_errors(self) -> None:
        get_host.cache_clear()
        try:
            with (
                patch("jobby.core.identity.socket.gethostname", side_effect=OSError),
                patch("jobby.core.identity.platform.node", return_value="node-name"),
            ):
                assert get_host() == "node-name"
        finally:
            get_host.cache_clear()


def test_get_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPLICATION_ENV", "prod")
    identity = get_identity()
    assert identity.host == get_host()
    assert identity.environment == "prod"
