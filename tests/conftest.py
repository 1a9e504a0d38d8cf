"""Shared test fixtures for jobby tests."""

from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from jobby.core import LockManager
from jobby.core.identity import get_host


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner(env={"NO_COLOR": "1", "TERM": "dumb", "COLUMNS": "200"})


@pytest.fixture(autouse=True)
def clean_application_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without APPLICATION_ENV or JOBBY_CONFIG set."""
    monkeypatch.delenv("APPLICATION_ENV", raising=False)
    monkeypatch.delenv("JOBBY_CONFIG", raising=False)


@pytest.fixture
def lock_file(tmp_path: Path) -> Path:
    """Path of a lock file inside a temporary directory."""
    return tmp_path / "test.lock"


@pytest.fixture
def manager() -> Generator[LockManager, None, None]:
    """LockManager that releases anything left held after the test."""
    m = LockManager()
    try:
        yield m
    finally:
        m.release_all()


@pytest.fixture
def host() -> str:
    """Host name as resolved by jobby."""
    return get_host()
