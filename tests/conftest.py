"""Shared pytest fixtures for reckon tests."""

import pytest
from typer.testing import CliRunner

from reckon.core.config import DEBUG_ENV_VAR, INT_BITS_ENV_VAR


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Run from an empty directory with no RECKON_* variables set."""
    monkeypatch.delenv(DEBUG_ENV_VAR, raising=False)
    monkeypatch.delenv(INT_BITS_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def trace_lines() -> list[str]:
    """Collector usable as a ``trace`` sink."""
    return []
