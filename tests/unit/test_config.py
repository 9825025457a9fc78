"""Tests for reckon configuration loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from reckon.core.config import ReckonConfig, find_config_file, load_config
from reckon.core.errors import ConfigError


class TestDefaults:
    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(cwd=tmp_path, environ={})
        assert config == ReckonConfig()
        assert config.debug is False
        assert config.int_bits is None
        assert config.prompt == "Enter an expression: "

    def test_zero_bits_means_unbounded(self) -> None:
        assert ReckonConfig(int_bits=0).int_bits is None

    def test_rejects_tiny_width(self) -> None:
        with pytest.raises(ValueError):
            ReckonConfig(int_bits=1)


class TestFiles:
    """Config comes from reckon.toml or [tool.reckon] in pyproject.toml."""

    def test_reckon_toml(self, tmp_path: Path) -> None:
        (tmp_path / "reckon.toml").write_text('debug = true\nprompt = "> "\nint_bits = 32\n')
        config = load_config(cwd=tmp_path, environ={})
        assert config.debug is True
        assert config.prompt == "> "
        assert config.int_bits == 32

    def test_pyproject_table(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n\n[tool.reckon]\nint_bits = 16\n')
        config = load_config(cwd=tmp_path, environ={})
        assert config.int_bits == 16

    def test_pyproject_without_table_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert find_config_file(tmp_path) is None

    def test_pyproject_with_non_table_tool_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('tool = "x"\n')
        assert find_config_file(tmp_path) is None
        assert load_config(cwd=tmp_path, environ={}) == ReckonConfig()

    def test_pyproject_reckon_not_a_table(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool]\nreckon = 3\n')
        with pytest.raises(ConfigError, match="must be a table"):
            load_config(path, environ={})

    def test_reckon_toml_preferred(self, tmp_path: Path) -> None:
        (tmp_path / "reckon.toml").write_text("int_bits = 8\n")
        (tmp_path / "pyproject.toml").write_text("[tool.reckon]\nint_bits = 16\n")
        assert find_config_file(tmp_path) == tmp_path / "reckon.toml"
        assert load_config(cwd=tmp_path, environ={}).int_bits == 8

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text("debug = true\n")
        assert load_config(path, environ={}).debug is True

    def test_explicit_path_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.toml", environ={})

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "reckon.toml").write_text("debug = \n")
        with pytest.raises(ConfigError, match="invalid TOML"):
            load_config(cwd=tmp_path, environ={})

    def test_unknown_key(self, tmp_path: Path) -> None:
        (tmp_path / "reckon.toml").write_text("colour = 'red'\n")
        with pytest.raises(ConfigError, match="invalid configuration"):
            load_config(cwd=tmp_path, environ={})

    def test_wrong_type(self, tmp_path: Path) -> None:
        (tmp_path / "reckon.toml").write_text("int_bits = 'wide'\n")
        with pytest.raises(ConfigError):
            load_config(cwd=tmp_path, environ={})


class TestEnvironment:
    """RECKON_* variables override file values."""

    def test_debug_truthy(self, tmp_path: Path) -> None:
        for raw in ("1", "true", "YES", " on "):
            assert load_config(cwd=tmp_path, environ={"RECKON_DEBUG": raw}).debug is True

    def test_debug_overrides_file(self, tmp_path: Path) -> None:
        (tmp_path / "reckon.toml").write_text("debug = true\n")
        assert load_config(cwd=tmp_path, environ={"RECKON_DEBUG": "0"}).debug is False

    def test_unknown_debug_value_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="reckon.core.config"):
            config = load_config(cwd=tmp_path, environ={"RECKON_DEBUG": "maybe"})
        assert config.debug is False
        assert "Unknown RECKON_DEBUG value" in caplog.text

    def test_int_bits(self, tmp_path: Path) -> None:
        assert load_config(cwd=tmp_path, environ={"RECKON_INT_BITS": "64"}).int_bits == 64

    def test_int_bits_empty_clears(self, tmp_path: Path) -> None:
        (tmp_path / "reckon.toml").write_text("int_bits = 32\n")
        assert load_config(cwd=tmp_path, environ={"RECKON_INT_BITS": ""}).int_bits is None

    def test_int_bits_not_a_number(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="RECKON_INT_BITS must be an integer"):
            load_config(cwd=tmp_path, environ={"RECKON_INT_BITS": "lots"})
