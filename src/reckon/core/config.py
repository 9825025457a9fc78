"""
Configuration for the reckon command line.

Settings are resolved in this order, later sources winning:

1. Defaults on ``ReckonConfig``
2. ``reckon.toml`` in the working directory, or the ``[tool.reckon]``
   table of ``pyproject.toml`` (or an explicit file)
3. ``RECKON_DEBUG`` / ``RECKON_INT_BITS`` environment variables
4. Command line flags (the CLI builds a new ``ReckonConfig`` so they are
   validated the same way)

Example ``reckon.toml``:

    debug = true
    prompt = "> "
    int_bits = 32
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from reckon.core.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "reckon.toml"
PYPROJECT_FILENAME = "pyproject.toml"

DEBUG_ENV_VAR = "RECKON_DEBUG"
INT_BITS_ENV_VAR = "RECKON_INT_BITS"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


class ReckonConfig(BaseModel):
    """Resolved settings for one CLI run."""

    model_config = ConfigDict(extra="forbid")

    debug: bool = False
    prompt: str = "Enter an expression: "
    int_bits: int | None = None

    @field_validator("int_bits")
    @classmethod
    def _check_int_bits(cls, v: int | None) -> int | None:
        # 0 means unbounded, same as leaving it unset
        if v is None or v == 0:
            return None
        if v < 2:
            raise ValueError("int_bits must be 0 (unbounded) or at least 2")
        return v


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e


def _table_for(path: Path) -> dict[str, Any]:
    """Return the reckon settings table held by *path*."""
    data = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        tool = data.get("tool", {})
        # A pyproject.toml that is not ours may use "tool" for anything
        table = tool.get("reckon", {}) if isinstance(tool, dict) else {}
    else:
        table = data
    if not isinstance(table, dict):
        raise ConfigError(f"reckon settings in {path} must be a table")
    return table


def find_config_file(cwd: Path) -> Path | None:
    """Locate the config file for *cwd*, preferring ``reckon.toml``."""
    candidate = cwd / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    pyproject = cwd / PYPROJECT_FILENAME
    if pyproject.is_file() and _table_for(pyproject):
        return pyproject
    return None


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    if DEBUG_ENV_VAR in environ:
        raw = environ[DEBUG_ENV_VAR].lower().strip()
        if raw in _TRUTHY:
            overrides["debug"] = True
        elif raw in _FALSY:
            overrides["debug"] = False
        else:
            logger.warning(
                "Unknown %s value '%s'. Valid values: 1/0, true/false, yes/no, on/off. Ignoring.",
                DEBUG_ENV_VAR,
                raw,
            )

    if INT_BITS_ENV_VAR in environ:
        raw = environ[INT_BITS_ENV_VAR].strip()
        try:
            overrides["int_bits"] = int(raw) if raw else None
        except ValueError as e:
            raise ConfigError(f"{INT_BITS_ENV_VAR} must be an integer, got {raw!r}") from e

    return overrides


def load_config(
    path: Path | None = None,
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ReckonConfig:
    """
    Load configuration from file and environment.

    Args:
        path: Explicit config file; must exist. If None, look in *cwd*.
        cwd: Directory searched when *path* is None (default: current dir)
        environ: Environment mapping (default: ``os.environ``)

    Returns:
        ReckonConfig with file and environment values applied

    Raises:
        ConfigError: If the file is unreadable or holds invalid values
    """
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"config file not found: {path}")
        config_path: Path | None = path
    else:
        config_path = find_config_file(cwd or Path.cwd())

    settings: dict[str, Any] = {}
    if config_path is not None:
        logger.debug("Loading config from %s", config_path)
        settings.update(_table_for(config_path))

    settings.update(_env_overrides(os.environ if environ is None else environ))

    try:
        return ReckonConfig(**settings)
    except ValidationError as e:
        where = f" in {config_path}" if config_path else ""
        raise ConfigError(f"invalid configuration{where}: {e}") from e
