"""
reckon - integer arithmetic expression evaluator.

A single-pass recursive descent evaluator for expressions built from
integers, ``+ - * /``, parentheses, and unary minus.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core.errors import ConfigError, ExpressionError, ReckonError
from .core.expression_lang import evaluate, try_evaluate


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    # Fall back to installed metadata
    try:
        return _metadata_version("reckon")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ConfigError",
    "ExpressionError",
    "ReckonError",
    "evaluate",
    "try_evaluate",
]
