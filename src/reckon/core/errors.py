"""
Error types for reckon expression scanning, evaluation, and configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    """Classification of fatal evaluation failures."""

    LEXICAL = "lexical"
    UNARY_OPERAND = "unary_operand"
    MISSING_PAREN = "missing_paren"
    ILLEGAL_PRIMARY = "illegal_primary"
    DIVISION_BY_ZERO = "division_by_zero"
    TRAILING_INPUT = "trailing_input"
    OVERFLOW = "overflow"
    NESTING = "nesting"


@dataclass
class ErrorContext:
    """
    Location of an error inside the expression source.

    Attributes:
        source: The expression text that was being evaluated
        column: Column number (1-indexed) where the offending token starts
    """

    source: str
    column: int

    def format(self) -> str:
        """
        Format the source with a caret under the error column.

        Returns:
            Two lines, e.g. "  1 + * 2" and "      ^"
        """
        prefix = "  "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"{prefix}{self.source}\n{marker}"


class ReckonError(Exception):
    """Base exception for all reckon errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(message)

    def describe(self) -> str:
        """Message followed by the source snippet, if a location is known."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class ConfigError(ReckonError):
    """
    Raised when configuration cannot be loaded.

    Examples:
    - Malformed TOML
    - Values of the wrong type
    - Unparseable RECKON_* environment variables
    """

    pass


class ExpressionError(ReckonError):
    """Base class for every failure that aborts an evaluation."""

    kind: ErrorKind


class LexError(ExpressionError):
    """An input character does not begin any valid token."""

    kind = ErrorKind.LEXICAL


class UnaryOperandError(ExpressionError):
    """Unary minus not followed by a number or a parenthesized expression."""

    kind = ErrorKind.UNARY_OPERAND


class MissingParenError(ExpressionError):
    """An open parenthesis is never matched by a close."""

    kind = ErrorKind.MISSING_PAREN


class IllegalPrimaryError(ExpressionError):
    """
    A primary expression position holds a token that cannot start one.

    Examples:
    - A binary operator: "2+*3"
    - A stray close parenthesis: ")"
    - End of input: "2+"
    """

    kind = ErrorKind.ILLEGAL_PRIMARY


class DivisionByZeroError(ExpressionError):
    """Right operand of '/' evaluated to zero."""

    kind = ErrorKind.DIVISION_BY_ZERO


class TrailingInputError(ExpressionError):
    """Tokens remain after a complete expression has been reduced."""

    kind = ErrorKind.TRAILING_INPUT


class IntegerOverflowError(ExpressionError):
    """A literal or intermediate result does not fit the configured width."""

    kind = ErrorKind.OVERFLOW


class NestingTooDeepError(ExpressionError):
    """Parentheses or unary minuses nest deeper than the interpreter allows."""

    kind = ErrorKind.NESTING
