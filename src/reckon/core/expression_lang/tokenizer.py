"""
Scanner for reckon arithmetic expressions.

The scanner is a cursor over the source characters. Each call to
``Cursor.next_token`` classifies the next lexeme and stores the result on
the cursor; the evaluator reads ``token`` and ``number`` from there.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum, auto

from reckon.core.errors import ErrorContext, IntegerOverflowError, LexError

logger = logging.getLogger(__name__)

TraceSink = Callable[[str], None]


class TokenKind(StrEnum):
    """Token types for arithmetic expressions."""

    NUMBER = auto()

    # Operators
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # End of input
    END = auto()

    # Nothing scanned yet
    UNSET = auto()


_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.ADD,
    "-": TokenKind.SUB,
    "*": TokenKind.MUL,
    "/": TokenKind.DIV,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


def _is_ascii_digit(c: str) -> bool:
    # str.isdigit() also accepts superscripts and non-Latin digits
    return "0" <= c <= "9"


def _print_trace(message: str) -> None:
    print(f"[debug] {message}")


class Cursor:
    """Mutable scan state shared by the scanner and every grammar rule.

    Attributes:
        source: Expression text; never modified after construction.
        index: Position of the next unread character. Only moves forward.
        start: Position where the current token begins.
        token: Kind of the current token.
        number: Value of the current token when it is a NUMBER.
        debug: Whether trace lines are emitted.
        int_bits: Signed integer width to enforce, or None for unbounded.
    """

    __slots__ = ("source", "index", "start", "token", "number", "debug", "int_bits", "_trace")

    def __init__(
        self,
        source: str,
        *,
        debug: bool = False,
        trace: TraceSink | None = None,
        int_bits: int | None = None,
    ) -> None:
        self.source = source
        self.index = 0
        self.start = 0
        self.token = TokenKind.UNSET
        self.number = 0
        self.debug = debug
        self.int_bits = int_bits
        self._trace = trace or _print_trace

    def __repr__(self) -> str:
        return f"Cursor({self.token}, index={self.index}, number={self.number})"

    def trace(self, message: str) -> None:
        """Emit a debug trace line if debug mode is on."""
        logger.debug(message)
        if self.debug:
            self._trace(message)

    def context(self) -> ErrorContext:
        """Location of the current token, for error reporting."""
        return ErrorContext(source=self.source, column=self.start + 1)

    def check_width(self, value: int) -> int:
        """Return *value*, or raise if it does not fit ``int_bits``."""
        if self.int_bits is not None:
            limit = 1 << (self.int_bits - 1)
            if not -limit <= value < limit:
                raise IntegerOverflowError("integer overflow", self.context())
        return value

    def next_token(self) -> None:
        """Scan the next token into ``token`` (and ``number`` for NUMBER)."""
        source = self.source
        n = len(source)

        while self.index < n and source[self.index].isspace():
            self.index += 1

        self.start = self.index

        if self.index >= n:
            self.token = TokenKind.END
            self.trace("Token: END")
            return

        c = source[self.index]

        if c in _SINGLE_CHAR:
            self.token = _SINGLE_CHAR[c]
            self.index += 1
            self.trace(f"Token: {self.token.name}")
            return

        if _is_ascii_digit(c):
            value = 0
            while self.index < n and _is_ascii_digit(source[self.index]):
                value = value * 10 + (ord(source[self.index]) - ord("0"))
                self.index += 1
            self.token = TokenKind.NUMBER
            self.number = self.check_width(value)
            self.trace(f"Token: NUMBER({value})")
            return

        raise LexError(f"unknown token: {c!r}", self.context())
