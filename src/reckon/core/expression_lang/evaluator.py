"""
Recursive descent evaluator for reckon arithmetic expressions.

Grammar (precedence low to high):
    expr        → add_sub_expr
    add_sub_expr → mul_div_expr (("+"|"-") mul_div_expr)*
    mul_div_expr → primary_expr (("*"|"/") primary_expr)*
    primary_expr → NUMBER | "-" primary_expr | "(" expr ")"

Scanning and evaluation happen in a single pass: no tree is built. Every
rule is entered with ``cursor.token`` on its first token and returns with
``cursor.token`` on the first token it did not consume.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from reckon.core.errors import (
    DivisionByZeroError,
    ErrorKind,
    ExpressionError,
    IllegalPrimaryError,
    MissingParenError,
    NestingTooDeepError,
    TrailingInputError,
    UnaryOperandError,
)
from reckon.core.expression_lang.tokenizer import Cursor, TokenKind, TraceSink

logger = logging.getLogger(__name__)


def eval_expr(cursor: Cursor) -> int:
    """expr → add_sub_expr"""
    cursor.trace("Eval: expression")
    return eval_add_sub_expr(cursor)


def eval_add_sub_expr(cursor: Cursor) -> int:
    """mul_div_expr (('+' | '-') mul_div_expr)*"""
    cursor.trace("Eval: add/sub expression")
    result = eval_mul_div_expr(cursor)
    while cursor.token in (TokenKind.ADD, TokenKind.SUB):
        op = cursor.token
        cursor.next_token()
        rhs = eval_mul_div_expr(cursor)
        if op == TokenKind.ADD:
            result = cursor.check_width(result + rhs)
        else:
            result = cursor.check_width(result - rhs)
    return result


def eval_mul_div_expr(cursor: Cursor) -> int:
    """primary_expr (('*' | '/') primary_expr)*"""
    cursor.trace("Eval: mul/div expression")
    result = eval_primary_expr(cursor)
    while cursor.token in (TokenKind.MUL, TokenKind.DIV):
        op = cursor.token
        op_context = cursor.context()
        cursor.next_token()
        rhs = eval_primary_expr(cursor)
        if op == TokenKind.MUL:
            result = cursor.check_width(result * rhs)
        else:
            if rhs == 0:
                raise DivisionByZeroError("division by zero", op_context)
            result = cursor.check_width(_truncating_div(result, rhs))
    return result


def eval_primary_expr(cursor: Cursor) -> int:
    """NUMBER | '-' primary_expr | '(' expr ')'"""
    cursor.trace("Eval: primary expression")

    if cursor.token == TokenKind.NUMBER:
        value = cursor.number
        cursor.next_token()
        return value

    # Unary minus
    if cursor.token == TokenKind.SUB:
        cursor.next_token()
        if cursor.token == TokenKind.NUMBER:
            value = cursor.check_width(-cursor.number)
            cursor.next_token()
            return value
        if cursor.token == TokenKind.LPAREN:
            return cursor.check_width(-eval_primary_expr(cursor))
        raise UnaryOperandError(
            "unary minus must be followed by a number or parenthesized expression",
            cursor.context(),
        )

    # Parenthesized expression
    if cursor.token == TokenKind.LPAREN:
        cursor.next_token()
        value = eval_expr(cursor)
        if cursor.token != TokenKind.RPAREN:
            raise MissingParenError("missing closing parenthesis", cursor.context())
        cursor.next_token()
        return value

    raise IllegalPrimaryError(
        "illegal start of primary expression (expected number, '-', or '(')",
        cursor.context(),
    )


def _truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def evaluate(
    source: str,
    *,
    debug: bool = False,
    trace: TraceSink | None = None,
    int_bits: int | None = None,
) -> int:
    """Evaluate an arithmetic expression to an integer.

    Args:
        source: Expression text, e.g. "2 + 3 * (4 - 1)".
        debug: Emit one trace line per token and per grammar rule entered.
        trace: Where trace lines go; defaults to stdout with a "[debug]" prefix.
        int_bits: Enforce a signed integer width (e.g. 32). None is unbounded.

    Returns:
        The value of the expression.

    Raises:
        ExpressionError: On the first lexical, syntactic, or arithmetic error.
    """
    cursor = Cursor(source, debug=debug, trace=trace, int_bits=int_bits)
    try:
        cursor.next_token()
        value = eval_expr(cursor)
    except RecursionError as e:
        raise NestingTooDeepError("expression nested too deeply", cursor.context()) from e

    if cursor.token != TokenKind.END:
        raise TrailingInputError("trailing characters after expression", cursor.context())

    logger.debug("Evaluated %r = %d", source, value)
    return value


class EvaluationFailure(BaseModel):
    """Why an evaluation stopped."""

    kind: ErrorKind
    message: str
    column: int | None = None


class Evaluation(BaseModel):
    """Outcome of ``try_evaluate``: exactly one of ``value`` and ``error`` is set."""

    source: str
    value: int | None = None
    error: EvaluationFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def try_evaluate(
    source: str,
    *,
    debug: bool = False,
    trace: TraceSink | None = None,
    int_bits: int | None = None,
) -> Evaluation:
    """Like ``evaluate``, but report failures as a value instead of raising."""
    try:
        value = evaluate(source, debug=debug, trace=trace, int_bits=int_bits)
    except ExpressionError as e:
        column = e.context.column if e.context else None
        failure = EvaluationFailure(kind=e.kind, message=e.message, column=column)
        return Evaluation(source=source, error=failure)
    return Evaluation(source=source, value=value)
