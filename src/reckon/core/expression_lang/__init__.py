"""
reckon integer expression language.

Single-pass scanner and recursive descent evaluator for expressions made
of integers, ``+ - * /``, parentheses, and unary minus.

Usage:
    from reckon.core.expression_lang import evaluate

    evaluate("(2 + 3) * 4")
    # 20
"""

from reckon.core.expression_lang.evaluator import Evaluation, evaluate, try_evaluate
from reckon.core.expression_lang.tokenizer import Cursor, TokenKind

__all__ = ["Cursor", "Evaluation", "TokenKind", "evaluate", "try_evaluate"]
