"""Calculator app: type an arithmetic expression, Enter evaluates it."""

from __future__ import annotations

import ast
import operator
import re
from typing import Union

from ..shell.base_app import BaseApp, ShellContext


ALLOWED_CHARS = re.compile(r"[0-9+\-*/().]")

# Limits for `**`: the exponent itself and the bit size of an integer result.
MAX_EXPONENT = 100
MAX_POWER_BITS = 4096


class ExpressionError(ValueError):
    """Expression is not plain arithmetic."""


def _bounded_pow(base, exponent):
    if abs(exponent) > MAX_EXPONENT:
        raise ExpressionError(f"exponent {exponent} out of range")
    if isinstance(base, int) and exponent > 0 and base.bit_length() * exponent > MAX_POWER_BITS:
        raise ExpressionError("power too large")
    result = operator.pow(base, exponent)
    if isinstance(result, complex):
        raise ExpressionError("complex result")
    return result


_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: _bounded_pow,
}

_UNARY_OPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

Number = Union[int, float]


def _eval_node(node: ast.AST) -> Number:
    if isinstance(node, ast.Expression):
        return _eval_node(node.body)
    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return node.value
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        return _BINARY_OPS[type(node.op)](_eval_node(node.left), _eval_node(node.right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval_node(node.operand))
    raise ExpressionError(f"unsupported syntax: {type(node).__name__}")


def evaluate(expression: str) -> Number:
    """Evaluate ``+ - * / ** ( ) .`` arithmetic without ``eval``.

    Raises:
        ExpressionError: on anything that is not plain arithmetic
        ZeroDivisionError: on division by zero
    """
    if not expression or not all(ALLOWED_CHARS.fullmatch(ch) for ch in expression):
        raise ExpressionError("empty or invalid expression")
    try:
        tree = ast.parse(expression, mode="eval")
        return _eval_node(tree)
    except ExpressionError:
        raise
    except (SyntaxError, ValueError, RecursionError, MemoryError) as exc:
        # Deeply chained input overflows the parser or the tree walk.
        raise ExpressionError(f"{type(exc).__name__}: {exc}") from exc


def format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class Calculator(BaseApp):
    title = "Calculator"
    id = "calc"

    def handle_input(self, ctx: ShellContext, key: str) -> None:
        session = ctx.session
        if key == "Escape":
            self.request_idle(ctx)
        elif key == "Enter":
            self.evaluate_expression(ctx)
        elif key == "Backspace":
            session.input_buffer = session.input_buffer[:-1]
        elif len(key) == 1 and ALLOWED_CHARS.fullmatch(key):
            session.input_buffer += key

    def evaluate_expression(self, ctx: ShellContext) -> None:
        try:
            text = format_number(evaluate(ctx.session.input_buffer))
        except (ExpressionError, ArithmeticError, ValueError) as exc:
            ctx.log.debug(f"[calc] {ctx.session.input_buffer[:40]!r}: {exc}")
            ctx.display.set_line(2, "Error: Invalid expression $@color=red$ $@bold$", True)
            return
        ctx.display.set_line(2, f"Result: {text} $@color=green$", True)
        ctx.session.input_buffer = ""

    def main(self, ctx: ShellContext) -> None:
        ctx.display.set_line(1, "Input: " + ctx.session.input_buffer)
        ctx.display.set_line(3, "Type an expression (e.g., 2+2) and press ENTER")
        ctx.display.set_line(4, "Press ESC to return to main menu")
