"""Turn user-typed formulas such as ``x^3 - x - 2`` into float callables."""

from __future__ import annotations

from tokenize import TokenError

import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from custom_types.types import ScalarFunction

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)


class ExpressionError(ValueError):
    """Raised when a formula cannot be turned into f(x)."""


def parse_expression(text: str, variable: str = "x") -> sp.Expr:
    """Parse text into a sympy expression in the single variable"""
    if not text or not text.strip():
        raise ExpressionError("Empty expression")

    x = sp.Symbol(variable)
    try:
        expr = parse_expr(text.strip(), local_dict={variable: x},
                          transformations=TRANSFORMATIONS)
    except (SyntaxError, TokenError, TypeError, ValueError, sp.SympifyError) as e:
        raise ExpressionError(f"Could not parse {text!r}: {e}") from e

    if not isinstance(expr, sp.Expr):
        raise ExpressionError(f"{text!r} is not a numeric expression")

    extra = expr.free_symbols - {x}
    if extra:
        names = ", ".join(sorted(str(s) for s in extra))
        raise ExpressionError(f"Unknown symbol(s) {names}; only {variable} is allowed")

    if expr.has(sp.I, sp.zoo, sp.nan):
        raise ExpressionError(f"{text!r} is not a real-valued expression: {expr}")
    return expr


def make_function(text: str, variable: str = "x") -> ScalarFunction:
    """
    Build f(x) from a formula.

    Uses the math module for evaluation, so f works on plain floats and
    raises (e.g. ValueError for sqrt(-1)) where math does.
    """
    expr = parse_expression(text, variable)
    compiled = sp.lambdify(sp.Symbol(variable), expr, modules="math")

    def f(x: float) -> float:
        value = compiled(x)
        # e.g. x**0.5 at negative x
        if isinstance(value, complex):
            raise ValueError(f"f({x}) = {value} is not real")
        return float(value)

    f.__doc__ = f"f({variable}) = {expr}"
    return f
