"""Rendering of errors and results for the front-ends."""
from __future__ import annotations
import math

from termcolor import colored

from .errors import ArithError, EvalError

ERROR = "red"


def _paint(text: str, color: bool, *args, **kwargs) -> str:
    return colored(text, *args, **kwargs) if color else text


def format_number(x: float) -> str:
    """Integral values print without a decimal point, others with at most 15
    decimals and no trailing zeros. Very small or very large magnitudes fall
    back to exponent notation."""
    if not math.isfinite(x):
        return str(x)
    if x == int(x) and abs(x) < 1e16:
        return str(int(x))
    if 1e-6 <= abs(x) < 1e16:
        return f"{x:.15f}".rstrip("0").rstrip(".")
    return f"{x:.15g}"


def format_error(error: ArithError, color: bool = True) -> str:
    """Renders `error` with the offending source line and a caret.

        error: Unexpected token RPAREN [parser]
         1 | 1 + )
           |     ^
    """
    head = _paint("error: ", color, ERROR, attrs=["bold"]) + f"{error.message} [{error.stage}]"
    if not isinstance(error, EvalError) or not error.source:
        return head

    src_lines = error.source.splitlines() or [""]
    rel = error.pos.line if error.pos else 1
    src = src_lines[min(rel, len(src_lines)) - 1]
    num = str(error.line)
    gutter = " " * len(num)

    out = [head, f" {num} | {src}"]
    if error.pos is not None:
        pointer = " " * (error.pos.column - 1) + _paint("^", color, ERROR, attrs=["bold"])
        out.append(f" {gutter} | {pointer}")
    return "\n".join(out)
