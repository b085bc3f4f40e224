from __future__ import annotations
from dataclasses import dataclass
from typing import List

from .errors import Position

@dataclass
class Node:
    line: int = 0
    column: int = 0

    @property
    def pos(self) -> Position:
        return Position(self.line, self.column)

# ---------- Expressions ----------
class Expr(Node): ...

@dataclass
class Number(Expr):
    value: float = 0.0

@dataclass
class UnaryOp(Expr):
    op: str = ""           # "+" or "-"
    operand: Expr = None

@dataclass
class BinaryOp(Expr):
    op: str = ""           # "+", "-", "*" or "/"
    left: Expr = None
    right: Expr = None

@dataclass
class Empty(Expr):
    """`()`, evaluates to 0."""


def dump(node: Expr, indent: int = 0) -> str:
    """Indented one-node-per-line rendering, used by `--emit ast`."""
    lines: List[str] = []
    work = [(node, indent)]
    while work:
        node, depth = work.pop()
        pad = "  " * depth
        if isinstance(node, Number):
            lines.append(f"{pad}Number {node.value!r}")
        elif isinstance(node, UnaryOp):
            lines.append(f"{pad}UnaryOp {node.op}")
            work.append((node.operand, depth + 1))
        elif isinstance(node, BinaryOp):
            lines.append(f"{pad}BinaryOp {node.op}")
            # right is pushed first so left is rendered first
            work.append((node.right, depth + 1))
            work.append((node.left, depth + 1))
        elif isinstance(node, Empty):
            lines.append(f"{pad}Empty")
        else:
            lines.append(f"{pad}{type(node).__name__}")
    return "\n".join(lines)
