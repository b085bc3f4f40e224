from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from .ast_nodes import *
from .errors import Position, UnsupportedOperator

log = logging.getLogger(__name__)

# ---------- Instructions ----------
@dataclass(frozen=True)
class Instr:
    # source position of the node that emitted this instruction
    pos: Optional[Position] = field(default=None, compare=False, repr=False, kw_only=True)
    opcode: ClassVar[str] = "?"

    def __str__(self) -> str:
        return self.opcode

@dataclass(frozen=True)
class PushConst(Instr):
    value: float = 0.0
    opcode: ClassVar[str] = "push"

    def __str__(self) -> str:
        return f"push {self.value!r}"

@dataclass(frozen=True)
class Add(Instr):
    opcode: ClassVar[str] = "add"

@dataclass(frozen=True)
class Sub(Instr):
    opcode: ClassVar[str] = "sub"

@dataclass(frozen=True)
class Mul(Instr):
    opcode: ClassVar[str] = "mul"

@dataclass(frozen=True)
class Div(Instr):
    opcode: ClassVar[str] = "div"

@dataclass(frozen=True)
class Negate(Instr):
    opcode: ClassVar[str] = "neg"


BINARY_OPS = {"+": Add, "-": Sub, "*": Mul, "/": Div}


class BytecodeCompiler:
    """Lowers an AST to a flat instruction list by post-order traversal."""

    def __init__(self):
        self.code: List[Instr] = []

    def emit(self, instr: Instr):
        self.code.append(instr)

    def generate(self, expr: Expr) -> List[Instr]:
        self.code = []
        self.gen_expr(expr)
        log.debug("compiled %d instructions", len(self.code))
        return self.code

    def gen_expr(self, e: Expr):
        # explicit work stack; long sums fold into left-deep trees that
        # would outgrow the call stack
        work = [(e, False)]
        while work:
            node, expanded = work.pop()

            if isinstance(node, Number):
                self.emit(PushConst(float(node.value), pos=node.pos))

            elif isinstance(node, BinaryOp):
                ins = BINARY_OPS.get(node.op)
                if ins is None:
                    raise UnsupportedOperator(repr(node.op), node.pos)
                if expanded:
                    self.emit(ins(pos=node.pos))
                else:
                    work.append((node, True))
                    work.append((node.right, False))
                    work.append((node.left, False))

            elif isinstance(node, UnaryOp):
                if node.op not in ("+", "-"):
                    raise UnsupportedOperator(repr(node.op), node.pos)
                if expanded:
                    self.emit(Negate(pos=node.pos))
                elif node.op == "-":
                    work.append((node, True))
                    work.append((node.operand, False))
                else:
                    # unary plus is erased here
                    work.append((node.operand, False))

            elif isinstance(node, Empty):
                self.emit(PushConst(0.0, pos=node.pos))

            else:
                raise UnsupportedOperator(type(node).__name__, getattr(node, "pos", None))


def compile_expr(expr: Expr) -> List[Instr]:
    return BytecodeCompiler().generate(expr)


def format_bytecode(code: List[Instr]) -> str:
    return "\n".join(f"{i:04d}  {instr}" for i, instr in enumerate(code))
