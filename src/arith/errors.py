"""Positions and the error hierarchy shared by every pipeline stage.

Each stage raises its own subclass of ArithError. evaluate() wraps whatever
reaches it into an EvalError so front-ends only ever format one type.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Position:
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class ArithError(Exception):
    stage = "internal"
    kind = "Error"

    def __init__(self, message: str, pos: Optional[Position] = None):
        where = f" at {pos}" if pos is not None else ""
        super().__init__(f"{self.kind}{where} - {message}")
        self.message = message
        self.pos = pos

    @property
    def line(self) -> int:
        return self.pos.line if self.pos else -1

    @property
    def column(self) -> int:
        return self.pos.column if self.pos else -1


# ---------- tokenizer ----------
class TokenizerError(ArithError):
    stage = "tokenizer"
    kind = "TokenizerError"


class UnexpectedChar(TokenizerError):
    kind = "UnexpectedChar"

    def __init__(self, char: str, pos: Position):
        super().__init__(f"Unexpected character '{char}'", pos)
        self.char = char


class InvalidNumber(TokenizerError):
    kind = "InvalidNumber"

    def __init__(self, text: str, pos: Position):
        super().__init__(f"Invalid number '{text}'", pos)
        self.text = text


# ---------- parser ----------
class ParserError(ArithError):
    stage = "parser"
    kind = "ParserError"


class UnexpectedToken(ParserError):
    kind = "UnexpectedToken"

    def __init__(self, found: str, pos: Position, expected: Optional[str] = None):
        msg = f"Unexpected token {found}"
        if expected:
            msg += f", expected {expected}"
        super().__init__(msg, pos)
        self.found = found
        self.expected = expected


class UnexpectedEndOfInput(ParserError):
    kind = "UnexpectedEndOfInput"

    def __init__(self, pos: Position, expected: Optional[str] = None):
        msg = "Unexpected end of input"
        if expected:
            msg += f", expected {expected}"
        super().__init__(msg, pos)
        self.expected = expected


class NestingTooDeep(ParserError):
    kind = "NestingTooDeep"

    def __init__(self, limit: int, pos: Position):
        super().__init__(f"Expression nested deeper than {limit} levels", pos)
        self.limit = limit


# ---------- compiler ----------
class CompileError(ArithError):
    stage = "compiler"
    kind = "CompileError"


class UnsupportedOperator(CompileError):
    kind = "UnsupportedOperator"

    def __init__(self, op: str, pos: Optional[Position] = None):
        super().__init__(f"Unsupported operator {op}", pos)
        self.op = op


# ---------- executor ----------
class ExecError(ArithError):
    stage = "executor"
    kind = "ExecError"


class DivisionByZero(ExecError):
    kind = "DivisionByZero"

    def __init__(self, pos: Optional[Position] = None):
        super().__init__("Division by zero", pos)


class StackUnderflow(ExecError):
    kind = "StackUnderflow"

    def __init__(self, instr: str, pos: Optional[Position] = None):
        super().__init__(f"Stack underflow while executing '{instr}'", pos)
        self.instr = instr


class ExcessValues(ExecError):
    kind = "ExcessValues"

    def __init__(self, count: int):
        super().__init__(f"Execution finished with {count} values on the stack")
        self.count = count


# ---------- top level ----------
class EvalError(ArithError):
    """Any stage error, tagged with the logical line it came from.

    `line` on the wrapper is the absolute physical line of the failure, i.e. the
    cause's relative line shifted by the logical line's starting line.
    """

    def __init__(self, cause: ArithError, source: str = "", start_line: int = 1):
        self.cause = cause
        self.source = source
        self.start_line = start_line
        self.stage = cause.stage
        self.kind = cause.kind
        super().__init__(cause.message, cause.pos)

    @property
    def line(self) -> int:
        if self.pos is None:
            return self.start_line
        return self.start_line + self.pos.line - 1
