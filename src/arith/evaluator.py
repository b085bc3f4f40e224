"""The pipeline as one call: text -> tokens -> AST -> bytecode -> value.

evaluate() never raises for bad input. Whatever stage fails, its error comes
back wrapped in an EvalError inside the returned EvalResult, so callers (and
tests) inspect failures the same way they inspect values.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional

from .codegen import compile_expr
from .errors import ArithError, EvalError
from .lexer import tokenize
from .parser import parse
from .vm import execute

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvalResult:
    source: str
    value: Optional[float] = None
    error: Optional[EvalError] = None
    line: int = 1

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        if self.error is not None:
            raise self.error
        return self.value


@dataclass(frozen=True)
class LogicalLine:
    text: str
    line: int


def run_pipeline(text: str) -> float:
    """Like evaluate(), but lets the stage errors propagate."""
    tokens = tokenize(text)
    ast = parse(tokens)
    code = compile_expr(ast)
    return execute(code)


def evaluate(text: str, line: int = 1) -> EvalResult:
    try:
        value = run_pipeline(text)
    except ArithError as exc:
        log.debug("%s failed: %s", exc.stage, exc)
        return EvalResult(source=text, error=EvalError(exc, text, line), line=line)
    return EvalResult(source=text, value=value, line=line)


def _code_part(raw: str) -> str:
    return raw.split(";", 1)[0].strip()


def join_logical_lines(text: str) -> List[LogicalLine]:
    """Split `text` into logical lines.

    A physical line whose code (the part before any ';' comment) ends with a
    backslash continues onto the next one. The backslash and the comment of the
    continued line are dropped and the pieces are joined with a single space.
    Lines with no code at all are skipped.
    """
    out: List[LogicalLine] = []
    pieces: List[str] = []
    start = 0

    for num, raw in enumerate(text.splitlines(), start=1):
        code = _code_part(raw)
        if not pieces:
            start = num
        if code.endswith("\\"):
            pieces.append(code[:-1].strip())
            continue
        pieces.append(raw.strip())
        joined = " ".join(p for p in pieces if p)
        if _code_part(joined):
            out.append(LogicalLine(joined, start))
        pieces = []

    # input ended on a continuation
    if pieces:
        joined = " ".join(p for p in pieces if p)
        if joined:
            out.append(LogicalLine(joined, start))
    return out


def evaluate_lines(text: str) -> List[EvalResult]:
    return [evaluate(ll.text, ll.line) for ll in join_logical_lines(text)]
