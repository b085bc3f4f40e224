"""arith: arithmetic expressions through tokenizer, parser, bytecode compiler
and stack machine."""

from .errors import (
    Position, ArithError, EvalError,
    TokenizerError, UnexpectedChar, InvalidNumber,
    ParserError, UnexpectedToken, UnexpectedEndOfInput, NestingTooDeep,
    CompileError, UnsupportedOperator,
    ExecError, DivisionByZero, StackUnderflow, ExcessValues,
)
from .lexer import Token, tokenize
from .parser import parse
from .codegen import compile_expr
from .vm import execute
from .evaluator import EvalResult, evaluate, evaluate_lines, join_logical_lines

__version__ = "0.1.0"
