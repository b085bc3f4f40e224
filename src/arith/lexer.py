from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import List, Optional

import ply.lex as lex

from .errors import Position, UnexpectedChar, InvalidNumber

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    type: str
    pos: Position
    value: Optional[float] = None

    def __repr__(self) -> str:
        val = "" if self.value is None else f" {self.value!r}"
        return f"<{self.pos} {self.type}{val}>"


class ArithLexer:

    tokens = (
        'NUMBER',
        'PLUS', 'MINUS', 'STAR', 'SLASH',
        'LPAREN', 'RPAREN',
    )

    # Ignored characters
    t_ignore = ' \t\r'

    # ';' comments run to end of line
    t_ignore_COMMENT = r';[^\n]*'

    t_PLUS = r'\+'
    t_MINUS = r'-'
    t_STAR = r'\*'
    t_SLASH = r'/'
    t_LPAREN = r'\('
    t_RPAREN = r'\)'

    def __init__(self):
        self.lexer = None

    # Integer, decimal and scientific numerals. The exponent digits are
    # optional here so that "1e" is reported as a bad number, not a bad char.
    def t_NUMBER(self, t):
        r'\d+(?:\.\d*)?(?:[eE][+-]?\d*)?'
        pos = self._position(t.lexer, t.lexpos)
        try:
            value = float(t.value)
        except ValueError:
            raise InvalidNumber(t.value, pos) from None
        if math.isinf(value):
            raise InvalidNumber(t.value, pos)
        t.value = value
        return t

    #  line number tracking
    def t_newline(self, t):
        r'\n+'
        t.lexer.lineno += len(t.value)

    def t_error(self, t):
        raise UnexpectedChar(t.value[0], self._position(t.lexer, t.lexpos))

    @staticmethod
    def _position(lexer, lexpos: int) -> Position:
        line_start = lexer.lexdata.rfind('\n', 0, lexpos) + 1
        return Position(lexer.lineno, lexpos - line_start + 1)

    def build(self, **kwargs):
        """Build the lexer"""
        self.lexer = lex.lex(module=self, **kwargs)
        return self.lexer

    def tokenize(self, data: str) -> List[Token]:
        if not self.lexer:
            self.build()

        # clones share the compiled master regex but not the scan state
        lexer = self.lexer.clone()
        lexer.lineno = 1
        lexer.input(data)
        tokens: List[Token] = []

        while True:
            tok = lexer.token()
            if not tok:
                break
            pos = self._position(lexer, tok.lexpos)
            value = tok.value if tok.type == 'NUMBER' else None
            tokens.append(Token(tok.type, pos, value))

        tokens.append(Token('EOF', self._position(lexer, len(data))))
        log.debug("tokenized %d tokens", len(tokens))
        return tokens


_default_lexer = ArithLexer()


def tokenize(source: str) -> List[Token]:
    """Tokenize `source`, always ending with an EOF token.

    Raises UnexpectedChar or InvalidNumber on bad input.
    """
    return _default_lexer.tokenize(source)


def print_tokens(tokens: List[Token], out=None):
    if not tokens:
        print("No tokens found!", file=out)
        return

    print(f"{'Line':<6}| {'Column':<7}| {'Token':<10}| Value", file=out)
    print("-" * 40, file=out)

    for tok in tokens:
        value = "" if tok.value is None else repr(tok.value)
        print(f"{tok.pos.line:<6}| {tok.pos.column:<7}| {tok.type:<10}| {value}", file=out)
