from __future__ import annotations
import logging
from typing import List, Optional

from .ast_nodes import *
from .errors import UnexpectedToken, UnexpectedEndOfInput, NestingTooDeep
from .lexer import Token

log = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200

class TokenStream:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.i = 0

    def peek(self, k: int = 0) -> Token:
        # never run past the trailing EOF
        j = min(self.i + k, len(self.tokens) - 1)
        return self.tokens[j]

    def at_end(self) -> bool:
        return self.peek().type == "EOF"

    def advance(self) -> Token:
        tok = self.peek()
        if tok.type != "EOF":
            self.i += 1
        return tok

    def match(self, *types: str) -> Optional[Token]:
        tok = self.peek()
        if tok.type in types:
            return self.advance()
        return None

    def expect(self, ttype: str, what: str) -> Token:
        tok = self.peek()
        if tok.type != ttype:
            raise unexpected(tok, what)
        return self.advance()

def unexpected(tok: Token, expected: Optional[str] = None):
    if tok.type == "EOF":
        return UnexpectedEndOfInput(tok.pos, expected)
    return UnexpectedToken(tok.type, tok.pos, expected)

def _loc(tok: Token):
    return tok.pos.line, tok.pos.column

class Parser:
    """Recursive-descent parser.

        expression := term ((PLUS|MINUS) term)*
        term       := factor ((STAR|SLASH) factor | LPAREN [expression] RPAREN)*
        factor     := NUMBER | LPAREN [expression] RPAREN | (PLUS|MINUS) factor

    Only parentheses count towards `max_depth`; each level costs a handful
    of Python frames. Unary prefix chains and long operator chains are
    folded in loops and may be arbitrarily long.
    """

    def __init__(self, tokens: List[Token], max_depth: int = DEFAULT_MAX_DEPTH):
        if not tokens or tokens[-1].type != "EOF":
            raise ValueError("token sequence must end with an EOF token")
        self.ts = TokenStream(tokens)
        self.max_depth = max_depth
        self.depth = 0

    def parse(self) -> Expr:
        try:
            expr = self.parse_expression()
        except RecursionError:
            # a lowered interpreter limit can still be hit below max_depth
            raise NestingTooDeep(self.max_depth, self.ts.peek().pos) from None
        tok = self.ts.peek()
        if tok.type != "EOF":
            raise UnexpectedToken(tok.type, tok.pos, "end of input")
        log.debug("parsed %s at %s", type(expr).__name__, expr.pos)
        return expr

    # ---------------- EXPRESSIONS (precedence) ----------------
    def parse_expression(self) -> Expr:
        expr = self.parse_term()
        while True:
            if self.ts.match("PLUS"):
                op_tok = self.ts.tokens[self.ts.i-1]
                rhs = self.parse_term()
                expr = BinaryOp(op="+", left=expr, right=rhs, line=op_tok.pos.line, column=op_tok.pos.column)
            elif self.ts.match("MINUS"):
                op_tok = self.ts.tokens[self.ts.i-1]
                rhs = self.parse_term()
                expr = BinaryOp(op="-", left=expr, right=rhs, line=op_tok.pos.line, column=op_tok.pos.column)
            else:
                break
        return expr

    def parse_term(self) -> Expr:
        expr = self.parse_factor()
        while True:
            if self.ts.match("STAR"):
                op_tok = self.ts.tokens[self.ts.i-1]
                rhs = self.parse_factor()
                expr = BinaryOp(op="*", left=expr, right=rhs, line=op_tok.pos.line, column=op_tok.pos.column)
            elif self.ts.match("SLASH"):
                op_tok = self.ts.tokens[self.ts.i-1]
                rhs = self.parse_factor()
                expr = BinaryOp(op="/", left=expr, right=rhs, line=op_tok.pos.line, column=op_tok.pos.column)
            elif self.ts.peek().type == "LPAREN":
                # implicit multiplication: `3(5)`, `(2+1)(4)`
                line, col = _loc(self.ts.peek())
                rhs = self.parse_group()
                expr = BinaryOp(op="*", left=expr, right=rhs, line=line, column=col)
            else:
                break
        return expr

    def parse_factor(self) -> Expr:
        tok = self.ts.peek()

        if tok.type == "NUMBER":
            self.ts.advance()
            return Number(value=tok.value, line=tok.pos.line, column=tok.pos.column)

        if tok.type == "LPAREN":
            return self.parse_group()

        if tok.type in ("PLUS", "MINUS"):
            # collect the whole prefix chain, then wrap the operand inside out
            prefixes = []
            while self.ts.peek().type in ("PLUS", "MINUS"):
                prefixes.append(self.ts.advance())
            expr = self.parse_factor()
            for op_tok in reversed(prefixes):
                op = "+" if op_tok.type == "PLUS" else "-"
                expr = UnaryOp(op=op, operand=expr, line=op_tok.pos.line, column=op_tok.pos.column)
            return expr

        raise unexpected(tok, "a number, '(' or a unary operator")

    def parse_group(self) -> Expr:
        lparen = self.ts.expect("LPAREN", "'('")
        line, col = _loc(lparen)
        if self.ts.match("RPAREN"):
            return Empty(line=line, column=col)
        self._enter(lparen)
        expr = self.parse_expression()
        self.depth -= 1
        self.ts.expect("RPAREN", "')'")
        return expr

    def _enter(self, tok: Token):
        self.depth += 1
        if self.depth > self.max_depth:
            raise NestingTooDeep(self.max_depth, tok.pos)


def parse(tokens: List[Token], max_depth: int = DEFAULT_MAX_DEPTH) -> Expr:
    return Parser(tokens, max_depth=max_depth).parse()
