from __future__ import annotations
import math
from typing import List, Optional
from .ast_nodes import *
from .errors import DdeError
from .lexer import Token, TokenKind

class ParseError(DdeError):
    pass

class UnexpectedTokenError(ParseError):
    def __init__(self, expected: Optional[str], token: Optional[Token]):
        self.expected = expected
        self.token = token
        got = _describe(token)
        line = token.line if token else -1
        col = token.column if token else -1
        if expected is None:
            super().__init__(f"unexpected token: {got}", line, col)
        else:
            super().__init__(f"expected {expected}, got {got}", line, col)

def _describe(tok: Optional[Token]) -> str:
    if tok is None:
        return "nothing"
    if isinstance(tok.value, bool):
        return "true" if tok.value else "false"
    return tok.value

class TokenStream:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.i = 0

    def peek(self, k: int = 0) -> Optional[Token]:
        j = self.i + k
        if j >= len(self.tokens):
            return None
        return self.tokens[j]

    def at_end(self) -> bool:
        return self.i >= len(self.tokens)

    def advance(self) -> Optional[Token]:
        tok = self.peek()
        if tok is not None:
            self.i += 1
        return tok

    def check(self, ttype: TokenKind, value=None, k: int = 0) -> bool:
        tok = self.peek(k)
        return tok is not None and tok.type == ttype and (value is None or tok.value == value)

    def match(self, ttype: TokenKind, value=None) -> Optional[Token]:
        if self.check(ttype, value):
            return self.advance()
        return None

    def consume(self, ttype: Optional[TokenKind] = None, value=None) -> Token:
        tok = self.peek()
        if (
            tok is None
            or (ttype is not None and tok.type != ttype)
            or (value is not None and tok.value != value)
        ):
            expected = value if value is not None else (ttype.value if ttype else None)
            raise UnexpectedTokenError(expected, tok)
        self.i += 1
        return tok

def _to_number(text: str) -> float:
    # "1.2.3" lexes as one number token but is not a number
    try:
        return float(text)
    except ValueError:
        return math.nan

class Parser:
    def __init__(self, tokens: List[Token]):
        self.ts = TokenStream(tokens)

    def parse(self) -> List[Node]:
        statements: List[Node] = []
        while not self.ts.at_end():
            if self.ts.match(TokenKind.SEMICOLON):
                continue
            statements.append(self.parse_expression())
        return statements

    # ---------------- STATEMENTS ----------------
    def parse_expression(self) -> Node:
        tok = self.ts.peek()
        if tok is None:
            raise UnexpectedTokenError(None, None)

        # lookahead: IDENTIFIER "="
        if tok.type == TokenKind.IDENTIFIER and self.ts.check(TokenKind.OPERATOR, "=", k=1):
            return self.parse_assignment()

        if tok.type == TokenKind.KEYWORD and tok.value == "if":
            return self.parse_if()

        return self.parse_comparison()

    def parse_assignment(self) -> Assignment:
        name_tok = self.ts.consume(TokenKind.IDENTIFIER)
        self.ts.consume(TokenKind.OPERATOR, "=")
        expr = self.parse_expression()
        return Assignment(name=name_tok.value, expression=expr, line=name_tok.line, column=name_tok.column)

    def parse_if(self) -> If:
        t = self.ts.consume(TokenKind.KEYWORD, "if")
        self.ts.consume(TokenKind.PARENTHESIS, "(")
        cond = self.parse_expression()
        self.ts.consume(TokenKind.PARENTHESIS, ")")
        body = self.parse_block()
        return If(condition=cond, body=body, line=t.line, column=t.column)

    def parse_block(self) -> Block:
        t = self.ts.consume(TokenKind.BRACKET, "{")
        block = Block(line=t.line, column=t.column)
        while self.ts.peek() is not None and not self.ts.check(TokenKind.BRACKET, "}"):
            block.statements.append(self.parse_expression())
            self.ts.match(TokenKind.SEMICOLON)
        self.ts.consume(TokenKind.BRACKET, "}")
        return block

    # ---------------- EXPRESSIONS (precedence) ----------------
    # Every comparator shares one tier and folds left to right
    def parse_comparison(self) -> Node:
        expr = self.parse_additive()
        while self.ts.check(TokenKind.COMPARATOR):
            op_tok = self.ts.advance()
            rhs = self.parse_additive()
            expr = Binary(operator=op_tok.value, left=expr, right=rhs, line=op_tok.line, column=op_tok.column)
        return expr

    def parse_additive(self) -> Node:
        expr = self.parse_multiplicative()
        while self.ts.check(TokenKind.OPERATOR, "+") or self.ts.check(TokenKind.OPERATOR, "-"):
            op_tok = self.ts.advance()
            rhs = self.parse_multiplicative()
            expr = Binary(operator=op_tok.value, left=expr, right=rhs, line=op_tok.line, column=op_tok.column)
        return expr

    def parse_multiplicative(self) -> Node:
        expr = self.parse_primary()
        while self.ts.check(TokenKind.OPERATOR, "*") or self.ts.check(TokenKind.OPERATOR, "/"):
            op_tok = self.ts.advance()
            rhs = self.parse_primary()
            expr = Binary(operator=op_tok.value, left=expr, right=rhs, line=op_tok.line, column=op_tok.column)
        return expr

    def parse_call(self, name_tok: Token) -> Call:
        self.ts.consume(TokenKind.PARENTHESIS, "(")
        call = Call(name=name_tok.value, line=name_tok.line, column=name_tok.column)
        if not self.ts.check(TokenKind.PARENTHESIS, ")"):
            while True:
                call.arguments.append(self.parse_expression())
                if self.ts.match(TokenKind.COMMA) is None:
                    break
        self.ts.consume(TokenKind.PARENTHESIS, ")")
        return call

    def parse_primary(self) -> Node:
        tok = self.ts.peek()
        if tok is None:
            raise UnexpectedTokenError(None, None)

        if self.ts.match(TokenKind.NUMBER):
            return Number(value=_to_number(tok.value), line=tok.line, column=tok.column)

        if self.ts.match(TokenKind.STRING):
            return String(value=tok.value, line=tok.line, column=tok.column)

        if self.ts.match(TokenKind.BOOLEAN):
            return Boolean(value=tok.value, line=tok.line, column=tok.column)

        if self.ts.match(TokenKind.IDENTIFIER):
            if self.ts.check(TokenKind.PARENTHESIS, "("):
                return self.parse_call(tok)
            return Identifier(name=tok.value, line=tok.line, column=tok.column)

        if self.ts.match(TokenKind.PARENTHESIS, "("):
            expr = self.parse_expression()
            self.ts.consume(TokenKind.PARENTHESIS, ")")
            return expr

        if self.ts.check(TokenKind.BRACKET, "{"):
            return self.parse_block()

        raise UnexpectedTokenError(None, tok)

def parse(tokens: List[Token]) -> List[Node]:
    return Parser(tokens).parse()
