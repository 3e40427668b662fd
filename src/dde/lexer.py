from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

import ply.lex as lex

from .errors import DdeError


class TokenKind(str, Enum):
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    OPERATOR = "operator"
    COMPARATOR = "comparator"
    COMMA = "comma"
    SEMICOLON = "semicolon"
    BRACKET = "bracket"
    PARENTHESIS = "parenthesis"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    type: TokenKind
    value: Union[str, bool]
    # positions are diagnostics only
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


class LexError(DdeError):
    pass

class UnknownCharacterError(LexError):
    def __init__(self, char: str, line: int = -1, column: int = -1):
        self.char = char
        super().__init__(f"unknown character: {char}", line, column)

class UnterminatedStringError(LexError):
    def __init__(self, line: int = -1, column: int = -1):
        super().__init__("unterminated string literal", line, column)


def _column(data: str, pos: int) -> int:
    line_start = data.rfind('\n', 0, pos) + 1
    return pos - line_start + 1


class DdeLexer:

    tokens = (
        'NUMBER', 'STRING', 'BOOLEAN', 'IDENTIFIER', 'KEYWORD',
        'OPERATOR', 'COMPARATOR',
        'COMMA', 'SEMICOLON', 'BRACKET', 'PARENTHESIS',
    )

    keywords = {'if'}
    booleans = {'true': True, 'false': False}

    # Ignored characters; the remaining whitespace class is handled by t_whitespace
    t_ignore = ' \t'

    # Rules are tried in definition order

    # A comment opens only at the start of input or after whitespace
    def t_comment(self, t):
        r'\#[^\n]*'
        data = t.lexer.lexdata
        if t.lexpos > 0 and not data[t.lexpos - 1].isspace():
            raise UnknownCharacterError('#', t.lexer.lineno, _column(data, t.lexpos))

    def t_whitespace(self, t):
        r'\s+'
        t.lexer.lineno += t.value.count('\n')

    def t_NUMBER(self, t):
        r'[0-9][0-9.]*'
        if t.value.endswith('.'):
            t.value += '0'
        return t

    # No escape sequences; strings may span lines
    def t_STRING(self, t):
        r'"[^"]*"|\'[^\']*\''
        t.lexer.lineno += t.value.count('\n')
        t.value = t.value[1:-1]
        return t

    def t_IDENTIFIER(self, t):
        r'[A-Za-z_]+'
        if t.value in self.booleans:
            t.type = 'BOOLEAN'
            t.value = self.booleans[t.value]
        elif t.value in self.keywords:
            t.type = 'KEYWORD'
        return t

    def t_COMPARATOR(self, t):
        r'==|[<>!]=?'
        return t

    def t_OPERATOR(self, t):
        r'[-+*/=]'
        return t

    def t_COMMA(self, t):
        r','
        return t

    def t_SEMICOLON(self, t):
        r';'
        return t

    def t_BRACKET(self, t):
        r'[{}]'
        return t

    def t_PARENTHESIS(self, t):
        r'[()]'
        return t

    # Any quote reaching here has no closing partner
    def t_error(self, t):
        char = t.value[0]
        column = _column(t.lexer.lexdata, t.lexpos)
        if char in '"\'':
            raise UnterminatedStringError(t.lexer.lineno, column)
        raise UnknownCharacterError(char, t.lexer.lineno, column)

    def __init__(self):
        self.lexer = None

    def build(self, **kwargs):
        """Build the lexer"""
        self.lexer = lex.lex(module=self, **kwargs)
        return self.lexer

    def tokenize(self, data: str) -> List[Token]:
        if not self.lexer:
            self.build()

        self.lexer.lineno = 1
        self.lexer.input(data)
        tokens: List[Token] = []

        while True:
            tok = self.lexer.token()
            if not tok:
                break
            tokens.append(Token(
                type=TokenKind(tok.type.lower()),
                value=tok.value,
                line=tok.lineno,
                column=_column(data, tok.lexpos),
            ))

        return tokens


def tokenize(source: str) -> List[Token]:
    return DdeLexer().tokenize(source)


def _display(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    value = str(value)
    if len(value) > 50:
        value = value[:47] + "..."
    # Display escape characters
    return repr(value)[1:-1] if '\n' in value or '\t' in value else value


def print_tokens(tokens: List[Token]):
    if not tokens:
        print("No tokens found!")
        return

    print(f"{'Line':<6}| {'Column':<7}| {'Token':<12}| Value")
    print("-" * 60)

    for tok in tokens:
        print(f"{tok.line:<6}| {tok.column:<7}| {tok.type.value:<12}| {_display(tok.value)}")
