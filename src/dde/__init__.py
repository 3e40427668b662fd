from .ast_nodes import *
from .errors import (
    ArityError, DdeError, EvaluationError, OperandTypeError, UndefinedVariableError,
    UnknownFunctionError, UnknownNodeTypeError, UnknownOperatorError,
)
from .evaluator import Evaluator, InterpretResult, evaluate, interpret
from .lexer import LexError, Token, TokenKind, UnknownCharacterError, UnterminatedStringError, tokenize
from .parser import ParseError, Parser, UnexpectedTokenError, parse

__version__ = "0.1.0"
