from __future__ import annotations
import math
import operator
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from .ast_nodes import *
from .builtins import is_truthy, lookup_builtin, strict_equals, value_kind
from .errors import (
    OperandTypeError, UndefinedVariableError, UnknownFunctionError,
    UnknownNodeTypeError, UnknownOperatorError,
)
from .lexer import tokenize
from .parser import parse

Environment = Dict[str, Any]


def _divide(left, right):
    # float64 semantics instead of ZeroDivisionError
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _numeric(fn: Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
    # str * bool would otherwise repeat the string
    def apply(left, right):
        if isinstance(left, str) or isinstance(right, str):
            raise TypeError(f"{fn.__name__} takes numbers")
        return fn(left, right)
    return apply


BINARY_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": _numeric(operator.sub),
    "*": _numeric(operator.mul),
    "/": _numeric(_divide),
    "==": strict_equals,
    "!=": lambda left, right: not strict_equals(left, right),
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}


@dataclass
class InterpretResult:
    result: Any
    environment: Environment = field(default_factory=dict)


class Evaluator:
    def __init__(self, environment: Optional[Environment] = None):
        # one flat environment, shared by every nested evaluation
        self.environment: Environment = environment if environment is not None else {}

    def run(self, statements: List[Node]) -> Any:
        result = None
        for st in statements:
            result = self.visit(st)
        return result

    def visit(self, node: Node) -> Any:
        if isinstance(node, (Number, String, Boolean)):
            return node.value

        if isinstance(node, Identifier):
            if node.name not in self.environment:
                raise UndefinedVariableError(node.name, node.line, node.column)
            return self.environment[node.name]

        if isinstance(node, Binary):
            left = self.visit(node.left)
            right = self.visit(node.right)
            return self._apply(node, left, right)

        if isinstance(node, Assignment):
            value = self.visit(node.expression)
            self.environment[node.name] = value
            return value

        if isinstance(node, Call):
            fn = lookup_builtin(node.name)
            if fn is None:
                raise UnknownFunctionError(node.name, node.line, node.column)
            args = [self.visit(a) for a in node.arguments]
            return fn(*args)

        if isinstance(node, Block):
            return self.run(node.statements)

        if isinstance(node, If):
            if is_truthy(self.visit(node.condition)):
                return self.visit(node.body)
            return None

        raise UnknownNodeTypeError(node)

    def _apply(self, node: Binary, left: Any, right: Any) -> Any:
        op = BINARY_OPERATORS.get(node.operator)
        if op is None:
            raise UnknownOperatorError(node.operator, node.line, node.column)
        try:
            return op(left, right)
        except TypeError as e:
            raise OperandTypeError(
                f"unsupported operand kinds for {node.operator}: '{value_kind(left)}' and '{value_kind(right)}'",
                node.line,
                node.column,
            ) from e


def evaluate(node: Node, environment: Environment) -> Any:
    return Evaluator(environment).visit(node)


def interpret(source: str, environment: Optional[Environment] = None) -> InterpretResult:
    """Tokenize, parse and evaluate `source`, returning the last statement's value."""
    evaluator = Evaluator(environment)
    result = evaluator.run(parse(tokenize(source)))
    return InterpretResult(result=result, environment=evaluator.environment)
