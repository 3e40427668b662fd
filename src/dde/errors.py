from __future__ import annotations


class DdeError(Exception):
    def __init__(self, message: str, line: int = -1, column: int = -1):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line > 0:
            return f"{self.message} at {self.line}:{self.column}"
        return self.message


# ---------- Evaluation ----------
class EvaluationError(DdeError):
    pass

class UndefinedVariableError(EvaluationError):
    def __init__(self, name: str, line: int = -1, column: int = -1):
        self.name = name
        super().__init__(f"undefined variable: {name}", line, column)

class UnknownFunctionError(EvaluationError):
    def __init__(self, name: str, line: int = -1, column: int = -1):
        self.name = name
        super().__init__(f"unknown function: {name}", line, column)

class UnknownOperatorError(EvaluationError):
    def __init__(self, operator: str, line: int = -1, column: int = -1):
        self.operator = operator
        super().__init__(f"unknown operator {operator}", line, column)

class UnknownNodeTypeError(EvaluationError):
    def __init__(self, node: object):
        self.node = node
        super().__init__(f"unknown node type {type(node).__name__}",
                         getattr(node, "line", -1), getattr(node, "column", -1))

class ArityError(EvaluationError):
    pass

class OperandTypeError(EvaluationError):
    pass
