"""
Built-in functions callable from dde source, and the value helpers they share
with the evaluator. The table is closed: programs cannot register functions.
"""

from __future__ import annotations
import math
import random
import sys
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from .errors import ArityError, OperandTypeError


def value_kind(value: Any) -> str:
    """Name of the runtime kind of a value: number, string, boolean or null"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def is_truthy(value: Any) -> bool:
    """null, false, 0, NaN and the empty string are falsy"""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not (value == 0 or math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def strict_equals(left: Any, right: Any) -> bool:
    """Values of different kinds are never equal, so 1 == true is false"""
    return value_kind(left) == value_kind(right) and left == right


def format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


@dataclass(frozen=True)
class Builtin:
    name: str
    func: Callable[..., Any]
    min_args: int = 0

    def __call__(self, *args: Any) -> Any:
        if len(args) < self.min_args:
            raise ArityError(f"{self.name}: expected {self.min_args} argument, got {len(args)}")
        return self.func(*args)


def _print(*values: Any) -> None:
    print(" ".join(format_value(v) for v in values))
    return None


def _typeof(*value: Any) -> str:
    if not value:
        return "undefined"
    if value[0] is None:
        return "object"
    return value_kind(value[0])


def _exit(*_: Any) -> None:
    sys.exit(0)


def _require_number(name: str, value: Any) -> float:
    if value_kind(value) != "number":
        raise OperandTypeError(f"random: {name} must be a number, got {value_kind(value)}")
    return value


def _random(*args: Any) -> float:
    if not args:
        return random.random()

    if len(args) == 1:
        low, high = 0, _require_number("max", args[0])
    else:
        low = _require_number("min", args[0])
        high = _require_number("max", args[1])
    is_float = len(args) > 2 and is_truthy(args[2])

    if low > high:
        low, high = high, low

    if is_float:
        return random.random() * (high - low) + low
    return float(math.floor(random.random() * (high - low + 1)) + low)


def _is_fart(*value: Any) -> bool:
    return bool(value) and strict_equals(value[0], "fart")


BUILTINS: Mapping[str, Builtin] = MappingProxyType({
    b.name: b for b in (
        Builtin("print", _print, min_args=1),
        Builtin("typeof", _typeof),
        Builtin("exit", _exit),
        Builtin("random", _random),
        Builtin("isFart", _is_fart),
    )
})


def lookup_builtin(name: str) -> Optional[Builtin]:
    return BUILTINS.get(name)
