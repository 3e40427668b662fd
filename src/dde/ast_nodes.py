from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

@dataclass
class Node:
    # positions are diagnostics only; they never take part in equality
    line: int = field(default=0, compare=False, repr=False, kw_only=True)
    column: int = field(default=0, compare=False, repr=False, kw_only=True)

# ---------- Statements ----------
class Stmt(Node): ...

@dataclass
class Block(Stmt):
    statements: List[Node] = field(default_factory=list)

@dataclass
class If(Stmt):
    condition: Node = None
    body: Block = None

# ---------- Expressions ----------
class Expr(Node): ...

@dataclass
class Number(Expr):
    value: float = 0.0

@dataclass
class String(Expr):
    value: str = ""

@dataclass
class Boolean(Expr):
    value: bool = False

@dataclass
class Identifier(Expr):
    name: str = ""

@dataclass
class Binary(Expr):
    operator: str = ""
    left: Node = None
    right: Node = None

@dataclass
class Assignment(Expr):
    name: str = ""
    expression: Node = None

@dataclass
class Call(Expr):
    name: str = ""
    arguments: List[Node] = field(default_factory=list)
