"""Abstract Syntax Tree (AST) definitions for the Zeta language.

The parser produces one ``Compound`` per source line; the interpreter walks
it once. Each composite node owns its children, subtrees are never shared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .tokens import TokenType


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Num(Node):
    value: float


@dataclass
class Var(Node):
    name: str


@dataclass
class UnaryOp(Node):
    op: TokenType  # PLUS or MINUS
    operand: Node


@dataclass
class BinOp(Node):
    op: TokenType  # PLUS, MINUS, MUL or DIV
    left: Node
    right: Node


@dataclass
class Assign(Node):
    target: Var
    op: TokenType
    value: Node


@dataclass
class Compound(Node):
    statements: List[Node] = field(default_factory=list)


@dataclass
class NoOp(Node):
    pass
