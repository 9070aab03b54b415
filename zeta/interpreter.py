"""Tree-walking interpreter for the Zeta language.

The interpreter pulls one ``Compound`` at a time from a ``Parser`` and
evaluates it against a flat variable environment. Every non-empty statement
prints its value; the values of one source line share one output line.
Errors are raised as ``ZetaError`` subclasses and are never recovered here.
"""

from __future__ import annotations

import sys
from typing import IO, Iterable, List, Optional

from .ast import Assign, BinOp, Compound, NoOp, Node, Num, UnaryOp, Var
from .environment import Environment
from .errors import DivisionByZero, UnknownOperator
from .lexer import Lexer
from .parser import Parser, parse_program
from .tokens import TokenType


def format_number(value: float) -> str:
    """Format a value the way C's ``%g`` does."""
    return '%g' % value


class Interpreter:
    """Core interpreter that evaluates Zeta ASTs."""
    def __init__(self, parser: Optional[Parser] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt', out: Optional[IO[str]] = None):
        self.parser = parser
        self.global_env = Environment()
        self.out = out
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None
        self.emitted: List[float] = []

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def make_parser(self, lexer: Lexer) -> Parser:
        """Build a parser that traces consumed tokens at debug level 4."""
        trace = self.debug if self.debug_level >= 4 else None
        return Parser(lexer, debug=trace)

    # Public API
    def run(self, parser: Optional[Parser] = None) -> List[float]:
        """Evaluate every remaining line of the parser's input.

        Returns the values emitted by this call, in output order.
        """
        if parser is not None:
            self.parser = parser
        if self.parser is None:
            raise ValueError('Interpreter.run needs a parser')
        self.emitted = []
        while self.parser.current_token.kind is not TokenType.END_OF_INPUT:
            tree = self.parser.parse()
            self.evaluate(tree)
        return self.emitted

    def execute_program(self, compounds: Iterable[Compound]) -> List[float]:
        """Evaluate already-built trees, e.g. ones loaded from AST JSON."""
        self.emitted = []
        for compound in compounds:
            self.evaluate(compound)
        return self.emitted

    def write(self, text: str):
        stream = self.out if self.out is not None else sys.stdout
        stream.write(text)

    def evaluate(self, node: Node) -> Optional[float]:
        if self.debug_level >= 3:
            self.debug(f"visit {type(node).__name__}")
        if isinstance(node, Num):
            return node.value
        if isinstance(node, Var):
            return self.global_env.get(node.name)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand)
            if node.op is TokenType.MINUS:
                return -operand
            if node.op is TokenType.PLUS:
                return operand
            raise UnknownOperator(node.op)
        if isinstance(node, BinOp):
            # left operand first, always
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, Assign):
            value = self.evaluate(node.value)
            self.global_env.set(node.target.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.target.name} = {format_number(value)}")
            return value
        if isinstance(node, Compound):
            self.execute_compound(node)
            return None
        if isinstance(node, NoOp):
            return None
        raise UnknownOperator(type(node).__name__)

    def execute_compound(self, node: Compound):
        printed = 0
        for stmt in node.statements:
            if isinstance(stmt, NoOp):
                continue
            value = self.evaluate(stmt)
            self.write((' ' if printed else '') + format_number(value))
            self.emitted.append(value)
            printed += 1
            if self.debug_level >= 1:
                self.debug(f"emit {format_number(value)}")
        if printed:
            self.write('\n')

    def apply_binary_op(self, op: TokenType, a: float, b: float) -> float:
        if op is TokenType.PLUS:
            return a + b
        if op is TokenType.MINUS:
            return a - b
        if op is TokenType.MUL:
            return a * b
        if op is TokenType.DIV:
            if b == 0:
                raise DivisionByZero()
            return a / b
        raise UnknownOperator(op)


def run_program(source: str, debug_level: int = 0, out: Optional[IO[str]] = None) -> List[float]:
    """Convenience function to parse and run a Zeta program from a source string."""
    with Interpreter(debug_level=debug_level, out=out) as interpreter:
        parser = interpreter.make_parser(Lexer.from_text(source))
        return interpreter.run(parser)


def run_file(file_path: str, debug_level: int = 0, out: Optional[IO[str]] = None) -> List[float]:
    """Run a Zeta file, reading it line by line as the parser asks for input."""
    with open(file_path, 'r', encoding='utf-8') as f:
        with Interpreter(debug_level=debug_level, out=out) as interpreter:
            parser = interpreter.make_parser(Lexer(f))
            return interpreter.run(parser)


__all__ = [
    'Interpreter',
    'format_number',
    'parse_program',
    'run_file',
    'run_program',
]
