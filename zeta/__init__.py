# Zeta language package
# This package provides a lexer, parser and interpreter for the Zeta
# arithmetic and assignment language.
from .errors import ZetaError
from .interpreter import Interpreter, parse_program, run_file, run_program

__all__ = [
    'run_program',
    'run_file',
    'parse_program',
    'Interpreter',
    'ZetaError',
]
