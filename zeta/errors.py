"""Exception hierarchy for the Zeta toolchain.

Every failure raised by the lexer, parser or interpreter is a ``ZetaError``.
Nothing is recovered inside the library: errors propagate up to whoever
drives the run, and the command-line driver turns them into a diagnostic
and a non-zero exit status.
"""

from typing import Sequence


class ZetaError(Exception):
    """Base class for all Zeta errors."""
    def __init__(self, message: str):
        super().__init__(f"{type(self).__name__}: {message}")
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class LexerError(ZetaError):
    pass


class InvalidCharacter(LexerError):
    def __init__(self, char: str, row: int, column: int):
        super().__init__(f"invalid character {char!r} at {row}:{column}")
        self.char = char
        self.row = row
        self.column = column


class TokenTooLong(LexerError):
    def __init__(self, text: str, row: int, column: int):
        super().__init__(f"token starting {text[:8]!r} is too long at {row}:{column}")
        self.text = text
        self.row = row
        self.column = column


class MalformedNumber(LexerError):
    def __init__(self, text: str, reason: str, row: int, column: int):
        super().__init__(f"malformed number {text!r} at {row}:{column}: {reason}")
        self.text = text
        self.reason = reason
        self.row = row
        self.column = column


class InvalidSyntax(ZetaError):
    pass


class UnexpectedToken(InvalidSyntax):
    def __init__(self, found: str, text: str, row: int, column: int, expected: Sequence[str] = ()):
        msg = f"unexpected token {found} {text!r} at {row}:{column}"
        if expected:
            msg += f", expected one of {list(expected)}"
        super().__init__(msg)
        self.found = found
        self.text = text
        self.row = row
        self.column = column
        self.expected = tuple(expected)


class MisplacedIdentifier(InvalidSyntax):
    """An identifier followed a complete statement list on the same line."""
    def __init__(self, name: str, row: int, column: int):
        super().__init__(f"identifier {name!r} at {row}:{column} must be separated by ';'")
        self.name = name
        self.row = row
        self.column = column


class ZetaRuntimeError(ZetaError):
    pass


class UndefinedVariable(ZetaRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"undefined variable {name}")
        self.name = name


class DivisionByZero(ZetaRuntimeError):
    def __init__(self):
        super().__init__("division by zero")


class UnknownOperator(ZetaRuntimeError):
    def __init__(self, op):
        super().__init__(f"unknown operator {op}")
        self.op = op
