"""Lexical scanner for the Zeta language.

The lexer pulls physical lines from a line source (any iterable of strings:
an open file, a list, a generator reading a socket) and turns them into
tokens one at a time. Reaching the end of a line yields an END_OF_LINE token
and loads the next line; once the source is exhausted every further call
returns END_OF_INPUT.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List

from .errors import InvalidCharacter, MalformedNumber, TokenTooLong
from .tokens import MAX_TOKEN_LENGTH, SINGLE_CHAR_TOKENS, Token, TokenType


BLANKS = ' \t\r\f\v'


def is_letter(c: str) -> bool:
    return c.isascii() and c.isalpha()


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


class Lexer:
    def __init__(self, lines: Iterable[str]):
        self.lines: Iterator[str] = iter(lines)
        self.line = ''
        self.length = 0
        self.pos = 0
        self.row = 0
        self.current_char = '\0'
        self.exhausted = False
        self.read_line()

    @classmethod
    def from_text(cls, text: str) -> 'Lexer':
        return cls(text.splitlines())

    def read_line(self) -> bool:
        """Load the next line from the source; False once it is exhausted."""
        try:
            line = next(self.lines)
        except StopIteration:
            self.exhausted = True
            self.current_char = '\0'
            return False
        self.line = line.rstrip('\r\n')
        self.length = len(self.line)
        self.pos = 0
        self.row += 1
        self.current_char = self.line[0] if self.length else '\0'
        return True

    @property
    def column(self) -> int:
        return self.pos + 1

    def advance(self):
        self.pos += 1
        self.current_char = self.line[self.pos] if self.pos < self.length else '\0'

    def skip_whitespace(self):
        while self.current_char != '\0' and self.current_char in BLANKS:
            self.advance()

    def identifier(self) -> Token:
        row, column = self.row, self.column
        chars: List[str] = []
        while is_letter(self.current_char) or is_digit(self.current_char):
            chars.append(self.current_char)
            if len(chars) > MAX_TOKEN_LENGTH:
                raise TokenTooLong(''.join(chars), row, column)
            self.advance()
        return Token(TokenType.IDENTIFIER, ''.join(chars), row, column)

    def number(self) -> Token:
        """Scan a numeric literal: digits, one optional '.', one optional exponent."""
        row, column = self.row, self.column
        chars: List[str] = []
        seen_dot = False
        seen_exp = False
        mantissa_digits = 0

        def take():
            chars.append(self.current_char)
            if len(chars) > MAX_TOKEN_LENGTH:
                raise TokenTooLong(''.join(chars), row, column)
            self.advance()

        def malformed(reason: str):
            text = ''.join(chars)
            if self.current_char != '\0':
                text += self.current_char
            return MalformedNumber(text, reason, row, column)

        while True:
            c = self.current_char
            if is_digit(c):
                if not seen_exp:
                    mantissa_digits += 1
                take()
            elif c == '.':
                if seen_exp:
                    raise malformed("'.' in exponent")
                if seen_dot:
                    raise malformed("too many '.'")
                seen_dot = True
                take()
            elif c in 'eE':
                if seen_exp:
                    raise malformed("too many exponent markers")
                if mantissa_digits == 0:
                    raise malformed("missing digits before exponent")
                seen_exp = True
                take()
                if self.current_char in '+-':
                    take()
                if not is_digit(self.current_char):
                    raise malformed("exponent requires digits")
            else:
                break

        if mantissa_digits == 0:
            raise MalformedNumber(''.join(chars), "missing digits", row, column)
        return Token(TokenType.NUMBER, ''.join(chars), row, column)

    def next_token(self) -> Token:
        if self.exhausted:
            return Token(TokenType.END_OF_INPUT, '', self.row, self.column)

        self.skip_whitespace()

        if self.current_char in ('\0', '\n'):
            row, column = self.row, self.column
            if not self.read_line():
                return Token(TokenType.END_OF_INPUT, '', row, column)
            return Token(TokenType.END_OF_LINE, '\n', row, column)

        c = self.current_char
        if is_letter(c):
            return self.identifier()
        if is_digit(c) or c == '.':
            return self.number()
        if c in SINGLE_CHAR_TOKENS:
            token = Token(SINGLE_CHAR_TOKENS[c], c, self.row, self.column)
            self.advance()
            return token
        raise InvalidCharacter(c, self.row, self.column)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including END_OF_INPUT."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenType.END_OF_INPUT:
                return
