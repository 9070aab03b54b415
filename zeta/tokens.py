"""Token definitions for the Zeta language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# Longest literal spelling a token may carry.
MAX_TOKEN_LENGTH = 31


class TokenType(Enum):
    SEMICOLON = ';'
    PLUS = '+'
    MINUS = '-'
    MUL = '*'
    DIV = '/'
    LPAREN = '('
    RPAREN = ')'
    NUMBER = 'NUMBER'
    ASSIGN = '='
    IDENTIFIER = 'IDENTIFIER'
    END_OF_LINE = 'END_OF_LINE'
    END_OF_INPUT = 'END_OF_INPUT'


# Single-character operators and punctuation
SINGLE_CHAR_TOKENS = {
    ';': TokenType.SEMICOLON,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MUL,
    '/': TokenType.DIV,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '=': TokenType.ASSIGN,
}


@dataclass(frozen=True)
class Token:
    kind: TokenType
    value: str
    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.kind.name}({self.value!r})"
