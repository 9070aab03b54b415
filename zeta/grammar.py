"""Grammar-based front end for the Zeta language.

This is an alternative to the hand-written ``Parser``: the whole source is
fed into a Lark LALR parser configured with the Zeta grammar, and the
resulting parse tree is transformed into the same AST the recursive-descent
parser builds (one ``Compound`` per source line).

Lark errors are translated into the same Zeta errors the hand-written
front end raises. The NUMBER terminal deliberately swallows malformed
literals such as ``1e`` or ``1..2``; a lexer callback then checks them with
the ``Lexer``'s own number rules, so they surface as ``MalformedNumber``
while the input is being tokenized.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, VisitError
from lark.exceptions import UnexpectedToken as LarkUnexpectedToken

from .ast import Assign, BinOp, Compound, NoOp, Num, UnaryOp, Var
from .errors import InvalidCharacter, MalformedNumber, MisplacedIdentifier, TokenTooLong, UnexpectedToken
from .lexer import Lexer
from .tokens import MAX_TOKEN_LENGTH, SINGLE_CHAR_TOKENS, TokenType


ZETA_GRAMMAR = r"""
    start: line (_NEWLINE line)*

    line: [statement] (";" [statement])*

    ?statement: assignment
              | expr

    assignment: IDENTIFIER "=" expr

    ?expr: term (ADD_OP term)*
    ?term: factor (MUL_OP factor)*
    ?factor: ADD_OP factor     -> unary
           | NUMBER            -> number
           | IDENTIFIER        -> var
           | "(" expr ")"

    ADD_OP: "+" | "-"
    MUL_OP: "*" | "/"
    NUMBER: /[\d.]+([eE][+-]?[\d.]*)*/
    IDENTIFIER: /[A-Za-z][A-Za-z0-9]*/
    _NEWLINE: "\n"

    %ignore /[ \t]+/
"""


def check_number(token):
    """Validate a NUMBER token with the lexer's number rules."""
    lexer = Lexer([str(token)])
    try:
        scanned = lexer.number()
    except MalformedNumber as e:
        raise MalformedNumber(e.text, e.reason, token.line, token.column) from None
    except TokenTooLong as e:
        raise TokenTooLong(e.text, token.line, token.column) from None
    if scanned.value != str(token):
        raise MalformedNumber(str(token), "unexpected characters", token.line, token.column)
    return token


def check_identifier(token):
    if len(token) > MAX_TOKEN_LENGTH:
        raise TokenTooLong(str(token), token.line, token.column)
    return token


ZETA_PARSER = Lark(
    ZETA_GRAMMAR,
    parser='lalr',
    lexer='basic',
    propagate_positions=True,
    maybe_placeholders=True,
    lexer_callbacks={'NUMBER': check_number, 'IDENTIFIER': check_identifier},
)


# Lark terminal names for the token kinds they stand for
TERMINAL_KINDS = {
    'SEMICOLON': [TokenType.SEMICOLON.name],
    'EQUAL': [TokenType.ASSIGN.name],
    'LPAR': [TokenType.LPAREN.name],
    'RPAR': [TokenType.RPAREN.name],
    'NUMBER': [TokenType.NUMBER.name],
    'IDENTIFIER': [TokenType.IDENTIFIER.name],
    'ADD_OP': [TokenType.PLUS.name, TokenType.MINUS.name],
    'MUL_OP': [TokenType.MUL.name, TokenType.DIV.name],
    '_NEWLINE': [TokenType.END_OF_LINE.name],
    '$END': [TokenType.END_OF_INPUT.name],
}


def terminal_kind(token) -> str:
    if token.type in ('ADD_OP', 'MUL_OP'):
        return SINGLE_CHAR_TOKENS[str(token)].name
    return TERMINAL_KINDS.get(token.type, [token.type])[0]


def expected_kinds(terminals) -> List[str]:
    kinds = set()
    for name in terminals:
        kinds.update(TERMINAL_KINDS.get(name, [name]))
    return sorted(kinds)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        return list(items)

    def line(self, items):
        return Compound([NoOp() if stmt is None else stmt for stmt in items])

    def assignment(self, items):
        name, value = items
        return Assign(Var(str(name)), TokenType.ASSIGN, value)

    def binary_chain(self, items):
        left = items[0]
        i = 1
        while i < len(items):
            op = SINGLE_CHAR_TOKENS[str(items[i])]
            left = BinOp(op, left, items[i + 1])
            i += 2
        return left

    def expr(self, items):
        return self.binary_chain(items)

    def term(self, items):
        return self.binary_chain(items)

    def unary(self, items):
        op, operand = items
        return UnaryOp(SINGLE_CHAR_TOKENS[str(op)], operand)

    def number(self, items):
        return Num(float(items[0]))

    def var(self, items):
        return Var(str(items[0]))


def unexpected_token(e: LarkUnexpectedToken):
    token = e.token
    # An identifier where the statement list could have ended is a missing ';'
    accepts = getattr(e, 'accepts', None) or e.expected
    if token.type == 'IDENTIFIER' and 'SEMICOLON' in accepts:
        return MisplacedIdentifier(str(token), e.line, e.column)
    return UnexpectedToken(terminal_kind(token), str(token), e.line, e.column, expected_kinds(e.expected))


def parse_with_lark(source: str) -> List[Compound]:
    """Parse Zeta source code into one Compound per line using Lark."""
    lines = source.splitlines()
    if not lines:
        return []
    try:
        tree = ZETA_PARSER.parse('\n'.join(lines))
        return ASTTransformer().transform(tree)
    except VisitError as e:
        raise e.orig_exc from None
    except UnexpectedCharacters as e:
        raise InvalidCharacter(e.char, e.line, e.column) from None
    except LarkUnexpectedToken as e:
        raise unexpected_token(e) from None
    except UnexpectedInput as e:
        raise UnexpectedToken(TokenType.END_OF_INPUT.name, '', e.line, e.column) from None
