"""Recursive-descent parser for the Zeta language.

The parser reads tokens from a ``Lexer`` with one token of lookahead and
builds one ``Compound`` node per source line::

    compound_statement := statement_list (END_OF_LINE | END_OF_INPUT)
    statement_list     := statement (SEMI statement)*
    statement          := assignment | expr | empty
    assignment         := IDENTIFIER ASSIGN expr
    expr               := term ((PLUS | MINUS) term)*
    term               := factor ((MUL | DIV) factor)*
    factor             := (PLUS | MINUS) factor | NUMBER
                        | LPAREN expr RPAREN | IDENTIFIER

Precedence is encoded by the rule nesting; binary operators associate to
the left because each new operator wraps the accumulated node.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .ast import Assign, BinOp, Compound, NoOp, Node, Num, UnaryOp, Var
from .errors import MisplacedIdentifier, UnexpectedToken
from .lexer import Lexer
from .tokens import Token, TokenType


# Tokens that may begin an expression statement
EXPRESSION_START = (
    TokenType.PLUS, TokenType.MINUS, TokenType.NUMBER,
    TokenType.LPAREN, TokenType.IDENTIFIER,
)


class Parser:
    def __init__(self, lexer: Lexer, debug: Optional[Callable[[str], None]] = None):
        self.lexer = lexer
        self.debug = debug
        self.current_token = self.lexer.next_token()

    @property
    def at_end(self) -> bool:
        return self.current_token.kind is TokenType.END_OF_INPUT

    def match(self, *kinds: TokenType) -> bool:
        return self.current_token.kind in kinds

    def eat(self, *kinds: TokenType) -> Token:
        token = self.current_token
        if token.kind not in kinds:
            raise UnexpectedToken(token.kind.name, token.value, token.row, token.column,
                                  [k.name for k in kinds])
        if self.debug:
            self.debug(f"eat {token} at {token.row}:{token.column}")
        self.current_token = self.lexer.next_token()
        return token

    def parse(self) -> Compound:
        """Parse the next source line into a Compound node."""
        return self.compound_statement()

    def compound_statement(self) -> Compound:
        statements = self.statement_list()
        self.eat(TokenType.END_OF_LINE, TokenType.END_OF_INPUT)
        return Compound(statements)

    def statement_list(self) -> List[Node]:
        row = self.current_token.row
        statements = [self.statement()]
        while self.match(TokenType.SEMICOLON):
            self.eat(TokenType.SEMICOLON)
            statements.append(self.statement())
        token = self.current_token
        if token.kind is TokenType.IDENTIFIER and token.row == row:
            raise MisplacedIdentifier(token.value, token.row, token.column)
        return statements

    def statement(self) -> Node:
        if self.match(TokenType.IDENTIFIER):
            # One token of lookahead: the identifier is either an assignment
            # target or the first factor of an expression.
            var = Var(self.eat(TokenType.IDENTIFIER).value)
            if self.match(TokenType.ASSIGN):
                return self.assignment(var)
            return self.expr(self.term(var))
        if self.match(*EXPRESSION_START):
            return self.expr()
        return self.empty()

    def assignment(self, target: Var) -> Assign:
        op = self.eat(TokenType.ASSIGN)
        return Assign(target, op.kind, self.expr())

    def empty(self) -> NoOp:
        return NoOp()

    def expr(self, first: Optional[Node] = None) -> Node:
        node = first if first is not None else self.term()
        while self.match(TokenType.PLUS, TokenType.MINUS):
            op = self.eat(TokenType.PLUS, TokenType.MINUS)
            node = BinOp(op.kind, node, self.term())
        return node

    def term(self, first: Optional[Node] = None) -> Node:
        node = first if first is not None else self.factor()
        while self.match(TokenType.MUL, TokenType.DIV):
            op = self.eat(TokenType.MUL, TokenType.DIV)
            node = BinOp(op.kind, node, self.factor())
        return node

    def factor(self) -> Node:
        token = self.current_token
        if token.kind in (TokenType.PLUS, TokenType.MINUS):
            self.eat(token.kind)
            return UnaryOp(token.kind, self.factor())
        if token.kind is TokenType.NUMBER:
            self.eat(TokenType.NUMBER)
            return Num(float(token.value))
        if token.kind is TokenType.LPAREN:
            self.eat(TokenType.LPAREN)
            node = self.expr()
            self.eat(TokenType.RPAREN)
            return node
        if token.kind is TokenType.IDENTIFIER:
            self.eat(TokenType.IDENTIFIER)
            return Var(token.value)
        raise UnexpectedToken(token.kind.name, token.value, token.row, token.column,
                              [k.name for k in EXPRESSION_START])


def parse_program(source: str) -> List[Compound]:
    """Parse a whole Zeta source string into one Compound per line."""
    parser = Parser(Lexer.from_text(source))
    compounds: List[Compound] = []
    while not parser.at_end:
        compounds.append(parser.parse())
    return compounds
