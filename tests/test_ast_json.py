import json

import pytest

from zeta.ast import Assign, BinOp, Compound, NoOp, Num, UnaryOp, Var
from zeta.ast_json import ast_from_obj, ast_to_obj, program_from_obj, program_to_obj
from zeta.errors import UnknownOperator
from zeta.parser import parse_program
from zeta.tokens import TokenType


def test_program_survives_json_encoding():
    compounds = parse_program('x = -(1 + 2) * 3; x / 2\n\n;y = x')
    text = json.dumps(program_to_obj(compounds))
    assert program_from_obj(json.loads(text)) == compounds


def test_node_objects_use_type_and_operator_names():
    node = Assign(Var('a'), TokenType.ASSIGN, BinOp(TokenType.DIV, Num(1.0), UnaryOp(TokenType.MINUS, Var('b'))))
    assert ast_to_obj(node) == {
        "type": "Assign",
        "target": {"type": "Var", "name": "a"},
        "op": "ASSIGN",
        "value": {
            "type": "BinOp",
            "op": "DIV",
            "left": {"type": "Num", "value": 1.0},
            "right": {"type": "UnaryOp", "op": "MINUS", "operand": {"type": "Var", "name": "b"}},
        },
    }
    assert ast_to_obj(Compound([NoOp()])) == {"type": "Compound", "statements": [{"type": "NoOp"}]}


def test_unknown_operator_name():
    with pytest.raises(UnknownOperator):
        ast_from_obj({"type": "BinOp", "op": "POW", "left": {"type": "Num", "value": 1}, "right": {"type": "Num", "value": 2}})


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({"type": "While"})
    with pytest.raises(ValueError):
        ast_from_obj([1, 2])


def test_program_root_is_checked():
    with pytest.raises(ValueError):
        program_from_obj({"type": "Compound", "statements": []})
    with pytest.raises(ValueError):
        program_from_obj({"type": "Program", "body": [{"type": "Num", "value": 1}]})


NUM = {"type": "Num", "value": 1}


@pytest.mark.parametrize('obj', [
    {"type": "Assign", "target": NUM, "op": "ASSIGN", "value": NUM},
    {"type": "Assign", "target": {"type": "Var", "name": 3}, "op": "ASSIGN", "value": NUM},
    {"type": "Compound", "statements": [{"type": "Compound", "statements": []}]},
    {"type": "Compound", "statements": {"type": "NoOp"}},
    {"type": "UnaryOp", "op": "MINUS", "operand": {"type": "NoOp"}},
    {"type": "BinOp", "op": "PLUS", "left": NUM, "right": None},
    {"type": "Assign", "target": {"type": "Var", "name": "x"}, "op": "ASSIGN", "value": {"type": "Compound"}},
])
def test_misshapen_trees_are_rejected(obj):
    with pytest.raises(ValueError):
        ast_from_obj(obj)


def test_program_body_must_be_a_list():
    with pytest.raises(ValueError):
        program_from_obj({"type": "Program", "body": {"type": "Compound", "statements": []}})
