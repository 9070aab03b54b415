"""JSON serialization/deserialization for Zeta ASTs.

This module converts between Zeta AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Operators are stored by
their ``TokenType`` name; a whole program is a list of compounds wrapped in a
``Program`` envelope.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import Assign, BinOp, Compound, NoOp, Num, UnaryOp, Var
from .errors import UnknownOperator
from .tokens import TokenType


def op_to_obj(op: TokenType) -> str:
    return op.name


def op_from_obj(name: str) -> TokenType:
    try:
        return TokenType[name]
    except KeyError:
        raise UnknownOperator(name) from None


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, Num):
        return {"type": "Num", "value": node.value}
    if isinstance(node, Var):
        return {"type": "Var", "name": node.name}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "op": op_to_obj(node.op), "operand": ast_to_obj(node.operand)}
    if isinstance(node, BinOp):
        return {
            "type": "BinOp",
            "op": op_to_obj(node.op),
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Assign):
        return {
            "type": "Assign",
            "target": ast_to_obj(node.target),
            "op": op_to_obj(node.op),
            "value": ast_to_obj(node.value),
        }
    if isinstance(node, Compound):
        return {"type": "Compound", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, NoOp):
        return {"type": "NoOp"}
    raise ValueError(f"Unsupported node for serialization: {type(node)}")


EXPRESSION_NODES = (Num, Var, UnaryOp, BinOp, Assign)
STATEMENT_NODES = EXPRESSION_NODES + (NoOp,)


def node_from_obj(obj: Any, allowed: tuple, where: str) -> Any:
    node = ast_from_obj(obj)
    if not isinstance(node, allowed):
        raise ValueError(f"{where} cannot be {type(node).__name__}")
    return node


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict) or "type" not in obj:
        raise ValueError(f"Invalid AST object: {obj!r}")

    t = obj["type"]
    if t == "Num":
        return Num(float(obj["value"]))
    if t == "Var":
        if not isinstance(obj["name"], str):
            raise ValueError(f"Var name must be a string, got {obj['name']!r}")
        return Var(obj["name"])
    if t == "UnaryOp":
        return UnaryOp(op_from_obj(obj["op"]), node_from_obj(obj["operand"], EXPRESSION_NODES, "UnaryOp operand"))
    if t == "BinOp":
        return BinOp(
            op_from_obj(obj["op"]),
            node_from_obj(obj["left"], EXPRESSION_NODES, "BinOp left operand"),
            node_from_obj(obj["right"], EXPRESSION_NODES, "BinOp right operand"),
        )
    if t == "Assign":
        return Assign(
            node_from_obj(obj["target"], (Var,), "Assign target"),
            op_from_obj(obj.get("op", "ASSIGN")),
            node_from_obj(obj["value"], EXPRESSION_NODES, "Assign value"),
        )
    if t == "Compound":
        statements = obj.get("statements", [])
        if not isinstance(statements, list):
            raise ValueError("Compound statements must be a list")
        return Compound([node_from_obj(s, STATEMENT_NODES, "Compound statement") for s in statements])
    if t == "NoOp":
        return NoOp()
    raise ValueError(f"Unknown AST node type: {t}")


def program_to_obj(compounds: List[Compound]) -> Dict[str, Any]:
    return {"type": "Program", "body": [ast_to_obj(c) for c in compounds]}


def program_from_obj(obj: Dict[str, Any]) -> List[Compound]:
    if not isinstance(obj, dict) or obj.get("type") != "Program":
        raise ValueError("AST JSON root must be a Program object")
    body = obj.get("body", [])
    if not isinstance(body, list):
        raise ValueError("Program body must be a list")
    return [node_from_obj(c, (Compound,), "Program body entry") for c in body]
