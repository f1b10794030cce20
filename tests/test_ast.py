import dataclasses
import json

import hypothesis.strategies as st
import pytest
from hypothesis import given

from tally.tally_ast import (
    ArithmeticOperator,
    Assignment,
    BinaryOp,
    BooleanLiteral,
    CompareOp,
    LogicalOperator,
    NumberLiteral,
    Program,
    RelationalOperator,
    StringLiteral,
    Variable,
    dump,
)


def test_nodes_compare_structurally() -> None:
    a = BinaryOp(NumberLiteral(1), ArithmeticOperator.ADD, Variable("x"))
    b = BinaryOp(NumberLiteral(1), ArithmeticOperator.ADD, Variable("x"))
    assert a == b
    assert hash(a) == hash(b)


def test_nodes_of_different_kinds_are_not_equal() -> None:
    assert NumberLiteral(1) != BooleanLiteral(True)
    assert StringLiteral("x") != Variable("x")
    assert BinaryOp(
        NumberLiteral(1), ArithmeticOperator.ADD, NumberLiteral(2)
    ) != CompareOp(NumberLiteral(1), RelationalOperator.EQUAL, NumberLiteral(2))


def test_nodes_are_immutable() -> None:
    node = Assignment("x", NumberLiteral(1))
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.name = "y"  # type: ignore[misc]


def test_program_stores_statements_as_tuple() -> None:
    statements = [Assignment("x", NumberLiteral(1))]
    program = Program(statements)
    statements.append(Assignment("y", NumberLiteral(2)))
    assert program.statements == (Assignment("x", NumberLiteral(1)),)
    assert len(program.statements) == 1
    assert Program() == Program([])


def test_empty_program_is_truthy() -> None:
    assert Program()
    assert bool(Program([])) is True
    assert not hasattr(Program, "__len__")


def test_operator_enums_use_source_symbols() -> None:
    assert ArithmeticOperator("//") is ArithmeticOperator.FLOOR_DIVIDE
    assert ArithmeticOperator("**") is ArithmeticOperator.POWER
    assert RelationalOperator("!=") is RelationalOperator.NOT_EQUAL
    assert LogicalOperator("||") is LogicalOperator.OR


def test_relational_and_logical_operators_are_distinct() -> None:
    relational = {op.value for op in RelationalOperator}
    logical = {op.value for op in LogicalOperator}
    assert relational.isdisjoint(logical)


def test_to_dict_nested() -> None:
    program = Program(
        [
            Assignment(
                "x",
                CompareOp(
                    BinaryOp(NumberLiteral(1), ArithmeticOperator.ADD, Variable("y")),
                    LogicalOperator.AND,
                    BooleanLiteral(True),
                ),
            )
        ]
    )
    assert program.to_dict() == {
        "kind": "Program",
        "value": None,
        "children": [
            {
                "kind": "Assignment",
                "value": "x",
                "children": [
                    {
                        "kind": "CompareOp",
                        "value": "&&",
                        "children": [
                            {
                                "kind": "BinaryOp",
                                "value": "+",
                                "children": [
                                    {"kind": "NumberLiteral", "value": 1, "children": []},
                                    {"kind": "Variable", "value": "y", "children": []},
                                ],
                            },
                            {"kind": "BooleanLiteral", "value": True, "children": []},
                        ],
                    }
                ],
            }
        ],
    }


def test_to_dict_is_json_serializable() -> None:
    node = Assignment("s", StringLiteral('quote " and \\ slash'))
    assert json.loads(json.dumps(node.to_dict())) == node.to_dict()


def test_dump_renders_indented_tree() -> None:
    program = Program(
        [
            Assignment(
                "x",
                BinaryOp(NumberLiteral(1), ArithmeticOperator.MULTIPLY, NumberLiteral(-3)),
            ),
            Assignment("y", StringLiteral("hi")),
        ]
    )
    assert dump(program) == "\n".join(
        [
            "Program",
            "  Assignment 'x'",
            "    BinaryOp '*'",
            "      NumberLiteral 1",
            "      NumberLiteral -3",
            "  Assignment 'y'",
            "    StringLiteral 'hi'",
        ]
    )


def test_dump_custom_indent() -> None:
    node = Assignment("flag", BooleanLiteral(False))
    assert dump(node, indent=4) == "Assignment 'flag'\n    BooleanLiteral False"


@given(st.integers())  # type: ignore[misc]
def test_number_literal_round_trips_through_dict(value: int) -> None:
    d = NumberLiteral(value).to_dict()
    assert d == {"kind": "NumberLiteral", "value": value, "children": []}


@given(st.text(), st.text())  # type: ignore[misc]
def test_assignment_equality_follows_fields(a: str, b: str) -> None:
    assert (Assignment(a, Variable(b)) == Assignment(a, Variable(b))) is True
    assert (Assignment(a, Variable(b)) == Assignment(a + "x", Variable(b))) is False
