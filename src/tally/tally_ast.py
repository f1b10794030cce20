"""
Defines the abstract syntax tree (AST) produced by the TALLY parser.

Classes:
    ArithmeticOperator, RelationalOperator, LogicalOperator:
        Operator enumerations; each member's value is its source symbol.

    Expression:
        Base of the closed set of expression nodes: NumberLiteral, StringLiteral,
        BooleanLiteral, Variable, BinaryOp and CompareOp.

    Statement:
        Base of the statement nodes. Assignment is the only statement form.

    Program:
        Ordered, immutable sequence of statements in source order.

    NodeDict:
        TypedDict shape of ``to_dict()`` output, suitable for JSON.

All nodes are frozen dataclasses: they compare structurally, hash, and cannot be
mutated after the parser builds them. Subtrees are never shared.

Example:
    BinaryOp(NumberLiteral(1), ArithmeticOperator.ADD, NumberLiteral(2))
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, TypedDict, Union


class NodeDict(TypedDict):
    """
    Serialized form of an AST node.

    Fields:
        kind (str): Node class name (e.g. "BinaryOp", "Assignment").
        value (Any): Literal payload, variable/target name, or operator symbol.
        children (list[NodeDict]): Child nodes in source order.
    """

    kind: str
    value: Any
    children: list["NodeDict"]


class ArithmeticOperator(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    FLOOR_DIVIDE = "//"
    MODULUS = "%"
    POWER = "**"


class RelationalOperator(Enum):
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS_THAN = "<"
    LESS_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_EQUAL = ">="


class LogicalOperator(Enum):
    AND = "&&"
    OR = "||"


CompareOperator = Union[RelationalOperator, LogicalOperator]


class ASTNode:
    """Common behavior of every node: a ``kind`` tag and dictionary conversion."""

    kind: ClassVar[str] = "node"

    def node_value(self) -> Any:
        return None

    def child_nodes(self) -> list["ASTNode"]:
        return []

    def to_dict(self) -> NodeDict:
        return {
            "kind": self.kind,
            "value": self.node_value(),
            "children": [c.to_dict() for c in self.child_nodes()],
        }


class Expression(ASTNode):
    pass


@dataclass(frozen=True)
class NumberLiteral(Expression):
    value: int

    kind: ClassVar[str] = "NumberLiteral"

    def node_value(self) -> Any:
        return self.value


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str

    kind: ClassVar[str] = "StringLiteral"

    def node_value(self) -> Any:
        return self.value


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

    kind: ClassVar[str] = "BooleanLiteral"

    def node_value(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Variable(Expression):
    name: str

    kind: ClassVar[str] = "Variable"

    def node_value(self) -> Any:
        return self.name


@dataclass(frozen=True)
class BinaryOp(Expression):
    """Arithmetic on two operands, e.g. ``left + right``."""

    left: Expression
    op: ArithmeticOperator
    right: Expression

    kind: ClassVar[str] = "BinaryOp"

    def node_value(self) -> Any:
        return self.op.value

    def child_nodes(self) -> list[ASTNode]:
        return [self.left, self.right]


@dataclass(frozen=True)
class CompareOp(Expression):
    """A relational or logical combination of two operands, e.g. ``left <= right``."""

    left: Expression
    op: CompareOperator
    right: Expression

    kind: ClassVar[str] = "CompareOp"

    def node_value(self) -> Any:
        return self.op.value

    def child_nodes(self) -> list[ASTNode]:
        return [self.left, self.right]


class Statement(ASTNode):
    pass


@dataclass(frozen=True)
class Assignment(Statement):
    name: str
    value: Expression

    kind: ClassVar[str] = "Assignment"

    def node_value(self) -> Any:
        return self.name

    def child_nodes(self) -> list[ASTNode]:
        return [self.value]


@dataclass(frozen=True)
class Program(ASTNode):
    """A parsed source document. ``statements`` is stored as a tuple."""

    statements: tuple[Statement, ...] = field(default_factory=tuple)

    kind: ClassVar[str] = "Program"

    def __post_init__(self) -> None:
        object.__setattr__(self, "statements", tuple(self.statements))

    def child_nodes(self) -> list[ASTNode]:
        return list(self.statements)


def dump(node: ASTNode, indent: int = 2) -> str:
    """Renders ``node`` as an indented tree, one node per line.

    Example:
        >>> print(dump(Assignment("x", NumberLiteral(1))))
        Assignment 'x'
          NumberLiteral 1
    """
    lines: list[str] = []

    def visit(n: ASTNode, depth: int) -> None:
        value = n.node_value()
        label = n.kind if value is None else f"{n.kind} {value!r}"
        lines.append(" " * (indent * depth) + label)
        for child in n.child_nodes():
            visit(child, depth + 1)

    visit(node, 0)
    return "\n".join(lines)


__all__ = [
    "ASTNode",
    "ArithmeticOperator",
    "Assignment",
    "BinaryOp",
    "BooleanLiteral",
    "CompareOp",
    "CompareOperator",
    "Expression",
    "LogicalOperator",
    "NodeDict",
    "NumberLiteral",
    "Program",
    "RelationalOperator",
    "Statement",
    "StringLiteral",
    "Variable",
    "dump",
]
