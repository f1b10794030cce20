"""
TALLY Language Parser

Parses a token list produced by ``tally.tally_lexer.tokenize`` into a ``Program``.

The parser is recursive descent with one function per precedence tier
(precedence climbing by layered rules). From loosest to tightest binding:

    program        := statement* EOF
    statement      := assignment
    assignment     := IDENT "=" expression
    expression     := logical_or
    logical_or     := logical_and ("||" logical_and)*
    logical_and    := comparison ("&&" comparison)*
    comparison     := additive (("==" | "!=" | "<" | "<=" | ">" | ">=") additive)*
    additive       := multiplicative (("+" | "-") multiplicative)*
    multiplicative := power (("*" | "/" | "//" | "%") power)*
    power          := primary ("**" primary)*
    primary        := NUMBER | IDENT | STRING | BOOLEAN | "(" expression ")"

Every tier folds to the left, ``**`` included: ``2 ** 3 ** 2`` parses as
``(2 ** 3) ** 2``. This is intentional and differs from the usual mathematical
convention.

Parser Behavior
---------------
- The cursor only moves forward; one token of lookahead is enough everywhere.
- The EOF sentinel stands in for bounds checks: reading past the end yields EOF.
- Fail-fast: the first error is raised and no partial program is returned.
- Parenthesis nesting is bounded by ``MAX_NESTING_DEPTH``.

Entry Points
------------
- ``Parser(tokens).parse()``: Parse a full program.
- ``parse_program(tokens)``: Functional form of the above.
- ``parse(source)``: Tokenize and parse source text.

Raises
------
ParseError
    Base of UnexpectedToken, MismatchParenthesis, InvalidIdentifier,
    InvalidAssignment, UnexpectedEOF and NestingTooDeep. ParseError subclasses
    SyntaxError.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from tally.tally_ast import (
    ArithmeticOperator,
    Assignment,
    BinaryOp,
    BooleanLiteral,
    CompareOp,
    Expression,
    LogicalOperator,
    NumberLiteral,
    Program,
    RelationalOperator,
    Statement,
    StringLiteral,
    Variable,
)
from tally.tally_constants import DEFAULT_MAX_TOKENS, MAX_NESTING_DEPTH
from tally.tally_lexer import Token, tokenize


class ParseError(SyntaxError):
    """Base class for syntax errors.

    Attributes:
        token (Token): The token at which parsing failed.
        line (int): Line of that token.
        col (int): Column of that token.
    """

    def __init__(self, message: str, token: Token):
        super().__init__(f"{message} at line {token.line}, col {token.col}")
        self.token = token
        self.line = token.line
        self.col = token.col


class UnexpectedToken(ParseError):
    """A primary expression starts with a token that cannot begin one."""


class MismatchParenthesis(ParseError):
    """A parenthesized expression is not closed by ``)``."""


class InvalidIdentifier(ParseError):
    """A statement does not begin with an identifier."""


class InvalidAssignment(ParseError):
    """An identifier at statement start is not followed by ``=``."""


class UnexpectedEOF(ParseError):
    """A token was required but the input ended."""


class NestingTooDeep(ParseError):
    """Parentheses are nested deeper than the parser accepts."""


def describe(tok: Token) -> str:
    if tok.type == "EOF":
        return "end of input"
    if tok.type == "STRING":
        return f"string {tok.lexeme()}"
    return f"{tok.type.lower()} {tok.lexeme()!r}"


class Parser:
    """
    TALLY Parser Class

    Attributes
    ----------
    tokens : list[Token]
        The token list; should end with an EOF token.
    position : int
        Index of the current token.
    depth : int
        Number of currently open parentheses.
    max_depth : int
        Nesting bound; keeps recursion well inside the interpreter limit.
    """

    def __init__(self, tokens: list[Token], max_depth: int = MAX_NESTING_DEPTH) -> None:
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.depth: int = 0
        self.max_depth: int = max_depth

    def current(self) -> Token:
        return self.peek(0)

    def peek(self, offset: int = 1) -> Token:
        index = self.position + offset
        if index < len(self.tokens):
            return self.tokens[index]
        last = self.tokens[-1] if self.tokens else None
        return Token("EOF", "EOF", last.line if last else 0, last.col if last else 0)

    def advance(self) -> Token:
        tok = self.current()
        self.position += 1
        return tok

    def at_operator(self, symbols: dict[str, Any]) -> bool:
        tok = self.current()
        return tok.type == "OPERATOR" and tok.value in symbols

    def expect(self, type_: str, error: type[ParseError], message: str) -> Token:
        """Consume a token of ``type_`` or raise ``error`` (UnexpectedEOF at end of input)."""
        tok = self.current()
        if tok.type == type_:
            return self.advance()
        if tok.type == "EOF":
            raise UnexpectedEOF(f"{message}, found end of input", tok)
        raise error(f"{message}, found {describe(tok)}", tok)

    def parse(self) -> Program:
        """Parse a full program and return it."""
        statements: list[Statement] = []
        while self.current().type != "EOF":
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_statement(self) -> Statement:
        return self.parse_assignment()

    def parse_assignment(self) -> Assignment:
        name = self.expect(
            "IDENT", InvalidIdentifier, "Expected a variable name to start a statement"
        )
        self.expect("ASSIGN", InvalidAssignment, f"Expected '=' after {name.value!r}")
        return Assignment(str(name.value), self.parse_expression())

    def parse_expression(self) -> Expression:
        return self.parse_logical_or()

    def fold_left(
        self,
        operand: Callable[[], Expression],
        operators: dict[str, Any],
        build: Callable[[Expression, Any, Expression], Expression],
    ) -> Expression:
        """Parse ``operand (op operand)*`` into a left-leaning tree."""
        acc = operand()
        while self.at_operator(operators):
            op = operators[str(self.advance().value)]
            acc = build(acc, op, operand())
        return acc

    def parse_logical_or(self) -> Expression:
        return self.fold_left(self.parse_logical_and, LOGICAL_OR_OPS, CompareOp)

    def parse_logical_and(self) -> Expression:
        return self.fold_left(self.parse_comparison, LOGICAL_AND_OPS, CompareOp)

    def parse_comparison(self) -> Expression:
        return self.fold_left(self.parse_additive, COMPARISON_OPS, CompareOp)

    def parse_additive(self) -> Expression:
        return self.fold_left(self.parse_multiplicative, ADDITIVE_OPS, BinaryOp)

    def parse_multiplicative(self) -> Expression:
        return self.fold_left(self.parse_power, MULTIPLICATIVE_OPS, BinaryOp)

    def parse_power(self) -> Expression:
        return self.fold_left(self.parse_primary, POWER_OPS, BinaryOp)

    def parse_primary(self) -> Expression:
        tok = self.current()

        if tok.type == "NUMBER":
            self.advance()
            return NumberLiteral(int(tok.value))
        if tok.type == "IDENT":
            self.advance()
            return Variable(str(tok.value))
        if tok.type == "STRING":
            self.advance()
            return StringLiteral(str(tok.value))
        if tok.type == "BOOLEAN":
            self.advance()
            return BooleanLiteral(bool(tok.value))
        if tok.type == "LPAREN":
            if self.depth >= self.max_depth:
                raise NestingTooDeep(
                    f"Parentheses nested deeper than {self.max_depth} levels", tok
                )
            self.advance()
            self.depth += 1
            expr = self.parse_expression()
            self.expect(
                "RPAREN",
                MismatchParenthesis,
                f"Expected ')' to close '(' opened at line {tok.line}, col {tok.col}",
            )
            self.depth -= 1
            return expr
        if tok.type == "EOF":
            raise UnexpectedEOF("Expected a primary expression, found end of input", tok)
        raise UnexpectedToken(
            f"Expected a primary expression, found {describe(tok)}", tok
        )


LOGICAL_OR_OPS: dict[str, Any] = {"||": LogicalOperator.OR}
LOGICAL_AND_OPS: dict[str, Any] = {"&&": LogicalOperator.AND}
COMPARISON_OPS: dict[str, Any] = {op.value: op for op in RelationalOperator}
ADDITIVE_OPS: dict[str, Any] = {
    "+": ArithmeticOperator.ADD,
    "-": ArithmeticOperator.SUBTRACT,
}
MULTIPLICATIVE_OPS: dict[str, Any] = {
    "*": ArithmeticOperator.MULTIPLY,
    "/": ArithmeticOperator.DIVIDE,
    "//": ArithmeticOperator.FLOOR_DIVIDE,
    "%": ArithmeticOperator.MODULUS,
}
POWER_OPS: dict[str, Any] = {"**": ArithmeticOperator.POWER}


def parse_program(tokens: list[Token]) -> Program:
    """Parse a token list (ending in EOF) into a Program."""
    return Parser(tokens).parse()


def parse(source: str, max_tokens: int | None = DEFAULT_MAX_TOKENS) -> Program:
    """Tokenize and parse ``source``.

    Raises:
        LexError: If the source cannot be tokenized.
        ParseError: If the tokens do not form a program.
    """
    return parse_program(tokenize(source, max_tokens=max_tokens))


__all__ = [
    "InvalidAssignment",
    "InvalidIdentifier",
    "MismatchParenthesis",
    "NestingTooDeep",
    "ParseError",
    "Parser",
    "UnexpectedEOF",
    "UnexpectedToken",
    "parse",
    "parse_program",
]
