"""
Shared lexical tables and tunables for the TALLY front end.

Exports:
    token_hashmap: Maps every fixed lexeme (operators and punctuation) to its token type.
    operator_symbols: Every symbol carried by an OPERATOR token.
    boolean_literals: Source spellings of the two boolean literals.
    DEFAULT_MAX_TOKENS: Upper bound on the number of tokens produced per call.
    MAX_INTEGER_DIGITS: Longest accepted integer literal, sign excluded.
    MAX_NESTING_DEPTH: Deepest accepted parenthesis nesting.
    SOURCE_SUFFIX: File extension accepted by the command-line driver.
"""

SOURCE_SUFFIX = ".tally"

# None disables the bound.
DEFAULT_MAX_TOKENS: int | None = 100_000

# Below the interpreter's int/str conversion limit (4300 digits).
MAX_INTEGER_DIGITS = 4000

# Parenthesis nesting bound; each level costs about fourteen Python frames.
MAX_NESTING_DEPTH = 32

operator_symbols: tuple[str, ...] = (
    "+",
    "-",
    "*",
    "/",
    "//",
    "%",
    "**",
    "==",
    "!=",
    "<",
    "<=",
    ">",
    ">=",
    "&&",
    "||",
)

token_hashmap: dict[str, str] = {
    **{symbol: "OPERATOR" for symbol in operator_symbols},
    "=": "ASSIGN",
    "(": "LPAREN",
    ")": "RPAREN",
}

boolean_literals: dict[str, bool] = {"True": True, "False": False}

# Prefixes of operators that are not operators on their own.
incomplete_operators: dict[str, str] = {"!": "!=", "&": "&&", "|": "||"}

__all__ = [
    "DEFAULT_MAX_TOKENS",
    "MAX_INTEGER_DIGITS",
    "MAX_NESTING_DEPTH",
    "SOURCE_SUFFIX",
    "boolean_literals",
    "incomplete_operators",
    "operator_symbols",
    "token_hashmap",
]
