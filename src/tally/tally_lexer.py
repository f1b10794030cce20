"""
Lexical analyzer for the TALLY expression language.

This module converts raw source text into a flat list of tokens terminated by a
single ``EOF`` sentinel:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single token with type, value, and (diagnostic-only) source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.
    LexError: Raised for any character sequence that is not a valid token.

Features:
    - Skips whitespace (space, tab, carriage return, newline)
    - Longest-match recognition of operators (``**`` before ``*``, ``//`` before ``/``)
    - Recognizes:
        * ASCII identifiers (``[A-Za-z_][A-Za-z0-9_]*``) and the boolean literals
          ``True`` / ``False``
        * Signed integers (``-`` directly before a digit in operand position)
        * Double-quoted strings (no escape sequences)
        * Operators, ``=``, and parentheses

Raises:
    LexError: On unterminated strings, integer literals too long to convert,
        lone ``!``, ``&`` or ``|``, any other unrecognized character (non-ASCII
        letters included), or when the token bound is exceeded.

Example:
    >>> tokenize("x = -4")
    [Token(IDENT, x), Token(ASSIGN, =), Token(NUMBER, -4), Token(EOF, EOF)]

Exports:
    - CharacterStream
    - LexError
    - Lexer
    - Token
    - render_tokens
    - tokenize
"""

from typing import Any

from tally.tally_constants import (
    DEFAULT_MAX_TOKENS,
    MAX_INTEGER_DIGITS,
    boolean_literals,
    incomplete_operators,
    token_hashmap,
)

# Token types that can end an operand; a ``-`` after one of these is subtraction.
OPERAND_END_TYPES = frozenset({"NUMBER", "IDENT", "STRING", "BOOLEAN", "RPAREN"})

_LONGEST_LEXEME = max(len(lexeme) for lexeme in token_hashmap)


class LexError(SyntaxError):
    """Raised when the source contains text that cannot be tokenized.

    Attributes:
        line (int): 1-based line of the offending character.
        col (int): 1-based column of the offending character.
        char (str | None): The offending character, when there is one.
    """

    def __init__(self, message: str, line: int, col: int, char: str | None = None):
        super().__init__(f"{message} at line {line}, col {col}")
        self.line = line
        self.col = col
        self.char = char


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            LexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise LexError("Attempted to read past end of source", self.line, self.column)
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at ``offset`` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token.

    Tokens are values: equality and hashing look at ``type`` and ``value`` only,
    so the same lexeme scanned at two different places compares equal. ``line``
    and ``col`` are kept for error messages.

    Attributes:
        type (str): One of NUMBER, IDENT, STRING, BOOLEAN, OPERATOR, ASSIGN,
            LPAREN, RPAREN, EOF.
        value (str | int | bool): ``int`` for NUMBER, ``bool`` for BOOLEAN, the
            text otherwise.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, value: str | int | bool, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and type(self.value) is type(other.value)
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value))

    def lexeme(self) -> str:
        """Returns source text that scans back to this token."""
        if self.type == "EOF":
            return ""
        if self.type == "STRING":
            return f'"{self.value}"'
        return str(self.value)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


# Identifiers are ASCII only; other letters and digits are lexical errors.
def _is_word_start(ch: str) -> bool:
    return ch != "" and ch.isascii() and (ch.isalpha() or ch == "_")


def _is_word_char(ch: str) -> bool:
    return _is_word_start(ch) or _is_digit(ch)


class Lexer:
    """Lexical analyzer for TALLY source.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        previous (Token | None): The last token returned; decides whether a
            ``-`` before a digit is a sign or a subtraction.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self.previous: Token | None = None

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in " \t\r\n":
            self.advance()

    def in_operand_position(self) -> bool:
        """True when the next token must start an operand rather than continue one."""
        return self.previous is None or self.previous.type not in OPERAND_END_TYPES

    def match_operator(self) -> Token | None:
        """Attempts to match the longest fixed lexeme from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        candidate = ""

        for i in range(_LONGEST_LEXEME):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def read_word(self, line: int, col: int) -> Token:
        word = ""
        while _is_word_char(self.peek()):
            word += self.advance()
        if word in boolean_literals:
            return Token("BOOLEAN", boolean_literals[word], line, col)
        return Token("IDENT", word, line, col)

    def read_number(self, line: int, col: int) -> Token:
        digits = ""
        if self.peek() == "-":
            digits += self.advance()
        while _is_digit(self.peek()):
            digits += self.advance()
        if len(digits.lstrip("-")) > MAX_INTEGER_DIGITS:
            raise LexError(
                f"Integer literal longer than {MAX_INTEGER_DIGITS} digits", line, col
            )
        return Token("NUMBER", int(digits), line, col)

    def read_string(self, line: int, col: int) -> Token:
        self.advance()  # opening quote
        text = ""
        while not self.stream.end_of_file() and self.peek() != '"':
            text += self.advance()
        if self.stream.end_of_file():
            raise LexError("Unterminated string", line, col, '"')
        self.advance()  # closing quote
        return Token("STRING", text, line, col)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token; an EOF token once the input is exhausted.

        Raises:
            LexError: If the text at the current position is not a valid token.
        """
        token = self._scan()
        self.previous = token
        return token

    def _scan(self) -> Token:
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token("EOF", "EOF", line, col)

        ch = self.peek()

        # 1. Identifier or boolean
        if _is_word_start(ch):
            return self.read_word(line, col)

        # 2. String
        if ch == '"':
            return self.read_string(line, col)

        # 3. Number, signed when the minus sits in operand position
        if _is_digit(ch) or (
            ch == "-" and _is_digit(self.peek(1)) and self.in_operand_position()
        ):
            return self.read_number(line, col)

        # 4. Operators and punctuation
        token = self.match_operator()
        if token:
            return token

        if ch in incomplete_operators:
            raise LexError(
                f"Unexpected character {ch!r} (did you mean {incomplete_operators[ch]!r}?)",
                line,
                col,
                ch,
            )
        raise LexError(f"Unexpected character {ch!r}", line, col, ch)


def tokenize(source: str, max_tokens: int | None = DEFAULT_MAX_TOKENS) -> list[Token]:
    """Scans ``source`` into a token list that always ends with exactly one EOF token.

    Args:
        source (str): TALLY source text.
        max_tokens (int | None): Maximum number of non-EOF tokens; None disables the bound.

    Raises:
        LexError: On invalid input or when more than ``max_tokens`` tokens are produced.
    """
    lexer = Lexer(CharacterStream(source))
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == "EOF":
            return tokens
        if max_tokens is not None and len(tokens) > max_tokens:
            raise LexError(f"Token limit of {max_tokens} exceeded", tok.line, tok.col)


def render_tokens(tokens: list[Token]) -> str:
    """Writes tokens back out as source text, one space between lexemes."""
    return " ".join(tok.lexeme() for tok in tokens if tok.type != "EOF")


__all__ = ["CharacterStream", "LexError", "Lexer", "Token", "render_tokens", "tokenize"]
