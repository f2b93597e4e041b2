"""
Lexer (tokenizer) for COSY syntax.

Supports:
- Identifiers (unquoted object keys)
- Keywords: true, false, null
- Double-quoted strings with \\n \\t \\r \\\\ \\" escapes
- Integers and floats (optional sign, fraction and exponent)
- Structural symbols: { } [ ] : ,
- Newlines and // comments, emitted as tokens because the parser uses
  them as separators and for comment attachment
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator
import math

from ..const import INT64_MAX, INT64_MIN
from ..errors import LexError


class TokenType(Enum):
    """Token types for COSY syntax."""

    # Literals
    IDENTIFIER = auto()    # key
    STRING = auto()        # "quoted string"
    INTEGER = auto()       # 42, -7
    FLOAT = auto()         # 3.14, 1e10

    # Keywords
    TRUE = auto()
    FALSE = auto()
    NULL = auto()

    # Symbols
    LBRACE = auto()        # {
    RBRACE = auto()        # }
    LBRACKET = auto()      # [
    RBRACKET = auto()      # ]
    COLON = auto()         # :
    COMMA = auto()         # ,

    # Layout
    NEWLINE = auto()
    COMMENT = auto()       # // text

    EOF = auto()


@dataclass
class Token:
    """A single token from the lexer."""

    type: TokenType
    value: str | int | float | None
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    def describe(self) -> str:
        """Human readable form for error messages."""
        t = self.type
        if t == TokenType.IDENTIFIER:
            return f"identifier '{self.value}'"
        if t == TokenType.STRING:
            return f'string "{self.value}"'
        if t == TokenType.INTEGER:
            return f"integer {self.value}"
        if t == TokenType.FLOAT:
            return f"float {self.value}"
        if t == TokenType.COMMENT:
            return "comment"
        return _SYMBOL_NAMES[t]


_SYMBOL_NAMES = {
    TokenType.TRUE: "true",
    TokenType.FALSE: "false",
    TokenType.NULL: "null",
    TokenType.LBRACE: "{",
    TokenType.RBRACE: "}",
    TokenType.LBRACKET: "[",
    TokenType.RBRACKET: "]",
    TokenType.COLON: ":",
    TokenType.COMMA: ",",
    TokenType.NEWLINE: "newline",
    TokenType.EOF: "EOF",
}


class Lexer:
    """
    Tokenizer for COSY syntax.

    Example:
        {
            // Server configuration
            host: "localhost"
            port: 8080, debug: true
        }
    """

    KEYWORDS = {"true": TokenType.TRUE, "false": TokenType.FALSE, "null": TokenType.NULL}

    SYMBOLS = {
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        "[": TokenType.LBRACKET,
        "]": TokenType.RBRACKET,
        ":": TokenType.COLON,
        ",": TokenType.COMMA,
    }

    ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"'}

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def _current(self) -> str:
        """Get current character or empty string if at end."""
        if self.pos >= len(self.source):
            return ""
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> str:
        """Peek at character at offset from current position."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Advance position and return current character."""
        if self.pos >= len(self.source):
            return ""

        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def _error(self, message: str) -> LexError:
        return LexError(message, self.line, self.column)

    def _skip_whitespace(self) -> None:
        """Skip blanks; newlines are tokens."""
        while self._current() and self._current() in " \t\r":
            self._advance()

    def _read_comment(self, line: int, column: int) -> Token:
        """Read a // comment up to (not including) the end of line."""
        self._advance()  # skip /
        self._advance()  # skip /
        start = self.pos
        while self._current() and self._current() != "\n":
            self._advance()
        text = self.source[start:self.pos].strip()
        return Token(TokenType.COMMENT, text, line, column)

    def _read_string(self, line: int, column: int) -> Token:
        """Read a double-quoted string literal."""
        self._advance()  # skip opening quote
        result = []

        while self._current() and self._current() != '"':
            char = self._current()
            if char == "\\":
                self._advance()
                escape_char = self._current()
                if escape_char == "":
                    raise self._error("Unterminated string: unexpected EOF")
                if escape_char not in self.ESCAPES:
                    raise self._error(f"Invalid escape sequence: \\{escape_char}")
                result.append(self.ESCAPES[escape_char])
                self._advance()
            else:
                result.append(char)
                self._advance()

        if not self._current():
            raise self._error("Unterminated string")

        self._advance()  # skip closing quote
        return Token(TokenType.STRING, "".join(result), line, column)

    def _read_digits(self) -> None:
        while self._current().isdigit() and self._current().isascii():
            self._advance()

    def _read_number(self, line: int, column: int) -> Token:
        """Read an integer or float literal."""
        start = self.pos
        is_float = False

        if self._current() == "-":
            self._advance()

        self._read_digits()

        # A dot only belongs to the number when a digit follows it
        if self._current() == "." and self._peek().isdigit() and self._peek().isascii():
            self._advance()
            self._read_digits()
            is_float = True

        if self._current() in ("e", "E"):
            self._advance()
            if self._current() in ("+", "-"):
                self._advance()
            if not (self._current().isdigit() and self._current().isascii()):
                raise LexError("Invalid exponent in number", line, column)
            self._read_digits()
            is_float = True

        text = self.source[start:self.pos]

        if is_float:
            try:
                value = float(text)
            except ValueError:
                raise LexError(f"Invalid float: {text}", line, column)
            if math.isinf(value):
                raise LexError(f"Float out of range: {text}", line, column)
            return Token(TokenType.FLOAT, value, line, column)

        try:
            number = int(text)
        except ValueError:
            raise LexError(f"Invalid integer: {text}", line, column)
        if not INT64_MIN <= number <= INT64_MAX:
            raise LexError(f"Integer out of range: {text}", line, column)
        return Token(TokenType.INTEGER, number, line, column)

    def _read_identifier(self, line: int, column: int) -> Token:
        """Read an identifier or keyword."""
        start = self.pos
        while self._current() and (self._current().isalnum() or self._current() == "_"):
            self._advance()

        word = self.source[start:self.pos]
        if word in self.KEYWORDS:
            return Token(self.KEYWORDS[word], None, line, column)
        return Token(TokenType.IDENTIFIER, word, line, column)

    def next_token(self) -> Token:
        """Get the next token from the source."""
        self._skip_whitespace()

        # Position is captured before the token is consumed
        line = self.line
        column = self.column

        if self.pos >= len(self.source):
            return Token(TokenType.EOF, None, line, column)

        char = self._current()

        if char == "\n":
            self._advance()
            return Token(TokenType.NEWLINE, None, line, column)

        if char in self.SYMBOLS:
            self._advance()
            return Token(self.SYMBOLS[char], char, line, column)

        if char == "/" and self._peek() == "/":
            return self._read_comment(line, column)

        if char == '"':
            return self._read_string(line, column)

        if char == "-" or (char.isdigit() and char.isascii()):
            return self._read_number(line, column)

        if (char.isalpha() and char.isascii()) or char == "_":
            return self._read_identifier(line, column)

        raise self._error(f"Unexpected character: {char!r}")

    def tokenize(self) -> Iterator[Token]:
        """Generate all tokens from the source, ending with EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                break

    def __iter__(self) -> Iterator[Token]:
        """Allow iteration over tokens."""
        return self.tokenize()


def tokenize(source: str) -> list[Token]:
    """Convenience function to tokenize a source string."""
    return list(Lexer(source))
