"""
Environment variable interpolation for COSY documents.

Runs over the raw text before it reaches the lexer:

    host: "${HOST}"          -> host: "127.0.0.1"
    api_key: "key-${KEY}"    -> api_key: "key-secret"
    port: ${PORT}            -> port: 9090        (bare literal)
    name: ${NAME}            -> name: "web-01"    (quoted when not a literal)

Inside strings, \\$ produces a literal dollar sign so "\\${VAR}" stays as
the text ${VAR}. Comments are copied untouched.
"""

from collections.abc import Mapping
import os
import re

from ..errors import InterpolationError


# Values that may be substituted unquoted outside of strings
_LITERAL_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?|true|false|null")

_STRING_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def escape_string(text: str) -> str:
    """Escape text for use inside a double-quoted COSY string."""
    return "".join(_STRING_ESCAPES.get(char, char) for char in text)


class Interpolator:
    """Single-pass scanner that expands ${NAME} references."""

    def __init__(self, source: str, environ: Mapping[str, str] | None = None):
        self.source = source
        self.environ = os.environ if environ is None else environ
        self.pos = 0
        self.line = 1
        self.column = 1
        self.out: list[str] = []

    def _current(self) -> str:
        if self.pos >= len(self.source):
            return ""
        return self.source[self.pos]

    def _peek(self) -> str:
        if self.pos + 1 >= len(self.source):
            return ""
        return self.source[self.pos + 1]

    def _advance(self) -> str:
        char = self.source[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _copy(self) -> None:
        self.out.append(self._advance())

    def _lookup(self) -> str:
        """Consume ${NAME} at the current position and return its value."""
        line, column = self.line, self.column
        self._advance()  # $
        self._advance()  # {
        start = self.pos
        while self._current() and self._current() not in "}\n":
            self._advance()
        if self._current() != "}":
            raise InterpolationError("Unterminated variable reference", line, column)
        name = self.source[start:self.pos].strip()
        self._advance()  # }

        if not name:
            raise InterpolationError("Empty variable name in ${}", line, column)
        if name not in self.environ:
            raise InterpolationError(f"Environment variable '{name}' not found", line, column)
        return self.environ[name]

    def _copy_comment(self) -> None:
        while self._current() and self._current() != "\n":
            self._copy()

    def _copy_string(self) -> None:
        self._copy()  # opening quote
        while self._current() and self._current() != '"':
            char = self._current()
            if char == "\\":
                if self._peek() == "$":
                    self._advance()
                    self.out.append(self._advance())
                else:
                    # Leave other escapes for the lexer to validate
                    self._copy()
                    if self._current():
                        self._copy()
            elif char == "$" and self._peek() == "{":
                self.out.append(escape_string(self._lookup()))
            else:
                self._copy()
        if self._current():
            self._copy()  # closing quote

    def run(self) -> str:
        while self._current():
            char = self._current()
            if char == '"':
                self._copy_string()
            elif char == "/" and self._peek() == "/":
                self._copy_comment()
            elif char == "$" and self._peek() == "{":
                value = self._lookup()
                if _LITERAL_RE.fullmatch(value):
                    self.out.append(value)
                else:
                    self.out.append(f'"{escape_string(value)}"')
            else:
                self._copy()
        return "".join(self.out)


def interpolate(source: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Expand ${NAME} references in a COSY document.

    Args:
        source: Document text
        environ: Variable mapping (defaults to os.environ)

    Returns:
        Text with every reference substituted

    Raises:
        InterpolationError: Unknown variable or malformed reference
    """
    return Interpolator(source, environ).run()
