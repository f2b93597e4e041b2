"""
Error types for COSY.

Every failure raised by the package derives from CosyError, which exposes
the same surface regardless of origin:

- message: human readable description
- line / column: 1-based position (0 when the error has no position)
- kind: which stage failed (lex, parse, io, include, ...)

Validation findings are not errors; see cosy.schema.ValidationItem.
"""

from enum import Enum


class ErrorKind(Enum):
    """Stage that produced an error."""

    LEX = "Lex"
    PARSE = "Parse"
    INTERPOLATION = "Interpolation"
    IO = "IO"
    INCLUDE = "Include"
    SCHEMA = "Schema"


class CosyError(Exception):
    """Base class for all COSY errors."""

    kind: ErrorKind = ErrorKind.PARSE

    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line:
            return (
                f"{self.kind.value} error at line {self.line}, "
                f"column {self.column}: {self.message}"
            )
        return f"{self.kind.value} error: {self.message}"


class LexError(CosyError):
    """Invalid character, bad escape, unterminated string or malformed number."""

    kind = ErrorKind.LEX


class ParseError(CosyError):
    """Unexpected token while building the value tree."""

    kind = ErrorKind.PARSE


class InterpolationError(CosyError):
    """Unknown or malformed ${VAR} reference."""

    kind = ErrorKind.INTERPOLATION


class CosyIOError(CosyError):
    """A configuration file could not be read."""

    kind = ErrorKind.IO


class IncludeError(CosyError):
    """Failure while resolving extends/include directives."""

    kind = ErrorKind.INCLUDE


class IncludeIOError(IncludeError):
    """An included or extended file could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"IO error during include of '{path}': {reason}")


class IncludeParseError(IncludeError):
    """An included or extended file failed to lex, parse or resolve."""

    def __init__(self, path: str, cause: CosyError):
        self.path = path
        self.cause = cause
        super().__init__(f"Parse error in included file '{path}': {cause}")


class InvalidIncludeTarget(IncludeError):
    """Directive value is not a string, or the target is not an object."""

    def __init__(self, message: str):
        super().__init__(f"Invalid include usage: {message}")


class RecursionLimitExceeded(IncludeError):
    """Include/extends nesting went deeper than the allowed maximum."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Recursion limit exceeded (max {max_depth} depth)")


class SchemaError(CosyError):
    """The schema itself is malformed; validation cannot proceed."""

    kind = ErrorKind.SCHEMA

    def __init__(self, message: str, path: str = "$"):
        self.path = path
        super().__init__(f"{message} (at {path})")
