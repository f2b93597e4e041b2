"""
Serializer that turns a Value tree back into COSY text.

The output always re-parses to an equal tree, comments included:

    parse_string(to_string(value)) == value
"""

from dataclasses import dataclass
import math
import re

from ..const import DEFAULT_INDENT_SIZE
from ..value import Value, ValueKind
from .interpolate import escape_string
from .lexer import Lexer

_BARE_KEY_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass
class SerializeOptions:
    """Output formatting options."""

    indent_size: int = DEFAULT_INDENT_SIZE  # spaces per nesting level
    use_newlines: bool = True               # one entry per line
    trailing_commas: bool = False           # comma after the last entry


class Serializer:
    """
    Serializer for Value trees.

    Usage:
        text = Serializer(SerializeOptions(indent_size=2)).serialize(value)
    """

    def __init__(self, options: SerializeOptions | None = None):
        self.options = options or SerializeOptions()
        self.level = 0

    def serialize(self, value: Value) -> str:
        """Serialize a value, including its leading comments."""
        self.level = 0
        return self._comments(value) + self._value(value)

    def _indent(self) -> str:
        return " " * (self.level * self.options.indent_size)

    def _comments(self, value: Value) -> str:
        lines = []
        for comment in value.comments:
            for line in comment.split("\n"):
                lines.append(f"{self._indent()}// {line}\n")
        return "".join(lines)

    def _value(self, value: Value) -> str:
        kind = value.kind
        if kind is ValueKind.NULL:
            return "null"
        if kind is ValueKind.BOOL:
            return "true" if value.data else "false"
        if kind is ValueKind.INTEGER:
            return str(value.data)
        if kind is ValueKind.FLOAT:
            return self._float(value.data)
        if kind is ValueKind.STRING:
            return f'"{escape_string(value.data)}"'
        if kind is ValueKind.ARRAY:
            return self._array(value.data)
        if kind is ValueKind.OBJECT:
            return self._object(value.data)
        raise TypeError(f"Unhandled value kind: {kind}")

    @staticmethod
    def _float(number: float) -> str:
        if not math.isfinite(number):
            raise ValueError(f"Cannot serialize non-finite float: {number}")
        # repr is the shortest text that reads back to the same float
        text = repr(number)
        if "." not in text and "e" not in text:
            text += ".0"
        return text

    @staticmethod
    def _key(key: str) -> str:
        if _BARE_KEY_RE.fullmatch(key) and key not in Lexer.KEYWORDS:
            return key
        return f'"{escape_string(key)}"'

    def _closing_comma(self, is_last: bool) -> str:
        if not is_last or self.options.trailing_commas:
            return ","
        return ""

    def _array(self, items: list[Value]) -> str:
        if not items:
            return "[]"

        has_comments = any(item.comments for item in items)
        multiline = has_comments or (self.options.use_newlines and len(items) > 1)

        if not multiline:
            parts = [self._value(item) for item in items]
            tail = "," if self.options.trailing_commas else ""
            return "[" + ", ".join(parts) + tail + "]"

        self.level += 1
        lines = []
        for i, item in enumerate(items):
            is_last = i == len(items) - 1
            lines.append(
                self._comments(item)
                + self._indent()
                + self._value(item)
                + self._closing_comma(is_last)
                + "\n"
            )
        self.level -= 1
        return "[\n" + "".join(lines) + self._indent() + "]"

    def _object(self, fields: dict[str, Value]) -> str:
        if not fields:
            return "{}"

        has_comments = any(value.comments for value in fields.values())
        multiline = has_comments or self.options.use_newlines

        if not multiline:
            parts = [f"{self._key(k)}: {self._value(v)}" for k, v in fields.items()]
            tail = "," if self.options.trailing_commas else ""
            return "{" + ", ".join(parts) + tail + "}"

        self.level += 1
        lines = []
        for i, (key, value) in enumerate(fields.items()):
            is_last = i == len(fields) - 1
            # Comments go above the key, not between key and value
            lines.append(
                self._comments(value)
                + self._indent()
                + f"{self._key(key)}: "
                + self._value(value)
                + self._closing_comma(is_last)
                + "\n"
            )
        self.level -= 1
        return "{\n" + "".join(lines) + self._indent() + "}"


def to_string(value: Value, options: SerializeOptions | None = None) -> str:
    """Serialize a value to COSY text."""
    return Serializer(options).serialize(value)
