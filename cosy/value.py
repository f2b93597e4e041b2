"""
Value model for COSY documents.

A document parses into a tree of Value nodes. Each node carries its kind,
the Python payload for that kind and the list of comments that appeared
immediately before it in the source.

Payload per kind:
    NULL     -> None
    BOOL     -> bool
    INTEGER  -> int (signed 64-bit range)
    FLOAT    -> float
    STRING   -> str
    ARRAY    -> list[Value]
    OBJECT   -> dict[str, Value] (insertion ordered, unique keys)

Comments are part of equality: two trees that differ only in attached
comments compare unequal.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .const import INT64_MAX, INT64_MIN


class ValueKind(Enum):
    """Kinds of COSY values."""

    NULL = "null"
    BOOL = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(eq=True)
class Value:
    """
    A single node of a COSY value tree.

    Examples:
        Value.integer(8080)                  -> 8080
        Value.string("localhost", ["host"])  -> "localhost" with comment "host"
        Value.object({"port": Value.integer(8080)})
    """

    kind: ValueKind
    data: Any = None
    comments: list[str] = field(default_factory=list)

    def __repr__(self) -> str:
        if self.comments:
            return f"Value({self.kind.name}, {self.data!r}, comments={self.comments!r})"
        return f"Value({self.kind.name}, {self.data!r})"

    def __str__(self) -> str:
        kind = self.kind
        if kind is ValueKind.NULL:
            return "null"
        if kind is ValueKind.BOOL:
            return "true" if self.data else "false"
        if kind is ValueKind.INTEGER or kind is ValueKind.FLOAT:
            return repr(self.data)
        if kind is ValueKind.STRING:
            return f'"{self.data}"'
        if kind is ValueKind.ARRAY:
            return "[" + ", ".join(str(item) for item in self.data) + "]"
        if kind is ValueKind.OBJECT:
            return "{" + ", ".join(f"{k}: {v}" for k, v in self.data.items()) + "}"
        raise TypeError(f"Unhandled value kind: {kind}")

    @property
    def type_name(self) -> str:
        """Name of this value's kind as used in messages and schemas."""
        return self.kind.value

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def is_object(self) -> bool:
        return self.kind is ValueKind.OBJECT

    def is_array(self) -> bool:
        return self.kind is ValueKind.ARRAY

    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def is_number(self) -> bool:
        return self.kind in (ValueKind.INTEGER, ValueKind.FLOAT)

    def as_object(self) -> dict[str, "Value"]:
        """Get the field map, raising TypeError for non-objects."""
        if self.kind is not ValueKind.OBJECT:
            raise TypeError(f"Expected object, found {self.type_name}")
        return self.data

    def as_array(self) -> list["Value"]:
        """Get the element list, raising TypeError for non-arrays."""
        if self.kind is not ValueKind.ARRAY:
            raise TypeError(f"Expected array, found {self.type_name}")
        return self.data

    def keys(self) -> list[str]:
        """Get object keys in insertion order."""
        return list(self.as_object().keys())

    def get(self, key: str, default: "Value | None" = None) -> "Value | None":
        """Get an object field with default."""
        return self.as_object().get(key, default)

    def __getitem__(self, key: str | int) -> "Value":
        if self.kind is ValueKind.OBJECT:
            return self.data[key]
        if self.kind is ValueKind.ARRAY:
            return self.data[key]
        raise TypeError(f"{self.type_name} value is not subscriptable")

    def __contains__(self, key: object) -> bool:
        if self.kind is ValueKind.OBJECT:
            return key in self.data
        if self.kind is ValueKind.ARRAY:
            return key in self.data
        return False

    def copy(self) -> "Value":
        """Return a deep copy of this node and its children."""
        if self.kind is ValueKind.ARRAY:
            data: Any = [item.copy() for item in self.data]
        elif self.kind is ValueKind.OBJECT:
            data = {k: v.copy() for k, v in self.data.items()}
        else:
            data = self.data
        return Value(self.kind, data, list(self.comments))

    def to_python(self) -> Any:
        """
        Convert to plain Python data.

        Objects become dicts, arrays become lists and scalars map to their
        payload. Comments are dropped.
        """
        if self.kind is ValueKind.ARRAY:
            return [item.to_python() for item in self.data]
        if self.kind is ValueKind.OBJECT:
            return {k: v.to_python() for k, v in self.data.items()}
        return self.data

    @classmethod
    def from_python(cls, obj: Any) -> "Value":
        """
        Build a value tree from plain Python data.

        Args:
            obj: None, bool, int, float, str, list/tuple or dict with str keys

        Returns:
            Equivalent Value tree (without comments)

        Raises:
            TypeError: For unsupported types or non-string dict keys
        """
        if isinstance(obj, Value):
            return obj.copy()
        if obj is None:
            return cls.null()
        # bool is a subclass of int
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, int):
            return cls.integer(obj)
        if isinstance(obj, float):
            return cls.float(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, (list, tuple)):
            return cls.array([cls.from_python(item) for item in obj])
        if isinstance(obj, dict):
            fields = {}
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise TypeError(f"Object keys must be strings, got {type(key).__name__}")
                fields[key] = cls.from_python(item)
            return cls.object(fields)
        raise TypeError(f"Cannot convert {type(obj).__name__} to a COSY value")

    # Constructors

    @classmethod
    def null(cls, comments: list[str] | None = None) -> "Value":
        return cls(ValueKind.NULL, None, list(comments or []))

    @classmethod
    def boolean(cls, b: bool, comments: list[str] | None = None) -> "Value":
        return cls(ValueKind.BOOL, bool(b), list(comments or []))

    @classmethod
    def integer(cls, i: int, comments: list[str] | None = None) -> "Value":
        if not INT64_MIN <= i <= INT64_MAX:
            raise ValueError(f"Integer out of 64-bit range: {i}")
        return cls(ValueKind.INTEGER, int(i), list(comments or []))

    @classmethod
    def string(cls, s: str, comments: list[str] | None = None) -> "Value":
        return cls(ValueKind.STRING, s, list(comments or []))

    @classmethod
    def array(cls, items: list["Value"] | None = None, comments: list[str] | None = None) -> "Value":
        return cls(ValueKind.ARRAY, list(items or []), list(comments or []))

    # Defined last: these names shadow builtins inside the class body.

    @classmethod
    def float(cls, f: float, comments: list[str] | None = None) -> "Value":
        return cls(ValueKind.FLOAT, float(f), list(comments or []))

    @classmethod
    def object(
        cls, fields: dict[str, "Value"] | None = None, comments: list[str] | None = None
    ) -> "Value":
        return cls(ValueKind.OBJECT, dict(fields or {}), list(comments or []))
