"""
Schema validation for COSY value trees.

A schema is itself a COSY document:

    {
        server: {
            host: "string"
            port: "integer"
            // extended form
            ssl_enabled: { type: "boolean", deprecated: "use tls", optional: true }
        }
        endpoints: ["string"]      // every element must be a string
    }

Schema nodes:
    - type name string: any, string, integer, float, boolean/bool, null,
      number (integer or float)
    - object: each key's schema applies to the same key of the instance
    - one-element array: the element schema applies to every item
    - descriptor: object with a "type" key plus optional "deprecated"
      (message) and "optional" (bool) keys; other keys such as
      "description" are annotations and are ignored

Problems with the instance are collected into a report. Problems with the
schema itself raise SchemaError.
"""

from dataclasses import dataclass
from enum import Enum

from .const import SUGGESTION_MAX_DISTANCE
from .errors import SchemaError
from .suggest import find_best_match
from .value import Value, ValueKind


class ValidationLevel(Enum):
    """Severity of a validation finding."""

    ERROR = "Error"
    WARNING = "Warning"


@dataclass
class ValidationItem:
    """A single validation finding."""

    level: ValidationLevel
    path: str
    message: str

    def __str__(self) -> str:
        return f"[{self.level.value} at {self.path}] {self.message}"

    @property
    def is_error(self) -> bool:
        return self.level == ValidationLevel.ERROR


ValidationReport = list[ValidationItem]

# Type name -> value kinds it accepts (None accepts everything)
TYPE_NAMES: dict[str, tuple[ValueKind, ...] | None] = {
    "any": None,
    "string": (ValueKind.STRING,),
    "integer": (ValueKind.INTEGER,),
    "float": (ValueKind.FLOAT,),
    "boolean": (ValueKind.BOOL,),
    "bool": (ValueKind.BOOL,),
    "null": (ValueKind.NULL,),
    "number": (ValueKind.INTEGER, ValueKind.FLOAT),
}


@dataclass
class FieldSchema:
    """A schema node with descriptor options unwrapped."""

    schema: Value
    deprecated: str | None = None
    optional: bool = False


def unwrap(schema: Value, path: str = "$") -> FieldSchema:
    """
    Split a schema node into its effective type schema and flags.

    An object counts as a descriptor when it has a "type" key holding a
    schema node (string, array or object). Keys other than type,
    deprecated and optional are ignored.
    """
    if schema.kind is not ValueKind.OBJECT:
        return FieldSchema(schema)

    fields = schema.data
    type_node = fields.get("type")
    if type_node is None:
        return FieldSchema(schema)
    if type_node.kind not in (ValueKind.STRING, ValueKind.ARRAY, ValueKind.OBJECT):
        return FieldSchema(schema)

    deprecated = fields.get("deprecated")
    if deprecated is not None and deprecated.kind is not ValueKind.STRING:
        raise SchemaError(f"'deprecated' must be a string, found {deprecated.type_name}", path)

    optional = fields.get("optional")
    if optional is not None and optional.kind is not ValueKind.BOOL:
        raise SchemaError(f"'optional' must be a boolean, found {optional.type_name}", path)

    return FieldSchema(
        schema=type_node,
        deprecated=deprecated.data if deprecated is not None else None,
        optional=bool(optional.data) if optional is not None else False,
    )


class Validator:
    """
    Checks an instance against a schema, accumulating findings.

    Usage:
        report = Validator().validate(config, schema)
    """

    def __init__(self, max_distance: int = SUGGESTION_MAX_DISTANCE):
        self.max_distance = max_distance
        self.report: ValidationReport = []

    def validate(self, instance: Value, schema: Value) -> ValidationReport:
        self.report = []
        self._check(instance, schema, "$")
        return self.report

    def _error(self, path: str, message: str) -> None:
        self.report.append(ValidationItem(ValidationLevel.ERROR, path, message))

    def _warning(self, path: str, message: str) -> None:
        self.report.append(ValidationItem(ValidationLevel.WARNING, path, message))

    def _check(self, instance: Value, schema: Value, path: str) -> None:
        field = unwrap(schema, path)
        if field.deprecated is not None:
            self._warning(path, f"Deprecated usage: {field.deprecated}")

        effective = field.schema
        kind = effective.kind

        if kind is ValueKind.STRING:
            self._check_type(instance, effective.data, path)
        elif kind is ValueKind.OBJECT:
            self._check_object(instance, effective.data, path)
        elif kind is ValueKind.ARRAY:
            self._check_array(instance, effective.data, path)
        else:
            raise SchemaError(f"Unsupported schema value type: {effective.type_name}", path)

    def _check_type(self, instance: Value, type_name: str, path: str) -> None:
        if type_name not in TYPE_NAMES:
            raise SchemaError(f"Unknown type '{type_name}'", path)

        accepted = TYPE_NAMES[type_name]
        if accepted is not None and instance.kind not in accepted:
            self._error(
                path, f"Type mismatch: expected {type_name}, found {instance.type_name}"
            )

    def _check_object(self, instance: Value, schema_fields: dict[str, Value], path: str) -> None:
        if instance.kind is not ValueKind.OBJECT:
            self._error(path, f"Expected object, found {instance.type_name}")
            return

        fields = instance.data

        for key, sub_schema in schema_fields.items():
            field_path = f"{path}.{key}"
            if key in fields:
                self._check(fields[key], sub_schema, field_path)
            elif not unwrap(sub_schema, field_path).optional:
                self._error(path, f"Missing required field '{key}'")

        for key in fields:
            if key in schema_fields:
                continue
            message = f"Unknown field '{key}'"
            suggestion = find_best_match(key, schema_fields.keys(), self.max_distance)
            if suggestion is not None:
                message += f"; did you mean '{suggestion}'?"
            self._error(path, message)

    def _check_array(self, instance: Value, schema_items: list[Value], path: str) -> None:
        if len(schema_items) != 1:
            raise SchemaError("Array schema must contain exactly one element specifier", path)

        if instance.kind is not ValueKind.ARRAY:
            self._error(path, f"Expected array, found {instance.type_name}")
            return

        item_schema = schema_items[0]
        for i, item in enumerate(instance.data):
            self._check(item, item_schema, f"{path}[{i}]")


def validate(instance: Value, schema: Value) -> ValidationReport:
    """
    Validate a value against a schema.

    Args:
        instance: Value to check
        schema: Schema tree

    Returns:
        Ordered list of findings (empty when the instance conforms)

    Raises:
        SchemaError: The schema is malformed
    """
    return Validator().validate(instance, schema)


def has_errors(report: ValidationReport) -> bool:
    """Check whether a report contains any Error-level findings."""
    return any(item.is_error for item in report)


def format_report(report: ValidationReport) -> str:
    """Render a report one finding per line."""
    return "\n".join(str(item) for item in report)
