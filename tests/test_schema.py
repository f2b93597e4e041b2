"""
Tests for schema validation.
"""

import pytest

from cosy.errors import SchemaError
from cosy.schema import (
    ValidationItem,
    ValidationLevel,
    format_report,
    has_errors,
    unwrap,
    validate,
)
from cosy.syntax.parser import parse_string


def _validate(instance: str, schema: str) -> list[ValidationItem]:
    return validate(parse_string(instance), parse_string(schema))


def _errors(report: list[ValidationItem]) -> list[ValidationItem]:
    return [item for item in report if item.level == ValidationLevel.ERROR]


def _warnings(report: list[ValidationItem]) -> list[ValidationItem]:
    return [item for item in report if item.level == ValidationLevel.WARNING]


def test_valid_instance_produces_empty_report() -> None:
    """Test that a conforming instance yields no findings."""
    report = _validate(
        '{host: "localhost", port: 8080, debug: false, ratio: 0.5, extra: null}',
        '{host: "string", port: "integer", debug: "boolean", ratio: "float", extra: "any"}',
    )

    assert report == []
    assert not has_errors(report)


@pytest.mark.parametrize(
    "instance, type_name",
    [
        ('"x"', "string"),
        ("1", "integer"),
        ("1.5", "float"),
        ("true", "boolean"),
        ("false", "bool"),
        ("null", "null"),
        ("1", "number"),
        ("1.5", "number"),
        ("[1]", "any"),
        ("{}", "any"),
    ],
)
def test_type_names_accept(instance: str, type_name: str) -> None:
    """Test every type name against a matching value."""
    assert _validate(instance, f'"{type_name}"') == []


def test_type_mismatch() -> None:
    """Test the error for a value of the wrong type."""
    report = _validate('{port: "8080"}', '{port: "integer"}')

    assert len(report) == 1
    assert report[0].level == ValidationLevel.ERROR
    assert report[0].path == "$.port"
    assert report[0].message == "Type mismatch: expected integer, found string"


def test_number_rejects_strings() -> None:
    """Test that number accepts numbers only."""
    report = _validate('"1"', '"number"')

    assert report[0].message == "Type mismatch: expected number, found string"


def test_integer_is_not_float() -> None:
    """Test that an integer does not satisfy float."""
    report = _validate("1", '"float"')

    assert report[0].message == "Type mismatch: expected float, found integer"


def test_typo_suggestion() -> None:
    """A misspelled key yields a missing-field and an unknown-field error."""
    report = _validate("{prt: 8080}", '{port: "integer"}')
    messages = [item.message for item in report]

    assert "Missing required field 'port'" in messages
    assert "Unknown field 'prt'; did you mean 'port'?" in messages
    assert len(_errors(report)) == 2


def test_unknown_field_without_suggestion() -> None:
    """Test that distant names get no suggestion."""
    report = _validate('{port: 1, zzzzzz: 2}', '{port: "integer"}')

    assert [item.message for item in report] == ["Unknown field 'zzzzzz'"]
    assert report[0].path == "$"


def test_optional_field() -> None:
    """Test that an optional field may be absent."""
    assert _validate("{}", '{port: {type: "integer", optional: true}}') == []


def test_optional_field_still_type_checked() -> None:
    """Test that a present optional field is still checked."""
    report = _validate('{port: "x"}', '{port: {type: "integer", optional: true}}')

    assert report[0].path == "$.port"
    assert report[0].message == "Type mismatch: expected integer, found string"


def test_required_descriptor_field() -> None:
    """Test that optional: false keeps the field required."""
    report = _validate("{}", '{port: {type: "integer", optional: false}}')

    assert [item.message for item in report] == ["Missing required field 'port'"]


def test_deprecation_is_a_warning() -> None:
    """Test that a deprecated field yields a warning, not an error."""
    report = _validate(
        "{ssl_enabled: true}",
        '{ssl_enabled: {type: "boolean", deprecated: "use tls"}}',
    )

    assert len(_warnings(report)) == 1
    assert len(_errors(report)) == 0
    assert report[0].message == "Deprecated usage: use tls"
    assert report[0].path == "$.ssl_enabled"
    assert not has_errors(report)


def test_deprecated_and_missing_is_not_warned() -> None:
    """Test that an absent deprecated field is not reported."""
    report = _validate(
        "{}",
        '{ssl_enabled: {type: "boolean", deprecated: "use tls", optional: true}}',
    )

    assert report == []


def test_deprecation_warns_for_every_array_element() -> None:
    """Test that each element under a deprecated schema warns."""
    report = _validate(
        "{ids: [1, 2, 3]}",
        '{ids: [{type: "integer", deprecated: "gone"}]}',
    )

    assert [item.path for item in _warnings(report)] == ["$.ids[0]", "$.ids[1]", "$.ids[2]"]


def test_nested_paths() -> None:
    """Test instance paths through objects and arrays."""
    report = _validate(
        '{server: {host: "h", port: "80"}, users: [{name: "a"}, {name: 2}]}',
        '{server: {host: "string", port: "integer"}, users: [{name: "string"}]}',
    )

    assert [item.path for item in report] == ["$.server.port", "$.users[1].name"]


def test_missing_field_reported_at_parent_path() -> None:
    """Test that missing fields are reported at the containing object."""
    report = _validate("{server: {}}", '{server: {port: "integer"}}')

    assert report[0].path == "$.server"
    assert report[0].message == "Missing required field 'port'"


def test_expected_object() -> None:
    """Test the error for a non-object where an object is required."""
    report = _validate("{server: 1}", '{server: {port: "integer"}}')

    assert report[0].message == "Expected object, found integer"


def test_expected_array() -> None:
    """Test the error for a non-array where an array is required."""
    report = _validate('{tags: "a"}', '{tags: ["string"]}')

    assert report[0].message == "Expected array, found string"
    assert report[0].path == "$.tags"


def test_findings_accumulate() -> None:
    """Test that validation continues past the first problem."""
    report = _validate(
        '{a: "x", b: "y", c: 1}',
        '{a: "integer", b: "integer", d: "string"}',
    )

    assert len(report) == 4


def test_descriptor_type_may_be_structural() -> None:
    """Test a descriptor whose type is an object schema."""
    schema = '{server: {type: {port: "integer"}, optional: true}}'

    assert _validate("{}", schema) == []
    assert _validate("{server: {port: 1}}", schema) == []
    assert _validate('{server: {port: "x"}}', schema)[0].path == "$.server.port"


def test_descriptor_ignores_annotation_keys() -> None:
    """Extra keys such as description do not turn a descriptor into an object schema."""
    schema = '{host: {type: "string", description: "hostname", default: "localhost"}}'

    assert _validate('{host: "localhost"}', schema) == []

    report = _validate("{host: 1}", schema)
    assert [item.message for item in report] == ["Type mismatch: expected string, found integer"]
    assert report[0].path == "$.host"


def test_descriptor_with_annotations_keeps_flags() -> None:
    """optional and deprecated still apply next to annotation keys."""
    schema = '{tls: {type: "boolean", description: "legacy", deprecated: "use ssl", optional: true}}'

    assert _validate("{}", schema) == []

    report = _validate("{tls: true}", schema)
    assert [str(item) for item in report] == ["[Warning at $.tls] Deprecated usage: use ssl"]


def test_unknown_type_name() -> None:
    """Test that an unknown type name raises SchemaError."""
    with pytest.raises(SchemaError) as exc_info:
        _validate("{port: 1}", '{port: "int"}')

    assert "Unknown type 'int'" in exc_info.value.message
    assert exc_info.value.path == "$.port"


@pytest.mark.parametrize("schema", ["[]", '["string", "integer"]'])
def test_array_schema_needs_one_element(schema: str) -> None:
    """Test that array schemas must have exactly one element."""
    with pytest.raises(SchemaError, match="exactly one element"):
        _validate("[1]", schema)


def test_unsupported_schema_node() -> None:
    """Test that numbers are not valid schema nodes."""
    with pytest.raises(SchemaError, match="Unsupported schema value type: integer"):
        _validate("{port: 1}", "{port: 42}")


def test_malformed_descriptor_flags() -> None:
    """Test that optional and deprecated must have the right types."""
    with pytest.raises(SchemaError, match="'optional' must be a boolean"):
        unwrap(parse_string('{type: "integer", optional: "yes"}'))

    with pytest.raises(SchemaError, match="'deprecated' must be a string"):
        unwrap(parse_string('{type: "integer", deprecated: true}'))


def test_item_display_and_report_format() -> None:
    """Test the display form of findings and the report."""
    report = _validate("{prt: 1}", '{port: "integer"}')

    assert str(report[0]) == "[Error at $] Missing required field 'port'"
    assert format_report(report) == (
        "[Error at $] Missing required field 'port'\n"
        "[Error at $] Unknown field 'prt'; did you mean 'port'?"
    )
    assert has_errors(report)
