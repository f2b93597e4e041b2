"""
Tests for the error hierarchy.
"""

from cosy.errors import (
    CosyError,
    CosyIOError,
    ErrorKind,
    IncludeError,
    IncludeIOError,
    IncludeParseError,
    InterpolationError,
    InvalidIncludeTarget,
    LexError,
    ParseError,
    RecursionLimitExceeded,
    SchemaError,
)


def test_positional_error_display() -> None:
    """Test the display form of an error with a position."""
    error = LexError("Unterminated string", 2, 3)

    assert str(error) == "Lex error at line 2, column 3: Unterminated string"
    assert error.message == "Unterminated string"
    assert (error.line, error.column) == (2, 3)


def test_error_without_position() -> None:
    """Test the display form of an error without a position."""
    error = CosyIOError("Cannot read 'x.cosy'")

    assert str(error) == "IO error: Cannot read 'x.cosy'"
    assert (error.line, error.column) == (0, 0)


def test_error_kinds() -> None:
    """Test that each error class reports its kind."""
    assert LexError("x").kind == ErrorKind.LEX
    assert ParseError("x").kind == ErrorKind.PARSE
    assert InterpolationError("x").kind == ErrorKind.INTERPOLATION
    assert CosyIOError("x").kind == ErrorKind.IO
    assert RecursionLimitExceeded(10).kind == ErrorKind.INCLUDE
    assert SchemaError("x").kind == ErrorKind.SCHEMA


def test_every_error_is_a_cosy_error() -> None:
    """Test that callers can catch every failure through CosyError."""
    errors = [
        LexError("x"),
        ParseError("x"),
        InterpolationError("x"),
        CosyIOError("x"),
        IncludeIOError("a.cosy", "No such file or directory"),
        IncludeParseError("a.cosy", ParseError("x", 1, 1)),
        InvalidIncludeTarget("x"),
        RecursionLimitExceeded(10),
        SchemaError("x"),
    ]

    for error in errors:
        assert isinstance(error, CosyError)


def test_include_errors() -> None:
    """Test the messages and attributes of the include error family."""
    io_error = IncludeIOError("conf/a.cosy", "No such file or directory")
    assert io_error.path == "conf/a.cosy"
    assert io_error.message == "IO error during include of 'conf/a.cosy': No such file or directory"
    assert isinstance(io_error, IncludeError)

    cause = ParseError("Expected value, found EOF", 3, 1)
    parse_error = IncludeParseError("b.cosy", cause)
    assert parse_error.cause is cause
    assert parse_error.line == 0
    assert parse_error.message == (
        "Parse error in included file 'b.cosy': "
        "Parse error at line 3, column 1: Expected value, found EOF"
    )

    target_error = InvalidIncludeTarget("Include value must be a string, found integer")
    assert target_error.message == "Invalid include usage: Include value must be a string, found integer"

    limit_error = RecursionLimitExceeded(10)
    assert limit_error.max_depth == 10
    assert str(limit_error) == "Include error: Recursion limit exceeded (max 10 depth)"


def test_schema_error_carries_path() -> None:
    """Test that schema errors name the offending schema path."""
    error = SchemaError("Unknown type 'int'", "$.server.port")

    assert error.path == "$.server.port"
    assert error.message == "Unknown type 'int' (at $.server.port)"
    assert SchemaError("Unknown type 'x'").path == "$"
