"""
Resolution of extends/include directives.

Inside any object, two reserved keys pull in other documents:

    {
        extends: "base.cosy"      // lowest precedence
        include: "mixin.cosy"     // overrides base
        port: 9000                // local fields override both
    }

Paths are relative to the directory of the file being processed. The
directive keys are removed from the result. Nesting is bounded by a fixed
depth rather than tracked per file, so a cycle surfaces as
RecursionLimitExceeded.
"""

from collections.abc import Callable
from pathlib import Path

from .const import EXTENDS_KEY, INCLUDE_KEY, MAX_INCLUDE_DEPTH
from .errors import (
    CosyError,
    IncludeIOError,
    IncludeParseError,
    InvalidIncludeTarget,
    RecursionLimitExceeded,
)
from .logging import get_logger
from .merge import merge
from .syntax.parser import parse_string
from .value import Value, ValueKind

logger = get_logger("include")

Reader = Callable[[Path], str]


def read_text(path: Path) -> str:
    """Default reader: the whole file as UTF-8 text."""
    return path.read_text(encoding="utf-8")


def resolve(value: Value, base_path: str | Path, reader: Reader | None = None) -> None:
    """
    Resolve extends/include directives in a value tree, in place.

    Args:
        value: Parsed document (any kind; only objects carry directives)
        base_path: Directory that relative directive paths start from
        reader: Callable returning a file's text (defaults to read_text)

    Raises:
        IncludeError: IO failure, nested parse failure, bad directive value,
            non-object target or recursion limit exceeded
    """
    _resolve(value, Path(base_path), reader or read_text, 0)


def _resolve(value: Value, base_path: Path, reader: Reader, depth: int) -> None:
    if depth > MAX_INCLUDE_DEPTH:
        raise RecursionLimitExceeded(MAX_INCLUDE_DEPTH)

    if value.kind is ValueKind.ARRAY:
        for item in value.data:
            _resolve(item, base_path, reader, depth)
        return

    if value.kind is not ValueKind.OBJECT:
        return

    fields: dict[str, Value] = value.data
    extends_value = fields.pop(EXTENDS_KEY, None)
    include_value = fields.pop(INCLUDE_KEY, None)

    # Nested directives are resolved before anything is merged on top
    for child in fields.values():
        _resolve(child, base_path, reader, depth)

    if extends_value is not None:
        base = _load(_directive_path(EXTENDS_KEY, extends_value), base_path, reader, depth)
    else:
        base = Value.object()

    if include_value is not None:
        mixin = _load(_directive_path(INCLUDE_KEY, include_value), base_path, reader, depth)
        merge(base, mixin)

    merge(base, Value.object(fields))
    value.data = base.data


def _directive_path(key: str, directive: Value) -> str:
    if directive.kind is not ValueKind.STRING:
        raise InvalidIncludeTarget(
            f"{key.capitalize()} value must be a string, found {directive.type_name}"
        )
    return directive.data


def _load(path_str: str, base_path: Path, reader: Reader, depth: int) -> Value:
    """Read, parse and resolve one extends/include target."""
    path = base_path / path_str
    logger.debug(f"Loading '{path}' (depth {depth + 1})")

    try:
        text = reader(path)
    except OSError as e:
        raise IncludeIOError(str(path), e.strerror or str(e)) from e
    except CosyError as e:
        raise IncludeParseError(str(path), e) from e

    try:
        loaded = parse_string(text)
    except CosyError as e:
        raise IncludeParseError(str(path), e) from e

    _resolve(loaded, path.parent, reader, depth + 1)

    if loaded.kind is not ValueKind.OBJECT:
        raise InvalidIncludeTarget(
            f"Included/Extended file '{path_str}' must be an Object, found {loaded.type_name}"
        )
    return loaded
