"""
COSY: a human-friendly configuration language.

- // comments, kept on the parsed tree
- Unquoted keys, newlines or commas as separators, trailing commas
- Distinct integers and floats, null
- Preserved key order
- extends/include composition across files
- Schema validation with typo suggestions
"""

from .const import APP_VERSION
from .errors import (
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
from .include import resolve
from .loader import ConfigLoader, load_and_merge, load_file
from .merge import merge, merged
from .schema import ValidationItem, ValidationLevel, validate
from .suggest import find_best_match, levenshtein
from .syntax import SerializeOptions, interpolate, parse, parse_string, to_string, tokenize
from .value import Value, ValueKind

__version__ = APP_VERSION

__all__ = [
    "__version__",
    "Value",
    "ValueKind",
    "tokenize",
    "parse",
    "parse_string",
    "interpolate",
    "to_string",
    "SerializeOptions",
    "merge",
    "merged",
    "resolve",
    "load_file",
    "load_and_merge",
    "ConfigLoader",
    "validate",
    "ValidationItem",
    "ValidationLevel",
    "levenshtein",
    "find_best_match",
    "CosyError",
    "ErrorKind",
    "LexError",
    "ParseError",
    "InterpolationError",
    "CosyIOError",
    "IncludeError",
    "IncludeIOError",
    "IncludeParseError",
    "InvalidIncludeTarget",
    "RecursionLimitExceeded",
    "SchemaError",
]
