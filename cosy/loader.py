"""
Configuration loader: reading files, resolving includes, merging layers
and validating against a schema.
"""

from collections.abc import Iterable
from pathlib import Path

from .errors import CosyIOError
from .include import Reader, read_text, resolve
from .logging import get_logger
from .merge import merge
from .schema import ValidationReport, validate
from .syntax.interpolate import interpolate as interpolate_env
from .syntax.parser import parse_string
from .value import Value

logger = get_logger("loader")


def _make_reader(interpolate: bool) -> Reader:
    if not interpolate:
        return read_text

    def read_interpolated(path: Path) -> str:
        return interpolate_env(read_text(path))

    return read_interpolated


def load_file(path: str | Path, interpolate: bool = False) -> Value:
    """
    Load one configuration file and resolve its extends/include directives.

    Args:
        path: Path to the configuration file
        interpolate: Expand ${VAR} references from the environment

    Returns:
        Fully resolved Value tree

    Raises:
        CosyIOError: If the file cannot be read
        LexError, ParseError, InterpolationError: If the file is malformed
        IncludeError: If a directive cannot be resolved
    """
    path = Path(path)
    reader = _make_reader(interpolate)

    logger.debug(f"Loading {path}")
    try:
        source = read_text(path)
    except OSError as e:
        raise CosyIOError(f"Cannot read '{path}': {e.strerror or e}") from e

    if interpolate:
        source = interpolate_env(source)

    value = parse_string(source)
    resolve(value, path.parent, reader)
    return value


def load_and_merge(paths: Iterable[str | Path], interpolate: bool = False) -> Value:
    """
    Load several configuration files and deep merge them in order.

    Each file resolves its own includes relative to its own directory.
    Later files override earlier ones.

    Args:
        paths: Files in increasing order of precedence
        interpolate: Expand ${VAR} references from the environment

    Returns:
        Merged Value tree (an empty object if paths is empty)
    """
    merged = Value.object()
    for path in paths:
        merge(merged, load_file(path, interpolate))
        logger.debug(f"Merged {path}")
    return merged


class ConfigLoader:
    """
    Loads and validates configuration from files or strings.

    Usage:
        loader = ConfigLoader(schema=load_file("schema.cosy"))
        config = loader.load_file("/etc/app/config.cosy")
        for item in loader.validate(config):
            print(item)
    """

    def __init__(self, schema: Value | None = None, interpolate: bool = False):
        self.schema = schema
        self.interpolate = interpolate

    def load_file(self, path: str | Path) -> Value:
        """Load and resolve a single file."""
        return load_file(path, self.interpolate)

    def load_files(self, paths: Iterable[str | Path]) -> Value:
        """Load files and merge them, later files winning."""
        return load_and_merge(paths, self.interpolate)

    def load_string(self, source: str, base_path: str | Path | None = None) -> Value:
        """
        Load configuration from a string.

        Args:
            source: Configuration source text
            base_path: Directory for relative extends/include paths
                (defaults to the current directory)

        Returns:
            Fully resolved Value tree
        """
        if base_path is None:
            base_path = Path.cwd()

        value = parse_string(source, self.interpolate)
        resolve(value, base_path, _make_reader(self.interpolate))
        return value

    def validate(self, value: Value) -> ValidationReport:
        """
        Validate a loaded value against this loader's schema.

        Returns:
            List of findings (empty if no schema is configured)

        Raises:
            SchemaError: If the schema is malformed
        """
        if self.schema is None:
            return []
        return validate(value, self.schema)
