"""
Command-line entry point for COSY.

Usage:
    python -m cosy check config.cosy [more.cosy ...]
    python -m cosy format config.cosy --indent 2
    python -m cosy validate config.cosy --schema schema.cosy
    python -m cosy merge base.cosy local.cosy
"""

import argparse
import os
import sys
from pathlib import Path

from . import __version__
from .const import ENV_COSY_LOG_LEVEL
from .errors import CosyError, CosyIOError
from .loader import load_and_merge, load_file
from .logging import get_logger, setup_logging_from_args
from .schema import format_report, has_errors, validate
from .syntax.interpolate import interpolate
from .syntax.parser import parse_string
from .syntax.serializer import SerializeOptions, to_string


logger = get_logger("cli")


def _describe_error(path: str, error: CosyError) -> str:
    """Format an error as path:line:column: message."""
    if error.line:
        return f"{path}:{error.line}:{error.column}: {error.message}"
    return f"{path}: {error.message}"


def check_files(paths: list[str], env: bool) -> int:
    """Load each file independently and report the first error of each."""
    failed = 0
    for path in paths:
        try:
            load_file(path, interpolate=env)
        except CosyError as e:
            print(_describe_error(path, e), file=sys.stderr)
            failed += 1
        else:
            logger.info(f"{path}: OK")

    if failed:
        return 1
    print("OK")
    return 0


def format_file(path: str, options: SerializeOptions, resolve: bool, env: bool) -> int:
    """Print a file re-serialized with the given options."""
    try:
        if resolve:
            value = load_file(path, interpolate=env)
        else:
            try:
                source = Path(path).read_text(encoding="utf-8")
            except OSError as e:
                raise CosyIOError(f"Cannot read '{path}': {e.strerror or e}") from e
            value = parse_string(interpolate(source) if env else source)
    except CosyError as e:
        print(_describe_error(path, e), file=sys.stderr)
        return 1

    print(to_string(value, options))
    return 0


def validate_file(path: str, schema_path: str, env: bool) -> int:
    """Validate a file against a schema and print findings."""
    try:
        schema = load_file(schema_path)
    except CosyError as e:
        print(_describe_error(schema_path, e), file=sys.stderr)
        return 1

    try:
        value = load_file(path, interpolate=env)
    except CosyError as e:
        print(_describe_error(path, e), file=sys.stderr)
        return 1

    try:
        report = validate(value, schema)
    except CosyError as e:
        print(_describe_error(schema_path, e), file=sys.stderr)
        return 1

    if report:
        print(format_report(report))

    if has_errors(report):
        errors = sum(1 for item in report if item.is_error)
        print(f"\n{errors} error(s), {len(report) - errors} warning(s)", file=sys.stderr)
        return 1

    print("Configuration is valid!")
    return 0


def merge_files(paths: list[str], options: SerializeOptions, env: bool) -> int:
    """Print the merge of several files, later files winning."""
    try:
        value = load_and_merge(paths, interpolate=env)
    except CosyError as e:
        print(f"Merge failed: {e}", file=sys.stderr)
        return 1

    print(to_string(value, options))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cosy",
        description="Check, format, merge and validate COSY configuration files",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )
    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "--env",
        action="store_true",
        help="Expand ${VAR} references from the environment",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Output options shared by format and merge
    output = argparse.ArgumentParser(add_help=False)
    output.add_argument("--indent", type=int, default=4, help="Spaces per level (default: 4)")
    output.add_argument("--compact", action="store_true", help="Single-line containers")
    output.add_argument(
        "--trailing-commas",
        action="store_true",
        help="Emit a comma after the last entry",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Parse and resolve files")
    check.add_argument("files", nargs="+", help="Configuration files")

    fmt = commands.add_parser("format", parents=[output], help="Re-serialize a file")
    fmt.add_argument("file", help="Configuration file")
    fmt.add_argument(
        "--resolve",
        action="store_true",
        help="Resolve extends/include before printing",
    )

    val = commands.add_parser("validate", help="Validate a file against a schema")
    val.add_argument("file", help="Configuration file")
    val.add_argument("--schema", required=True, help="Schema file")

    mrg = commands.add_parser("merge", parents=[output], help="Merge files in order")
    mrg.add_argument("files", nargs="+", help="Configuration files, lowest precedence first")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logging_from_args(
        verbose=args.verbose,
        debug=args.debug,
        quiet=args.quiet,
        log_file=args.log_file,
        no_color=args.no_color,
        default_level=os.environ.get(ENV_COSY_LOG_LEVEL, "warning"),
    )

    if args.command == "check":
        return check_files(args.files, args.env)

    options = None
    if args.command in ("format", "merge"):
        options = SerializeOptions(
            indent_size=args.indent,
            use_newlines=not args.compact,
            trailing_commas=args.trailing_commas,
        )

    if args.command == "format":
        return format_file(args.file, options, args.resolve, args.env)
    if args.command == "validate":
        return validate_file(args.file, args.schema, args.env)
    return merge_files(args.files, options, args.env)


if __name__ == "__main__":
    sys.exit(main())
