"""Command-line interface.

    langkit build  [options]    compile once and exit
    langkit watch  [options]    compile, then recompile on every change

Options come from the nearest pyproject.toml ``[tool.langkit]`` table (or
``--config``); flags given on the command line win.

Exit status: 0 on success, 1 when the compile fails, 2 on usage errors.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import Any

from langkit.build import CompileOptions, compile
from langkit.config import find_pyproject, load_pyproject_options
from langkit.constants import DEFAULT_POLL_INTERVAL
from langkit.diagnostics import (
    ConfigurationError,
    DiagnosticFormatter,
    ErrorTemplate,
    LangError,
    OutputFormat,
)
from langkit.watch import watch

__all__ = ["build_parser", "main", "resolve_options"]

logger = logging.getLogger(__name__)

_FLAG_FIELDS = ("lang_dir", "data_path", "types_path", "default_locale", "alias", "debounce")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser (exposed for tests)."""
    parser = argparse.ArgumentParser(
        prog="langkit",
        description="Compile per-locale JSON translations into a typed JavaScript module.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One-shot build using [tool.langkit] from pyproject.toml:
  langkit build

  # Explicit paths:
  langkit build --lang-dir lang --default-locale en --data-out gen/lang.js

  # Rebuild on change, machine-readable errors:
  langkit watch --format json
""",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", metavar="PATH", help="pyproject.toml to read (default: nearest)")
    common.add_argument("--lang-dir", dest="lang_dir", help="directory of <locale>.json documents")
    common.add_argument("--data-out", dest="data_path", help="output path of the data module")
    common.add_argument("--types-out", dest="types_path", help="output path of the declaration module")
    common.add_argument("--default-locale", dest="default_locale", help="locale exported as default")
    common.add_argument("--alias", help="module specifier of the declaration module")
    common.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RUST.value,
        help="diagnostic output format (default: rust)",
    )
    verbosity = common.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="log per-key details")
    verbosity.add_argument("--quiet", "-q", action="store_true", help="log errors only")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("build", parents=[common], help="compile once")
    watch_parser = commands.add_parser("watch", parents=[common], help="recompile on change")
    watch_parser.add_argument(
        "--debounce", type=float, help="seconds between consecutive rebuilds (default: 1.0)"
    )
    watch_parser.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help=f"seconds between directory scans (default: {DEFAULT_POLL_INTERVAL})",
    )
    return parser


def resolve_options(args: argparse.Namespace) -> CompileOptions:
    """Merge pyproject values with command-line flags.

    Raises:
        ConfigurationError: Invalid configuration or no default locale
    """
    values: dict[str, Any] = {}
    config_path = args.config or find_pyproject()
    if config_path is not None:
        values.update(load_pyproject_options(config_path))
    for name in _FLAG_FIELDS:
        flag = getattr(args, name, None)
        if flag is not None:
            values[name] = flag
    if "default_locale" not in values:
        raise ConfigurationError(
            ErrorTemplate.invalid_configuration(
                "no default locale (pass --default-locale or set default-locale in [tool.langkit])"
            )
        )
    return CompileOptions(**values)


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _report(error: LangError, output_format: OutputFormat) -> None:
    if error.diagnostic is not None:
        text = DiagnosticFormatter(output_format=output_format).format(error.diagnostic)
    else:
        text = str(error)
    print(text, file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``langkit`` console script."""
    args = build_parser().parse_args(argv)
    _configure_logging(args)
    output_format = OutputFormat(args.format)

    try:
        options = resolve_options(args)
        if args.command == "build":
            compile(options)
            return 0
        asyncio.run(
            watch(options, poll_interval=args.poll_interval, output_format=output_format)
        )
    except LangError as e:
        _report(e, output_format)
        return 1
    except KeyboardInterrupt:
        logger.info("Stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
