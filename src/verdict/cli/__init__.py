"""CLI module for the verdict test runner."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from verdict.config import VerdictConfig, load_config
from verdict.errors import VerdictError
from verdict.reports import MultiReporter, Reporter, resolve_reporters
from verdict.testing import test_dir, test_package

COMMANDS = ("test", "check")


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the verdict CLI."""
    config = load_config()
    parser = _build_parser()
    args = parser.parse_args(_with_addopts(list(sys.argv[1:] if argv is None else argv), config))
    _configure_logging(args.verbose if args.command else 0)

    if args.command == "test":
        raise SystemExit(_run_test(args, config))

    if args.command == "check":
        raise SystemExit(_run_check(args, config))

    parser.print_help()
    raise SystemExit(0)


def _with_addopts(argv: list[str], config: VerdictConfig) -> list[str]:
    """Insert configured addopts right after the subcommand."""
    if config.addopts and argv and argv[0] in COMMANDS:
        return [argv[0], *config.addopts, *argv[1:]]
    return argv


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="verdict", description="Run test files and report outcomes")
    subparsers = parser.add_subparsers(dest="command")

    test_parser = subparsers.add_parser("test", help="Run the tests in a directory")
    test_parser.add_argument("path", nargs="?", help="Test directory (default: config test_path)")

    check_parser = subparsers.add_parser("check", help="Run the tests shipped inside a package")
    check_parser.add_argument("package", help="Importable package name")

    for p in (test_parser, check_parser):
        p.add_argument("-f", "--filter", help="Regular expression matched against test file names")
        p.add_argument(
            "-r",
            "--reporter",
            action="append",
            help="Reporter name or module:Class import string (repeatable)",
        )
        p.add_argument(
            "--stop-on-failure",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Exit with status 1 if any test failed",
        )
        p.add_argument(
            "--stop-on-warning",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Exit with status 1 if any test raised a warning",
        )
        p.add_argument("-v", "--verbose", action="count", default=0, help="Increase CLI output")

    test_parser.add_argument(
        "--no-helpers",
        dest="load_helpers",
        action="store_false",
        default=None,
        help="Do not run helper files before the tests",
    )

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 2:
        level = logging.INFO
    elif verbosity > 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _resolve_flag(value: bool | None, default: bool) -> bool:
    return default if value is None else value


def _resolve_reporter(
    args: argparse.Namespace,
    config: VerdictConfig,
    *,
    default: str,
    stop_on_failure: bool,
) -> Reporter:
    """Build the reporter(s) named by ``-r``, falling back to ``default``.

    Options from ``[tool.verdict.reporter_options]`` win over values derived
    from CLI flags. Several names are combined into a MultiReporter.
    """
    names = args.reporter or [default]
    options: dict[str, dict[str, Any]] = {}
    for name in names:
        opts = dict(config.reporter_options.get(name, {}))
        if name == "ConsoleReporter":
            opts.setdefault("verbosity", args.verbose)
        elif name == "CheckReporter":
            opts.setdefault("stop_on_failure", stop_on_failure)
        options[name] = opts

    reporters = resolve_reporters(names, options)
    if len(reporters) == 1:
        return reporters[0]
    return MultiReporter(reporters)


def _run_test(args: argparse.Namespace, config: VerdictConfig) -> int:
    console = Console(stderr=True)
    stop_on_failure = _resolve_flag(args.stop_on_failure, config.stop_on_failure)
    try:
        reporter = _resolve_reporter(
            args, config, default=config.reporter, stop_on_failure=stop_on_failure
        )
        result = test_dir(
            args.path or config.test_path,
            args.filter or config.filter,
            reporter,
            load_helpers=_resolve_flag(args.load_helpers, config.load_helpers),
            stop_on_failure=stop_on_failure,
            stop_on_warning=_resolve_flag(args.stop_on_warning, config.stop_on_warning),
        )
    except (VerdictError, ValueError, TypeError, ImportError) as exc:
        console.print(str(exc), style="red", markup=False, highlight=False)
        return 2

    return 0 if result.ok else 1


def _run_check(args: argparse.Namespace, config: VerdictConfig) -> int:
    console = Console(stderr=True)
    stop_on_failure = _resolve_flag(args.stop_on_failure, True)
    try:
        reporter = _resolve_reporter(
            args, config, default="CheckReporter", stop_on_failure=stop_on_failure
        )
        result = test_package(
            args.package,
            args.filter or config.filter,
            reporter,
            stop_on_failure=stop_on_failure,
            stop_on_warning=_resolve_flag(args.stop_on_warning, config.stop_on_warning),
        )
    except (VerdictError, ValueError, TypeError, ImportError) as exc:
        console.print(str(exc), style="red", markup=False, highlight=False)
        return 2

    if result is None:
        return 0
    return 0 if result.ok else 1


__all__ = ["main"]
