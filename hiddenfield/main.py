#!/usr/bin/env python3
"""hiddenfield/main.py: CLI entry-point.

Usage examples
--------------
    # Check one or more AST dumps with the default configuration
    python -m hiddenfield Foo.ast Bar.ast

    # Ignore setter and constructor parameters
    python -m hiddenfield --ignore-setter --ignore-constructor-parameter Foo.ast

    # Only check local variables, ignore names starting with "tmp"
    python -m hiddenfield --tokens VARIABLE_DEF --ignore-format '^tmp' Foo.ast

    # Read check properties from a JSON file, emit JSON lines
    python -m hiddenfield --config checks.json --format json Foo.ast

    # Turn off a setting the JSON file switches on
    python -m hiddenfield --config checks.json --no-ignore-setter Foo.ast

Exit codes
----------
    0   Success, no violation with severity ``error``.
    1   At least one violation with severity ``error`` was reported.
    2   Infrastructure failure (bad configuration, unreadable dump, ...).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence, TextIO

from hiddenfield import __version__
from hiddenfield.api import SeverityLevel, Violation
from hiddenfield.config import CheckConfig, create_check, load_config
from hiddenfield.dump import load_file
from hiddenfield.errors import HiddenFieldError
from hiddenfield.hidden_field import HiddenFieldCheck
from hiddenfield.walker import TreeWalker

_log = logging.getLogger("hiddenfield")

EXIT_OK: int = 0
EXIT_VIOLATIONS: int = 1
EXIT_INFRA: int = 2

_HANDLER_NAME = "hiddenfield-cli"


def _configure_logging(verbosity: int) -> None:
    """Set up the ``hiddenfield`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    handler.set_name(_HANDLER_NAME)
    root = logging.getLogger("hiddenfield")
    for old in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(old)
    root.setLevel(level)
    root.addHandler(handler)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hiddenfield",
        description="Report locals and parameters that hide a field.",
    )
    parser.add_argument("dumps", nargs="+", metavar="DUMP",
                        help="S-expression AST dump file(s)")
    parser.add_argument("--config", metavar="FILE",
                        help="JSON file of check module properties")
    parser.add_argument("--tokens", metavar="LIST",
                        help="comma separated subset of VARIABLE_DEF,PARAMETER_DEF")
    parser.add_argument("--ignore-format", metavar="REGEX",
                        help="ignore declarations whose name matches REGEX")
    parser.add_argument("--ignore-setter", action=argparse.BooleanOptionalAction,
                        default=None,
                        help="ignore the parameter of property setters")
    parser.add_argument("--ignore-constructor-parameter",
                        action=argparse.BooleanOptionalAction, default=None,
                        help="ignore constructor parameters")
    parser.add_argument("--severity",
                        choices=[s.value for s in SeverityLevel],
                        help="severity of reported violations")
    parser.add_argument("--format", choices=["text", "json"], default="text",
                        help="output format (default: text)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="increase log verbosity (-v, -vv)")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def _cli_properties(args: argparse.Namespace) -> Dict[str, Any]:
    props: Dict[str, Any] = {}
    if args.tokens is not None:
        props["tokens"] = args.tokens
    if args.ignore_format is not None:
        props["ignoreFormat"] = args.ignore_format
    if args.ignore_setter is not None:
        props["ignoreSetter"] = args.ignore_setter
    if args.ignore_constructor_parameter is not None:
        props["ignoreConstructorParameter"] = args.ignore_constructor_parameter
    if args.severity is not None:
        props["severity"] = args.severity
    return props


def _check_configs(args: argparse.Namespace) -> List[CheckConfig]:
    configs = load_config(args.config) if args.config else []
    overrides = _cli_properties(args)
    for cfg in configs:
        if cfg.name == HiddenFieldCheck.name:
            cfg.properties.update(overrides)
            break
    else:
        configs.append(CheckConfig(name=HiddenFieldCheck.name, properties=overrides))
    return configs


def _emit(violations: Sequence[Violation], fmt: str, stream: TextIO) -> None:
    for violation in violations:
        if violation.severity is SeverityLevel.IGNORE:
            continue
        if fmt == "json":
            stream.write(violation.to_json_str() + "\n")
        else:
            stream.write(violation.to_gcc_format() + "\n")


def main(argv: Optional[Sequence[str]] = None, stream: Optional[TextIO] = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    out = stream or sys.stdout

    try:
        checks = [create_check(cfg) for cfg in _check_configs(args)]
        walker = TreeWalker(checks)
        violations: List[Violation] = []
        for path in args.dumps:
            _log.info("Checking %s", path)
            violations.extend(walker.process_all(load_file(path), file_name=path))
    except HiddenFieldError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA
    except OSError as exc:
        _log.error("cannot read input: %s", exc)
        return EXIT_INFRA

    _emit(violations, args.format, out)
    if any(v.severity is SeverityLevel.ERROR for v in violations):
        return EXIT_VIOLATIONS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
