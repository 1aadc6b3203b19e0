from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from typed_options.config.loader import default_log_level, load_options
from typed_options.errors import ConfigError, OptionsError
from typed_options.observability.logging import configure_logging, get_logger
from typed_options.store import Options


log = get_logger("typed_options.cli")

KINDS: dict[str, type] = {
    "int": int,
    "float": float,
    "str": str,
    "bool": bool,
    "list": list,
    "dict": dict,
    "none": type(None),
}

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typed-options",
        description="Inspect named options with exact-type lookups",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (e.g. DEBUG, INFO, WARNING); defaults to $TYPED_OPTIONS_LOG_LEVEL or INFO",
    )
    parser.add_argument("--config", type=Path, help="Path to a YAML options file")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("demo", help="Build a sample store and print its values")
    sub.add_parser("show", help="List every option in --config with its type")

    get_p = sub.add_parser("get", help="Print one option from --config if it has the given type")
    get_p.add_argument("name")
    get_p.add_argument("--type", dest="kind", choices=sorted(KINDS), required=True)

    return parser


def _demo() -> int:
    options = Options()
    options.set("foo", 42).set("bar", "To be or not to be?").set("baz", "Hello, world!")

    print(f"foo = {options.require('foo', int)}")
    print(f"bar = {options.require('bar', str)}")
    print(f"baz = {options.require('baz', str)}")
    return 0


def _show(options: Options) -> int:
    for name, cell in sorted(options.iter(), key=lambda item: item[0]):
        print(f"{name}: {cell.kind.__name__} = {cell.get_ref(cell.kind)!r}")
    return 0


def _get(options: Options, name: str, kind_name: str) -> int:
    try:
        value = options.require(name, KINDS[kind_name])
    except OptionsError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(value)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = args.log_level or default_log_level()
    try:
        configure_logging(level=level)
    except ValueError:
        parser.error(f"invalid log level {level!r} (from $TYPED_OPTIONS_LOG_LEVEL)")

    if args.command == "demo":
        return _demo()

    if args.config is None:
        parser.error(f"{args.command} requires --config")

    try:
        options = load_options(args.config)
    except ConfigError as exc:
        log.error("config_load_failed", path=str(args.config))
        print(str(exc), file=sys.stderr)
        return 2

    log.debug("options_loaded", path=str(args.config), count=len(options))

    if args.command == "show":
        return _show(options)
    return _get(options, args.name, args.kind)

