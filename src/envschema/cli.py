"""Command-line interface for checking configuration against a schema."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .errors import ConfigError
from .loader import load
from .schema import load_schema_file
from .sources import EnvFileOption
from .view import ConfigView

MASK = "***"


def _add_load_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "schema",
        type=Path,
        help="Path to a TOML file declaring the configuration schema.",
    )
    env_file_group = parser.add_mutually_exclusive_group()
    env_file_group.add_argument(
        "--env-file",
        type=Path,
        help="Dotenv file to read (default: ./.env when present).",
    )
    env_file_group.add_argument(
        "--no-env-file",
        dest="no_env_file",
        action="store_true",
        help="Do not read any dotenv file.",
    )
    parser.add_argument(
        "--no-process-env",
        dest="no_process_env",
        action="store_true",
        help="Ignore variables from the process environment.",
    )
    parser.add_argument(
        "--set",
        dest="values",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Provide a raw value (lowest precedence, e.g. --set PORT=8080).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Load and validate environment configuration against a schema."
    )
    parser.add_argument(
        "--log-level",
        choices=["critical", "error", "warning", "info", "debug"],
        default="info",
        help="Logging verbosity (default: info).",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    check_parser = subparsers.add_parser(
        "check",
        help="Load the configuration and report whether it is valid.",
    )
    _add_load_arguments(check_parser)

    print_config_parser = subparsers.add_parser(
        "print-config",
        help="Display the resolved configuration as JSON.",
    )
    _add_load_arguments(print_config_parser)
    print_config_parser.add_argument(
        "--mask",
        action="append",
        default=[],
        metavar="KEY",
        help="Hide the value of KEY in the output. Provide multiple times for multiple keys.",
    )

    return parser


def parse_set_values(entries: Iterable[str]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` pairs into a flat mapping."""
    result: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            continue
        key, raw = entry.split("=", 1)
        result[key.strip()] = raw
    return result


def _env_file_option(args: argparse.Namespace) -> EnvFileOption:
    if args.no_env_file:
        return False
    if args.env_file is not None:
        return args.env_file
    return True


def _configure_logging(log_level: str) -> None:
    """Initialise root logging configuration."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


def _load_from_args(args: argparse.Namespace) -> Optional[ConfigView]:
    """Load the configuration, printing the failure and returning ``None`` on error."""
    errors = Console(stderr=True)
    try:
        schema = load_schema_file(args.schema)
        return load(
            schema,
            from_env_file=_env_file_option(args),
            from_process_env=not args.no_process_env,
            env_object=parse_set_values(args.values),
        )
    except FileNotFoundError as exc:
        errors.print(f"[bold red]Schema not found:[/bold red] {escape(str(exc))}", highlight=False)
    except tomllib.TOMLDecodeError as exc:
        errors.print(f"[bold red]Invalid schema file:[/bold red] {escape(str(exc))}", highlight=False)
    except ConfigError as exc:
        errors.print(f"[bold red]Configuration error:[/bold red] {escape(str(exc))}", highlight=False)
    return None


def _run_check_command(args: argparse.Namespace) -> int:
    config = _load_from_args(args)
    if config is None:
        return 1
    console = Console()
    console.print(
        f"[bold green]Configuration OK:[/bold green] {len(config)} key(s) resolved.",
        highlight=False,
    )
    return 0


def _run_print_config_command(args: argparse.Namespace) -> int:
    config = _load_from_args(args)
    if config is None:
        return 1
    masked = set(args.mask or [])
    data: dict[str, Any] = {
        key: MASK if key in masked else value for key, value in config.items()
    }
    console = Console()
    console.print(
        json.dumps(data, indent=2, default=str),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Execute the CLI entry point."""
    parser = build_parser()
    raw_args = list(argv if argv is not None else sys.argv[1:])
    if not raw_args:
        parser.print_help()
        return 0

    args = parser.parse_args(raw_args)
    _configure_logging(args.log_level)

    if args.command == "check":
        return _run_check_command(args)
    if args.command == "print-config":
        return _run_print_config_command(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
