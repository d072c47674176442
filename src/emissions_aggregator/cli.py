# emissions_aggregator/cli.py

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable

from .adapters import load_adapter_registry
from .domain import store_emissions
from .logging_config import configure_logging


def run_command(fn: Callable[[], Awaitable[object]]) -> None:
    """
    Executes an asynchronous command function using asyncio.

    Runs the provided coroutine function and handles exceptions by printing
    the error to stderr and exiting with status code 1.

    Args:
        fn (Callable[[], Awaitable[object]]): An asynchronous function to execute.

    Returns:
        None
    """
    try:
        asyncio.run(fn())
    except Exception as exc:
        print(f"{exc.__class__.__name__}: {exc}", file=sys.stderr)
        raise SystemExit(1) from None


def list_adapters() -> None:
    """
    Print every registered adapter with the index that selects it for a run.

    Args:
        None

    Returns:
        None
    """
    for index, entry in enumerate(load_adapter_registry()):
        print(f"{index:>4}  {entry.name}")


def run_batch(indexes: list[int] | None) -> None:
    """
    Run one emissions batch over the given registry indexes, or over every
    registered adapter when `indexes` is None.

    Args:
        indexes (list[int] | None): Registry indexes to run.

    Returns:
        None
    """
    if indexes is None:
        indexes = list(range(len(load_adapter_registry())))

    run_command(lambda: store_emissions(indexes))


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser of the emissions-aggregator CLI.

    Args:
        None

    Returns:
        argparse.ArgumentParser: The configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="emissions-aggregator",
        description="Aggregate token emission schedules into stored unlock artifacts",
        epilog="Use 'emissions-aggregator <command> --help' for command-specific options",
    )

    # add required subcommands
    sub = parser.add_subparsers(
        dest="cmd",
        required=True,
        title="commands",
        description="Available operations",
    )

    # add list subcommand
    sub.add_parser(
        "list",
        help="List registered adapters and their batch indexes",
        description="Print every adapter found in the adapter registry, prefixed by "
        "the index used to select it for a run",
    )

    # add run subcommand
    run = sub.add_parser(
        "run",
        help="Run an emissions batch",
        description="Process the selected adapters, store one artifact per protocol "
        "and merge them into the protocol index",
    )
    selection = run.add_mutually_exclusive_group(required=True)
    selection.add_argument(
        "--indexes",
        nargs="+",
        type=int,
        metavar="N",
        help="registry indexes of the adapters to process",
    )
    selection.add_argument(
        "--all",
        action="store_true",
        help="process every registered adapter",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the emissions-aggregator CLI application.

    Parses the command line, configures logging once a valid command is given and
    dispatches to the matching subcommand.

    Args:
        argv (list[str] | None, optional): Arguments to parse. Defaults to
            sys.argv[1:].

    Returns:
        None
    """
    args = build_parser().parse_args(argv)

    # configure logging
    configure_logging()

    if args.cmd == "list":
        list_adapters()
        return

    if args.cmd == "run":
        run_batch(None if args.all else args.indexes)
        return
