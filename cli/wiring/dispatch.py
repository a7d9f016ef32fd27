"""CLI command dispatch wiring."""

from __future__ import annotations

import argparse
from typing import Any, Callable

from cli import handlers


def dispatch_command(parser: argparse.ArgumentParser, args: Any) -> int:
    """Dispatch parsed CLI args to the matching command handler."""
    from modgraph.logging import configure_cli_logging

    quiet = getattr(args, "quiet", False)
    verbose = getattr(args, "verbose", False)
    configure_cli_logging(quiet=quiet, verbose=verbose)

    if args.command is None:
        return handlers.handle_help(parser)

    dispatch: dict[str, Callable[[], int]] = {
        "help": lambda: handlers.handle_help(parser),
        "tests": lambda: handlers.handle_tests(args),
        "lint": lambda: handlers.handle_lint(args),
        "visualize": lambda: handlers.handle_visualize(args),
    }
    if args.command in dispatch:
        return dispatch[args.command]()

    parser.print_help()
    return 1
