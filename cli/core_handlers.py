"""Core CLI command handlers.

Command implementations live in the core_handlers_* modules; the public
surface is re-exported via cli.handlers.
"""

from __future__ import annotations

from typing import Any

from modgraph import __version__

from .core_handlers_lint import handle_lint
from .core_handlers_tests import handle_tests
from .core_handlers_visualize import handle_visualize


def handle_help(parser: Any) -> int:
    """Print high-level command overview and detailed argparse help."""
    print(f"modgraph: dependency graph tooling for Swift packages (v{__version__})")
    print()
    print("Commands:")
    print("  tests [path]      test modules affected by changes (--files or git diff)")
    print("  lint [path]       dependency rules: live->live, base->live, unused")
    print("  visualize [path]  Graphviz DOT of the module graph")
    print()
    print("  -e/--excluded-suffixes and modgraph.toml apply to every command.")
    print("  --help after any command for details.")
    print()
    parser.print_help()
    return 0


__all__ = ["handle_help", "handle_lint", "handle_tests", "handle_visualize"]
