"""Parser wiring for the modgraph entrypoint."""

from __future__ import annotations

import argparse
from pathlib import Path

OUTPUT_MODES = ("textDump", "textFile")


def build_parser(*, version: str) -> argparse.ArgumentParser:
    """Configure top-level CLI parser and subcommands."""
    parser = argparse.ArgumentParser(
        prog="modgraph",
        description="modgraph: dependency graph tooling for Swift packages",
        epilog="Commands: tests | lint | visualize. Use modgraph help for an overview.",
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {version}")
    subparsers = parser.add_subparsers(dest="command")

    _add_tests_command(subparsers)
    _add_lint_command(subparsers)
    _add_visualize_command(subparsers)

    subparsers.add_parser("help", help="Show modgraph command overview")

    return parser


def _add_common_arguments(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("path", nargs="?", default=".", type=Path, help="Package directory, containing Package.swift (default: .)")
    sub.add_argument(
        "--excluded-suffixes", "-e",
        action="append",
        default=[],
        metavar="SUFFIXES",
        help="Comma separated module name suffixes to ignore, e.g. 'Mock,Snapshots' (repeatable)",
    )
    sub.add_argument("--describe-file", type=Path, default=None, metavar="JSON", help="Use a saved `swift package describe --type json` output instead of running swift")
    sub.add_argument("--config", type=Path, default=None, metavar="TOML", help="Config file (default: modgraph.toml or [tool.modgraph] in pyproject.toml)")
    sub.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub.add_argument("--quiet", "-q", action="store_true", help="Warnings and errors only")


def _add_tests_command(subparsers: argparse._SubParsersAction) -> None:
    tests_parser = subparsers.add_parser("tests", help="Test modules to run for the changes against a base branch")
    _add_common_arguments(tests_parser)
    tests_parser.add_argument("--files", nargs="+", default=None, metavar="FILE", help="Changed files (default: git diff against origin/<base-branch>)")
    tests_parser.add_argument("--base-branch", "-b", type=str, default=None, help="Base branch to diff against (default: config or 'main')")
    tests_parser.add_argument("--output", choices=OUTPUT_MODES, default="textDump", help="textDump prints the list, textFile writes output.txt (default: textDump)")


def _add_lint_command(subparsers: argparse._SubParsersAction) -> None:
    lint_parser = subparsers.add_parser("lint", help="Run dependency graph lint rules")
    _add_common_arguments(lint_parser)
    lint_parser.add_argument("--strict", action="store_true", help="Exit 1 when lint finds more issues than allowed")
    lint_parser.add_argument("--warnings-count", "-c", type=int, default=0, metavar="N", help="Issues tolerated in strict mode (default: config or 0)")
    lint_parser.add_argument("--output", "-o", type=Path, default=None, metavar="PATH", help="Also save the report as text (.txt appended when missing)")
    lint_parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    lint_parser.add_argument("--color", action="store_true", default=None, dest="color", help="Force color output (default: auto from TTY)")
    lint_parser.add_argument("--no-color", action="store_false", dest="color", help="Disable color output")


def _add_visualize_command(subparsers: argparse._SubParsersAction) -> None:
    viz_parser = subparsers.add_parser("visualize", help="Render the module graph as Graphviz DOT")
    _add_common_arguments(viz_parser)
    viz_parser.add_argument("--focus", "-f", type=str, default=None, metavar="MODULE", help="Highlight edges touching MODULE")
    viz_parser.add_argument("--exclude-third-party", "-t", action="store_true", help="Leave external products out")
    viz_parser.add_argument("--output", "-o", type=Path, default=None, metavar="PATH", help="Write DOT to PATH (default: stdout)")
    viz_parser.add_argument("--rank-spacing", "-s", type=float, default=3.0, help="Graphviz ranksep (default: 3)")
