"""Shared helpers for the CLI handlers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List

from modgraph.config import ModGraphConfig, load_config
from modgraph.context import RunContext
from modgraph.graph import Graph
from modgraph.loader import load_graph


def _err(msg: str) -> None:
    """Log unified error message (via logger, respects --quiet)."""
    _clog().error("modgraph: %s", msg)


def _clog() -> Any:
    from modgraph.logging import get_logger

    return get_logger("cli")


def _check_path(path: Path, must_be_dir: bool = True) -> int:
    """Return 0 if path is valid, 1 and print error otherwise."""
    if not path.exists():
        _err(f"path does not exist: {path}")
        return 1
    if must_be_dir and (not path.is_dir()):
        _err(f"not a directory: {path}")
        return 1
    return 0


def _package_dir(args: Any, ctx: RunContext) -> Path:
    return ctx.resolve(getattr(args, "path", None) or ".").resolve()


def _excluded_suffixes_from_args(args: Any) -> List[str]:
    """Flatten repeated `-e A,B -e C` values into ['A', 'B', 'C']."""
    suffixes: List[str] = []
    for raw in getattr(args, "excluded_suffixes", None) or []:
        suffixes.extend(part.strip() for part in raw.split(",") if part.strip())
    return suffixes


def _run_context(args: Any) -> RunContext:
    return RunContext.from_environ(use_color=getattr(args, "color", None))


def _config_for(args: Any, package_dir: Path, ctx: RunContext) -> ModGraphConfig:
    config_file = getattr(args, "config", None)
    config = load_config(package_dir, ctx.resolve(config_file) if config_file else None)
    return config.with_overrides(
        excluded_suffixes=_excluded_suffixes_from_args(args),
        base_branch=getattr(args, "base_branch", None),
        is_strict=bool(getattr(args, "strict", False)),
        expected_warnings_count=int(getattr(args, "warnings_count", 0) or 0),
    )


def _graph_loader(args: Any, package_dir: Path, ctx: RunContext) -> Callable[[], Graph]:
    describe_file = getattr(args, "describe_file", None)
    resolved = ctx.resolve(describe_file) if describe_file else None
    return lambda: load_graph(package_dir, describe_file=resolved)
