"""Lint handler: `modgraph lint`."""

from __future__ import annotations

import json
from typing import Any

from modgraph.errors import ModGraphError
from modgraph.lint.engine import run_rules, strict_mode_failed
from modgraph.lint.runner import run_lint

from .core_handlers_common import _check_path, _config_for, _err, _graph_loader, _package_dir, _run_context


def handle_lint(args: Any) -> int:
    """Run the configured rules; exit 1 only when strict mode fails."""
    ctx = _run_context(args)
    package_dir = _package_dir(args, ctx)
    if _check_path(package_dir) != 0:
        return 1
    try:
        config = _config_for(args, package_dir, ctx)
        rules = config.lint.build_rules()
        graph = _graph_loader(args, package_dir, ctx)()
        if getattr(args, "json", False):
            report = run_rules(graph, rules, config.excluded_suffixes)
            print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
            failed = strict_mode_failed(
                report,
                is_strict=config.lint.is_strict,
                expected_warnings_count=config.lint.expected_warnings_count,
            )
        else:
            outcome = run_lint(
                graph,
                rules,
                ctx,
                excluded_suffixes=config.excluded_suffixes,
                is_strict=config.lint.is_strict,
                expected_warnings_count=config.lint.expected_warnings_count,
                output_file=getattr(args, "output", None),
            )
            failed = outcome.failed
    except ModGraphError as exc:
        _err(str(exc))
        return 1
    return 1 if failed else 0
