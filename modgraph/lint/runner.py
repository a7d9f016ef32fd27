"""Lint run: evaluate configured rules, print and persist the report."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, TextIO

from modgraph.context import RunContext
from modgraph.graph import Graph
from modgraph.logging import get_logger
from modgraph.output import with_default_suffix, write_text_atomic

from .engine import LintReport, Rule, run_rules, strict_mode_failed
from .report import format_lint_report, should_use_color

CI_RESULT_FILE = ".modgraph_lint_result.txt"

_log = get_logger("lint")


@dataclass(frozen=True)
class LintOutcome:
    report: LintReport
    failed: bool
    output_file: Optional[Path] = None


def run_lint(
    graph: Graph,
    rules: Sequence[Rule],
    context: RunContext,
    *,
    excluded_suffixes: Sequence[str] = (),
    is_strict: bool = False,
    expected_warnings_count: int = 0,
    output_file: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> LintOutcome:
    out = stream or sys.stdout
    report = run_rules(graph, rules, excluded_suffixes)
    use_color = should_use_color(context.use_color) if stream is None else bool(context.use_color)
    out.write(format_lint_report(report, use_color=use_color))

    written: Optional[Path] = None
    if output_file is not None:
        target = with_default_suffix(context.resolve(output_file))
        written = write_text_atomic(target, format_lint_report(report, use_color=False))
        print(f"✅ Successfully saved the lint output into {written}", file=out)

    if context.is_ci:
        write_text_atomic(context.cwd / CI_RESULT_FILE, "true" if report.has_issues else "false")

    failed = strict_mode_failed(report, is_strict=is_strict, expected_warnings_count=expected_warnings_count)
    if failed:
        _log.error(
            "modgraph: lint failed and strict flag is on (%d issues, %d allowed)",
            report.total_count,
            expected_warnings_count,
        )
    return LintOutcome(report=report, failed=failed, output_file=written)
