"""Lint report formatting: colored console text and plain file output."""

from __future__ import annotations

import sys
from typing import List, Optional

from .engine import LintReport, RuleReport

# ANSI codes (no external deps)
_RESET = "\033[0m"
_BOLD = "\033[1m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_CYAN = "\033[36m"


def _color(text: str, code: str, use_color: bool) -> str:
    return f"{code}{text}{_RESET}" if use_color and text else text


def should_use_color(force: Optional[bool] = None) -> bool:
    """Use color only when stdout is TTY, unless force is set."""
    if force is not None:
        return force
    return sys.stdout.isatty()


def _plural(count: int) -> str:
    return "error" if count == 1 else "errors"


def _format_rule(rule: RuleReport, use_color: bool) -> List[str]:
    c = lambda t, code: _color(t, code, use_color)
    lines = [
        "",
        c(c(f"Running lint rule: {rule.name}", _BOLD), _CYAN),
        c(rule.abstract, _BOLD),
    ]
    if not rule.diagnostics:
        lines.append(c("✅ Found no issues", _GREEN))
        return lines
    count = len(rule.diagnostics)
    lines.append(c("Errors:", _YELLOW))
    lines.extend(f"- ⚠️  {d.message}" for d in rule.diagnostics)
    lines.append(
        c("Found ", _YELLOW)
        + c(c(f"{count} {_plural(count)}!", _BOLD), _YELLOW)
        + c(" Let's fix it, humans 🤖!", _YELLOW)
    )
    return lines


def format_lint_report(report: LintReport, *, use_color: bool = False) -> str:
    """Full report, every diagnostic included."""
    c = lambda t, code: _color(t, code, use_color)
    lines: List[str] = []
    for rule in report.rule_reports:
        lines.extend(_format_rule(rule, use_color))
    lines.append("")
    if report.has_issues:
        lines.append(
            c("⚠️  Found a ", _YELLOW)
            + c(c(f"total of {report.total_count} {_plural(report.total_count)} ", _BOLD), _YELLOW)
            + c("for all rules ran. Don't worry, everything is fixable!", _YELLOW)
        )
    else:
        lines.append(c(c("No errors found! The dependency graph looks tidy ✨", _BOLD), _GREEN))
    return "\n".join(lines) + "\n"
