"""Rule engine: run an ordered list of rules against a graph.

Rules are plain records holding a pure validate function. The engine only
collects what they return; deciding whether a dirty report fails the run is
left to the caller (see strict_mode_failed).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence

from modgraph.graph import Graph
from modgraph.logging import get_logger

from .diagnostics import Diagnostic, diagnostic_to_dict

Validate = Callable[[Graph, Sequence[str]], List[Diagnostic]]

_log = get_logger("lint")


@dataclass(frozen=True)
class Rule:
    id: str
    name: str
    abstract: str
    validate: Validate = field(compare=False)

    def __call__(self, graph: Graph, excluded_suffixes: Sequence[str] = ()) -> List[Diagnostic]:
        return list(self.validate(graph, tuple(excluded_suffixes)))


@dataclass(frozen=True)
class RuleReport:
    rule_id: str
    name: str
    abstract: str
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def has_issues(self) -> bool:
        return bool(self.diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.rule_id,
            "name": self.name,
            "abstract": self.abstract,
            "diagnostics": [diagnostic_to_dict(d) for d in self.diagnostics],
        }


@dataclass(frozen=True)
class LintReport:
    rule_reports: tuple[RuleReport, ...] = ()

    @property
    def total_count(self) -> int:
        return sum(len(r.diagnostics) for r in self.rule_reports)

    @property
    def has_issues(self) -> bool:
        return self.total_count > 0

    def diagnostics(self) -> List[Diagnostic]:
        return [d for report in self.rule_reports for d in report.diagnostics]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rules": [r.to_dict() for r in self.rule_reports],
            "total_count": self.total_count,
            "has_issues": self.has_issues,
        }


def run_rules(graph: Graph, rules: Sequence[Rule], excluded_suffixes: Sequence[str] = ()) -> LintReport:
    """Run rules in the given order and collect their diagnostics."""
    suffixes = tuple(excluded_suffixes)
    reports: list[RuleReport] = []
    for rule in rules:
        _log.debug("modgraph: running lint rule %s", rule.id)
        diagnostics = rule(graph, suffixes)
        reports.append(
            RuleReport(
                rule_id=rule.id,
                name=rule.name,
                abstract=rule.abstract,
                diagnostics=tuple(diagnostics),
            )
        )
    return LintReport(rule_reports=tuple(reports))


def strict_mode_failed(report: LintReport, *, is_strict: bool, expected_warnings_count: int = 0) -> bool:
    """Caller-level policy: strict runs fail once diagnostics exceed the allowance."""
    if not is_strict:
        return False
    return report.has_issues and report.total_count > expected_warnings_count
