"""Tests for the rule engine, registry, strict mode and report formatting."""
import pytest

from modgraph.errors import ConfigError
from modgraph.lint import DEFAULT_RULE_IDS, LintReport, Rule, RuleReport, build_rules, default_rules, run_rules, strict_mode_failed
from modgraph.lint.diagnostics import UnusedDependency
from modgraph.lint.report import format_lint_report


def test_default_rules_order() -> None:
    assert [r.id for r in default_rules()] == [
        "liveModuleLiveDependency",
        "baseOrInterfaceModuleLiveDependency",
        "unusedDependencies",
    ]
    assert tuple(r.id for r in default_rules()) == DEFAULT_RULE_IDS


def test_run_rules_collects_per_rule(lint_graph) -> None:
    report = run_rules(lint_graph, default_rules())
    assert [r.rule_id for r in report.rule_reports] == list(DEFAULT_RULE_IDS)
    assert [len(r.diagnostics) for r in report.rule_reports] == [1, 0, 1]
    assert report.total_count == 2
    assert report.has_issues
    assert [d.message for d in report.diagnostics()] == [
        "StorageLive must not depend on Live Module NetworkingLive",
        "ModuleWithUnusedDep is not using BaseModule",
    ]


def test_run_rules_is_idempotent(lint_graph) -> None:
    rules = default_rules()
    assert run_rules(lint_graph, rules).to_dict() == run_rules(lint_graph, rules).to_dict()


def test_no_diagnostic_names_excluded_suffix(lint_graph) -> None:
    report = run_rules(lint_graph, default_rules(), ["Live", "Dep"])
    for d in report.diagnostics():
        for name in (d.module_name, getattr(d, "live_dependency_name", None) or d.dependency_name):
            assert not name.endswith(("Live", "Dep"))


def test_custom_rule_record(lint_graph) -> None:
    rule = Rule(
        id="noTests",
        name="No test modules",
        abstract="Flags every test module.",
        validate=lambda graph, suffixes: [UnusedDependency(m.name, "XCTest") for m in graph.test_modules()],
    )
    report = run_rules(lint_graph, [rule])
    assert report.total_count == 1


def test_build_rules_by_id_with_options() -> None:
    rules = build_rules(
        ["unusedDependencies", "liveModuleLiveDependency"],
        {"unusedDependencies": {"excluded_dependencies": ["Logging"], "check_products": True}},
    )
    assert [r.id for r in rules] == ["unusedDependencies", "liveModuleLiveDependency"]


def test_build_rules_rejects_unknown_id_and_option() -> None:
    with pytest.raises(ConfigError):
        build_rules(["noSuchRule"])
    with pytest.raises(ConfigError):
        build_rules(["liveModuleLiveDependency"], {"liveModuleLiveDependency": {"check_products": True}})


def _report(count: int) -> LintReport:
    diagnostics = tuple(UnusedDependency(f"M{i}", "Dep") for i in range(count))
    return LintReport(rule_reports=(RuleReport("unusedDependencies", "Unused", "abstract", diagnostics),))


@pytest.mark.parametrize(
    "count, strict, allowed, failed",
    [
        (0, True, 0, False),
        (2, False, 0, False),
        (2, True, 0, True),
        (2, True, 2, False),
        (3, True, 2, True),
    ],
)
def test_strict_mode_failed(count: int, strict: bool, allowed: int, failed: bool) -> None:
    assert strict_mode_failed(_report(count), is_strict=strict, expected_warnings_count=allowed) is failed


def test_format_report_plain(lint_graph) -> None:
    text = format_lint_report(run_rules(lint_graph, default_rules()))
    assert "Running lint rule: Live modules should not depend on other Live modules" in text
    assert "- ⚠️  StorageLive must not depend on Live Module NetworkingLive" in text
    assert "✅ Found no issues" in text
    assert "Found 1 error! Let's fix it, humans 🤖!" in text
    assert "total of 2 errors" in text
    assert "\033[" not in text


def test_format_report_clean_and_colored() -> None:
    clean = LintReport(rule_reports=(RuleReport("x", "X", "abstract"),))
    text = format_lint_report(clean, use_color=True)
    assert "No errors found!" in text
    assert "\033[32m" in text


def test_report_to_dict(lint_graph) -> None:
    data = run_rules(lint_graph, default_rules()).to_dict()
    assert data["total_count"] == 2
    assert data["rules"][2]["diagnostics"][0] == {
        "module_name": "ModuleWithUnusedDep",
        "dependency_name": "BaseModule",
        "kind": "unusedDependencies",
        "message": "ModuleWithUnusedDep is not using BaseModule",
    }
