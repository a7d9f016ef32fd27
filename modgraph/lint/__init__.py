"""Dependency graph lint: rule engine, built-in rules, report formatting."""

from .diagnostics import (
    BaseOrInterfaceModuleLiveDependency,
    Diagnostic,
    LiveModuleLiveDependency,
    UnusedDependency,
)
from .engine import LintReport, Rule, RuleReport, run_rules, strict_mode_failed
from .rules import (
    DEFAULT_RULE_IDS,
    RULE_FACTORIES,
    base_or_interface_module_live_dependency,
    build_rules,
    default_rules,
    live_module_live_dependency,
    unused_dependencies,
)
from .usage import RegexImportDetector, UsageDetector

__all__ = [
    "BaseOrInterfaceModuleLiveDependency",
    "DEFAULT_RULE_IDS",
    "Diagnostic",
    "LintReport",
    "LiveModuleLiveDependency",
    "RULE_FACTORIES",
    "RegexImportDetector",
    "Rule",
    "RuleReport",
    "UnusedDependency",
    "UsageDetector",
    "base_or_interface_module_live_dependency",
    "build_rules",
    "default_rules",
    "live_module_live_dependency",
    "run_rules",
    "strict_mode_failed",
    "unused_dependencies",
]
