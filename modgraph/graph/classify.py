"""Naming-convention classification of modules.

Every role is a pure predicate over a module (by default over its name). A
ModuleClassifier bundles the predicates so rules and renderers share one
definition, and callers can swap any single predicate with dataclasses.replace.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .model import Module

ModulePredicate = Callable[[Module], bool]


def is_live_name(module: Module) -> bool:
    return module.name.endswith("Live")


def is_feature_name(module: Module) -> bool:
    return "Feature" in module.name


def is_app_name(module: Module) -> bool:
    return "App" in module.name or module.name.endswith("UI")


def is_live_test_name(module: Module) -> bool:
    return module.name.endswith("LiveTests")


def is_live_test_support_name(module: Module) -> bool:
    return "LiveTestSupport" in module.name


def is_ui_test_support_name(module: Module) -> bool:
    name = module.name
    if "UITestSupport" in name:
        return True
    return "UITestsSupport" in name and name != "ServerDrivenUITestSupport"


def is_tests_name(module: Module) -> bool:
    return module.name.endswith("Tests")


def is_test_support_name(module: Module) -> bool:
    return module.name.endswith("TestSupport")


def has_excluded_suffix(name: str, excluded_suffixes: Iterable[str]) -> bool:
    return any(name.endswith(suffix) for suffix in excluded_suffixes if suffix)


@dataclass(frozen=True)
class ModuleClassifier:
    live: ModulePredicate = is_live_name
    feature: ModulePredicate = is_feature_name
    app: ModulePredicate = is_app_name
    live_test: ModulePredicate = is_live_test_name
    live_test_support: ModulePredicate = is_live_test_support_name
    ui_test_support: ModulePredicate = is_ui_test_support_name
    tests: ModulePredicate = is_tests_name
    test_support: ModulePredicate = is_test_support_name
    base: Optional[ModulePredicate] = None

    def is_live(self, module: Module) -> bool:
        return self.live(module)

    def is_feature(self, module: Module) -> bool:
        return self.feature(module)

    def is_app(self, module: Module) -> bool:
        return self.app(module)

    def is_live_test(self, module: Module) -> bool:
        return self.live_test(module)

    def is_live_test_support(self, module: Module) -> bool:
        return self.live_test_support(module)

    def is_ui_test_support(self, module: Module) -> bool:
        return self.ui_test_support(module)

    def is_tests(self, module: Module) -> bool:
        return self.tests(module)

    def is_test_support(self, module: Module) -> bool:
        return self.test_support(module)

    def can_depend_on_live(self, module: Module) -> bool:
        return (
            self.is_feature(module)
            or self.is_app(module)
            or self.is_live_test(module)
            or self.is_live_test_support(module)
            or self.is_ui_test_support(module)
        )

    def is_base(self, module: Module) -> bool:
        """Base or interface module: neither Live nor allowed to depend on Live."""
        if self.base is not None:
            return self.base(module)
        return not self.is_live(module) and not self.can_depend_on_live(module)

    def has_excluded_suffix(self, module: Module, excluded_suffixes: Iterable[str]) -> bool:
        return has_excluded_suffix(module.name, excluded_suffixes)

    def roles(self, module: Module) -> list[str]:
        """Every role name that applies to `module`, for reports and debugging."""
        checks = (
            ("live", self.is_live),
            ("feature", self.is_feature),
            ("app", self.is_app),
            ("live_test", self.is_live_test),
            ("live_test_support", self.is_live_test_support),
            ("ui_test_support", self.is_ui_test_support),
            ("tests", self.is_tests),
            ("test_support", self.is_test_support),
            ("base", self.is_base),
        )
        return [role for role, check in checks if check(module)]


DEFAULT_CLASSIFIER = ModuleClassifier()
