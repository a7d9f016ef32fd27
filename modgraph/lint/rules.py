"""Built-in lint rules and the rule registry.

Each factory returns a Rule whose validate function is pure apart from the
source reads done by the unused-dependency rule. All factories accept a
ModuleClassifier (to redefine Live, Feature, ...) and a list of dependency
names that are never reported.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from modgraph.errors import ConfigError
from modgraph.graph import DEFAULT_CLASSIFIER, Dependency, Graph, Module, ModuleClassifier, ModulePredicate
from modgraph.graph.classify import has_excluded_suffix

from .diagnostics import (
    BaseOrInterfaceModuleLiveDependency,
    Diagnostic,
    LiveModuleLiveDependency,
    UnusedDependency,
)
from .engine import Rule
from .usage import RegexImportDetector, UsageDetector

LIVE_MODULE_LIVE_DEPENDENCY = "liveModuleLiveDependency"
BASE_OR_INTERFACE_MODULE_LIVE_DEPENDENCY = "baseOrInterfaceModuleLiveDependency"
UNUSED_DEPENDENCIES = "unusedDependencies"

UNUSED_DEPENDENCIES_ABSTRACT = """To keep the project clean and avoid long compile times, a Module should not have any unused dependencies.

- Note: It does blindly expects the target to match the product name, and doesn't yet consider
the multiple targets that compose a product (open improvement).

- Note: For `@_exported` usages, there will be an error in case only the exported module is used.
For example, module Networking exports module NetworkingHelpers, if only NetworkingHelpers is used by a target
there will be a lint error, while if both Networking and NetworkingHelpers are used there will be no error."""


def _checked_modules(graph: Graph, excluded_suffixes: Sequence[str]) -> List[Module]:
    modules = [m for m in graph.modules if not has_excluded_suffix(m.name, excluded_suffixes)]
    return sorted(modules, key=lambda m: m.name)


def _reportable(dependency: Dependency, excluded_suffixes: Sequence[str], excluded_dependencies: frozenset[str]) -> bool:
    if dependency.name in excluded_dependencies:
        return False
    return not has_excluded_suffix(dependency.name, excluded_suffixes)


def _live_dependencies(
    module: Module,
    is_live: ModulePredicate,
    excluded_suffixes: Sequence[str],
    excluded_dependencies: frozenset[str],
) -> List[Module]:
    out: List[Module] = []
    for dependency in module.dependencies:
        target = dependency.target_module
        if target is None or not is_live(target):
            continue
        if _reportable(dependency, excluded_suffixes, excluded_dependencies):
            out.append(target)
    return out


def live_module_live_dependency(
    classifier: ModuleClassifier = DEFAULT_CLASSIFIER,
    excluded_dependencies: Iterable[str] = (),
    *,
    is_live_module: Optional[ModulePredicate] = None,
) -> Rule:
    """Live modules must not depend on other Live modules."""
    if is_live_module is not None:
        classifier = replace(classifier, live=is_live_module)
    excluded = frozenset(excluded_dependencies)

    def validate(graph: Graph, excluded_suffixes: Sequence[str]) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        for module in _checked_modules(graph, excluded_suffixes):
            if not classifier.is_live(module):
                continue
            for dependency in _live_dependencies(module, classifier.is_live, excluded_suffixes, excluded):
                diagnostics.append(
                    LiveModuleLiveDependency(module_name=module.name, live_dependency_name=dependency.name)
                )
        return diagnostics

    return Rule(
        id=LIVE_MODULE_LIVE_DEPENDENCY,
        name="Live modules should not depend on other Live modules",
        abstract=(
            "To keep the dependency graph flat and avoid depending on implementations, "
            "a Live Module should never depend on another Live module"
        ),
        validate=validate,
    )


def base_or_interface_module_live_dependency(
    classifier: ModuleClassifier = DEFAULT_CLASSIFIER,
    excluded_dependencies: Iterable[str] = (),
    *,
    is_base_module: Optional[ModulePredicate] = None,
    is_live_module: Optional[ModulePredicate] = None,
) -> Rule:
    """Base or interface modules must not depend on Live modules.

    The base predicate defaults to the classifier's notion of "base" computed
    with the default Live definition, so overriding only `is_live_module`
    changes which dependencies are reported, not which modules are checked.
    """
    is_base = is_base_module if is_base_module is not None else classifier.is_base
    if is_live_module is not None:
        classifier = replace(classifier, live=is_live_module)
    excluded = frozenset(excluded_dependencies)

    def validate(graph: Graph, excluded_suffixes: Sequence[str]) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        for module in _checked_modules(graph, excluded_suffixes):
            # Live modules are covered by the live-to-live rule.
            if not is_base(module) or classifier.is_live(module):
                continue
            for dependency in _live_dependencies(module, classifier.is_live, excluded_suffixes, excluded):
                diagnostics.append(
                    BaseOrInterfaceModuleLiveDependency(module_name=module.name, live_dependency_name=dependency.name)
                )
        return diagnostics

    return Rule(
        id=BASE_OR_INTERFACE_MODULE_LIVE_DEPENDENCY,
        name="Base or Interface modules should not depend on Live modules",
        abstract=(
            "To keep the dependency graph flat and avoid depending on higher level, "
            "a Base or Interface Module should never depend on upper Live Modules"
        ),
        validate=validate,
    )


def _scanned_dependencies(module: Module, classifier: ModuleClassifier, check_products: bool) -> List[Dependency]:
    deps = [d for d in module.dependencies if check_products or d.is_internal]
    if classifier.is_ui_test_support(module):
        # UI test support modules wire Live implementations without importing them.
        deps = [d for d in deps if d.target_module is None or not classifier.is_live(d.target_module)]
    return [d for d in deps if d.requires_import]


def unused_dependencies(
    classifier: ModuleClassifier = DEFAULT_CLASSIFIER,
    excluded_dependencies: Iterable[str] = (),
    *,
    detector: Optional[UsageDetector] = None,
    check_products: bool = False,
) -> Rule:
    """Declared dependencies that no source file of the module imports."""
    usage = detector if detector is not None else RegexImportDetector()
    excluded = frozenset(excluded_dependencies)

    def validate(graph: Graph, excluded_suffixes: Sequence[str]) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        for module in _checked_modules(graph, excluded_suffixes):
            if classifier.is_feature(module):
                continue
            for dependency in _scanned_dependencies(module, classifier, check_products):
                if not _reportable(dependency, excluded_suffixes, excluded):
                    continue
                if not usage.is_used(dependency.name, module.path):
                    diagnostics.append(UnusedDependency(module_name=module.name, dependency_name=dependency.name))
        return diagnostics

    return Rule(
        id=UNUSED_DEPENDENCIES,
        name="Unused linked dependencies",
        abstract=UNUSED_DEPENDENCIES_ABSTRACT,
        validate=validate,
    )


RuleFactory = Callable[..., Rule]

RULE_FACTORIES: Dict[str, RuleFactory] = {
    LIVE_MODULE_LIVE_DEPENDENCY: live_module_live_dependency,
    BASE_OR_INTERFACE_MODULE_LIVE_DEPENDENCY: base_or_interface_module_live_dependency,
    UNUSED_DEPENDENCIES: unused_dependencies,
}

DEFAULT_RULE_IDS: tuple[str, ...] = (
    LIVE_MODULE_LIVE_DEPENDENCY,
    BASE_OR_INTERFACE_MODULE_LIVE_DEPENDENCY,
    UNUSED_DEPENDENCIES,
)


def default_rules(classifier: ModuleClassifier = DEFAULT_CLASSIFIER) -> List[Rule]:
    """The built-in rules in their default order."""
    return [RULE_FACTORIES[rule_id](classifier) for rule_id in DEFAULT_RULE_IDS]


def _string_option(value: Any, rule_id: str, key: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"lint.rule_options.{rule_id}.{key} must be a list of strings")
    return tuple(value)


def _factory_kwargs(rule_id: str, options: Mapping[str, Any]) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {}
    for key, value in options.items():
        if key == "excluded_dependencies":
            kwargs["excluded_dependencies"] = _string_option(value, rule_id, key)
        elif key == "check_products" and rule_id == UNUSED_DEPENDENCIES:
            if not isinstance(value, bool):
                raise ConfigError(f"lint.rule_options.{rule_id}.{key} must be a boolean")
            kwargs["check_products"] = value
        elif key == "source_extensions" and rule_id == UNUSED_DEPENDENCIES:
            kwargs["detector"] = RegexImportDetector(extensions=_string_option(value, rule_id, key))
        else:
            raise ConfigError(f"unknown option {key!r} for lint rule {rule_id!r}")
    return kwargs


def build_rules(
    rule_ids: Sequence[str] = DEFAULT_RULE_IDS,
    rule_options: Optional[Mapping[str, Mapping[str, Any]]] = None,
    classifier: ModuleClassifier = DEFAULT_CLASSIFIER,
) -> List[Rule]:
    """Instantiate registered rules by id, in the given order."""
    options = rule_options or {}
    rules: List[Rule] = []
    for rule_id in rule_ids:
        factory = RULE_FACTORIES.get(rule_id)
        if factory is None:
            known = ", ".join(sorted(RULE_FACTORIES))
            raise ConfigError(f"unknown lint rule {rule_id!r} (known: {known})")
        rules.append(factory(classifier, **_factory_kwargs(rule_id, options.get(rule_id, {}))))
    return rules
