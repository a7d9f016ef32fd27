"""Tests for modgraph.graph.model (modules, dependencies, graph queries)."""
from pathlib import Path

import pytest

from modgraph.graph import Dependency, Graph, Module, ModuleKind, ProductReference


def _module(name: str, *deps: Dependency, kind: ModuleKind = ModuleKind.LIBRARY) -> Module:
    return Module(name=name, kind=kind, path=Path("/pkg/Sources") / name, dependencies=tuple(deps))


def test_dependency_requires_exactly_one_target() -> None:
    with pytest.raises(ValueError):
        Dependency()
    base = _module("Base")
    with pytest.raises(ValueError):
        Dependency(target_module=base, target_product=ProductReference("Alamofire"))


def test_dependency_name_and_kind() -> None:
    base = _module("Base")
    internal = Dependency.on_module(base)
    external = Dependency.on_product("Alamofire", "alamofire")
    assert internal.name == "Base" and internal.is_internal
    assert external.name == "Alamofire" and not external.is_internal
    assert external.target_product == ProductReference("Alamofire", "alamofire")


def test_macro_and_plugin_dependencies_do_not_require_import() -> None:
    macro = _module("Macros", kind=ModuleKind.MACRO)
    plugin = _module("Lint", kind=ModuleKind.PLUGIN)
    assert not Dependency.on_module(macro).requires_import
    assert not Dependency.on_module(plugin).requires_import
    assert Dependency.on_module(_module("Base")).requires_import
    assert Dependency.on_product("Alamofire").requires_import


def test_modules_hash_by_identity() -> None:
    a1 = _module("A")
    a2 = _module("A")
    assert a1 != a2
    assert len({a1, a2}) == 2


def test_graph_queries() -> None:
    base = _module("Base", Dependency.on_product("Logging"))
    feature = _module("Feature", Dependency.on_module(base), Dependency.on_product("Alamofire"), Dependency.on_product("Logging"))
    tests = _module("FeatureTests", Dependency.on_module(feature), kind=ModuleKind.TEST)
    graph = Graph(modules=(base, feature, tests), name="Pkg")

    assert len(graph) == 3
    assert graph.module_named("Feature") is feature
    assert graph.module_named("Nope") is None
    assert graph.module_names() == ["Base", "Feature", "FeatureTests"]
    assert graph.test_modules() == [tests]
    assert graph.dependents_of(base) == [feature]
    assert feature.module_dependencies() == [base]
    assert graph.resolve(feature.dependencies[0]) is base
    assert graph.resolve(feature.dependencies[1]) is None


def test_external_dependencies_are_deduplicated_and_sorted() -> None:
    base = _module("Base", Dependency.on_product("Logging"))
    feature = _module("Feature", Dependency.on_product("Alamofire"), Dependency.on_product("Logging"))
    graph = Graph(modules=(base, feature))

    names = [p.name for p in graph.external_dependencies(["Base", "Feature", "Unknown"])]
    assert names == ["Alamofire", "Logging"]
    assert graph.external_dependencies(["Unknown"]) == []
    assert [p.name for p in graph.external_dependencies_for("Base")] == ["Logging"]


def test_graph_classify_by_module_or_name() -> None:
    live = _module("NetworkingLive")
    graph = Graph(modules=(live,))
    assert "live" in graph.classify(live)
    assert graph.classify("NetworkingLive") == graph.classify(live)
    assert graph.classify("Unknown") == []


def test_graph_rejects_duplicate_module_names() -> None:
    with pytest.raises(ValueError, match="duplicate module name"):
        Graph(modules=(_module("Core"), _module("Core")))
