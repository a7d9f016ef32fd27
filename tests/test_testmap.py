"""Tests for mapping affected modules to test modules."""
from pathlib import Path

from conftest import build_graph, target
from modgraph.affected import resolve_affected_modules
from modgraph.testmap import map_test_modules


def _names(modules) -> list:
    return [m.name for m in modules]


def test_tests_of_changed_module_come_first(scenario_a_graph, scenario_a_package: Path) -> None:
    affected = resolve_affected_modules(scenario_a_graph, [scenario_a_package.resolve() / "Sources/TargetB/B.swift"])
    assert _names(map_test_modules(affected, scenario_a_graph)) == ["TargetBTests", "TargetATests"]


def test_empty_affected_maps_to_nothing(scenario_a_graph) -> None:
    assert map_test_modules([], scenario_a_graph) == []


def test_affected_test_module_is_kept(scenario_a_graph) -> None:
    a_tests = scenario_a_graph.module_named("TargetATests")
    assert _names(map_test_modules([a_tests], scenario_a_graph)) == ["TargetATests"]


def test_duplicates_are_removed_by_name(scenario_a_graph) -> None:
    b = scenario_a_graph.module_named("TargetB")
    b_tests = scenario_a_graph.module_named("TargetBTests")
    assert _names(map_test_modules([b_tests, b, b], scenario_a_graph)) == ["TargetBTests"]


def test_only_direct_test_dependents_are_selected(tmp_path: Path) -> None:
    graph = build_graph(
        tmp_path,
        "Pkg",
        [
            target("Core"),
            target("Feature", ["Core"]),
            target("CoreTests", ["Core"], type="test"),
            target("FeatureTests", ["Feature"], type="test"),
            target("UnrelatedTests", type="test"),
        ],
    )
    core = graph.module_named("Core")
    assert _names(map_test_modules([core], graph)) == ["CoreTests"]
