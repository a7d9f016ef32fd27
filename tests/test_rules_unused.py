"""Tests for the unused-dependencies rule."""
from pathlib import Path

from conftest import build_graph, target
from modgraph.lint import UnusedDependency, unused_dependencies


def _write(root: Path, rel: str, content: str) -> None:
    f = root / rel
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(content, encoding="utf-8")


def test_unused_dependency_is_reported(lint_graph) -> None:
    diagnostics = unused_dependencies()(lint_graph)
    assert diagnostics == [UnusedDependency(module_name="ModuleWithUnusedDep", dependency_name="BaseModule")]
    assert diagnostics[0].message == "ModuleWithUnusedDep is not using BaseModule"


def test_excluded_suffix_silences_unused(lint_graph) -> None:
    assert unused_dependencies()(lint_graph, ["BaseModule"]) == []


def test_import_anywhere_in_sources_counts_as_used(lint_package: Path, lint_graph) -> None:
    _write(lint_package, "Sources/ModuleWithUnusedDep/Nested/Extra.swift", "import struct BaseModule.Base\n")
    assert unused_dependencies()(lint_graph) == []


def test_missing_source_directory_flags_dependencies(tmp_path: Path) -> None:
    graph = build_graph(tmp_path, "Pkg", [target("Core"), target("Consumer", ["Core"])])
    assert unused_dependencies()(graph) == [UnusedDependency("Consumer", "Core")]


def test_commented_import_still_counts_as_used(tmp_path: Path) -> None:
    graph = build_graph(tmp_path, "Pkg", [target("Core"), target("Consumer", ["Core"])])
    _write(tmp_path, "Sources/Consumer/File.swift", "// import Core\n")
    assert unused_dependencies()(graph) == []


def test_feature_modules_are_skipped(tmp_path: Path) -> None:
    graph = build_graph(tmp_path, "Pkg", [target("Core"), target("SearchFeature", ["Core"])])
    assert unused_dependencies()(graph) == []


def test_ui_test_support_skips_live_dependencies(tmp_path: Path) -> None:
    graph = build_graph(
        tmp_path,
        "Pkg",
        [target("Core"), target("NetworkingLive"), target("CheckoutUITestSupport", ["NetworkingLive", "Core"])],
    )
    _write(tmp_path, "Sources/CheckoutUITestSupport/Support.swift", "import Foundation\n")
    assert unused_dependencies()(graph) == [UnusedDependency("CheckoutUITestSupport", "Core")]


def test_macro_dependencies_are_not_scanned(tmp_path: Path) -> None:
    graph = build_graph(tmp_path, "Pkg", [target("Macros", type="macro"), target("Consumer", ["Macros"])])
    _write(tmp_path, "Sources/Consumer/File.swift", "@Observable final class Model {}\n")
    assert unused_dependencies()(graph) == []


def test_products_are_checked_only_when_enabled(tmp_path: Path) -> None:
    graph = build_graph(tmp_path, "Pkg", [target("Consumer", products=["Alamofire"])])
    _write(tmp_path, "Sources/Consumer/File.swift", "import Foundation\n")
    assert unused_dependencies()(graph) == []
    assert unused_dependencies(check_products=True)(graph) == [UnusedDependency("Consumer", "Alamofire")]


def test_excluded_dependencies(lint_graph) -> None:
    assert unused_dependencies(excluded_dependencies=["BaseModule"])(lint_graph) == []


def test_custom_detector(lint_graph) -> None:
    class _Always:
        def is_used(self, dependency_name: str, source_dir: Path) -> bool:
            return True

    assert unused_dependencies(detector=_Always())(lint_graph) == []
