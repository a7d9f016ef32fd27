"""Pytest configuration and fixture packages.

Ensures project root is in sys.path for top-level modules (modgraph_cli, cli).
Fixture packages are written as a cached describe document
(.modgraph/describe.json) plus Swift sources, so no swift toolchain is needed.
"""
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from modgraph.graph import Graph  # noqa: E402
from modgraph.loader import DESCRIBE_CACHE, graph_from_description  # noqa: E402


def target(
    name: str,
    deps: Optional[List[str]] = None,
    *,
    type: str = "library",
    path: Optional[str] = None,
    products: Optional[List[object]] = None,
) -> Dict[str, object]:
    default_path = f"Tests/{name}" if type == "test" else f"Sources/{name}"
    return {
        "name": name,
        "type": type,
        "path": path or default_path,
        "target_dependencies": list(deps or []),
        "product_dependencies": list(products or []),
    }


def write_package(
    root: Path,
    name: str,
    targets: List[Dict[str, object]],
    sources: Optional[Dict[str, str]] = None,
) -> Path:
    """Write describe.json cache and source files; return the package dir."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "Package.swift").write_text("// swift-tools-version:5.9\n", encoding="utf-8")
    cache = root / DESCRIBE_CACHE
    cache.parent.mkdir(parents=True, exist_ok=True)
    cache.write_text(json.dumps({"name": name, "targets": targets}, indent=2), encoding="utf-8")
    for rel, content in (sources or {}).items():
        f = root / rel
        f.parent.mkdir(parents=True, exist_ok=True)
        f.write_text(content, encoding="utf-8")
    return root


LINT_TARGETS = [
    target("BaseModule"),
    target("InterfaceModule", ["BaseModule"]),
    target("FeatureModule", ["InterfaceModule", "NetworkingLive"]),
    target("NetworkingLive", ["InterfaceModule"]),
    target("StorageLive", ["NetworkingLive"]),
    target("ModuleWithUnusedDep", ["BaseModule", "InterfaceModule"]),
    target("BaseModuleTests", ["BaseModule"], type="test"),
]

LINT_SOURCES = {
    "Sources/BaseModule/Base.swift": "public struct Base {}\n",
    "Sources/InterfaceModule/Interface.swift": "import BaseModule\n\npublic protocol Networking {}\n",
    "Sources/FeatureModule/Feature.swift": "import InterfaceModule\nimport NetworkingLive\n",
    "Sources/NetworkingLive/Live.swift": "import InterfaceModule\n\npublic struct NetworkingLive: Networking {}\n",
    "Sources/StorageLive/Storage.swift": "import Foundation\nimport NetworkingLive\n",
    "Sources/ModuleWithUnusedDep/Thing.swift": "import InterfaceModule\n",
    "Tests/BaseModuleTests/BaseTests.swift": "import XCTest\n@testable import BaseModule\n",
}

SCENARIO_A_TARGETS = [
    target("TargetA", ["TargetB"]),
    target("TargetB"),
    target("TargetATests", ["TargetA"], type="test"),
    target("TargetBTests", ["TargetB"], type="test"),
]

SCENARIO_A_SOURCES = {
    "Sources/TargetA/A.swift": "import TargetB\n",
    "Sources/TargetB/B.swift": "public struct B {}\n",
    "Tests/TargetATests/ATests.swift": "@testable import TargetA\n",
    "Tests/TargetBTests/BTests.swift": "@testable import TargetB\n",
}


def build_graph(root: Path, name: str, targets: List[Dict[str, object]]) -> Graph:
    return graph_from_description({"name": name, "targets": targets}, root)


@pytest.fixture
def lint_package(tmp_path: Path) -> Path:
    return write_package(tmp_path / "LintFixture", "LintFixture", LINT_TARGETS, LINT_SOURCES)


@pytest.fixture
def lint_graph(lint_package: Path) -> Graph:
    return build_graph(lint_package.resolve(), "LintFixture", LINT_TARGETS)


@pytest.fixture
def scenario_a_package(tmp_path: Path) -> Path:
    return write_package(tmp_path / "ScenarioA", "ScenarioA", SCENARIO_A_TARGETS, SCENARIO_A_SOURCES)


@pytest.fixture
def scenario_a_graph(scenario_a_package: Path) -> Graph:
    return build_graph(scenario_a_package.resolve(), "ScenarioA", SCENARIO_A_TARGETS)


@pytest.fixture(autouse=True)
def _reset_modgraph_logging():
    """CLI runs attach a stderr handler to the modgraph logger; drop it after each test."""
    yield
    import modgraph.logging as mlog

    root = logging.getLogger("modgraph")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)
    mlog._configured = False
