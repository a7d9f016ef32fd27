"""Map affected modules to the test modules that should run."""

from __future__ import annotations

from typing import Sequence

from modgraph.graph import Graph, Module


def map_test_modules(affected: Sequence[Module], graph: Graph) -> list[Module]:
    """Affected test modules plus every test module depending on an affected non-test module.

    Test modules are collected following the order of `affected`, so the tests
    of changed modules come before the tests of their dependents. Deduplicated
    by module name, first occurrence wins.
    """
    selected = [m for m in affected if m.is_test]
    non_test = [m for m in affected if not m.is_test]
    if non_test:
        test_modules = graph.test_modules()
        for module in non_test:
            selected.extend(t for t in test_modules if t.depends_on_any((module,)))

    seen: set[str] = set()
    unique: list[Module] = []
    for module in selected:
        if module.name in seen:
            continue
        seen.add(module.name)
        unique.append(module)
    return unique
