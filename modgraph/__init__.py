"""modgraph: module dependency graph analysis for Swift packages.

Selective testing (changed files -> affected modules -> test modules),
dependency lint rules, and Graphviz rendering.
"""

from modgraph.affected import resolve_affected_modules
from modgraph.graph import DEFAULT_CLASSIFIER, Dependency, Graph, Module, ModuleClassifier, ModuleKind
from modgraph.testmap import map_test_modules

__version__ = "0.4.0"

__all__ = [
    "DEFAULT_CLASSIFIER",
    "Dependency",
    "Graph",
    "Module",
    "ModuleClassifier",
    "ModuleKind",
    "__version__",
    "map_test_modules",
    "resolve_affected_modules",
]
