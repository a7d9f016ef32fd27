"""Graph model and naming-convention classification."""

from .classify import (
    DEFAULT_CLASSIFIER,
    ModuleClassifier,
    ModulePredicate,
    has_excluded_suffix,
)
from .model import Dependency, Graph, Module, ModuleKind, ProductReference

__all__ = [
    "DEFAULT_CLASSIFIER",
    "Dependency",
    "Graph",
    "Module",
    "ModuleClassifier",
    "ModuleKind",
    "ModulePredicate",
    "ProductReference",
    "has_excluded_suffix",
]
