"""Module dependency graph: modules, dependencies, external products.

A Graph is built once per analysis by a loader and never mutated afterwards.
Modules compare and hash by identity, so bookkeeping never merges two modules
that merely share a name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from .classify import ModuleClassifier


class ModuleKind(str, Enum):
    LIBRARY = "library"
    EXECUTABLE = "executable"
    TEST = "test"
    SYSTEM = "system"
    MACRO = "macro"
    PLUGIN = "plugin"
    SNIPPET = "snippet"
    OTHER = "other"


# Module kinds that are linked without a language-level import clause.
_IMPORTLESS_KINDS = frozenset({ModuleKind.MACRO, ModuleKind.PLUGIN})


@dataclass(frozen=True)
class ProductReference:
    """External (third-party) product a module links against."""

    name: str
    package: Optional[str] = None


@dataclass(frozen=True, eq=False)
class Module:
    name: str
    kind: ModuleKind
    path: Path
    dependencies: tuple["Dependency", ...] = ()

    @property
    def is_test(self) -> bool:
        return self.kind is ModuleKind.TEST

    def module_dependencies(self) -> list["Module"]:
        """Internal modules this module depends on, in declaration order."""
        return [d.target_module for d in self.dependencies if d.target_module is not None]

    def product_dependencies(self) -> list[ProductReference]:
        return [d.target_product for d in self.dependencies if d.target_product is not None]

    def depends_on_any(self, modules: Iterable["Module"]) -> bool:
        targets = {id(m) for m in modules}
        return any(id(dep) in targets for dep in self.module_dependencies())

    def __repr__(self) -> str:
        return f"Module({self.name!r}, {self.kind.value})"


@dataclass(frozen=True)
class Dependency:
    """Edge to either an internal module or an external product, never both."""

    target_module: Optional[Module] = None
    target_product: Optional[ProductReference] = None

    def __post_init__(self) -> None:
        if (self.target_module is None) == (self.target_product is None):
            raise ValueError("Dependency needs exactly one of target_module / target_product")

    @classmethod
    def on_module(cls, module: Module) -> "Dependency":
        return cls(target_module=module)

    @classmethod
    def on_product(cls, name: str, package: Optional[str] = None) -> "Dependency":
        return cls(target_product=ProductReference(name=name, package=package))

    @property
    def name(self) -> str:
        if self.target_module is not None:
            return self.target_module.name
        assert self.target_product is not None
        return self.target_product.name

    @property
    def is_internal(self) -> bool:
        return self.target_module is not None

    @property
    def requires_import(self) -> bool:
        """False for macro/plugin targets, which are used without an import clause."""
        if self.target_module is None:
            return True
        return self.target_module.kind not in _IMPORTLESS_KINDS


@dataclass(frozen=True)
class Graph:
    """All modules declared by one manifest ("package"); module names are unique."""

    modules: tuple[Module, ...]
    name: str = ""
    root: Optional[Path] = None
    _by_name: dict[str, Module] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name: dict[str, Module] = {}
        for module in self.modules:
            if module.name in by_name:
                raise ValueError(f"duplicate module name in graph: {module.name}")
            by_name[module.name] = module
        object.__setattr__(self, "_by_name", by_name)

    def module_named(self, name: str) -> Optional[Module]:
        return self._by_name.get(name)

    def module_names(self) -> list[str]:
        return [m.name for m in self.modules]

    def resolve(self, dependency: Dependency) -> Optional[Module]:
        """Concrete module behind a dependency, None for external products."""
        return dependency.target_module

    def test_modules(self) -> list[Module]:
        return [m for m in self.modules if m.is_test]

    def dependents_of(self, module: Module) -> list[Module]:
        """Modules declaring a direct dependency on `module`."""
        return [m for m in self.modules if m.depends_on_any((module,))]

    def external_dependencies(self, module_names: Iterable[str]) -> list[ProductReference]:
        """Products used by the named modules, deduplicated and sorted by name.

        Unknown names contribute nothing.
        """
        wanted = set(module_names)
        seen: set[ProductReference] = set()
        products: list[ProductReference] = []
        for module in self.modules:
            if module.name not in wanted:
                continue
            for product in module.product_dependencies():
                if product not in seen:
                    seen.add(product)
                    products.append(product)
        return sorted(products, key=lambda p: (p.name, p.package or ""))

    def external_dependencies_for(self, module_name: str) -> list[ProductReference]:
        return self.external_dependencies([module_name])

    def classify(self, module: "Module | str", classifier: Optional["ModuleClassifier"] = None) -> list[str]:
        """Naming-convention roles of a module (or module name); unknown names have none."""
        from .classify import DEFAULT_CLASSIFIER

        target = self.module_named(module) if isinstance(module, str) else module
        if target is None:
            return []
        return (classifier or DEFAULT_CLASSIFIER).roles(target)

    def __len__(self) -> int:
        return len(self.modules)
