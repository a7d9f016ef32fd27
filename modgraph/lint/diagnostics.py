"""Structured lint diagnostics produced by the built-in rules."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Protocol, runtime_checkable


@runtime_checkable
class Diagnostic(Protocol):
    """Anything a rule returns: a kind tag plus a human-readable message."""

    kind: str

    @property
    def message(self) -> str:
        ...


@dataclass(frozen=True)
class LiveModuleLiveDependency:
    module_name: str
    live_dependency_name: str
    kind: str = "liveModuleLiveDependency"

    @property
    def message(self) -> str:
        return f"{self.module_name} must not depend on Live Module {self.live_dependency_name}"

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "message": self.message}


@dataclass(frozen=True)
class BaseOrInterfaceModuleLiveDependency:
    module_name: str
    live_dependency_name: str
    kind: str = "baseOrInterfaceModuleLiveDependency"

    @property
    def message(self) -> str:
        return f"{self.module_name} must not depend on Live Module {self.live_dependency_name}"

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "message": self.message}


@dataclass(frozen=True)
class UnusedDependency:
    module_name: str
    dependency_name: str
    kind: str = "unusedDependencies"

    @property
    def message(self) -> str:
        return f"{self.module_name} is not using {self.dependency_name}"

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "message": self.message}


def diagnostic_to_dict(diagnostic: Diagnostic) -> Dict[str, Any]:
    to_dict = getattr(diagnostic, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {"kind": diagnostic.kind, "message": diagnostic.message}
