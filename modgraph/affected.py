"""Affected-module resolution for selective testing.

Maps changed files to the modules owning them, then adds the modules that
directly depend on those. A change to the lock file invalidates everything.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Optional, Sequence

from modgraph.errors import InputError
from modgraph.graph import DEFAULT_CLASSIFIER, Graph, Module, ModuleClassifier, ModuleKind
from modgraph.logging import get_logger

LOCK_FILE_EXTENSION = ".resolved"

_log = get_logger("affected")


def normalize_changed_path(raw: "str | os.PathLike[str]") -> Path:
    """Validate one changed path and return it lexically normalized.

    Raises InputError for empty, NUL-containing or relative paths.
    """
    text = os.fspath(raw)
    if not text or not text.strip():
        raise InputError("changed file path is empty")
    if "\x00" in text:
        raise InputError(f"changed file path contains a NUL byte: {text!r}")
    if not os.path.isabs(text):
        raise InputError(f"changed file path must be absolute: {text}")
    return Path(os.path.normpath(text))


def is_lock_file(path: Path) -> bool:
    return path.suffix == LOCK_FILE_EXTENSION


def _is_within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


def owning_module(graph: Graph, path: Path) -> Optional[Module]:
    """First module (declaration order) whose source root contains `path`."""
    candidates = [m for m in graph.modules if _is_within(path, Path(os.path.normpath(m.path)))]
    if not candidates:
        return None
    if len(candidates) > 1:
        names = ", ".join(m.name for m in candidates)
        _log.warning("modgraph: %s is inside nested source roots (%s); using %s", path, names, candidates[0].name)
    return candidates[0]


def _unique(modules: Iterable[Module]) -> list[Module]:
    seen: set[int] = set()
    out: list[Module] = []
    for module in modules:
        if id(module) in seen:
            continue
        seen.add(id(module))
        out.append(module)
    return out


def changed_modules(graph: Graph, changed_files: Sequence[Path]) -> list[Module]:
    if any(is_lock_file(p) for p in changed_files):
        _log.info("modgraph: lock file changed, treating every module as changed")
        return list(graph.modules)
    owners = (owning_module(graph, path) for path in changed_files)
    return _unique(m for m in owners if m is not None)


def direct_dependents(
    graph: Graph,
    changed: Sequence[Module],
    excluded_suffixes: Sequence[str] = (),
    classifier: ModuleClassifier = DEFAULT_CLASSIFIER,
) -> list[Module]:
    """Non-test, non-system modules that depend on a changed module.

    Modules whose name ends in an excluded suffix are never added here.
    """
    if not changed:
        return []
    changed_ids = {id(m) for m in changed}
    dependents: list[Module] = []
    for module in graph.modules:
        if module.kind in (ModuleKind.TEST, ModuleKind.SYSTEM):
            continue
        if id(module) in changed_ids:
            continue
        if classifier.has_excluded_suffix(module, excluded_suffixes):
            continue
        if module.depends_on_any(changed):
            dependents.append(module)
    return dependents


def resolve_affected_modules(
    graph: Graph,
    changed_files: Iterable["str | os.PathLike[str]"],
    *,
    excluded_suffixes: Sequence[str] = (),
    classifier: ModuleClassifier = DEFAULT_CLASSIFIER,
) -> list[Module]:
    """Modules containing a changed file, followed by their direct dependents."""
    paths = [normalize_changed_path(p) for p in changed_files]
    if not paths:
        return []
    changed = changed_modules(graph, paths)
    dependents = direct_dependents(graph, changed, excluded_suffixes, classifier)
    return _unique([*changed, *dependents])
