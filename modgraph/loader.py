"""Build a Graph from `swift package describe --type json` output.

The describe document lists targets with their type, path and dependencies.
Modules are materialized in dependency order so every Dependency points at a
real Module object; cycles and dangling target names are rejected here.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from modgraph.errors import GraphLoadError, InputError
from modgraph.graph import Dependency, Graph, Module, ModuleKind
from modgraph.logging import get_logger

DESCRIBE_CACHE = Path(".modgraph") / "describe.json"
DESCRIBE_TIMEOUT = 300

_KIND_BY_TYPE: Dict[str, ModuleKind] = {
    "library": ModuleKind.LIBRARY,
    "regular": ModuleKind.LIBRARY,
    "executable": ModuleKind.EXECUTABLE,
    "test": ModuleKind.TEST,
    "system-target": ModuleKind.SYSTEM,
    "system": ModuleKind.SYSTEM,
    "macro": ModuleKind.MACRO,
    "plugin": ModuleKind.PLUGIN,
    "snippet": ModuleKind.SNIPPET,
}

_log = get_logger("loader")

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


def module_kind(raw_type: Optional[str]) -> ModuleKind:
    return _KIND_BY_TYPE.get((raw_type or "").strip().lower(), ModuleKind.OTHER)


def _target_list(data: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    targets = data.get("targets")
    if not isinstance(targets, list):
        raise GraphLoadError("package description has no 'targets' list")
    for target in targets:
        if not isinstance(target, dict) or not isinstance(target.get("name"), str):
            raise GraphLoadError(f"malformed target entry: {target!r}")
    return targets


def _package_root(data: Mapping[str, Any], package_dir: Path) -> Path:
    """Targets are anchored at the analysed package, not the recorded checkout."""
    root = Path(package_dir)
    recorded = data.get("path")
    if recorded and Path(recorded) != root:
        _log.warning(
            "modgraph: package description was generated at %s; resolving targets against %s",
            recorded,
            root,
        )
    return root


def _target_path(target: Mapping[str, Any], root: Path, recorded: Optional[str]) -> Path:
    raw = Path(target.get("path", f"Sources/{target['name']}"))
    if raw.is_absolute() and recorded:
        try:
            raw = raw.relative_to(recorded)
        except ValueError:
            return raw
    return root / raw


def graph_from_description(data: Mapping[str, Any], package_dir: Path) -> Graph:
    """Materialize a Graph from a parsed describe document."""
    root = _package_root(data, package_dir)
    recorded = data.get("path")
    targets = _target_list(data)
    by_name: Dict[str, Mapping[str, Any]] = {}
    for target in targets:
        name = target["name"]
        if name in by_name:
            raise GraphLoadError(f"duplicate module name: {name}")
        by_name[name] = target

    built: Dict[str, Module] = {}
    visiting: List[str] = []

    def build(name: str) -> Module:
        if name in built:
            return built[name]
        if name in visiting:
            cycle = " -> ".join(visiting[visiting.index(name):] + [name])
            raise GraphLoadError(f"dependency cycle: {cycle}")
        target = by_name.get(name)
        if target is None:
            raise GraphLoadError(f"unknown target dependency: {name} (required by {visiting[-1]})")
        visiting.append(name)
        deps: List[Dependency] = [Dependency.on_module(build(dep)) for dep in target.get("target_dependencies", [])]
        for product in target.get("product_dependencies", []):
            if isinstance(product, dict):
                deps.append(Dependency.on_product(product.get("name", ""), product.get("package")))
            else:
                deps.append(Dependency.on_product(str(product)))
        visiting.pop()
        module = Module(
            name=name,
            kind=module_kind(target.get("type")),
            path=_target_path(target, root, recorded),
            dependencies=tuple(deps),
        )
        built[name] = module
        return module

    modules = tuple(build(target["name"]) for target in targets)
    return Graph(modules=modules, name=str(data.get("name", "")), root=root)


def read_description(path: Path) -> Dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise GraphLoadError(f"cannot read package description {path}: {exc}") from exc


def describe_package(package_dir: Path, *, runner: Runner = subprocess.run) -> Dict[str, Any]:
    """Run `swift package describe --type json` in package_dir."""
    cmd = ["swift", "package", "describe", "--type", "json"]
    try:
        r = runner(cmd, cwd=str(package_dir), capture_output=True, text=True, timeout=DESCRIBE_TIMEOUT)
    except FileNotFoundError as exc:
        raise GraphLoadError("swift toolchain not found; pass --describe-file instead") from exc
    except subprocess.TimeoutExpired as exc:
        raise GraphLoadError(f"swift package describe timed out after {DESCRIBE_TIMEOUT}s") from exc
    if r.returncode != 0:
        err = (r.stderr or r.stdout or "").strip() or f"exit {r.returncode}"
        raise GraphLoadError(f"swift package describe failed: {err}")
    try:
        return json.loads(r.stdout)
    except json.JSONDecodeError as exc:
        raise GraphLoadError(f"swift package describe returned invalid JSON: {exc}") from exc


def load_graph(
    package_dir: Path,
    *,
    describe_file: Optional[Path] = None,
    runner: Runner = subprocess.run,
) -> Graph:
    """Load the graph for the package at package_dir.

    Order: explicit describe_file > cached .modgraph/describe.json > swift.
    """
    package_dir = Path(package_dir)
    if not package_dir.is_dir():
        raise InputError(f"package directory does not exist: {package_dir}")
    cached = package_dir / DESCRIBE_CACHE
    if describe_file is not None:
        data = read_description(describe_file)
    elif cached.is_file():
        _log.debug("modgraph: using cached package description %s", cached)
        data = read_description(cached)
    else:
        _log.debug("modgraph: describing package at %s", package_dir)
        data = describe_package(package_dir, runner=runner)
    graph = graph_from_description(data, package_dir.resolve())
    _log.debug("modgraph: loaded %d modules from %s", len(graph), graph.name or package_dir)
    return graph
