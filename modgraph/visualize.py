"""Render the module graph as Graphviz DOT source.

Image rasterization is left to `dot` itself, e.g.
`modgraph visualize . -o graph.dot && dot -Tpng graph.dot -o graph.png`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from modgraph.graph import Graph
from modgraph.graph.classify import has_excluded_suffix

FONT_NAME = "SF Mono Regular"


@dataclass(frozen=True)
class NodeStyle:
    fill_color: str
    shape: str

    def attributes(self) -> str:
        return f'style=filled, fillcolor="{self.fill_color}", shape={self.shape}, fontname="{FONT_NAME}"'


INTERFACE_STYLE = NodeStyle("lightblue", "rectangle")
LIVE_STYLE = NodeStyle("coral", "box3d")
THIRD_PARTY_STYLE = NodeStyle("aquamarine", "oval")
TEST_STYLE = NodeStyle("green", "octagon")
TEST_SUPPORT_STYLE = NodeStyle("green2", "trapezium")


def node_style(name: str) -> NodeStyle:
    """Style derived from the module name; checked in this order."""
    if name.endswith("Tests"):
        return TEST_STYLE
    if name.endswith("Live") or name.endswith("Feature"):
        return LIVE_STYLE
    if name.endswith("TestSupport"):
        return TEST_SUPPORT_STYLE
    return INTERFACE_STYLE


@dataclass(frozen=True)
class VisualizeOptions:
    excluded_suffixes: Sequence[str] = ()
    focused_module: Optional[str] = None
    exclude_third_party: bool = False
    rank_spacing: float = 3.0


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _edge_color(source: str, target: str, focused: Optional[str]) -> str:
    if focused is None:
        return "gray"
    if focused in (source, target):
        return "red"
    return "lightgray"


def render_dot(graph: Graph, options: VisualizeOptions = VisualizeOptions()) -> str:
    nodes: Dict[str, NodeStyle] = {}
    edges: List[str] = []
    excluded = options.excluded_suffixes
    focused = options.focused_module

    for module in graph.modules:
        if has_excluded_suffix(module.name, excluded):
            continue
        nodes.setdefault(module.name, node_style(module.name))
        if not options.exclude_third_party:
            for product in graph.external_dependencies_for(module.name):
                nodes.setdefault(product.name, THIRD_PARTY_STYLE)
                color = "lightgray" if focused is not None else "gray"
                edges.append(f"  {_quote(module.name)} -> {_quote(product.name)} [color={color}];")
        for dependency in module.module_dependencies():
            if has_excluded_suffix(dependency.name, excluded):
                continue
            nodes.setdefault(dependency.name, node_style(dependency.name))
            color = _edge_color(module.name, dependency.name, focused)
            edges.append(f"  {_quote(module.name)} -> {_quote(dependency.name)} [color={color}];")

    title = graph.name or "modules"
    lines = [f"digraph {_quote(title)} {{", f"  ranksep={options.rank_spacing:g};", ""]
    lines.extend(f"  {_quote(name)} [{nodes[name].attributes()}];" for name in sorted(nodes))
    lines.append("")
    lines.extend(edges)
    lines.append("}")
    return "\n".join(lines) + "\n"
