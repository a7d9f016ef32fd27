"""Graph rendering handler: `modgraph visualize`."""

from __future__ import annotations

from typing import Any

from modgraph.errors import ModGraphError
from modgraph.output import write_text_atomic
from modgraph.visualize import VisualizeOptions, render_dot

from .core_handlers_common import _check_path, _clog, _config_for, _err, _graph_loader, _package_dir, _run_context


def handle_visualize(args: Any) -> int:
    ctx = _run_context(args)
    package_dir = _package_dir(args, ctx)
    if _check_path(package_dir) != 0:
        return 1
    try:
        config = _config_for(args, package_dir, ctx)
        graph = _graph_loader(args, package_dir, ctx)()
        focus = getattr(args, "focus", None)
        if focus and graph.module_named(focus) is None:
            _clog().warning("modgraph: focused module %s is not part of the graph", focus)
        dot = render_dot(
            graph,
            VisualizeOptions(
                excluded_suffixes=config.excluded_suffixes,
                focused_module=focus,
                exclude_third_party=bool(getattr(args, "exclude_third_party", False)),
                rank_spacing=float(getattr(args, "rank_spacing", 3.0)),
            ),
        )
        output = getattr(args, "output", None)
        if output is None:
            print(dot, end="")
        else:
            path = write_text_atomic(ctx.resolve(output), dot)
            print(f"✅ Successfully generated the dependency graph at {path}")
    except ModGraphError as exc:
        _err(str(exc))
        return 1
    return 0
