"""Writing command results to files."""

from __future__ import annotations

import os
from pathlib import Path

from modgraph.errors import OutputWriteError


def with_default_suffix(path: Path, suffix: str = ".txt") -> Path:
    """Append `suffix` when the path has none (lint_output -> lint_output.txt)."""
    return path if path.suffix else path.with_name(path.name + suffix)


def write_text_atomic(path: Path, content: str) -> Path:
    """Write through a temp file and rename, so readers never see partial output."""
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(content, encoding="utf-8")
        os.replace(tmp, path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise OutputWriteError(f"Failed to save output file {path} with error: {exc}") from exc
    return path
