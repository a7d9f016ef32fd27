"""Explicit run context passed from the entry point into runners."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional


@dataclass(frozen=True)
class RunContext:
    """Everything a run may need from its environment.

    Built once by the CLI; nothing below the entry point reads os.environ.
    """

    cwd: Path = field(default_factory=Path.cwd)
    is_ci: bool = False
    use_color: Optional[bool] = None

    @classmethod
    def from_environ(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        cwd: Optional[Path] = None,
        use_color: Optional[bool] = None,
    ) -> "RunContext":
        env = os.environ if environ is None else environ
        return cls(
            cwd=(cwd or Path.cwd()).resolve(),
            is_ci=bool(env.get("CI")),
            use_color=use_color,
        )

    def resolve(self, path: "str | os.PathLike[str]") -> Path:
        """Absolute path for user input, relative paths anchored at cwd."""
        p = Path(path)
        return p if p.is_absolute() else self.cwd / p
