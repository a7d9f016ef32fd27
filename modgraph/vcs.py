"""git adapter: files changed on the current branch against a base branch."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, List

from modgraph.errors import VCSError

GIT_TIMEOUT = 30

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


def _git(args: List[str], cwd: Path, runner: Runner) -> str:
    try:
        r = runner(["git", *args], cwd=str(cwd), capture_output=True, text=True, timeout=GIT_TIMEOUT)
    except FileNotFoundError as exc:
        raise VCSError("git executable not found") from exc
    except subprocess.TimeoutExpired as exc:
        raise VCSError(f"git {args[0]}: timeout") from exc
    if r.returncode != 0:
        err = (r.stderr or r.stdout or "").strip() or f"exit {r.returncode}"
        raise VCSError(f"git {args[0]} failed: {err}")
    return r.stdout or ""


def list_changed_files(base_branch: str, cwd: Path, *, runner: Runner = subprocess.run) -> List[Path]:
    """Absolute paths of files changed in `origin/<base>...HEAD`."""
    root = Path(_git(["rev-parse", "--show-toplevel"], cwd, runner).strip())
    output = _git(["diff", f"origin/{base_branch}...HEAD", "--name-only"], cwd, runner)
    return [root / line.strip() for line in output.splitlines() if line.strip()]
