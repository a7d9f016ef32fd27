"""Usage detection for the unused-dependency rule.

This is a textual heuristic, not an import resolver: commented-out imports and
string literals that look like imports count as usages.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, List, Protocol, Set, runtime_checkable

from modgraph.logging import get_logger

DEFAULT_SOURCE_EXTENSIONS = (".swift",)
IMPORT_QUALIFIERS = ("enum", "struct", "class")

_log = get_logger("lint.usage")


@runtime_checkable
class UsageDetector(Protocol):
    def is_used(self, dependency_name: str, source_dir: Path) -> bool:
        """Return True when any source file under source_dir uses dependency_name."""
        ...


def import_pattern(dependency_name: str) -> "re.Pattern[str]":
    qualifiers = "|".join(f"{q} " for q in IMPORT_QUALIFIERS)
    return re.compile(rf"import ({qualifiers})?(\b{re.escape(dependency_name)}\b)")


def find_source_files(directory: Path, extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS) -> List[Path]:
    """Source files under directory (recursive), sorted for deterministic scans."""
    exts = tuple(extensions)
    files: List[Path] = []
    for dirpath, _dirnames, filenames in os.walk(directory):
        for filename in filenames:
            if filename.endswith(exts):
                files.append(Path(dirpath) / filename)
    files.sort()
    return files


class RegexImportDetector:
    """Looks for `import [enum |struct |class ]<Name>` in the module's sources."""

    def __init__(self, extensions: Iterable[str] = DEFAULT_SOURCE_EXTENSIONS) -> None:
        self.extensions = tuple(extensions)
        self._missing_reported: Set[Path] = set()

    def source_files(self, source_dir: Path) -> List[Path]:
        if not Path(source_dir).is_dir():
            if source_dir not in self._missing_reported:
                self._missing_reported.add(source_dir)
                _log.warning(
                    "modgraph: no source directory at %s; its declared dependencies will be reported as unused",
                    source_dir,
                )
            return []
        return find_source_files(Path(source_dir), self.extensions)

    def is_used(self, dependency_name: str, source_dir: Path) -> bool:
        pattern = import_pattern(dependency_name)
        for path in self.source_files(source_dir):
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                _log.debug("modgraph: skipping unreadable source %s", path)
                continue
            if pattern.search(content):
                return True
        return False
