"""Selective testing: changed files -> affected modules -> test modules to run."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence, TextIO

from modgraph.affected import resolve_affected_modules
from modgraph.context import RunContext
from modgraph.graph import DEFAULT_CLASSIFIER, Graph, Module, ModuleClassifier
from modgraph.logging import get_logger
from modgraph.output import write_text_atomic
from modgraph.testmap import map_test_modules

OUTPUT_FILE_NAME = "output.txt"

_log = get_logger("tests")


class OutputMode(str, Enum):
    # Single line for `xcodebuild -only-testing` / fastlane scan, e.g. "ATests,BTests".
    TEXT_DUMP = "textDump"
    TEXT_FILE = "textFile"


@dataclass(frozen=True)
class SelectionResult:
    changed_files: tuple[Path, ...] = ()
    affected_modules: tuple[Module, ...] = ()
    test_modules: tuple[Module, ...] = ()

    @property
    def affected_names(self) -> list[str]:
        return [m.name for m in self.affected_modules]

    @property
    def test_names(self) -> list[str]:
        return [m.name for m in self.test_modules]

    def inline(self) -> str:
        return ",".join(self.test_names)


def select_tests(
    changed_files: Sequence["str | os.PathLike[str]"],
    load_graph: Callable[[], Graph],
    *,
    excluded_suffixes: Sequence[str] = (),
    classifier: ModuleClassifier = DEFAULT_CLASSIFIER,
) -> SelectionResult:
    """Map changed files to test modules. No changes means the graph is never loaded."""
    if not changed_files:
        _log.debug("modgraph: there are no changes in the current revision, skipping map")
        return SelectionResult()
    _log.debug("modgraph: changed files are\n%s", "\n".join(os.fspath(p) for p in changed_files))

    graph = load_graph()
    affected = resolve_affected_modules(
        graph, changed_files, excluded_suffixes=excluded_suffixes, classifier=classifier
    )
    if affected:
        _log.debug("modgraph: the affected modules are\n%s", "\n".join(m.name for m in affected))
    else:
        _log.debug("modgraph: no modules were changed")
    tests = map_test_modules(affected, graph)
    return SelectionResult(
        changed_files=tuple(Path(p) for p in changed_files),
        affected_modules=tuple(affected),
        test_modules=tuple(tests),
    )


def emit_selection(
    result: SelectionResult,
    mode: OutputMode,
    context: RunContext,
    stream: Optional[TextIO] = None,
) -> Optional[Path]:
    """Print the inline list or write it to output.txt in the working directory."""
    out = stream or sys.stdout
    if result.test_modules:
        _log.info("The test modules to run are: %s", ", ".join(result.test_names))
    else:
        _log.info("No test modules to run")
    if mode is OutputMode.TEXT_DUMP:
        print(result.inline(), file=out)
        return None
    path = write_text_atomic(context.cwd / OUTPUT_FILE_NAME, result.inline())
    print(f"✅ Successfully saved the formatted list of test modules to {path}", file=out)
    return path
