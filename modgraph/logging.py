"""Logging for the modgraph.* namespace.

Library code only ever calls get_logger(); it never attaches handlers, so an
application importing modgraph decides where messages go. The CLI entry point
calls configure_cli_logging() once, which installs a plain stderr handler on
the "modgraph" logger so command output on stdout stays machine readable
(the `tests` command prints a comma-joined list there).

MODGRAPH_LOG_LEVEL (DEBUG, INFO, WARNING, ...) sets the default level;
--verbose and --quiet override it.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "MODGRAPH_LOG_LEVEL"
ROOT_LOGGER = "modgraph"

_configured = False


def _resolve_level() -> int:
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if raw:
        return getattr(logging, raw, logging.INFO)
    return logging.INFO


def configure_cli_logging(*, quiet: bool = False, verbose: bool = False) -> None:
    """Route modgraph.* records to stderr for a CLI run.

    Repeated calls only adjust the level; the handler is installed once.
    """
    global _configured
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = _resolve_level()
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    if not root.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(h)
        root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for one modgraph component, e.g. get_logger("lint") -> modgraph.lint.

    Before configure_cli_logging() runs, records propagate to whatever the host
    application configured; the level still follows MODGRAPH_LOG_LEVEL.
    """
    logger = logging.getLogger(f"{ROOT_LOGGER}.{name}")
    if not _configured:
        logger.setLevel(_resolve_level())
    return logger
