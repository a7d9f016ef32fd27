"""Error taxonomy shared by the core and the CLI glue."""

from __future__ import annotations


class ModGraphError(Exception):
    """Base class for every error modgraph raises on purpose."""


class InputError(ModGraphError):
    """Malformed caller input (changed-file paths, package directories)."""


class GraphLoadError(ModGraphError):
    """The manifest description could not be turned into a graph."""


class ConfigError(ModGraphError):
    """Invalid modgraph.toml / [tool.modgraph] content."""


class VCSError(ModGraphError):
    """git could not list the changed files."""


class OutputWriteError(ModGraphError):
    """An output file could not be written."""
