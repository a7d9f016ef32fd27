"""CLI handlers facade.

Thin wrapper that re-exports the handler implementations from cli.core_handlers,
so dispatch and tests depend on one stable `cli.handlers.handle_*` API.
"""
from __future__ import annotations
from .core_handlers import handle_help, handle_lint, handle_tests, handle_visualize
__all__ = ['handle_help', 'handle_lint', 'handle_tests', 'handle_visualize']
