"""CLI package namespace.

Keep package import side-effect free so handler modules can be imported
independently of the parser wiring.
"""

__all__ = []
