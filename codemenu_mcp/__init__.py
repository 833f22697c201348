"""MCP bridge exposing CodeMenu snippets as tools."""

__version__ = "2.0.0"

__all__ = ["__version__"]
