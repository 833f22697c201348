"""MCP server wiring for the CodeMenu bridge."""

from .server import READ_TOOLS, SERVER_NAME, WRITE_TOOLS, ServiceContext, create_server

__all__ = ["create_server", "ServiceContext", "SERVER_NAME", "READ_TOOLS", "WRITE_TOOLS"]
