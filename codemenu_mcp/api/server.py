"""FastAPI application factory serving the MCP bridge over HTTP."""

from __future__ import annotations

from fastapi import FastAPI

from .. import __version__
from ..client import CodeMenuSettings
from ..mcpserver import create_server
from .route import router


def create_app(settings: CodeMenuSettings) -> FastAPI:
    """Create the FastAPI application with the MCP endpoint mounted at /mcp."""

    # setup mcp
    mcp_app = create_server(settings).http_app("/")

    app = FastAPI(
        title="CodeMenu MCP Bridge",
        version=__version__,
        lifespan=mcp_app.lifespan,
    )
    app.state.settings = settings
    app.include_router(router)

    # mount mcp
    app.mount("/mcp", mcp_app)

    return app


__all__ = ["create_app"]
