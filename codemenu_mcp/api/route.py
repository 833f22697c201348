"""FastAPI routes served next to the mounted MCP endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..client import CodeMenuSettings
from ..mcpserver import READ_TOOLS, SERVER_NAME, WRITE_TOOLS
from .model import HealthResponse


def get_settings(request: Request) -> CodeMenuSettings:
    settings = getattr(request.app.state, "settings", None)
    if not isinstance(settings, CodeMenuSettings):
        raise RuntimeError("CodeMenu settings have not been initialised")
    return settings


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: CodeMenuSettings = Depends(get_settings)) -> HealthResponse:
    tools = list(READ_TOOLS)
    if settings.enable_writes:
        tools.extend(WRITE_TOOLS)
    return HealthResponse(
        server=SERVER_NAME,
        api_url=settings.api_url,
        api_key_configured=settings.has_api_key,
        writes_enabled=settings.enable_writes,
        tools=tools,
    )


__all__ = ["router", "get_settings"]
