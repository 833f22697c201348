"""Pydantic models for the HTTP surface."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    server: str
    api_url: str = Field(..., description="CodeMenu API base URL the bridge forwards to")
    api_key_configured: bool
    writes_enabled: bool
    tools: List[str]


__all__ = ["HealthResponse"]
