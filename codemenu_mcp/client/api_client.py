"""Async HTTP client for the CodeMenu REST API."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from .config import CodeMenuSettings

logger = logging.getLogger("codemenu_mcp")


class ErrorKind(str, enum.Enum):
    NETWORK = "network"
    HTTP = "http"


@dataclass(slots=True)
class ApiResult:
    """Outcome of a single CodeMenu API call."""

    success: bool
    status_code: int
    body: Any
    url: str
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def network_failure(cls, url: str, error: str) -> "ApiResult":
        return cls(
            success=False,
            status_code=0,
            body=None,
            url=url,
            error=error,
            error_kind=ErrorKind.NETWORK,
        )


class CodeMenuClient:
    """Performs exactly one request per call and never raises for transport failures.

    An ``httpx.AsyncClient`` can be injected (tests pass one backed by
    ``httpx.MockTransport``); otherwise a short-lived client is opened for
    each request.
    """

    def __init__(
        self,
        settings: CodeMenuSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self._http_client = http_client

    def build_url(self, path: str) -> str:
        return f"{self.settings.api_url}{path}"

    def build_params(self, params: Mapping[str, Any] | None = None) -> dict[str, str]:
        """Merge authentication with caller params, dropping empty values."""
        merged: dict[str, str] = dict(self.settings.query_auth())
        for key, value in (params or {}).items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            merged[key] = str(value)
        return merged

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> ApiResult:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any) -> ApiResult:
        return await self.request("POST", path, body=body)

    async def patch(self, path: str, body: Any) -> ApiResult:
        return await self.request("PATCH", path, body=body)

    async def delete(self, path: str) -> ApiResult:
        return await self.request("DELETE", path)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> ApiResult:
        url = self.build_url(path)
        query = self.build_params(params)
        headers = {"Accept": "application/json", **self.settings.header_auth()}

        logger.debug("%s %s params=%s", method, url, sorted(k for k in query if k != "key"))

        try:
            if self._http_client is not None:
                response = await self._send(self._http_client, method, url, query, headers, body)
            else:
                async with httpx.AsyncClient(**self._client_kwargs()) as client:
                    response = await self._send(client, method, url, query, headers, body)
        except httpx.TimeoutException as exc:
            logger.warning("Timed out calling CodeMenu API at %s: %s", url, exc)
            return ApiResult.network_failure(url, f"Request timed out: {exc}")
        except httpx.TransportError as exc:
            logger.warning("Could not reach CodeMenu API at %s: %s", url, exc)
            return ApiResult.network_failure(url, str(exc) or exc.__class__.__name__)

        payload = self._decode(response)
        if response.is_success:
            return ApiResult(
                success=True,
                status_code=response.status_code,
                body=payload,
                url=url,
            )

        logger.warning("CodeMenu API returned %s for %s %s", response.status_code, method, url)
        return ApiResult(
            success=False,
            status_code=response.status_code,
            body=payload,
            url=url,
            error=response.text,
            error_kind=ErrorKind.HTTP,
        )

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        params: dict[str, str],
        headers: dict[str, str],
        body: Any,
    ) -> httpx.Response:
        return await client.request(
            method,
            url,
            params=params or None,
            headers=headers,
            json=body,
            timeout=self._request_timeout(),
        )

    def _client_kwargs(self) -> dict[str, Any]:
        if self.settings.timeout is None:
            return {}
        return {"timeout": self.settings.timeout}

    def _request_timeout(self) -> Any:
        if self.settings.timeout is None:
            return httpx.USE_CLIENT_DEFAULT
        return self.settings.timeout

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except (json.JSONDecodeError, ValueError):
                return response.text
        return response.text


__all__ = ["ApiResult", "CodeMenuClient", "ErrorKind"]
