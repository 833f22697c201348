"""Service-layer helpers mapping each tool to one CodeMenu API call."""

from __future__ import annotations

import json
import logging
from typing import Any, List, Type, TypeVar
from urllib.parse import quote

from pydantic import ValidationError

from ..client import ApiResult, CodeMenuClient, ErrorKind
from ..errors import (
    BackendResponseError,
    BackendUnavailableError,
    CodeMenuError,
    SnippetNotFoundError,
    ToolArgumentError,
)
from ..snippet import (
    Group,
    Snippet,
    SnippetCreate,
    SnippetPayload,
    SnippetUpdate,
    Tag,
    summarize_snippet,
)

logger = logging.getLogger("codemenu_mcp")

SNIPPETS_PATH = "/snippets/"
TAGS_PATH = "/tags/"
GROUPS_PATH = "/groups/"

RecordT = TypeVar("RecordT", Snippet, Tag, Group)


def render_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def unwrap_result(result: ApiResult) -> Any:
    """Return the payload of a successful call or raise the matching error."""
    if result.success:
        return result.body
    if result.error_kind is ErrorKind.NETWORK:
        raise BackendUnavailableError(result.url, detail=result.error)
    text = result.error if result.error is not None else ""
    raise BackendResponseError(result.status_code, text)


def _require_text(value: str | None, message: str) -> str:
    if value is None or not str(value).strip():
        raise ToolArgumentError(message)
    return str(value).strip()


def _expect_list(payload: Any, what: str) -> List[Any]:
    if not isinstance(payload, list):
        raise CodeMenuError(f"Unexpected response from CodeMenu API: expected a list of {what}")
    return payload


def _parse_record(item: Any, model: Type[RecordT], what: str) -> RecordT:
    try:
        return model.model_validate(item)
    except ValidationError as exc:
        raise CodeMenuError(f"Unexpected response from CodeMenu API: malformed {what}") from exc


def _parse_records(payload: Any, model: Type[RecordT], what: str) -> List[RecordT]:
    return [_parse_record(item, model, what) for item in _expect_list(payload, what + "s")]


def _snippet_path(snippet_id: str) -> str:
    return f"{SNIPPETS_PATH}{quote(snippet_id, safe='')}/"


async def list_snippets_service(
    client: CodeMenuClient,
    *,
    query: str | None = None,
    language: str | None = None,
    tag: str | None = None,
    group: str | None = None,
) -> List[SnippetPayload]:
    params = {"query": query, "language": language, "tag": tag, "group": group}
    result = await client.get(SNIPPETS_PATH, params=params)
    snippets = _parse_records(unwrap_result(result), Snippet, "snippet")
    return [summarize_snippet(snippet).to_payload() for snippet in snippets]


async def get_snippet_service(client: CodeMenuClient, snippet_id: str | None) -> SnippetPayload:
    snippet_id = _require_text(snippet_id, "Snippet ID is required")

    if client.settings.lookup_mode == "direct":
        result = await client.get(_snippet_path(snippet_id))
        if not result.success and result.status_code == 404:
            raise SnippetNotFoundError(snippet_id)
        return _parse_record(unwrap_result(result), Snippet, "snippet").to_payload()

    # The local API has no fetch-by-id endpoint: scan the full collection.
    result = await client.get(SNIPPETS_PATH)
    for snippet in _parse_records(unwrap_result(result), Snippet, "snippet"):
        if snippet.identifier == snippet_id:
            return snippet.to_payload()
    raise SnippetNotFoundError(snippet_id)


async def list_tags_service(client: CodeMenuClient) -> List[SnippetPayload]:
    result = await client.get(TAGS_PATH)
    return [tag.to_payload() for tag in _parse_records(unwrap_result(result), Tag, "tag")]


async def list_groups_service(client: CodeMenuClient) -> List[SnippetPayload]:
    result = await client.get(GROUPS_PATH)
    return [group.to_payload() for group in _parse_records(unwrap_result(result), Group, "group")]


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid snippet fields: " + "; ".join(problems)


async def create_snippet_service(
    client: CodeMenuClient,
    *,
    title: str | None,
    code: str | None,
    language: str | None,
    description: str | None = None,
    abbreviation: str | None = None,
    tags: List[str] | None = None,
    group: str | None = None,
) -> Any:
    missing = [
        name
        for name, value in (("title", title), ("code", code), ("language", language))
        if value is None or not str(value).strip()
    ]
    if missing:
        raise ToolArgumentError(f"Missing required fields: {', '.join(missing)}")

    try:
        payload = SnippetCreate(
            title=title,
            code=code,
            language=language,
            description=description,
            abbreviation=abbreviation,
            tags=tags,
            group=group,
        )
    except ValidationError as exc:
        raise ToolArgumentError(_format_validation_error(exc)) from exc

    result = await client.post(SNIPPETS_PATH, payload.to_body())
    return unwrap_result(result)


async def update_snippet_service(
    client: CodeMenuClient,
    snippet_id: str | None,
    *,
    title: str | None = None,
    code: str | None = None,
    language: str | None = None,
    description: str | None = None,
    abbreviation: str | None = None,
    tags: List[str] | None = None,
    group: str | None = None,
) -> Any:
    snippet_id = _require_text(snippet_id, "Snippet ID is required")

    try:
        payload = SnippetUpdate(
            title=title,
            code=code,
            language=language,
            description=description,
            abbreviation=abbreviation,
            tags=tags,
            group=group,
        )
    except ValidationError as exc:
        raise ToolArgumentError(_format_validation_error(exc)) from exc

    if payload.is_empty():
        raise ToolArgumentError("Provide at least one field to update")

    result = await client.patch(_snippet_path(snippet_id), payload.to_body())
    if not result.success and result.status_code == 404:
        raise SnippetNotFoundError(snippet_id)
    return unwrap_result(result)


async def delete_snippet_service(client: CodeMenuClient, snippet_id: str | None) -> Any:
    snippet_id = _require_text(snippet_id, "Snippet ID is required")

    result = await client.delete(_snippet_path(snippet_id))
    if not result.success and result.status_code == 404:
        raise SnippetNotFoundError(snippet_id)
    body = unwrap_result(result)
    if body is None or body == "":
        return {"deleted": True, "id": snippet_id}
    return body


__all__ = [
    "render_json",
    "unwrap_result",
    "list_snippets_service",
    "get_snippet_service",
    "list_tags_service",
    "list_groups_service",
    "create_snippet_service",
    "update_snippet_service",
    "delete_snippet_service",
]
