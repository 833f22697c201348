from __future__ import annotations

from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field

SnippetPayload = Dict[str, Any]

# Identifiers are opaque; some CodeMenu builds serialise them as numbers.
RecordId = Union[str, int]


class _ApiRecord(BaseModel):
    """Record read from the API. Unknown backend fields are kept as-is."""

    model_config = ConfigDict(extra="allow")

    def to_payload(self) -> SnippetPayload:
        payload = self.model_dump(mode="json", exclude_unset=True)
        payload.update(self.model_extra or {})
        return payload


class Snippet(_ApiRecord):
    id: RecordId
    title: str | None = None
    code: str | None = None
    language: str | None = None
    description: str | None = None
    abbreviation: str | None = None
    tags: List[Any] | None = None
    group: Any = None

    @property
    def identifier(self) -> str:
        return str(self.id)


class SnippetSummary(_ApiRecord):
    """Snippet listing entry with the code body replaced by its size."""

    id: RecordId
    code_length: int = 0
    has_code: bool = False

    @classmethod
    def from_snippet(cls, snippet: Snippet) -> "SnippetSummary":
        fields = {key: value for key, value in snippet.to_payload().items() if key != "code"}
        fields["code_length"] = len(snippet.code) if snippet.code else 0
        fields["has_code"] = bool(snippet.code)
        return cls.model_validate(fields)


class Tag(_ApiRecord):
    id: RecordId
    name: str | None = None


class Group(_ApiRecord):
    id: RecordId
    name: str | None = None


class SnippetCreate(BaseModel):
    """Fields accepted when creating a snippet."""

    title: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1)
    description: str | None = None
    abbreviation: str | None = None
    tags: List[str] | None = None
    group: str | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SnippetUpdate(BaseModel):
    """Partial update; unset fields are left untouched by the backend."""

    title: str | None = None
    code: str | None = None
    language: str | None = None
    description: str | None = None
    abbreviation: str | None = None
    tags: List[str] | None = None
    group: str | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.to_body()


def summarize_snippet(snippet: Snippet) -> SnippetSummary:
    """Drop the code body, keeping its length and a presence flag."""
    return SnippetSummary.from_snippet(snippet)


__all__ = [
    "SnippetPayload",
    "Snippet",
    "SnippetSummary",
    "Tag",
    "Group",
    "SnippetCreate",
    "SnippetUpdate",
    "summarize_snippet",
]
