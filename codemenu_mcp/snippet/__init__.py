"""Snippet, tag and group records exchanged with the CodeMenu API."""

from .model import (
    Group,
    Snippet,
    SnippetCreate,
    SnippetPayload,
    SnippetSummary,
    SnippetUpdate,
    Tag,
    summarize_snippet,
)

__all__ = [
    "Snippet",
    "SnippetSummary",
    "Tag",
    "Group",
    "SnippetCreate",
    "SnippetUpdate",
    "SnippetPayload",
    "summarize_snippet",
]
