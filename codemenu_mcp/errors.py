"""Error types raised by the CodeMenu tool handlers."""

from __future__ import annotations


class CodeMenuError(Exception):
    """Base class for failures reported back to the MCP caller."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ToolArgumentError(CodeMenuError):
    """A required argument is missing or invalid. Raised before any request."""


class BackendUnavailableError(CodeMenuError):
    """The CodeMenu API could not be reached."""

    def __init__(self, url: str, detail: str | None = None) -> None:
        super().__init__(
            f"Network error connecting to CodeMenu API at {url}. "
            "Make sure CodeMenu is running and the API is enabled in settings."
        )
        self.url = url
        self.detail = detail


class BackendResponseError(CodeMenuError):
    """The CodeMenu API answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"CodeMenu API error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class SnippetNotFoundError(CodeMenuError):
    def __init__(self, snippet_id: str) -> None:
        super().__init__(f"Snippet with ID {snippet_id} not found")
        self.snippet_id = snippet_id


__all__ = [
    "CodeMenuError",
    "ToolArgumentError",
    "BackendUnavailableError",
    "BackendResponseError",
    "SnippetNotFoundError",
]
