"""FastMCP server exposing the CodeMenu snippet API as MCP tools."""

from __future__ import annotations

import logging
from typing import Annotated, List

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from .. import __version__
from ..api.service import (
    create_snippet_service,
    delete_snippet_service,
    get_snippet_service,
    list_groups_service,
    list_snippets_service,
    list_tags_service,
    render_json,
    update_snippet_service,
)
from ..client import CodeMenuClient, CodeMenuSettings
from ..errors import CodeMenuError

logger = logging.getLogger("codemenu_mcp")

SERVER_NAME = "codemenu-mcp"

READ_TOOLS = ("list_snippets", "get_snippet", "list_tags", "list_groups")
WRITE_TOOLS = ("create_snippet", "update_snippet", "delete_snippet")

SnippetId = Annotated[str, Field(description="The unique identifier of the snippet (UUID format)")]
OptionalText = str | None


class ServiceContext:
    """Dependency container for MCP tool handlers."""

    def __init__(
        self,
        settings: CodeMenuSettings,
        client: CodeMenuClient | None = None,
    ) -> None:
        self.settings = settings
        self._client = client

    @property
    def client(self) -> CodeMenuClient:
        if self._client is None:
            self._client = CodeMenuClient(self.settings)
        return self._client


def _handle_codemenu_error(exc: CodeMenuError) -> ToolError:
    return ToolError(f"Error: {exc.message}")


def _handle_generic_exception(exc: Exception, *, default_message: str) -> ToolError:
    logger.exception(default_message)
    return ToolError(f"Error: {default_message}: {exc}")


def create_server(
    settings: CodeMenuSettings,
    client: CodeMenuClient | None = None,
) -> FastMCP:
    """Create a FastMCP server wired to the CodeMenu API."""

    services = ServiceContext(settings, client)
    server = FastMCP(SERVER_NAME, version=__version__)

    @server.tool(
        name="list_snippets",
        description=(
            "List code snippets from CodeMenu without full code content (to reduce token usage)."
            " Returns id, title, description, language, abbreviation, tags, and group info."
        ),
        tags={"snippets", "read"},
    )
    async def list_snippets(
        query: Annotated[
            OptionalText,
            Field(
                description=(
                    "Search query - returns snippets whose code, title, or description"
                    " contain this text"
                )
            ),
        ] = None,
        language: Annotated[
            OptionalText,
            Field(description="Filter by programming language (e.g., javascript, python, swift)"),
        ] = None,
        tag: Annotated[
            OptionalText,
            Field(description="Filter by tag ID - returns snippets with this tag"),
        ] = None,
        group: Annotated[
            OptionalText,
            Field(description="Filter by group ID - returns snippets in this group"),
        ] = None,
    ) -> str:
        try:
            snippets = await list_snippets_service(
                services.client,
                query=query,
                language=language,
                tag=tag,
                group=group,
            )
        except CodeMenuError as exc:
            raise _handle_codemenu_error(exc)
        except Exception as exc:
            raise _handle_generic_exception(exc, default_message="Listing snippets failed")
        return render_json(snippets)

    @server.tool(
        name="get_snippet",
        description=(
            "Get full details of a specific snippet by ID, including the complete code content"
        ),
        tags={"snippets", "read"},
    )
    async def get_snippet(id: SnippetId) -> str:
        try:
            snippet = await get_snippet_service(services.client, id)
        except CodeMenuError as exc:
            raise _handle_codemenu_error(exc)
        except Exception as exc:
            raise _handle_generic_exception(exc, default_message="Fetching snippet failed")
        return render_json(snippet)

    @server.tool(
        name="list_tags",
        description="List all tags available in CodeMenu",
        tags={"tags", "read"},
    )
    async def list_tags() -> str:
        try:
            tags = await list_tags_service(services.client)
        except CodeMenuError as exc:
            raise _handle_codemenu_error(exc)
        except Exception as exc:
            raise _handle_generic_exception(exc, default_message="Listing tags failed")
        return render_json(tags)

    @server.tool(
        name="list_groups",
        description="List all groups available in CodeMenu",
        tags={"groups", "read"},
    )
    async def list_groups() -> str:
        try:
            groups = await list_groups_service(services.client)
        except CodeMenuError as exc:
            raise _handle_codemenu_error(exc)
        except Exception as exc:
            raise _handle_generic_exception(exc, default_message="Listing groups failed")
        return render_json(groups)

    if services.settings.enable_writes:
        _register_write_tools(server, services)

    logger.debug(
        "Registered tools for %s (writes enabled: %s)",
        SERVER_NAME,
        services.settings.enable_writes,
    )
    return server


def _register_write_tools(server: FastMCP, services: ServiceContext) -> None:
    @server.tool(
        name="create_snippet",
        description="Create a new snippet in CodeMenu. Returns the stored snippet.",
        tags={"snippets", "write"},
    )
    async def create_snippet(
        title: Annotated[str, Field(description="Snippet title")],
        code: Annotated[str, Field(description="Full code content of the snippet")],
        language: Annotated[str, Field(description="Programming language (e.g., python)")],
        description: Annotated[OptionalText, Field(description="Optional description")] = None,
        abbreviation: Annotated[
            OptionalText, Field(description="Optional abbreviation used to expand the snippet")
        ] = None,
        tags: Annotated[List[str] | None, Field(description="Optional list of tag IDs")] = None,
        group: Annotated[OptionalText, Field(description="Optional group ID")] = None,
    ) -> str:
        try:
            created = await create_snippet_service(
                services.client,
                title=title,
                code=code,
                language=language,
                description=description,
                abbreviation=abbreviation,
                tags=tags,
                group=group,
            )
        except CodeMenuError as exc:
            raise _handle_codemenu_error(exc)
        except Exception as exc:
            raise _handle_generic_exception(exc, default_message="Creating snippet failed")
        return render_json(created)

    @server.tool(
        name="update_snippet",
        description=(
            "Update fields of an existing snippet. Only the supplied fields are changed;"
            " at least one field besides id is required."
        ),
        tags={"snippets", "write"},
    )
    async def update_snippet(
        id: SnippetId,
        title: Annotated[OptionalText, Field(description="New title")] = None,
        code: Annotated[OptionalText, Field(description="New code content")] = None,
        language: Annotated[OptionalText, Field(description="New programming language")] = None,
        description: Annotated[OptionalText, Field(description="New description")] = None,
        abbreviation: Annotated[OptionalText, Field(description="New abbreviation")] = None,
        tags: Annotated[List[str] | None, Field(description="Replacement list of tag IDs")] = None,
        group: Annotated[OptionalText, Field(description="New group ID")] = None,
    ) -> str:
        try:
            updated = await update_snippet_service(
                services.client,
                id,
                title=title,
                code=code,
                language=language,
                description=description,
                abbreviation=abbreviation,
                tags=tags,
                group=group,
            )
        except CodeMenuError as exc:
            raise _handle_codemenu_error(exc)
        except Exception as exc:
            raise _handle_generic_exception(exc, default_message="Updating snippet failed")
        return render_json(updated)

    @server.tool(
        name="delete_snippet",
        description="Delete a snippet from CodeMenu by ID",
        tags={"snippets", "write"},
    )
    async def delete_snippet(id: SnippetId) -> str:
        try:
            deleted = await delete_snippet_service(services.client, id)
        except CodeMenuError as exc:
            raise _handle_codemenu_error(exc)
        except Exception as exc:
            raise _handle_generic_exception(exc, default_message="Deleting snippet failed")
        return render_json(deleted)


__all__ = ["create_server", "ServiceContext", "SERVER_NAME", "READ_TOOLS", "WRITE_TOOLS"]
