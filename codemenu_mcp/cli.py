"""Command-line entry point for the CodeMenu MCP bridge."""

import argparse
import dataclasses
import logging
import sys

from .client import CodeMenuSettings
from .log import setup_logging


logger = logging.getLogger("codemenu_mcp")


def build_settings(args: argparse.Namespace) -> CodeMenuSettings:
    settings = CodeMenuSettings.from_env()
    overrides = {}
    if args.api_url:
        overrides["api_url"] = args.api_url
    if args.api_key:
        overrides["api_key"] = args.api_key
    if args.enable_writes:
        overrides["enable_writes"] = True
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return dataclasses.replace(settings, **overrides) if overrides else settings


def log_startup(settings: CodeMenuSettings, transport: str) -> None:
    # stderr directly: these lines must show regardless of the configured log level
    print(f"CodeMenu MCP server running on {transport}", file=sys.stderr)
    print(f"Connecting to CodeMenu API at: {settings.api_url}", file=sys.stderr)
    if settings.has_api_key:
        print("Using API key authentication", file=sys.stderr)
    else:
        print("No API key configured (set CODEMENU_API_KEY if required)", file=sys.stderr)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Expose the CodeMenu snippet API as Model Context Protocol tools"
    )
    parser.add_argument(
        "--transport",
        choices=("stdio", "http"),
        default="stdio",
        help="MCP transport to serve (default: stdio)",
    )
    parser.add_argument(
        "--api-url",
        type=str,
        help="CodeMenu API base URL (default: $CODEMENU_API_URL or http://127.0.0.1:1300/v1)",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        help="CodeMenu API key (default: $CODEMENU_API_KEY)",
    )
    parser.add_argument(
        "--enable-writes",
        action="store_true",
        help="Register create/update/delete tools (default: $CODEMENU_ENABLE_WRITES or off)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Bind address for the http transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for the http transport (default: 8000)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (default: $CODEMENU_LOG_LEVEL or INFO)",
    )

    args = parser.parse_args()

    try:
        settings = build_settings(args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level)

    try:
        if args.transport == "http":
            import uvicorn

            from .api.server import create_app

            app = create_app(settings)
            log_startup(settings, args.transport)
            uvicorn.run(app, host=args.host, port=args.port)
        else:
            from .mcpserver import create_server

            server = create_server(settings)
            log_startup(settings, args.transport)
            server.run(transport="stdio")
    except KeyboardInterrupt:
        return 0
    except Exception:
        logger.exception("Server error")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
