"""Quick script to check the MCP server answers initialize and tools/list over stdio.

This only validates protocol communication. To exercise real API calls,
make sure CodeMenu is running with its API enabled.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

TIMEOUT_SECONDS = 5.0

MESSAGES = [
    {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "initialize",
        "params": {
            "protocolVersion": "2024-11-05",
            "capabilities": {},
            "clientInfo": {"name": "smoke-check", "version": "1.0.0"},
        },
    },
    {"jsonrpc": "2.0", "method": "notifications/initialized"},
    {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
]


async def _read_responses(stdout: asyncio.StreamReader) -> None:
    pending = {1, 2}
    while pending:
        line = await stdout.readline()
        if not line:
            raise RuntimeError("Server closed stdout before answering")
        try:
            response = json.loads(line)
        except json.JSONDecodeError:
            continue

        if response.get("id") == 1:
            result = response["result"]
            print("✓ Initialize response received")
            print(f"  Protocol version: {result['protocolVersion']}")
            print(f"  Server name: {result['serverInfo']['name']}")
            print(f"  Server version: {result['serverInfo'].get('version')}")
        elif response.get("id") == 2:
            tools = response["result"]["tools"]
            print("\n✓ Tools list response received")
            print(f"  Number of tools: {len(tools)}")
            print("\n  Available tools:")
            for tool in tools:
                print(f"    - {tool['name']}: {tool.get('description', '')}")
        pending.discard(response.get("id"))


async def _run_check() -> int:
    print("Starting CodeMenu MCP server smoke check...\n")
    process = await asyncio.create_subprocess_exec(
        sys.executable,
        "-m",
        "codemenu_mcp",
        cwd=Path(__file__).resolve().parent,
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
    )
    assert process.stdin is not None and process.stdout is not None

    for message in MESSAGES:
        process.stdin.write((json.dumps(message) + "\n").encode("utf-8"))
    await process.stdin.drain()

    try:
        await asyncio.wait_for(_read_responses(process.stdout), timeout=TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        print("\n✗ Timeout - server did not respond in time", file=sys.stderr)
        return 1
    except (RuntimeError, KeyError) as exc:
        print(f"\n✗ Server error: {exc}", file=sys.stderr)
        return 1
    finally:
        if process.returncode is None:
            process.kill()
        await process.wait()

    print("\n✓ All checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(_run_check()))
