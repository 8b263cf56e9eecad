"""
motion-mcp MCP Server - STDIO Mode

Serves the tool registry over the Model Context Protocol on stdin/stdout,
for desktop assistants and other MCP hosts. For HTTP access use
`motion_mcp.app.main` instead.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from motion_mcp.app.dependencies import (
    configure_logging,
    get_settings,
    initialize_services,
    shutdown_services,
)
from motion_mcp.tools import Tool, ToolRegistry, ToolResult

logger = logging.getLogger(__name__)

SERVER_NAME = "motion-mcp-server"


def build_server(registry: ToolRegistry) -> Server:
    """
    Build an MCP server exposing every tool in the registry.

    Arguments are validated by each tool's own pydantic model, so the
    SDK's JSON Schema check is switched off and invalid arguments come
    back as structured `invalid_arguments` results.

    Args:
        registry: Tools to serve

    Returns:
        Low-level MCP Server with list_tools / call_tool handlers
    """
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(tool) for tool in registry.list_tools()]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        return await dispatch(registry, name, arguments)

    return server


def to_mcp_tool(tool: Tool) -> types.Tool:
    """Describe a registry tool to MCP clients, hints included."""
    annotations = tool.annotations
    return types.Tool(
        name=tool.name,
        title=annotations.title,
        description=tool.description,
        inputSchema=tool.input_schema,
        annotations=types.ToolAnnotations(**annotations.to_dict()),
    )


async def dispatch(
    registry: ToolRegistry, name: str, arguments: dict[str, Any] | None
) -> types.CallToolResult:
    """
    Run one tool call.

    Error results keep their structured content (error kind and
    retryability) alongside the text, with `isError` set.
    """
    tool = registry.get(name)
    if tool is None:
        result = ToolResult.error(
            f"Unknown tool: {name}",
            structured={"kind": "unknown_tool", "retryable": False},
        )
    else:
        result = await tool.execute(arguments or {})

    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        structuredContent=result.structured_content,
        isError=result.is_error,
    )


async def serve(registry: ToolRegistry) -> None:
    """Run the MCP server on stdio until the host disconnects."""
    server = build_server(registry)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


async def _main() -> None:
    registry = await initialize_services()
    logger.info(f"{SERVER_NAME} running on stdio ({len(registry)} tools)")
    try:
        await serve(registry)
    finally:
        await shutdown_services()


def main() -> None:
    """Console entry point."""
    try:
        settings = get_settings()
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    asyncio.run(_main())


if __name__ == "__main__":
    main()
