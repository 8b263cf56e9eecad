"""
Tool Registry.

Holds the tools exposed by the protocol servers:
- Registration with validation
- Lookup by name
- MCP schema export

Tools are registered once at startup and not changed while serving.

Usage:
    registry = ToolRegistry()
    registry.register_all(build_motion_tools(client))

    tool = registry.get_required("motion_list_tasks")
    result = await tool.execute({"workspaceId": "ws_1"})
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .base import Tool

logger = logging.getLogger(__name__)


class ToolRegistryError(Exception):
    """Error in tool registry operations."""

    pass


class ToolNotFoundError(ToolRegistryError, KeyError):
    """Raised when a tool name is not registered."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(f"Unknown tool: {name}")

    def __str__(self) -> str:
        return f"Unknown tool: {self.name}"


class ToolRegistry:
    """
    Registry of available tools, keyed by name.

    Example:
        registry = ToolRegistry()
        registry.register(ListTasksTool(client))

        "motion_list_tasks" in registry   # True
        registry.to_mcp_schemas()         # [{"name": ..., "inputSchema": ...}]
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """
        Register a tool.

        Raises:
            ToolRegistryError: If the name is taken or the tool is malformed
        """
        if tool.name in self._tools:
            raise ToolRegistryError(
                f"Tool '{tool.name}' already registered. Use a unique name or unregister first."
            )

        self._validate_tool(tool)

        self._tools[tool.name] = tool
        logger.debug(f"[tool_registry] Registered tool: {tool.name}")

    def register_all(self, tools: Iterable[Tool]) -> None:
        """Register several tools, stopping at the first invalid one."""
        for tool in tools:
            self.register(tool)
        logger.info(f"[tool_registry] {len(self._tools)} tools registered")

    def unregister(self, name: str) -> bool:
        """
        Unregister a tool by name.

        Returns:
            True if tool was unregistered, False if not found
        """
        if name in self._tools:
            del self._tools[name]
            logger.info(f"[tool_registry] Unregistered tool: {name}")
            return True
        return False

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def get_required(self, name: str) -> Tool:
        """
        Get a tool by name, raising if not found.

        Raises:
            ToolNotFoundError: If tool not found
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name, list(self._tools.keys()))
        return tool

    def list_tools(self) -> list[Tool]:
        return list(self._tools.values())

    def list_names(self) -> list[str]:
        return list(self._tools.keys())

    def to_mcp_schemas(self) -> list[dict[str, Any]]:
        """
        Get all tool schemas in MCP format.

        Returns:
            List of MCP-compliant tool schemas
        """
        return [tool.to_mcp_schema() for tool in self._tools.values()]

    def _validate_tool(self, tool: Tool) -> None:
        """
        Validate tool has required properties.

        Raises:
            ToolRegistryError: If tool is invalid
        """
        if not tool.name or not isinstance(tool.name, str):
            raise ToolRegistryError(f"Tool must have a valid name: {tool}")

        if not tool.description or not isinstance(tool.description, str):
            raise ToolRegistryError(f"Tool '{tool.name}' must have a description")

        schema = tool.input_schema
        if not isinstance(schema, dict):
            raise ToolRegistryError(f"Tool '{tool.name}' input_schema must be a dict")

        if schema.get("type") != "object":
            raise ToolRegistryError(f"Tool '{tool.name}' input_schema must have type: 'object'")

        if "properties" not in schema:
            raise ToolRegistryError(f"Tool '{tool.name}' input_schema must have 'properties'")

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __iter__(self):
        return iter(self._tools.values())

    def __repr__(self) -> str:
        return f"<ToolRegistry tools={list(self._tools.keys())}>"


__all__ = [
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolRegistryError",
]
