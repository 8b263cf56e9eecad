"""
motion-mcp Tools.

Tools wrap MotionClient operations into callable units that the MCP and
HTTP servers expose by name.

MCP Alignment:
    Tool interface follows Model Context Protocol standards.
    See: https://modelcontextprotocol.io/specification/

Usage:
    from motion_mcp.tools import create_registry

    registry = create_registry(client)
    result = await registry.get_required("motion_get_task").execute({"taskId": "t_1"})
"""

from .base import (
    ContentBlock,
    ContentType,
    Tool,
    ToolAnnotations,
    ToolResult,
)
from .motion import MotionTool, build_motion_tools, create_registry
from .registry import ToolNotFoundError, ToolRegistry, ToolRegistryError

__all__ = [
    # Base
    "ContentBlock",
    "ContentType",
    "Tool",
    "ToolAnnotations",
    "ToolResult",
    # Registry
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolRegistryError",
    # Motion
    "MotionTool",
    "build_motion_tools",
    "create_registry",
]
