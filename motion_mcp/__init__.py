"""
motion-mcp - Motion task management exposed as MCP tools.

motion-mcp wraps the Motion REST API (https://api.usemotion.com/v1) in a set
of callable tools served over the Model Context Protocol:

- **Request Pipeline**: Every API call flows through one choke point that
  rate-limits, retries and classifies failures
- **Throughput Queue**: Single-lane admission gate bounded per rolling minute
- **Typed Errors**: Auth, not-found, rate-limit, client, server and network
  failures stay distinguishable all the way to the tool result
- **Tools**: MCP-aligned tools for workspaces, tasks, projects, users,
  schedules, comments, custom fields, recurring tasks and statuses

Quick Start:
    >>> from motion_mcp import MotionClient, MotionConfig
    >>>
    >>> async with MotionClient(MotionConfig(api_key="...")) as client:
    ...     workspaces = await client.list_workspaces()
"""

__version__ = "0.1.0"
__license__ = "MIT"

from motion_mcp.integrations import (
    ErrorKind,
    IntegrationError,
    MotionClient,
    MotionConfig,
)
from motion_mcp.tools import Tool, ToolRegistry, ToolResult

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Client
    "ErrorKind",
    "IntegrationError",
    "MotionClient",
    "MotionConfig",
    # Tools
    "Tool",
    "ToolRegistry",
    "ToolResult",
]
