"""
Motion Tools.

One tool per Motion operation, all named `motion_*` and taking camelCase
arguments. Each tool validates its arguments with a pydantic model and
reports failures in its ToolResult rather than raising.

Usage:
    from motion_mcp.tools.motion import build_motion_tools, create_registry

    registry = create_registry(client)
    result = await registry.get_required("motion_list_workspaces").execute({})
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from motion_mcp.tools.motion.base import MotionTool
from motion_mcp.tools.motion.comments import (
    CreateCommentTool,
    DeleteCommentTool,
    GetCommentTool,
    ListCommentsTool,
    UpdateCommentTool,
)
from motion_mcp.tools.motion.custom_fields import (
    AddCustomFieldToProjectTool,
    AddCustomFieldToTaskTool,
    CreateCustomFieldTool,
    DeleteCustomFieldTool,
    ListCustomFieldsTool,
    RemoveCustomFieldFromProjectTool,
    RemoveCustomFieldFromTaskTool,
)
from motion_mcp.tools.motion.projects import (
    CreateProjectTool,
    GetProjectTool,
    ListProjectsTool,
)
from motion_mcp.tools.motion.recurring_tasks import (
    CreateRecurringTaskTool,
    DeleteRecurringTaskTool,
    GetRecurringTaskTool,
    ListRecurringTasksTool,
)
from motion_mcp.tools.motion.tasks import (
    CompleteTaskTool,
    CreateTaskTool,
    DeleteTaskTool,
    GetTaskTool,
    ListTasksTool,
    MoveTaskTool,
    UnassignTaskTool,
    UncompleteTaskTool,
    UpdateTaskTool,
)
from motion_mcp.tools.motion.users import (
    GetCurrentUserTool,
    GetScheduleTool,
    GetUserTool,
    ListUsersTool,
)
from motion_mcp.tools.motion.workspaces import (
    GetWorkspaceTool,
    ListStatusesTool,
    ListWorkspacesTool,
)
from motion_mcp.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from motion_mcp.integrations.motion import MotionClient

MOTION_TOOL_CLASSES: tuple[type[MotionTool], ...] = (
    # Workspaces & statuses
    ListWorkspacesTool,
    GetWorkspaceTool,
    ListStatusesTool,
    # Tasks
    ListTasksTool,
    GetTaskTool,
    CreateTaskTool,
    UpdateTaskTool,
    DeleteTaskTool,
    MoveTaskTool,
    UnassignTaskTool,
    CompleteTaskTool,
    UncompleteTaskTool,
    # Projects
    ListProjectsTool,
    GetProjectTool,
    CreateProjectTool,
    # Users & schedules
    GetCurrentUserTool,
    GetUserTool,
    ListUsersTool,
    GetScheduleTool,
    # Comments
    ListCommentsTool,
    GetCommentTool,
    CreateCommentTool,
    UpdateCommentTool,
    DeleteCommentTool,
    # Custom fields
    ListCustomFieldsTool,
    CreateCustomFieldTool,
    DeleteCustomFieldTool,
    AddCustomFieldToTaskTool,
    AddCustomFieldToProjectTool,
    RemoveCustomFieldFromTaskTool,
    RemoveCustomFieldFromProjectTool,
    # Recurring tasks
    ListRecurringTasksTool,
    GetRecurringTaskTool,
    CreateRecurringTaskTool,
    DeleteRecurringTaskTool,
)


def build_motion_tools(client: MotionClient) -> list[MotionTool]:
    """Instantiate every Motion tool against one shared client."""
    return [tool_class(client) for tool_class in MOTION_TOOL_CLASSES]


def create_registry(client: MotionClient) -> ToolRegistry:
    """
    Create a registry holding every Motion tool.

    All tools share the client, and therefore its throughput queue.
    """
    registry = ToolRegistry()
    registry.register_all(build_motion_tools(client))
    return registry


__all__ = [
    "MOTION_TOOL_CLASSES",
    "MotionTool",
    "build_motion_tools",
    "create_registry",
]
