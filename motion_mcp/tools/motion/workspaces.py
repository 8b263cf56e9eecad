"""Workspace and status lookup tools."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from motion_mcp.integrations.motion.schemas import MotionModel
from motion_mcp.tools.motion.base import READ_ONLY, MotionTool, list_result

# =============================================================================
# Arguments
# =============================================================================


class ListWorkspacesArgs(MotionModel):
    cursor: str | None = Field(None, description="Pagination cursor from previous response")
    ids: list[str] | None = Field(None, description="Only return these workspace IDs")


class WorkspaceIdArgs(MotionModel):
    workspace_id: str = Field(..., min_length=1, description="The ID of the workspace")


class ListStatusesArgs(MotionModel):
    workspace_id: str | None = Field(None, description="Workspace ID (all workspaces if omitted)")


# =============================================================================
# Workspaces
# =============================================================================


class ListWorkspacesTool(MotionTool):
    tool_name = "motion_list_workspaces"
    tool_title = "List Workspaces"
    tool_description = (
        "List all Motion workspaces the API key can access. "
        "Use the returned workspace IDs with the task and project tools."
    )
    args_model = ListWorkspacesArgs
    tool_annotations = READ_ONLY

    async def run(self, args: ListWorkspacesArgs) -> Any:
        payload = await self._client.list_workspaces(cursor=args.cursor, ids=args.ids)
        return list_result(payload, "workspaces")


class GetWorkspaceTool(MotionTool):
    tool_name = "motion_get_workspace"
    tool_title = "Get Workspace"
    tool_description = "Get details of a specific workspace by ID, including labels and statuses"
    args_model = WorkspaceIdArgs
    tool_annotations = READ_ONLY

    async def run(self, args: WorkspaceIdArgs) -> Any:
        return await self._client.get_workspace(args.workspace_id)


# =============================================================================
# Statuses
# =============================================================================


class ListStatusesTool(MotionTool):
    tool_name = "motion_list_statuses"
    tool_title = "List Statuses"
    tool_description = "List the task statuses available in a workspace"
    args_model = ListStatusesArgs
    tool_annotations = READ_ONLY

    async def run(self, args: ListStatusesArgs) -> Any:
        return list_result(await self._client.list_statuses(args.workspace_id), "statuses")


__all__ = [
    "GetWorkspaceTool",
    "ListStatusesTool",
    "ListWorkspacesTool",
]
