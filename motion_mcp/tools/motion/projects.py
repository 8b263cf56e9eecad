"""Project tools."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from motion_mcp.integrations.motion.schemas import MotionModel, ProjectCreate
from motion_mcp.tools.motion.base import CREATES, READ_ONLY, MotionTool, list_result


class ListProjectsArgs(MotionModel):
    workspace_id: str = Field(..., min_length=1, description="Workspace ID (required)")
    cursor: str | None = Field(None, description="Pagination cursor from previous response")


class ProjectIdArgs(MotionModel):
    project_id: str = Field(..., min_length=1, description="The ID of the project")


class ListProjectsTool(MotionTool):
    tool_name = "motion_list_projects"
    tool_title = "List Projects"
    tool_description = "List all projects in a workspace"
    args_model = ListProjectsArgs
    tool_annotations = READ_ONLY

    async def run(self, args: ListProjectsArgs) -> Any:
        payload = await self._client.list_projects(args.workspace_id, cursor=args.cursor)
        return list_result(payload, "projects")


class GetProjectTool(MotionTool):
    tool_name = "motion_get_project"
    tool_title = "Get Project"
    tool_description = "Get details of a specific project"
    args_model = ProjectIdArgs
    tool_annotations = READ_ONLY

    async def run(self, args: ProjectIdArgs) -> Any:
        return await self._client.get_project(args.project_id)


class CreateProjectTool(MotionTool):
    tool_name = "motion_create_project"
    tool_title = "Create Project"
    tool_description = "Create a new project in a workspace"
    args_model = ProjectCreate
    tool_annotations = CREATES

    async def run(self, args: ProjectCreate) -> Any:
        return await self._client.create_project(args)


__all__ = [
    "CreateProjectTool",
    "GetProjectTool",
    "ListProjectsTool",
]
