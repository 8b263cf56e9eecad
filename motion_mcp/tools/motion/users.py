"""User and schedule lookup tools."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from motion_mcp.integrations.motion.schemas import MotionModel
from motion_mcp.tools.motion.base import READ_ONLY, MotionTool, list_result


class NoArgs(MotionModel):
    pass


class UserIdArgs(MotionModel):
    user_id: str = Field(..., min_length=1, description="The ID of the user")


class ListUsersArgs(MotionModel):
    workspace_id: str | None = Field(None, description="Workspace to list users for")
    team_id: str | None = Field(None, description="Team to list users for")
    cursor: str | None = Field(None, description="Pagination cursor from previous response")


class GetScheduleArgs(MotionModel):
    user_id: str | None = Field(None, description="User ID (defaults to current user)")
    start_date: str | None = Field(None, description="Start date (ISO 8601)")
    end_date: str | None = Field(None, description="End date (ISO 8601)")


# =============================================================================
# Users
# =============================================================================


class GetCurrentUserTool(MotionTool):
    tool_name = "motion_get_current_user"
    tool_title = "Get Current User"
    tool_description = "Get the Motion user that owns the configured API key"
    args_model = NoArgs
    tool_annotations = READ_ONLY

    async def run(self, args: NoArgs) -> Any:
        return await self._client.get_current_user()


class GetUserTool(MotionTool):
    tool_name = "motion_get_user"
    tool_title = "Get User"
    tool_description = "Get details of a specific user by ID"
    args_model = UserIdArgs
    tool_annotations = READ_ONLY

    async def run(self, args: UserIdArgs) -> Any:
        return await self._client.get_user(args.user_id)


class ListUsersTool(MotionTool):
    tool_name = "motion_list_users"
    tool_title = "List Users"
    tool_description = "List users in a workspace or team"
    args_model = ListUsersArgs
    tool_annotations = READ_ONLY

    async def run(self, args: ListUsersArgs) -> Any:
        payload = await self._client.list_users(
            workspace_id=args.workspace_id,
            team_id=args.team_id,
            cursor=args.cursor,
        )
        return list_result(payload, "users")


# =============================================================================
# Schedules
# =============================================================================


class GetScheduleTool(MotionTool):
    tool_name = "motion_get_schedule"
    tool_title = "Get Schedule"
    tool_description = "Get a user's work schedules, optionally within a date range"
    args_model = GetScheduleArgs
    tool_annotations = READ_ONLY

    async def run(self, args: GetScheduleArgs) -> Any:
        payload = await self._client.get_schedules(
            user_id=args.user_id,
            start_date=args.start_date,
            end_date=args.end_date,
        )
        return list_result(payload, "schedules")


__all__ = [
    "GetCurrentUserTool",
    "GetScheduleTool",
    "GetUserTool",
    "ListUsersTool",
]
