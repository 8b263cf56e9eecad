"""Recurring task template tools."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from motion_mcp.integrations.motion.schemas import MotionModel, RecurringTaskCreate
from motion_mcp.tools.motion.base import (
    CREATES,
    DELETES,
    READ_ONLY,
    MotionTool,
    done,
    list_result,
)


class ListRecurringTasksArgs(MotionModel):
    workspace_id: str = Field(..., min_length=1, description="Workspace ID (required)")
    cursor: str | None = Field(None, description="Pagination cursor from previous response")


class RecurringTaskIdArgs(MotionModel):
    recurring_task_id: str = Field(..., min_length=1, description="The ID of the recurring task")


class ListRecurringTasksTool(MotionTool):
    tool_name = "motion_list_recurring_tasks"
    tool_title = "List Recurring Tasks"
    tool_description = (
        "List all recurring tasks for a specific workspace. Supports pagination via cursor."
    )
    args_model = ListRecurringTasksArgs
    tool_annotations = READ_ONLY

    async def run(self, args: ListRecurringTasksArgs) -> Any:
        payload = await self._client.list_recurring_tasks(args.workspace_id, cursor=args.cursor)
        return list_result(payload, "recurringTasks")


class GetRecurringTaskTool(MotionTool):
    tool_name = "motion_get_recurring_task"
    tool_title = "Get Recurring Task"
    tool_description = "Get details of a specific recurring task"
    args_model = RecurringTaskIdArgs
    tool_annotations = READ_ONLY

    async def run(self, args: RecurringTaskIdArgs) -> Any:
        return await self._client.get_recurring_task(args.recurring_task_id)


class CreateRecurringTaskTool(MotionTool):
    tool_name = "motion_create_recurring_task"
    tool_title = "Create Recurring Task"
    tool_description = (
        "Create a recurring task template that generates tasks automatically. "
        "Frequency examples: DAILY, WEEKLY_MONDAY, MONTHLY_1, MONTHLY_LAST."
    )
    args_model = RecurringTaskCreate
    tool_annotations = CREATES

    async def run(self, args: RecurringTaskCreate) -> Any:
        return await self._client.create_recurring_task(args)


class DeleteRecurringTaskTool(MotionTool):
    tool_name = "motion_delete_recurring_task"
    tool_title = "Delete Recurring Task"
    tool_description = "Delete a recurring task permanently"
    args_model = RecurringTaskIdArgs
    tool_annotations = DELETES

    async def run(self, args: RecurringTaskIdArgs) -> Any:
        await self._client.delete_recurring_task(args.recurring_task_id)
        return done(f"Recurring task {args.recurring_task_id} deleted successfully")


__all__ = [
    "CreateRecurringTaskTool",
    "DeleteRecurringTaskTool",
    "GetRecurringTaskTool",
    "ListRecurringTasksTool",
]
