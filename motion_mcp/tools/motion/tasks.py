"""
Motion Task Tools.

Wrap the MotionClient task methods:
- list / get / create / update / delete
- move between workspaces and projects, unassign
- complete / uncomplete

Usage:
    tool = CreateTaskTool(client)

    result = await tool.execute({
        "name": "Draft Q3 plan",
        "workspaceId": "ws_123",
        "priority": "HIGH",
        "dueDate": "2026-11-01T17:00:00Z",
    })

    if result.is_error:
        print(result.error_kind, result.text)
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from motion_mcp.integrations.motion.schemas import (
    MotionModel,
    TaskCreate,
    TaskQuery,
    TaskUpdate,
)
from motion_mcp.tools.motion.base import (
    CREATES,
    DELETES,
    READ_ONLY,
    UPDATES,
    MotionTool,
    done,
    list_result,
)

# =============================================================================
# Arguments
# =============================================================================


class TaskIdArgs(MotionModel):
    task_id: str = Field(..., min_length=1, description="The ID of the task")


class UpdateTaskArgs(TaskUpdate):
    task_id: str = Field(..., min_length=1, description="Task ID to update")

    def to_update(self) -> TaskUpdate:
        return TaskUpdate.model_validate(self.model_dump(exclude={"task_id"}, exclude_unset=True))


class MoveTaskArgs(MotionModel):
    task_id: str = Field(..., min_length=1, description="Task ID to move")
    workspace_id: str | None = Field(None, description="Target workspace ID")
    project_id: str | None = Field(None, description="Target project ID")
    assignee_id: str | None = Field(None, description="Assignee in the target workspace")

    @model_validator(mode="after")
    def require_target(self) -> MoveTaskArgs:
        if not self.workspace_id and not self.project_id:
            raise ValueError("workspaceId or projectId is required")
        return self


# =============================================================================
# Read
# =============================================================================


class ListTasksTool(MotionTool):
    tool_name = "motion_list_tasks"
    tool_title = "List Tasks"
    tool_description = "List tasks with optional filters. Supports pagination via cursor."
    args_model = TaskQuery
    tool_annotations = READ_ONLY

    async def run(self, args: TaskQuery) -> Any:
        return list_result(await self._client.list_tasks(args), "tasks")


class GetTaskTool(MotionTool):
    tool_name = "motion_get_task"
    tool_title = "Get Task"
    tool_description = "Get detailed information about a specific task"
    args_model = TaskIdArgs
    tool_annotations = READ_ONLY

    async def run(self, args: TaskIdArgs) -> Any:
        return await self._client.get_task(args.task_id)


# =============================================================================
# Write
# =============================================================================


class CreateTaskTool(MotionTool):
    tool_name = "motion_create_task"
    tool_title = "Create Task"
    tool_description = (
        "Create a new task in Motion. Requires a task name and workspace ID. "
        "Set autoScheduled to let Motion place the task on the calendar, "
        "or null to disable auto-scheduling."
    )
    args_model = TaskCreate
    tool_annotations = CREATES

    async def run(self, args: TaskCreate) -> Any:
        return await self._client.create_task(args)


class UpdateTaskTool(MotionTool):
    tool_name = "motion_update_task"
    tool_title = "Update Task"
    tool_description = "Update an existing task. Only the provided fields are changed."
    args_model = UpdateTaskArgs
    tool_annotations = UPDATES

    async def run(self, args: UpdateTaskArgs) -> Any:
        return await self._client.update_task(args.task_id, args.to_update())


class DeleteTaskTool(MotionTool):
    tool_name = "motion_delete_task"
    tool_title = "Delete Task"
    tool_description = "Delete a task permanently"
    args_model = TaskIdArgs
    tool_annotations = DELETES

    async def run(self, args: TaskIdArgs) -> Any:
        await self._client.delete_task(args.task_id)
        return done(f"Task {args.task_id} deleted successfully")


class MoveTaskTool(MotionTool):
    tool_name = "motion_move_task"
    tool_title = "Move Task"
    tool_description = "Move a task to a different workspace and/or project"
    args_model = MoveTaskArgs
    tool_annotations = UPDATES

    async def run(self, args: MoveTaskArgs) -> Any:
        return await self._client.move_task(
            args.task_id,
            workspace_id=args.workspace_id,
            project_id=args.project_id,
            assignee_id=args.assignee_id,
        )


class UnassignTaskTool(MotionTool):
    tool_name = "motion_unassign_task"
    tool_title = "Unassign Task"
    tool_description = "Remove the assignee from a task"
    args_model = TaskIdArgs
    tool_annotations = UPDATES

    async def run(self, args: TaskIdArgs) -> Any:
        payload = await self._client.unassign_task(args.task_id)
        return payload if payload is not None else done(f"Task {args.task_id} unassigned")


class CompleteTaskTool(MotionTool):
    tool_name = "motion_complete_task"
    tool_title = "Complete Task"
    tool_description = "Mark a task as completed"
    args_model = TaskIdArgs
    tool_annotations = UPDATES

    async def run(self, args: TaskIdArgs) -> Any:
        return await self._client.complete_task(args.task_id)


class UncompleteTaskTool(MotionTool):
    tool_name = "motion_uncomplete_task"
    tool_title = "Uncomplete Task"
    tool_description = "Mark a task as not completed"
    args_model = TaskIdArgs
    tool_annotations = UPDATES

    async def run(self, args: TaskIdArgs) -> Any:
        return await self._client.uncomplete_task(args.task_id)


__all__ = [
    "CompleteTaskTool",
    "CreateTaskTool",
    "DeleteTaskTool",
    "GetTaskTool",
    "ListTasksTool",
    "MoveTaskTool",
    "UnassignTaskTool",
    "UncompleteTaskTool",
    "UpdateTaskTool",
]
