"""
Custom field tools.

Custom fields live on Motion's beta endpoints. A field is defined per
workspace; values are attached to tasks and projects through a field
instance ID and removed through the value ID.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from motion_mcp.integrations.motion.schemas import CustomFieldCreate, MotionModel
from motion_mcp.tools.motion.base import (
    CREATES,
    DELETES,
    READ_ONLY,
    UPDATES,
    MotionTool,
    done,
    list_result,
)


class WorkspaceArgs(MotionModel):
    workspace_id: str = Field(..., min_length=1, description="Workspace ID (required)")


class CreateCustomFieldArgs(CustomFieldCreate):
    workspace_id: str = Field(..., min_length=1, description="Workspace ID")

    def to_create(self) -> CustomFieldCreate:
        return CustomFieldCreate.model_validate(
            self.model_dump(exclude={"workspace_id"}, exclude_none=True)
        )


class DeleteCustomFieldArgs(MotionModel):
    workspace_id: str = Field(..., min_length=1, description="Workspace ID")
    custom_field_id: str = Field(..., min_length=1, description="Custom field ID")


class AddToTaskArgs(MotionModel):
    task_id: str = Field(..., min_length=1, description="Task ID")
    custom_field_instance_id: str = Field(..., min_length=1, description="Custom field instance ID")
    value: Any = Field(..., description="Custom field value (type depends on field type)")


class AddToProjectArgs(MotionModel):
    project_id: str = Field(..., min_length=1, description="Project ID")
    custom_field_instance_id: str = Field(..., min_length=1, description="Custom field instance ID")
    value: Any = Field(..., description="Custom field value (type depends on field type)")


class RemoveFromTaskArgs(MotionModel):
    task_id: str = Field(..., min_length=1, description="Task ID")
    value_id: str = Field(..., min_length=1, description="Custom field value ID to remove")


class RemoveFromProjectArgs(MotionModel):
    project_id: str = Field(..., min_length=1, description="Project ID")
    value_id: str = Field(..., min_length=1, description="Custom field value ID to remove")


# =============================================================================
# Definitions
# =============================================================================


class ListCustomFieldsTool(MotionTool):
    tool_name = "motion_list_custom_fields"
    tool_title = "List Custom Fields"
    tool_description = "List all custom fields for a workspace"
    args_model = WorkspaceArgs
    tool_annotations = READ_ONLY

    async def run(self, args: WorkspaceArgs) -> Any:
        payload = await self._client.list_custom_fields(args.workspace_id)
        return list_result(payload, "customFields")


class CreateCustomFieldTool(MotionTool):
    tool_name = "motion_create_custom_field"
    tool_title = "Create Custom Field"
    tool_description = (
        "Create a new custom field in a workspace. "
        "Use metadata for field options, e.g. the choices of a select field."
    )
    args_model = CreateCustomFieldArgs
    tool_annotations = CREATES

    async def run(self, args: CreateCustomFieldArgs) -> Any:
        return await self._client.create_custom_field(args.workspace_id, args.to_create())


class DeleteCustomFieldTool(MotionTool):
    tool_name = "motion_delete_custom_field"
    tool_title = "Delete Custom Field"
    tool_description = "Delete a custom field from a workspace"
    args_model = DeleteCustomFieldArgs
    tool_annotations = DELETES

    async def run(self, args: DeleteCustomFieldArgs) -> Any:
        await self._client.delete_custom_field(args.workspace_id, args.custom_field_id)
        return done("Custom field deleted successfully")


# =============================================================================
# Values
# =============================================================================


class AddCustomFieldToTaskTool(MotionTool):
    tool_name = "motion_add_custom_field_to_task"
    tool_title = "Add Custom Field to Task"
    tool_description = "Set a custom field value on a task"
    args_model = AddToTaskArgs
    tool_annotations = UPDATES

    async def run(self, args: AddToTaskArgs) -> Any:
        await self._client.add_custom_field_to_task(
            args.task_id, args.custom_field_instance_id, args.value
        )
        return done("Custom field added to task successfully")


class AddCustomFieldToProjectTool(MotionTool):
    tool_name = "motion_add_custom_field_to_project"
    tool_title = "Add Custom Field to Project"
    tool_description = "Set a custom field value on a project"
    args_model = AddToProjectArgs
    tool_annotations = UPDATES

    async def run(self, args: AddToProjectArgs) -> Any:
        await self._client.add_custom_field_to_project(
            args.project_id, args.custom_field_instance_id, args.value
        )
        return done("Custom field added to project successfully")


class RemoveCustomFieldFromTaskTool(MotionTool):
    tool_name = "motion_remove_custom_field_from_task"
    tool_title = "Remove Custom Field from Task"
    tool_description = "Remove a custom field value from a task"
    args_model = RemoveFromTaskArgs
    tool_annotations = DELETES

    async def run(self, args: RemoveFromTaskArgs) -> Any:
        await self._client.remove_custom_field_from_task(args.task_id, args.value_id)
        return done("Custom field removed from task successfully")


class RemoveCustomFieldFromProjectTool(MotionTool):
    tool_name = "motion_remove_custom_field_from_project"
    tool_title = "Remove Custom Field from Project"
    tool_description = "Remove a custom field value from a project"
    args_model = RemoveFromProjectArgs
    tool_annotations = DELETES

    async def run(self, args: RemoveFromProjectArgs) -> Any:
        await self._client.remove_custom_field_from_project(args.project_id, args.value_id)
        return done("Custom field removed from project successfully")


__all__ = [
    "AddCustomFieldToProjectTool",
    "AddCustomFieldToTaskTool",
    "CreateCustomFieldTool",
    "DeleteCustomFieldTool",
    "ListCustomFieldsTool",
    "RemoveCustomFieldFromProjectTool",
    "RemoveCustomFieldFromTaskTool",
]
