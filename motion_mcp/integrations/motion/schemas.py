"""
Pydantic schemas for the Motion API.

Request bodies and query strings are built from these models and
serialized to the API's camelCase field names. Responses are passed
through as plain dicts; Motion adds fields often and the tools hand
them to the caller verbatim.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# =============================================================================
# Enums
# =============================================================================


class TaskPriority(str, Enum):
    """Task priority levels."""

    ASAP = "ASAP"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class DeadlineType(str, Enum):
    """How strictly a due date is enforced by the scheduler."""

    HARD = "HARD"
    SOFT = "SOFT"
    NONE = "NONE"


class CustomFieldType(str, Enum):
    """Custom field value types."""

    TEXT = "text"
    NUMBER = "number"
    URL = "url"
    DATE = "date"
    SELECT = "select"
    MULTI_SELECT = "multiSelect"
    PERSON = "person"
    MULTI_PERSON = "multiPerson"
    EMAIL = "email"
    PHONE = "phone"
    CHECKBOX = "checkbox"
    RELATED_TO = "relatedTo"


# =============================================================================
# Base
# =============================================================================


class MotionModel(BaseModel):
    """Base for request models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="forbid",
    )

    # Fields sent as an explicit null when the caller sets them to None
    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to API request format, excluding None values."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        for field_name in self.nullable_fields & self.model_fields_set:
            if getattr(self, field_name) is None:
                data[to_camel(field_name)] = None
        return data


class AutoScheduled(MotionModel):
    """Auto-scheduling settings for a task."""

    start_date: str = Field(..., description="ISO 8601 start date")
    deadline_type: DeadlineType | None = Field(None, description="Deadline type")
    schedule: str | None = Field(
        None, description='Schedule name (must be "Work Hours" for other users)'
    )


# =============================================================================
# Tasks
# =============================================================================


class TaskCreate(MotionModel):
    """Schema for creating a task."""

    nullable_fields = frozenset({"auto_scheduled"})

    name: str = Field(..., min_length=1, description="Task title")
    workspace_id: str = Field(..., min_length=1, description="Workspace ID")
    due_date: str | None = Field(None, description="ISO 8601 due date")
    duration: str | int | None = Field(
        None, description='Duration: "NONE", "REMINDER", or minutes as integer'
    )
    status: str | None = Field(None, description="Task status")
    auto_scheduled: AutoScheduled | None = Field(
        None, description="Auto-scheduling configuration (null to disable)"
    )
    project_id: str | None = Field(None, description="Project ID")
    description: str | None = Field(None, description="Task description (Markdown)")
    priority: TaskPriority | None = Field(None, description="Task priority")
    labels: list[str] | None = Field(None, description="Label names")
    assignee_id: str | None = Field(None, description="User ID to assign to")
    custom_field_values: dict[str, Any] | None = None


class TaskUpdate(MotionModel):
    """Schema for updating a task. Only set fields are sent."""

    nullable_fields = frozenset({"auto_scheduled"})

    name: str | None = Field(None, min_length=1)
    due_date: str | None = None
    duration: str | int | None = None
    status: str | None = None
    priority: TaskPriority | None = None
    description: str | None = None
    completed: bool | None = None
    assignee_id: str | None = None
    labels: list[str] | None = None
    workspace_id: str | None = None
    project_id: str | None = None
    auto_scheduled: AutoScheduled | None = None
    custom_field_values: dict[str, Any] | None = None


class TaskQuery(MotionModel):
    """Query parameters for listing tasks."""

    assignee_id: str | None = Field(None, description="Filter by assignee ID")
    cursor: str | None = Field(None, description="Pagination cursor")
    include_all_statuses: bool | None = Field(None, description="Include all task statuses")
    label: str | None = Field(None, description="Filter by label name")
    name: str | None = Field(None, description="Filter by task name (case-insensitive)")
    project_id: str | None = Field(None, description="Filter by project ID")
    status: list[str] | None = Field(None, description="Filter by specific statuses")
    workspace_id: str | None = Field(None, description="Filter by workspace ID")

    def to_params(self) -> dict[str, Any]:
        """Convert to query parameters."""
        return self.to_api_dict()


# =============================================================================
# Projects
# =============================================================================


class ProjectCreate(MotionModel):
    """Schema for creating a project."""

    name: str = Field(..., min_length=1, description="Project name")
    workspace_id: str = Field(..., min_length=1, description="Workspace ID")
    description: str | None = Field(None, description="Project description")
    status: str | None = Field(None, description="Initial project status")
    custom_field_values: dict[str, Any] | None = None


class ProjectUpdate(MotionModel):
    """Schema for updating a project."""

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    status: str | None = None
    custom_field_values: dict[str, Any] | None = None


# =============================================================================
# Recurring Tasks
# =============================================================================


class RecurringTaskCreate(MotionModel):
    """Schema for creating a recurring task template."""

    name: str = Field(..., min_length=1)
    workspace_id: str = Field(..., min_length=1)
    frequency: str = Field(
        ..., min_length=1, description="e.g. DAILY, WEEKLY_MONDAY, MONTHLY_1, MONTHLY_LAST"
    )
    assignee_id: str = Field(..., min_length=1)
    recurrence_rule: str | None = None
    duration: str | int | None = None
    description: str | None = None
    project_id: str | None = None
    deadline_type: DeadlineType | None = None
    starting_on: str | None = None
    ideal_time: str | None = Field(None, description="Preferred time of day (HH:mm)")
    schedule: str | None = None
    priority: TaskPriority | None = None
    labels: list[str] | None = None


class RecurringTaskUpdate(MotionModel):
    """Schema for updating a recurring task template."""

    name: str | None = Field(None, min_length=1)
    frequency: str | None = None
    recurrence_rule: str | None = None
    duration: str | int | None = None
    description: str | None = None
    project_id: str | None = None
    assignee_id: str | None = None
    deadline_type: DeadlineType | None = None
    starting_on: str | None = None
    ideal_time: str | None = None
    schedule: str | None = None
    priority: TaskPriority | None = None
    labels: list[str] | None = None


# =============================================================================
# Custom Fields
# =============================================================================


class CustomFieldCreate(MotionModel):
    """Schema for creating a custom field. The workspace goes in the path."""

    name: str = Field(..., min_length=1)
    type: CustomFieldType
    metadata: dict[str, Any] | None = Field(
        None, description="Field metadata (e.g. options for select fields)"
    )


__all__ = [
    "AutoScheduled",
    "CustomFieldCreate",
    "CustomFieldType",
    "DeadlineType",
    "MotionModel",
    "ProjectCreate",
    "ProjectUpdate",
    "RecurringTaskCreate",
    "RecurringTaskUpdate",
    "TaskCreate",
    "TaskPriority",
    "TaskQuery",
    "TaskUpdate",
]
