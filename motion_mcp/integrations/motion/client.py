"""
Motion API Client.

Async access to Motion's REST API. Every method is a thin, fixed mapping
onto one verb and path; all of them go through `IntegrationClient.request`
and therefore share the throughput queue, retry policy and error
classification.

Usage:
    async with MotionClient(MotionConfig(api_key="...")) as client:
        workspaces = await client.list_workspaces()

        task = await client.create_task(
            TaskCreate(name="Write report", workspace_id="ws_1", priority="HIGH")
        )

        await client.complete_task(task["id"])

API Reference:
    https://docs.usemotion.com/
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from motion_mcp.integrations.base import IntegrationClient, IntegrationConfig
from motion_mcp.integrations.motion.schemas import (
    CustomFieldCreate,
    MotionModel,
    ProjectCreate,
    ProjectUpdate,
    RecurringTaskCreate,
    RecurringTaskUpdate,
    TaskCreate,
    TaskQuery,
    TaskUpdate,
)
from motion_mcp.pipeline.errors import IntegrationError
from motion_mcp.pipeline.retry import NO_RETRY

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=MotionModel)

DEFAULT_BASE_URL = "https://api.usemotion.com/v1"
DEFAULT_RATE_LIMIT_PER_MINUTE = 12


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class MotionConfig(IntegrationConfig):
    """Configuration for Motion client."""

    # Required
    api_key: str = ""

    # Optional - defaults to Motion Cloud
    base_url: str = DEFAULT_BASE_URL

    # Individual accounts get 12 req/min, team accounts more
    rate_limit_per_minute: int = DEFAULT_RATE_LIMIT_PER_MINUTE

    def __post_init__(self):
        """Validate configuration."""
        if not self.api_key:
            raise ValueError("Motion API key is required")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"Motion base URL must be http(s): {self.base_url!r}")
        if self.rate_limit_per_minute < 1:
            raise ValueError(
                f"rate_limit_per_minute must be >= 1, got {self.rate_limit_per_minute}"
            )


def _coerce(model: type[M], params: M | Mapping[str, Any]) -> M:
    """Accept either a request model or a dict (camelCase or snake_case keys)."""
    if isinstance(params, model):
        return params
    return model.model_validate(params)


# =============================================================================
# Client
# =============================================================================


class MotionClient(IntegrationClient):
    """
    Async client for Motion API.

    Provides methods for:
    - Workspaces, statuses and users
    - Task CRUD, moving, assignment and completion
    - Projects, comments and schedules
    - Custom fields (beta endpoints) and recurring tasks

    The client handles:
    - Authentication via X-API-Key header
    - Rolling-window throughput cap shared by every call
    - Retry of rate-limit, server and network failures
    - Error mapping to IntegrationError subtypes
    """

    def __init__(self, config: MotionConfig, **kwargs: Any):
        """
        Initialize Motion client.

        Args:
            config: Motion configuration with API key
            **kwargs: Passed to IntegrationClient (transport, queue, ...)
        """
        self._config: MotionConfig = config
        super().__init__(config, **kwargs)

    @property
    def name(self) -> str:
        """Integration name."""
        return "motion"

    def _get_auth_headers(self) -> dict[str, str]:
        """Return Motion authentication headers."""
        return {"X-API-Key": self._config.api_key}

    # =========================================================================
    # Workspaces
    # =========================================================================

    async def list_workspaces(
        self,
        *,
        cursor: str | None = None,
        ids: list[str] | None = None,
    ) -> Any:
        """
        List workspaces the API key can see.

        Args:
            cursor: Pagination cursor
            ids: Only return these workspaces

        Returns:
            Response with `workspaces` and `meta`
        """
        return await self.request("GET", "/workspaces", query={"cursor": cursor, "ids": ids})

    async def get_workspace(self, workspace_id: str) -> Any:
        return await self.request("GET", f"/workspaces/{workspace_id}")

    # =========================================================================
    # Statuses
    # =========================================================================

    async def list_statuses(self, workspace_id: str | None = None) -> Any:
        """List task statuses, optionally for one workspace."""
        return await self.request("GET", "/statuses", query={"workspaceId": workspace_id})

    async def get_status(self, status_id: str) -> Any:
        return await self.request("GET", f"/statuses/{status_id}")

    # =========================================================================
    # Tasks
    # =========================================================================

    async def list_tasks(self, query: TaskQuery | Mapping[str, Any] | None = None) -> Any:
        """
        List tasks matching the given filters.

        Args:
            query: Filters and pagination cursor

        Returns:
            Response with `tasks` and `meta`
        """
        task_query = _coerce(TaskQuery, query or {})
        return await self.request("GET", "/tasks", query=task_query.to_params())

    async def list_all_tasks(
        self,
        query: TaskQuery | Mapping[str, Any] | None = None,
        *,
        max_items: int = 500,
    ) -> list[dict[str, Any]]:
        """
        List all tasks, following `meta.nextCursor` automatically.

        Every page is a separate queued request.

        Args:
            query: Filters (any cursor in it is the starting page)
            max_items: Maximum items to fetch (safety limit)

        Returns:
            List of all matching tasks
        """
        base = _coerce(TaskQuery, query or {})
        items: list[dict[str, Any]] = []
        cursor = base.cursor

        while len(items) < max_items:
            page = await self.list_tasks(base.model_copy(update={"cursor": cursor}))
            items.extend(page.get("tasks") or [])

            cursor = (page.get("meta") or {}).get("nextCursor")
            if not cursor:
                break

        return items[:max_items]

    async def get_task(self, task_id: str) -> Any:
        return await self.request("GET", f"/tasks/{task_id}")

    async def create_task(self, params: TaskCreate | Mapping[str, Any]) -> Any:
        """
        Create a new task.

        Args:
            params: Task fields; `name` and `workspace_id` are required

        Returns:
            Created task
        """
        data = _coerce(TaskCreate, params)
        logger.info(f"[motion] Creating task: {data.name} in workspace {data.workspace_id}")

        task = await self.request("POST", "/tasks", body=data.to_api_dict())

        logger.info(f"[motion] Created task: {task.get('id') if task else None}")
        return task

    async def update_task(self, task_id: str, params: TaskUpdate | Mapping[str, Any]) -> Any:
        """
        Update an existing task.

        Only provided fields are sent.

        Args:
            task_id: Task ID
            params: Fields to change

        Returns:
            Updated task
        """
        data = _coerce(TaskUpdate, params)
        logger.info(f"[motion] Updating task: {task_id}")
        return await self.request("PATCH", f"/tasks/{task_id}", body=data.to_api_dict())

    async def delete_task(self, task_id: str) -> bool:
        """
        Delete a task.

        Returns:
            True if deleted successfully
        """
        logger.info(f"[motion] Deleting task: {task_id}")
        await self.request("DELETE", f"/tasks/{task_id}")
        return True

    async def move_task(
        self,
        task_id: str,
        *,
        workspace_id: str | None = None,
        project_id: str | None = None,
        assignee_id: str | None = None,
    ) -> Any:
        """
        Move a task to another workspace and/or project.

        Args:
            task_id: Task ID
            workspace_id: Target workspace
            project_id: Target project
            assignee_id: New assignee in the target workspace

        Returns:
            Moved task
        """
        body = {
            key: value
            for key, value in {
                "workspaceId": workspace_id,
                "projectId": project_id,
                "assigneeId": assignee_id,
            }.items()
            if value is not None
        }
        if not body:
            raise ValueError("move_task needs a target workspace_id or project_id")

        logger.info(f"[motion] Moving task: {task_id} -> {body}")
        return await self.request("PATCH", f"/tasks/{task_id}/move", body=body)

    async def unassign_task(self, task_id: str) -> Any:
        """Remove the assignee from a task."""
        logger.info(f"[motion] Unassigning task: {task_id}")
        return await self.request("DELETE", f"/tasks/{task_id}/assignee")

    async def complete_task(self, task_id: str) -> Any:
        return await self.update_task(task_id, TaskUpdate(completed=True))

    async def uncomplete_task(self, task_id: str) -> Any:
        return await self.update_task(task_id, TaskUpdate(completed=False))

    # =========================================================================
    # Projects
    # =========================================================================

    async def list_projects(self, workspace_id: str, *, cursor: str | None = None) -> Any:
        """
        List projects in a workspace.

        Returns:
            Response with `projects` and `meta`
        """
        return await self.request(
            "GET", "/projects", query={"workspaceId": workspace_id, "cursor": cursor}
        )

    async def get_project(self, project_id: str) -> Any:
        return await self.request("GET", f"/projects/{project_id}")

    async def create_project(self, params: ProjectCreate | Mapping[str, Any]) -> Any:
        """
        Create a new project.

        Args:
            params: Project fields; `name` and `workspace_id` are required

        Returns:
            Created project
        """
        data = _coerce(ProjectCreate, params)
        logger.info(f"[motion] Creating project: {data.name} in workspace {data.workspace_id}")
        return await self.request("POST", "/projects", body=data.to_api_dict())

    async def update_project(
        self, project_id: str, params: ProjectUpdate | Mapping[str, Any]
    ) -> Any:
        data = _coerce(ProjectUpdate, params)
        logger.info(f"[motion] Updating project: {project_id}")
        return await self.request("PATCH", f"/projects/{project_id}", body=data.to_api_dict())

    async def delete_project(self, project_id: str) -> bool:
        logger.info(f"[motion] Deleting project: {project_id}")
        await self.request("DELETE", f"/projects/{project_id}")
        return True

    # =========================================================================
    # Users
    # =========================================================================

    async def get_current_user(self) -> Any:
        """Get the user that owns the API key."""
        return await self.request("GET", "/users/me")

    async def get_user(self, user_id: str) -> Any:
        return await self.request("GET", f"/users/{user_id}")

    async def list_users(
        self,
        *,
        workspace_id: str | None = None,
        team_id: str | None = None,
        cursor: str | None = None,
    ) -> Any:
        """
        List users in a workspace or team.

        Returns:
            Response with `users` and `meta`
        """
        return await self.request(
            "GET",
            "/users",
            query={"workspaceId": workspace_id, "teamId": team_id, "cursor": cursor},
        )

    # =========================================================================
    # Schedules
    # =========================================================================

    async def get_schedules(
        self,
        *,
        user_id: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> Any:
        """
        Get work schedules.

        Args:
            user_id: Defaults to the current user
            start_date: ISO 8601 start of range
            end_date: ISO 8601 end of range
        """
        return await self.request(
            "GET",
            "/schedules",
            query={"userId": user_id, "startDate": start_date, "endDate": end_date},
        )

    # =========================================================================
    # Comments
    # =========================================================================

    async def list_comments(self, task_id: str, *, cursor: str | None = None) -> Any:
        return await self.request("GET", "/comments", query={"taskId": task_id, "cursor": cursor})

    async def get_comment(self, comment_id: str) -> Any:
        return await self.request("GET", f"/comments/{comment_id}")

    async def create_comment(self, task_id: str, content: str) -> Any:
        """
        Add a comment to a task.

        Args:
            task_id: Task ID
            content: Comment body (GitHub Flavored Markdown)

        Returns:
            Created comment
        """
        logger.info(f"[motion] Creating comment on task: {task_id}")
        return await self.request(
            "POST", "/comments", body={"taskId": task_id, "content": content}
        )

    async def update_comment(self, comment_id: str, content: str) -> Any:
        return await self.request("PATCH", f"/comments/{comment_id}", body={"content": content})

    async def delete_comment(self, comment_id: str) -> bool:
        logger.info(f"[motion] Deleting comment: {comment_id}")
        await self.request("DELETE", f"/comments/{comment_id}")
        return True

    # =========================================================================
    # Custom Fields (beta)
    # =========================================================================

    async def list_custom_fields(self, workspace_id: str) -> Any:
        return await self.request("GET", f"/beta/workspaces/{workspace_id}/custom-fields")

    async def create_custom_field(
        self, workspace_id: str, params: CustomFieldCreate | Mapping[str, Any]
    ) -> Any:
        """
        Create a custom field in a workspace.

        Args:
            workspace_id: Workspace ID
            params: Field name, type and optional metadata

        Returns:
            Created custom field
        """
        data = _coerce(CustomFieldCreate, params)
        logger.info(f"[motion] Creating custom field: {data.name} in workspace {workspace_id}")
        return await self.request(
            "POST",
            f"/beta/workspaces/{workspace_id}/custom-fields",
            body=data.to_api_dict(),
        )

    async def delete_custom_field(self, workspace_id: str, custom_field_id: str) -> bool:
        logger.info(f"[motion] Deleting custom field: {custom_field_id}")
        await self.request(
            "DELETE", f"/beta/workspaces/{workspace_id}/custom-fields/{custom_field_id}"
        )
        return True

    async def add_custom_field_to_task(
        self, task_id: str, custom_field_instance_id: str, value: Any
    ) -> Any:
        """
        Set a custom field value on a task.

        Args:
            task_id: Task ID
            custom_field_instance_id: Custom field instance ID
            value: Typed value, e.g. {"type": "text", "value": "..."}
        """
        return await self.request(
            "POST",
            f"/beta/custom-field-values/task/{task_id}",
            body={"customFieldInstanceId": custom_field_instance_id, "value": value},
        )

    async def add_custom_field_to_project(
        self, project_id: str, custom_field_instance_id: str, value: Any
    ) -> Any:
        return await self.request(
            "POST",
            f"/beta/custom-field-values/project/{project_id}",
            body={"customFieldInstanceId": custom_field_instance_id, "value": value},
        )

    async def remove_custom_field_from_task(self, task_id: str, value_id: str) -> bool:
        await self.request(
            "DELETE", f"/beta/custom-field-values/task/{task_id}/custom-fields/{value_id}"
        )
        return True

    async def remove_custom_field_from_project(self, project_id: str, value_id: str) -> bool:
        await self.request(
            "DELETE", f"/beta/custom-field-values/project/{project_id}/custom-fields/{value_id}"
        )
        return True

    # =========================================================================
    # Recurring Tasks
    # =========================================================================

    async def list_recurring_tasks(self, workspace_id: str, *, cursor: str | None = None) -> Any:
        return await self.request(
            "GET", "/recurring-tasks", query={"workspaceId": workspace_id, "cursor": cursor}
        )

    async def get_recurring_task(self, recurring_task_id: str) -> Any:
        return await self.request("GET", f"/recurring-tasks/{recurring_task_id}")

    async def create_recurring_task(self, params: RecurringTaskCreate | Mapping[str, Any]) -> Any:
        """
        Create a recurring task template.

        Args:
            params: Template fields; name, workspace, frequency and assignee
                are required

        Returns:
            Created recurring task
        """
        data = _coerce(RecurringTaskCreate, params)
        logger.info(f"[motion] Creating recurring task: {data.name} ({data.frequency})")
        return await self.request("POST", "/recurring-tasks", body=data.to_api_dict())

    async def update_recurring_task(
        self, recurring_task_id: str, params: RecurringTaskUpdate | Mapping[str, Any]
    ) -> Any:
        data = _coerce(RecurringTaskUpdate, params)
        logger.info(f"[motion] Updating recurring task: {recurring_task_id}")
        return await self.request(
            "PATCH", f"/recurring-tasks/{recurring_task_id}", body=data.to_api_dict()
        )

    async def delete_recurring_task(self, recurring_task_id: str) -> bool:
        logger.info(f"[motion] Deleting recurring task: {recurring_task_id}")
        await self.request("DELETE", f"/recurring-tasks/{recurring_task_id}")
        return True

    # =========================================================================
    # Health Check
    # =========================================================================

    async def health_check(self) -> bool:
        """
        Check if Motion API is reachable with the configured key.

        Makes a single attempt: errors are not retried.

        Returns:
            True if healthy
        """
        try:
            await self.request("GET", "/users/me", retry_policy=NO_RETRY)
            return True
        except IntegrationError as e:
            logger.warning(f"[motion] Health check failed: {e}")
            return False


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_RATE_LIMIT_PER_MINUTE",
    "MotionClient",
    "MotionConfig",
]
