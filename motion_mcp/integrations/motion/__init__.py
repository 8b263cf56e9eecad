"""
Motion Integration for motion-mcp.

Motion is an AI calendar and project manager. This integration provides:
- Workspace, status and user lookup
- Task, project and comment management
- Custom fields and recurring task templates
- Schedules

Usage:
    from motion_mcp.integrations.motion import MotionClient, MotionConfig

    client = MotionClient(MotionConfig(api_key="..."))

    task = await client.create_task({
        "name": "Prepare slides",
        "workspaceId": "ws_123",
        "priority": "HIGH",
    })

API Reference:
    https://docs.usemotion.com/
"""

from motion_mcp.integrations.motion.client import (
    DEFAULT_BASE_URL,
    DEFAULT_RATE_LIMIT_PER_MINUTE,
    MotionClient,
    MotionConfig,
)
from motion_mcp.integrations.motion.schemas import (
    AutoScheduled,
    CustomFieldCreate,
    CustomFieldType,
    DeadlineType,
    ProjectCreate,
    ProjectUpdate,
    RecurringTaskCreate,
    RecurringTaskUpdate,
    TaskCreate,
    TaskPriority,
    TaskQuery,
    TaskUpdate,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_RATE_LIMIT_PER_MINUTE",
    "AutoScheduled",
    "CustomFieldCreate",
    "CustomFieldType",
    "DeadlineType",
    "MotionClient",
    "MotionConfig",
    "ProjectCreate",
    "ProjectUpdate",
    "RecurringTaskCreate",
    "RecurringTaskUpdate",
    "TaskCreate",
    "TaskPriority",
    "TaskQuery",
    "TaskUpdate",
]
