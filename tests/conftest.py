"""
Pytest configuration and fixtures for motion-mcp tests.
"""

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

# Add the repository root to path for imports
# This allows `from motion_mcp.pipeline import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from motion_mcp.integrations.motion import MotionClient, MotionConfig  # noqa: E402
from motion_mcp.pipeline.errors import TransportFailure  # noqa: E402

BASE_URL = "https://api.usemotion.com/v1"


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def motion_config():
    """Config with no retry delay and a cap high enough to never block."""
    return MotionConfig(
        api_key="test_motion_key",
        rate_limit_per_minute=1000,
        retry_delay=0.0,
    )


# =============================================================================
# HTTP stubbing
# =============================================================================


class RecordingHandler:
    """
    httpx.MockTransport handler that records requests and replays responses.

    `responses` is consumed in order; the last one repeats once exhausted.
    Entries may be httpx.Response objects or exceptions to raise.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [httpx.Response(200, json={})]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content) if self.last.content else None


@pytest.fixture
def make_client(motion_config):
    """Build a MotionClient whose HTTP calls go to a RecordingHandler."""

    def _make(*responses, config=None):
        handler = RecordingHandler(*responses)
        client = MotionClient(
            config or motion_config,
            http_transport=httpx.MockTransport(handler),
        )
        return client, handler

    return _make


# =============================================================================
# Pipeline fakes
# =============================================================================


class ScriptedTransport:
    """
    Transport double for pipeline tests.

    Each `send` pops the next scripted outcome: a TransportFailure is
    raised, anything else is returned.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[tuple] = []

    async def send(self, method, path, *, body=None, query=None):
        self.calls.append((method, path, body, query))
        outcome = self.outcomes[min(len(self.calls), len(self.outcomes)) - 1]
        if isinstance(outcome, TransportFailure):
            raise outcome
        return outcome


class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def scripted_transport():
    """Factory for ScriptedTransport doubles."""
    return ScriptedTransport


# =============================================================================
# Tool fakes
# =============================================================================


@pytest.fixture
def mock_motion_client():
    """MagicMock standing in for MotionClient, with async resource methods."""
    client = MagicMock(spec=MotionClient)
    for method_name in (
        "list_workspaces",
        "get_workspace",
        "list_statuses",
        "list_tasks",
        "get_task",
        "create_task",
        "update_task",
        "delete_task",
        "move_task",
        "unassign_task",
        "complete_task",
        "uncomplete_task",
        "list_projects",
        "get_project",
        "create_project",
        "get_current_user",
        "get_user",
        "list_users",
        "get_schedules",
        "list_comments",
        "get_comment",
        "create_comment",
        "update_comment",
        "delete_comment",
        "list_custom_fields",
        "create_custom_field",
        "delete_custom_field",
        "add_custom_field_to_task",
        "add_custom_field_to_project",
        "remove_custom_field_from_task",
        "remove_custom_field_from_project",
        "list_recurring_tasks",
        "get_recurring_task",
        "create_recurring_task",
        "delete_recurring_task",
        "health_check",
    ):
        setattr(client, method_name, AsyncMock())
    return client
