"""
Tests for the HTTP app and the MCP server handlers.
"""

import pytest
from fastapi.testclient import TestClient
from mcp import types

from motion_mcp import __version__
from motion_mcp.app import dependencies
from motion_mcp.app.main import create_app
from motion_mcp.app.mcp_server import SERVER_NAME, build_server, dispatch
from motion_mcp.pipeline import NotFoundError, ServerError
from motion_mcp.tools import create_registry

QUEUE_STATS = {
    "cap": 9,
    "window_seconds": 60.0,
    "remaining": 9,
    "in_flight": False,
    "pending": 0,
}


@pytest.fixture
def registry(mock_motion_client):
    return create_registry(mock_motion_client)


@pytest.fixture
def http_client(mock_motion_client, registry):
    mock_motion_client.queue.get_stats.return_value = QUEUE_STATS
    app = create_app(registry=registry, client=mock_motion_client)
    with TestClient(app) as client:
        yield client


# =============================================================================
# HTTP App Tests
# =============================================================================


class TestHttpApp:
    """Tests for the FastAPI app."""

    def test_root(self, http_client):
        response = http_client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "service": "motion-mcp",
            "version": __version__,
            "status": "running",
        }

    def test_health(self, http_client, mock_motion_client):
        mock_motion_client.health_check.return_value = True

        response = http_client.get("/health")

        assert response.json() == {
            "status": "healthy",
            "motion": "reachable",
            "throughput": QUEUE_STATS,
        }

    def test_health_unreachable(self, http_client, mock_motion_client):
        mock_motion_client.health_check.return_value = False

        assert http_client.get("/health").json()["status"] == "unhealthy"

    def test_list_tools(self, http_client):
        body = http_client.get("/api/v1/tools").json()

        assert body["count"] == 35
        names = {tool["name"] for tool in body["tools"]}
        assert "motion_create_task" in names

    def test_call_tool(self, http_client, mock_motion_client):
        mock_motion_client.get_task.return_value = {"id": "t1"}

        response = http_client.post("/api/v1/tools/motion_get_task", json={"taskId": "t1"})

        assert response.status_code == 200
        body = response.json()
        assert "isError" not in body
        assert body["structuredContent"] == {"id": "t1"}
        mock_motion_client.get_task.assert_awaited_once_with("t1")

    def test_call_tool_without_body(self, http_client, mock_motion_client):
        mock_motion_client.get_current_user.return_value = {"id": "u1"}

        response = http_client.post("/api/v1/tools/motion_get_current_user")

        assert response.status_code == 200
        assert response.json()["structuredContent"] == {"id": "u1"}

    def test_call_tool_invalid_arguments(self, http_client):
        response = http_client.post("/api/v1/tools/motion_get_task", json={})

        assert response.status_code == 200
        body = response.json()
        assert body["isError"] is True
        assert body["structuredContent"]["kind"] == "invalid_arguments"

    def test_unknown_tool(self, http_client):
        response = http_client.post("/api/v1/tools/motion_fly", json={})

        assert response.status_code == 404
        assert response.json()["detail"] == "Unknown tool: motion_fly"

    def test_health_without_client(self, registry):
        app = create_app(registry=registry)

        with TestClient(app) as client:
            assert client.get("/health").json()["status"] == "unhealthy"


class TestHttpAppLifespan:
    """The app builds its own services when none are injected."""

    def test_builds_and_closes_services(self, monkeypatch):
        monkeypatch.setenv("MOTION_API_KEY", "secret")
        monkeypatch.setattr(dependencies, "load_dotenv", lambda: False)
        dependencies.get_settings.cache_clear()

        try:
            with TestClient(create_app()) as client:
                assert client.get("/api/v1/tools").json()["count"] == 35
        finally:
            dependencies.get_settings.cache_clear()

        assert dependencies._client is None


# =============================================================================
# MCP Server Tests
# =============================================================================


class TestMcpServer:
    """Tests for the MCP list_tools / call_tool handlers."""

    def test_build_server(self, registry):
        assert build_server(registry).name == SERVER_NAME

    @pytest.mark.asyncio
    async def test_dispatch_success(self, registry, mock_motion_client):
        mock_motion_client.get_task.return_value = {"id": "t1"}

        result = await dispatch(registry, "motion_get_task", {"taskId": "t1"})

        assert result.isError is False
        assert len(result.content) == 1
        assert result.content[0].type == "text"
        assert '"id": "t1"' in result.content[0].text
        assert result.structuredContent == {"id": "t1"}

    @pytest.mark.asyncio
    async def test_dispatch_error_result(self, registry, mock_motion_client):
        mock_motion_client.get_task.side_effect = ServerError(
            "API error (503): unavailable", "motion", status_code=503
        )

        result = await dispatch(registry, "motion_get_task", {"taskId": "t1"})

        assert result.isError is True
        assert result.content[0].text == "Error: API error (503): unavailable"
        assert result.structuredContent["kind"] == "server_error"
        assert result.structuredContent["retryable"] is True

    @pytest.mark.asyncio
    async def test_dispatch_unknown_tool(self, registry):
        result = await dispatch(registry, "motion_fly", {})

        assert result.isError is True
        assert result.content[0].text == "Error: Unknown tool: motion_fly"
        assert result.structuredContent == {"kind": "unknown_tool", "retryable": False}

    @pytest.mark.asyncio
    async def test_dispatch_none_arguments(self, registry, mock_motion_client):
        mock_motion_client.get_current_user.return_value = {"id": "u1"}

        result = await dispatch(registry, "motion_get_current_user", None)

        assert '"id": "u1"' in result.content[0].text


class TestMcpServerHandlers:
    """The registered handlers, as the SDK invokes them for a client request."""

    @staticmethod
    async def call(server, name, arguments):
        handler = server.request_handlers[types.CallToolRequest]
        request = types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name=name, arguments=arguments),
        )
        return (await handler(request)).root

    @pytest.mark.asyncio
    async def test_error_kind_reaches_client(self, registry, mock_motion_client):
        mock_motion_client.get_task.side_effect = NotFoundError(
            "Resource not found: /tasks/t_missing", "motion", status_code=404
        )
        server = build_server(registry)

        result = await self.call(server, "motion_get_task", {"taskId": "t_missing"})

        assert result.isError is True
        assert result.structuredContent["kind"] == "not_found"
        assert result.structuredContent["retryable"] is False
        assert "Resource not found" in result.content[0].text

    @pytest.mark.asyncio
    async def test_invalid_arguments_are_structured(self, registry, mock_motion_client):
        server = build_server(registry)

        result = await self.call(server, "motion_get_task", {})

        assert result.isError is True
        assert result.structuredContent["kind"] == "invalid_arguments"
        mock_motion_client.get_task.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success(self, registry, mock_motion_client):
        mock_motion_client.list_workspaces.return_value = {"workspaces": [{"id": "ws_1"}]}
        server = build_server(registry)

        result = await self.call(server, "motion_list_workspaces", {})

        assert result.isError is False
        assert result.structuredContent is not None

    @pytest.mark.asyncio
    async def test_list_tools_carries_title_and_hints(self, registry):
        server = build_server(registry)
        handler = server.request_handlers[types.ListToolsRequest]

        result = (await handler(types.ListToolsRequest(method="tools/list"))).root

        assert len(result.tools) == 35
        tools = {tool.name: tool for tool in result.tools}

        get_task = tools["motion_get_task"]
        assert get_task.title == "Get Task"
        assert get_task.annotations.title == "Get Task"
        assert get_task.annotations.readOnlyHint is True

        delete_task = tools["motion_delete_task"]
        assert delete_task.annotations.readOnlyHint is not True
        assert delete_task.annotations.destructiveHint is not False
        assert delete_task.annotations.idempotentHint is True

        create_task = tools["motion_create_task"]
        assert create_task.annotations.destructiveHint is False
        assert create_task.annotations.openWorldHint is True
