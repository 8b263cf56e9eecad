"""
motion-mcp - Motion tools over HTTP

FastAPI application entry point. Exposes the same tool registry as the
MCP stdio server, for clients that speak plain HTTP.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from motion_mcp import __version__
from motion_mcp.app.dependencies import (
    configure_logging,
    get_client,
    get_settings,
    initialize_services,
    shutdown_services,
)
from motion_mcp.integrations.motion import MotionClient
from motion_mcp.tools import ToolRegistry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the shared client and registry unless they were injected.
    """
    owns_services = app.state.registry is None

    # Startup
    if owns_services:
        logger.info("Starting motion-mcp services...")
        try:
            app.state.registry = await initialize_services()
            app.state.client = get_client()
            logger.info("motion-mcp services initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize services: {e}", exc_info=True)
            raise

    yield

    # Shutdown
    if owns_services:
        logger.info("Shutting down motion-mcp services...")
        await shutdown_services()
        app.state.registry = None
        app.state.client = None


def create_app(
    *,
    registry: ToolRegistry | None = None,
    client: MotionClient | None = None,
    debug: bool = False,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        registry: Tool registry to serve (built from settings if omitted)
        client: Client used by /health (built from settings if omitted)
        debug: FastAPI debug mode
    """
    app = FastAPI(
        title="motion-mcp",
        description="Motion task management tools with rate-limit-aware request handling",
        version=__version__,
        lifespan=lifespan,
        debug=debug,
    )
    app.state.registry = registry
    app.state.client = client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["root"])
    async def root() -> dict[str, str]:
        """Root endpoint with service info."""
        return {
            "service": "motion-mcp",
            "version": __version__,
            "status": "running",
        }

    @app.get("/health", tags=["health"])
    async def health_check(request: Request) -> dict[str, Any]:
        """
        Health check endpoint.

        Reports whether the Motion API accepts the configured key, plus
        the state of the throughput queue.
        """
        client: MotionClient | None = request.app.state.client
        if client is None:
            return {"status": "unhealthy", "error": "client not initialized"}

        reachable = await client.health_check()
        return {
            "status": "healthy" if reachable else "unhealthy",
            "motion": "reachable" if reachable else "unreachable",
            "throughput": client.queue.get_stats(),
        }

    @app.get("/api/v1/tools", tags=["tools"])
    async def list_tools(request: Request) -> dict[str, Any]:
        """List all tools in MCP schema format."""
        tools: ToolRegistry = request.app.state.registry
        return {
            "tools": tools.to_mcp_schemas(),
            "count": len(tools),
        }

    @app.post("/api/v1/tools/{name}", tags=["tools"])
    async def call_tool(
        name: str,
        request: Request,
        arguments: dict[str, Any] | None = Body(default=None),
    ) -> dict[str, Any]:
        """
        Execute a tool.

        The request body is the tool's arguments object. Tool failures are
        reported in the result (`isError` plus `structuredContent.kind`),
        not as HTTP errors; only an unknown tool name gives 404.
        """
        tools: ToolRegistry = request.app.state.registry
        tool = tools.get(name)
        if tool is None:
            raise HTTPException(status_code=404, detail=f"Unknown tool: {name}")

        logger.info(f"[http] Calling tool: {name}")
        result = await tool.execute(arguments or {})
        return result.to_dict()

    return app


def run() -> None:
    """Console entry point: serve the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)

    uvicorn.run(
        "motion_mcp.app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
