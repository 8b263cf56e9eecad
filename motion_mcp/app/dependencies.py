"""
Dependency Injection for motion-mcp.

Provides the settings, the shared MotionClient and the tool registry as
process-wide singletons. Both servers (MCP stdio and HTTP) build on these,
so every tool call in a process shares one throughput queue.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv

from motion_mcp.config.schemas import AppSettings
from motion_mcp.integrations.motion import DEFAULT_BASE_URL, MotionClient
from motion_mcp.tools import ToolRegistry, create_registry

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get application settings from environment.

    A `.env` file in the working directory is loaded first; real
    environment variables win over it. Uses lru_cache for singleton pattern.

    Raises:
        ValueError: If MOTION_API_KEY is missing or a value is invalid
    """
    load_dotenv()

    api_key = os.getenv("MOTION_API_KEY")
    if not api_key:
        raise ValueError("MOTION_API_KEY environment variable is required")

    return AppSettings(
        # Service
        debug=_env_flag("MOTION_DEBUG"),
        log_level=os.getenv("MOTION_LOG_LEVEL", "INFO"),
        # Motion API
        api_key=api_key,
        base_url=os.getenv("MOTION_API_BASE_URL", DEFAULT_BASE_URL),
        # Throughput and retries
        rate_limit_per_minute=int(os.getenv("MOTION_RATE_LIMIT_PER_MINUTE", "12")),
        rate_limit_safety_factor=float(os.getenv("MOTION_RATE_LIMIT_SAFETY_FACTOR", "0.8")),
        request_timeout=float(os.getenv("MOTION_REQUEST_TIMEOUT", "30")),
        retry_base_delay=float(os.getenv("MOTION_RETRY_BASE_DELAY", "5")),
        max_attempts=int(os.getenv("MOTION_MAX_ATTEMPTS", "3")),
        # HTTP server
        host=os.getenv("MOTION_HOST", "127.0.0.1"),
        port=int(os.getenv("MOTION_PORT", "8000")),
    )


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging.

    Logs go to stderr; on the MCP stdio transport stdout carries protocol
    messages only.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)


# Global instances (initialized on first access)
_client: MotionClient | None = None
_registry: ToolRegistry | None = None


def get_client() -> MotionClient:
    """
    Get the shared Motion client.

    Created on first call from settings.
    """
    global _client
    if _client is None:
        settings = get_settings()
        _client = MotionClient(settings.to_motion_config())
        logger.info(
            f"[motion] Client ready: {settings.base_url} "
            f"(cap {_client.queue.cap} calls / {_client.queue.window_seconds:.0f}s)"
        )
    return _client


def get_registry() -> ToolRegistry:
    """Get the tool registry, bound to the shared client."""
    global _registry
    if _registry is None:
        _registry = create_registry(get_client())
    return _registry


async def initialize_services() -> ToolRegistry:
    """
    Initialize client and registry.

    Called at startup by both servers.
    """
    registry = get_registry()
    logger.info(f"Initialized {len(registry)} tools")
    return registry


async def shutdown_services() -> None:
    """Close the client and drop the singletons."""
    global _client, _registry
    if _client is not None:
        await _client.close()
    _client = None
    _registry = None
    logger.info("Services shut down")
