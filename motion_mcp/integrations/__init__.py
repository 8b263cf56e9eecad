"""
motion-mcp Integrations Layer.

Clients for external APIs. Each integration follows the same pattern:

1. Client: Authentication plus one method per endpoint
2. Schemas: Pydantic models for request bodies and queries

Every client call goes through `IntegrationClient.request`, which runs it
through the request pipeline (throughput queue, retry, classification).

Directory Structure:
    integrations/
    ├── base.py           # IntegrationConfig, HttpTransport, IntegrationClient
    └── motion/           # Motion task management
        ├── client.py     # MotionClient, MotionConfig
        └── schemas.py    # Pydantic request models

Usage:
    from motion_mcp.integrations import MotionClient, MotionConfig

    async with MotionClient(MotionConfig(api_key="...")) as client:
        me = await client.get_current_user()
"""

from motion_mcp.integrations.base import HttpTransport, IntegrationClient, IntegrationConfig
from motion_mcp.integrations.motion import MotionClient, MotionConfig
from motion_mcp.pipeline.errors import (
    AuthenticationError,
    ClientError,
    ErrorKind,
    IntegrationError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
)

__all__ = [
    "AuthenticationError",
    "ClientError",
    "ErrorKind",
    "HttpTransport",
    "IntegrationClient",
    "IntegrationConfig",
    "IntegrationError",
    "MotionClient",
    "MotionConfig",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
]
