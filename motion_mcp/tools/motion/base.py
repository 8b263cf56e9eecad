"""
Motion Tool Base.

Every Motion tool is a thin adapter: validate arguments with a pydantic
model, call one or more MotionClient methods, and return the JSON result.

The argument model is the single source of truth for a tool's input: the
JSON Schema advertised to MCP clients is generated from it (camelCase
names), and `execute` validates against it.

Errors are returned, never raised:
- Invalid arguments -> error result with kind "invalid_arguments"
- IntegrationError  -> error result carrying kind, status_code, retryable
"""

from __future__ import annotations

import dataclasses
import json
import logging
from abc import abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import ValidationError

from motion_mcp.integrations.motion.schemas import MotionModel
from motion_mcp.pipeline.errors import IntegrationError
from motion_mcp.tools.base import Tool, ToolAnnotations, ToolResult

if TYPE_CHECKING:
    from motion_mcp.integrations.motion import MotionClient

logger = logging.getLogger(__name__)

INVALID_ARGUMENTS = "invalid_arguments"


# =============================================================================
# Annotation presets
# =============================================================================

READ_ONLY = ToolAnnotations(read_only_hint=True, destructive_hint=False, idempotent_hint=True)
CREATES = ToolAnnotations(destructive_hint=False)
UPDATES = ToolAnnotations(destructive_hint=False, idempotent_hint=True)
DELETES = ToolAnnotations(destructive_hint=True, idempotent_hint=True)


# =============================================================================
# Result helpers
# =============================================================================


def list_result(payload: Any, key: str) -> dict[str, Any]:
    """
    Shape a list response as {<key>: [...], meta?, count}.

    Motion returns some collections bare and others wrapped as
    {<key>: [...], meta: {...}}; both are accepted.
    """
    meta = None
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        items = payload.get(key) or []
        meta = payload.get("meta")
    else:
        items = []

    result: dict[str, Any] = {key: items}
    if meta is not None:
        result["meta"] = meta
    result["count"] = len(items)
    return result


def done(message: str) -> dict[str, Any]:
    """Result for delete-style tools."""
    return {"success": True, "message": message}


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


# =============================================================================
# Base Tool
# =============================================================================


class MotionTool(Tool):
    """
    Base class for Motion tools.

    Subclasses set the class attributes and implement `run`:

        class GetTaskTool(MotionTool):
            tool_name = "motion_get_task"
            tool_title = "Get Task"
            tool_description = "Get detailed information about a specific task"
            args_model = TaskIdArgs
            tool_annotations = READ_ONLY

            async def run(self, args: TaskIdArgs) -> Any:
                return await self._client.get_task(args.task_id)
    """

    tool_name: ClassVar[str]
    tool_title: ClassVar[str | None] = None
    tool_description: ClassVar[str]
    args_model: ClassVar[type[MotionModel]]
    tool_annotations: ClassVar[ToolAnnotations] = CREATES

    def __init__(self, client: MotionClient):
        """
        Initialize the tool.

        Args:
            client: Motion API client
        """
        self._client = client

    @property
    def name(self) -> str:
        return self.tool_name

    @property
    def description(self) -> str:
        return self.tool_description

    @property
    def input_schema(self) -> dict[str, Any]:
        schema = self.args_model.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.setdefault("properties", {})
        return schema

    @property
    def annotations(self) -> ToolAnnotations:
        return dataclasses.replace(self.tool_annotations, title=self.tool_title)

    @abstractmethod
    async def run(self, args: Any) -> Any:
        """Call the client with validated arguments and return JSON-able data."""
        ...

    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        """
        Validate arguments, run the tool, and wrap the outcome.

        Args:
            arguments: Raw arguments from the protocol layer

        Returns:
            ToolResult with the JSON result, or an error result
        """
        try:
            args = self.args_model.model_validate(arguments or {})
        except ValidationError as e:
            message = _describe_validation_error(e)
            logger.warning(f"[{self.name}] Invalid arguments: {message}")
            return ToolResult.error(
                f"Invalid arguments: {message}",
                structured={
                    "kind": INVALID_ARGUMENTS,
                    "message": message,
                    "status_code": None,
                    "retryable": False,
                },
            )

        try:
            payload = await self.run(args)
        except IntegrationError as e:
            logger.error(f"[{self.name}] Failed: {e}")
            return ToolResult.error(e.message, structured=e.to_dict())

        structured = payload if isinstance(payload, dict) else {"result": payload}
        return ToolResult.success(
            json.dumps(payload, indent=2, default=str),
            structured=structured,
        )


__all__ = [
    "CREATES",
    "DELETES",
    "INVALID_ARGUMENTS",
    "READ_ONLY",
    "UPDATES",
    "MotionTool",
    "done",
    "list_result",
]
