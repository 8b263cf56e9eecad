"""
Tool Base Classes (MCP-Aligned).

Core abstractions shared by every tool and by both protocol servers:
- Tool: Base class for all tools
- ToolResult: Result from tool execution
- ToolAnnotations: Behavioral hints for tools
- ContentBlock: Content blocks in tool results

MCP Alignment:
    - Tool has name, description, input_schema
    - ToolResult has content blocks, an is_error flag and optional
      structured content
    - Annotations are advisory hints only

Usage:
    class EchoTool(Tool):
        @property
        def name(self) -> str:
            return "echo"

        @property
        def description(self) -> str:
            return "Echo the input back"

        @property
        def input_schema(self) -> dict:
            return {
                "type": "object",
                "properties": {"text": {"type": "string"}},
                "required": ["text"],
            }

        async def execute(self, arguments: dict) -> ToolResult:
            return ToolResult.success(arguments["text"])
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ContentType(Enum):
    """Type of content in a tool result (MCP-aligned)."""

    TEXT = "text"


@dataclass(frozen=True, slots=True)
class ContentBlock:
    """
    Content block in a tool result.

    Motion tools only produce TEXT blocks (JSON-formatted API responses).
    """

    type: ContentType
    text_content: str | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_text(
        cls,
        content: str,
        *,
        annotations: dict[str, Any] | None = None,
    ) -> ContentBlock:
        """Create a text content block."""
        return cls(
            type=ContentType.TEXT,
            text_content=content,
            annotations=annotations or {},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {"type": self.type.value}

        if self.text_content is not None:
            result["text"] = self.text_content
        if self.annotations:
            result["annotations"] = self.annotations

        return result


@dataclass(frozen=True, slots=True)
class ToolAnnotations:
    """
    Behavioral hints for tools (MCP-aligned).

    ADVISORY only: nothing enforces them.

    Attributes:
        title: Human-readable title for display
        read_only_hint: Tool does not modify Motion data
        destructive_hint: For non-read-only tools, may destroy data
        idempotent_hint: Repeated calls with same args have no additional effect
        open_world_hint: Tool interacts with external entities
    """

    title: str | None = None
    read_only_hint: bool = False
    destructive_hint: bool = True
    idempotent_hint: bool = False
    open_world_hint: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {}

        if self.title is not None:
            result["title"] = self.title
        if self.read_only_hint:
            result["readOnlyHint"] = True
        if not self.destructive_hint:
            result["destructiveHint"] = False
        if self.idempotent_hint:
            result["idempotentHint"] = True
        if self.open_world_hint:
            result["openWorldHint"] = True

        return result


@dataclass(frozen=True, slots=True)
class ToolResult:
    """
    Result from tool execution (MCP-aligned).

    Error Handling:
        Tool execution errors are reported IN the result, not raised.
        The structured content of an error result keeps the error kind
        inspectable, so callers can tell "not found" from "try again
        later" from "fix your credentials" without parsing text.

    Example:
        ToolResult.success('{"id": "t_1"}', structured={"id": "t_1"})

        ToolResult.error(
            "Resource not found. Task t_9 does not exist",
            structured={"kind": "not_found", "retryable": False},
        )
    """

    content: tuple[ContentBlock, ...]
    is_error: bool = False
    structured_content: dict[str, Any] | None = None

    @classmethod
    def success(
        cls,
        text: str,
        *,
        structured: dict[str, Any] | None = None,
        additional_content: tuple[ContentBlock, ...] | None = None,
    ) -> ToolResult:
        """
        Create a successful result.

        Args:
            text: Human-readable result text
            structured: Optional structured data for programmatic use
            additional_content: Additional content blocks

        Returns:
            ToolResult with is_error=False
        """
        content = [ContentBlock.from_text(text)]
        if additional_content:
            content.extend(additional_content)

        return cls(
            content=tuple(content),
            is_error=False,
            structured_content=structured,
        )

    @classmethod
    def error(
        cls,
        message: str,
        *,
        structured: dict[str, Any] | None = None,
    ) -> ToolResult:
        """
        Create an error result.

        Args:
            message: Error description
            structured: Optional structured error data

        Returns:
            ToolResult with is_error=True
        """
        return cls(
            content=(ContentBlock.from_text(f"Error: {message}"),),
            is_error=True,
            structured_content=structured,
        )

    @property
    def text(self) -> str:
        """Get the primary text content (convenience accessor)."""
        for block in self.content:
            if block.type == ContentType.TEXT and block.text_content:
                return block.text_content
        return ""

    @property
    def error_kind(self) -> str | None:
        """Kind of the failure for error results, if known."""
        if not self.is_error or not self.structured_content:
            return None
        return self.structured_content.get("kind")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "content": [block.to_dict() for block in self.content],
        }

        if self.is_error:
            result["isError"] = True
        if self.structured_content is not None:
            result["structuredContent"] = self.structured_content

        return result


class Tool(ABC):
    """
    Base class for all tools (MCP-aligned).

    Contract:
        - name: Unique identifier (snake_case, e.g. "motion_list_tasks")
        - description: What the tool does, for the calling model
        - input_schema: JSON Schema for arguments
        - execute: Async method that performs the action
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for the tool."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        ...

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """
        JSON Schema defining expected input arguments.

        Must be an object schema with `type: "object"` and `properties`.
        """
        ...

    @property
    def annotations(self) -> ToolAnnotations:
        """Behavioral hints for the tool."""
        return ToolAnnotations()

    @abstractmethod
    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        """
        Execute the tool with the given arguments.

        Args:
            arguments: Dict matching input_schema

        Returns:
            ToolResult with execution outcome

        Important:
            Report errors in ToolResult.error(), don't raise exceptions.
        """
        ...

    def to_mcp_schema(self) -> dict[str, Any]:
        """Convert to MCP tool schema, including annotations."""
        schema: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

        annotations = self.annotations.to_dict()
        if annotations:
            schema["annotations"] = annotations

        return schema

    def __repr__(self) -> str:
        return f"<Tool {self.name}>"


__all__ = [
    "ContentBlock",
    "ContentType",
    "Tool",
    "ToolAnnotations",
    "ToolResult",
]
