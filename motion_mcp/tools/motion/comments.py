"""Task comment tools."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from motion_mcp.integrations.motion.schemas import MotionModel
from motion_mcp.tools.motion.base import (
    CREATES,
    DELETES,
    READ_ONLY,
    UPDATES,
    MotionTool,
    done,
    list_result,
)


class ListCommentsArgs(MotionModel):
    task_id: str = Field(..., min_length=1, description="Task ID to list comments for")
    cursor: str | None = Field(None, description="Pagination cursor from previous response")


class CreateCommentArgs(MotionModel):
    task_id: str = Field(..., min_length=1, description="Task ID to comment on")
    content: str = Field(..., min_length=1, description="Comment content (Markdown)")


class CommentIdArgs(MotionModel):
    comment_id: str = Field(..., min_length=1, description="The ID of the comment")


class UpdateCommentArgs(MotionModel):
    comment_id: str = Field(..., min_length=1, description="Comment ID to update")
    content: str = Field(..., min_length=1, description="New comment content")


class ListCommentsTool(MotionTool):
    tool_name = "motion_list_comments"
    tool_title = "List Comments"
    tool_description = "List comments on a task"
    args_model = ListCommentsArgs
    tool_annotations = READ_ONLY

    async def run(self, args: ListCommentsArgs) -> Any:
        payload = await self._client.list_comments(args.task_id, cursor=args.cursor)
        return list_result(payload, "comments")


class GetCommentTool(MotionTool):
    tool_name = "motion_get_comment"
    tool_title = "Get Comment"
    tool_description = "Get a specific comment"
    args_model = CommentIdArgs
    tool_annotations = READ_ONLY

    async def run(self, args: CommentIdArgs) -> Any:
        return await self._client.get_comment(args.comment_id)


class CreateCommentTool(MotionTool):
    tool_name = "motion_create_comment"
    tool_title = "Create Comment"
    tool_description = "Add a comment to a task"
    args_model = CreateCommentArgs
    tool_annotations = CREATES

    async def run(self, args: CreateCommentArgs) -> Any:
        return await self._client.create_comment(args.task_id, args.content)


class UpdateCommentTool(MotionTool):
    tool_name = "motion_update_comment"
    tool_title = "Update Comment"
    tool_description = "Replace the content of an existing comment"
    args_model = UpdateCommentArgs
    tool_annotations = UPDATES

    async def run(self, args: UpdateCommentArgs) -> Any:
        return await self._client.update_comment(args.comment_id, args.content)


class DeleteCommentTool(MotionTool):
    tool_name = "motion_delete_comment"
    tool_title = "Delete Comment"
    tool_description = "Delete a comment"
    args_model = CommentIdArgs
    tool_annotations = DELETES

    async def run(self, args: CommentIdArgs) -> Any:
        await self._client.delete_comment(args.comment_id)
        return done(f"Comment {args.comment_id} deleted successfully")


__all__ = [
    "CreateCommentTool",
    "DeleteCommentTool",
    "GetCommentTool",
    "ListCommentsTool",
    "UpdateCommentTool",
]
