"""Pydantic schemas for post, reply, like, task and message endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from xeoos.schemas.common import RequestBody


class PostCreateRequest(RequestBody):
    title: Any = None
    content: Any = None
    topic: str | None = Field(default=None, description="Name of the topic to file the post under.")
    draft: bool = Field(default=False, description="Store unpublished without a translation task.")


class PostUpdateRequest(RequestBody):
    id: int | str | None = None
    title: str | None = None
    content: str | None = None
    topic: str | None = None
    published: bool | None = None


class IdRequest(RequestBody):
    id: int | str | None = None


class ReplyCreateRequest(RequestBody):
    content: Any = None
    postid: int | str | None = Field(default=None, description="Post to reply to (top-level reply).")
    replyid: str | None = Field(default=None, description="Reply to answer (nested reply).")


class LikeRequest(RequestBody):
    # Only the JSON booleans are valid; anything else maps to invalid_action
    action: Any = None
    post_id: int | str | None = Field(default=None, alias="postId")
    reply_id: str | None = Field(default=None, alias="replyId")


class LikeCheckRequest(RequestBody):
    post_id: Any = Field(default=None, alias="postId")


class TaskReportRequest(RequestBody):
    password: str | None = None
    task_uuid: str | None = Field(default=None, alias="taskUuid")
    status: str | None = None
