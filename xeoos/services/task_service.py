"""Translation task lifecycle.

A task is created PENDING whenever a post is published or a reply is
written, then handed to the translate worker. The worker writes the
translated columns itself and calls back through :meth:`TaskService.report`.

Dispatch failures never fail the content write: the task is parked as FAIL
and the author can retry it from the task list.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from xeoos.adapters.realtime.base import AbstractRealtime
from xeoos.adapters.translate.base import AbstractTranslateDispatcher
from xeoos.core.config import settings
from xeoos.core.errors import (
    AppError,
    AuthenticationAppError,
    ForbiddenAppError,
    NotFoundAppError,
    ValidationAppError,
)
from xeoos.core.passwords import codes_match
from xeoos.db.models import TASK_DONE, TASK_FAIL, TASK_PENDING, Post, Task
from xeoos.services.paging import page_window
from xeoos.services.search_service import SearchService

logger = logging.getLogger(__name__)

TASK_STATUSES = (TASK_PENDING, TASK_DONE, TASK_FAIL)
REPLY_SNIPPET_CHARS = 20


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def serialize_task(task: Task) -> dict[str, Any]:
    reply = task.reply
    return {
        "id": task.id,
        "status": task.status,
        "createdAt": _iso(task.created_at),
        "post": {"id": task.post.id, "title": task.post.title} if task.post else None,
        "reply": (
            {
                "content": reply.content[:REPLY_SNIPPET_CHARS],
                "postUid": reply.post_uid or reply.belong_post_id,
            }
            if reply
            else None
        ),
    }


class TaskService:
    def __init__(
        self,
        db: Session,
        dispatcher: AbstractTranslateDispatcher,
        realtime: AbstractRealtime | None = None,
        search: SearchService | None = None,
    ) -> None:
        self.db = db
        self.dispatcher = dispatcher
        self.realtime = realtime
        self.search = search

    async def dispatch(self, task: Task) -> bool:
        """Send ``task`` to the worker; on failure mark it FAIL and return False."""

        try:
            await self.dispatcher.dispatch(task.id)
        except AppError as exc:
            task.status = TASK_FAIL
            self.db.commit()
            logger.warning("task.dispatch_failed", extra={"task_id": task.id, "error_code": exc.code})
            return False
        return True

    async def create_and_dispatch(
        self,
        *,
        user_uid: int,
        post_id: int | None = None,
        reply_id: str | None = None,
    ) -> Task:
        task = Task(status=TASK_PENDING, user_uid=user_uid, post_id=post_id, reply_id=reply_id)
        self.db.add(task)
        self.db.commit()
        logger.info("task.created", extra={"task_id": task.id, "post_id": post_id, "reply_id": reply_id})

        await self.dispatch(task)
        return task

    def list_tasks(self, user_uid: int, page: Any = 1) -> dict[str, Any]:
        """Return the user's tasks, unfinished ones first, newest first within each group."""

        window = page_window(page)
        done_last = case((Task.status == TASK_DONE, 1), else_=0)

        tasks = self.db.scalars(
            select(Task)
            .where(Task.user_uid == user_uid)
            .order_by(done_last, Task.created_at.desc())
            .offset(window.skip)
            .limit(window.limit)
        ).all()
        total = self.db.scalar(select(func.count()).select_from(Task).where(Task.user_uid == user_uid)) or 0

        return {
            "ok": True,
            "tasks": [serialize_task(task) for task in tasks],
            "hasMore": window.has_more(total),
            "total": total,
        }

    async def retry(self, user_uid: int, task_id: str | None) -> dict[str, Any]:
        if not task_id:
            raise ValidationAppError(code="missing_id", message="ID is required")

        task = self.db.scalar(select(Task).where(Task.id == task_id, Task.status == TASK_FAIL))
        if task is None:
            raise NotFoundAppError(code="task_not_retryable", message="Task does not exist or has not failed")
        if task.user_uid != user_uid:
            raise ForbiddenAppError(code="task_forbidden", message="No permission to retry this task")

        task.status = TASK_PENDING
        self.db.commit()
        logger.info("task.retried", extra={"task_id": task.id})

        await self.dispatch(task)
        return {"ok": True}

    async def report(self, password: str | None, task_uuid: str | None, status: str | None) -> dict[str, Any]:
        """Apply a status report from the translate worker.

        Raises:
            AuthenticationAppError: The shared worker password does not match.
            ValidationAppError: ``taskUuid`` or ``status`` is missing or invalid.
            NotFoundAppError: Unknown task.
        """

        expected = settings.translate.worker_password
        if not expected or not password or not codes_match(expected, password):
            logger.warning("task.report_rejected")
            raise AuthenticationAppError(code="unauthorized", message="Unauthorized")

        if not task_uuid or not status:
            raise ValidationAppError(code="missing_parameters", message="Missing required parameters")
        if status not in TASK_STATUSES:
            raise ValidationAppError(
                code="invalid_request",
                message="Invalid task status",
                details={"field": "status"},
            )

        task = self.db.get(Task, task_uuid)
        if task is None:
            raise NotFoundAppError(code="task_not_found", message="Task not found")

        task.status = status
        self.db.commit()
        logger.info("task.reported", extra={"task_id": task.id, "status": status})

        if status == TASK_DONE and task.post_id is not None and self.search is not None:
            post = self.db.get(Post, task.post_id)
            if post is not None and post.published:
                try:
                    await self.search.index_post(post)
                except AppError as exc:
                    logger.warning("task.reindex_failed", extra={"post_id": post.id, "error_code": exc.code})

        if self.realtime is not None:
            try:
                await self.realtime.broadcast(
                    {"type": "task", "content": {"uuid": task.id, "status": status}, "title": "", "link": ""}
                )
            except AppError as exc:
                logger.warning("task.broadcast_failed", extra={"task_id": task.id, "error_code": exc.code})

        return {"ok": True}
