"""Post writes (create, update, delete) and source text lookup.

Translated columns are never touched here. Publishing hands the post to the
translate worker through a task; the search document is written once that
task reports back.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from xeoos.core.errors import (
    AppError,
    ForbiddenAppError,
    NotFoundAppError,
    ValidationAppError,
)
from xeoos.core.auth import Claims
from xeoos.db.models import ROLE_ADMIN, Post, Reply, Topic
from xeoos.i18n.locales import resolve_locale
from xeoos.i18n.messages import translate
from xeoos.services.search_service import SearchService
from xeoos.services.task_service import TaskService

logger = logging.getLogger(__name__)

ORIGIN_TYPES = ("post", "reply")


class PostService:
    def __init__(self, db: Session, tasks: TaskService, search: SearchService) -> None:
        self.db = db
        self.tasks = tasks
        self.search = search

    def _topic(self, name: Any) -> Topic:
        topic = self.db.get(Topic, name) if isinstance(name, str) and name else None
        if topic is None:
            raise ValidationAppError(
                code="topic_not_found",
                message="Topic does not exist",
                details={"field": "topic"},
            )
        return topic

    def _owned_post(self, post_id: Any, user: Claims, *, allow_admin: bool, forbidden_code: str) -> Post:
        if post_id in (None, ""):
            raise ValidationAppError(code="missing_id", message="ID is required")
        try:
            post = self.db.get(Post, int(post_id))
        except (TypeError, ValueError):
            post = None
        if post is None:
            raise NotFoundAppError(code="post_not_found", message="Post not found")

        is_owner = post.user_uid == user["uid"]
        if not is_owner and not (allow_admin and user.get("role") == ROLE_ADMIN):
            raise ForbiddenAppError(code=forbidden_code, message="No permission for this post")
        return post

    async def create(
        self,
        user: Claims,
        *,
        title: Any,
        content: Any,
        topic: Any,
        draft: bool = False,
        locale: str | None = None,
    ) -> dict[str, Any]:
        """Store a post; a non-draft is published and queued for translation."""

        if not title or not content or not isinstance(title, str) or not isinstance(content, str):
            raise ValidationAppError(code="missing_fields", message="Title and content are required")
        if len(title) > 255:
            raise ValidationAppError(code="field_too_long", message="Title is too long", details={"field": "title"})

        now = datetime.now(timezone.utc)
        post = Post(
            title=title,
            origin=content,
            origin_lang=resolve_locale(locale),
            published=not draft,
            user_uid=user["uid"],
            created_at=now,
            updated_at=now,
            last_reply_at=now,
        )
        post.topics.append(self._topic(topic))
        self.db.add(post)
        self.db.commit()
        logger.info("post.created", extra={"post_id": post.id, "draft": bool(draft)})

        if draft:
            return {"ok": True, "id": post.id, "message": translate("draft_saved")}

        task = await self.tasks.create_and_dispatch(user_uid=user["uid"], post_id=post.id)
        return {"ok": True, "id": post.id, "message": task.id}

    async def update(self, user: Claims, post_id: Any, changes: dict[str, Any]) -> dict[str, Any]:
        """Partially update a post; publishing a draft queues a translation task.

        ``changes`` may hold ``title``, ``content``, ``published`` and ``topic``;
        ``None`` values are left alone.
        """

        post = self._owned_post(post_id, user, allow_admin=True, forbidden_code="post_update_forbidden")
        was_published = post.published

        if changes.get("title") is not None:
            post.title = changes["title"]
        if changes.get("content") is not None:
            post.origin = changes["content"]
        if changes.get("published") is not None:
            post.published = bool(changes["published"])
        if changes.get("topic") is not None:
            post.topics = [self._topic(changes["topic"])]

        now = datetime.now(timezone.utc)
        post.updated_at = now
        post.last_reply_at = now
        self.db.commit()
        logger.info("post.updated", extra={"post_id": post.id})

        task_id = None
        if post.published and not was_published:
            # A failed dispatch only parks the task as FAIL
            task = await self.tasks.create_and_dispatch(user_uid=user["uid"], post_id=post.id)
            task_id = task.id

        return {"ok": True, "id": post.id, "taskId": task_id}

    async def delete(self, user: Claims, post_id: Any) -> dict[str, Any]:
        post = self._owned_post(post_id, user, allow_admin=False, forbidden_code="post_delete_forbidden")
        deleted_id = post.id

        self.db.delete(post)
        self.db.commit()
        logger.info("post.deleted", extra={"post_id": deleted_id})

        try:
            await self.search.remove_post(deleted_id)
        except AppError as exc:
            logger.warning("post.unindex_failed", extra={"post_id": deleted_id, "error_code": exc.code})

        return {"ok": True, "message": translate("post_deleted")}

    def origin(self, kind: str | None, item_id: str | None) -> dict[str, Any]:
        """Return the untranslated source text of a post or reply."""

        if not kind or not item_id:
            raise ValidationAppError(code="missing_parameters", message="Missing required parameters")
        if kind not in ORIGIN_TYPES:
            raise ValidationAppError(code="invalid_type", message="Invalid type")

        if kind == "post":
            try:
                post = self.db.get(Post, int(item_id))
            except ValueError:
                post = None
            if post is None:
                raise NotFoundAppError(code="post_not_found", message="Post not found")
            return {"ok": True, "content": post.origin, "title": post.title, "originLang": post.origin_lang}

        reply = self.db.get(Reply, item_id)
        if reply is None:
            raise NotFoundAppError(code="reply_not_found", message="Reply not found")
        return {"ok": True, "content": reply.content, "originLang": reply.origin_lang}
