"""Reply writes.

Replies form two-level threads: a top-level reply hangs off a post and gets
the next ordinal on it (``belong_reply``); a nested reply copies the thread
coordinates of the reply it answers.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from xeoos.core.auth import Claims
from xeoos.core.config import settings
from xeoos.core.errors import ForbiddenAppError, NotFoundAppError, ValidationAppError
from xeoos.db.models import Post, Reply, User
from xeoos.i18n.locales import resolve_locale
from xeoos.i18n.messages import translate
from xeoos.services.notification_service import NotificationService
from xeoos.services.task_service import TaskService

logger = logging.getLogger(__name__)

NOTICE_SNIPPET_CHARS = 200


class ReplyService:
    def __init__(self, db: Session, tasks: TaskService, notifications: NotificationService) -> None:
        self.db = db
        self.tasks = tasks
        self.notifications = notifications

    def _post(self, post_id: Any) -> Post:
        try:
            post = self.db.get(Post, int(post_id))
        except (TypeError, ValueError):
            post = None
        if post is None or not post.published:
            raise NotFoundAppError(code="post_not_found", message="Post not found")
        return post

    async def create(
        self,
        user: Claims,
        *,
        content: Any,
        post_id: Any = None,
        reply_id: str | None = None,
        locale: str | None = None,
    ) -> dict[str, Any]:
        """Create a reply to a post (``post_id``) or to another reply (``reply_id``).

        Raises:
            ValidationAppError: No content, or neither target given.
            NotFoundAppError: The post or parent reply does not exist.
        """

        if not content or not isinstance(content, str):
            raise ValidationAppError(code="missing_fields", message="Content is required")
        if not post_id and not reply_id:
            raise ValidationAppError(code="reply_target_required", message="A post or reply id is required")

        origin_lang = resolve_locale(locale)
        parent: Reply | None = None

        if post_id:
            post = self._post(post_id)
            existing = self.db.scalar(select(func.count()).select_from(Reply).where(Reply.post_uid == post.id)) or 0
            reply = Reply(
                content=content,
                origin_lang=origin_lang,
                user_uid=user["uid"],
                post_uid=post.id,
                belong_post_id=post.id,
                belong_reply=existing + 1,
            )
            recipient_uid = post.user_uid
        else:
            parent = self.db.get(Reply, reply_id)
            if parent is None:
                raise NotFoundAppError(code="reply_not_found", message="Reply not found")
            post = self._post(parent.belong_post_id)
            reply = Reply(
                content=content,
                origin_lang=origin_lang,
                user_uid=user["uid"],
                belong_post_id=parent.belong_post_id,
                belong_reply=parent.belong_reply,
                comment_uid=parent.id,
                is_child=True,
            )
            recipient_uid = parent.user_uid

        post.last_reply_at = datetime.now(timezone.utc)
        self.db.add(reply)
        self.db.commit()
        logger.info("reply.created", extra={"reply_id": reply.id, "post_id": post.id, "nested": parent is not None})

        task = await self.tasks.create_and_dispatch(user_uid=user["uid"], reply_id=reply.id)

        if recipient_uid != user["uid"]:
            await self._notify(recipient_uid, post.id, reply)

        return {"ok": True, "message": translate("reply_created"), "data": {"id": reply.id, "taskId": task.id}}

    async def _notify(self, uid: int, post_id: int, reply: Reply) -> None:
        recipient = self.db.get(User, uid)
        if recipient is None:
            return
        locale = recipient.email_notice_lang
        link = f"{settings.app.site_url.rstrip('/')}/{locale}/post/{post_id}"
        result = await self.notifications.notify(
            recipient,
            title=translate("new_reply_title", locale),
            content=reply.content[:NOTICE_SNIPPET_CHARS],
            link=link,
        )
        logger.info("reply.notified", extra={"reply_id": reply.id, "ok": result.ok, "method": result.method})

    def delete(self, user: Claims, reply_id: str | None) -> dict[str, Any]:
        if not reply_id:
            raise ValidationAppError(code="missing_id", message="ID is required")

        reply = self.db.get(Reply, reply_id)
        if reply is None:
            raise NotFoundAppError(code="reply_not_found", message="Reply not found")
        if reply.user_uid != user["uid"]:
            raise ForbiddenAppError(code="reply_delete_forbidden", message="No permission to delete this reply")

        self.db.delete(reply)
        self.db.commit()
        logger.info("reply.deleted", extra={"reply_id": reply_id})
        return {"ok": True, "message": translate("reply_deleted")}
