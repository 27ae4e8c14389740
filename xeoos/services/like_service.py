"""Likes on posts and replies."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from xeoos.core.errors import NotFoundAppError, ValidationAppError
from xeoos.db.models import Like, Post, Reply

logger = logging.getLogger(__name__)


def _post_id(value: Any, *, missing_code: str = "missing_post_id") -> int:
    if value in (None, ""):
        raise ValidationAppError(code=missing_code, message="Post ID is required")
    if isinstance(value, bool):
        raise ValidationAppError(code="invalid_post_id", message="Invalid post ID")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationAppError(code="invalid_post_id", message="Invalid post ID") from exc


class LikeService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _existing(self, uid: int, post_id: int | None, reply_id: str | None) -> Like | None:
        query = select(Like).where(Like.user_uid == uid)
        if post_id is not None:
            query = query.where(Like.post_id == post_id)
        else:
            query = query.where(Like.reply_id == reply_id)
        return self.db.scalar(query)

    def toggle(self, uid: int, action: Any, post_id: Any = None, reply_id: Any = None) -> dict[str, Any]:
        """Like (``action is True``) or unlike (``action is False``) a post or reply.

        Only the JSON booleans are accepted as actions; ``"true"`` or ``1`` are
        rejected with ``invalid_action``.
        """

        if action is None or (not post_id and not reply_id):
            raise ValidationAppError(code="missing_id", message="ID is required")
        if action is not True and action is not False:
            raise ValidationAppError(code="invalid_action", message="Invalid action")

        target_post = _post_id(post_id) if post_id else None
        target_reply = None if target_post is not None else str(reply_id)

        existing = self._existing(uid, target_post, target_reply)

        if action is True:
            if existing is not None:
                raise ValidationAppError(code="already_liked", message="Already liked")
            if target_post is not None and self.db.get(Post, target_post) is None:
                raise NotFoundAppError(code="post_not_found", message="Post not found")
            if target_reply is not None and self.db.get(Reply, target_reply) is None:
                raise NotFoundAppError(code="reply_not_found", message="Reply not found")

            self.db.add(Like(user_uid=uid, post_id=target_post, reply_id=target_reply))
            try:
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                raise ValidationAppError(code="already_liked", message="Already liked") from exc
            logger.info("like.created", extra={"post_id": target_post, "reply_id": target_reply})
        else:
            if existing is None:
                raise ValidationAppError(code="not_liked", message="Not liked yet")
            self.db.delete(existing)
            self.db.commit()
            logger.info("like.removed", extra={"post_id": target_post, "reply_id": target_reply})

        return {"ok": True, "message": {"ok": True}}

    def _reply_ids(self, post_id: int) -> list[str]:
        return list(self.db.scalars(select(Reply.id).where(Reply.belong_post_id == post_id)).all())

    def _liked_replies(self, uid: int, reply_ids: list[str]) -> set[str]:
        if not reply_ids:
            return set()
        rows = self.db.scalars(
            select(Like.reply_id).where(Like.user_uid == uid, Like.reply_id.in_(reply_ids))
        ).all()
        return set(rows)

    def status(self, uid: int, post_id: Any) -> dict[str, Any]:
        """Like state of a post and of the replies the user liked under it."""

        pid = _post_id(post_id)
        post_liked = self._existing(uid, pid, None) is not None
        liked = self._liked_replies(uid, self._reply_ids(pid))
        return {
            "ok": True,
            "data": {"postLiked": post_liked, "replyLikes": {reply_id: True for reply_id in liked}},
        }

    def check(self, uid: int, post_id: Any) -> dict[str, Any]:
        """Like state of a post and every one of its replies (``False`` included)."""

        pid = _post_id(post_id)
        if self.db.get(Post, pid) is None:
            raise NotFoundAppError(code="post_not_found", message="Post not found")

        reply_ids = self._reply_ids(pid)
        liked = self._liked_replies(uid, reply_ids)
        return {
            "ok": True,
            "data": {
                "postId": pid,
                "postLiked": self._existing(uid, pid, None) is not None,
                "replyLikes": {reply_id: reply_id in liked for reply_id in reply_ids},
            },
        }
