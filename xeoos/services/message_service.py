"""Inbox: stored notices and realtime credentials."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from xeoos.adapters.realtime.base import BROADCAST_CHANNEL, AbstractRealtime, user_channel
from xeoos.core.config import settings
from xeoos.core.errors import NotFoundAppError, ValidationAppError
from xeoos.db.models import Notice
from xeoos.services.paging import page_window

logger = logging.getLogger(__name__)


def token_capability(uid: int | str) -> dict[str, list[str]]:
    """Channels a browser client may subscribe to.

    Examples:
        >>> token_capability(7)
        {'broadcast': ['subscribe'], 'user-7': ['subscribe']}
    """

    return {BROADCAST_CHANNEL: ["subscribe"], user_channel(uid): ["subscribe"]}


class MessageService:
    def __init__(self, db: Session, realtime: AbstractRealtime) -> None:
        self.db = db
        self.realtime = realtime

    async def realtime_token(self, uid: int) -> dict[str, Any]:
        details = await self.realtime.request_token(
            str(uid),
            ttl_ms=settings.realtime.token_ttl_ms,
            capability=token_capability(uid),
        )
        logger.info("message.token_issued", extra={"uid": uid})
        return details

    def _unread(self, uid: int) -> int:
        return self.db.scalar(
            select(func.count()).select_from(Notice).where(Notice.user_id == uid, Notice.is_read.is_(False))
        ) or 0

    def list_messages(self, uid: int, page: Any = 1) -> dict[str, Any]:
        window = page_window(page)
        notices = self.db.scalars(
            select(Notice)
            .where(Notice.user_id == uid)
            .order_by(Notice.created_at.desc())
            .offset(window.skip)
            .limit(window.limit)
        ).all()
        total = self.db.scalar(select(func.count()).select_from(Notice).where(Notice.user_id == uid)) or 0

        return {
            "ok": True,
            "messages": [notice.as_dict() for notice in notices],
            "hasMore": window.has_more(total),
            "total": total,
            "unreadCount": self._unread(uid),
        }

    def mark_read(self, uid: int, notice_id: str | None) -> dict[str, Any]:
        if not notice_id:
            raise ValidationAppError(code="missing_id", message="ID is required")

        notice = self.db.scalar(select(Notice).where(Notice.id == notice_id, Notice.user_id == uid))
        if notice is None:
            raise NotFoundAppError(code="notice_not_found", message="Message not found")

        notice.is_read = True
        self.db.commit()
        return {"ok": True}

    def mark_all_read(self, uid: int) -> dict[str, Any]:
        result = self.db.execute(
            update(Notice).where(Notice.user_id == uid, Notice.is_read.is_(False)).values(is_read=True)
        )
        self.db.commit()
        logger.info("message.read_all", extra={"uid": uid, "count": result.rowcount})
        return {"ok": True, "updated": result.rowcount}

    def unread_count(self, uid: int) -> dict[str, Any]:
        return {"ok": True, "unreadCount": self._unread(uid)}
