"""User notifications: stored notice plus live push or email fallback.

Every notification is persisted as a ``Notice`` first so it shows up in the
message list regardless of how it was delivered. Delivery then prefers the
realtime channel when the user is connected and falls back to email when the
user is offline or the publish fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from xeoos.adapters.email.base import AbstractEmailSender
from xeoos.adapters.realtime.base import NEW_MESSAGE_EVENT, AbstractRealtime, user_channel
from xeoos.core.errors import AppError
from xeoos.core.logging import mask_email
from xeoos.db.models import Notice, User
from xeoos.i18n.messages import translate
from xeoos.services.email_templates import notification_email

logger = logging.getLogger(__name__)

METHOD_SOCKET = "socket"
METHOD_EMAIL = "email"


@dataclass
class NotifyResult:
    ok: bool
    method: str | None = None
    error: str | None = None
    notice_id: str | None = None

    def as_dict(self) -> dict:
        body: dict = {"ok": self.ok}
        if self.method:
            body["method"] = self.method
        if self.error:
            body["error"] = self.error
        return body


class NotificationService:
    """Deliver user-facing messages over the realtime channel or email."""

    def __init__(self, db: Session, realtime: AbstractRealtime, email_sender: AbstractEmailSender) -> None:
        self.db = db
        self.realtime = realtime
        self.email_sender = email_sender

    async def _is_online(self, uid: int) -> bool:
        try:
            members = await self.realtime.presence(user_channel(uid))
        except AppError as exc:
            logger.warning("notify.presence_failed", extra={"uid": uid, "error_code": exc.code})
            return False
        return str(uid) in {str(member) for member in members}

    async def notify(self, user: User, *, title: str, content: str, link: str) -> NotifyResult:
        """Store a notice for ``user`` and deliver it.

        Never raises for delivery problems; a failed email yields ``ok=False``.
        """

        notice = Notice(user_id=user.uid, content=content, link=link)
        self.db.add(notice)
        self.db.commit()

        locale = user.email_notice_lang
        message = {
            "type": "message",
            "id": notice.id,
            "title": title,
            "content": content,
            "link": link,
            "locale": locale,
        }

        if await self._is_online(user.uid):
            try:
                await self.realtime.publish(user_channel(user.uid), NEW_MESSAGE_EVENT, {"message": message})
                logger.info("notify.sent", extra={"uid": user.uid, "method": METHOD_SOCKET})
                return NotifyResult(ok=True, method=METHOD_SOCKET, notice_id=notice.id)
            except AppError as exc:
                logger.warning("notify.publish_failed", extra={"uid": user.uid, "error_code": exc.code})

        email = notification_email(
            user.email,
            title=title,
            content=content,
            link=link,
            button_text=translate("view_message", locale),
            locale=locale,
        )
        try:
            await self.email_sender.send(email)
        except AppError as exc:
            logger.error(
                "notify.email_failed",
                extra={"uid": user.uid, "recipient": mask_email(user.email), "error_code": exc.code},
            )
            return NotifyResult(ok=False, error="Failed to send notification", notice_id=notice.id)

        logger.info("notify.sent", extra={"uid": user.uid, "method": METHOD_EMAIL})
        return NotifyResult(ok=True, method=METHOD_EMAIL, notice_id=notice.id)
