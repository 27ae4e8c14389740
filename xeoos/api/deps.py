"""FastAPI dependency providers.

Adapters are built from settings by their factories; services are assembled
per request around the request's database session. Tests swap any of these
through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from xeoos.adapters.captcha import AbstractCaptchaVerifier, create_captcha_verifier
from xeoos.adapters.email import AbstractEmailSender, create_email_sender
from xeoos.adapters.realtime import AbstractRealtime, create_realtime
from xeoos.adapters.search import AbstractSearchIndex, create_search_index
from xeoos.adapters.translate import AbstractTranslateDispatcher, create_translate_dispatcher
from xeoos.db.session import get_db
from xeoos.i18n.locales import get_current_locale, set_current_locale
from xeoos.services.feed_service import FeedService
from xeoos.services.like_service import LikeService
from xeoos.services.message_service import MessageService
from xeoos.services.notification_service import NotificationService
from xeoos.services.post_service import PostService
from xeoos.services.reply_service import ReplyService
from xeoos.services.search_service import SearchService
from xeoos.services.task_service import TaskService
from xeoos.services.user_service import UserService

DbSession = Annotated[Session, Depends(get_db)]


def get_realtime() -> AbstractRealtime:
    return create_realtime()


def get_email_sender() -> AbstractEmailSender:
    return create_email_sender()


def get_search_index() -> AbstractSearchIndex:
    return create_search_index()


def get_translate_dispatcher() -> AbstractTranslateDispatcher:
    return create_translate_dispatcher()


def get_captcha_verifier() -> AbstractCaptchaVerifier:
    return create_captcha_verifier()


def use_locale(value: str | None) -> str:
    """Let a body ``lang`` field override the negotiated request locale.

    Must be called from an ``async def`` route so the change stays visible to
    the exception handlers of the same request.
    """

    if value:
        set_current_locale(value)
    return get_current_locale()


def get_search_service(
    db: DbSession,
    index: Annotated[AbstractSearchIndex, Depends(get_search_index)],
) -> SearchService:
    return SearchService(db, index)


def get_task_service(
    db: DbSession,
    dispatcher: Annotated[AbstractTranslateDispatcher, Depends(get_translate_dispatcher)],
    realtime: Annotated[AbstractRealtime, Depends(get_realtime)],
    search: Annotated[SearchService, Depends(get_search_service)],
) -> TaskService:
    return TaskService(db, dispatcher, realtime=realtime, search=search)


def get_notification_service(
    db: DbSession,
    realtime: Annotated[AbstractRealtime, Depends(get_realtime)],
    email_sender: Annotated[AbstractEmailSender, Depends(get_email_sender)],
) -> NotificationService:
    return NotificationService(db, realtime, email_sender)


def get_user_service(
    db: DbSession,
    email_sender: Annotated[AbstractEmailSender, Depends(get_email_sender)],
    captcha: Annotated[AbstractCaptchaVerifier, Depends(get_captcha_verifier)],
) -> UserService:
    return UserService(db, email_sender, captcha)


def get_post_service(
    db: DbSession,
    tasks: Annotated[TaskService, Depends(get_task_service)],
    search: Annotated[SearchService, Depends(get_search_service)],
) -> PostService:
    return PostService(db, tasks, search)


def get_reply_service(
    db: DbSession,
    tasks: Annotated[TaskService, Depends(get_task_service)],
    notifications: Annotated[NotificationService, Depends(get_notification_service)],
) -> ReplyService:
    return ReplyService(db, tasks, notifications)


def get_like_service(db: DbSession) -> LikeService:
    return LikeService(db)


def get_message_service(
    db: DbSession,
    realtime: Annotated[AbstractRealtime, Depends(get_realtime)],
) -> MessageService:
    return MessageService(db, realtime)


def get_feed_service(db: DbSession) -> FeedService:
    return FeedService(db)


Users = Annotated[UserService, Depends(get_user_service)]
Posts = Annotated[PostService, Depends(get_post_service)]
Replies = Annotated[ReplyService, Depends(get_reply_service)]
Likes = Annotated[LikeService, Depends(get_like_service)]
Tasks = Annotated[TaskService, Depends(get_task_service)]
Messages = Annotated[MessageService, Depends(get_message_service)]
Search = Annotated[SearchService, Depends(get_search_service)]
Feed = Annotated[FeedService, Depends(get_feed_service)]
