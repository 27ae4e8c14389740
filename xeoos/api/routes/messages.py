from __future__ import annotations

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from xeoos.api.deps import Messages, use_locale
from xeoos.core.auth import CurrentUser
from xeoos.core.rate_limit import RateLimit
from xeoos.schemas.common import PageBody
from xeoos.schemas.posts import IdRequest

router = APIRouter(prefix="/message", tags=["Messages"])


@router.post("/auth")
async def realtime_auth(user: CurrentUser, messages: Messages) -> dict:
    """Exchange the caller's JWT for realtime token details."""

    return await messages.realtime_token(user["uid"])


@router.post("/get")
async def list_messages(body: PageBody, ticket: RateLimit, user: CurrentUser, messages: Messages) -> dict:
    use_locale(body.lang)
    result = await run_in_threadpool(messages.list_messages, user["uid"], body.page)
    await ticket.record()
    return result


@router.post("/read")
async def read_message(body: IdRequest, ticket: RateLimit, user: CurrentUser, messages: Messages) -> dict:
    use_locale(body.lang)
    result = await run_in_threadpool(messages.mark_read, user["uid"], str(body.id) if body.id is not None else None)
    await ticket.record()
    return result


@router.post("/read-all")
async def read_all_messages(ticket: RateLimit, user: CurrentUser, messages: Messages) -> dict:
    result = await run_in_threadpool(messages.mark_all_read, user["uid"])
    await ticket.record()
    return result


@router.get("/unread-count")
async def unread_count(user: CurrentUser, messages: Messages) -> dict:
    return await run_in_threadpool(messages.unread_count, user["uid"])
