from __future__ import annotations

from fastapi import APIRouter, Query
from fastapi.concurrency import run_in_threadpool

from xeoos.api.deps import Feed, Search
from xeoos.core.rate_limit import RateLimit
from xeoos.i18n.locales import get_current_locale

router = APIRouter(tags=["Feed"])


@router.get("/search")
async def search_posts(
    search: Search,
    ticket: RateLimit,
    q: str | None = Query(default=None, description="Search keywords"),
    page: str | None = Query(default="1"),
    lang: str | None = Query(default=None, description="Only match posts written in this locale"),
) -> dict:
    """Full-text search over published posts.

    Hits are localized to the request locale and carry author nickname and
    avatar.
    """

    result = await search.search(q, page=page, origin_lang=lang, locale=get_current_locale())
    await ticket.record()
    return {"ok": True, "data": {"originalContent": result}}


@router.get("/topics")
async def list_topics(feed: Feed) -> dict:
    return await run_in_threadpool(feed.topics, get_current_locale())


@router.get("/posts")
async def list_posts(
    feed: Feed,
    page: str | None = Query(default="1"),
    topic: str | None = Query(default=None),
    user: int | None = Query(default=None, description="Only posts by this user uid"),
) -> dict:
    return await run_in_threadpool(feed.feed, page=page, topic=topic, user_uid=user, locale=get_current_locale())


@router.get("/posts/{post_id}")
async def get_post(feed: Feed, post_id: int, page: str | None = Query(default="1")) -> dict:
    return await run_in_threadpool(feed.post, post_id, page=page, locale=get_current_locale())


@router.get("/stats")
async def site_stats(feed: Feed) -> dict:
    return await run_in_threadpool(feed.stats)


@router.get("/leaderboard")
async def leaderboard(feed: Feed, period: str = Query(default="all")) -> dict:
    return await run_in_threadpool(feed.leaderboard, period)


@router.get("/users/{uid}")
async def user_profile(feed: Feed, uid: int) -> dict:
    """Public profile with post, reply and like counts."""

    return await run_in_threadpool(feed.profile, uid)


@router.get("/users/{uid}/replies")
async def user_replies(feed: Feed, uid: int, page: str | None = Query(default="1")) -> dict:
    return await run_in_threadpool(feed.user_replies, uid, page=page, locale=get_current_locale())
