from __future__ import annotations

from fastapi import APIRouter, Query
from fastapi.concurrency import run_in_threadpool

from xeoos.api.deps import Likes, Posts, Replies, use_locale
from xeoos.core.auth import CurrentUser
from xeoos.core.rate_limit import RateLimit
from xeoos.schemas.posts import (
    IdRequest,
    LikeCheckRequest,
    LikeRequest,
    PostCreateRequest,
    PostUpdateRequest,
    ReplyCreateRequest,
)

router = APIRouter(tags=["Posts"])


@router.post("/post/create")
async def create_post(body: PostCreateRequest, ticket: RateLimit, user: CurrentUser, posts: Posts) -> dict:
    """Create a post or save a draft.

    Returns:
        dict: ``{ok, id, message}``; for a published post ``message`` is the
            translation task id.
    """

    locale = use_locale(body.lang)
    result = await posts.create(
        user,
        title=body.title,
        content=body.content,
        topic=body.topic,
        draft=body.draft,
        locale=locale,
    )
    await ticket.record()
    return result


@router.post("/post/update")
async def update_post(body: PostUpdateRequest, ticket: RateLimit, user: CurrentUser, posts: Posts) -> dict:
    use_locale(body.lang)
    result = await posts.update(
        user,
        body.id,
        {"title": body.title, "content": body.content, "published": body.published, "topic": body.topic},
    )
    await ticket.record()
    return result


@router.post("/post/delete")
async def delete_post(body: IdRequest, ticket: RateLimit, user: CurrentUser, posts: Posts) -> dict:
    use_locale(body.lang)
    result = await posts.delete(user, body.id)
    await ticket.record()
    return result


@router.get("/origin")
async def get_origin(
    posts: Posts,
    type: str | None = Query(default=None, description="post or reply"),
    id: str | None = Query(default=None),
) -> dict:
    """Return the untranslated source text of a post or reply."""

    return await run_in_threadpool(posts.origin, type, id)


@router.post("/reply/create")
async def create_reply(body: ReplyCreateRequest, ticket: RateLimit, user: CurrentUser, replies: Replies) -> dict:
    locale = use_locale(body.lang)
    result = await replies.create(
        user,
        content=body.content,
        post_id=body.postid,
        reply_id=body.replyid,
        locale=locale,
    )
    await ticket.record()
    return result


@router.post("/reply/delete")
async def delete_reply(body: IdRequest, ticket: RateLimit, user: CurrentUser, replies: Replies) -> dict:
    use_locale(body.lang)
    result = await run_in_threadpool(replies.delete, user, str(body.id) if body.id is not None else None)
    await ticket.record()
    return result


@router.post("/like")
async def toggle_like(body: LikeRequest, ticket: RateLimit, user: CurrentUser, likes: Likes) -> dict:
    use_locale(body.lang)
    result = await run_in_threadpool(likes.toggle, user["uid"], body.action, body.post_id, body.reply_id)
    await ticket.record()
    return result


@router.get("/like/status")
async def like_status(
    user: CurrentUser,
    likes: Likes,
    post_id: str | None = Query(default=None, alias="postId"),
) -> dict:
    return await run_in_threadpool(likes.status, user["uid"], post_id)


@router.post("/like/check")
async def like_check(body: LikeCheckRequest, ticket: RateLimit, user: CurrentUser, likes: Likes) -> dict:
    use_locale(body.lang)
    result = await run_in_threadpool(likes.check, user["uid"], body.post_id)
    await ticket.record()
    return result
