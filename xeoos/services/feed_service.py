"""Read side: topics, feed, post detail, user profiles, site stats and leaderboard."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from xeoos.core.errors import NotFoundAppError, ValidationAppError
from xeoos.db.models import TASK_DONE, Classification, Like, Post, Reply, Task, Topic, User, post_topics
from xeoos.i18n.locales import localized
from xeoos.services import serializers
from xeoos.services.paging import page_window

LEADERBOARD_SIZE = 20
PERIODS = ("today", "week", "year", "all")
CONTENT_PREVIEW_CHARS = 200


def period_start(period: str, now: datetime | None = None) -> datetime | None:
    """Start of a leaderboard period in UTC; ``None`` for ``all``.

    Raises:
        ValidationAppError: Unknown period name.
    """

    if period not in PERIODS:
        raise ValidationAppError(code="invalid_period", message="Invalid time period", details={"field": "period"})

    current = now or datetime.now(timezone.utc)
    if period == "today":
        return current.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "week":
        return current - timedelta(days=7)
    if period == "year":
        return current - timedelta(days=365)
    return None


class FeedService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def _counts(self, column, ids: list) -> dict:
        if not ids:
            return {}
        rows = self.db.execute(select(column, func.count()).where(column.in_(ids)).group_by(column)).all()
        return {key: count for key, count in rows}

    def topics(self, locale: str | None) -> dict[str, Any]:
        classifications = self.db.scalars(
            select(Classification).options(selectinload(Classification.topics)).order_by(Classification.index)
        ).all()
        return {
            "ok": True,
            "classifications": [
                {
                    "name": item.name,
                    "emoji": item.emoji,
                    "displayName": localized(item, "name", locale),
                    "topics": [serializers.topic(topic, locale) for topic in item.topics],
                }
                for item in classifications
            ],
        }

    def feed(
        self,
        *,
        page: Any = 1,
        topic: str | None = None,
        user_uid: int | None = None,
        locale: str | None = None,
    ) -> dict[str, Any]:
        """Published posts, pinned first, then most recently active."""

        window = page_window(page)
        query = select(Post).where(Post.published.is_(True))
        if topic:
            if self.db.get(Topic, topic) is None:
                raise NotFoundAppError(code="topic_not_found", message="Topic does not exist")
            query = query.where(Post.id.in_(select(post_topics.c.post_id).where(post_topics.c.topic_name == topic)))
        if user_uid is not None:
            query = query.where(Post.user_uid == user_uid)

        total = self.db.scalar(select(func.count()).select_from(query.subquery())) or 0
        posts = self.db.scalars(
            query.options(selectinload(Post.user))
            .order_by(Post.pin.desc(), Post.last_reply_at.desc())
            .offset(window.skip)
            .limit(window.limit)
        ).all()

        ids = [post.id for post in posts]
        likes = self._counts(Like.post_id, ids)
        replies = self._counts(Reply.belong_post_id, ids)

        items = []
        for post in posts:
            item = serializers.post_summary(post, locale)
            content = localized(post, "content", locale, fallback="origin") or ""
            item["content"] = content[:CONTENT_PREVIEW_CHARS]
            item["user"] = serializers.author(post.user)
            item["likeCount"] = likes.get(post.id, 0)
            item["replyCount"] = replies.get(post.id, 0)
            items.append(item)

        return {
            "ok": True,
            "posts": items,
            "hasMore": window.has_more(total),
            "total": total,
            "currentPage": window.page,
        }

    def post(self, post_id: int, *, page: Any = 1, locale: str | None = None) -> dict[str, Any]:
        """A published post with one page of its replies in thread order."""

        post = self.db.get(Post, post_id)
        if post is None or not post.published:
            raise NotFoundAppError(code="post_not_found", message="Post not found")

        window = page_window(page)
        thread = select(Reply).where(Reply.belong_post_id == post.id)
        total = self.db.scalar(select(func.count()).select_from(thread.subquery())) or 0
        replies = self.db.scalars(
            thread.options(selectinload(Reply.user))
            .order_by(Reply.belong_reply, Reply.is_child, Reply.created_at)
            .offset(window.skip)
            .limit(window.limit)
        ).all()

        reply_likes = self._counts(Like.reply_id, [item.id for item in replies])
        data = serializers.post_detail(post, locale)
        data["likeCount"] = self._counts(Like.post_id, [post.id]).get(post.id, 0)
        data["replyCount"] = total

        reply_items = []
        for item in replies:
            view = serializers.reply(item, locale)
            view["likeCount"] = reply_likes.get(item.id, 0)
            reply_items.append(view)

        return {
            "ok": True,
            "post": data,
            "replies": reply_items,
            "hasMore": window.has_more(total),
            "currentPage": window.page,
        }

    def stats(self) -> dict[str, Any]:
        users = self.db.scalar(select(func.count()).select_from(User)) or 0
        posts = self.db.scalar(select(func.count()).select_from(Post).where(Post.published.is_(True))) or 0
        translations = self.db.scalar(select(func.count()).select_from(Task).where(Task.status == TASK_DONE)) or 0
        return {"ok": True, "users": users, "posts": posts, "translations": translations}

    def leaderboard(self, period: str = "all") -> dict[str, Any]:
        """Top authors by published posts in ``period``, with their activity counts."""

        since = period_start(period)

        post_filter = [Post.published.is_(True)]
        if since is not None:
            post_filter.append(Post.created_at >= since)

        post_count = func.count(Post.id).label("post_count")
        rows = self.db.execute(
            select(User, post_count)
            .join(Post, Post.user_uid == User.uid)
            .where(*post_filter)
            .group_by(User.uid)
            .order_by(post_count.desc(), User.uid)
            .limit(LEADERBOARD_SIZE)
        ).all()

        uids = [user.uid for user, _ in rows]
        reply_query = select(Reply.user_uid, func.count()).where(Reply.user_uid.in_(uids))
        like_query = (
            select(Post.user_uid, func.count(Like.uuid))
            .join(Like, Like.post_id == Post.id)
            .where(Post.user_uid.in_(uids))
        )
        if since is not None:
            reply_query = reply_query.where(Reply.created_at >= since)
            like_query = like_query.where(Like.created_at >= since)
        reply_counts = dict(self.db.execute(reply_query.group_by(Reply.user_uid)).all()) if uids else {}
        like_counts = dict(self.db.execute(like_query.group_by(Post.user_uid)).all()) if uids else {}

        return {
            "ok": True,
            "period": period,
            "users": [
                {
                    "rank": rank,
                    "user": serializers.author(user),
                    "postCount": count,
                    "replyCount": reply_counts.get(user.uid, 0),
                    "likeCount": like_counts.get(user.uid, 0),
                }
                for rank, (user, count) in enumerate(rows, start=1)
            ],
        }

    def _user(self, uid: int) -> User:
        user = self.db.get(User, uid)
        if user is None:
            raise NotFoundAppError(code="user_not_found", message="User does not exist")
        return user

    def profile(self, uid: int) -> dict[str, Any]:
        """Public profile of a user with their activity counts."""

        user = self._user(uid)
        posts = self.db.scalar(
            select(func.count()).select_from(Post).where(Post.user_uid == uid, Post.published.is_(True))
        ) or 0
        replies = self.db.scalar(select(func.count()).select_from(Reply).where(Reply.user_uid == uid)) or 0
        likes_given = self.db.scalar(select(func.count()).select_from(Like).where(Like.user_uid == uid)) or 0
        on_posts = self.db.scalar(
            select(func.count(Like.uuid)).select_from(Like).join(Post, Like.post_id == Post.id).where(Post.user_uid == uid)
        ) or 0
        on_replies = self.db.scalar(
            select(func.count(Like.uuid)).select_from(Like).join(Reply, Like.reply_id == Reply.id).where(Reply.user_uid == uid)
        ) or 0

        data = serializers.author(user)
        data.update(
            {
                "bio": user.bio,
                "birth": user.birth,
                "country": user.country,
                "gender": user.gender,
                "role": user.role,
                "exp": user.exp,
                "createdAt": serializers.iso(user.created_at),
                "lastUseAt": serializers.iso(user.last_use_at),
            }
        )
        return {
            "ok": True,
            "user": data,
            "postCount": posts,
            "replyCount": replies,
            "likeCount": likes_given,
            "likesReceived": on_posts + on_replies,
        }

    def user_replies(self, uid: int, *, page: Any = 1, locale: str | None = None) -> dict[str, Any]:
        """A user's replies, newest first, each with the post it belongs to."""

        self._user(uid)
        window = page_window(page)
        query = select(Reply).where(Reply.user_uid == uid)
        total = self.db.scalar(select(func.count()).select_from(query.subquery())) or 0
        replies = self.db.scalars(
            query.options(selectinload(Reply.belong_post))
            .order_by(Reply.created_at.desc())
            .offset(window.skip)
            .limit(window.limit)
        ).all()
        likes = self._counts(Like.reply_id, [item.id for item in replies])

        items = []
        for item in replies:
            post = item.belong_post
            items.append(
                {
                    "id": item.id,
                    "content": localized(item, "content", locale),
                    "originLang": item.origin_lang,
                    "createdAt": serializers.iso(item.created_at),
                    "likeCount": likes.get(item.id, 0),
                    "post": (
                        {"id": post.id, "title": localized(post, "title", locale)}
                        if post is not None and post.published
                        else None
                    ),
                }
            )

        return {
            "ok": True,
            "replies": items,
            "hasMore": window.has_more(total),
            "total": total,
            "currentPage": window.page,
        }
