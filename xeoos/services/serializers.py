"""JSON views of ORM rows shared by the read and write services."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from xeoos.db.models import Post, Reply, Topic, User
from xeoos.i18n.locales import localized


def iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def author(user: User | None) -> dict[str, Any] | None:
    if user is None:
        return None
    avatar = user.avatars[0] if user.avatars else None
    return {
        "uid": user.uid,
        "username": user.username,
        "nickname": user.nickname,
        "profileEmoji": user.profile_emoji,
        "avatar": avatar.as_dict() if avatar else None,
    }


def topic(item: Topic, locale: str | None) -> dict[str, Any]:
    return {
        "name": item.name,
        "emoji": item.emoji,
        "displayName": localized(item, "name", locale),
    }


def post_summary(post: Post, locale: str | None) -> dict[str, Any]:
    return {
        "id": post.id,
        "title": localized(post, "title", locale),
        "originTitle": post.title,
        "originLang": post.origin_lang,
        "published": post.published,
        "pin": post.pin,
        "createdAt": iso(post.created_at),
        "updatedAt": iso(post.updated_at),
        "lastReplyAt": iso(post.last_reply_at),
        "topics": [topic(item, locale) for item in post.topics],
    }


def post_detail(post: Post, locale: str | None) -> dict[str, Any]:
    data = post_summary(post, locale)
    data["content"] = localized(post, "content", locale, fallback="origin")
    data["origin"] = post.origin
    data["user"] = author(post.user)
    return data


def reply(item: Reply, locale: str | None) -> dict[str, Any]:
    return {
        "id": item.id,
        "content": localized(item, "content", locale),
        "originLang": item.origin_lang,
        "postUid": item.post_uid,
        "belongPostId": item.belong_post_id,
        "belongReply": item.belong_reply,
        "commentUid": item.comment_uid,
        "isChild": item.is_child,
        "createdAt": iso(item.created_at),
        "user": author(item.user),
    }
