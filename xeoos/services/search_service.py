"""Post search: index documents and localized query results.

Documents mirror the post row in camelCase. Translations are stored as
``title<SUFFIX>``/``content<SUFFIX>`` fields (``titleZHCN``...), which is
what hit localization reads back.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from xeoos.adapters.search.base import AbstractSearchIndex
from xeoos.core.errors import ValidationAppError
from xeoos.db.models import Post, User
from xeoos.i18n.locales import LOCALES, column_suffix, is_supported, locale_suffix, resolve_locale
from xeoos.services.paging import page_window

logger = logging.getLogger(__name__)


def _timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def build_document(post: Post) -> dict[str, Any]:
    """Serialise a post into its search document."""

    doc: dict[str, Any] = {
        "id": post.id,
        "title": post.title,
        "origin": post.origin,
        "originLang": post.origin_lang,
        "published": post.published,
        "pin": post.pin,
        "userUid": post.user_uid,
        "topics": [topic.name for topic in post.topics],
        "createdAt": _timestamp(post.created_at),
        "updatedAt": _timestamp(post.updated_at),
        "lastReplyAt": _timestamp(post.last_reply_at),
    }
    for locale in LOCALES:
        column = column_suffix(locale)
        suffix = locale_suffix(locale)
        doc[f"title{suffix}"] = getattr(post, f"title_{column}")
        doc[f"content{suffix}"] = getattr(post, f"content_{column}")
    return doc


def localize_hit(hit: dict[str, Any], locale: str) -> dict[str, Any]:
    """Fill ``title``/``content`` of a raw hit with the ``locale`` variants.

    Examples:
        >>> localize_hit({"title": "Hi", "titleDEDE": "Hallo", "origin": "x"}, "de-DE")["title"]
        'Hallo'
        >>> localize_hit({"origin": "body"}, "de-DE")["content"]
        'body'
    """

    suffix = locale_suffix(locale)
    localized = dict(hit)
    localized["title"] = hit.get(f"title{suffix}") or hit.get("title") or hit.get("origin")
    localized["content"] = hit.get(f"content{suffix}") or hit.get("content") or hit.get("origin")
    return localized


class SearchService:
    def __init__(self, db: Session, index: AbstractSearchIndex) -> None:
        self.db = db
        self.index = index

    async def index_post(self, post: Post) -> None:
        await self.index.upsert([build_document(post)])

    async def remove_post(self, post_id: int) -> None:
        await self.index.delete(post_id)

    def _authors(self, uids: set[int]) -> dict[int, User]:
        if not uids:
            return {}
        users = self.db.scalars(select(User).where(User.uid.in_(uids))).all()
        return {user.uid: user for user in users}

    async def search(self, query: str | None, *, page: Any = 1, origin_lang: str | None = None, locale: str | None = None) -> dict[str, Any]:
        """Run a query and return localized hits enriched with author info.

        Raises:
            ValidationAppError: ``missing_query`` when ``query`` is blank.
            ExternalServiceAppError: ``search_unavailable`` on engine failure.
        """

        if not query or not query.strip():
            raise ValidationAppError(code="missing_query", message="Search keyword is required")

        window = page_window(page)
        search_filter = f"originLang = '{origin_lang}'" if is_supported(origin_lang) else None
        result = await self.index.search(
            query.strip(), limit=window.limit, offset=window.skip, filter=search_filter
        )

        resolved = resolve_locale(locale)
        authors = self._authors({hit["userUid"] for hit in result.hits if hit.get("userUid") is not None})

        hits = []
        for raw in result.hits:
            hit = localize_hit(raw, resolved)
            author = authors.get(raw.get("userUid"))
            hit["user"] = (
                {
                    "uid": author.uid,
                    "nickname": author.nickname,
                    "avatar": author.avatars[0].as_dict() if author.avatars else None,
                }
                if author
                else None
            )
            hits.append(hit)

        logger.info("search.completed", extra={"hits": len(hits), "page": window.page})
        return {
            "hits": hits,
            "query": result.query,
            "limit": result.limit,
            "offset": result.offset,
            "estimatedTotalHits": result.estimated_total_hits,
            "processingTimeMs": result.processing_time_ms,
        }
