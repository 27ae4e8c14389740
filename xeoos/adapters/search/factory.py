"""Factory for the search adapter."""

from xeoos.adapters.search.base import AbstractSearchIndex, DisabledSearchIndex
from xeoos.adapters.search.meili_client import MeiliSearchIndex
from xeoos.core.config import settings


def create_search_index() -> AbstractSearchIndex:
    if not settings.search.host:
        return DisabledSearchIndex()
    return MeiliSearchIndex(
        settings.search.host,
        index=settings.search.index,
        api_key=settings.search.api_key,
        timeout_seconds=settings.search.timeout_seconds,
    )
