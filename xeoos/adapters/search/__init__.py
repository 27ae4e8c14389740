"""Full-text search adapters."""

from xeoos.adapters.search.base import AbstractSearchIndex, DisabledSearchIndex, SearchPage
from xeoos.adapters.search.factory import create_search_index
from xeoos.adapters.search.meili_client import MeiliSearchIndex

__all__ = [
    "AbstractSearchIndex",
    "DisabledSearchIndex",
    "MeiliSearchIndex",
    "SearchPage",
    "create_search_index",
]
