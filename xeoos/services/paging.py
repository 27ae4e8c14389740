"""Offset pagination shared by every listing endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from xeoos.core.config import settings


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def has_more(self, total: int) -> bool:
        return self.skip + self.limit < total


def page_window(page: Any, limit: int | None = None) -> PageWindow:
    """Normalise a client-supplied page number (1-based, junk -> 1).

    Examples:
        >>> page_window("3", 20).skip
        40
        >>> page_window("abc", 20).page
        1
        >>> page_window(-2, 20).page
        1
    """

    try:
        number = int(page)
    except (TypeError, ValueError):
        number = 1
    return PageWindow(page=max(1, number), limit=limit or settings.app.page_size)
