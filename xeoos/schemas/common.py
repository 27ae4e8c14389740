"""Shared request model settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RequestBody(BaseModel):
    """Base for JSON bodies: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    lang: str | None = Field(
        default=None,
        description="Locale for response messages; overrides Accept-Language.",
    )


class PageBody(RequestBody):
    page: int | str | None = Field(default=1, description="1-based page number.")
