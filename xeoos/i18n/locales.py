"""Supported locales and locale resolution helpers."""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Mapping

DEFAULT_LOCALE = "en-US"

LOCALES: tuple[str, ...] = (
    "en-US",
    "zh-CN",
    "zh-TW",
    "es-ES",
    "fr-FR",
    "ru-RU",
    "ja-JP",
    "de-DE",
    "pt-BR",
    "ko-KR",
)

LOCALE_NAMES: dict[str, str] = {
    "en-US": "English",
    "zh-CN": "简体中文",
    "zh-TW": "繁体中文",
    "es-ES": "Español",
    "fr-FR": "Français",
    "ru-RU": "Русский",
    "ja-JP": "日本語",
    "de-DE": "Deutsch",
    "pt-BR": "Português",
    "ko-KR": "한국어",
}

# Bare language tags map to the locale we serve for them.
_LANGUAGE_FALLBACKS: dict[str, str] = {
    "en": "en-US",
    "zh": "zh-CN",
    "es": "es-ES",
    "fr": "fr-FR",
    "ru": "ru-RU",
    "ja": "ja-JP",
    "de": "de-DE",
    "pt": "pt-BR",
    "ko": "ko-KR",
}

_CANONICAL = {locale.lower(): locale for locale in LOCALES}


def locale_suffix(locale: str) -> str:
    """Return the storage suffix for a locale (``zh-CN`` -> ``ZHCN``)."""

    return locale.replace("-", "").upper()


def column_suffix(locale: str) -> str:
    """Return the ORM column suffix for a locale (``zh-CN`` -> ``zhcn``)."""

    return locale_suffix(locale).lower()


def is_supported(locale: str | None) -> bool:
    return bool(locale) and locale in LOCALES


def resolve_locale(value: str | None) -> str:
    """Resolve a locale, ``Accept-Language`` value or nothing to a supported locale.

    Only the first entry of an ``Accept-Language`` list is considered, any
    quality parameters are ignored and ``_`` is accepted in place of ``-``.

    Examples:
        >>> resolve_locale("zh-CN,zh;q=0.9,en;q=0.8")
        'zh-CN'
        >>> resolve_locale("ja")
        'ja-JP'
        >>> resolve_locale(None)
        'en-US'
    """

    if not value:
        return DEFAULT_LOCALE

    first = value.split(",")[0].split(";")[0].strip().replace("_", "-")
    if not first:
        return DEFAULT_LOCALE

    canonical = _CANONICAL.get(first.lower())
    if canonical:
        return canonical

    return _LANGUAGE_FALLBACKS.get(first.split("-")[0].lower(), DEFAULT_LOCALE)


def lang(texts: Mapping[str, str], locale: str | None = None) -> str:
    """Pick the text for ``locale`` from a per-locale table, falling back to English."""

    resolved = resolve_locale(locale)
    return texts.get(resolved) or texts.get(DEFAULT_LOCALE, "")


def localized(entity: Any, field: str, locale: str | None, fallback: str | None = None) -> Any:
    """Read the translated variant of ``field`` from an ORM entity.

    Falls back to the untranslated attribute (``fallback`` or ``field``) when
    the translation is missing or empty.
    """

    suffix = column_suffix(resolve_locale(locale))
    value = getattr(entity, f"{field}_{suffix}", None)
    if value:
        return value
    return getattr(entity, fallback or field, None)


_locale_var: ContextVar[str] = ContextVar("locale", default=DEFAULT_LOCALE)


def set_current_locale(locale: str | None) -> None:
    """Store the locale resolved for the current request."""

    _locale_var.set(resolve_locale(locale))


def get_current_locale() -> str:
    return _locale_var.get()
