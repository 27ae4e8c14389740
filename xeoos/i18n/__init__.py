"""Locale handling and the localized message catalog."""

from xeoos.i18n.locales import (
    DEFAULT_LOCALE,
    LOCALE_NAMES,
    LOCALES,
    column_suffix,
    lang,
    locale_suffix,
    localized,
    get_current_locale,
    resolve_locale,
    set_current_locale,
)
from xeoos.i18n.messages import MESSAGES, translate

__all__ = [
    "DEFAULT_LOCALE",
    "LOCALES",
    "LOCALE_NAMES",
    "MESSAGES",
    "column_suffix",
    "lang",
    "locale_suffix",
    "localized",
    "get_current_locale",
    "resolve_locale",
    "set_current_locale",
    "translate",
]
