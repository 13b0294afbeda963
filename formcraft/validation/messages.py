"""
Formcraft Validation Messages
=============================

Localized error-message templates, keyed by the kind of
check that failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional

from formcraft.core.config import get_config


class RuleKind(str, Enum):
    """Kinds of failure an error message can describe."""

    MIN = "min"
    MAX = "max"
    NOT_EMPTY = "not_empty"
    INTEGER = "integer"
    NUMERIC = "numeric"
    URL = "url"
    EMAIL = "email"
    FORMAT = "format"


@dataclass
class MessageCatalog:
    """
    Message templates for one locale.

    Templates may reference ``{min_length}`` and ``{max_length}``.
    Kinds without a template fall back to ``RuleKind.FORMAT``.

    Example:
        catalog = DEFAULT_MESSAGES.override({RuleKind.EMAIL: "bad address"})
        catalog.format(RuleKind.EMAIL)  # "bad address"
    """

    locale: str
    templates: Dict[RuleKind, str] = field(default_factory=dict)

    def template(self, kind: RuleKind) -> str:
        if kind in self.templates:
            return self.templates[kind]
        return self.templates.get(RuleKind.FORMAT, "")

    def format(self, kind: RuleKind, **params: object) -> str:
        """Render the template for ``kind`` with the given parameters."""
        return self.template(kind).format(**params)

    def override(self, templates: Mapping[RuleKind, str]) -> "MessageCatalog":
        """Return a copy with some templates replaced."""
        return MessageCatalog(self.locale, {**self.templates, **templates})


DEFAULT_MESSAGES = MessageCatalog(
    locale="en",
    templates={
        RuleKind.MIN: "length must be greater than {min_length}",
        RuleKind.MAX: "length must be less than {max_length}",
        RuleKind.NOT_EMPTY: "must not be empty",
        RuleKind.INTEGER: "must be an integer",
        RuleKind.NUMERIC: "must be a number",
        RuleKind.URL: "must be a URL",
        RuleKind.EMAIL: "must be an Email",
        RuleKind.FORMAT: "format error",
    },
)

ZH_CN_MESSAGES = MessageCatalog(
    locale="zh_CN",
    templates={
        RuleKind.MIN: "长度必须大于{min_length}",
        RuleKind.MAX: "长度必须小于{max_length}",
        RuleKind.NOT_EMPTY: "不能为空",
        RuleKind.INTEGER: "必须是整数",
        RuleKind.NUMERIC: "必须是数字",
        RuleKind.URL: "必须是网址",
        RuleKind.EMAIL: "必须是Email",
        RuleKind.FORMAT: "格式错误",
    },
)


_catalogs: Dict[str, MessageCatalog] = {
    DEFAULT_MESSAGES.locale: DEFAULT_MESSAGES,
    ZH_CN_MESSAGES.locale: ZH_CN_MESSAGES,
}


def register_catalog(catalog: MessageCatalog) -> None:
    """Register (or replace) the catalog for ``catalog.locale``."""
    _catalogs[catalog.locale] = catalog


def get_catalog(locale: Optional[str] = None) -> MessageCatalog:
    """
    Look up a catalog by locale.

    ``None`` uses the ``forms.locale`` configuration key.

    Raises:
        LookupError: No catalog is registered for the locale
    """
    if locale is None:
        locale = get_config().get_str("forms.locale", DEFAULT_MESSAGES.locale)
    try:
        return _catalogs[locale]
    except KeyError:
        raise LookupError(f"No message catalog for locale {locale!r}") from None
