"""
Deterministic ordering of article collections.

Timestamps compare by parsed instant, strings by locale collation and
everything else numerically. Python's sort is stable in both directions,
so equally-keyed articles keep their input order.
"""

from __future__ import annotations

import locale
from typing import Any, Sequence

from .types import ArticleRecord, SortDirection, SortKey, SortSpec


def sort_articles(articles: Sequence[ArticleRecord], spec: SortSpec) -> list[ArticleRecord]:
    """Return a new list ordered by ``spec``; the input is left untouched."""
    key = SortKey(spec.key)
    reverse = SortDirection(spec.direction) == SortDirection.DESC
    return sorted(articles, key=lambda article: _sort_value(article, key), reverse=reverse)


def _sort_value(article: ArticleRecord, key: SortKey) -> Any:
    if key == SortKey.CREATED_AT:
        return article.created_instant.timestamp()
    value = getattr(article, key.value)
    if isinstance(value, str):
        return locale.strxfrm(value)
    return value
