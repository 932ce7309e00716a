from __future__ import annotations

from typing import Iterable

from .types import ArticleRecord, CollectionStats


def aggregate(articles: Iterable[ArticleRecord]) -> CollectionStats:
    """Sum the engagement counters of a collection."""
    total_likes = 0
    total_stock = 0
    count = 0
    for article in articles:
        total_likes += article.likes_count
        total_stock += article.stocks_count
        count += 1
    return CollectionStats(total_likes=total_likes, total_stock=total_stock, count=count)


def average_likes(stats: CollectionStats) -> float:
    """Likes per article; an empty collection averages to zero."""
    if stats.count == 0:
        return 0.0
    return stats.total_likes / stats.count
