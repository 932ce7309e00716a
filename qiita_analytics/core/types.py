"""
Core data types for Qiita Analytics.

This module defines the fundamental data structures used throughout the package:
- ArticleRecord: One article as returned by the Qiita items API
- CollectionStats: Aggregate engagement counters over a collection
- SortSpec: Active sort key and direction for the article list
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class SortKey(str, Enum):
    """Article fields the list can be ordered by."""

    TITLE = "title"
    CREATED_AT = "created_at"
    LIKES_COUNT = "likes_count"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ArticleRecord:
    """Represents one published article fetched from Qiita.

    Records are immutable; a retrieval replaces the whole collection.

    Attributes:
        id: Qiita item id, unique within a collection
        title: The article headline
        url: Canonical URL of the article
        likes_count: Number of likes (LGTM)
        created_at: ISO 8601 creation timestamp as returned by the API
        stocks_count: Number of bookmarks (stocks); missing values become 0
        tags: Tag names in display order, duplicates preserved
    """

    id: str
    title: str
    url: str
    likes_count: int
    created_at: str
    stocks_count: int = 0
    tags: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> ArticleRecord:
        """Build a record from one element of the ``/api/v2/items`` payload."""
        tags = item.get("tags") or []
        return cls(
            id=str(item["id"]),
            title=str(item.get("title") or ""),
            url=str(item.get("url") or ""),
            likes_count=int(item.get("likes_count") or 0),
            created_at=str(item["created_at"]),
            stocks_count=int(item.get("stocks_count") or 0),
            tags=tuple(str(tag.get("name") or "") for tag in tags if isinstance(tag, dict)),
        )

    @property
    def created_instant(self) -> datetime:
        """Creation time as an aware datetime; naive timestamps are read as UTC."""
        parsed = datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


@dataclass(frozen=True)
class CollectionStats:
    """Aggregate engagement counters, recomputed whenever the collection changes.

    Attributes:
        total_likes: Sum of likes_count across the collection
        total_stock: Sum of stocks_count across the collection
        count: Number of articles
    """

    total_likes: int = 0
    total_stock: int = 0
    count: int = 0


@dataclass(frozen=True)
class SortSpec:
    """Active sort key and direction, owned by the caller."""

    key: SortKey = SortKey.CREATED_AT
    direction: SortDirection = SortDirection.DESC

    def toggle(self, key: SortKey | str) -> SortSpec:
        """Return the spec after a sort request on ``key``.

        Requesting the active key flips the direction; any other key starts
        descending.
        """
        key = SortKey(key)
        if key == self.key:
            flipped = SortDirection.ASC if self.direction == SortDirection.DESC else SortDirection.DESC
            return SortSpec(key=key, direction=flipped)
        return SortSpec(key=key, direction=SortDirection.DESC)
