"""
Core domain models and pure operations.

This package contains data types, aggregation and ordering logic that is
independent of any network collaborator.
"""

from .types import ArticleRecord, CollectionStats, SortDirection, SortKey, SortSpec
from .sorting import sort_articles
from .stats import aggregate, average_likes

__all__ = [
    "ArticleRecord",
    "CollectionStats",
    "SortDirection",
    "SortKey",
    "SortSpec",
    "sort_articles",
    "aggregate",
    "average_likes",
]
