"""
Qiita Analytics - engagement stats and AI suggestions for a Qiita author.

This package fetches a user's published Qiita articles, aggregates likes and
stocks, orders and exports them as CSV, and asks Gemini for a profile
analysis, next-topic ideas and title rewrites.

Main entry point is the CLI via `qiita-analytics report` command.

Example:
    $ qiita-analytics report some_user --sort likes_count --csv out/
"""

__all__ = [
    "__version__",
    "ArticleRecord",
    "ArticleStore",
    "AIOrchestrator",
    "CollectionStats",
    "SortSpec",
    "aggregate",
    "sort_articles",
    "to_csv",
]
__version__ = "0.1.0"

from .analyzers.orchestrator import AIOrchestrator
from .core.sorting import sort_articles
from .core.stats import aggregate
from .core.types import ArticleRecord, CollectionStats, SortSpec
from .output.csv_export import to_csv
from .store import ArticleStore
