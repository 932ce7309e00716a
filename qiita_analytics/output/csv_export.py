"""
CSV export for spreadsheet tools.

Output is UTF-8 with a leading byte-order mark so spreadsheet software
detects the encoding, every field quoted, and rows in the order supplied.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Sequence

from ..config import ExportConfig
from ..core.types import ArticleRecord


BOM = "\ufeff"
HEADER = ["title", "url", "likes", "created-date", "tags"]


def to_csv(articles: Sequence[ArticleRecord], date_format: str = "%Y/%m/%d") -> str | None:
    """Serialize ``articles`` without re-sorting.

    Returns:
        The CSV text including the BOM, or None when there is nothing to export
    """
    if not articles:
        return None
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HEADER)
    for article in articles:
        writer.writerow(
            [
                article.title,
                article.url,
                article.likes_count,
                article.created_instant.strftime(date_format),
                " ".join(article.tags),
            ]
        )
    return BOM + buf.getvalue().rstrip("\n")


def export_filename(user_id: str, cfg: ExportConfig | None = None) -> str:
    suffix = (cfg or ExportConfig()).filename_suffix
    return f"{user_id}{suffix}"


def write_csv(path: Path, articles: Sequence[ArticleRecord], cfg: ExportConfig | None = None) -> Path | None:
    """Write the CSV to ``path``; an empty collection writes nothing."""
    cfg = cfg or ExportConfig()
    content = to_csv(articles, cfg.date_format)
    if content is None:
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode("utf-8"))
    return path
