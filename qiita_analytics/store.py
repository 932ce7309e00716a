"""
Session state for one queried author.

ArticleStore owns the current article collection, its stats and the last
retrieval error, and resets AI suggestion state whenever a retrieval
begins. State is held as one immutable snapshot that is swapped in a
single assignment, so readers see either the previous complete state or
the new one, never a mix.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from pathlib import Path

from .analyzers.orchestrator import AIOrchestrator
from .config import AppConfig, get_qiita_token
from .core.sorting import sort_articles
from .core.stats import aggregate
from .core.types import ArticleRecord, CollectionStats, SortSpec
from .errors import QiitaAnalyticsError, ValidationError
from .fetch.qiita import QiitaClient
from .output.csv_export import export_filename, to_csv, write_csv
from .utils.logging import log_event


EMPTY_USER_MESSAGE = "Enter a Qiita user ID."


@dataclass(frozen=True)
class StoreSnapshot:
    """Consistent view of the store.

    Attributes:
        articles: Current collection in API order
        stats: Aggregates computed from ``articles``
        error: User-facing message of the last failure, or None
        user_id: User whose articles are held, None when empty
    """

    articles: tuple[ArticleRecord, ...] = field(default_factory=tuple)
    stats: CollectionStats = field(default_factory=CollectionStats)
    error: str | None = None
    user_id: str | None = None


class ArticleStore:
    """Retrieves a user's articles and holds the resulting session state."""

    def __init__(
        self,
        cfg: AppConfig,
        client: QiitaClient | None = None,
        ai: AIOrchestrator | None = None,
        logger: logging.Logger | None = None,
    ):
        self.cfg = cfg
        self.client = client or QiitaClient(cfg.qiita)
        self.ai = ai
        self.logger = logger or logging.getLogger("qiita_analytics.store")
        self._snapshot = StoreSnapshot()
        self._loading = False
        self._retrieval = 0

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    @property
    def articles(self) -> tuple[ArticleRecord, ...]:
        return self._snapshot.articles

    @property
    def stats(self) -> CollectionStats:
        return self._snapshot.stats

    @property
    def error(self) -> str | None:
        return self._snapshot.error

    @property
    def user_id(self) -> str | None:
        return self._snapshot.user_id

    @property
    def loading(self) -> bool:
        return self._loading

    async def retrieve(self, user_id: str, token: str | None = None) -> StoreSnapshot:
        """Fetch ``user_id``'s articles and replace the held collection.

        Errors are recorded on the snapshot rather than raised. A blank id is
        rejected before any network call and leaves the collection as it was.
        Any other failure empties the collection.
        """
        try:
            user_id = _require_user_id(user_id)
        except ValidationError as exc:
            self._snapshot = replace(self._snapshot, error=str(exc))
            return self._snapshot

        self._retrieval += 1
        retrieval = self._retrieval
        self._loading = True
        if self.ai is not None:
            self.ai.reset()
        token = token or get_qiita_token(self.cfg.qiita)
        log_event(self.logger, "Retrieving articles", event="retrieve_started", user_id=user_id)

        try:
            articles = await self.client.fetch_items(user_id, token)
        except QiitaAnalyticsError as exc:
            snapshot = StoreSnapshot(error=str(exc))
            self.logger.warning("Retrieval for %s failed: %s", user_id, exc)
        else:
            snapshot = StoreSnapshot(
                articles=tuple(articles),
                stats=aggregate(articles),
                user_id=user_id,
            )
            log_event(
                self.logger,
                "Articles retrieved",
                event="retrieve_finished",
                user_id=user_id,
                count=snapshot.stats.count,
            )

        if retrieval == self._retrieval:
            self._snapshot = snapshot
            self._loading = False
        return self._snapshot

    def sorted_articles(self, spec: SortSpec) -> list[ArticleRecord]:
        return sort_articles(self._snapshot.articles, spec)

    def export_csv(self, spec: SortSpec) -> str | None:
        """CSV text of the collection in ``spec`` order, None when empty."""
        return to_csv(self.sorted_articles(spec), self.cfg.export.date_format)

    def export_filename(self) -> str | None:
        if self._snapshot.user_id is None:
            return None
        return export_filename(self._snapshot.user_id, self.cfg.export)

    def write_export(self, directory: Path, spec: SortSpec) -> Path | None:
        """Write the CSV under ``directory`` using the derived filename."""
        filename = self.export_filename()
        if filename is None:
            return None
        return write_csv(directory / filename, self.sorted_articles(spec), self.cfg.export)


def _require_user_id(user_id: str | None) -> str:
    cleaned = (user_id or "").strip()
    if not cleaned:
        raise ValidationError(EMPTY_USER_MESSAGE)
    return cleaned
