"""
AI suggestion orchestration.

Three independent suggestion kinds share one provider:
- profile analysis (one state)
- next-topic suggestions (one state)
- title rewrites (one state per article id)

Each state is a tagged union: Idle, Pending, Resolved(text) or Failed(error).
Pending is entered before the first await, so a second trigger for the same
key while a request is in flight never issues a duplicate request. A reset
bumps a generation counter and results from older generations are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from types import MappingProxyType
from typing import Mapping, Sequence, Union

from ..config import PromptConfig
from ..core.types import ArticleRecord
from ..errors import ConfigurationError, QiitaAnalyticsError
from ..llm.prompts import build_profile_prompt, build_title_prompt, build_topics_prompt
from ..llm.providers.base import TextProvider
from ..llm.providers.gemini import MISSING_KEY_MESSAGE
from ..utils.logging import log_event


NO_ARTICLES_MESSAGE = "No articles loaded. Fetch articles before requesting AI suggestions."


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Pending:
    pass


@dataclass(frozen=True)
class Resolved:
    text: str


@dataclass(frozen=True)
class Failed:
    error: str


SuggestionState = Union[Idle, Pending, Resolved, Failed]

IDLE = Idle()
PENDING = Pending()


class SuggestionKind(str, Enum):
    PROFILE = "profile"
    TOPICS = "topics"
    TITLE = "title"


class AIOrchestrator:
    """Owns suggestion state and dispatches prompts to a TextProvider.

    Failures never escape an operation: they become a ``Failed`` state for
    the key that produced them and a message on ``error``. Configuration
    problems leave the key's state unchanged and only set ``error``.

    ``error`` holds the latest message and remembers which key produced it.
    Starting a new request clears it only when that same key is retried, so
    a failed title rewrite keeps its message while other kinds run.
    Profile and topics stay ``Resolved`` until the next ``reset()``.
    """

    def __init__(
        self,
        provider: TextProvider,
        prompt_cfg: PromptConfig,
        logger: logging.Logger | None = None,
    ):
        self.provider = provider
        self.prompt_cfg = prompt_cfg
        self.logger = logger or logging.getLogger("qiita_analytics.ai")
        self.error: str | None = None
        self._profile: SuggestionState = IDLE
        self._topics: SuggestionState = IDLE
        self._titles: dict[str, SuggestionState] = {}
        self._generation = 0
        self._error_key: str | None = None

    @property
    def profile(self) -> SuggestionState:
        return self._profile

    @property
    def topics(self) -> SuggestionState:
        return self._topics

    @property
    def title_suggestions(self) -> Mapping[str, SuggestionState]:
        """Read-only view of per-article states; absent ids are Idle."""
        return MappingProxyType(self._titles)

    def title_suggestion(self, article_id: str) -> SuggestionState:
        return self._titles.get(article_id, IDLE)

    def reset(self) -> None:
        """Drop every suggestion; in-flight results from before the reset are discarded."""
        self._generation += 1
        self._profile = IDLE
        self._topics = IDLE
        self._titles = {}
        self.error = None
        self._error_key = None

    async def analyze_profile(self, articles: Sequence[ArticleRecord]) -> SuggestionState:
        """Summarise the author's strengths and audience from their articles."""
        if isinstance(self._profile, (Pending, Resolved)):
            return self._profile
        if not self._check_ready(articles, SuggestionKind.PROFILE.value):
            return self._profile
        prompt = build_profile_prompt(articles, self.prompt_cfg)
        self._profile = PENDING
        generation = self._generation
        result = await self._request(prompt, SuggestionKind.PROFILE, generation, SuggestionKind.PROFILE.value)
        if generation == self._generation:
            self._profile = result
        return self._profile

    async def suggest_topics(self, articles: Sequence[ArticleRecord]) -> SuggestionState:
        """Propose three follow-up article themes."""
        if isinstance(self._topics, (Pending, Resolved)):
            return self._topics
        if not self._check_ready(articles, SuggestionKind.TOPICS.value):
            return self._topics
        prompt = build_topics_prompt(articles, self.prompt_cfg)
        self._topics = PENDING
        generation = self._generation
        result = await self._request(prompt, SuggestionKind.TOPICS, generation, SuggestionKind.TOPICS.value)
        if generation == self._generation:
            self._topics = result
        return self._topics

    async def request_title_suggestion(self, article: ArticleRecord) -> SuggestionState:
        """Ask for three rewrites of one article's title."""
        current = self.title_suggestion(article.id)
        if isinstance(current, Pending):
            return current
        if not self._check_ready([article], _title_key(article.id)):
            return current
        prompt = build_title_prompt(article)
        self._titles[article.id] = PENDING
        generation = self._generation
        result = await self._request(
            prompt, SuggestionKind.TITLE, generation, _title_key(article.id), article_id=article.id
        )
        if generation == self._generation:
            self._titles[article.id] = result
        return self.title_suggestion(article.id)

    def dismiss_title_suggestion(self, article_id: str) -> None:
        """Collapse a title suggestion back to Idle without a request."""
        state = self._titles.get(article_id)
        if state is None or isinstance(state, Pending):
            return
        del self._titles[article_id]

    async def toggle_title_suggestion(self, article: ArticleRecord) -> SuggestionState:
        """Dismiss a resolved suggestion, otherwise request one."""
        if isinstance(self.title_suggestion(article.id), Resolved):
            self.dismiss_title_suggestion(article.id)
            return IDLE
        return await self.request_title_suggestion(article)

    def _check_ready(self, articles: Sequence[ArticleRecord], key: str) -> bool:
        try:
            self._ensure_ready(articles)
        except ConfigurationError as exc:
            self._set_error(key, str(exc))
            log_event(self.logger, "AI request rejected", event="ai_rejected", reason=str(exc))
            return False
        if self._error_key == key:
            self.error = None
            self._error_key = None
        return True

    def _set_error(self, key: str, message: str) -> None:
        self.error = message
        self._error_key = key

    def _ensure_ready(self, articles: Sequence[ArticleRecord]) -> None:
        if not articles:
            raise ConfigurationError(NO_ARTICLES_MESSAGE)
        if not self.provider.is_configured:
            raise ConfigurationError(MISSING_KEY_MESSAGE)

    async def _request(
        self,
        prompt: str,
        kind: SuggestionKind,
        generation: int,
        key: str,
        article_id: str | None = None,
    ) -> SuggestionState:
        event = f"ai_{kind.value}"
        log_event(self.logger, "AI request started", event=f"{event}_started", article_id=article_id)
        try:
            text = await self.provider.generate(prompt, event=event)
        except QiitaAnalyticsError as exc:
            self.logger.warning("AI %s request failed: %s", kind.value, exc)
            if generation == self._generation:
                self._set_error(key, str(exc))
            return Failed(str(exc))
        log_event(self.logger, "AI request finished", event=f"{event}_finished", article_id=article_id)
        return Resolved(text)


def _title_key(article_id: str) -> str:
    return f"{SuggestionKind.TITLE.value}:{article_id}"
