"""Prompt loading and rendering helpers for the AI suggestion kinds."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Sequence

from ..config import PromptConfig
from ..core.types import ArticleRecord


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def _render_template(name: str, **values: str) -> str:
    template = _load_template(name)
    return template.format(**values)


def build_profile_prompt(articles: Sequence[ArticleRecord], cfg: PromptConfig) -> str:
    lines = [
        f"- Title: {article.title} (Tags: {', '.join(article.tags)})"
        for article in articles[: cfg.profile_max_articles]
    ]
    return _render_template("profile", articles="\n".join(lines))


def build_topics_prompt(articles: Sequence[ArticleRecord], cfg: PromptConfig) -> str:
    lines = [f"- {article.title}" for article in articles[: cfg.topics_max_articles]]
    return _render_template("topics", articles="\n".join(lines))


def build_title_prompt(article: ArticleRecord) -> str:
    return _render_template("title", title=article.title)
