"""
Command-line interface for Qiita Analytics.

Uses Typer to fetch one author's articles, print stats and a sorted table,
optionally export CSV and request AI suggestions. Supports loading .env
files for token and API key configuration.
"""

from __future__ import annotations

import asyncio
import locale
import logging
from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .analyzers.orchestrator import AIOrchestrator, Failed, Resolved, SuggestionState
from .config import AppConfig, load_config
from .core.stats import average_likes
from .core.types import SortDirection, SortKey, SortSpec
from .llm.providers import create_provider
from .llm.tracing import flush, setup_langfuse
from .store import ArticleStore
from .utils.logging import setup_llm_logger, setup_logging

app = typer.Typer(add_completion=False)
console = Console()


@app.callback()
def main() -> None:
    """Qiita article analytics."""


@app.command()
def report(
    user_id: str = typer.Argument(..., help="Qiita user ID."),
    token: str | None = typer.Option(
        None, "--token", envvar="QIITA_TOKEN", help="Qiita access token (raises the rate limit)."
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar="GOOGLE_API_KEY",
        help="Gemini API key (or set GOOGLE_API_KEY / .env).",
    ),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    sort: SortKey = typer.Option(SortKey.CREATED_AT, "--sort", help="Sort key."),
    direction: SortDirection = typer.Option(SortDirection.DESC, "--direction", help="Sort direction."),
    csv_dir: Path | None = typer.Option(
        None, "--csv", help="Directory to write <user>_qiita_articles.csv into."
    ),
    analyze: bool = typer.Option(False, "--analyze", help="Ask the AI for a profile analysis."),
    topics: bool = typer.Option(False, "--topics", help="Ask the AI for next-article topics."),
    rewrite: list[str] = typer.Option(
        [], "--rewrite", help="Article ID to request title rewrites for (repeatable)."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_dir: Path | None = typer.Option(None, "--log-dir", help="Directory for JSONL log files."),
):
    """Fetch a user's articles and print engagement stats.

    Args:
        user_id: Qiita user whose articles are fetched
        token: Optional Qiita access token
        api_key: Override Gemini API key
        config: Optional path to YAML config file
        sort: Column to order the table and CSV by
        direction: asc or desc
        csv_dir: Where to write the CSV export
        analyze: Request a profile analysis
        topics: Request next-topic suggestions
        rewrite: Article IDs to request title rewrites for
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Enables file logging into this directory
    """
    load_dotenv()
    use_system_collation()

    cfg = load_config(str(config) if config else None)
    if api_key:
        cfg.provider.api_key = api_key
    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.file = True

    setup_logging(cfg.logging, log_dir)
    setup_langfuse(cfg.langfuse)
    store = build_store(cfg, log_dir)

    try:
        ok = asyncio.run(
            _run_report(store, user_id, token, SortSpec(sort, direction), csv_dir, analyze, topics, rewrite)
        )
    finally:
        flush()
    if not ok:
        raise typer.Exit(code=1)


def use_system_collation() -> None:
    """Collate titles with the user's locale instead of the C default."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logging.getLogger("qiita_analytics").warning("System locale unavailable; titles sort by code point")


def build_store(cfg: AppConfig, log_dir: Path | None = None) -> ArticleStore:
    """Wire an ArticleStore with an AI orchestrator from config."""
    llm_logger = setup_llm_logger(cfg.logging, log_dir)
    provider = create_provider(cfg.provider, cfg.prompts, cfg.logging, llm_logger)
    return ArticleStore(cfg, ai=AIOrchestrator(provider, cfg.prompts))


async def _run_report(
    store: ArticleStore,
    user_id: str,
    token: str | None,
    spec: SortSpec,
    csv_dir: Path | None,
    analyze: bool,
    topics: bool,
    rewrite: list[str],
) -> bool:
    await store.retrieve(user_id, token)
    if store.error:
        console.print(f"[red]{store.error}[/red]")
        return False

    stats = store.stats
    console.print(
        f"Articles: {stats.count}  Likes: {stats.total_likes}  "
        f"Stocks: {stats.total_stock}  Avg likes: {average_likes(stats):.1f}"
    )
    articles = store.sorted_articles(spec)
    console.print(_articles_table(articles))

    if csv_dir is not None:
        path = store.write_export(csv_dir, spec)
        if path is None:
            console.print("Nothing to export.")
        else:
            console.print(f"CSV written: {path}")

    ai = store.ai
    if ai is None:
        return True

    by_id = {article.id: article for article in store.articles}
    jobs = []
    if analyze:
        jobs.append(ai.analyze_profile(store.articles))
    if topics:
        jobs.append(ai.suggest_topics(store.articles))
    for article_id in rewrite:
        article = by_id.get(article_id)
        if article is None:
            console.print(f"[yellow]Unknown article id: {article_id}[/yellow]")
            continue
        jobs.append(ai.request_title_suggestion(article))
    if not jobs:
        return True

    await asyncio.gather(*jobs)
    if analyze:
        _print_state("Profile analysis", ai.profile)
    if topics:
        _print_state("Next topics", ai.topics)
    for article_id in rewrite:
        if article_id in by_id:
            _print_state(f"Title ideas: {by_id[article_id].title}", ai.title_suggestion(article_id))
    if ai.error:
        console.print(f"[red]{ai.error}[/red]")
    return True


def _articles_table(articles) -> Table:
    table = Table(show_lines=False)
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Likes", justify="right")
    table.add_column("Stocks", justify="right")
    table.add_column("Created")
    table.add_column("Tags")
    for article in articles:
        table.add_row(
            article.id,
            article.title,
            str(article.likes_count),
            str(article.stocks_count),
            article.created_instant.strftime("%Y-%m-%d"),
            ", ".join(article.tags),
        )
    return table


def _print_state(title: str, state: SuggestionState) -> None:
    if isinstance(state, Resolved):
        console.print(Panel(state.text, title=title))
    elif isinstance(state, Failed):
        console.print(Panel(f"[red]{state.error}[/red]", title=title))


if __name__ == "__main__":
    app()
