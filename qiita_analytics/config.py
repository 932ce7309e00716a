"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- QiitaConfig: Content API settings
- ProviderConfig: Generative-text provider settings
- PromptConfig: Prompt sizing and response fallbacks
- ExportConfig: CSV export settings
- LoggingConfig: Logging behavior
- LangfuseConfig: Langfuse tracing settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


@dataclass
class QiitaConfig:
    """Configuration for the Qiita content API.

    Attributes:
        base_url: Base URL of the Qiita API host
        page: Page number requested (the API is queried for one page only)
        per_page: Number of items requested per page (Qiita caps this at 100)
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
        token: Optional inline access token (overrides env var)
        token_env: Environment variable name containing the access token
    """

    base_url: str = "https://qiita.com"
    page: int = 1
    per_page: int = 100
    timeout_seconds: float = 20.0
    trust_env: bool = True
    token: str | None = None
    token_env: str = "QIITA_TOKEN"


@dataclass
class ProviderConfig:
    """Configuration for the generative-text provider.

    Attributes:
        name: Provider name ("gemini" currently supported)
        model: Model identifier used in the generateContent endpoint
        base_url: Base URL for the provider API
        api_key: Optional inline API key (overrides env var)
        api_key_env: Environment variable name containing the API key
        trust_env: Whether to respect system proxy settings for API requests
        timeout_seconds: Upper bound on a single request; None waits indefinitely
    """

    name: str = "gemini"
    model: str = "gemini-2.5-flash-preview-09-2025"
    base_url: str = "https://generativelanguage.googleapis.com"
    api_key: str | None = None
    api_key_env: str = "GOOGLE_API_KEY"
    trust_env: bool = True
    timeout_seconds: float | None = 60.0


@dataclass
class PromptConfig:
    """Configuration for prompt construction.

    Attributes:
        profile_max_articles: Articles (title + tags) included in the profile prompt
        topics_max_articles: Article titles included in the topic prompt
        empty_response_text: Placeholder used when the provider returns no text
    """

    profile_max_articles: int = 30
    topics_max_articles: int = 40
    empty_response_text: str = "No response was returned by the AI."


@dataclass
class ExportConfig:
    """Configuration for CSV export.

    Attributes:
        date_format: strftime format for the created-date column
        filename_suffix: Appended to the user id to build the export filename
    """

    date_format: str = "%Y/%m/%d"
    filename_suffix: str = "_qiita_articles.csv"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls_authors")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "run.jsonl"
    llm_log_enabled: bool = False
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "redact_urls_authors"
    llm_log_file: str = "llm.jsonl"


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse tracing.

    Attributes:
        enabled: Whether to enable Langfuse tracing
        public_key: Langfuse public key (optional)
        secret_key: Langfuse secret key (optional)
        host: Langfuse host URL (optional)
        environment: Langfuse environment label (optional)
        release: Langfuse release identifier (optional)
        redaction: Redaction mode for prompt/response payloads
        max_text_chars: Maximum characters for prompt/response payloads
    """

    enabled: bool = False
    public_key: str | None = None
    secret_key: str | None = None
    host: str | None = None
    environment: str | None = None
    release: str | None = None
    redaction: str = "redact_urls_authors"
    max_text_chars: int = 20000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    qiita: QiitaConfig = field(default_factory=QiitaConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    prompts: PromptConfig = field(default_factory=PromptConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)


DEFAULT_CONFIG = AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return _fromdict(_asdict(DEFAULT_CONFIG))

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(DEFAULT_CONFIG, raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "qiita": {
            "base_url": cfg.qiita.base_url,
            "page": cfg.qiita.page,
            "per_page": cfg.qiita.per_page,
            "timeout_seconds": cfg.qiita.timeout_seconds,
            "trust_env": cfg.qiita.trust_env,
            "token": cfg.qiita.token,
            "token_env": cfg.qiita.token_env,
        },
        "provider": {
            "name": cfg.provider.name,
            "model": cfg.provider.model,
            "base_url": cfg.provider.base_url,
            "api_key": cfg.provider.api_key,
            "api_key_env": cfg.provider.api_key_env,
            "trust_env": cfg.provider.trust_env,
            "timeout_seconds": cfg.provider.timeout_seconds,
        },
        "prompts": {
            "profile_max_articles": cfg.prompts.profile_max_articles,
            "topics_max_articles": cfg.prompts.topics_max_articles,
            "empty_response_text": cfg.prompts.empty_response_text,
        },
        "export": {
            "date_format": cfg.export.date_format,
            "filename_suffix": cfg.export.filename_suffix,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "llm_log_enabled": cfg.logging.llm_log_enabled,
            "llm_log_detail": cfg.logging.llm_log_detail,
            "llm_log_redaction": cfg.logging.llm_log_redaction,
            "llm_log_file": cfg.logging.llm_log_file,
        },
        "langfuse": {
            "enabled": cfg.langfuse.enabled,
            "public_key": cfg.langfuse.public_key,
            "secret_key": cfg.langfuse.secret_key,
            "host": cfg.langfuse.host,
            "environment": cfg.langfuse.environment,
            "release": cfg.langfuse.release,
            "redaction": cfg.langfuse.redaction,
            "max_text_chars": cfg.langfuse.max_text_chars,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        qiita=QiitaConfig(**data["qiita"]),
        provider=ProviderConfig(**data["provider"]),
        prompts=PromptConfig(**data["prompts"]),
        export=ExportConfig(**data["export"]),
        logging=LoggingConfig(**data["logging"]),
        langfuse=LangfuseConfig(**data.get("langfuse", {})),
    )


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    if cfg.api_key_env:
        return os.getenv(cfg.api_key_env) or None
    return None


def get_qiita_token(cfg: QiitaConfig) -> str | None:
    """Get Qiita access token from inline config or environment variable."""
    if cfg.token:
        return cfg.token
    if cfg.token_env:
        return os.getenv(cfg.token_env) or None
    return None
