"""Provider factory and registry for generative-text backends."""

from __future__ import annotations

import logging

import httpx

from ...config import LoggingConfig, PromptConfig, ProviderConfig, get_api_key
from ...errors import ConfigurationError
from .base import TextProvider
from .gemini import GeminiProvider


ProviderBuilder = type[GeminiProvider]

_PROVIDER_REGISTRY: dict[str, ProviderBuilder] = {
    "gemini": GeminiProvider,
}


def available_providers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(_PROVIDER_REGISTRY.keys())


def create_provider(
    provider_cfg: ProviderConfig,
    prompt_cfg: PromptConfig,
    log_cfg: LoggingConfig,
    llm_logger: logging.Logger | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TextProvider:
    """Build a provider instance from runtime config.

    Raises:
        ConfigurationError: for an unknown provider name or a missing API key
    """
    name = provider_cfg.name.lower().strip()
    builder = _PROVIDER_REGISTRY.get(name)
    if builder is None:
        supported = ", ".join(available_providers())
        raise ConfigurationError(f"Unsupported provider: {provider_cfg.name}. Supported: {supported}")
    api_key = get_api_key(provider_cfg)
    return builder(provider_cfg, prompt_cfg, api_key, log_cfg, llm_logger, transport=transport)
