"""Generative-text access, prompts and tracing."""

from .prompts import build_profile_prompt, build_title_prompt, build_topics_prompt
from .providers import GeminiProvider, TextProvider, available_providers, create_provider
from .tracing import flush, record_span_error, set_span_output, setup_langfuse, start_span

__all__ = [
    "TextProvider",
    "GeminiProvider",
    "create_provider",
    "available_providers",
    "build_profile_prompt",
    "build_topics_prompt",
    "build_title_prompt",
    "setup_langfuse",
    "flush",
    "start_span",
    "set_span_output",
    "record_span_error",
]
