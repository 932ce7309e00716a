"""Generative-text provider implementations."""

from .base import TextProvider
from .factory import available_providers, create_provider
from .gemini import GeminiProvider

__all__ = [
    "TextProvider",
    "GeminiProvider",
    "create_provider",
    "available_providers",
]
