"""Abstract interface for generative-text backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TextProvider(ABC):
    """Provider interface shared by every AI suggestion kind."""

    @property
    def is_configured(self) -> bool:
        """Whether credentials are present for a request."""
        return True

    @abstractmethod
    async def generate(self, prompt: str, event: str = "llm_generate") -> str:
        """Return generated text for ``prompt``.

        Raises:
            AIRequestError: when the backend reports a failure
        """
        raise NotImplementedError
