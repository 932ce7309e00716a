"""
Error taxonomy for retrieval, export and AI operations.

Every error carries a user-facing message. They are raised inside the
package and caught at the operation boundary that produced them
(ArticleStore.retrieve, each AIOrchestrator operation), where the message
is stored on the component's ``error`` field.
"""

from __future__ import annotations


class QiitaAnalyticsError(Exception):
    """Base error for all qiita_analytics failures."""


class ValidationError(QiitaAnalyticsError):
    """A required input was empty; raised before any network call."""


class NotFoundError(QiitaAnalyticsError):
    """The content API answered 404 for the requested user."""


class RateLimitError(QiitaAnalyticsError):
    """The content API answered 403 (rate limit or forbidden)."""


class TransportError(QiitaAnalyticsError):
    """Any other non-2xx status, network failure or unreadable body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(QiitaAnalyticsError):
    """An AI call was attempted without an API key or without articles."""


class AIRequestError(QiitaAnalyticsError):
    """The generative-text endpoint returned a failure."""
