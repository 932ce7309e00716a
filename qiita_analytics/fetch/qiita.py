"""
HTTP client for the Qiita items API.

Fetches one page of a user's most relevant items and normalises them into
ArticleRecord objects. HTTP failures are mapped onto the package error
taxonomy; nothing is retried.
"""

from __future__ import annotations

import logging

import httpx

from ..config import QiitaConfig
from ..core.types import ArticleRecord
from ..errors import NotFoundError, RateLimitError, TransportError


logger = logging.getLogger("qiita_analytics.fetch")

RATE_LIMIT_MESSAGE = "API rate limit reached. Wait a while or configure an API token."
NOT_FOUND_MESSAGE = "User not found."


class QiitaClient:
    """Async client for ``GET /api/v2/items``.

    Attributes:
        cfg: Qiita API settings
        transport: Optional httpx transport, used to fake the API in tests
    """

    def __init__(self, cfg: QiitaConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.cfg = cfg
        self.transport = transport

    async def fetch_items(self, user_id: str, token: str | None = None) -> list[ArticleRecord]:
        """Fetch up to ``per_page`` items authored by ``user_id``.

        Args:
            user_id: Qiita user id, already validated as non-blank
            token: Optional access token sent as a bearer credential

        Returns:
            Articles in the order the API returned them

        Raises:
            RateLimitError: on HTTP 403
            NotFoundError: on HTTP 404
            TransportError: on other non-2xx statuses, network failures or
                an unexpected body
        """
        endpoint = f"{self.cfg.base_url.rstrip('/')}/api/v2/items"
        params = {
            "page": self.cfg.page,
            "per_page": self.cfg.per_page,
            "query": f"user:{user_id}",
        }
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            async with httpx.AsyncClient(
                timeout=self.cfg.timeout_seconds,
                trust_env=self.cfg.trust_env,
                transport=self.transport,
            ) as client:
                resp = await client.get(endpoint, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Qiita request failed: %s", exc)
            raise TransportError(f"An error occurred: {type(exc).__name__}") from exc

        if resp.status_code == 403:
            raise RateLimitError(RATE_LIMIT_MESSAGE)
        if resp.status_code == 404:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        if not resp.is_success:
            raise TransportError(
                f"An error occurred: {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise TransportError("An error occurred: invalid response body") from exc
        if not isinstance(data, list):
            raise TransportError("An error occurred: unexpected response shape")

        try:
            return [ArticleRecord.from_api(item) for item in data if isinstance(item, dict)]
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportError("An error occurred: malformed article data") from exc
