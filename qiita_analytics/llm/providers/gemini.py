"""Google Gemini provider: the single request primitive behind every AI suggestion."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...config import LoggingConfig, PromptConfig, ProviderConfig
from ...errors import AIRequestError, ConfigurationError
from ...utils.logging import log_event, redact_text, truncate_text
from ..tracing import record_span_error, set_span_output, start_span
from .base import TextProvider


MISSING_KEY_MESSAGE = "Gemini API key is not configured."
GENERIC_FAILURE_MESSAGE = "Gemini API request failed"


class GeminiProvider(TextProvider):
    """Gemini ``generateContent`` client.

    The API key may be absent at construction time; ``is_configured`` reports
    whether a request can be attempted.
    """

    def __init__(
        self,
        cfg: ProviderConfig,
        prompt_cfg: PromptConfig,
        api_key: str | None,
        log_cfg: LoggingConfig,
        llm_logger: logging.Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cfg = cfg
        self.prompt_cfg = prompt_cfg
        self.api_key = api_key
        self.log_cfg = log_cfg
        self.llm_logger = llm_logger
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate(self, prompt: str, event: str = "llm_generate") -> str:
        if not self.api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE)
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        with start_span(
            f"gemini.{event}",
            kind="llm",
            input_value=prompt,
            attributes={"llm.model": self.cfg.model, "llm.provider": "gemini"},
        ) as span:
            try:
                data = await self._post(payload)
            except AIRequestError as exc:
                record_span_error(span, exc)
                self._log_llm_response(event, "provider_error", str(exc), prompt)
                raise
            content = _extract_text(data)
            if not content.strip():
                self._log_llm_response(event, "empty", content, prompt)
                return self.prompt_cfg.empty_response_text
            set_span_output(span, content)
            self._log_llm_response(event, "ok", content, prompt)
            return content

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.cfg.base_url.rstrip('/')}/v1beta/models/{self.cfg.model}:generateContent"
        params = {"key": self.api_key}
        try:
            async with httpx.AsyncClient(
                timeout=self.cfg.timeout_seconds,
                trust_env=self.cfg.trust_env,
                transport=self.transport,
            ) as client:
                resp = await client.post(url, params=params, json=payload)
        except httpx.HTTPError as exc:
            raise AIRequestError(f"{GENERIC_FAILURE_MESSAGE}: {type(exc).__name__}") from exc

        if not resp.is_success:
            raise AIRequestError(_extract_error_message(resp) or GENERIC_FAILURE_MESSAGE)
        try:
            data = resp.json()
        except ValueError as exc:
            raise AIRequestError(f"{GENERIC_FAILURE_MESSAGE}: invalid response body") from exc
        if not isinstance(data, dict):
            raise AIRequestError(f"{GENERIC_FAILURE_MESSAGE}: unexpected response shape")
        return data

    def _log_llm_response(self, event: str, status: str, content: str, prompt: str) -> None:
        if self.llm_logger is None:
            return
        redaction = self.log_cfg.llm_log_redaction
        payload: dict[str, Any] = {
            "event": event,
            "status": status,
            "model": self.cfg.model,
            "raw_response": truncate_text(redact_text(content, redaction)),
        }
        if self.log_cfg.llm_log_detail == "prompt_response":
            payload["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
        log_event(self.llm_logger, "LLM response", **payload)


def _extract_error_message(resp: httpx.Response) -> str | None:
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


def _extract_text(data: dict[str, Any]) -> str:
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""

    if not isinstance(parts, list):
        return ""

    non_thought_chunks: list[str] = []
    all_chunks: list[str] = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        text = part.get("text")
        if text is None:
            continue
        chunk = str(text)
        if not chunk:
            continue
        all_chunks.append(chunk)
        if not bool(part.get("thought")):
            non_thought_chunks.append(chunk)

    if non_thought_chunks:
        return "".join(non_thought_chunks)
    return "".join(all_chunks)
