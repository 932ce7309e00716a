"""Tests for Langfuse tracing setup behavior."""

from __future__ import annotations

import sys
import types

from qiita_analytics.config import LangfuseConfig
from qiita_analytics.llm import tracing


def test_setup_langfuse_reads_keys_from_env(monkeypatch):
    captured: dict = {}

    class DummyLangfuse:
        def __init__(self, **kwargs):
            captured.update(kwargs)

    monkeypatch.setitem(sys.modules, "langfuse", types.SimpleNamespace(Langfuse=DummyLangfuse))
    monkeypatch.setenv("LANGFUSE_PUBLIC_KEY", "pk-test")
    monkeypatch.setenv("LANGFUSE_SECRET_KEY", "sk-test")
    monkeypatch.setenv("LANGFUSE_HOST", "https://cloud.langfuse.com")

    tracing.setup_langfuse(LangfuseConfig(enabled=True))

    assert captured["public_key"] == "pk-test"
    assert captured["secret_key"] == "sk-test"
    assert captured["host"] == "https://cloud.langfuse.com"
    assert tracing.get_tracer() is not None
    tracing.setup_langfuse(LangfuseConfig())


def test_setup_langfuse_disables_tracer_when_keys_missing(monkeypatch):
    monkeypatch.delenv("LANGFUSE_PUBLIC_KEY", raising=False)
    monkeypatch.delenv("LANGFUSE_SECRET_KEY", raising=False)

    tracing.setup_langfuse(LangfuseConfig(enabled=True))

    assert tracing.get_tracer() is None


def test_start_span_is_noop_when_disabled():
    tracing.setup_langfuse(LangfuseConfig(enabled=False))

    with tracing.start_span("gemini.test", kind="llm", input_value="prompt") as span:
        assert span is None
        tracing.set_span_output(span, "output")
        tracing.record_span_error(span, RuntimeError("boom"))
