"""
Shared utility functions.

This package contains utility code used by the store, the AI layer
and the CLI.
"""

from .logging import (
    JsonlFormatter,
    log_event,
    redact_text,
    setup_llm_logger,
    setup_logging,
    truncate_text,
)

__all__ = [
    "setup_logging",
    "setup_llm_logger",
    "log_event",
    "redact_text",
    "truncate_text",
    "JsonlFormatter",
]
