"""AI suggestion orchestration."""

from .orchestrator import (
    IDLE,
    PENDING,
    AIOrchestrator,
    Failed,
    Idle,
    Pending,
    Resolved,
    SuggestionKind,
    SuggestionState,
)

__all__ = [
    "AIOrchestrator",
    "SuggestionKind",
    "SuggestionState",
    "Idle",
    "Pending",
    "Resolved",
    "Failed",
    "IDLE",
    "PENDING",
]
