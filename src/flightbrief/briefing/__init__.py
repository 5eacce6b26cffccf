"""Briefing package - the orchestrator and its rendered view."""

from .orchestrator import (
    FETCH_FAILED_MESSAGE,
    NO_NETWORK_MESSAGE,
    BriefingOrchestrator,
    BriefingPhase,
    BriefingState,
    Trigger,
)
from .render import BriefingContextBuilder, TemplateRenderer

__all__ = [
    "FETCH_FAILED_MESSAGE",
    "NO_NETWORK_MESSAGE",
    "BriefingContextBuilder",
    "BriefingOrchestrator",
    "BriefingPhase",
    "BriefingState",
    "TemplateRenderer",
    "Trigger",
]
