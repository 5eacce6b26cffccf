"""Pilot weather briefing - weather, derived risk signals and ambient sound."""

__version__ = "0.1.0"
