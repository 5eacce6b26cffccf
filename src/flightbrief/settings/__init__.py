"""Application settings management.

This package provides:
- UserSettings: User-configurable settings loaded from config.yaml
- ApplicationSettings: Internal application settings and defaults
- PreferenceStore: Persisted toggles such as the global sound switch
"""

from flightbrief.settings.application import ApplicationSettings, AppPaths
from flightbrief.settings.preferences import MemoryPreferenceStore, PreferenceStore
from flightbrief.settings.user import UserSettings

__all__ = [
    "AppPaths",
    "ApplicationSettings",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "UserSettings",
]
