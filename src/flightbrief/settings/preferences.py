"""Persisted key-value preferences toggled from the presentation layer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final

import yaml

logger: Final = logging.getLogger(__name__)

SOUNDS_ENABLED_KEY: Final = "sounds_enabled"


class PreferenceStore:
    """Small YAML-backed store for user toggles.

    The file is read on every access so that a toggle written by another
    process (for example the CLI) is seen by a running briefing.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Could not read preferences %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        """Return a stored value or ``default``."""
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Persist a single value, keeping the others."""
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(yaml.safe_dump(data, sort_keys=True), encoding="utf-8")
        logger.debug("Preference %s set to %r", key, value)

    @property
    def sounds_enabled(self) -> bool:
        """Global ambient-sound toggle; enabled unless explicitly switched off."""
        value = self.get(SOUNDS_ENABLED_KEY, True)
        if not isinstance(value, bool):
            logger.warning(
                "Ignoring non-boolean %s=%r in %s", SOUNDS_ENABLED_KEY, value, self.path
            )
            return True
        return value

    def set_sounds_enabled(self, enabled: bool) -> None:
        self.set(SOUNDS_ENABLED_KEY, bool(enabled))


class MemoryPreferenceStore:
    """In-memory preferences for tests and ephemeral sessions."""

    def __init__(self, sounds_enabled: bool = True) -> None:
        self._sounds_enabled = sounds_enabled

    @property
    def sounds_enabled(self) -> bool:
        return self._sounds_enabled

    def set_sounds_enabled(self, enabled: bool) -> None:
        self._sounds_enabled = bool(enabled)
