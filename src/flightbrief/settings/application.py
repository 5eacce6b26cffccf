"""Internal application settings derived from user settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from flightbrief.settings.user import UserSettings

PACKAGE_DIR = Path(__file__).resolve().parents[1]


@dataclass
class AppPaths:
    """Application file and directory paths.

    Centralizes template locations, bundled sound files and the
    preferences file so that tests can point them at a temporary
    directory.
    """

    templates_dir: Path
    sounds_dir: Path
    preferences_file: Path
    briefing_template: str = "briefing.txt.j2"

    @classmethod
    def from_user_settings(cls, user_settings: UserSettings) -> AppPaths:
        """Create paths from user overrides and package defaults."""
        return cls(
            templates_dir=PACKAGE_DIR / "templates",
            sounds_dir=user_settings.sounds_dir or PACKAGE_DIR / "sounds",
            preferences_file=user_settings.preferences_file
            or Path("~/.config/flightbrief/preferences.yaml").expanduser(),
        )


class ApplicationSettings:
    """Application settings container.

    Combines user-provided configuration with application defaults.

    Examples:
        user_settings = UserSettings.load()
        app_settings = ApplicationSettings(user_settings)
        prefs_path = app_settings.paths.preferences_file
    """

    def __init__(self, user_settings: UserSettings, paths: AppPaths | None = None):
        self.user = user_settings
        self.paths = paths or AppPaths.from_user_settings(user_settings)
