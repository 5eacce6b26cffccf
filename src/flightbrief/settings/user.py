"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar, Final

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from flightbrief.location.models import Coordinates, LocationFix

CONFIG_ENV_VAR: Final = "FLIGHTBRIEF_CONFIG"

# Pick up ${VAR} values such as OWM_API_KEY from a .env file
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """User settings for the briefing application.

    Values can be overridden in config.yaml; ``${VAR}`` references are
    expanded from the environment before parsing, so the API key can
    live in a .env file.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/flightbrief/config.yaml").expanduser(),
        Path("/etc/flightbrief/config.yaml"),
    ]

    # Weather endpoint
    api_key: str = Field(..., min_length=10, description="OpenWeather API key")
    request_timeout: float = Field(10, gt=0, description="HTTP timeout in seconds")

    # Location settings
    lat: float | None = Field(None, ge=-90, le=90, description="Device latitude, if known")
    lon: float | None = Field(None, ge=-180, le=180, description="Device longitude, if known")
    fallback_lat: float = Field(40.7128, ge=-90, le=90, description="Fallback latitude")
    fallback_lon: float = Field(-74.0060, ge=-180, le=180, description="Fallback longitude")

    # Network
    reachability_url: str | None = Field(
        None,
        description="URL probed with HEAD to decide reachability; "
        "if null, the network is assumed reachable",
    )

    # Ambient sound
    sounds_dir: Path | None = Field(None, description="Directory holding <sound>.mp3 files")
    player_command: list[str] = Field(
        default_factory=lambda: ["mpg123", "--quiet", "--loop", "-1"],
        min_length=1,
        description="Command used to loop a sound file; the file path is appended",
    )
    preferences_file: Path | None = Field(
        None, description="YAML file persisting toggles such as sounds_enabled"
    )

    # ---- validators ----
    @model_validator(mode="after")
    def check_device_fix(self) -> UserSettings:
        if (self.lat is None) != (self.lon is None):
            raise ValueError("lat and lon must be given together")
        return self

    # ---- convenience methods ----
    @property
    def device_fix(self) -> LocationFix | None:
        """Configured device location, or None when it should be resolved."""
        if self.lat is None or self.lon is None:
            return None
        return LocationFix(self.lat, self.lon)

    @property
    def fallback(self) -> Coordinates:
        """Fallback coordinates used when no fix is available."""
        return Coordinates(self.fallback_lat, self.fallback_lon, is_fallback=True)

    @classmethod
    def find_config(cls) -> Path:
        """Locate the config file: $FLIGHTBRIEF_CONFIG first, then the search path."""
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)
            if not path.exists():
                raise FileNotFoundError(f"Config file from {CONFIG_ENV_VAR} not found: {path}")
            return path

        found = next((p for p in cls.DEFAULT_CONFIG_PATHS if p.exists()), None)
        if found is None:
            raise FileNotFoundError(
                f"No configuration file found. Create config.yaml or set {CONFIG_ENV_VAR}."
            )
        return found

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Read, interpolate and validate a YAML config file.

        Raises:
            FileNotFoundError: When no file is given and none can be found
            RuntimeError: When the file cannot be read or fails validation
        """
        path = path or cls.find_config()

        try:
            data = yaml.safe_load(_interpolate_env(path.read_text(encoding="utf-8")))
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read config YAML {path}: {exc}") from exc

        try:
            return cls.model_validate(data or {})
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration in {path}:\n{err}") from err
