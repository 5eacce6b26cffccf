"""Ambient sound matched to the current weather."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from flightbrief.audio.protocols import AudioOutput, AudioPlaybackError, SoundPreference
from flightbrief.weather.models import WeatherCategory

logger: Final = logging.getLogger(__name__)

CALM: Final = "calm"
RAIN: Final = "rain"
WINDY: Final = "windy"

SOUND_FOR_CATEGORY: Final[dict[WeatherCategory, str]] = {
    **dict.fromkeys(
        (
            WeatherCategory.CLEAR,
            WeatherCategory.CLOUDS,
            WeatherCategory.HAZE,
            WeatherCategory.SMOKE,
            WeatherCategory.MIST,
            WeatherCategory.FOG,
            WeatherCategory.DUST,
            WeatherCategory.SAND,
            WeatherCategory.ASH,
        ),
        CALM,
    ),
    **dict.fromkeys(
        (
            WeatherCategory.RAIN,
            WeatherCategory.DRIZZLE,
            WeatherCategory.THUNDERSTORM,
            WeatherCategory.SQUALL,
            WeatherCategory.SNOW,
        ),
        RAIN,
    ),
    WeatherCategory.TORNADO: WINDY,
}


def sound_for_category(category: WeatherCategory) -> str | None:
    """Sound identifier for a category; None for ``UNKNOWN``."""
    return SOUND_FOR_CATEGORY.get(category)


@dataclass(frozen=True)
class SoundState:
    """Published view of the audio channel."""

    current_sound_id: str | None
    globally_enabled: bool


class AmbientSoundCoordinator:
    """Exclusive owner of the ambient audio channel.

    Guarantees that at most one looping sound plays, that a repeated
    request for the playing sound does not restart it, and that nothing
    plays while sounds are globally disabled. Re-enabling does not resume
    playback; the next weather change does.
    """

    def __init__(
        self,
        output: AudioOutput,
        preferences: SoundPreference | None = None,
        enabled: bool = True,
    ) -> None:
        """Initialize the coordinator.

        Args:
            output: The audio channel to drive
            preferences: Persisted toggle read on every weather change
            enabled: Initial toggle when no preferences are given
        """
        self.output = output
        self.preferences = preferences
        self._enabled = preferences.sounds_enabled if preferences else enabled
        self._current: str | None = None

    @property
    def state(self) -> SoundState:
        return SoundState(self._current, self._enabled)

    def on_weather_changed(self, category: WeatherCategory) -> None:
        """Play the sound matching ``category``.

        The persisted flag is re-read here on every call; with a file-backed
        store that is a small synchronous read on the caller's thread.
        """
        if self.preferences is not None:
            self._enabled = self.preferences.sounds_enabled

        if not self._enabled:
            logger.debug("Sounds are globally disabled")
            self.stop()
            return

        sound_id = sound_for_category(category)
        if sound_id is None:
            logger.debug("No sound for weather type %s, stopping sound", category.value)
            self.stop()
            return

        if sound_id == self._current:
            logger.debug('Sound "%s" is already playing', sound_id)
            return

        self.stop()
        try:
            self.output.play_loop(sound_id)
        except AudioPlaybackError as exc:
            logger.error("Could not play %s: %s", sound_id, exc)
            return
        self._current = sound_id

    def set_globally_enabled(self, enabled: bool) -> None:
        """Flip the global toggle; disabling stops playback immediately.

        Playback stops before the flag is persisted, so a failing write
        still leaves the channel silent.
        """
        self._enabled = enabled
        if not enabled:
            self.stop()
        if self.preferences is not None:
            self.preferences.set_sounds_enabled(enabled)
        logger.info("Global sound setting set to %s", enabled)

    def stop(self) -> None:
        """Stop the current sound, if any."""
        if self._current is None:
            return
        self._current = None
        self.output.stop()
