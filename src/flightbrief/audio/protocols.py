"""Audio output protocols and mock implementations for testing."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class AudioPlaybackError(RuntimeError):
    """Raised when a sound cannot be started."""


@runtime_checkable
class AudioOutput(Protocol):
    """Protocol defining the single ambient audio channel.

    Implementations loop one sound indefinitely until ``stop`` is called.
    Only the sound coordinator talks to an ``AudioOutput``.
    """

    def play_loop(self, sound_id: str) -> None:
        """Start looping the named sound.

        Args:
            sound_id: Identifier such as ``"rain"``

        Raises:
            AudioPlaybackError: If the sound cannot be started
        """
        ...

    def stop(self) -> None:
        """Stop whatever is playing; a no-op when silent."""
        ...


@runtime_checkable
class SoundPreference(Protocol):
    """Persisted global sound toggle."""

    @property
    def sounds_enabled(self) -> bool: ...

    def set_sounds_enabled(self, enabled: bool) -> None: ...


class MockAudioOutput:
    """Mock implementation of AudioOutput for testing."""

    def __init__(self):
        self.play_calls: list[str] = []
        self.stop_calls: int = 0
        self.playing: str | None = None

    def play_loop(self, sound_id: str) -> None:
        """Record the play call without requiring an audio device."""
        self.play_calls.append(sound_id)
        self.playing = sound_id

    def stop(self) -> None:
        self.stop_calls += 1
        self.playing = None

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.play_calls = []
        self.stop_calls = 0


class ErrorSimulatingAudioOutput(MockAudioOutput):
    """Audio mock that can simulate playback failures."""

    def __init__(self, fail_on_sounds: list[str] | None = None):
        """Initialize with sounds that should fail to start.

        Args:
            fail_on_sounds: Sound identifiers whose playback raises
        """
        super().__init__()
        self.fail_on_sounds = fail_on_sounds or []

    def play_loop(self, sound_id: str) -> None:
        if sound_id in self.fail_on_sounds:
            raise AudioPlaybackError(f"Simulated playback failure for {sound_id}")
        super().play_loop(sound_id)


def assert_playing(mock_output: MockAudioOutput, expected_sound: str | None) -> bool:
    """Assert that the mock is currently looping ``expected_sound``.

    Returns:
        True if the assertion passes, raises AssertionError otherwise
    """
    assert mock_output.playing == expected_sound, (
        f"Expected {expected_sound!r}, playing {mock_output.playing!r}"
    )
    return True
