"""Audio package - ambient sound coordination and playback."""

from .coordinator import AmbientSoundCoordinator, SoundState, sound_for_category
from .player import ProcessAudioOutput
from .protocols import AudioOutput, AudioPlaybackError, MockAudioOutput, SoundPreference

__all__ = [
    "AmbientSoundCoordinator",
    "AudioOutput",
    "AudioPlaybackError",
    "MockAudioOutput",
    "ProcessAudioOutput",
    "SoundPreference",
    "SoundState",
    "sound_for_category",
]
