"""Ambient sound playback through an external command-line player."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Final, Sequence

from flightbrief.audio.protocols import AudioPlaybackError

logger: Final = logging.getLogger(__name__)

DEFAULT_PLAYER: Final = ("mpg123", "--quiet", "--loop", "-1")


class ProcessAudioOutput:
    """Loops ``<sounds_dir>/<sound_id>.mp3`` in a child process.

    The player process is the audio channel: starting a sound spawns it,
    stopping terminates it. At most one process is alive at a time.
    """

    def __init__(
        self,
        sounds_dir: Path,
        player_command: Sequence[str] = DEFAULT_PLAYER,
        stop_timeout: float = 2.0,
    ) -> None:
        self.sounds_dir = sounds_dir
        self.player_command = list(player_command)
        self.stop_timeout = stop_timeout
        self._process: subprocess.Popen[bytes] | None = None

    def sound_path(self, sound_id: str) -> Path:
        return self.sounds_dir / f"{sound_id}.mp3"

    @property
    def is_playing(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def play_loop(self, sound_id: str) -> None:
        path = self.sound_path(sound_id)
        if not path.exists():
            raise AudioPlaybackError(f"Sound file not found: {path}")
        if shutil.which(self.player_command[0]) is None:
            raise AudioPlaybackError(f"Audio player not found: {self.player_command[0]}")

        self.stop()
        try:
            self._process = subprocess.Popen(
                [*self.player_command, str(path)],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise AudioPlaybackError(f"Could not start player for {path}: {exc}") from exc
        logger.info("Started playing %s", path.name)

    def stop(self) -> None:
        process, self._process = self._process, None
        if process is None or process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=self.stop_timeout)
        except subprocess.TimeoutExpired:
            logger.warning("Audio player did not exit, killing it")
            process.kill()
            process.wait()
        logger.info("Stopped current sound")
