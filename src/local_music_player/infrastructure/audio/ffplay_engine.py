"""
FFplay Audio Engine

Infrastructure component playing local files through ``ffplay`` subprocesses,
with durations read by ``ffprobe``. POSIX only: pause and resume are
delivered as SIGSTOP/SIGCONT to the player process.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import signal
import time
from dataclasses import dataclass
from pathlib import Path

from local_music_player.application.interfaces.audio_engine import (
    AudioEngine,
    AudioSource,
    FinishedCallback,
)
from local_music_player.config.settings import AudioSettings
from local_music_player.domain.shared.exceptions import LoadError
from local_music_player.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)


@dataclass
class FFplayConfig:
    """Command-line configuration for the player and probe processes."""

    ffplay_path: str = "ffplay"
    ffprobe_path: str = "ffprobe"
    log_level: str = "error"

    def player_args(self, path: Path, offset: float, volume: float) -> list[str]:
        return [
            self.ffplay_path,
            "-nodisp",
            "-autoexit",
            "-loglevel",
            self.log_level,
            "-volume",
            str(round(max(0.0, min(1.0, volume)) * 100)),
            "-ss",
            f"{offset:.3f}",
            str(path),
        ]

    def probe_args(self, path: Path) -> list[str]:
        return [
            self.ffprobe_path,
            "-v",
            "error",
            "-show_entries",
            "format=duration",
            "-of",
            "default=noprint_wrappers=1:nokey=1",
            str(path),
        ]


class FFplaySource(AudioSource):
    """One opened file. The player process is spawned lazily on first play.

    Seeking and volume changes restart the process at the current offset.
    While paused they only drop the process; the next ``play()`` respawns it.
    """

    def __init__(
        self, *, engine: FFplayAudioEngine, path: Path, duration: float, config: FFplayConfig
    ) -> None:
        self._engine = engine
        self._path = path
        self._duration = max(0.0, duration)
        self._config = config
        self._process: asyncio.subprocess.Process | None = None
        self._watcher: asyncio.Task | None = None
        self._suspended = False
        self._base_position = 0.0
        self._resumed_at: float | None = None
        self._volume = 1.0
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def is_playing(self) -> bool:
        return self._resumed_at is not None

    def position(self) -> float:
        position = self._base_position
        if self._resumed_at is not None:
            position += time.monotonic() - self._resumed_at
        return min(position, self._duration)

    async def play(self) -> None:
        if self._closed or self.is_playing:
            return

        if self._process is None:
            await self._spawn(self._base_position)
        elif self._suspended:
            self._signal(signal.SIGCONT)
            self._suspended = False
        self._resumed_at = time.monotonic()

    async def pause(self) -> None:
        if not self.is_playing:
            return

        self._base_position = self.position()
        self._resumed_at = None
        if self._process is not None:
            self._signal(signal.SIGSTOP)
            self._suspended = True

    async def set_position(self, seconds: float) -> None:
        was_playing = self.is_playing
        await self._terminate()
        self._base_position = max(0.0, min(seconds, self._duration))
        self._resumed_at = None
        if was_playing:
            await self.play()

    async def set_volume(self, volume: float) -> None:
        volume = max(0.0, min(1.0, volume))
        if volume == self._volume:
            return
        self._volume = volume
        if self._process is None:
            return

        was_playing = self.is_playing
        self._base_position = self.position()
        self._resumed_at = None
        await self._terminate()
        if was_playing:
            await self.play()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._base_position = self.position()
        self._resumed_at = None
        await self._terminate()

    async def _spawn(self, offset: float) -> None:
        args = self._config.player_args(self._path, offset, self._volume)
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise LoadError(
                ErrorMessages.ENGINE_SPAWN_FAILED.format(name=self._path.name, error=e),
                file_ref=str(self._path),
            ) from e

        self._process = process
        self._suspended = False
        self._watcher = asyncio.create_task(self._watch(process))
        logger.debug(LogTemplates.ENGINE_PROCESS_STARTED, process.pid, self._path.name, offset)

    async def _watch(self, process: asyncio.subprocess.Process) -> None:
        returncode = await process.wait()
        logger.debug(LogTemplates.ENGINE_PROCESS_EXITED, process.pid, returncode)

        # Processes we replaced or killed ourselves are no longer current.
        if process is not self._process or self._closed:
            return

        self._process = None
        self._watcher = None
        self._suspended = False
        self._base_position = self._duration
        self._resumed_at = None
        await self._engine._notify_finished(self)

    async def _terminate(self) -> None:
        process, self._process = self._process, None
        self._suspended = False
        if self._watcher is not None:
            self._watcher.cancel()
            self._watcher = None
        if process is None or process.returncode is not None:
            return

        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()

    def _signal(self, sig: signal.Signals) -> None:
        if self._process is None:
            return
        try:
            self._process.send_signal(sig)
        except ProcessLookupError as e:
            logger.warning(LogTemplates.ENGINE_SIGNAL_FAILED, self._process.pid, e)


class FFplayAudioEngine(AudioEngine):
    """AudioEngine backed by the ffmpeg command-line tools."""

    def __init__(
        self, settings: AudioSettings | None = None, config: FFplayConfig | None = None
    ) -> None:
        self._settings = settings or AudioSettings()
        self._config = config or FFplayConfig(
            ffplay_path=self._settings.ffplay_path,
            ffprobe_path=self._settings.ffprobe_path,
        )
        self._on_finished: FinishedCallback | None = None

    def set_on_finished(self, callback: FinishedCallback) -> None:
        self._on_finished = callback

    async def open(self, file_ref: Path) -> FFplaySource:
        path = Path(file_ref)
        if not path.is_file():
            raise LoadError(
                ErrorMessages.TRACK_FILE_MISSING.format(file_name=path.name), file_ref=str(path)
            )

        for binary in (self._config.ffplay_path, self._config.ffprobe_path):
            if shutil.which(binary) is None:
                raise LoadError(ErrorMessages.ENGINE_BINARY_MISSING.format(binary=binary))

        duration = await self._probe_duration(path)
        return FFplaySource(engine=self, path=path, duration=duration, config=self._config)

    async def _probe_duration(self, path: Path) -> float:
        try:
            process = await asyncio.create_subprocess_exec(
                *self._config.probe_args(path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await process.communicate()
        except OSError as e:
            raise LoadError(
                ErrorMessages.ENGINE_PROBE_FAILED.format(name=path.name, error=e),
                file_ref=str(path),
            ) from e

        if process.returncode != 0:
            error = stderr.decode(errors="replace").strip() or f"exit code {process.returncode}"
            raise LoadError(
                ErrorMessages.ENGINE_PROBE_FAILED.format(name=path.name, error=error),
                file_ref=str(path),
            )

        try:
            return float(stdout.decode().strip())
        except ValueError as e:
            raise LoadError(
                ErrorMessages.ENGINE_PROBE_FAILED.format(name=path.name, error=e),
                file_ref=str(path),
            ) from e

    async def _notify_finished(self, source: FFplaySource) -> None:
        if self._on_finished is None:
            return
        try:
            await self._on_finished(source)
        except Exception:
            logger.exception("Error in finished callback for %s", source.path.name)
