"""Port interface for the audio decode/output engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from pathlib import Path


class AudioSource(ABC):
    """A single opened audio file.

    The playback session owns at most one source at a time and is the only
    component that calls these methods.
    """

    #: True for engines whose seek only takes effect while the decoder is
    #: running; the session then toggles play/pause around a paused seek.
    requires_seek_commit: bool = False

    @property
    @abstractmethod
    def duration(self) -> float:
        """Total length in seconds."""
        ...

    @property
    @abstractmethod
    def is_playing(self) -> bool:
        ...

    @abstractmethod
    def position(self) -> float:
        """Current playback position in seconds."""
        ...

    @abstractmethod
    async def play(self) -> None:
        ...

    @abstractmethod
    async def pause(self) -> None:
        ...

    @abstractmethod
    async def set_position(self, seconds: float) -> None:
        """Relocate playback without changing the play/pause state."""
        ...

    @abstractmethod
    async def set_volume(self, volume: float) -> None:
        """Set output volume in [0.0, 1.0]."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the decoder. Must be safe to call more than once."""
        ...


FinishedCallback = Callable[[AudioSource], Awaitable[None]]


class AudioEngine(ABC):
    """Opens audio files and reports natural end of playback."""

    @abstractmethod
    async def open(self, file_ref: Path) -> AudioSource:
        """Open a file for playback, initially paused at position 0.

        Raises:
            LoadError: If the file is missing, unreadable or undecodable.
        """
        ...

    @abstractmethod
    def set_on_finished(self, callback: FinishedCallback) -> None:
        """Register the single subscriber notified when a source plays to its end."""
        ...
