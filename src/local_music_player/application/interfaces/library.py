"""Port interface for the music library."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.music.entities import Track


class Library(ABC):
    """Maps library tracks to files and artwork."""

    @abstractmethod
    def resolve_file(self, track: Track) -> Path | None:
        """Return the file backing *track*, or None if it no longer exists."""
        ...

    @abstractmethod
    def cover_image(self, track: Track) -> bytes | None:
        """Return encoded cover artwork for *track*, if any."""
        ...

    @abstractmethod
    def scan(self) -> list[Track]:
        """List every playable track in the library."""
        ...
