"""Port interface for the system audio output path."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AudioOutput(ABC):
    """The OS-level output route the engine plays through."""

    @abstractmethod
    async def activate(self) -> None:
        """(Re)activate the output path, e.g. after an interruption.

        Raises:
            OSError: If the system refuses activation.
        """
        ...
