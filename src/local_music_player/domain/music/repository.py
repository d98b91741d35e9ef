"""
Music Domain Repository Interfaces

Abstract base classes defining the contracts for data persistence.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from local_music_player.domain.music.entities import PlaybackPreferences


class PreferencesRepository(ABC):
    """Abstract repository for the persisted playback preferences."""

    @abstractmethod
    async def load(self) -> PlaybackPreferences | None:
        """Load stored preferences.

        Returns:
            The stored preferences, or None if nothing was saved yet.
        """
        ...

    @abstractmethod
    async def save(self, preferences: PlaybackPreferences) -> None:
        """Persist preferences, replacing any previous value.

        Args:
            preferences: The preferences to store.
        """
        ...
