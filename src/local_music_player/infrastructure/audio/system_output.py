"""Audio output adapter for desktop systems without a session-level output API."""

from __future__ import annotations

import logging

from local_music_player.application.interfaces.audio_output import AudioOutput

logger = logging.getLogger(__name__)


class DefaultAudioOutput(AudioOutput):
    """Output path managed entirely by the player process.

    ffplay opens the default device itself, so activation only records that
    the session asked for it.
    """

    def __init__(self) -> None:
        self._activations = 0

    @property
    def activations(self) -> int:
        return self._activations

    async def activate(self) -> None:
        self._activations += 1
        logger.debug("Audio output activated (%d)", self._activations)
