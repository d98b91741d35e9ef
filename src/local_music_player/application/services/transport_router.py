"""Transport Event Router - single entry point for external playback stimuli."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.shared.exceptions import CommandRejected
from ...domain.shared.messages import LogTemplates
from .transport_models import (
    AppBecameActive,
    ChangePlaybackPosition,
    CommandStatus,
    CyclePlaybackMode,
    InterruptionBegan,
    InterruptionEnded,
    NextTrack,
    Pause,
    Play,
    PreviousTrack,
    SeekFraction,
    SetVolume,
    Stop,
    SystemVolumeChanged,
    TogglePlayPause,
    TransportEvent,
)

if TYPE_CHECKING:
    from ..interfaces.audio_output import AudioOutput
    from .playback_session import PlaybackSession
    from .session_models import LoadResult

logger = logging.getLogger(__name__)


class TransportEventRouter:
    """Translates remote commands and OS notifications into session calls.

    Remote commands answer ``COMMAND_FAILED`` when they do not apply so the
    OS can grey out the control; notifications always answer ``SUCCESS``.
    """

    def __init__(self, *, session: PlaybackSession, audio_output: AudioOutput | None = None) -> None:
        self._session = session
        self._audio_output = audio_output
        self._was_playing_before_interruption = False

    @property
    def was_playing_before_interruption(self) -> bool:
        return self._was_playing_before_interruption

    async def handle(self, event: TransportEvent) -> CommandStatus:
        logger.debug(LogTemplates.TRANSPORT_EVENT_RECEIVED, event.kind)
        try:
            await self._dispatch(event)
        except CommandRejected as e:
            logger.debug(LogTemplates.TRANSPORT_EVENT_FAILED, e.message)
            return CommandStatus.COMMAND_FAILED
        return CommandStatus.SUCCESS

    async def _dispatch(self, event: TransportEvent) -> None:
        session = self._session
        match event:
            case Play():
                self._require(await session.play(), event)
            case Pause():
                self._require(await session.pause(), event)
            case TogglePlayPause():
                self._require(await session.toggle_play_pause(), event)
            case NextTrack():
                self._require(self._loaded(await session.skip_to_next()), event)
            case PreviousTrack():
                self._require(self._loaded(await session.skip_to_previous()), event)
            case ChangePlaybackPosition(seconds=seconds):
                self._require(await session.seek_to_seconds(seconds), event)
            case SeekFraction(fraction=fraction):
                self._require(await session.seek(fraction), event)
            case Stop():
                self._require(await session.stop(), event)
            case SetVolume(volume=volume):
                await session.set_volume(volume)
            case CyclePlaybackMode():
                await session.cycle_playback_mode()
            case InterruptionBegan():
                await self._on_interruption_began()
            case InterruptionEnded(should_resume=should_resume):
                await self._on_interruption_ended(should_resume)
            case AppBecameActive():
                await self._activate_output()
                await session.refresh_volume()
                await session.republish_now_playing()
            case SystemVolumeChanged(level=level):
                await session.apply_system_output_level(level)
            case _:
                raise CommandRejected(event.kind)

    @staticmethod
    def _loaded(result: LoadResult | None) -> bool:
        return result is not None and result.success

    @staticmethod
    def _require(applied: bool, event: TransportEvent) -> None:
        if not applied:
            raise CommandRejected(event.kind)

    async def _on_interruption_began(self) -> None:
        was_playing = self._session.is_playing
        if was_playing:
            await self._session.pause()
        self._was_playing_before_interruption = was_playing
        logger.info(LogTemplates.INTERRUPTION_BEGAN, was_playing)

    async def _on_interruption_ended(self, should_resume: bool) -> None:
        logger.info(LogTemplates.INTERRUPTION_ENDED, should_resume)
        await self._activate_output()

        if should_resume and self._was_playing_before_interruption:
            await self._session.play()
        else:
            await self._session.republish_now_playing()
        self._was_playing_before_interruption = False

    async def _activate_output(self) -> None:
        if self._audio_output is None:
            return
        try:
            await self._audio_output.activate()
        except Exception as e:
            logger.warning(LogTemplates.AUDIO_OUTPUT_ACTIVATION_FAILED, e)
