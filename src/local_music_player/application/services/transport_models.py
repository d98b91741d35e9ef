"""Transport events delivered to the router and the status it reports back."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from ...domain.shared.types import Fraction, NonNegativeFloat


class CommandStatus(StrEnum):
    """Reply to a remote command; lets the OS enable or disable the control."""

    SUCCESS = "success"
    COMMAND_FAILED = "command_failed"


class TransportEvent(BaseModel):
    """Base class for every stimulus the router accepts."""

    model_config = ConfigDict(frozen=True)

    kind: str

    @property
    def is_remote_command(self) -> bool:
        return False


class RemoteCommand(TransportEvent):
    @property
    def is_remote_command(self) -> bool:
        return True


# === Remote commands ===


class Play(RemoteCommand):
    kind: Literal["play"] = "play"


class Pause(RemoteCommand):
    kind: Literal["pause"] = "pause"


class TogglePlayPause(RemoteCommand):
    kind: Literal["toggle_play_pause"] = "toggle_play_pause"


class NextTrack(RemoteCommand):
    kind: Literal["next_track"] = "next_track"


class PreviousTrack(RemoteCommand):
    kind: Literal["previous_track"] = "previous_track"


class ChangePlaybackPosition(RemoteCommand):
    kind: Literal["change_playback_position"] = "change_playback_position"
    seconds: NonNegativeFloat


class Stop(RemoteCommand):
    kind: Literal["stop"] = "stop"


# === System notifications ===


class InterruptionBegan(TransportEvent):
    kind: Literal["interruption_began"] = "interruption_began"


class InterruptionEnded(TransportEvent):
    kind: Literal["interruption_ended"] = "interruption_ended"
    should_resume: bool = False


class AppBecameActive(TransportEvent):
    kind: Literal["app_became_active"] = "app_became_active"


class SystemVolumeChanged(TransportEvent):
    kind: Literal["system_volume_changed"] = "system_volume_changed"
    level: Fraction


# === Console-only requests ===


class SeekFraction(RemoteCommand):
    """Scrub to a fraction of the track, as the UI progress slider does."""

    kind: Literal["seek_fraction"] = "seek_fraction"
    fraction: Fraction


class SetVolume(RemoteCommand):
    kind: Literal["set_volume"] = "set_volume"
    volume: Fraction


class CyclePlaybackMode(RemoteCommand):
    kind: Literal["cycle_playback_mode"] = "cycle_playback_mode"
