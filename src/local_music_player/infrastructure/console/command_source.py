"""Remote command source reading one command per line from the console."""

from __future__ import annotations

import asyncio
import logging
import shlex
import sys
from collections.abc import AsyncIterable, AsyncIterator, Callable
from pathlib import Path
from typing import Literal

from pydantic import ValidationError

from local_music_player.application.interfaces.remote_commands import RemoteCommandSource
from local_music_player.application.services.transport_models import (
    AppBecameActive,
    ChangePlaybackPosition,
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
from local_music_player.domain.shared.messages import ErrorMessages
from local_music_player.domain.shared.types import NonNegativeInt

logger = logging.getLogger(__name__)

QUIT_COMMANDS = frozenset({"quit", "exit", "q"})

HELP_TEXT = """\
Commands:
  play | pause | toggle | stop     transport control
  next | prev                      skip through the playlist
  track N                          play the N-th playlist entry
  seek F                           jump to fraction F (0-1) of the track
  pos S                            jump to S seconds
  vol F                            set volume (0-1)
  sysvol F                         simulate a system output level change
  mode                             cycle loop all / loop one / random
  interrupt | resume [yes|no]      simulate an audio interruption
  foreground                       simulate the app becoming active
  lyrics PATH                      import an .lrc file for the current track
  list | status | help | quit
"""


class PlayTrackAt(TransportEvent):
    """Console request to load a playlist entry by position."""

    kind: Literal["play_track_at"] = "play_track_at"
    index: NonNegativeInt


class ImportLyrics(TransportEvent):
    kind: Literal["import_lyrics"] = "import_lyrics"
    path: Path


class ShowInfo(TransportEvent):
    kind: Literal["show_info"] = "show_info"
    topic: Literal["list", "status", "help"] = "status"


_SIMPLE_COMMANDS: dict[str, Callable[[], TransportEvent]] = {
    "play": Play,
    "pause": Pause,
    "toggle": TogglePlayPause,
    "stop": Stop,
    "next": NextTrack,
    "prev": PreviousTrack,
    "previous": PreviousTrack,
    "mode": CyclePlaybackMode,
    "interrupt": InterruptionBegan,
    "foreground": AppBecameActive,
}


def parse_command(line: str) -> TransportEvent:
    """Parse one console line into a transport event.

    Raises:
        ValueError: If the command is unknown or its argument is invalid.
    """
    parts = shlex.split(line)
    if not parts:
        raise ValueError(ErrorMessages.CONSOLE_UNKNOWN_COMMAND.format(command=""))

    command, args = parts[0].lower(), parts[1:]
    argument = args[0] if args else ""

    if command in _SIMPLE_COMMANDS:
        return _SIMPLE_COMMANDS[command]()

    try:
        match command:
            case "seek":
                return SeekFraction(fraction=float(argument))
            case "pos":
                return ChangePlaybackPosition(seconds=float(argument))
            case "vol":
                return SetVolume(volume=float(argument))
            case "sysvol":
                return SystemVolumeChanged(level=float(argument))
            case "resume":
                return InterruptionEnded(should_resume=_parse_yes_no(argument or "yes"))
            case "track":
                return PlayTrackAt(index=int(argument) - 1)
            case "lyrics" if argument:
                return ImportLyrics(path=Path(argument).expanduser())
            case "list" | "status" | "help":
                return ShowInfo(topic=command)
    except (ValueError, ValidationError) as e:
        raise ValueError(
            ErrorMessages.CONSOLE_BAD_ARGUMENT.format(command=command, argument=argument)
        ) from e

    raise ValueError(ErrorMessages.CONSOLE_UNKNOWN_COMMAND.format(command=command))


def _parse_yes_no(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("yes", "y", "true", "1"):
        return True
    if lowered in ("no", "n", "false", "0"):
        return False
    raise ValueError(value)


async def stdin_lines() -> AsyncIterator[str]:
    """Read stdin line by line without blocking the event loop."""
    while True:
        line = await asyncio.to_thread(sys.stdin.readline)
        if not line:
            return
        yield line


class ConsoleCommandSource(RemoteCommandSource):
    """Turns console lines into transport events until ``quit`` or end of input.

    Invalid lines are reported and skipped.
    """

    def __init__(
        self,
        lines: AsyncIterable[str] | None = None,
        *,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self._lines = lines
        self._on_error = on_error

    async def events(self) -> AsyncIterator[TransportEvent]:
        lines = self._lines if self._lines is not None else stdin_lines()
        async for raw in lines:
            line = raw.strip()
            if not line:
                continue
            if line.lower() in QUIT_COMMANDS:
                return

            try:
                event = parse_command(line)
            except ValueError as e:
                logger.debug("Rejected console input %r: %s", line, e)
                if self._on_error is not None:
                    self._on_error(str(e))
                continue

            yield event
