"""Console infrastructure - line-based command input."""

from local_music_player.infrastructure.console.command_source import (
    ConsoleCommandSource,
    ImportLyrics,
    PlayTrackAt,
    ShowInfo,
    parse_command,
)

__all__ = [
    "ConsoleCommandSource",
    "ImportLyrics",
    "PlayTrackAt",
    "ShowInfo",
    "parse_command",
]
