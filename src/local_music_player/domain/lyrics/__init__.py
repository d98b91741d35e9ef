"""
Lyrics Bounded Context

Parsing of line-tagged lyric files and time-synchronized line resolution.
"""

from local_music_player.domain.lyrics.cursor import LyricCursor
from local_music_player.domain.lyrics.entities import LyricLine, LyricPosition, LyricTrack
from local_music_player.domain.lyrics.parser import LrcImporter, parse_lrc
from local_music_player.domain.lyrics.repository import LyricsRepository

__all__ = [
    "LyricCursor",
    "LyricLine",
    "LyricPosition",
    "LyricTrack",
    "LrcImporter",
    "parse_lrc",
    "LyricsRepository",
]
