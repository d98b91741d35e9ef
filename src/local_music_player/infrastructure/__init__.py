"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Audio (ffplay/ffprobe engine, output path)
- Library (filesystem scan, cover art)
- Now playing (logging publisher)
- Console (line-based command source)
- Persistence (SQLite repositories)
"""

from local_music_player.infrastructure.audio.ffplay_engine import FFplayAudioEngine
from local_music_player.infrastructure.library.filesystem_library import FilesystemLibrary
from local_music_player.infrastructure.persistence.database import Database

__all__ = [
    "Database",
    "FFplayAudioEngine",
    "FilesystemLibrary",
]
