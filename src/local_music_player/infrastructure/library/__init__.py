"""Library infrastructure - filesystem-backed track catalogue."""

from local_music_player.infrastructure.library.filesystem_library import FilesystemLibrary

__all__ = ["FilesystemLibrary"]
