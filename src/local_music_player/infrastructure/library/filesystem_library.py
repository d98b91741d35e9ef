"""Library adapter over a directory of audio files."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from local_music_player.application.interfaces.library import Library
from local_music_player.config.settings import LibrarySettings
from local_music_player.domain.music.entities import Track
from local_music_player.domain.music.value_objects import TrackId
from local_music_player.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

ARTIST_TITLE_SEPARATOR = " - "
IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png")


class FilesystemLibrary(Library):
    """Tracks are audio files below ``root``; ``file_name`` is the relative path.

    File stems of the form ``Artist - Title`` are split into artist and title.
    Cover art is an image next to the file with the same stem, or one of the
    configured folder images (``cover.jpg`` and friends).
    """

    def __init__(self, root: Path, settings: LibrarySettings | None = None) -> None:
        self._root = Path(root).expanduser().resolve()
        self._settings = settings or LibrarySettings()
        self._extensions = {ext.lower() for ext in self._settings.audio_extensions}

    @property
    def root(self) -> Path:
        return self._root

    def resolve_file(self, track: Track) -> Path | None:
        candidate = (self._root / track.file_name).resolve()
        if not candidate.is_relative_to(self._root) or not candidate.is_file():
            return None
        return candidate

    def cover_image(self, track: Track) -> bytes | None:
        path = self.resolve_file(track)
        if path is None:
            return None

        for image in self._cover_candidates(path):
            if image.is_file():
                return image.read_bytes()
        return None

    def _cover_candidates(self, path: Path) -> Iterable[Path]:
        for suffix in IMAGE_SUFFIXES:
            yield path.with_suffix(suffix)
        for name in self._settings.cover_names:
            yield path.parent / name

    def scan(self) -> list[Track]:
        if not self._root.is_dir():
            raise NotADirectoryError(ErrorMessages.LIBRARY_NOT_A_DIRECTORY.format(path=self._root))

        tracks = [
            self.track_for(path)
            for path in sorted(self._root.rglob("*"))
            if path.is_file() and path.suffix.lower() in self._extensions
        ]
        logger.info(LogTemplates.LIBRARY_SCANNED, len(tracks), self._root)
        return tracks

    def track_for(self, path: Path) -> Track:
        relative = Path(path).resolve().relative_to(self._root).as_posix()
        artist, title = _split_stem(Path(path).stem)
        return Track(
            id=TrackId.from_file_name(relative),
            title=title,
            artist=artist,
            file_name=relative,
        )


def _split_stem(stem: str) -> tuple[str, str]:
    artist, sep, title = stem.partition(ARTIST_TITLE_SEPARATOR)
    if sep and artist.strip() and title.strip():
        return artist.strip(), title.strip()
    return "", stem.strip() or stem
