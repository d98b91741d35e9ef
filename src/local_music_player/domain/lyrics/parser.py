"""
LRC Lyric Parser

Turns line-tagged ``.lrc`` text into a :class:`LyricTrack`.

Supported forms::

    [ar:Artist]              metadata (ar, ti, al, by, length, re, ve, offset)
    [01:02]text              minutes:seconds
    [01:02.3]text            tenths
    [01:02.34]text           hundredths
    [01:02.345]text          milliseconds
    [00:10.00][01:10.00]text one line shown at several times

Untagged lines are ignored. A timestamp with seconds >= 60 or a file
without a single timed line is rejected with :class:`ParseError`.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from local_music_player.domain.lyrics.entities import LyricLine, LyricTrack
from local_music_player.domain.shared.exceptions import ParseError
from local_music_player.domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

LRC_EXTENSION = ".lrc"

_TIMESTAMP_RE = re.compile(r"\[(\d+):(\d+)(?:[.:](\d+))?\]")
_METADATA_RE = re.compile(r"^\[([a-zA-Z]+):(.*)\]$")
_LEADING_TAG_RE = re.compile(r"^\s*\[")


def _fraction_to_seconds(frac: str | None) -> float:
    if not frac:
        return 0.0
    if len(frac) == 1:
        return int(frac) / 10.0
    if len(frac) == 2:
        return int(frac) / 100.0
    return int(frac[:3]) / 1000.0


def _parse_timestamp(minutes: str, seconds: str, frac: str | None, line_number: int) -> float:
    secs = int(seconds)
    if secs >= 60:
        raise ParseError(
            ErrorMessages.LYRICS_BAD_TIMESTAMP.format(line=line_number), line_number=line_number
        )
    return int(minutes) * 60 + secs + _fraction_to_seconds(frac)


def parse_lrc(text: str) -> LyricTrack:
    """Parse LRC text into a LyricTrack.

    Raises:
        ParseError: If the text holds no timed lines or a malformed timestamp.
    """
    entries: list[tuple[float, str]] = []
    metadata: dict[str, str] = {}

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        meta = _METADATA_RE.match(line)
        if meta and not _TIMESTAMP_RE.match(line):
            metadata[meta.group(1).lower()] = meta.group(2).strip()
            continue

        stamps: list[float] = []
        pos = 0
        while True:
            match = _TIMESTAMP_RE.match(line, pos)
            if match is None:
                break
            stamps.append(_parse_timestamp(*match.groups(), line_number=line_number))
            pos = match.end()

        if not stamps:
            if _LEADING_TAG_RE.match(line):
                raise ParseError(
                    ErrorMessages.LYRICS_BAD_TAG.format(line=line_number), line_number=line_number
                )
            logger.debug("Ignoring untagged lyric line %d", line_number)
            continue

        lyric = line[pos:].strip()
        entries.extend((stamp, lyric) for stamp in stamps)

    if not entries:
        raise ParseError(ErrorMessages.LYRICS_NO_TIMED_LINES)

    offset = _offset_seconds(metadata.get("offset"))

    # sorted() is stable, so lines sharing a timestamp keep file order.
    entries.sort(key=lambda entry: entry[0])
    lines = tuple(
        LyricLine(timestamp=max(0.0, stamp - offset), text=lyric) for stamp, lyric in entries
    )
    return LyricTrack(
        lines=lines,
        title=metadata.get("ti") or None,
        artist=metadata.get("ar") or None,
    )


def _offset_seconds(raw: str | None) -> float:
    """LRC ``[offset:+/-ms]``: positive values show lyrics earlier."""
    if not raw:
        return 0.0
    try:
        return int(raw) / 1000.0
    except ValueError:
        logger.warning("Ignoring invalid lyric offset %r", raw)
        return 0.0


def parse_lrc_file(path: Path) -> LyricTrack:
    """Read and parse an ``.lrc`` file.

    Raises:
        ParseError: If the extension is not ``.lrc``, the file cannot be read
            or decoded, or its contents do not parse.
    """
    if path.suffix.lower() != LRC_EXTENSION:
        raise ParseError(ErrorMessages.LYRICS_WRONG_EXTENSION.format(name=path.name))

    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(ErrorMessages.LYRICS_UNREADABLE.format(name=path.name, error=e)) from e

    return parse_lrc(text)


class LrcImporter:
    """LyricImporter backed by :func:`parse_lrc`."""

    def parse(self, text: str) -> LyricTrack:
        return parse_lrc(text)

    def parse_file(self, path: Path) -> LyricTrack:
        return parse_lrc_file(path)
