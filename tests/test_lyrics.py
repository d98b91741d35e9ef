"""
Unit Tests for Lyrics

Tests for:
- LRC parsing (timestamps, metadata, offsets, errors)
- LyricCursor resolution, interpolation and change streams
- LyricTrack ordering invariant
"""

import pytest
from pydantic import ValidationError

from local_music_player.domain.lyrics.cursor import LyricCursor
from local_music_player.domain.lyrics.entities import LyricLine, LyricTrack
from local_music_player.domain.lyrics.parser import LrcImporter, parse_lrc, parse_lrc_file
from local_music_player.domain.shared.exceptions import ParseError

SAMPLE_LRC = """\
[ti:Night Drive]
[ar:The Examples]
[al:Fixtures]

[00:01.00]First line
[00:05.50]Second line
[00:09.25]Third line
"""


class TestParseLrc:
    """Tests for parse_lrc."""

    def test_parses_lines_in_order(self):
        lyrics = parse_lrc(SAMPLE_LRC)

        assert [line.text for line in lyrics.lines] == ["First line", "Second line", "Third line"]
        assert lyrics.timestamps == (1.0, 5.5, 9.25)

    def test_reads_title_and_artist(self):
        lyrics = parse_lrc(SAMPLE_LRC)

        assert lyrics.title == "Night Drive"
        assert lyrics.artist == "The Examples"

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("[01:02]", 62.0),
            ("[01:02.3]", 62.3),
            ("[01:02.34]", 62.34),
            ("[01:02.345]", 62.345),
            ("[01:02:34]", 62.34),
        ],
    )
    def test_timestamp_precisions(self, tag, expected):
        lyrics = parse_lrc(f"{tag}line")

        assert lyrics.lines[0].timestamp == pytest.approx(expected)

    def test_multiple_timestamps_on_one_line(self):
        """Should repeat a line at every timestamp it carries."""
        lyrics = parse_lrc("[00:10.00][00:30.00]Chorus\n[00:20.00]Verse")

        assert [(line.timestamp, line.text) for line in lyrics.lines] == [
            (10.0, "Chorus"),
            (20.0, "Verse"),
            (30.0, "Chorus"),
        ]

    def test_out_of_order_lines_are_sorted(self):
        lyrics = parse_lrc("[00:20]b\n[00:10]a")

        assert [line.text for line in lyrics.lines] == ["a", "b"]

    def test_ties_keep_file_order(self):
        lyrics = parse_lrc("[00:10]first\n[00:10]second")

        assert [line.text for line in lyrics.lines] == ["first", "second"]

    def test_untagged_lines_ignored(self):
        lyrics = parse_lrc("just some words\n[00:01]sung")

        assert len(lyrics) == 1

    def test_empty_text_lines_kept(self):
        """A timestamp with no text marks an instrumental gap."""
        lyrics = parse_lrc("[00:01]a\n[00:03]\n[00:05]b")

        assert lyrics.lines[1].text == ""

    def test_offset_shifts_earlier(self):
        lyrics = parse_lrc("[offset:500]\n[00:02.00]a")

        assert lyrics.lines[0].timestamp == pytest.approx(1.5)

    def test_offset_never_below_zero(self):
        lyrics = parse_lrc("[offset:5000]\n[00:02.00]a")

        assert lyrics.lines[0].timestamp == 0.0

    def test_invalid_offset_ignored(self):
        lyrics = parse_lrc("[offset:soon]\n[00:02.00]a")

        assert lyrics.lines[0].timestamp == pytest.approx(2.0)

    def test_seconds_out_of_range_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse_lrc("[00:01]ok\n[00:75]bad")

        assert exc_info.value.line_number == 2
        assert exc_info.value.code == "PARSE_ERROR"

    def test_malformed_tag_rejected(self):
        with pytest.raises(ParseError):
            parse_lrc("[00:01]ok\n[0a:01]bad")

    @pytest.mark.parametrize("text", ["", "no tags at all", "[ar:Only Metadata]"])
    def test_no_timed_lines_rejected(self, text):
        with pytest.raises(ParseError, match="No timed lyric lines"):
            parse_lrc(text)


class TestParseLrcFile:
    def test_reads_lrc_file(self, tmp_path):
        path = tmp_path / "song.lrc"
        path.write_text(SAMPLE_LRC, encoding="utf-8")

        assert len(parse_lrc_file(path)) == 3

    def test_handles_byte_order_mark(self, tmp_path):
        path = tmp_path / "song.lrc"
        path.write_bytes("\ufeff[00:01]bom".encode())

        assert parse_lrc_file(path).lines[0].text == "bom"

    def test_rejects_other_extensions(self, tmp_path):
        path = tmp_path / "song.txt"
        path.write_text(SAMPLE_LRC, encoding="utf-8")

        with pytest.raises(ParseError, match="not an .lrc file"):
            parse_lrc_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseError, match="Could not read"):
            parse_lrc_file(tmp_path / "missing.lrc")

    def test_importer_delegates(self, tmp_path):
        path = tmp_path / "song.LRC"
        path.write_text(SAMPLE_LRC, encoding="utf-8")
        importer = LrcImporter()

        assert len(importer.parse_file(path)) == 3
        assert len(importer.parse(SAMPLE_LRC)) == 3


class TestLyricTrack:
    def test_rejects_decreasing_timestamps(self):
        with pytest.raises(ValidationError):
            LyricTrack(lines=(LyricLine(timestamp=5, text="b"), LyricLine(timestamp=1, text="a")))

    def test_negative_timestamp_rejected(self):
        with pytest.raises(ValidationError):
            LyricLine(timestamp=-1, text="x")


class TestLyricCursor:
    """Tests for LyricCursor."""

    @pytest.fixture
    def cursor(self):
        return LyricCursor(parse_lrc(SAMPLE_LRC))

    def test_before_first_line(self, cursor):
        """No active line before the first timestamp; the first line is next."""
        resolved = cursor.resolve(0.5)

        assert resolved.index == -1
        assert resolved.active is None
        assert resolved.next.text == "First line"
        assert resolved.has_active is False

    def test_exactly_on_timestamp(self, cursor):
        resolved = cursor.resolve(5.5)

        assert resolved.index == 1
        assert resolved.active.text == "Second line"
        assert resolved.next.text == "Third line"

    def test_between_lines(self, cursor):
        assert cursor.resolve(7.0).active.text == "Second line"

    def test_after_last_line(self, cursor):
        resolved = cursor.resolve(500.0)

        assert resolved.index == 2
        assert resolved.next is None

    def test_ties_prefer_later_line(self):
        cursor = LyricCursor(parse_lrc("[00:01]a\n[00:02]first\n[00:02]second\n[00:03]c"))

        resolved = cursor.resolve(2.0)

        assert resolved.active.text == "second"
        assert resolved.next.text == "c"

    def test_backward_jump(self, cursor):
        assert cursor.resolve(9.5).index == 2
        assert cursor.resolve(1.2).index == 0

    def test_empty_lyrics(self):
        resolved = LyricCursor(LyricTrack()).resolve(3.0)

        assert resolved.active is None
        assert resolved.next is None

    def test_interpolation(self, cursor):
        assert cursor.interpolation(3.25) == pytest.approx(0.5)
        assert cursor.interpolation(0.2) == 0.0
        assert cursor.interpolation(20.0) == 0.0

    def test_changes_yields_only_on_index_change(self, cursor):
        positions = [0.0, 0.5, 1.0, 2.0, 3.0, 5.6, 5.7, 1.5, 9.3]

        indices = [resolved.index for resolved in cursor.changes(positions)]

        assert indices == [-1, 0, 1, 0, 2]

    def test_changes_is_lazy(self, cursor):
        def positions():
            yield 1.0
            raise AssertionError("consumed too far")

        stream = cursor.changes(positions())

        assert next(stream).index == 0

    def test_changes_restartable(self, cursor):
        first = [r.index for r in cursor.changes([1.0, 6.0])]
        second = [r.index for r in cursor.changes([1.0, 6.0])]

        assert first == second == [0, 1]

    @pytest.mark.asyncio
    async def test_achanges(self, cursor):
        async def positions():
            for position in (0.0, 1.0, 1.1, 5.5, 10.0, 10.5):
                yield position

        indices = [resolved.index async for resolved in cursor.achanges(positions())]

        assert indices == [-1, 0, 1, 2]
