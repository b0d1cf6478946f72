"""Tests for lyric text normalization."""

from lyrics_library.clients import format_lyrics


class TestFormatLyrics:
    def test_splits_and_trims_lines(self):
        assert format_lyrics("  I still see your shadows  \n in my room ") == [
            "I still see your shadows",
            "in my room",
        ]

    def test_windows_line_endings(self):
        lines = format_lyrics("line one\r\nline two\r\n")
        assert lines == ["line one", "line two"]
        assert all("\r" not in line for line in lines)

    def test_blank_lines_removed(self):
        assert format_lyrics("verse\n\n   \n\nchorus") == ["verse", "chorus"]

    def test_empty_text(self):
        assert format_lyrics("") == []
        assert format_lyrics("\r\n \n") == []
