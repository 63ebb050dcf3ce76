"""Tests for the line cursor."""

from lexdialogue.parser.cursor import LineCursor


class TestLineCursor:
    """Test lookahead and consumption over trimmed lines."""

    def test_lines_are_trimmed_and_empty_lines_kept(self):
        cursor = LineCursor("  first  \n\n\tsecond")

        assert cursor.next() == "first"
        assert cursor.next() == ""
        assert cursor.next() == "second"
        assert cursor.next() is None

    def test_peek_does_not_consume(self):
        cursor = LineCursor("a\nb")

        assert cursor.peek() == "a"
        assert cursor.peek() == "a"
        assert cursor.next() == "a"
        assert cursor.peek() == "b"

    def test_line_number_tracks_consumed_lines(self):
        cursor = LineCursor("a\nb\nc")

        assert cursor.line_number == 0
        cursor.next()
        cursor.peek()
        assert cursor.line_number == 1
        cursor.next()
        assert cursor.line_number == 2

    def test_exhausted(self):
        cursor = LineCursor("only")

        assert not cursor.exhausted
        cursor.next()
        assert cursor.exhausted
        assert cursor.peek() is None

    def test_empty_text(self):
        cursor = LineCursor("")

        assert cursor.exhausted
        assert len(cursor) == 0

    def test_windows_line_endings(self):
        cursor = LineCursor("a\r\nb\r\n")

        assert [cursor.next(), cursor.next()] == ["a", "b"]
        assert cursor.exhausted
