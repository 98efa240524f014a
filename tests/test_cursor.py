"""
Tests for the text cursor.
"""

import copy

from nestconf.cursor import TextCursor


def test_start_and_end() -> None:
    """Empty text is both at start and at end."""
    cursor = TextCursor("")

    assert cursor.at_start
    assert cursor.at_end
    assert cursor.current == ""


def test_advance_is_clamped() -> None:
    """Advancing never moves past the end."""
    cursor = TextCursor("abc")

    cursor.advance(2)
    assert cursor.current == "c"

    cursor.advance(10)
    assert cursor.at_end
    assert cursor.position == 3


def test_matches_is_bounds_checked() -> None:
    """Markers running past the end do not match."""
    cursor = TextCursor("a // b")
    cursor.advance(2)

    assert cursor.matches("//")
    assert cursor.matches("// b")
    assert not cursor.matches("// bc")
    assert not cursor.matches("")


def test_at_newline() -> None:
    """at_newline is true only on a newline character."""
    cursor = TextCursor("a\nb")

    assert not cursor.at_newline
    cursor.advance()
    assert cursor.at_newline


def test_skip_while_counts_characters() -> None:
    """skip_while returns the number of skipped characters."""
    cursor = TextCursor("   value")

    assert cursor.skip_while(str.isspace) == 3
    assert cursor.current == "v"
    assert cursor.skip_while(str.isspace) == 0


def test_skip_until_sees_live_cursor() -> None:
    """Predicate can look ahead for multi-character markers."""
    cursor = TextCursor("key := value")

    skipped = cursor.skip_until(lambda c: c.matches(":="))

    assert skipped == 4
    assert cursor.matches(":=")


def test_skip_until_stops_at_end() -> None:
    """skip_until stops at the end of the text."""
    cursor = TextCursor("no marker")

    assert cursor.skip_until(lambda c: c.matches("=")) == 9
    assert cursor.at_end


def test_skip_back_until() -> None:
    """skip_back_until moves backward until the predicate holds."""
    cursor = TextCursor("first\nsecond")
    cursor.advance(9)

    skipped = cursor.skip_back_until(lambda c: c.at_newline)

    assert skipped == 4
    assert cursor.position == 5


def test_skip_back_until_stops_at_start() -> None:
    """skip_back_until stops at the start of the text."""
    cursor = TextCursor("no newline")
    cursor.advance(5)

    assert cursor.skip_back_until(lambda c: c.at_newline) == 5
    assert cursor.at_start


def test_copy_is_independent() -> None:
    """Copies move independently of the original."""
    cursor = TextCursor("abcdef")
    cursor.advance(2)

    clone = cursor.copy()
    clone.advance(2)
    other = copy.copy(cursor)

    assert cursor.position == 2
    assert clone.position == 4
    assert other.position == 2
    assert other.text is cursor.text


def test_text_from() -> None:
    """text_from slices from a recorded position."""
    cursor = TextCursor("Name = Value")
    start = cursor.copy()
    length = cursor.skip_until(lambda c: c.matches("="))

    assert cursor.text_from(start, length) == "Name "


def test_line_number() -> None:
    """Line numbers count preceding newlines."""
    cursor = TextCursor("a\nb\n\nc")

    assert cursor.line_number == 1
    cursor.advance(2)
    assert cursor.line_number == 2
    cursor.advance(10)
    assert cursor.line_number == 4


def test_line_indentation_does_not_move_cursor() -> None:
    """Indentation is measured without moving the cursor."""
    text = "A:\n    B = 1"
    cursor = TextCursor(text, text.index("="))

    assert cursor.line_indentation() == 4
    assert cursor.position == text.index("=")


def test_line_indentation_on_first_line() -> None:
    """The first line is measured from the start of the text."""
    cursor = TextCursor("  A = 1\nB = 2")
    cursor.advance(2)

    assert cursor.line_indentation() == 2


def test_line_indentation_counts_tabs_as_single_characters() -> None:
    """A tab counts as one indentation character."""
    text = "A:\n\tB = 1"
    cursor = TextCursor(text, text.index("B"))

    assert cursor.line_indentation() == 1
