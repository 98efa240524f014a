"""
Character cursor over an in-memory text buffer.

The parser scans text one character at a time instead of using regular
expressions, because every syntax marker is a runtime-configurable string
and the grammar needs position-preserving lookahead and lookbehind.

Supports:
- Lookahead for literal markers and the newline sequence
- Conditional skipping forward and backward
- Cheap copies for speculative scanning
- On-demand line numbers for error reporting
"""

from typing import Callable


NEWLINE = "\n"


class TextCursor:
    """
    A position within an immutable text buffer.

    Copies share the buffer but move independently:

        start = cursor.copy()
        length = cursor.skip_until(lambda c: c.at_newline)
        line = cursor.text_from(start, length)
    """

    def __init__(self, text: str, position: int = 0, newline: str = NEWLINE):
        self.text = text
        self.newline = newline
        self.position = min(max(position, 0), len(text))

    def __repr__(self) -> str:
        return f"TextCursor({self.position}/{len(self.text)}, line {self.line_number})"

    def __copy__(self) -> "TextCursor":
        return self.copy()

    def copy(self) -> "TextCursor":
        """Independent cursor at the same position."""
        return TextCursor(self.text, self.position, self.newline)

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.text)

    @property
    def at_start(self) -> bool:
        return self.position == 0

    @property
    def at_newline(self) -> bool:
        return self.matches(self.newline)

    @property
    def current(self) -> str:
        """Character at the position, or empty string at the end."""
        if self.at_end:
            return ""
        return self.text[self.position]

    def matches(self, marker: str) -> bool:
        """Check whether `marker` occurs literally at the position."""
        if not marker or self.position + len(marker) > len(self.text):
            return False
        return self.text.startswith(marker, self.position)

    def advance(self, count: int = 1) -> None:
        """Move forward by `count` characters, stopping at the end."""
        self.position = min(self.position + count, len(self.text))

    def skip_while(self, predicate: Callable[[str], bool]) -> int:
        """
        Advance while `predicate` holds for the current character.

        Returns:
            Number of characters skipped
        """
        start = self.position
        while not self.at_end and predicate(self.text[self.position]):
            self.position += 1
        return self.position - start

    def skip_until(self, predicate: Callable[["TextCursor"], bool]) -> int:
        """
        Advance until `predicate` holds for the cursor itself or the end is reached.

        The predicate receives this cursor, so it can look ahead with
        `matches` or `at_newline`.

        Returns:
            Number of characters skipped
        """
        start = self.position
        while not self.at_end and not predicate(self):
            self.position += 1
        return self.position - start

    def skip_back_until(self, predicate: Callable[["TextCursor"], bool]) -> int:
        """
        Move backward until `predicate` holds or the start is reached.

        Returns:
            Number of characters skipped
        """
        start = self.position
        while not self.at_start and not predicate(self):
            self.position -= 1
        return start - self.position

    @property
    def line_number(self) -> int:
        """One-based line number of the position (not cached)."""
        return self.text.count(self.newline, 0, self.position) + 1

    def text_from(self, start: "TextCursor", length: int) -> str:
        """Literal text of `length` characters beginning at `start`."""
        return self.text[start.position:start.position + length]

    def line_indentation(self) -> int:
        """
        Count the whitespace at the beginning of the current line.

        The cursor itself does not move.
        """
        probe = self.copy()
        probe.skip_back_until(lambda c: c.at_newline)
        if probe.at_newline:
            probe.advance(len(probe.newline))
        return probe.skip_while(str.isspace)
