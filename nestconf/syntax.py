"""
Syntax markers and post-processing callbacks for the reader.

Example document using the default markers:

    // single-line comment
    /* multi-line
       comment */
    Option = Value
    Section:
        Long = "spans
    several lines"
        [include] Shared = shared.cfg
"""

from dataclasses import dataclass, field, fields
from typing import Callable

from .const import (
    DEFAULT_INCLUDE_BEGIN,
    DEFAULT_KEY_VALUE_DELIMITER,
    DEFAULT_LONG_VALUE_BEGIN,
    DEFAULT_LONG_VALUE_END,
    DEFAULT_MULTI_LINE_COMMENT_BEGIN,
    DEFAULT_MULTI_LINE_COMMENT_END,
    DEFAULT_SECTION_BODY_BEGIN,
    DEFAULT_SINGLE_LINE_COMMENT_BEGIN,
)


@dataclass(frozen=True)
class SyntaxMarkers:
    """
    Literal tokens that define the grammar.

    Markers checked in the same lookahead should not be prefixes of each
    other; that is up to whoever picks them and is not validated here.
    """
    key_value_delimiter: str
    section_body_begin: str
    single_line_comment_begin: str
    multi_line_comment_begin: str
    multi_line_comment_end: str
    long_value_begin: str
    long_value_end: str
    include_begin: str

    def __post_init__(self) -> None:
        empty = [f.name for f in fields(self) if not getattr(self, f.name)]
        if empty:
            raise ValueError(f"Syntax markers must not be empty: {', '.join(empty)}")


DEFAULT_MARKERS = SyntaxMarkers(
    key_value_delimiter=DEFAULT_KEY_VALUE_DELIMITER,
    section_body_begin=DEFAULT_SECTION_BODY_BEGIN,
    single_line_comment_begin=DEFAULT_SINGLE_LINE_COMMENT_BEGIN,
    multi_line_comment_begin=DEFAULT_MULTI_LINE_COMMENT_BEGIN,
    multi_line_comment_end=DEFAULT_MULTI_LINE_COMMENT_END,
    long_value_begin=DEFAULT_LONG_VALUE_BEGIN,
    long_value_end=DEFAULT_LONG_VALUE_END,
    include_begin=DEFAULT_INCLUDE_BEGIN,
)


def strip_whitespace(text: str) -> str:
    """Default post-processor."""
    return text.strip()


@dataclass
class ReaderCallbacks:
    """
    Text transforms applied to raw names and values after extraction.

    Each callback receives the raw scanned text and returns the text stored
    in the tree.
    """
    section_name: Callable[[str], str] = field(default=strip_whitespace)
    option_name: Callable[[str], str] = field(default=strip_whitespace)
    option_value: Callable[[str], str] = field(default=strip_whitespace)
    file_name: Callable[[str], str] = field(default=strip_whitespace)
