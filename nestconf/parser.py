"""
Recursive descent reader for indentation-structured configuration.

Document structure is inferred from relative indentation only:

    Option0 = Value0
    Section:
        Option1 = Value1
        InnerSection:
            Option2 = Value2
    [include] Shared = shared.cfg

Every direct entry of a section sits at the same indentation, which must be
deeper than the line that opened the section. Include directives load
another source through the reader's loader and attach it as a child
section.
"""

import os
from typing import Callable, NoReturn, Sequence, TextIO

from .const import DEFAULT_SOURCE_NAME
from .cursor import TextCursor
from .logging import get_logger
from .syntax import DEFAULT_MARKERS, ReaderCallbacks, SyntaxMarkers
from .tree import Document, Option, Section


logger = get_logger("parser")

DocumentLoader = Callable[[str], str]

ROOT_INDENTATION = -1


class ConfigReaderError(Exception):
    """Base class for all reader errors."""


class InvalidIndentation(ConfigReaderError):
    """An entry is indented differently from its siblings."""

    def __init__(self, found: int, expected: int):
        self.found = found
        self.expected = expected
        super().__init__(f"Invalid indentation: found {found}, expected {expected}")


class UnterminatedLongValue(ConfigReaderError):
    """A long value was opened but never closed."""

    def __init__(self, marker: str):
        self.marker = marker
        super().__init__(f"Missing long-value end-marker {marker!r}")


class IncludeResolutionFailed(ConfigReaderError):
    """The loader could not provide the text of an included source."""

    def __init__(self, source_name: str, reason: object = None):
        self.source_name = source_name
        self.reason = reason
        message = f"Cannot load included source {source_name!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class IncludeCycleDetected(ConfigReaderError):
    """A source includes itself, directly or through other sources."""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__(f"Circular include detected: {' -> '.join(self.chain)}")


class MalformedInternalState(ConfigReaderError):
    """A scanning invariant was violated. Indicates a bug, not bad input."""


class ConfigParseError(ConfigReaderError):
    """
    Located reader error.

    Wraps the first error of a parse with the line it occurred on, counted
    within the source that was being scanned at that point.
    """

    def __init__(self, error: ConfigReaderError, line: int, source_name: str = DEFAULT_SOURCE_NAME):
        self.error = error
        self.line = line
        self.source_name = source_name
        super().__init__(f"{source_name}, line {line}: {error}")


class SectionParser:
    """
    Parses section bodies of one source.

    A new instance is created for each source (top-level input or include),
    so all state of a parse lives here and not on the reader.
    """

    def __init__(self, reader: "ConfigReader", source_name: str, include_chain: Sequence[str] = ()):
        self.reader = reader
        self.markers = reader.markers
        self.callbacks = reader.callbacks
        self.source_name = source_name
        self.include_chain = tuple(include_chain)

    def parse_section(self, cursor: TextCursor, section: Section, parent_indentation: int) -> None:
        """
        Parse the body of `section`, not its header.

        Consumes entries until one is found at or below `parent_indentation`
        (it belongs to an ancestor) or the input ends.

        Args:
            cursor: Cursor positioned after the section header
            section: Section to populate
            parent_indentation: Indentation of the header line, -1 for a document
        """
        self._skip_whitespace_and_comments(cursor)

        if cursor.at_end:
            return

        section_indentation = cursor.line_indentation()

        if section_indentation <= parent_indentation:
            # Section without a body:
            #    | Section0:
            # -> | Section1:
            return

        while not cursor.at_end:
            current_indentation = cursor.line_indentation()

            if current_indentation <= parent_indentation:
                #    | Section0:
                #    |     opt = val
                # -> | Section1:
                break

            if current_indentation != section_indentation:
                #    | Section0:
                #    |     opt0 = val0
                # -> |       opt1 = val1
                self._error(cursor, InvalidIndentation(current_indentation, section_indentation))

            name = self._parse_name(cursor)

            if cursor.matches(self.markers.key_value_delimiter):
                # Option = Value
                # -------^
                cursor.advance(len(self.markers.key_value_delimiter))
                value = self._parse_value(cursor)

                if name.lstrip().startswith(self.markers.include_begin):
                    self._parse_include(cursor, section, name, value)
                else:
                    section.add_option(Option(
                        name=self.callbacks.option_name(name),
                        value=self.callbacks.option_value(value),
                        owner=section.owner,
                    ))

            elif cursor.matches(self.markers.section_body_begin):
                # SectionName:
                # -----------^
                cursor.advance(len(self.markers.section_body_begin))
                subsection = Section(owner=section.owner)
                self.parse_section(cursor, subsection, section_indentation)
                subsection.name = self.callbacks.section_name(name)
                section.add_section(subsection)

            else:
                # Option without a value
                section.add_option(Option(
                    name=self.callbacks.option_name(name),
                    value=self.callbacks.option_value(""),
                    owner=section.owner,
                ))

            self._skip_whitespace_and_comments(cursor)

    def _parse_include(self, cursor: TextCursor, section: Section, name: str, value: str) -> None:
        """Load an included source and attach it as a child section."""
        # [include] SectionName = Path/To/File.cfg
        # ----------------------------------------^
        file_name = self.reader.resolve(self.callbacks.file_name(value), self.source_name)

        if file_name in self.include_chain:
            self._error(cursor, IncludeCycleDetected([*self.include_chain, file_name]))

        try:
            text = self.reader.fetch(file_name)
        except IncludeResolutionFailed as e:
            self._error(cursor, e)
        except (OSError, LookupError, UnicodeError) as e:
            self._error(cursor, IncludeResolutionFailed(file_name, e))

        logger.debug(f"Including {file_name!r} from {self.source_name} line {cursor.line_number}")

        document = Document(owner=section.owner, source_name=file_name)
        self.reader.parse_into(document, text, self.include_chain)
        document.name = self.callbacks.section_name(name.replace(self.markers.include_begin, ""))
        section.add_section(document)

    def _parse_name(self, cursor: TextCursor) -> str:
        markers = self.markers
        start = cursor.copy()
        length = cursor.skip_until(
            lambda c: c.at_newline
            or c.matches(markers.key_value_delimiter)
            or c.matches(markers.section_body_begin)
            or c.matches(markers.single_line_comment_begin)
            or c.matches(markers.multi_line_comment_begin)
        )
        return cursor.text_from(start, length)

    def _parse_value(self, cursor: TextCursor) -> str:
        """Scan a plain or long value, returning the raw text."""
        markers = self.markers
        start = cursor.copy()
        length = cursor.skip_until(
            lambda c: c.at_newline
            or c.matches(markers.long_value_begin)
            or c.matches(markers.single_line_comment_begin)
            or c.matches(markers.multi_line_comment_begin)
        )

        if cursor.matches(markers.long_value_begin):
            cursor.advance(len(markers.long_value_begin))

            # Newlines and comment markers are part of a long value
            start = cursor.copy()
            length = cursor.skip_until(lambda c: c.matches(markers.long_value_end))

            if not cursor.matches(markers.long_value_end):
                self._error(cursor, UnterminatedLongValue(markers.long_value_end))

            cursor.advance(len(markers.long_value_end))

        return cursor.text_from(start, length)

    def _parse_comment(self, cursor: TextCursor) -> None:
        markers = self.markers

        if cursor.matches(markers.single_line_comment_begin):
            cursor.skip_until(lambda c: c.at_newline)
            cursor.advance(len(cursor.newline))
        elif cursor.matches(markers.multi_line_comment_begin):
            cursor.advance(len(markers.multi_line_comment_begin))
            cursor.skip_until(lambda c: c.matches(markers.multi_line_comment_end))
            cursor.advance(len(markers.multi_line_comment_end))
        else:
            self._error(cursor, MalformedInternalState("Cursor is not at a comment"))

    def _skip_whitespace_and_comments(self, cursor: TextCursor) -> None:
        while True:
            cursor.skip_while(str.isspace)

            if (cursor.matches(self.markers.single_line_comment_begin)
                    or cursor.matches(self.markers.multi_line_comment_begin)):
                self._parse_comment(cursor)
            else:
                break

    def _error(self, cursor: TextCursor, error: ConfigReaderError) -> NoReturn:
        raise ConfigParseError(error, cursor.line_number, self.source_name) from error


class ConfigReader:
    """
    Reads configuration text into a document tree.

    Usage:
        reader = ConfigReader(DEFAULT_MARKERS, loader=FileSystemLoader("conf"))
        document = reader.parse(text)
        # or
        document = reader.load("main.cfg")
    """

    def __init__(
        self,
        markers: SyntaxMarkers,
        callbacks: ReaderCallbacks | None = None,
        loader: DocumentLoader | None = None,
        normalize_line_endings: bool = True,
    ):
        self.markers = markers
        self.callbacks = callbacks or ReaderCallbacks()
        self.loader = loader
        self.normalize_line_endings = normalize_line_endings

    def parse(self, text: str, source_name: str = DEFAULT_SOURCE_NAME, owner: object = None) -> Document:
        """
        Parse configuration text.

        Args:
            text: Configuration source
            source_name: Name used in error messages and for include cycle checks
            owner: Opaque handle copied into every node of the tree

        Returns:
            Parsed Document

        Raises:
            ConfigParseError: On the first error found
        """
        document = Document(owner=owner, source_name=source_name)
        self.parse_into(document, text)
        return document

    def read(self, stream: TextIO, source_name: str | None = None, owner: object = None) -> Document:
        """Parse everything remaining in a text stream."""
        if source_name is None:
            name = getattr(stream, "name", None)
            source_name = os.fspath(name) if isinstance(name, (str, os.PathLike)) else DEFAULT_SOURCE_NAME
        return self.parse(stream.read(), source_name, owner)

    def load(self, source_name: str, owner: object = None) -> Document:
        """
        Load a source through the loader and parse it.

        Loader failures propagate as raised by the loader.
        """
        try:
            text = self.fetch(source_name)
        except Exception as e:
            logger.debug(f"Failed to load {source_name!r}: {e}")
            raise
        return self.parse(text, source_name, owner)

    def resolve(self, source_name: str, including_source: str) -> str:
        """
        Name under which an include of `source_name` is loaded.

        Loaders with a `resolve_include(source_name, including_source)`
        method decide; otherwise the name is used as written.
        """
        resolve_include = getattr(self.loader, "resolve_include", None)
        if resolve_include is None:
            return source_name
        return resolve_include(source_name, including_source)

    def fetch(self, source_name: str) -> str:
        """Get the raw text of a source from the loader."""
        if self.loader is None:
            raise IncludeResolutionFailed(source_name, "no loader configured")
        return self.loader(source_name)

    def parse_into(self, document: Document, text: str, include_chain: Sequence[str] = ()) -> None:
        """
        Populate `document` from `text`.

        Args:
            document: Empty document; its source_name identifies the text
            text: Configuration source
            include_chain: Names of the sources currently including this one
        """
        if self.normalize_line_endings:
            text = text.replace("\r", "")

        parser = SectionParser(self, document.source_name, [*include_chain, document.source_name])
        parser.parse_section(TextCursor(text), document, ROOT_INDENTATION)


def parse_config(
    source: str,
    markers: SyntaxMarkers = DEFAULT_MARKERS,
    callbacks: ReaderCallbacks | None = None,
    loader: DocumentLoader | None = None,
    source_name: str = DEFAULT_SOURCE_NAME,
) -> Document:
    """
    Convenience function to parse a configuration string.

    Args:
        source: Configuration source text
        markers: Syntax markers (default markers if omitted)
        callbacks: Post-processing callbacks
        loader: Provides the text of included sources
        source_name: Name for error messages

    Returns:
        Parsed Document
    """
    reader = ConfigReader(markers, callbacks, loader)
    return reader.parse(source, source_name)
