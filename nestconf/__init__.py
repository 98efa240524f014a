"""
Reader for indentation-structured configuration files.
"""

from .const import APP_VERSION as __version__
from .cursor import TextCursor
from .loader import ConfigError, ConfigLoader, FileSystemLoader, MemoryLoader, load_config
from .parser import (
    ConfigParseError,
    ConfigReader,
    ConfigReaderError,
    IncludeCycleDetected,
    IncludeResolutionFailed,
    InvalidIndentation,
    MalformedInternalState,
    SectionParser,
    UnterminatedLongValue,
    parse_config,
)
from .syntax import DEFAULT_MARKERS, ReaderCallbacks, SyntaxMarkers
from .tree import Document, Option, Section

__all__ = [
    "__version__",
    "TextCursor",
    "SyntaxMarkers",
    "DEFAULT_MARKERS",
    "ReaderCallbacks",
    "Option",
    "Section",
    "Document",
    "ConfigReader",
    "SectionParser",
    "parse_config",
    "ConfigReaderError",
    "ConfigParseError",
    "InvalidIndentation",
    "UnterminatedLongValue",
    "IncludeResolutionFailed",
    "IncludeCycleDetected",
    "MalformedInternalState",
    "ConfigLoader",
    "ConfigError",
    "MemoryLoader",
    "FileSystemLoader",
    "load_config",
]
