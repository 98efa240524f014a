"""
Source loaders and file-level configuration loading.

A loader is any callable mapping a source name to its text. The reader
calls it for the top-level source of `ConfigReader.load` and for every
include directive.
"""

import os
from pathlib import Path
from typing import Mapping

import chardet

from .const import DEFAULT_SOURCE_NAME
from .logging import get_logger
from .parser import ConfigReader, ConfigReaderError
from .syntax import DEFAULT_MARKERS, ReaderCallbacks, SyntaxMarkers
from .tree import Document


logger = get_logger("loader")

# Below this chardet confidence the detected encoding is not trusted
MIN_DETECTION_CONFIDENCE = 0.8


class ConfigError(Exception):
    """Exception raised when a configuration file cannot be loaded."""

    pass


class MemoryLoader:
    """
    Loader serving sources from a mapping.

    Usage:
        loader = MemoryLoader({"shared.cfg": "Timeout = 30"})
        reader = ConfigReader(DEFAULT_MARKERS, loader=loader)
    """

    def __init__(self, sources: Mapping[str, str] | None = None):
        self.sources = dict(sources or {})

    def __call__(self, source_name: str) -> str:
        return self.sources[source_name]


class FileSystemLoader:
    """
    Loader reading sources from files.

    Relative names are resolved against `base_path`, and includes are named
    relative to the including file. Files that do not decode with `encoding`
    are decoded with the encoding chardet detects.
    """

    def __init__(self, base_path: str | Path | None = None, encoding: str | None = None):
        self.base_path = Path(base_path) if base_path is not None else Path.cwd()
        self.encoding = encoding

    def resolve_include(self, source_name: str, including_source: str) -> str:
        """
        Name of an included file relative to the file that includes it.

        Normalized, so one file reached through different spellings keeps
        a single name in the include chain.
        """
        including_dir = os.path.dirname(including_source)
        return os.path.normpath(os.path.join(including_dir, source_name))

    def resolve(self, source_name: str) -> Path:
        path = Path(source_name)
        if not path.is_absolute():
            path = self.base_path / path
        return path

    def __call__(self, source_name: str) -> str:
        path = self.resolve(source_name)
        logger.debug(f"Reading {path}")

        raw = path.read_bytes()
        try:
            return raw.decode(self.encoding or "utf-8")
        except UnicodeDecodeError:
            return self._decode_detected(raw, path)

    @staticmethod
    def _decode_detected(raw: bytes, path: Path) -> str:
        detected = chardet.detect(raw)
        encoding = detected.get("encoding")
        if not encoding or (detected.get("confidence") or 0) < MIN_DETECTION_CONFIDENCE:
            encoding = "utf-8"

        logger.warning(f"{path} is not valid in the configured encoding, decoding as {encoding}")
        return raw.decode(encoding)


class ConfigLoader:
    """
    Loads configuration from files or strings.

    Usage:
        loader = ConfigLoader()
        document = loader.load_file("conf/main.cfg")
        # or
        document = loader.load_string(config_text, base_path="conf")
    """

    def __init__(
        self,
        markers: SyntaxMarkers = DEFAULT_MARKERS,
        callbacks: ReaderCallbacks | None = None,
        encoding: str | None = None,
    ):
        self.markers = markers
        self.callbacks = callbacks
        self.encoding = encoding
        self.last_document: Document | None = None

    def _reader(self, base_path: Path) -> ConfigReader:
        return ConfigReader(
            self.markers,
            self.callbacks,
            loader=FileSystemLoader(base_path, self.encoding),
        )

    def load_file(self, path: str | Path, owner: object = None) -> Document:
        """
        Load configuration from a file.

        Includes are resolved relative to the file's directory.

        Args:
            path: Path to the configuration file
            owner: Opaque handle copied into every node of the tree

        Returns:
            Parsed Document

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.is_file():
            raise ConfigError(f"Not a file: {path}")

        try:
            document = self._reader(path.parent).load(path.name, owner)
        except ConfigReaderError as e:
            raise ConfigError(f"Failed to parse configuration: {e}") from e
        except (OSError, LookupError, UnicodeError) as e:
            raise ConfigError(f"Failed to read configuration: {e}") from e

        self.last_document = document
        return document

    def load_string(
        self,
        source: str,
        filename: str = DEFAULT_SOURCE_NAME,
        base_path: str | Path | None = None,
        owner: object = None,
    ) -> Document:
        """
        Load configuration from a string.

        Args:
            source: Configuration source text
            filename: Filename for error messages
            base_path: Base path for resolving includes (current directory if None)
            owner: Opaque handle copied into every node of the tree

        Returns:
            Parsed Document

        Raises:
            ConfigError: If configuration cannot be parsed
        """
        reader = self._reader(Path(base_path) if base_path is not None else Path.cwd())

        try:
            document = reader.parse(source, filename, owner)
        except ConfigReaderError as e:
            raise ConfigError(f"Failed to parse configuration: {e}") from e

        self.last_document = document
        return document


def load_config(path: str | Path, markers: SyntaxMarkers = DEFAULT_MARKERS) -> Document:
    """
    Convenience function to load configuration from a file.

    Args:
        path: Path to the configuration file
        markers: Syntax markers (default markers if omitted)

    Returns:
        Parsed Document
    """
    loader = ConfigLoader(markers)
    return loader.load_file(path)
