"""
Pytest configuration and fixtures.
"""

from pathlib import Path
from typing import Callable

import pytest

from nestconf.loader import MemoryLoader
from nestconf.parser import ConfigReader
from nestconf.syntax import DEFAULT_MARKERS


@pytest.fixture
def reader() -> ConfigReader:
    """Reader with default markers and no loader."""
    return ConfigReader(DEFAULT_MARKERS)


@pytest.fixture
def make_reader() -> Callable[..., ConfigReader]:
    """Factory for readers serving includes from a dict of sources."""

    def factory(sources: dict[str, str] | None = None, **kwargs) -> ConfigReader:
        return ConfigReader(DEFAULT_MARKERS, loader=MemoryLoader(sources), **kwargs)

    return factory


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Directory with a main config file including a shared one."""
    (tmp_path / "main.cfg").write_text(
        "Name = main\n"
        "[include] Shared = shared.cfg\n",
        encoding="utf-8",
    )
    (tmp_path / "shared.cfg").write_text("Timeout = 30\n", encoding="utf-8")
    return tmp_path
