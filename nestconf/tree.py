"""
Document tree produced by the reader.

A document is a section with a source name. Sections hold their options
and child sections in two separate ordered lists, so the relative order of
an option and a section at the same level is not kept.
"""

from dataclasses import dataclass, field
from typing import Any

from .const import DEFAULT_SOURCE_NAME


@dataclass
class Option:
    """
    A single key/value entry.

    Examples:
        Port = 8080     -> Option(name="Port", value="8080")
        Verbose         -> Option(name="Verbose", value="")
    """
    name: str
    value: str = ""
    owner: Any = None

    def __repr__(self) -> str:
        return f"Option({self.name!r}, {self.value!r})"


@dataclass
class Section:
    """
    A named group of options and nested sections.

    Example:
        Server:                 -> Section(name="Server", ...)
            Port = 8080
            Tls:
                Enabled
    """
    name: str = ""
    options: list[Option] = field(default_factory=list)
    sections: list["Section"] = field(default_factory=list)
    owner: Any = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, options={len(self.options)}, sections={len(self.sections)})"

    def add_option(self, option: Option) -> None:
        self.options.append(option)

    def add_section(self, section: "Section") -> None:
        self.sections.append(section)

    def get_option(self, name: str) -> Option | None:
        """Get first option with given name."""
        for option in self.options:
            if option.name == name:
                return option
        return None

    def get_options(self, name: str) -> list[Option]:
        """Get all options with given name."""
        return [o for o in self.options if o.name == name]

    def get_value(self, name: str, default: str | None = None) -> str | None:
        """Get value of first option with given name."""
        option = self.get_option(name)
        if option:
            return option.value
        return default

    def get_section(self, name: str) -> "Section | None":
        """Get first child section with given name."""
        for section in self.sections:
            if section.name == name:
                return section
        return None

    def get_sections(self, name: str) -> list["Section"]:
        """Get all child sections with given name."""
        return [s for s in self.sections if s.name == name]


@dataclass(repr=False)
class Document(Section):
    """
    Root of a parsed source, either the top-level input or an included file.
    """
    source_name: str = DEFAULT_SOURCE_NAME
