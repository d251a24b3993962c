"""Base class for parsing reaction lists."""

from abc import ABC, abstractmethod

from ..reactions import Reaction


class BaseParser(ABC):
    """Abstract base class for reaction list parsers."""

    def __init__(self, format_type: str):  # noqa
        self.format_type = format_type

    @abstractmethod
    def parse_network(self, text: str) -> list[Reaction]:
        """Parse a whole reaction list and return its reactions in order."""

    @abstractmethod
    def parse_reaction(self, line: str, line_number: int | None = None) -> Reaction | None:
        """Parse a single reaction line."""

    def _clean_species_name(self, name: str) -> str | None:
        """Normalize a species token; separators and blanks become None."""
        name = name.strip()
        if name == "" or name == "+":
            return None
        return name
