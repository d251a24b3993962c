"""Imports from all parsers."""

from .base_parser import BaseParser
from .reaction_parser import (
    ARROWS,
    EEDF_KEYWORD,
    ELASTIC_KEYWORD,
    RawReaction,
    ReactionParser,
    split_reaction_lines,
)

__all__ = [
    "ARROWS",
    "BaseParser",
    "EEDF_KEYWORD",
    "ELASTIC_KEYWORD",
    "RawReaction",
    "ReactionParser",
    "split_reaction_lines",
]
