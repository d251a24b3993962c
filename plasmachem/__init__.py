"""
Top-level public API for plasmachem, a compiler for plasma chemistry
reaction lists.

The intent is to expose a small, stable surface for typical users:

- ``ReactionConfig``: dataclass configuring one block of reactions.
- ``build_reaction_list``: parse, expand, normalize and validate a list.
- ``ReactionList``: the compiled, read-only result consumed by solvers.

Example
-------
>>> from plasmachem import ReactionConfig, build_reaction_list
>>> config = ReactionConfig(
...     species=["A", "B", "C"],
...     reactions="A + B -> C : 1.0",
...     convert_to_moles=True,
...     convert_to_meters=0.01,
... )
>>> reaction_list = build_reaction_list(config)
>>> reaction_list[0].rate_coefficient_name
'rate_constant0'
"""

from .config import ReactionConfig
from .errors import (
    BalanceError,
    ConfigError,
    FileMissingError,
    OutOfRangeError,
    RateParseError,
    ReactionListError,
    ReactionSyntaxError,
)
from .network import JReactionList, ReactionList, build_reaction_list, load_reaction_list
from .reactions import ConstantRate, ExpressionRate, Reaction, TabulatedRate

__all__ = [
    "ReactionConfig",
    "build_reaction_list",
    "load_reaction_list",
    "ReactionList",
    "JReactionList",
    "Reaction",
    "ConstantRate",
    "ExpressionRate",
    "TabulatedRate",
    "ReactionListError",
    "ReactionSyntaxError",
    "RateParseError",
    "OutOfRangeError",
    "ConfigError",
    "BalanceError",
    "FileMissingError",
]
