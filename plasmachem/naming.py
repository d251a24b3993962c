"""Index-based names that downstream kernels use to key per-reaction fields."""

import re

from .reactions import Reaction

RATE_COEFFICIENT_PREFIX = "rate_constant"
AUX_VARIABLE_STEM = "reaction_rate"

_TRAILING_INDEX = re.compile(r"(\d+)$")


def rate_coefficient_name(index: int) -> str:
    """Name of the rate coefficient material property of reaction ``index``."""
    return f"{RATE_COEFFICIENT_PREFIX}{index}"


def aux_variable_name(index: int, prefix: str = "") -> str:
    """Name of the aux variable tracking the rate of reaction ``index``.

    Parameters
    ----------
    index : int
        Reaction index
    prefix : str
        Block name followed by ``_``, or empty

    Returns:
    -------
    name : str
        ``{prefix}reaction_rate{index}``
    """
    return f"{prefix}{AUX_VARIABLE_STEM}{index}"


def parse_index(name: str) -> int:
    """Decode the reaction index from a generated name.

    Parameters
    ----------
    name : str
        A name made by ``rate_coefficient_name`` or ``aux_variable_name``

    Returns:
    -------
    index : int
        The trailing integer of ``name``

    Raises:
    ------
    ValueError
        If ``name`` does not end in digits
    """
    match = _TRAILING_INDEX.search(name)
    if match is None:
        raise ValueError(f"'{name}' does not end in a reaction index")
    return int(match.group(1))


def assign_names(reactions: list[Reaction], prefix: str = "") -> list[Reaction]:
    """Set ``index`` and both names of every reaction from its position.

    Run after every pass that appends reactions, so names always match
    the final list.
    """
    for i, reaction in enumerate(reactions):
        reaction.index = i
        reaction.rate_coefficient_name = rate_coefficient_name(i)
        reaction.aux_variable_name = aux_variable_name(i, prefix)
    return reactions
