"""Stoichiometric coefficients of a finished reaction list."""

import logging
from collections import Counter
from typing import Optional

import numpy as np

from .reactions import Reaction

logger = logging.getLogger(__name__)


def unique_participants(reactions: list[Reaction]) -> list[str]:
    """Sorted distinct names over all reactants and products.

    Untracked species (background gases, aux species, lumped placeholders)
    are included.
    """
    names = set()
    for reaction in reactions:
        names.update(reaction.reactants)
        names.update(reaction.products)
    return sorted(names)


def net_counts(reaction: Reaction) -> Counter:
    """Products minus reactants, per name."""
    counts = Counter(reaction.products)
    counts.subtract(reaction.reactants)
    return counts


def stoichiometry_matrix(reactions: list[Reaction], participants: list[str]) -> np.ndarray:
    """Dense (reactions x participants) matrix of signed coefficients.

    Parameters
    ----------
    reactions : list[Reaction]
        Final reaction list, rows in index order
    participants : list[str]
        Column order, usually from ``unique_participants``

    Returns:
    -------
    coeff : np.ndarray
        int64 array with ``coeff[i, j]`` = products minus reactants of
        participant ``j`` in reaction ``i``
    """
    index = {name: j for j, name in enumerate(participants)}
    coeff = np.zeros((len(reactions), len(participants)), dtype=np.int64)
    for i, reaction in enumerate(reactions):
        for reactant in reaction.reactants:
            coeff[i, index[reactant]] -= 1
        for product in reaction.products:
            coeff[i, index[product]] += 1
    return coeff


def species_index(species: list[str], participants: list[str]) -> dict[str, int]:
    """Map tracked species to their position in ``participants``.

    Parameters
    ----------
    species : list[str]
        Tracked species in configured order
    participants : list[str]
        Sorted participant names

    Returns:
    -------
    mapping : dict[str, int]
        Participant index per tracked species; species that appear in no
        reaction are left out and logged
    """
    position = {name: j for j, name in enumerate(participants)}
    mapping = {}
    for name in species:
        if name in position:
            mapping[name] = position[name]
        else:
            logger.warning("Tracked species %s does not appear in any reaction", name)
    return mapping


def electron_reactant_index(reaction: Reaction, electron: str) -> Optional[int]:
    """Position of ``electron`` among the reactants; the last one if repeated."""
    found = None
    for k, name in enumerate(reaction.reactants):
        if name == electron:
            found = k
    return found


def fill_reaction_stoichiometry(
    reactions: list[Reaction],
    species: list[str],
    electron: Optional[str] = None,
) -> list[Reaction]:
    """Set the per-reaction stoichiometry fields in place.

    ``species_count`` covers every tracked species in configured order;
    ``participants`` / ``participant_stoich`` only the tracked species
    that take part in the reaction.

    Parameters
    ----------
    reactions : list[Reaction]
        Final reaction list
    species : list[str]
        Tracked species in configured order
    electron : str, optional
        Electron species; when given ``electron_reactant_index`` is set

    Returns:
    -------
    reactions : list[Reaction]
        The same list
    """
    tracked = set(species)
    for reaction in reactions:
        counts = net_counts(reaction)
        reaction.species_count = [counts.get(name, 0) for name in species]
        present = sorted(tracked.intersection(reaction.reactants + reaction.products))
        reaction.participants = present
        reaction.participant_stoich = [counts.get(name, 0) for name in present]
        if electron is not None:
            reaction.electron_reactant_index = electron_reactant_index(reaction, electron)
    return reactions
