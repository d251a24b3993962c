"""Passes that append reactions to a parsed list.

Order matters for the index-based names: lumped expansions are appended
first, then one reverse for every reversible reaction found when scanning
the expanded list from the start.
"""

import logging
from dataclasses import replace

from .naming import assign_names
from .reactions import Reaction, TabulatedRate

logger = logging.getLogger(__name__)


def _substitute(species: list[str], placeholder: str, concrete: str) -> list[str]:
    return [concrete if name == placeholder else name for name in species]


def expand_lumped_species(
    reactions: list[Reaction], placeholder: str, lumped: list[str], prefix: str = ""
) -> list[Reaction]:
    """Flag reactions with ``placeholder`` among the reactants and append expansions.

    For every flagged reaction (in order) one reaction per member of
    ``lumped`` (in order) is appended with the placeholder replaced in
    both reactants and products. Flagged reactions stay in the list but
    are no longer emitted.
    """
    flagged = [i for i, r in enumerate(reactions) if placeholder in r.reactants]
    for i in flagged:
        reactions[i].lumped_placeholder = placeholder

    for i in flagged:
        source = reactions[i]
        for concrete in lumped:
            reactions.append(
                replace(
                    source,
                    reactants=_substitute(source.reactants, placeholder, concrete),
                    products=_substitute(source.products, placeholder, concrete),
                    species_count=list(source.species_count),
                    participants=[],
                    participant_stoich=[],
                    lumped_placeholder=None,
                    expanded_from=i,
                )
            )
    assign_names(reactions, prefix)

    if flagged:
        logger.info(
            "Expanded %d reactions containing %s into %d concrete reactions",
            len(flagged),
            placeholder,
            len(flagged) * len(lumped),
        )
    return reactions


def reverse_reaction(forward: Reaction, forward_index: int) -> Reaction:
    """Build the superelastic reverse of ``forward``."""
    return Reaction(
        reactants=list(forward.products),
        products=list(forward.reactants),
        rate=TabulatedRate(),
        threshold_energy=-forward.threshold_energy,
        energy_changes=forward.energy_changes,
        superelastic_of=forward_index,
        lumped_placeholder=forward.lumped_placeholder,
        line_number=forward.line_number,
    )


def add_superelastic_reactions(reactions: list[Reaction], prefix: str = "") -> list[Reaction]:
    """Append the reverse of every reversible reaction."""
    reverses = [
        reverse_reaction(reaction, i)
        for i, reaction in enumerate(reactions)
        if reaction.reversible
    ]
    reactions.extend(reverses)
    assign_names(reactions, prefix)
    if reverses:
        logger.info("Added %d superelastic reactions", len(reverses))
    return reactions
