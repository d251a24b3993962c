"""Defines the compiled reaction list and the passes that build it."""

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import equinox as eqx
import jax.numpy as jnp
import numpy as np
from jax.experimental import sparse

from .config import ReactionConfig
from .expansion import add_superelastic_reactions, expand_lumped_species
from .naming import assign_names
from .parsers import ReactionParser
from .reactions import Reaction
from .species import Species, species_from_config
from .stoichiometry import (
    fill_reaction_stoichiometry,
    species_index,
    stoichiometry_matrix,
    unique_participants,
)
from .units import normalize_rates
from .validation import validate_reaction_list

logger = logging.getLogger(__name__)


class JReactionList(eqx.Module):
    """Jax export of the emitted reactions.

    ``incidence`` is (participants x emitted reactions); column ``k``
    belongs to reaction ``reaction_indices[k]``. ``reactant_indices`` lists
    the participant index of every reactant per column, padded with an
    out-of-range index.
    """

    incidence: jnp.ndarray
    reactant_indices: jnp.ndarray
    reaction_indices: jnp.ndarray

    def __init__(self, incidence, reactant_indices, reaction_indices):
        self.incidence = incidence  # P, R
        self.reactant_indices = reactant_indices  # R, max reactants
        self.reaction_indices = reaction_indices  # R

    def reaction_rates(self, rate_coefficients, densities):
        """Multiply evaluated rate coefficients by the reactant densities."""
        densities = jnp.asarray(densities)
        # Padding indices are out of range and read back as 1.
        multiplier = jnp.prod(
            densities.at[self.reactant_indices].get(mode="fill", fill_value=1.0),
            axis=1,
        )
        return rate_coefficients * multiplier

    def __call__(self, rate_coefficients, densities):
        """Net production of every participant given its density."""
        return self.incidence @ self.reaction_rates(rate_coefficients, densities)


@dataclass(frozen=True, eq=False)
class ReactionList:
    """A compiled block of reactions, ready for a kinetics solver."""

    reactions: tuple[Reaction, ...]
    participants: tuple[str, ...]
    species_index: Mapping[str, int]
    species: tuple[Species, ...]
    stoichiometry: np.ndarray
    config: ReactionConfig
    mole_factor: float = 1.0
    length_factor: float = 1.0

    def __len__(self):
        return len(self.reactions)

    def __iter__(self):
        return iter(self.reactions)

    def __getitem__(self, index) -> Reaction:
        return self.reactions[index]

    def reaction_count(self):
        """Get the number of reactions, including suppressed ones."""
        return len(self.reactions)

    def species_count(self):
        """Get the number of tracked species."""
        return len(self.species)

    @property
    def emitted_reactions(self) -> list[Reaction]:
        """Reactions that downstream kernels are generated for."""
        return [r for r in self.reactions if r.emitted]

    @property
    def lumped_reactions(self) -> list[Reaction]:
        return [r for r in self.reactions if r.lumped_placeholder is not None]

    @property
    def superelastic_reactions(self) -> list[Reaction]:
        return [r for r in self.reactions if r.is_superelastic]

    def get_index(self, species: str) -> int:
        """Get the participant index of a tracked species."""
        return self.species_index[species]

    def reactions_of(self, species: str) -> list[Reaction]:
        """Emitted reactions in which ``species`` is produced or consumed."""
        return [r for r in self.emitted_reactions if species in r.participants]

    def to_jax(self, use_sparse: bool = True) -> JReactionList:
        """Export the emitted reactions as a JAX incidence matrix."""
        emitted = self.emitted_reactions
        columns = [r.index for r in emitted]
        incidence = jnp.asarray(self.stoichiometry[columns].T, dtype=jnp.float32)

        filler = len(self.participants)
        width = max((r.molecularity for r in emitted), default=0)
        position = {name: j for j, name in enumerate(self.participants)}
        reactant_indices = np.full((len(emitted), width), filler, dtype=np.int32)
        for k, reaction in enumerate(emitted):
            for m, reactant in enumerate(reaction.reactants):
                reactant_indices[k, m] = position[reactant]

        if use_sparse:
            incidence = sparse.BCOO.fromdense(incidence)
        return JReactionList(
            incidence, jnp.asarray(reactant_indices), jnp.asarray(columns, dtype=jnp.int32)
        )

    def to_networkx(self):
        """Convert the emitted reactions to a NetworkX directed graph.

        Returns:
            networkx.DiGraph: A directed graph where:
                - Nodes are participants, with a ``tracked`` attribute
                - Edges go from each reactant to each product
                - Edge attribute ``reactions`` lists index, reaction and label
        """
        import networkx as nx

        G = nx.DiGraph()
        for name in self.participants:
            G.add_node(name, tracked=name in self.species_index)

        for reaction in self.emitted_reactions:
            entry = {"index": reaction.index, "reaction": reaction, "label": reaction.text}
            for reactant in reaction.reactants:
                for product in reaction.products:
                    if G.has_edge(reactant, product):
                        G[reactant][product]["reactions"].append(entry)
                    else:
                        G.add_edge(reactant, product, reactions=[entry])
        return G


def build_reaction_list(config: ReactionConfig, reactions: str | None = None) -> ReactionList:
    """Compile a reaction list.

    Parameters
    ----------
    config : ReactionConfig
        Settings of the reaction block.
    reactions : str, optional
        Reaction list text; defaults to ``config.reactions``.

    Returns:
    -------
    ReactionList
        Raises a subclass of ``ReactionListError`` on invalid input; no
        partial list is returned.
    """
    config.validate()
    text = config.reactions if reactions is None else reactions
    prefix = config.aux_prefix

    parsed = ReactionParser().parse_network(text)
    normalize_rates(parsed, config.mole_factor, config.convert_to_meters)
    assign_names(parsed, prefix)

    if config.lumped_species:
        expand_lumped_species(parsed, config.lumped_name, config.lumped, prefix)
    add_superelastic_reactions(parsed, prefix)

    electron = config.electron_density if config.include_electrons else None
    fill_reaction_stoichiometry(parsed, config.species, electron)
    validate_reaction_list(parsed, config)

    participants = unique_participants(parsed)
    matrix = stoichiometry_matrix(parsed, participants)
    matrix.flags.writeable = False

    logger.info(
        "Compiled %d reactions (%d emitted) over %d participants",
        len(parsed),
        sum(r.emitted for r in parsed),
        len(participants),
    )
    return ReactionList(
        reactions=tuple(parsed),
        participants=tuple(participants),
        species_index=MappingProxyType(species_index(config.species, participants)),
        species=tuple(species_from_config(config)),
        stoichiometry=matrix,
        config=config,
        mole_factor=config.mole_factor,
        length_factor=config.convert_to_meters,
    )


def load_reaction_list(config_file: str, reactions_file: str | None = None) -> ReactionList:
    """Compile a reaction list from a YAML/JSON config and an optional reactions file."""
    path = Path(config_file)
    if path.suffix in (".yaml", ".yml"):
        config = ReactionConfig.from_yaml(config_file)
    elif path.suffix == ".json":
        config = ReactionConfig.from_json(config_file)
    else:
        raise ValueError(f"Unknown config format: {path.suffix}")

    text = None
    if reactions_file is not None:
        text = Path(reactions_file).read_text()
    return build_reaction_list(config, text)
