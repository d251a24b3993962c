"""Tests for stoichiometric coefficients and participant bookkeeping."""

import numpy as np
import pytest

from plasmachem.parsers import ReactionParser
from plasmachem.stoichiometry import (
    electron_reactant_index,
    fill_reaction_stoichiometry,
    species_index,
    stoichiometry_matrix,
    unique_participants,
)


@pytest.fixture
def reactions():
    text = "e + Ar -> e + e + Ar+ : 1.0\nAr+ + e + e -> Ar + e : 2.0\nAr* + Ar* -> Ar+ + Ar + e : 3.0"
    return ReactionParser().parse_network(text)


def test_unique_participants_sorted(reactions):
    assert unique_participants(reactions) == ["Ar", "Ar*", "Ar+", "e"]


def test_matrix(reactions):
    participants = unique_participants(reactions)
    coeff = stoichiometry_matrix(reactions, participants)
    np.testing.assert_array_equal(
        coeff,
        [
            [-1, 0, 1, 1],
            [1, 0, -1, -1],
            [1, -2, 1, 1],
        ],
    )


def test_per_reaction_fields_only_track_species(reactions):
    fill_reaction_stoichiometry(reactions, ["e", "Ar+", "Ar*"], electron="e")

    first, second, third = reactions
    assert first.species_count == [1, 1, 0]
    assert first.participants == ["Ar+", "e"]
    assert first.participant_stoich == [1, 1]
    assert "Ar" not in first.participants

    assert second.species_count == [-1, -1, 0]
    assert third.participants == ["Ar*", "Ar+", "e"]
    assert third.participant_stoich == [-2, 1, 1]


def test_electron_index(reactions):
    fill_reaction_stoichiometry(reactions, ["e", "Ar+", "Ar*"], electron="e")
    assert reactions[0].electron_reactant_index == 0
    # Repeated electrons: the last position is recorded
    assert reactions[1].electron_reactant_index == 2
    assert reactions[2].electron_reactant_index is None


def test_electron_index_disabled(reactions):
    fill_reaction_stoichiometry(reactions, ["e", "Ar+", "Ar*"])
    assert all(r.electron_reactant_index is None for r in reactions)
    assert electron_reactant_index(reactions[0], "Ar") == 1


def test_species_index_skips_unused(reactions, caplog):
    participants = unique_participants(reactions)
    mapping = species_index(["e", "Ar*", "He"], participants)
    assert mapping == {"e": 3, "Ar*": 1}
    assert "He does not appear" in caplog.text
