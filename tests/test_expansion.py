"""Tests for lumped-species expansion and superelastic reaction synthesis."""

import pytest

from plasmachem.expansion import add_superelastic_reactions, expand_lumped_species
from plasmachem.parsers import ReactionParser
from plasmachem.reactions import ConstantRate, TabulatedRate


@pytest.fixture
def parser():
    return ReactionParser()


class TestLumpedExpansion:
    def test_single_reaction(self, parser):
        reactions = parser.parse_network("e + NEUTRAL -> e + NEUTRAL+ + e : 1e-13")
        expand_lumped_species(reactions, "NEUTRAL", ["N2", "O2"])

        assert len(reactions) == 3
        assert reactions[0].lumped_placeholder == "NEUTRAL"
        assert not reactions[0].emitted
        assert reactions[1].reactants == ["e", "N2"]
        assert reactions[2].reactants == ["e", "O2"]
        # Only whole tokens are substituted
        assert reactions[1].products == ["e", "NEUTRAL+", "e"]
        for reaction in reactions[1:]:
            assert reaction.emitted
            assert reaction.expanded_from == 0
            assert reaction.rate == ConstantRate(1e-13)

    def test_placeholder_in_products_is_substituted(self, parser):
        reactions = parser.parse_network("NEUTRAL + A -> NEUTRAL + B : 1.0 [2.0]")
        expand_lumped_species(reactions, "NEUTRAL", ["N2", "O2"])
        assert reactions[1].text == "N2 + A -> N2 + B"
        assert reactions[2].text == "O2 + A -> O2 + B"
        assert reactions[2].threshold_energy == 2.0
        assert reactions[2].energy_changes

    def test_placeholder_only_in_products_is_not_flagged(self, parser):
        reactions = parser.parse_network("A + B -> NEUTRAL : 1.0")
        expand_lumped_species(reactions, "NEUTRAL", ["N2", "O2"])
        assert len(reactions) == 1
        assert reactions[0].emitted

    def test_order_and_names(self, parser):
        text = "M + A -> B : 1.0\nC -> D : 2.0\nM + C -> E : 3.0"
        reactions = parser.parse_network(text)
        expand_lumped_species(reactions, "M", ["X", "Y", "Z"], prefix="air_")

        assert [r.text for r in reactions[3:]] == [
            "X + A -> B",
            "Y + A -> B",
            "Z + A -> B",
            "X + C -> E",
            "Y + C -> E",
            "Z + C -> E",
        ]
        assert [r.expanded_from for r in reactions[3:]] == [0, 0, 0, 2, 2, 2]
        for i, reaction in enumerate(reactions):
            assert reaction.index == i
            assert reaction.rate_coefficient_name == f"rate_constant{i}"
            assert reaction.aux_variable_name == f"air_reaction_rate{i}"


class TestSuperelastic:
    def test_reverse_is_appended(self, parser):
        reactions = parser.parse_network("e + N2 <=> e + N2(v) : EEDF (vib) [0.29]")
        add_superelastic_reactions(reactions)

        assert len(reactions) == 2
        forward, reverse = reactions
        assert reverse.superelastic_of == 0
        assert forward.superelastic_of is None
        assert reverse.reactants == forward.products
        assert reverse.products == forward.reactants
        assert reverse.threshold_energy == pytest.approx(-0.29)
        assert reverse.rate == TabulatedRate()
        assert reverse.energy_changes
        assert not reverse.reversible
        assert reverse.rate_coefficient_name == "rate_constant1"

    def test_reverses_follow_index_order(self, parser):
        text = "A <=> B : 1.0\nC -> D : 1.0\nE <-> F : 1.0 [3]"
        reactions = parser.parse_network(text)
        add_superelastic_reactions(reactions)
        assert [r.text for r in reactions[3:]] == ["B -> A", "F -> E"]
        assert [r.superelastic_of for r in reactions[3:]] == [0, 2]
        assert reactions[4].threshold_energy == -3.0

    def test_no_reversible_reactions(self, parser):
        reactions = parser.parse_network("A -> B : 1.0")
        add_superelastic_reactions(reactions)
        assert len(reactions) == 1

    def test_reverse_of_lumped_reaction_is_suppressed(self, parser):
        reactions = parser.parse_network("e + M <=> e + M* : 1.0 [1.0]")
        expand_lumped_species(reactions, "M", ["Ar", "He"])
        add_superelastic_reactions(reactions)

        assert [r.text for r in reactions] == [
            "e + M <=> e + M*",
            "e + Ar <=> e + M*",
            "e + He <=> e + M*",
            "e + M* -> e + M",
            "e + M* -> e + Ar",
            "e + M* -> e + He",
        ]
        assert [r.emitted for r in reactions] == [False, True, True, False, True, True]
        assert [r.superelastic_of for r in reactions[3:]] == [0, 1, 2]
