"""Tests for the rate coefficient unit conversion."""

import pytest

from plasmachem.config import AVOGADRO
from plasmachem.errors import OutOfRangeError
from plasmachem.parsers import ReactionParser
from plasmachem.reactions import TabulatedRate
from plasmachem.units import normalize_rate, normalize_rates, scale_factor


@pytest.fixture
def parser():
    return ReactionParser()


@pytest.mark.parametrize(
    "line, expected",
    [
        ("A -> B : 2.0", 2.0),
        ("A + B -> C : 2.0", 2.0 * AVOGADRO * 0.01**3),
        ("A + B + M -> C + M : 2.0", 2.0 * AVOGADRO**2 * 0.01**6),
    ],
)
def test_constant_scaling_by_molecularity(parser, line, expected):
    reaction = normalize_rate(parser.parse_reaction(line), AVOGADRO, 0.01)
    assert reaction.rate.value == pytest.approx(expected)


def test_binary_moles_and_centimeters():
    reaction = normalize_rate(ReactionParser().parse_reaction("A + B -> C : 1.0"), AVOGADRO, 0.01)
    assert reaction.rate.value == pytest.approx(6.022e17)


def test_expression_gets_factor_appended(parser):
    reaction = normalize_rate(parser.parse_reaction("A + B -> C : {2e-9*Te}"), 2.0, 1.0)
    assert reaction.rate.expression == "2e-9*Te*2.0"


def test_unary_expression_gets_unit_factor(parser):
    reaction = normalize_rate(parser.parse_reaction("A -> C : {k}"), AVOGADRO, 0.01)
    assert reaction.rate.expression == "k*1.0"


def test_tabulated_is_not_scaled(parser):
    reaction = normalize_rate(parser.parse_reaction("e + A -> e + B : EEDF (f)"), AVOGADRO, 0.01)
    assert reaction.rate == TabulatedRate("f")


def test_scale_factor_identity():
    assert scale_factor(3, 1.0, 1.0) == 1.0
    assert scale_factor(1, AVOGADRO, 0.01) == 1.0


def test_overflow_is_out_of_range(parser):
    reactions = [parser.parse_reaction("A + B -> C : 1e300")]
    with pytest.raises(OutOfRangeError):
        normalize_rates(reactions, 1e10, 1.0)


def test_overflowing_factor_rejects_expression(parser):
    # Each power is finite, their product is not
    reactions = [parser.parse_reaction("A + B -> C : {k*Tgas}")]
    with pytest.raises(OutOfRangeError, match="conversion factor"):
        normalize_rates(reactions, AVOGADRO, 1e100)
    assert reactions[0].rate.expression == "k*Tgas"


def test_overflowing_factor_rejects_tabulated(parser):
    reactions = [parser.parse_reaction("e + A -> e + B : EEDF (f)")]
    with pytest.raises(OutOfRangeError):
        normalize_rates(reactions, AVOGADRO, 1e100)
