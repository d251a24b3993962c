"""Unit conversion of rate coefficients.

A rate coefficient for ``n`` reactants carries units of
``volume**(n-1) / time`` (per particle or per mole). Converting to moles
multiplies by ``N_A`` and converting lengths by ``L**3`` for every
reactant beyond the first. Tabulated (EEDF) rates are left to the user.
"""

import logging
import math

from .errors import OutOfRangeError
from .reactions import ConstantRate, ExpressionRate, Reaction

logger = logging.getLogger(__name__)


def scale_factor(n_reactants: int, mole_factor: float, length_factor: float) -> float:
    """Conversion factor for a rate coefficient with ``n_reactants`` reactants.

    Parameters
    ----------
    n_reactants : int
        Number of reactants (molecularity)
    mole_factor : float
        ``N_A`` when converting to moles, else 1
    length_factor : float
        Length conversion ``L``

    Returns:
    -------
    factor : float
        ``N_A**(n-1) * L**(3*(n-1))``; may be ``inf`` if the product overflows
    """
    exponent = n_reactants - 1
    return mole_factor**exponent * length_factor ** (3 * exponent)


def normalize_rate(reaction: Reaction, mole_factor: float, length_factor: float) -> Reaction:
    """Scale the rate coefficient of ``reaction`` in place.

    Constant rates are multiplied by the factor, expressions get
    ``*<factor>`` appended and tabulated rates are unchanged.

    Parameters
    ----------
    reaction : Reaction
        Parsed reaction
    mole_factor : float
        ``N_A`` or 1
    length_factor : float
        Length conversion ``L``

    Returns:
    -------
    reaction : Reaction
        The same reaction

    Raises:
    ------
    OutOfRangeError
        If the factor or the scaled constant is not a finite float
    """
    try:
        factor = scale_factor(reaction.molecularity, mole_factor, length_factor)
    except OverflowError as e:
        raise OutOfRangeError(
            f"Unit conversion factor for '{reaction.text}' is out of range."
        ) from e
    if not math.isfinite(factor):
        raise OutOfRangeError(
            f"Unit conversion factor for '{reaction.text}' is out of range ({factor!r})."
        )
    rate = reaction.rate
    if isinstance(rate, ConstantRate):
        value = rate.value * factor
        if not math.isfinite(value):
            raise OutOfRangeError(
                f"Rate coefficient of '{reaction.text}' overflows after unit conversion "
                f"({rate.value!r} * {factor!r})."
            )
        reaction.rate = ConstantRate(value)
    elif isinstance(rate, ExpressionRate):
        reaction.rate = ExpressionRate(f"{rate.expression}*{factor!r}")
    return reaction


def normalize_rates(
    reactions: list[Reaction], mole_factor: float = 1.0, length_factor: float = 1.0
) -> list[Reaction]:
    """Apply the unit conversion to every reaction, in place."""
    if mole_factor != 1.0 or length_factor != 1.0:
        logger.debug(
            "Scaling rate coefficients with N_A=%r and L=%r", mole_factor, length_factor
        )
    for reaction in reactions:
        normalize_rate(reaction, mole_factor, length_factor)
    return reactions
