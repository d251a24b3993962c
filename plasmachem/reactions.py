"""Defines schemas for reactions and their rate coefficients.

A rate coefficient is one of three kinds:

- ``ConstantRate``: a number, already scaled to the target unit system.
- ``ExpressionRate``: a formula kept as text for the downstream evaluator.
- ``TabulatedRate``: looked up from a data file (EEDF rates). Reverse
  reactions synthesized from reversible ones carry a tabulated rate with
  no identifier; the solver derives those from detailed balance.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union


@dataclass(frozen=True)
class ConstantRate:
    """Constant rate coefficient."""

    value: float
    kind: ClassVar[str] = "Constant"

    def __str__(self):
        return repr(self.value)


@dataclass(frozen=True)
class ExpressionRate:
    """Rate coefficient given by an unevaluated expression."""

    expression: str
    kind: ClassVar[str] = "Equation"

    def __str__(self):
        return "{" + self.expression + "}"


@dataclass(frozen=True)
class TabulatedRate:
    """Rate coefficient read from a file.

    ``identifier`` is the file name relative to ``file_location``; after
    validation it includes the extension that was found, and ``path`` is
    the file that was probed.
    """

    identifier: Optional[str] = None
    path: Optional[str] = None
    kind: ClassVar[str] = "EEDF"

    def __str__(self):
        return f"EEDF ({self.identifier})" if self.identifier else "EEDF"


Rate = Union[ConstantRate, ExpressionRate, TabulatedRate]


def reaction_text(reactants: list[str], products: list[str], reversible: bool = False) -> str:
    """Canonical text of a reaction, e.g. ``e + Ar -> e + Ar*``."""
    arrow = " <=> " if reversible else " -> "
    return " + ".join(reactants) + arrow + " + ".join(products)


@dataclass
class Reaction:
    """Dataclass for individual reactions.

    Structural fields are filled by the parser and the expansion passes;
    names and stoichiometry are filled once the list is final.
    """

    reactants: list[str]
    products: list[str]
    rate: Rate
    threshold_energy: float = 0.0
    elastic: bool = False
    reversible: bool = False
    energy_changes: bool = False
    superelastic_of: Optional[int] = None
    lumped_placeholder: Optional[str] = None
    expanded_from: Optional[int] = None
    line_number: Optional[int] = None

    index: int = -1
    rate_coefficient_name: str = ""
    aux_variable_name: str = ""
    species_count: list[int] = field(default_factory=list)
    participants: list[str] = field(default_factory=list)
    participant_stoich: list[int] = field(default_factory=list)
    electron_reactant_index: Optional[int] = None

    @property
    def text(self) -> str:
        return reaction_text(self.reactants, self.products, self.reversible)

    @property
    def molecularity(self) -> int:
        """Number of reactants."""
        return len(self.reactants)

    @property
    def emitted(self) -> bool:
        """Whether downstream kernels should be generated for this reaction."""
        return self.lumped_placeholder is None

    @property
    def is_superelastic(self) -> bool:
        return self.superelastic_of is not None

    def __str__(self):
        return f"{self.text} : {self.rate}"
