"""
Configuration management for plasmachem reaction lists.

Simple dataclass-based config describing one reaction block.
Supports loading from YAML/JSON and programmatic setup.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from typing import Optional

import yaml

from .errors import ConfigError

AVOGADRO = 6.022e23

INTERPOLATION_TYPES = ("spline", "linear")
SAMPLING_VARIABLES = ("reduced_field", "electron_energy")


@dataclass
class ReactionConfig:
    """Configuration for a single block of reactions.

    Attributes
    ----------
    Species:
        species : list[str]
            Tracked species (nonlinear variables of the downstream solver).
        aux_species : list[str]
            Species referenced by reactions but not solved for.
        gas_species, gas_fraction :
            Background gases and their initial fractions. Recorded only.

    Reactions:
        reactions : str
            The reaction list, one reaction per line.
        name : str, optional
            Name of the reaction block; prefixes the aux variable names.

    Electrons and energy:
        include_electrons : bool
            Track the reactant position of the electron species.
        electron_density : str, optional
            Name of the electron species.
        electron_energy, gas_energy : list[str]
            Energy variables. Required when any reaction carries a
            threshold energy.
        use_bolsig : bool
            EEDF rates come from a Boltzmann solver; requires electron_density.

    Lumped species:
        lumped_species : bool
            Enable expansion of ``lumped_name`` into ``lumped``.
        lumped : list[str]
            Concrete species standing behind the placeholder.
        lumped_name : str, optional
            The placeholder symbol.

    Checks:
        balance_check : bool
            Check particle conservation with ``num_particles``.
        charge_balance_check : bool
            Accepted but not enforced.
        num_particles : list[int]
            Particles per tracked species, same order as ``species``.

    Units:
        convert_to_moles : bool
            Scale constant and expression rates by Avogadro's number.
        convert_to_meters : float
            Length conversion factor applied per reactant beyond the first.
        position_units : float
            Recorded for the downstream solver.

    Tabulated data:
        interpolation_type : str
            'spline' or 'linear'.
        file_location : str
            Directory holding the rate coefficient files.
        sampling_variable : str
            'reduced_field' or 'electron_energy'.

    Pass-through:
        use_log, track_rates, use_ad, equation_constants, equation_values,
        equation_variables, rate_provider_var
    """

    # Species
    species: list[str] = field(default_factory=list)
    aux_species: list[str] = field(default_factory=list)
    gas_species: list[str] = field(default_factory=list)
    gas_fraction: list[float] = field(default_factory=list)

    # Reactions
    reactions: str = ""
    name: Optional[str] = None

    # Electrons and energy
    include_electrons: bool = False
    electron_density: Optional[str] = None
    electron_energy: list[str] = field(default_factory=list)
    gas_energy: list[str] = field(default_factory=list)
    use_bolsig: bool = False

    # Lumped species
    lumped_species: bool = False
    lumped: list[str] = field(default_factory=list)
    lumped_name: Optional[str] = None

    # Checks
    balance_check: bool = False
    charge_balance_check: bool = False
    num_particles: list[int] = field(default_factory=list)

    # Units
    convert_to_moles: bool = False
    convert_to_meters: float = 1.0
    position_units: float = 1.0

    # Tabulated data
    interpolation_type: str = "spline"
    file_location: str = ""
    sampling_variable: str = "reduced_field"

    # Recorded for the rate evaluator
    use_log: bool = False
    track_rates: bool = False
    use_ad: bool = False
    equation_constants: list[str] = field(default_factory=list)
    equation_values: list[str] = field(default_factory=list)
    equation_variables: list[str] = field(default_factory=list)
    rate_provider_var: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ReactionConfig":
        """Build a configuration, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, filepath: str) -> "ReactionConfig":
        """Load configuration from YAML file."""
        with open(filepath, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_json(cls, filepath: str) -> "ReactionConfig":
        """Load configuration from JSON file."""
        with open(filepath, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def to_yaml(self, filepath: str):
        """Save configuration to YAML file."""
        with open(filepath, "w") as f:
            yaml.safe_dump(asdict(self), f, default_flow_style=False)

    def to_json(self, filepath: str):
        """Save configuration to JSON file."""
        with open(filepath, "w") as f:
            json.dump(asdict(self), f, indent=2)

    @property
    def mole_factor(self) -> float:
        """N_A when converting to moles, else 1."""
        return AVOGADRO if self.convert_to_moles else 1.0

    @property
    def aux_prefix(self) -> str:
        return f"{self.name}_" if self.name else ""

    def validate(self):
        """Check the settings that do not depend on the parsed reactions."""
        if not self.species:
            raise ConfigError("No tracked species given; 'species' is required.")

        if self.interpolation_type not in INTERPOLATION_TYPES:
            raise ConfigError(
                f"An interpolation_type of '{self.interpolation_type}' is invalid! "
                "Only 'spline' or 'linear' interpolations are possible."
            )

        if self.sampling_variable not in SAMPLING_VARIABLES:
            raise ConfigError(
                f"A sampling_variable of '{self.sampling_variable}' is invalid! "
                f"Options: {', '.join(SAMPLING_VARIABLES)}."
            )

        if self.lumped_species:
            if not self.lumped:
                raise ConfigError(
                    "lumped_species is set to true, but the list of lumped species "
                    "(lumped) is empty."
                )
            if not self.lumped_name:
                raise ConfigError(
                    "lumped_species is set to true, but no placeholder (lumped_name) is set."
                )

        if self.balance_check:
            if not self.num_particles:
                raise ConfigError(
                    "balance_check = true, but num_particles is not set! Please indicate "
                    "the number of particles in each species, e.g. O2 has two and NH3 has four."
                )
            if len(self.num_particles) != len(self.species):
                raise ConfigError(
                    f"num_particles has {len(self.num_particles)} entries but there are "
                    f"{len(self.species)} species. Each species needs a particle count."
                )

        overlap = [s for s in self.species if s in set(self.aux_species)]
        if overlap:
            raise ConfigError(
                f"Species {', '.join(overlap)} listed as both species and aux_species! "
                "A species is either a nonlinear variable or an auxiliary variable, not both."
            )
