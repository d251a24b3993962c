"""Species definitions."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Species:
    """Dataclass for a single tracked species."""

    name: str
    num_particles: Optional[int] = None
    is_electron: bool = False

    def __str__(self):  # noqa
        return self.name

    def __repr__(self):  # noqa
        return f"Species({self.name}, {self.num_particles})"

    def __eq__(self, other):  # noqa
        if isinstance(other, Species):
            return self.name == other.name
        elif isinstance(other, str):
            return self.name == other
        return False

    def __hash__(self):
        """Hashes the name of this species."""
        return hash(self.name)


def species_from_config(config) -> list[Species]:
    """Build the tracked species records, attaching particle counts if given."""
    counts = list(config.num_particles) if config.num_particles else []
    return [
        Species(
            name,
            counts[i] if i < len(counts) else None,
            is_electron=(name == config.electron_density),
        )
        for i, name in enumerate(config.species)
    ]
