"""Checks run on a constructed reaction list.

Every failure is fatal and raises one of the exceptions in
:mod:`plasmachem.errors`.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .config import ReactionConfig
from .errors import BalanceError, ConfigError, FileMissingError
from .reactions import Reaction, TabulatedRate

logger = logging.getLogger(__name__)

RATE_FILE_EXTENSIONS = ("", ".txt", ".csv", ".dat")


def check_balance(
    reactions: list[Reaction],
    species: list[str],
    num_particles: list[int],
    electron: Optional[str] = None,
):
    """Raise BalanceError listing every reaction that does not conserve particles.

    The electron species is not counted. Reactions involving a species
    without a particle count (aux species, lumped placeholders) are
    skipped.
    """
    particles = dict(zip(species, num_particles))
    offenders = []
    for reaction in reactions:
        names = [n for n in reaction.reactants + reaction.products if n != electron]
        missing = sorted({n for n in names if n not in particles})
        if missing:
            logger.warning(
                "Skipping balance check of '%s': no particle count for %s",
                reaction.text,
                ", ".join(missing),
            )
            continue
        r_sum = sum(particles[n] for n in reaction.reactants if n != electron)
        p_sum = sum(particles[n] for n in reaction.products if n != electron)
        if r_sum != p_sum:
            offenders.append(reaction.text)
    if offenders:
        raise BalanceError(offenders)


def check_charge_balance(reactions: list[Reaction]):
    # Accepted for compatibility with existing input files.
    logger.warning(
        "charge_balance_check is set, but charge balance is not enforced (%d reactions unchecked)",
        len(reactions),
    )


def check_electron_dependence(reactions: list[Reaction], config: ReactionConfig):
    """EEDF rates computed by a Boltzmann solver need the electron species."""
    if not config.use_bolsig or config.electron_density:
        return
    for reaction in reactions:
        if isinstance(reaction.rate, TabulatedRate) and not reaction.is_superelastic:
            raise ConfigError(
                f"EEDF reaction '{reaction.text}' selected with use_bolsig, but "
                "electron_density is not set! Please denote the electron species."
            )


def check_energy_dependence(reactions: list[Reaction], config: ReactionConfig):
    if config.electron_energy or config.gas_energy:
        return
    for reaction in reactions:
        if reaction.energy_changes:
            raise ConfigError(
                f"Reaction '{reaction.text}' has an energy change, but no electron_energy "
                "or gas_energy variable is set!"
            )


def find_rate_file(directory: Path, identifier: str) -> Optional[tuple[Path, str]]:
    """Return the first readable file among ``identifier`` and its known extensions.

    The result is the path and the extension that was appended to find it.
    """
    for extension in RATE_FILE_EXTENSIONS:
        candidate = directory / f"{identifier}{extension}"
        if not candidate.is_file():
            continue
        try:
            with open(candidate, "rb"):
                pass
        except OSError:
            continue
        return candidate, extension
    return None


def resolve_rate_files(reactions: list[Reaction], file_location: str = "") -> list[Reaction]:
    """Attach the file found for every identified tabulated rate.

    The identifier is rewritten to include the extension that was found.
    """
    directory = Path(file_location) if file_location else Path(".")
    for reaction in reactions:
        rate = reaction.rate
        if not isinstance(rate, TabulatedRate) or rate.identifier is None:
            continue
        found = find_rate_file(directory, rate.identifier)
        if found is None:
            raise FileMissingError(
                f"File {directory / rate.identifier} does not exist (reaction "
                f"'{reaction.text}').\nMake sure the rate coefficient file exists and is "
                "spelled correctly in the directory denoted by file_location.\n"
                f"Checked extensions: {', '.join(e or '(none)' for e in RATE_FILE_EXTENSIONS)}."
            )
        path, extension = found
        reaction.rate = replace(rate, identifier=rate.identifier + extension, path=str(path))
        logger.debug("Reaction %d uses rate file %s", reaction.index, path)
    return reactions


def validate_reaction_list(reactions: list[Reaction], config: ReactionConfig) -> list[Reaction]:
    """Run the reaction-level checks; ``config.validate()`` covers the rest."""
    if config.balance_check:
        check_balance(reactions, config.species, config.num_particles, config.electron_density)
    if config.charge_balance_check:
        check_charge_balance(reactions)
    check_electron_dependence(reactions, config)
    check_energy_dependence(reactions, config)
    return resolve_rate_files(reactions, config.file_location)
