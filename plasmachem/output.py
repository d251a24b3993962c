"""Output management for compiled reaction lists.

Handles tabulating reactions and stoichiometry and saving them with
metadata for the downstream solver or for inspection.
"""

import json
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

import pandas as pd

from .network import ReactionList
from .reactions import ConstantRate, ExpressionRate, TabulatedRate

logger = logging.getLogger(__name__)


def prepare_output_directory(output_dir: str) -> Path:
    """Create output directory if it doesn't exist."""
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path


REACTION_COLUMNS = [
    "index",
    "reaction",
    "rate_coefficient_name",
    "aux_variable_name",
    "rate_type",
    "rate_value",
    "rate_expression",
    "rate_file",
    "threshold_energy",
    "elastic",
    "reversible",
    "energy_changes",
    "emitted",
    "superelastic_of",
    "expanded_from",
    "lumped_placeholder",
]


def _rate_columns(rate) -> dict:
    columns = {
        "rate_type": rate.kind,
        "rate_value": None,
        "rate_expression": None,
        "rate_file": None,
    }
    if isinstance(rate, ConstantRate):
        columns["rate_value"] = rate.value
    elif isinstance(rate, ExpressionRate):
        columns["rate_expression"] = rate.expression
    elif isinstance(rate, TabulatedRate):
        columns["rate_file"] = rate.identifier
    else:
        raise TypeError(f"Unknown rate type: {type(rate).__name__}")
    return columns


def reactions_dataframe(reaction_list: ReactionList) -> pd.DataFrame:
    """One row per reaction, in index order.

    Columns: index, reaction text, names, rate kind and value/expression/file,
    threshold energy, flags and the back references of synthesized reactions.
    """
    rows = []
    for reaction in reaction_list:
        row = {
            "index": reaction.index,
            "reaction": reaction.text,
            "rate_coefficient_name": reaction.rate_coefficient_name,
            "aux_variable_name": reaction.aux_variable_name,
        }
        row.update(_rate_columns(reaction.rate))
        row.update(
            {
                "threshold_energy": reaction.threshold_energy,
                "elastic": reaction.elastic,
                "reversible": reaction.reversible,
                "energy_changes": reaction.energy_changes,
                "emitted": reaction.emitted,
                "superelastic_of": reaction.superelastic_of,
                "expanded_from": reaction.expanded_from,
                "lumped_placeholder": reaction.lumped_placeholder,
            }
        )
        rows.append(row)
    return pd.DataFrame(rows, columns=REACTION_COLUMNS).set_index("index")


def stoichiometry_dataframe(reaction_list: ReactionList) -> pd.DataFrame:
    """Stoichiometric coefficients, reactions as rows, participants as columns."""
    return pd.DataFrame(
        reaction_list.stoichiometry,
        index=pd.Index([r.index for r in reaction_list], name="index"),
        columns=list(reaction_list.participants),
    )


def save_reaction_table(reaction_list: ReactionList, output_dir: str, run_name: str) -> Path:
    """Save the reaction table to CSV."""
    output_path = prepare_output_directory(output_dir)
    filepath = output_path / f"{run_name}_reactions.csv"
    reactions_dataframe(reaction_list).to_csv(filepath)
    logger.info("Saved reactions to: %s", filepath)
    return filepath


def save_stoichiometry(reaction_list: ReactionList, output_dir: str, run_name: str) -> Path:
    """Save the stoichiometry matrix to CSV."""
    output_path = prepare_output_directory(output_dir)
    filepath = output_path / f"{run_name}_stoichiometry.csv"
    stoichiometry_dataframe(reaction_list).to_csv(filepath)
    logger.info("Saved stoichiometry to: %s", filepath)
    return filepath


def save_metadata(reaction_list: ReactionList, output_dir: str, run_name: str) -> Path:
    """Save configuration and summary counts to JSON."""
    output_path = prepare_output_directory(output_dir)
    metadata = {
        "run_name": run_name,
        "timestamp": datetime.now().isoformat(),
        "config": asdict(reaction_list.config),
        "reactions": {
            "total": reaction_list.reaction_count(),
            "emitted": len(reaction_list.emitted_reactions),
            "superelastic": len(reaction_list.superelastic_reactions),
            "lumped": len(reaction_list.lumped_reactions),
        },
        "participants": list(reaction_list.participants),
        "species_index": dict(reaction_list.species_index),
        "mole_factor": reaction_list.mole_factor,
        "length_factor": reaction_list.length_factor,
    }
    filepath = output_path / f"{run_name}_metadata.json"
    with open(filepath, "w") as f:
        json.dump(metadata, f, indent=2)
    logger.info("Saved metadata to: %s", filepath)
    return filepath
