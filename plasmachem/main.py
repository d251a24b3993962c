"""plasmachem: compile plasma chemistry reaction lists.

Main entry point for compiling a reaction block and writing the tables a
kinetics solver consumes.

Usage
-----
From Python:
    from plasmachem.main import compile_reactions
    from plasmachem.config import ReactionConfig

    config = ReactionConfig(species=["e", "Ar+", "Ar*"], aux_species=["Ar"])
    compile_reactions(config, reactions_file="argon.txt", output_dir="output")

From command line:
    python -m plasmachem.main --config reactions.yaml --input argon.txt
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from .config import ReactionConfig
from .errors import ReactionListError
from .network import ReactionList, build_reaction_list
from .output import save_metadata, save_reaction_table, save_stoichiometry


def compile_reactions(
    config: ReactionConfig,
    reactions_file: str | None = None,
    output_dir: str | None = None,
    run_name: str = "reactions",
    verbose: bool = True,
) -> ReactionList:
    """Compile a reaction list and optionally save it.

    Workflow:
    1. Read the reaction list (file or ``config.reactions``)
    2. Build and validate the ReactionList
    3. Save reaction table, stoichiometry and metadata

    Parameters
    ----------
    config : ReactionConfig
        Reaction block configuration
    reactions_file : str, optional
        File holding the reactions; overrides ``config.reactions``
    output_dir : str, optional
        Directory for the CSV/JSON tables; nothing is written if None
    run_name : str
        Prefix of the output files
    verbose : bool
        Print progress messages

    Returns:
    -------
    ReactionList
    """
    start_time = datetime.now()

    if verbose:
        print("=" * 60)
        print("plasmachem reaction compiler")
        print("=" * 60)

    text = None
    if reactions_file is not None:
        if verbose:
            print(f"Reading reactions from {reactions_file}...")
        text = Path(reactions_file).read_text()

    reaction_list = build_reaction_list(config, text)

    if verbose:
        print(f"  Reactions: {reaction_list.reaction_count()}")
        print(f"  Emitted: {len(reaction_list.emitted_reactions)}")
        print(f"  Superelastic: {len(reaction_list.superelastic_reactions)}")
        print(f"  Lumped (suppressed): {len(reaction_list.lumped_reactions)}")
        print(f"  Participants: {len(reaction_list.participants)}")
        print()

    if output_dir is not None:
        if verbose:
            print("Saving results...")
        save_reaction_table(reaction_list, output_dir, run_name)
        save_stoichiometry(reaction_list, output_dir, run_name)
        save_metadata(reaction_list, output_dir, run_name)

    if verbose:
        elapsed = (datetime.now() - start_time).total_seconds()
        print("=" * 60)
        print(f"Done in {elapsed:.2f} seconds")
        if output_dir is not None:
            print(f"Output saved to: {output_dir}/")
        print("=" * 60)

    return reaction_list


def main(argv=None):
    """Command-line interface for plasmachem."""
    parser = argparse.ArgumentParser(
        description="plasmachem: compile plasma chemistry reaction lists",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Reactions inline in the configuration
  python -m plasmachem.main --config argon.yaml

  # Reactions in a separate file, tables written to results/
  python -m plasmachem.main --config argon.yaml --input argon.txt --output results/
        """,
    )

    parser.add_argument(
        "--config", "-c", required=True, help="Path to YAML/JSON configuration file"
    )
    parser.add_argument(
        "--input", "-i", help="Path to reaction list (overrides config)"
    )
    parser.add_argument("--output", "-o", help="Output directory for the tables")
    parser.add_argument("--name", "-n", default="reactions", help="Run name used in file names")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level of the plasmachem logger (default: WARNING)",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress output messages"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logging.getLogger("plasmachem").setLevel(args.log_level)

    config_path = Path(args.config)
    try:
        if config_path.suffix in [".yaml", ".yml"]:
            config = ReactionConfig.from_yaml(args.config)
        elif config_path.suffix == ".json":
            config = ReactionConfig.from_json(args.config)
        else:
            print(f"Error: Unknown config format: {config_path.suffix}", file=sys.stderr)
            return 1

        compile_reactions(
            config,
            reactions_file=args.input,
            output_dir=args.output,
            run_name=args.name,
            verbose=not args.quiet,
        )
    except (ReactionListError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
