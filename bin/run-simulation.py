"""Run an experiment with synthetic participants and print its round records.

Usage: uv run python bin/run-simulation.py [--topology NAME] [--participants N] [--seed HEX] [--config PATH]

Unset options fall back to EXPERIMENT_* environment variables.
"""

import argparse
import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from experiment.logic.exceptions import ExperimentConfigError
from experiment.runner.settings import ExperimentRunnerSettings
from experiment.runner.simulation import run_simulation
from shared.logging import setup_logging


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--topology", help="registered topology name")
    parser.add_argument("--participants", type=int, help="number of synthetic participants")
    parser.add_argument("--seed", help="hex seed for reproducible placement")
    parser.add_argument("--config", type=Path, help="YAML file with extra topologies")
    return parser.parse_args(argv)


def main(argv: list[str]) -> int:
    args = _parse_args(argv)
    overrides = {
        "topology": args.topology,
        "num_participants": args.participants,
        "seed": args.seed,
        "topologies_path": args.config,
    }
    settings = ExperimentRunnerSettings(**{k: v for k, v in overrides.items() if v is not None})
    setup_logging(log_dir=settings.log_dir)

    try:
        result = run_simulation(settings)
    except ExperimentConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
