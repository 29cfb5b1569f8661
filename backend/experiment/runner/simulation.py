"""Drive one experiment from an empty lobby to its round limit."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel

from experiment.logic.types import ErrorSignal, Participant, RoundRecord
from experiment.registry.manager import TopologyRegistry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from experiment.runner.settings import ExperimentRunnerSettings

logger = structlog.get_logger()


class SimulationResult(BaseModel):
    """Records of every played round and the signal that stopped the run."""

    topology: str
    rounds: list[RoundRecord]
    stopped_by: ErrorSignal


def synthetic_participants(count: int, start: datetime | None = None) -> list[Participant]:
    """Create participants 'user-0'.. with creation times one minute apart."""
    start = start or datetime.now(tz=UTC)
    return [Participant(id=f"user-{i}", created_at=start + timedelta(minutes=i)) for i in range(count)]


def run_simulation(
    settings: ExperimentRunnerSettings,
    participants: Sequence[Participant] | None = None,
) -> SimulationResult:
    """
    Fill the lobby and play rounds until play_round() returns an error.

    Stops on the first error, so a lobby that is too small yields no rounds
    and an insufficient_participants signal.
    """
    registry = TopologyRegistry(settings.topologies_path)
    experiment = registry.create_experiment(settings.topology, seed=settings.seed)

    if participants is None:
        participants = synthetic_participants(settings.num_participants)
    for participant in participants:
        experiment.add_user(participant)

    structlog.contextvars.bind_contextvars(topology=settings.topology)
    try:
        rounds: list[RoundRecord] = []
        while True:
            record, error = experiment.play_round()
            if error is not None:
                break
            rounds.append(record)
    finally:
        structlog.contextvars.unbind_contextvars("topology")

    logger.info("simulation finished", topology=settings.topology, rounds=len(rounds), stopped_by=error.code)
    return SimulationResult(topology=settings.topology, rounds=rounds, stopped_by=error)
