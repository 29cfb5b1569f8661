"""
Round-based experiment engine.

Owns the lobby, the per-instance occupancy of topology positions and the
round history. Each play_round() call backfills free positions from the
lobby by seniority and reports the connections active in the new round.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

import structlog

from experiment.logic.allocator import PositionAllocator
from experiment.logic.enums import ExperimentErrorCode, ExperimentPhase
from experiment.logic.pool import ParticipantPool
from experiment.logic.rng import create_placement_rng
from experiment.logic.service import NetworkExperiment
from experiment.logic.topology import SIX_NODE_DYADIC_TOPOLOGY, Topology
from experiment.logic.types import ErrorSignal, InteractionPair, Participant, RoundRecord

if TYPE_CHECKING:
    import random
    from collections.abc import Mapping

logger = structlog.get_logger()


class RoundExperiment(NetworkExperiment):
    """Play a bounded number of rounds on a static topology.

    State per instance:
    - lobby: every known participant, assigned or waiting
    - occupants: position id -> participant id (None when free)
    - assignments: participant id -> position id, the inverse of occupants
    - free positions: position ids with no occupant

    The topology is shared and never mutated; all occupancy lives here.
    """

    def __init__(self, topology: Topology, rng: random.Random | None = None) -> None:
        self._topology = topology
        self._allocator = PositionAllocator(rng if rng is not None else create_placement_rng())
        self._lobby = ParticipantPool()
        self._round = 0
        self._data: list[RoundRecord] = []
        self._occupants: dict[str, str | None] = {}
        self._assignments: dict[str, str] = {}
        self._free_positions: list[str] = []
        self._reset_positions()

    def _reset_positions(self) -> None:
        self._occupants = dict.fromkeys(self._topology.positions)
        self._assignments = {}
        self._free_positions = list(self._topology.positions)

    @property
    def topology(self) -> Topology:
        return self._topology

    @property
    def lobby(self) -> Mapping[str, Participant]:
        """Read-only view of every participant in the lobby."""
        return self._lobby.members

    @property
    def round(self) -> int:
        """Number of rounds played since the last clean_up()."""
        return self._round

    @property
    def max_rounds(self) -> int:
        return self._topology.num_rounds

    @property
    def data(self) -> tuple[RoundRecord, ...]:
        """Round records in play order."""
        return tuple(self._data)

    @property
    def assignments(self) -> Mapping[str, str]:
        """Read-only view of participant id -> held position id."""
        return MappingProxyType(self._assignments)

    @property
    def free_positions(self) -> frozenset[str]:
        return frozenset(self._free_positions)

    @property
    def phase(self) -> ExperimentPhase:
        if self._round == 0:
            return ExperimentPhase.IDLE
        if self._round >= self.max_rounds:
            return ExperimentPhase.ENDED
        return ExperimentPhase.IN_PROGRESS

    def occupant_of(self, position_id: str) -> Participant | None:
        """Return the participant holding a position, or None if it is free."""
        participant_id = self._occupants.get(position_id)
        if participant_id is None:
            return None
        return self._lobby.get(participant_id)

    def add_user(self, participant: Participant) -> None:
        self._lobby.add(participant)
        logger.info("participant added", participant_id=participant.id, lobby_size=len(self._lobby))

    def remove_user(self, participant_id: str) -> None:
        if self._lobby.remove(participant_id) is None:
            return

        position_id = self._assignments.pop(participant_id, None)
        if position_id is not None:
            self._occupants[position_id] = None
            self._free_positions.append(position_id)
            logger.info("position released", participant_id=participant_id, position_id=position_id)
        logger.info("participant removed", participant_id=participant_id, lobby_size=len(self._lobby))

    def clean_up(self) -> None:
        """Restart the experiment, keeping everyone in the lobby."""
        self._round = 0
        self._data = []
        self._reset_positions()
        logger.info("experiment reset", topology=self._topology.name, lobby_size=len(self._lobby))

    def _check_can_play(self) -> ErrorSignal | None:
        required = self._topology.num_positions
        if len(self._lobby) < required:
            return ErrorSignal(
                code=ExperimentErrorCode.INSUFFICIENT_PARTICIPANTS,
                message=f"Not enough users in the lobby. Need at least {required}.",
            )
        if self.phase == ExperimentPhase.ENDED:
            return ErrorSignal(
                code=ExperimentErrorCode.ROUND_LIMIT_REACHED,
                message="Experiment has already ended. Round limit reached.",
            )
        return None

    def _fill_free_positions(self, candidates: list[Participant]) -> None:
        for position_id, participant in self._allocator.allocate(candidates, self._free_positions):
            self._occupants[position_id] = participant.id
            self._assignments[participant.id] = position_id
            logger.debug("position assigned", participant_id=participant.id, position_id=position_id)

    def _resolve_conversations(self) -> tuple[InteractionPair, ...]:
        conversations: list[InteractionPair] = []
        for conn in self._topology.connections_for_round(self._round):
            source = self.occupant_of(conn.source)
            target = self.occupant_of(conn.target)
            if source is None or target is None:  # pragma: no cover (capacity check guarantees full occupancy)
                raise RuntimeError(f"connection {conn.id} has an empty endpoint in round {self._round}")
            conversations.append(InteractionPair(source=source, target=target))
        return tuple(conversations)

    def play_round(self) -> tuple[RoundRecord | None, ErrorSignal | None]:
        """
        Play the next round.

        Returns (record, None) on success, or (None, error) when the lobby is
        too small or the round limit was reached. A failed call leaves the
        experiment untouched.
        """
        error = self._check_can_play()
        if error is not None:
            logger.info("round rejected", code=error.code, round=self._round, lobby_size=len(self._lobby))
            return None, error

        candidates = self._lobby.waiting(self._assignments)
        self._round += 1
        self._fill_free_positions(candidates)

        record = RoundRecord(round=self._round, conversations=self._resolve_conversations())
        self._data.append(record)
        logger.info(
            "round played",
            topology=self._topology.name,
            round=self._round,
            conversations=len(record.conversations),
        )
        return record, None


class DyadicConvoExperiment(RoundExperiment):
    """Two rounds of one-on-one conversations among six participants."""

    def __init__(self, rng: random.Random | None = None) -> None:
        super().__init__(SIX_NODE_DYADIC_TOPOLOGY, rng)
