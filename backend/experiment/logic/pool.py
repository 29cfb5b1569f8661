"""Participant pool (the lobby) keyed by participant id."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Container, Mapping

    from experiment.logic.types import Participant


class ParticipantPool:
    """Track every participant known to an experiment.

    Insertion order carries no meaning of its own; it only breaks ties
    between participants created at the same instant. Overwriting an id
    keeps its original slot.
    """

    def __init__(self) -> None:
        self._participants: dict[str, Participant] = {}

    def __len__(self) -> int:
        return len(self._participants)

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self._participants

    @property
    def members(self) -> Mapping[str, Participant]:
        """Read-only view of the pool."""
        return MappingProxyType(self._participants)

    def add(self, participant: Participant) -> None:
        """Insert or overwrite a participant. Last write wins."""
        self._participants[participant.id] = participant

    def remove(self, participant_id: str) -> Participant | None:
        """Remove a participant, returning it, or None if it was not present."""
        return self._participants.pop(participant_id, None)

    def get(self, participant_id: str) -> Participant | None:
        return self._participants.get(participant_id)

    def waiting(self, assigned_ids: Container[str]) -> list[Participant]:
        """Return participants without a position, earliest created first.

        The sort is stable, so equal timestamps keep pool insertion order.
        """
        candidates = [p for p in self._participants.values() if p.id not in assigned_ids]
        candidates.sort(key=lambda p: p.created_at)
        return candidates
