"""
Pydantic models for experiment data structures.

Contains typed models for participants, interaction pairs, round records and
error signals that cross the experiment boundary.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, field_validator

from experiment.logic.enums import ExperimentErrorCode


class Participant(BaseModel):
    """A user waiting in the lobby or holding a position."""

    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC so every lobby entry is comparable."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class InteractionPair(BaseModel):
    """Two participants connected by an edge active in a round."""

    model_config = ConfigDict(frozen=True)

    source: Participant
    target: Participant

    @property
    def participant_ids(self) -> frozenset[str]:
        return frozenset((self.source.id, self.target.id))


class RoundRecord(BaseModel):
    """Immutable result of one played round."""

    model_config = ConfigDict(frozen=True)

    round: int
    conversations: tuple[InteractionPair, ...] = ()


class ErrorSignal(BaseModel):
    """Structured error returned alongside an empty round result."""

    model_config = ConfigDict(frozen=True)

    code: ExperimentErrorCode
    message: str
