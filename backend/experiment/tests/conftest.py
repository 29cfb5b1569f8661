from __future__ import annotations

import random
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from experiment.logic.experiment import DyadicConvoExperiment
from experiment.logic.types import Participant

if TYPE_CHECKING:
    from experiment.logic.types import RoundRecord

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


# ============================================================================
# Test Builder Helpers
# ============================================================================


def create_participant(index: int, *, minutes: int | None = None) -> Participant:
    """Create 'user-<index>' created <minutes> (default: index) minutes after BASE_TIME."""
    offset = index if minutes is None else minutes
    return Participant(id=f"user-{index}", created_at=BASE_TIME + timedelta(minutes=offset))


def create_participants(count: int, start: int = 0) -> list[Participant]:
    return [create_participant(i) for i in range(start, start + count)]


def pair_ids(record: RoundRecord) -> set[frozenset[str]]:
    """Return the unordered participant id pairs of a round."""
    return {pair.participant_ids for pair in record.conversations}


@pytest.fixture
def rng():
    return random.Random(1234)  # noqa: S311


@pytest.fixture
def experiment(rng):
    return DyadicConvoExperiment(rng=rng)


@pytest.fixture
def full_experiment(experiment):
    """Dyadic experiment with exactly six participants in the lobby."""
    for participant in create_participants(6):
        experiment.add_user(participant)
    return experiment
