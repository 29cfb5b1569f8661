"""
Allocator for filling free positions with waiting participants.

Who is admitted is decided purely by seniority. Randomness only picks which
free position the next admitted participant lands on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import random

    from experiment.logic.types import Participant


def allocate_positions(
    candidates: list[Participant],
    free_positions: list[str],
    rng: random.Random,
) -> list[tuple[str, Participant]]:
    """
    Assign the earliest candidates to uniformly drawn free positions.

    Consumes from both lists in place: each drawn position is removed from
    free_positions and each admitted participant from the front of
    candidates. Candidates must already be in seniority order. When
    candidates run out first, the remaining positions stay free.

    Returns (position_id, participant) pairs in assignment order.
    """
    assignments: list[tuple[str, Participant]] = []
    while free_positions and candidates:
        position_id = free_positions.pop(rng.randrange(len(free_positions)))
        participant = candidates.pop(0)
        assignments.append((position_id, participant))
    return assignments


class PositionAllocator:
    """
    Allocator bound to one RNG.

    Delegates to allocate_positions module function.
    """

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def allocate(
        self,
        candidates: list[Participant],
        free_positions: list[str],
    ) -> list[tuple[str, Participant]]:
        """
        Assign the earliest candidates to uniformly drawn free positions.
        """
        return allocate_positions(candidates, free_positions, self._rng)
