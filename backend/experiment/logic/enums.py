"""
String enum definitions for network experiment concepts.
"""

from enum import Enum


class ExperimentPhase(str, Enum):
    """Lifecycle phase of a round-based experiment."""

    IDLE = "idle"  # no rounds played
    IN_PROGRESS = "in_progress"
    ENDED = "ended"  # round limit reached, only clean_up() leaves this phase


class ExperimentErrorCode(str, Enum):
    """Error codes returned (never raised) by play_round()."""

    INSUFFICIENT_PARTICIPANTS = "insufficient_participants"
    ROUND_LIMIT_REACHED = "round_limit_reached"
