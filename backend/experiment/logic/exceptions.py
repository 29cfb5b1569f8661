"""Typed exceptions for experiment configuration problems.

Play-time failures (too few participants, round limit) are returned as
ErrorSignal values from play_round(). Exceptions are reserved for problems
found while building an experiment: a malformed topology descriptor or a
lookup of a topology that was never registered.
"""


class ExperimentConfigError(Exception):
    """Base exception for experiment configuration errors."""


class TopologyError(ExperimentConfigError):
    """Topology descriptor is malformed (unknown endpoint, self-loop, duplicate edge, etc.)."""


class UnknownTopologyError(ExperimentConfigError):
    """Requested topology name is not registered.

    Attributes:
        name: The topology name that was looked up.
        available: Names that are registered.

    """

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"unknown topology {name!r}, available: {', '.join(available) or 'none'}")
