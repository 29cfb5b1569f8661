"""
Static interaction topologies.

A topology is a fixed set of positions and round-tagged connections between
them. It is immutable and holds no occupants, so one instance can back any
number of experiments.
"""

from __future__ import annotations

from functools import cached_property

from pydantic import BaseModel, ConfigDict, model_validator

from experiment.logic.exceptions import TopologyError


class Connection(BaseModel):
    """Edge between two positions, active only in the tagged round."""

    model_config = ConfigDict(frozen=True)

    id: str
    source: str
    target: str
    round: int


class Topology(BaseModel):
    """Immutable graph of positions and round-tagged connections."""

    model_config = ConfigDict(frozen=True)

    name: str
    positions: tuple[str, ...]
    connections: tuple[Connection, ...] = ()

    @model_validator(mode="after")
    def _validate_graph(self) -> Topology:
        if not self.positions:
            raise TopologyError(f"topology {self.name!r} has no positions")
        if len(set(self.positions)) != len(self.positions):
            raise TopologyError(f"topology {self.name!r} has duplicate position ids")
        if not self.connections:
            raise TopologyError(f"topology {self.name!r} has no connections")

        known = set(self.positions)
        seen_ids: set[str] = set()
        seen_pairs: set[tuple[int, frozenset[str]]] = set()
        for conn in self.connections:
            if conn.id in seen_ids:
                raise TopologyError(f"duplicate connection id {conn.id!r}")
            seen_ids.add(conn.id)
            if conn.source not in known or conn.target not in known:
                raise TopologyError(f"connection {conn.id!r} references an unknown position")
            if conn.source == conn.target:
                raise TopologyError(f"connection {conn.id!r} is a self-loop")
            if conn.round < 1:
                raise TopologyError(f"connection {conn.id!r} has round {conn.round}, rounds start at 1")
            pair = (conn.round, frozenset((conn.source, conn.target)))
            if pair in seen_pairs:
                raise TopologyError(f"connection {conn.id!r} repeats a pair already connected in round {conn.round}")
            seen_pairs.add(pair)
        return self

    @property
    def num_positions(self) -> int:
        """Minimum number of participants needed to play a round."""
        return len(self.positions)

    @cached_property
    def num_rounds(self) -> int:
        """Highest round tag, which is also the round limit."""
        return max(conn.round for conn in self.connections)

    @cached_property
    def _connections_by_round(self) -> dict[int, tuple[Connection, ...]]:
        by_round: dict[int, list[Connection]] = {}
        for conn in self.connections:
            by_round.setdefault(conn.round, []).append(conn)
        return {round_number: tuple(conns) for round_number, conns in by_round.items()}

    def connections_for_round(self, round_number: int) -> tuple[Connection, ...]:
        """Return connections active in a round (empty when the round has none)."""
        return self._connections_by_round.get(round_number, ())


def _edge(source: str, target: str, round_number: int) -> Connection:
    return Connection(id=f"{source}-{target}", source=source, target=target, round=round_number)


# Six positions, each meeting one partner per round and a different one in round 2.
SIX_NODE_DYADIC_TOPOLOGY = Topology(
    name="six_node_dyadic",
    positions=("1", "2", "3", "4", "5", "6"),
    connections=(
        _edge("1", "4", 1),
        _edge("1", "5", 2),
        _edge("2", "5", 1),
        _edge("2", "6", 2),
        _edge("3", "6", 1),
        _edge("3", "4", 2),
    ),
)
