"""
Unit tests for topology descriptors.
"""

import pytest
from pydantic import ValidationError

from experiment.logic.exceptions import TopologyError
from experiment.logic.topology import SIX_NODE_DYADIC_TOPOLOGY, Connection, Topology


def _conn(source: str, target: str, round_number: int, conn_id: str | None = None) -> Connection:
    return Connection(id=conn_id or f"{source}-{target}", source=source, target=target, round=round_number)


class TestSixNodeDyadicTopology:
    def test_has_six_positions_and_two_rounds(self):
        assert SIX_NODE_DYADIC_TOPOLOGY.num_positions == 6
        assert SIX_NODE_DYADIC_TOPOLOGY.num_rounds == 2

    def test_round_one_connections(self):
        ids = [c.id for c in SIX_NODE_DYADIC_TOPOLOGY.connections_for_round(1)]
        assert ids == ["1-4", "2-5", "3-6"]

    def test_round_two_connections(self):
        ids = [c.id for c in SIX_NODE_DYADIC_TOPOLOGY.connections_for_round(2)]
        assert ids == ["1-5", "2-6", "3-4"]

    def test_each_position_has_one_partner_per_round(self):
        for round_number in (1, 2):
            endpoints = [
                p for c in SIX_NODE_DYADIC_TOPOLOGY.connections_for_round(round_number) for p in (c.source, c.target)
            ]
            assert sorted(endpoints) == ["1", "2", "3", "4", "5", "6"]

    def test_no_pair_repeats_across_rounds(self):
        pairs = [frozenset((c.source, c.target)) for c in SIX_NODE_DYADIC_TOPOLOGY.connections]
        assert len(pairs) == len(set(pairs))

    def test_round_without_connections_is_empty(self):
        assert SIX_NODE_DYADIC_TOPOLOGY.connections_for_round(3) == ()
        assert SIX_NODE_DYADIC_TOPOLOGY.connections_for_round(0) == ()

    def test_is_frozen(self):
        with pytest.raises(ValidationError):
            SIX_NODE_DYADIC_TOPOLOGY.name = "other"


class TestTopologyValidation:
    def test_round_limit_is_highest_round_tag(self):
        topology = Topology(
            name="gap",
            positions=("a", "b"),
            connections=(_conn("a", "b", 1), _conn("b", "a", 3)),
        )
        assert topology.num_rounds == 3
        assert topology.connections_for_round(2) == ()

    def test_no_positions_raises(self):
        with pytest.raises(TopologyError, match="no positions"):
            Topology(name="empty", positions=())

    def test_no_connections_raises(self):
        with pytest.raises(TopologyError, match="no connections"):
            Topology(name="lonely", positions=("a", "b"))

    def test_duplicate_positions_raise(self):
        with pytest.raises(TopologyError, match="duplicate position"):
            Topology(name="dup", positions=("a", "a"), connections=(_conn("a", "b", 1),))

    def test_unknown_endpoint_raises(self):
        with pytest.raises(TopologyError, match="unknown position"):
            Topology(name="bad", positions=("a", "b"), connections=(_conn("a", "z", 1),))

    def test_self_loop_raises(self):
        with pytest.raises(TopologyError, match="self-loop"):
            Topology(name="loop", positions=("a", "b"), connections=(_conn("a", "a", 1),))

    def test_round_below_one_raises(self):
        with pytest.raises(TopologyError, match="rounds start at 1"):
            Topology(name="zero", positions=("a", "b"), connections=(_conn("a", "b", 0),))

    def test_duplicate_connection_id_raises(self):
        with pytest.raises(TopologyError, match="duplicate connection id"):
            Topology(
                name="dup-id",
                positions=("a", "b", "c"),
                connections=(_conn("a", "b", 1, "x"), _conn("b", "c", 2, "x")),
            )

    def test_same_pair_twice_in_one_round_raises(self):
        with pytest.raises(TopologyError, match="repeats a pair"):
            Topology(
                name="twice",
                positions=("a", "b"),
                connections=(_conn("a", "b", 1), _conn("b", "a", 1)),
            )

    def test_same_pair_in_different_rounds_is_allowed(self):
        topology = Topology(
            name="again",
            positions=("a", "b"),
            connections=(_conn("a", "b", 1), _conn("b", "a", 2)),
        )
        assert topology.num_rounds == 2
