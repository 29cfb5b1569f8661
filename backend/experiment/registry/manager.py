from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
import yaml
from pydantic import ValidationError

from experiment.logic.exceptions import TopologyError, UnknownTopologyError
from experiment.logic.experiment import RoundExperiment
from experiment.logic.rng import create_placement_rng
from experiment.logic.topology import SIX_NODE_DYADIC_TOPOLOGY, Connection, Topology

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Any

logger = structlog.get_logger()

BUILTIN_TOPOLOGIES: tuple[Topology, ...] = (SIX_NODE_DYADIC_TOPOLOGY,)


def _parse_topology(entry: dict[str, Any]) -> Topology:
    """Build a Topology from one YAML entry; connection ids default to 'source-target'."""
    try:
        connections = [
            Connection(
                id=str(conn.get("id") or f"{conn['source']}-{conn['target']}"),
                source=str(conn["source"]),
                target=str(conn["target"]),
                round=conn["round"],
            )
            for conn in entry.get("connections", [])
        ]
        return Topology(
            name=entry["name"],
            positions=tuple(str(p) for p in entry.get("positions", [])),
            connections=tuple(connections),
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        raise TopologyError(f"invalid topology entry {entry!r}: {e}") from e


class TopologyRegistry:
    """Named topologies: the built-ins plus any loaded from a YAML file.

    A YAML entry with the same name as a built-in replaces it.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self._topologies: dict[str, Topology] = {t.name: t for t in BUILTIN_TOPOLOGIES}
        self._config_path = config_path
        if config_path is not None:
            self._load_config(config_path)

    def _load_config(self, config_path: Path) -> None:
        if not config_path.exists():
            logger.warning("topology config not found", path=str(config_path))
            return

        with config_path.open() as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise TopologyError(f"{config_path} must contain a mapping with a 'topologies' list")

        for entry in config.get("topologies") or []:
            if not isinstance(entry, dict):
                raise TopologyError(f"invalid topology entry {entry!r}: expected a mapping")
            self.register(_parse_topology(entry))

    def register(self, topology: Topology) -> None:
        self._topologies[topology.name] = topology
        logger.info(
            "topology registered",
            topology=topology.name,
            positions=topology.num_positions,
            rounds=topology.num_rounds,
        )

    def names(self) -> list[str]:
        return sorted(self._topologies)

    def get(self, name: str) -> Topology:
        topology = self._topologies.get(name)
        if topology is None:
            raise UnknownTopologyError(name, self.names())
        return topology

    def create_experiment(self, name: str, seed: str | None = None) -> RoundExperiment:
        """Build a fresh experiment on a registered topology."""
        return RoundExperiment(self.get(name), rng=create_placement_rng(seed))
