"""
Network Components: nodes, the distance metric and the per-run energy ledger.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from .config import (ConfigError, KM_PER_DEGREE, NODE_ROLES, ROLE_BASE)

logger = logging.getLogger(__name__)


# =============================================================================
# NODE
# =============================================================================

@dataclass(frozen=True)
class Node:
    """A sensor, relay or base station at a geographic position."""
    id: str
    lat: float
    lng: float
    role: str = 'sensor'
    name: str = ''
    initial_energy: Optional[float] = None

    @property
    def is_base(self) -> bool:
        return self.role == ROLE_BASE


def distance_km(a: Node, b: Node) -> float:
    """
    Approximate planar distance in km between two nodes.

    Longitude degrees are scaled by cos(lat) of the FIRST node, so the
    result is not exactly symmetric. Good enough for nearest-neighbour
    ranking and cost scaling, not for reporting real distances.
    """
    lat_diff = (a.lat - b.lat) * KM_PER_DEGREE
    lng_diff = (a.lng - b.lng) * KM_PER_DEGREE * np.cos(np.radians(a.lat))
    return float(np.sqrt(lat_diff ** 2 + lng_diff ** 2))


def distances_from(origin: Node, targets: Sequence[Node]) -> np.ndarray:
    """Vector of distance_km(origin, t) for every target."""
    if not targets:
        return np.empty(0)
    lats = np.array([t.lat for t in targets])
    lngs = np.array([t.lng for t in targets])
    lat_diff = (origin.lat - lats) * KM_PER_DEGREE
    lng_diff = (origin.lng - lngs) * KM_PER_DEGREE * np.cos(np.radians(origin.lat))
    return np.sqrt(lat_diff ** 2 + lng_diff ** 2)


def validate_nodes(nodes: Sequence[Node]) -> Node:
    """
    Check a node list before a run and return its base station.

    Raises ConfigError on an empty list, duplicate ids, unknown roles,
    negative per-node energy, a base station starting without energy,
    or anything but exactly one base station.
    """
    if not nodes:
        raise ConfigError("Node list is empty; a base station is required")

    seen = set()
    bases = []
    for node in nodes:
        if node.id in seen:
            raise ConfigError(f"Duplicate node id {node.id!r}")
        seen.add(node.id)
        if node.role not in NODE_ROLES:
            raise ConfigError(f"Node {node.id!r} has unknown role {node.role!r}")
        if node.initial_energy is not None and node.initial_energy < 0:
            raise ConfigError(f"Node {node.id!r} has negative initial_energy")
        if node.is_base:
            if node.initial_energy is not None and node.initial_energy <= 0:
                raise ConfigError(f"Base station {node.id!r} must start with positive energy")
            bases.append(node)

    if not bases:
        raise ConfigError("No base station in node list; cluster heads and "
                          "chain leaders have nowhere to send data")
    if len(bases) > 1:
        raise ConfigError(f"Expected exactly one base station, found "
                          f"{[b.id for b in bases]}")
    return bases[0]


# =============================================================================
# ENERGY LEDGER
# =============================================================================

class EnergyLedger:
    """
    Remaining energy of every node for the lifetime of one run.

    Deductions are clamped at zero immediately: consume() draws at most
    what the node has left and returns the amount actually drawn. A node
    at zero is dead for the rest of the run.
    """

    def __init__(self, nodes: Sequence[Node], initial_energy: float):
        self._remaining: Dict[str, float] = {}
        for node in nodes:
            start = initial_energy if node.initial_energy is None else node.initial_energy
            self._remaining[node.id] = float(start)

    def remaining(self, node_id: str) -> float:
        return self._remaining[node_id]

    def is_alive(self, node_id: str) -> bool:
        return self._remaining[node_id] > 0

    def consume(self, node_id: str, amount: float) -> float:
        """Draw up to `amount` joules from a live node; returns what was drawn."""
        before = self._remaining[node_id]
        if before <= 0:
            return 0.0
        drawn = min(amount, before)
        self._remaining[node_id] = before - drawn
        if self._remaining[node_id] <= 0:
            logger.debug("Node %s depleted", node_id)
        return drawn

    def alive_count(self) -> int:
        return sum(1 for e in self._remaining.values() if e > 0)

    def total(self) -> float:
        return float(sum(self._remaining.values()))

    def mean(self) -> float:
        return self.total() / len(self._remaining) if self._remaining else 0.0

    def snapshot(self) -> Dict[str, float]:
        return dict(self._remaining)

    def __len__(self):
        return len(self._remaining)


def non_base_nodes(nodes: Sequence[Node]) -> List[Node]:
    return [n for n in nodes if not n.is_base]
