"""
Network Topology Module.
Per-round LEACH clustering and the PEGASIS greedy chain.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .config import LEADER_HIGHEST_ENERGY, LEADER_ROUND_ROBIN
from .network import EnergyLedger, Node, distances_from, non_base_nodes

logger = logging.getLogger(__name__)


@dataclass
class ClusterInfo:
    """One LEACH cluster for a single round."""
    ch_id: str
    member_ids: List[str] = field(default_factory=list)


# =============================================================================
# LEACH
# =============================================================================

def elect_cluster_heads(candidates: Sequence[Node], probability: float,
                        rng: np.random.Generator) -> List[Node]:
    """
    Elect cluster heads among live, non-base candidates.

    Each candidate draws once; draws below `probability` become heads.
    If nobody is elected, one candidate is picked uniformly so that a
    round with live sensors always has a head.
    """
    if not candidates:
        return []

    draws = rng.random(len(candidates))
    heads = [node for node, draw in zip(candidates, draws) if draw < probability]

    if not heads:
        fallback = candidates[int(rng.integers(len(candidates)))]
        logger.debug("No CH elected, falling back to %s", fallback.id)
        heads = [fallback]
    return heads


def assign_members(candidates: Sequence[Node], heads: Sequence[Node]) -> List[ClusterInfo]:
    """Attach every non-head candidate to its nearest head (first head wins ties)."""
    clusters = [ClusterInfo(ch_id=h.id) for h in heads]
    head_ids = {h.id for h in heads}
    if not heads:
        return clusters

    for node in candidates:
        if node.id in head_ids:
            continue
        dists = distances_from(node, heads)
        clusters[int(np.argmin(dists))].member_ids.append(node.id)
    return clusters


def form_clusters(nodes: Sequence[Node], ledger: EnergyLedger, probability: float,
                  rng: np.random.Generator) -> List[ClusterInfo]:
    """Head election plus member assignment for one LEACH round."""
    candidates = [n for n in non_base_nodes(nodes) if ledger.is_alive(n.id)]
    heads = elect_cluster_heads(candidates, probability, rng)
    return assign_members(candidates, heads)


# =============================================================================
# PEGASIS
# =============================================================================

def form_chain(nodes: Sequence[Node]) -> List[str]:
    """
    Greedy nearest-neighbour chain over all non-base nodes.

    Starts at the first non-base node in list order; ties go to the
    earliest remaining node.
    """
    unvisited = non_base_nodes(nodes)
    if not unvisited:
        return []

    current = unvisited.pop(0)
    chain = [current.id]
    while unvisited:
        nearest = int(np.argmin(distances_from(current, unvisited)))
        current = unvisited.pop(nearest)
        chain.append(current.id)
    return chain


def select_leader(chain: Sequence[str], round_number: int, method: str,
                  ledger: EnergyLedger) -> Optional[str]:
    """
    Pick this round's chain leader.

    roundRobin walks the chain by round number; highestEnergy takes the
    node with most energy left, first in chain order on ties.
    Returns None for an empty chain.
    """
    if not chain:
        return None
    if method == LEADER_ROUND_ROBIN:
        return chain[(round_number - 1) % len(chain)]
    if method == LEADER_HIGHEST_ENERGY:
        energies = np.array([ledger.remaining(nid) for nid in chain])
        return chain[int(np.argmax(energies))]
    raise ValueError(f"Unknown leader selection method: {method}")
