"""
Simulation Engine for round-based routing protocols.
LEACH (cluster based) and PEGASIS (chain based) over a shared energy model.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from .config import (DEFAULT_LEACH_CONFIG, DEFAULT_PEGASIS_CONFIG, HOP_DISTANCE_COEFF,
                     LEACH_AGGREGATION_BASE, LEACH_AGGREGATION_PER_MEMBER,
                     PEGASIS_AGGREGATION_FACTOR, SINK_DISTANCE_COEFF,
                     LeachConfig, PegasisConfig, RoundConfig)
from .metrics import SimulationMetrics, aggregate_metrics
from .network import EnergyLedger, Node, distance_km, validate_nodes
from .topology import form_chain, form_clusters, select_leader

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]


def _frozen(mapping) -> Mapping:
    """Read-only copy of a mapping."""
    return MappingProxyType(dict(mapping))


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class RoundResult:
    round_number: int
    energy_used: Mapping[str, float]
    nodes_alive: int
    data_transmitted_bits: float
    active: bool = True

    @property
    def total_energy_used(self) -> float:
        return sum(self.energy_used.values())


@dataclass(frozen=True)
class LeachRound(RoundResult):
    cluster_heads: Tuple[str, ...] = ()
    cluster_members: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: _frozen({}))


@dataclass(frozen=True)
class PegasisRound(RoundResult):
    chain: Tuple[str, ...] = ()
    leader: Optional[str] = None


@dataclass(frozen=True)
class SimulationResult:
    protocol: str
    rounds: Tuple[RoundResult, ...]
    metrics: SimulationMetrics
    total_nodes: int
    final_energy: Mapping[str, float]


# =============================================================================
# SHARED ROUND DRIVER
# =============================================================================

class _RoundCosts:
    """Energy drawn and bits moved during one round."""

    def __init__(self, ledger: EnergyLedger):
        self.ledger = ledger
        self.energy_used: Dict[str, float] = defaultdict(float)
        self.data_bits = 0.0

    def spend(self, node_id: str, cost: float):
        drawn = self.ledger.consume(node_id, cost)
        if drawn > 0:
            self.energy_used[node_id] += drawn


def _make_rng(rng: RandomSource) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def _transmit_cost(config: RoundConfig, bits: float, distance: float, coeff: float) -> float:
    return config.transmit_energy_per_bit * bits * (1 + coeff * distance)


def _drive(protocol: str, nodes: Sequence[Node], config: RoundConfig, ledger: EnergyLedger,
           play_round: Callable[[int], RoundResult],
           idle_round: Callable[[int, int], RoundResult]) -> SimulationResult:
    """
    Run `config.round_count` rounds.

    Once a round ends with fewer live nodes than the network started with,
    the lifetime is frozen and every later round is an idle entry so the
    log always holds exactly `round_count` rounds.
    """
    rounds: List[RoundResult] = []
    lifetime = None

    for round_number in range(1, config.round_count + 1):
        if lifetime is not None:
            rounds.append(idle_round(round_number, ledger.alive_count()))
            continue

        result = play_round(round_number)
        rounds.append(result)
        logger.debug("%s round %d: alive=%d, energy=%.6fJ, data=%.0f bits", protocol,
                     round_number, result.nodes_alive, result.total_energy_used,
                     result.data_transmitted_bits)

        if result.nodes_alive < len(nodes):
            lifetime = round_number
            logger.info("%s: first node death in round %d (%d/%d alive)", protocol,
                        round_number, result.nodes_alive, len(nodes))

    final_energy = ledger.snapshot()
    metrics = aggregate_metrics(rounds, final_energy, config.round_count, lifetime)
    return SimulationResult(protocol=protocol, rounds=tuple(rounds), metrics=metrics,
                            total_nodes=len(nodes), final_energy=_frozen(final_energy))


# =============================================================================
# LEACH
# =============================================================================

def run_leach(nodes: Sequence[Node], config: LeachConfig = DEFAULT_LEACH_CONFIG,
              rng: RandomSource = None) -> SimulationResult:
    """
    Simulate LEACH over `config.round_count` rounds.

    Parameters:
    -----------
    nodes : Sequence[Node]
        Network snapshot; exactly one node must be the base station
    config : LeachConfig
        Energy model and cluster-head probability
    rng : np.random.Generator, int or None
        Random source for head election (an int is used as a seed)

    Returns:
    --------
    SimulationResult with one LeachRound per round

    Raises:
    -------
    ConfigError if the config or node list is invalid
    """
    config.validate()
    base = validate_nodes(nodes)
    rng = _make_rng(rng)
    ledger = EnergyLedger(nodes, config.initial_energy)
    node_by_id = {n.id: n for n in nodes}
    size = config.data_size_bits

    def play_round(round_number: int) -> LeachRound:
        clusters = form_clusters(nodes, ledger, config.cluster_head_probability, rng)
        costs = _RoundCosts(ledger)

        # 1. Members -> CH
        for cluster in clusters:
            head = node_by_id[cluster.ch_id]
            for member_id in cluster.member_ids:
                if not ledger.is_alive(member_id):
                    continue
                dist = distance_km(node_by_id[member_id], head)
                costs.spend(member_id, _transmit_cost(config, size, dist, HOP_DISTANCE_COEFF))
                if not ledger.is_alive(head.id):
                    continue
                costs.spend(head.id, config.receive_energy_per_bit * size)
                costs.data_bits += size

        # 2. CH aggregates and sends to base station
        for cluster in clusters:
            head = node_by_id[cluster.ch_id]
            if not ledger.is_alive(head.id):
                continue
            aggregated = size * (LEACH_AGGREGATION_BASE
                                 + LEACH_AGGREGATION_PER_MEMBER * len(cluster.member_ids))
            dist = distance_km(head, base)
            costs.spend(head.id, _transmit_cost(config, aggregated, dist, SINK_DISTANCE_COEFF))
            costs.data_bits += aggregated

        return LeachRound(
            round_number=round_number,
            energy_used=_frozen(costs.energy_used),
            nodes_alive=ledger.alive_count(),
            data_transmitted_bits=costs.data_bits,
            cluster_heads=tuple(c.ch_id for c in clusters),
            cluster_members=_frozen({c.ch_id: tuple(c.member_ids) for c in clusters}),
        )

    def idle_round(round_number: int, alive: int) -> LeachRound:
        return LeachRound(round_number=round_number, energy_used=_frozen({}),
                          nodes_alive=alive, data_transmitted_bits=0.0, active=False)

    return _drive('LEACH', nodes, config, ledger, play_round, idle_round)


# =============================================================================
# PEGASIS
# =============================================================================

def _chain_hops(chain: Sequence[str], leader_index: int) -> List[Tuple[str, str]]:
    """(sender, receiver) pairs flowing from both chain ends toward the leader."""
    hops = [(chain[i], chain[i + 1]) for i in range(leader_index)]
    hops += [(chain[i], chain[i - 1]) for i in range(len(chain) - 1, leader_index, -1)]
    return hops


def run_pegasis(nodes: Sequence[Node],
                config: PegasisConfig = DEFAULT_PEGASIS_CONFIG) -> SimulationResult:
    """
    Simulate PEGASIS over `config.round_count` rounds.

    The greedy chain is built once and reused for every round, even as
    nodes die. Dead senders are skipped; a live sender toward a dead
    receiver still pays its transmit cost but delivers nothing.
    """
    config.validate()
    base = validate_nodes(nodes)
    ledger = EnergyLedger(nodes, config.initial_energy)
    node_by_id = {n.id: n for n in nodes}
    chain = tuple(form_chain(nodes))
    size = config.data_size_bits
    logger.debug("PEGASIS chain: %s", " -> ".join(chain) or "<empty>")

    def play_round(round_number: int) -> PegasisRound:
        costs = _RoundCosts(ledger)
        leader = select_leader(chain, round_number, config.leader_selection, ledger)

        if leader is not None:
            for sender_id, receiver_id in _chain_hops(chain, chain.index(leader)):
                if not ledger.is_alive(sender_id):
                    continue
                dist = distance_km(node_by_id[sender_id], node_by_id[receiver_id])
                costs.spend(sender_id, _transmit_cost(config, size, dist, HOP_DISTANCE_COEFF))
                if not ledger.is_alive(receiver_id):
                    continue
                costs.spend(receiver_id, config.receive_energy_per_bit * size)
                costs.data_bits += size

            if ledger.is_alive(leader):
                aggregated = size * PEGASIS_AGGREGATION_FACTOR
                dist = distance_km(node_by_id[leader], base)
                costs.spend(leader, _transmit_cost(config, aggregated, dist, SINK_DISTANCE_COEFF))
                costs.data_bits += aggregated

        return PegasisRound(
            round_number=round_number,
            energy_used=_frozen(costs.energy_used),
            nodes_alive=ledger.alive_count(),
            data_transmitted_bits=costs.data_bits,
            chain=chain,
            leader=leader,
        )

    def idle_round(round_number: int, alive: int) -> PegasisRound:
        return PegasisRound(round_number=round_number, energy_used=_frozen({}),
                            nodes_alive=alive, data_transmitted_bits=0.0, active=False,
                            chain=chain)

    return _drive('PEGASIS', nodes, config, ledger, play_round, idle_round)


# =============================================================================
# COMPARISON
# =============================================================================

def run_comparison(nodes: Sequence[Node], leach_config: LeachConfig = DEFAULT_LEACH_CONFIG,
                   pegasis_config: PegasisConfig = DEFAULT_PEGASIS_CONFIG,
                   seed: Optional[int] = None) -> Dict[str, SimulationResult]:
    """Run both protocols on the same node snapshot with independent ledgers."""
    return {
        'LEACH': run_leach(nodes, leach_config, rng=seed),
        'PEGASIS': run_pegasis(nodes, pegasis_config),
    }
