"""
Summary metrics folded from a round log.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence


@dataclass(frozen=True)
class SimulationMetrics:
    total_energy_consumed: float
    network_lifetime_rounds: int
    total_data_delivered_bits: float
    average_remaining_energy: float


def aggregate_metrics(rounds: Sequence, final_energy: Dict[str, float],
                      round_count: int, lifetime: Optional[int] = None) -> SimulationMetrics:
    """
    Fold per-round results into run metrics.

    `lifetime` is the first round that lost a node; None means no node
    died and the lifetime is the full `round_count`.
    """
    total_energy = sum(sum(r.energy_used.values()) for r in rounds)
    total_data = sum(r.data_transmitted_bits for r in rounds)
    avg_remaining = sum(final_energy.values()) / len(final_energy) if final_energy else 0.0

    return SimulationMetrics(
        total_energy_consumed=total_energy,
        network_lifetime_rounds=round_count if lifetime is None else lifetime,
        total_data_delivered_bits=total_data,
        average_remaining_energy=avg_remaining,
    )
