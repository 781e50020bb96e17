"""
Tabular views of simulation results and CSV export.
"""

import logging
from typing import Dict

import pandas as pd

from .config import CSV_COLUMNS, HEALTHY_ALIVE_FRACTION
from .simulation import SimulationResult

logger = logging.getLogger(__name__)


def network_status(nodes_alive: int, total_nodes: int) -> str:
    return 'Healthy' if nodes_alive > HEALTHY_ALIVE_FRACTION * total_nodes else 'Degraded'


def rounds_to_dataframe(results: Dict[str, SimulationResult]) -> pd.DataFrame:
    """One row per round per protocol, in CSV_COLUMNS order."""
    rows = []
    for algorithm, result in results.items():
        for r in result.rounds:
            rows.append({
                'Round': r.round_number,
                'Algorithm': algorithm,
                'NodesAlive': r.nodes_alive,
                'EnergyUsageJoules': round(r.total_energy_used, 5),
                'DataTransmittedBits': r.data_transmitted_bits,
                'NetworkStatus': network_status(r.nodes_alive, result.total_nodes),
            })
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def metrics_table(results: Dict[str, SimulationResult]) -> pd.DataFrame:
    """Summary metrics, indexed by protocol."""
    table = pd.DataFrame([
        {
            'Algorithm': algorithm,
            'NetworkLifetimeRounds': result.metrics.network_lifetime_rounds,
            'TotalEnergyConsumedJoules': result.metrics.total_energy_consumed,
            'TotalDataDeliveredBits': result.metrics.total_data_delivered_bits,
            'AverageRemainingEnergyJoules': result.metrics.average_remaining_energy,
        }
        for algorithm, result in results.items()
    ])
    return table.set_index('Algorithm')


def export_results_csv(results: Dict[str, SimulationResult],
                       save_path: str = 'routing-simulation-results.csv') -> pd.DataFrame:
    df = rounds_to_dataframe(results)
    df.to_csv(save_path, index=False)
    logger.info("Wrote %d rows to %s", len(df), save_path)
    return df
