import pandas as pd
import pytest

from wsn_routing.config import CSV_COLUMNS, LeachConfig, PegasisConfig
from wsn_routing.export import (export_results_csv, metrics_table, network_status,
                                rounds_to_dataframe)
from wsn_routing.simulation import run_comparison


@pytest.fixture
def results(square_network):
    return run_comparison(square_network, LeachConfig(round_count=6),
                          PegasisConfig(round_count=6), seed=8)


def test_network_status_threshold():
    assert network_status(4, 6) == 'Healthy'
    assert network_status(3, 6) == 'Degraded'
    assert network_status(0, 1) == 'Degraded'


def test_rounds_to_dataframe(results):
    df = rounds_to_dataframe(results)

    assert list(df.columns) == CSV_COLUMNS
    assert len(df) == 12
    assert list(df['Algorithm'].unique()) == ['LEACH', 'PEGASIS']
    leach = df[df['Algorithm'] == 'LEACH']
    assert list(leach['Round']) == [1, 2, 3, 4, 5, 6]
    assert list(leach['NodesAlive']) == [r.nodes_alive for r in results['LEACH'].rounds]
    assert set(df['NetworkStatus']) <= {'Healthy', 'Degraded'}
    assert leach['EnergyUsageJoules'].iloc[0] == pytest.approx(
        results['LEACH'].rounds[0].total_energy_used, abs=1e-5)


def test_export_round_trip(results, tmp_path):
    path = tmp_path / 'out.csv'
    written = export_results_csv(results, str(path))

    loaded = pd.read_csv(path)
    assert list(loaded.columns) == CSV_COLUMNS
    assert len(loaded) == len(written) == 12


def test_metrics_table(results):
    table = metrics_table(results)
    assert list(table.index) == ['LEACH', 'PEGASIS']
    assert table.loc['PEGASIS', 'NetworkLifetimeRounds'] == \
        results['PEGASIS'].metrics.network_lifetime_rounds
    assert table.loc['LEACH', 'TotalEnergyConsumedJoules'] == pytest.approx(
        results['LEACH'].metrics.total_energy_consumed)
