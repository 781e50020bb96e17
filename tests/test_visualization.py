import pytest

from wsn_routing.config import LeachConfig, PegasisConfig
from wsn_routing.simulation import run_comparison
from wsn_routing.visualization import (plot_comparison, plot_energy_per_round,
                                       plot_network_topology, plot_nodes_alive)


@pytest.fixture
def results(square_network):
    return run_comparison(square_network, LeachConfig(round_count=5),
                          PegasisConfig(round_count=5), seed=2)


def test_round_charts_are_saved(results, tmp_path):
    paths = [tmp_path / 'alive.png', tmp_path / 'energy.png', tmp_path / 'cmp.png']
    plot_nodes_alive(results, str(paths[0]))
    plot_energy_per_round(results, str(paths[1]))
    plot_comparison(results, str(paths[2]))
    assert all(p.exists() and p.stat().st_size > 0 for p in paths)


@pytest.mark.parametrize('protocol', [None, 'LEACH', 'PEGASIS'])
def test_topology_plot(square_network, results, tmp_path, protocol):
    path = tmp_path / 'topology.png'
    round_result = results[protocol].rounds[0] if protocol else None
    plot_network_topology(square_network, round_result, str(path))
    assert path.exists()
