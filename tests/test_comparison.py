import pytest

from wsn_routing.config import LeachConfig, PegasisConfig
from wsn_routing.simulation import run_comparison, run_leach, run_pegasis


def test_comparison_runs_are_independent(square_network):
    leach_config = LeachConfig(round_count=8, initial_energy=0.6)
    pegasis_config = PegasisConfig(round_count=8, initial_energy=0.6)
    snapshot = list(square_network)

    results = run_comparison(square_network, leach_config, pegasis_config, seed=17)

    assert square_network == snapshot
    assert results['PEGASIS'] == run_pegasis(square_network, pegasis_config)
    assert results['LEACH'] == run_leach(square_network, leach_config, rng=17)


def test_results_cannot_be_modified(square_network):
    results = run_comparison(square_network, LeachConfig(round_count=3),
                             PegasisConfig(round_count=3), seed=1)
    leach, pegasis = results['LEACH'], results['PEGASIS']
    head = leach.rounds[0].cluster_heads[0]

    with pytest.raises(TypeError):
        leach.final_energy['s1'] = 99.0
    with pytest.raises(TypeError):
        pegasis.rounds[0].energy_used['s1'] = 0.0
    with pytest.raises(TypeError):
        leach.rounds[0].cluster_members[head] = ()
    with pytest.raises(AttributeError):
        pegasis.metrics.total_energy_consumed = 0.0
