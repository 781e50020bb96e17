from dataclasses import replace

import numpy as np
import pytest

from wsn_routing.config import (DEFAULT_LEACH_CONFIG, DEFAULT_PEGASIS_CONFIG, ConfigError,
                                LeachConfig, PegasisConfig)


def test_defaults():
    assert DEFAULT_LEACH_CONFIG.round_count == 20
    assert DEFAULT_LEACH_CONFIG.initial_energy == 2.0
    assert DEFAULT_LEACH_CONFIG.transmit_energy_per_bit == 50e-6
    assert DEFAULT_LEACH_CONFIG.receive_energy_per_bit == 25e-6
    assert DEFAULT_LEACH_CONFIG.data_size_bits == 4000
    assert DEFAULT_LEACH_CONFIG.cluster_head_probability == 0.2
    assert DEFAULT_PEGASIS_CONFIG.leader_selection == 'roundRobin'
    DEFAULT_LEACH_CONFIG.validate()
    DEFAULT_PEGASIS_CONFIG.validate()


@pytest.mark.parametrize('changes', [
    {'round_count': 0},
    {'round_count': -3},
    {'round_count': 2.5},
    {'round_count': True},
    {'initial_energy': 0.0},
    {'transmit_energy_per_bit': -1e-6},
    {'receive_energy_per_bit': 0},
    {'data_size_bits': 0},
    {'cluster_head_probability': 1.5},
    {'cluster_head_probability': -0.1},
])
def test_leach_config_rejects(changes):
    with pytest.raises(ConfigError):
        replace(DEFAULT_LEACH_CONFIG, **changes).validate()


def test_pegasis_config_rejects_unknown_leader_selection():
    with pytest.raises(ConfigError):
        PegasisConfig(leader_selection='random').validate()


def test_probability_bounds_are_inclusive():
    LeachConfig(cluster_head_probability=0.0).validate()
    LeachConfig(cluster_head_probability=1.0).validate()
    PegasisConfig(leader_selection='highestEnergy').validate()


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)


def test_numpy_integer_round_count_is_accepted():
    LeachConfig(round_count=np.int64(5)).validate()
    with pytest.raises(ConfigError):
        LeachConfig(round_count=np.float64(5.0)).validate()
