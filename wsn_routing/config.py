"""
Configuration and Constants for the WSN Routing Simulation.
"""

import numbers
from dataclasses import dataclass

# =============================================================================
# ENERGY MODEL DEFAULTS
# =============================================================================

ROUND_COUNT = 20
INITIAL_ENERGY = 2.0  # Joules
TX_ENERGY_PER_BIT = 50e-6  # J/bit
RX_ENERGY_PER_BIT = 25e-6  # J/bit
DATA_SIZE_BITS = 4000  # bits per message

# Distance scaling of the transmit cost: cost * (1 + coeff * d_km)
HOP_DISTANCE_COEFF = 0.1  # node -> node (member -> CH, chain hop)
SINK_DISTANCE_COEFF = 0.2  # CH / leader -> base station

# Aggregation: LEACH CH sends size * (BASE + PER_MEMBER * members)
LEACH_AGGREGATION_BASE = 0.5
LEACH_AGGREGATION_PER_MEMBER = 0.5
PEGASIS_AGGREGATION_FACTOR = 0.8

# =============================================================================
# PROTOCOL PARAMETERS
# =============================================================================

CLUSTER_HEAD_PROBABILITY = 0.2

LEADER_ROUND_ROBIN = 'roundRobin'
LEADER_HIGHEST_ENERGY = 'highestEnergy'
LEADER_SELECTION_METHODS = (LEADER_ROUND_ROBIN, LEADER_HIGHEST_ENERGY)

# =============================================================================
# NODES & GEOGRAPHY
# =============================================================================

ROLE_SENSOR = 'sensor'
ROLE_BASE = 'base'
ROLE_RELAY = 'relay'
NODE_ROLES = (ROLE_SENSOR, ROLE_BASE, ROLE_RELAY)

KM_PER_DEGREE = 111.0

# Sample network origin (river monitoring site)
N_NODES = 8
BASE_LATITUDE = 32.05
BASE_LONGITUDE = 118.78
LATITUDE_SPREAD = 0.05
LONGITUDE_SPREAD = 0.1

# Export
HEALTHY_ALIVE_FRACTION = 0.5
CSV_COLUMNS = ['Round', 'Algorithm', 'NodesAlive', 'EnergyUsageJoules',
               'DataTransmittedBits', 'NetworkStatus']


class ConfigError(ValueError):
    """Raised when a node list or run configuration cannot be simulated."""


@dataclass(frozen=True)
class RoundConfig:
    """Energy-cost model shared by both protocols."""
    round_count: int = ROUND_COUNT
    initial_energy: float = INITIAL_ENERGY
    transmit_energy_per_bit: float = TX_ENERGY_PER_BIT
    receive_energy_per_bit: float = RX_ENERGY_PER_BIT
    data_size_bits: float = DATA_SIZE_BITS

    def validate(self):
        count = self.round_count
        if isinstance(count, bool) or not isinstance(count, numbers.Integral):
            raise ConfigError(f"round_count must be an integer, got {self.round_count!r}")
        if self.round_count < 1:
            raise ConfigError(f"round_count must be at least 1, got {self.round_count}")
        for name in ('initial_energy', 'transmit_energy_per_bit',
                     'receive_energy_per_bit', 'data_size_bits'):
            value = getattr(self, name)
            if not value > 0:
                raise ConfigError(f"{name} must be positive, got {value!r}")


@dataclass(frozen=True)
class LeachConfig(RoundConfig):
    cluster_head_probability: float = CLUSTER_HEAD_PROBABILITY

    def validate(self):
        super().validate()
        if not 0.0 <= self.cluster_head_probability <= 1.0:
            raise ConfigError("cluster_head_probability must be within [0, 1], "
                              f"got {self.cluster_head_probability!r}")


@dataclass(frozen=True)
class PegasisConfig(RoundConfig):
    leader_selection: str = LEADER_ROUND_ROBIN

    def validate(self):
        super().validate()
        if self.leader_selection not in LEADER_SELECTION_METHODS:
            raise ConfigError(f"Unknown leader_selection {self.leader_selection!r}; "
                              f"expected one of {LEADER_SELECTION_METHODS}")


DEFAULT_LEACH_CONFIG = LeachConfig()
DEFAULT_PEGASIS_CONFIG = PegasisConfig()
