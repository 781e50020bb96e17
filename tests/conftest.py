import matplotlib
matplotlib.use('Agg')

import pytest

from wsn_routing.network import Node


@pytest.fixture
def square_network():
    """Base station at the origin, four sensors roughly 1 km away."""
    return [
        Node('base', 0.0, 0.0, role='base'),
        Node('s1', 0.01, 0.0),
        Node('s2', 0.02, 0.0),
        Node('s3', 0.0, 0.01),
        Node('s4', 0.01, 0.01),
    ]


@pytest.fixture
def line_network():
    """Sensors on a meridian, listed out of order, plus a relay."""
    return [
        Node('base', 0.0, 0.0, role='base'),
        Node('a', 0.01, 0.0),
        Node('d', 0.04, 0.0),
        Node('b', 0.02, 0.0, role='relay'),
        Node('c', 0.03, 0.0),
    ]


@pytest.fixture
def single_sensor_network():
    return [
        Node('base', 0.0, 0.0, role='base'),
        Node('solo', 0.01, 0.0),
    ]
