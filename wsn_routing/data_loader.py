"""
Node List Sources.
Builds the network snapshot handed to the simulators: a generated sample
deployment, a CSV file, or an existing list with one node moved.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .config import (BASE_LATITUDE, BASE_LONGITUDE, LATITUDE_SPREAD, LONGITUDE_SPREAD,
                     N_NODES, ROLE_BASE, ROLE_SENSOR)
from .network import Node

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['id', 'lat', 'lng', 'role']


def generate_network(n_nodes: int = N_NODES,
                     rng: Union[np.random.Generator, int, None] = None,
                     base_lat: float = BASE_LATITUDE,
                     base_lng: float = BASE_LONGITUDE) -> List[Node]:
    """
    Scatter a sample deployment around (base_lat, base_lng).

    Node 0 is the base station, the rest are sensors.

    Parameters:
    -----------
    n_nodes : int
        Total nodes including the base station
    rng : np.random.Generator, int or None
        Random source (an int is used as a seed)
    base_lat, base_lng : float
        Centre of the deployment in degrees

    Returns:
    --------
    List[Node]
    """
    if n_nodes < 1:
        raise ValueError(f"n_nodes must be at least 1, got {n_nodes}")
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)

    lats = base_lat + rng.uniform(-LATITUDE_SPREAD / 2, LATITUDE_SPREAD / 2, n_nodes)
    lngs = base_lng + rng.uniform(-LONGITUDE_SPREAD / 2, LONGITUDE_SPREAD / 2, n_nodes)

    nodes = []
    for i in range(n_nodes):
        role = ROLE_BASE if i == 0 else ROLE_SENSOR
        name = 'Base Station' if i == 0 else f'Sensor Node {i}'
        nodes.append(Node(id=f'node-{i}', lat=float(lats[i]), lng=float(lngs[i]),
                          role=role, name=name))
    return nodes


def load_nodes_csv(filepath: str) -> List[Node]:
    """
    Load a node list from CSV.

    Required columns: id, lat, lng, role. Optional: name, initial_energy
    (blank means "use the run default").
    """
    df = pd.read_csv(filepath, dtype={'id': str})
    missing_cols = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing_cols:
        raise ValueError(f"Missing required columns: {missing_cols}")

    df = df.dropna(subset=REQUIRED_COLUMNS)
    df['role'] = df['role'].str.strip().str.lower()

    nodes = []
    for row in df.itertuples(index=False):
        energy = getattr(row, 'initial_energy', None)
        name = getattr(row, 'name', '')
        nodes.append(Node(
            id=str(row.id),
            lat=float(row.lat),
            lng=float(row.lng),
            role=row.role,
            name='' if pd.isna(name) else str(name),
            initial_energy=None if energy is None or pd.isna(energy) else float(energy),
        ))

    logger.info("Loaded %d nodes from %s", len(nodes), filepath)
    return nodes


def move_node(nodes: Sequence[Node], node_id: str, lat: float, lng: float) -> List[Node]:
    """Return a copy of `nodes` with one node repositioned (between runs only)."""
    moved: Optional[Node] = None
    result = []
    for node in nodes:
        if node.id == node_id:
            moved = replace(node, lat=lat, lng=lng)
            result.append(moved)
        else:
            result.append(node)
    if moved is None:
        raise KeyError(node_id)
    return result
