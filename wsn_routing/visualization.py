"""
Visualization Module for routing simulation results.
"""

from typing import Dict, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.lines import Line2D

from .network import Node
from .simulation import LeachRound, PegasisRound, RoundResult, SimulationResult

PROTOCOL_COLORS = {'LEACH': '#3698eb', 'PEGASIS': '#ff6384'}


def _color(algorithm: str) -> str:
    return PROTOCOL_COLORS.get(algorithm, 'gray')


def plot_nodes_alive(results: Dict[str, SimulationResult],
                     save_path: str = 'nodes_alive.png'):
    """Nodes alive per round for each protocol."""
    plt.figure(figsize=(10, 6))

    for algorithm, result in results.items():
        rounds = [r.round_number for r in result.rounds]
        alive = [r.nodes_alive for r in result.rounds]
        plt.plot(rounds, alive, '-o', color=_color(algorithm), linewidth=2,
                 markersize=4, label=f'{algorithm} - Nodes Alive')

    plt.xlabel('Round', fontsize=12)
    plt.ylabel('Nodes Alive', fontsize=12)
    plt.title('Network Survival per Round', fontsize=14, fontweight='bold')
    plt.legend(loc='lower left', fontsize=11)
    plt.grid(True, alpha=0.3)

    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"Nodes alive plot saved to: {save_path}")


def plot_energy_per_round(results: Dict[str, SimulationResult],
                          save_path: str = 'energy_per_round.png'):
    plt.figure(figsize=(10, 6))

    for algorithm, result in results.items():
        rounds = [r.round_number for r in result.rounds]
        energy = [r.total_energy_used for r in result.rounds]
        plt.plot(rounds, energy, '-', color=_color(algorithm), linewidth=2,
                 label=f'{algorithm} - Energy Usage')

    plt.xlabel('Round', fontsize=12)
    plt.ylabel('Energy Used (Joules)', fontsize=12)
    plt.title('Energy Consumption per Round', fontsize=14, fontweight='bold')
    plt.legend(loc='upper right', fontsize=11)
    plt.grid(True, alpha=0.3)

    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"Energy plot saved to: {save_path}")


def plot_comparison(results: Dict[str, SimulationResult],
                    save_path: str = 'protocol_comparison.png'):
    """Network lifetime and total energy side by side."""
    labels = list(results.keys())
    colors = [_color(a) for a in labels]
    lifetimes = [results[a].metrics.network_lifetime_rounds for a in labels]
    energies = [results[a].metrics.total_energy_consumed for a in labels]

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    ax1 = axes[0]
    bars = ax1.bar(labels, lifetimes, color=colors, width=0.5)
    ax1.set_ylabel('Network Lifetime (rounds)', fontsize=12)
    ax1.set_title('Rounds until First Node Death', fontsize=12, fontweight='bold')
    ax1.grid(axis='y', alpha=0.3)
    for bar in bars:
        height = bar.get_height()
        ax1.text(bar.get_x() + bar.get_width() / 2., height, f'{int(height)}',
                 ha='center', va='bottom', fontsize=12, fontweight='bold')

    ax2 = axes[1]
    bars = ax2.bar(labels, energies, color=colors, width=0.5)
    ax2.set_ylabel('Energy Consumption (Joules)', fontsize=12)
    ax2.set_title('Total Energy Consumed', fontsize=12, fontweight='bold')
    ax2.grid(axis='y', alpha=0.3)
    for bar in bars:
        height = bar.get_height()
        ax2.text(bar.get_x() + bar.get_width() / 2., height, f'{height:.4f} J',
                 ha='center', va='bottom', fontsize=12, fontweight='bold')

    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"Comparison plot saved to: {save_path}")


def plot_network_topology(nodes: Sequence[Node], round_result: Optional[RoundResult] = None,
                          save_path: str = 'network_topology.png'):
    """
    Plot node positions, optionally overlaid with one round's topology:
    LEACH cluster links or the PEGASIS chain and leader.
    """
    fig, ax = plt.subplots(figsize=(10, 8))
    by_id = {n.id: n for n in nodes}
    base = next((n for n in nodes if n.is_base), None)

    if isinstance(round_result, LeachRound):
        colors = plt.cm.tab10(np.linspace(0, 1, max(len(round_result.cluster_heads), 1)))
        for idx, ch_id in enumerate(round_result.cluster_heads):
            ch = by_id[ch_id]
            for member_id in round_result.cluster_members.get(ch_id, ()):
                member = by_id[member_id]
                ax.plot([member.lng, ch.lng], [member.lat, ch.lat],
                        color=colors[idx], alpha=0.5, linewidth=1, zorder=1)
            if base is not None:
                ax.plot([ch.lng, base.lng], [ch.lat, base.lat],
                        color='red', alpha=0.5, linewidth=1, linestyle='--', zorder=2)
    elif isinstance(round_result, PegasisRound) and round_result.chain:
        xs = [by_id[nid].lng for nid in round_result.chain]
        ys = [by_id[nid].lat for nid in round_result.chain]
        ax.plot(xs, ys, color='#ff6384', linewidth=1.5, alpha=0.7, zorder=1)
        if round_result.leader and base is not None:
            leader = by_id[round_result.leader]
            ax.plot([leader.lng, base.lng], [leader.lat, base.lat],
                    color='red', alpha=0.5, linewidth=1, linestyle='--', zorder=2)

    heads = set()
    if isinstance(round_result, LeachRound):
        heads = set(round_result.cluster_heads)
    elif isinstance(round_result, PegasisRound) and round_result.leader:
        heads = {round_result.leader}

    for node in nodes:
        if node.is_base:
            continue
        if node.id in heads:
            ax.scatter(node.lng, node.lat, c='orange', s=200, marker='s',
                       edgecolors='black', linewidths=2, zorder=5)
        else:
            ax.scatter(node.lng, node.lat, c='gray', s=80, marker='o',
                       edgecolors='black', linewidths=0.5, zorder=3)
        ax.annotate(node.id, (node.lng, node.lat), textcoords="offset points",
                    xytext=(0, 8), ha='center', fontsize=8)

    if base is not None:
        ax.scatter(base.lng, base.lat, c='red', s=400, marker='*',
                   edgecolors='black', linewidths=2, zorder=10)
        ax.annotate('BASE', (base.lng, base.lat), textcoords="offset points",
                    xytext=(0, 15), ha='center', fontsize=10, fontweight='bold', color='red')

    title = 'WSN Network Topology'
    if round_result is not None:
        title += f'\nRound {round_result.round_number}'
    ax.set_xlabel('Longitude', fontsize=12)
    ax.set_ylabel('Latitude', fontsize=12)
    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3)

    legend_elements = [
        Line2D([0], [0], marker='*', color='w', markerfacecolor='red',
               markersize=15, label='Base Station'),
        Line2D([0], [0], marker='s', color='w', markerfacecolor='orange',
               markersize=10, label='Cluster Head / Leader'),
        Line2D([0], [0], marker='o', color='w', markerfacecolor='gray',
               markersize=8, label='Sensor Node'),
    ]
    ax.legend(handles=legend_elements, loc='upper right', fontsize=10)

    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches='tight')
    plt.close()
    print(f"Network topology saved to: {save_path}")
