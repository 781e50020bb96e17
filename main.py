"""
WSN Routing Simulation - LEACH vs PEGASIS Comparison
Water-quality sensor network: energy, lifetime and data delivered per protocol.
"""

import argparse
import logging
import os
from dataclasses import replace

from wsn_routing.config import (DEFAULT_LEACH_CONFIG, DEFAULT_PEGASIS_CONFIG,
                                LEADER_SELECTION_METHODS, N_NODES)
from wsn_routing.data_loader import generate_network, load_nodes_csv
from wsn_routing.export import export_results_csv, metrics_table
from wsn_routing.network import validate_nodes
from wsn_routing.simulation import run_comparison
from wsn_routing.visualization import (plot_comparison, plot_energy_per_round,
                                       plot_network_topology, plot_nodes_alive)


def print_network_info(nodes):
    """Print network information."""
    print("\n" + "-" * 70)
    print("| [1] NETWORK INITIALIZATION                                         |")
    print("-" * 70)

    base = next(n for n in nodes if n.is_base)
    print(f"  > {len(nodes)} nodes ({len(nodes) - 1} sensors/relays + 1 base station)")
    print(f"  > Base station: {base.id} at ({base.lat:.4f}, {base.lng:.4f})")
    for node in nodes:
        if not node.is_base:
            print(f"      {node.id:<10} {node.role:<7} ({node.lat:.4f}, {node.lng:.4f})")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Compare LEACH and PEGASIS energy usage")
    parser.add_argument('--nodes-csv', help="CSV with id, lat, lng, role columns")
    parser.add_argument('--nodes', type=int, default=N_NODES,
                        help="Nodes in the generated network (including base)")
    parser.add_argument('--rounds', type=int, default=DEFAULT_LEACH_CONFIG.round_count)
    parser.add_argument('--initial-energy', type=float, default=DEFAULT_LEACH_CONFIG.initial_energy)
    parser.add_argument('--ch-probability', type=float,
                        default=DEFAULT_LEACH_CONFIG.cluster_head_probability)
    parser.add_argument('--leader-selection', choices=LEADER_SELECTION_METHODS,
                        default=DEFAULT_PEGASIS_CONFIG.leader_selection)
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--output-dir', default='.')
    parser.add_argument('--no-plots', action='store_true')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser.parse_args(argv)


def main(argv=None):
    """
    Run LEACH and PEGASIS on the same network and report the comparison.

    Returns:
    --------
    dict : protocol name -> SimulationResult
    """
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    # Banner
    print("\n")
    print("=" * 70)
    print("        WIRELESS SENSOR NETWORK ROUTING SIMULATION")
    print("=" * 70)
    print("  Protocols: LEACH (cluster based) vs PEGASIS (chain based)")
    print("=" * 70)

    leach_config = replace(DEFAULT_LEACH_CONFIG, round_count=args.rounds,
                           initial_energy=args.initial_energy,
                           cluster_head_probability=args.ch_probability)
    pegasis_config = replace(DEFAULT_PEGASIS_CONFIG, round_count=args.rounds,
                             initial_energy=args.initial_energy,
                             leader_selection=args.leader_selection)

    # 1. Network
    try:
        if args.nodes_csv:
            nodes = load_nodes_csv(args.nodes_csv)
        else:
            nodes = generate_network(args.nodes, rng=args.seed)
        validate_nodes(nodes)
        leach_config.validate()
        pegasis_config.validate()
    except ValueError as e:  # includes ConfigError
        print(f"  [ERROR] Invalid configuration: {e}")
        raise SystemExit(2)
    print_network_info(nodes)

    # 2. Simulations
    print("\n" + "-" * 70)
    print("| [2] SIMULATION                                                     |")
    print("-" * 70)
    results = run_comparison(nodes, leach_config, pegasis_config, seed=args.seed)
    print(f"\n  Rounds: {args.rounds}, Initial energy: {args.initial_energy} J")
    print(f"  LEACH CH probability: {args.ch_probability}")
    print(f"  PEGASIS leader selection: {args.leader_selection}")

    # 3. Results
    print("\n" + "=" * 70)
    print("| [3] RESULTS COMPARISON                                             |")
    print("=" * 70)
    print(f"\n  {'Algorithm':<10} {'Lifetime':>10} {'Energy':>12} {'Data':>14} {'Avg Left':>10}")
    print("  " + "-" * 60)
    for name, result in results.items():
        m = result.metrics
        print(f"  {name:<10} {m.network_lifetime_rounds:>10} {m.total_energy_consumed:>11.4f}J "
              f"{m.total_data_delivered_bits:>13.0f}b {m.average_remaining_energy:>9.4f}J")

    table = metrics_table(results)
    longer = table['NetworkLifetimeRounds'].idxmax()
    print(f"\n  > Longest lifetime: {longer}")

    # 4. Export
    print("\n" + "-" * 70)
    print("| [4] EXPORT                                                         |")
    print("-" * 70)
    os.makedirs(args.output_dir, exist_ok=True)
    csv_path = os.path.join(args.output_dir, 'routing-simulation-results.csv')
    export_results_csv(results, csv_path)
    print(f"  Round log saved to: {csv_path}")

    if not args.no_plots:
        plot_nodes_alive(results, os.path.join(args.output_dir, 'nodes_alive.png'))
        plot_energy_per_round(results, os.path.join(args.output_dir, 'energy_per_round.png'))
        plot_comparison(results, os.path.join(args.output_dir, 'protocol_comparison.png'))
        plot_network_topology(nodes, results['LEACH'].rounds[0],
                              os.path.join(args.output_dir, 'leach_topology.png'))
        plot_network_topology(nodes, results['PEGASIS'].rounds[0],
                              os.path.join(args.output_dir, 'pegasis_chain.png'))
    print("=" * 70)

    return results


if __name__ == '__main__':
    main()
