"""
spvproofs: compare prev-tree topologies for compact SPV proofs

Calculates proof length for SPV chains of block headers, using various
different prevtree topologies.

Usage:
    spvproofs <num_blocks> [--target T] [--seed S] [--no-maaku]
    spvproofs <num_blocks> --mode optimal --topology optimal mmr
    spvproofs <num_blocks> --mode incremental --topology mmr
    spvproofs <num_blocks> --mode bench --output DIR
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import argparse
import json
import logging

from .accumulator import accumulate
from .benchmarks import incremental_topologies, run_all_benchmarks
from .chain import Chain, default_topologies
from .params import DEFAULT_BATCH_SIZE, SimParams
from .topology import Topology

MODES = ('path', 'optimal', 'incremental', 'bench', 'all')


def _select(requested: Optional[List[Topology]],
            usable: List[Topology]) -> Tuple[List[Topology], List[Topology]]:
    """Requested topologies this mode can run, and the ones it cannot."""
    if not requested:
        return usable, []
    return ([t for t in requested if t in usable],
            [t for t in requested if t not in usable])


def _names(topologies: List[Topology]) -> str:
    return ', '.join(t.value for t in topologies)


def run_path(chain: Chain, topologies: List[Topology]) -> Dict[str, Any]:
    """Each topology summed along the minimum-hop path."""
    costs = chain.path_costs(topologies)
    for cost in costs.values():
        print(f"{cost.topology.value}: proof hashes {cost.hashes}")
    return {t.value: {'hashes': c.hashes, 'hops': c.hops} for t, c in costs.items()}


def run_optimal(chain: Chain, topologies: List[Topology]) -> Dict[str, Any]:
    """Full per-topology DP for the fast topologies."""
    results = {}
    for topology in topologies:
        hashes = chain.optimal_cost(topology).cost[chain.num_blocks - 1]
        print(f"prooflen-{topology.value}: proof hashes {hashes}")
        results[topology.value] = hashes
    return results


def run_incremental(params: SimParams, topologies: List[Topology]) -> Dict[str, Any]:
    results = {}
    for topology in topologies:
        result = accumulate(params, topology)
        print(f"prooflen-{topology.value}: proof path {result.path_len}, "
              f"hashes {result.hashes}")
        results[topology.value] = result.to_dict()
    return results


def write_report(output: Path, report: Dict[str, Any]):
    output.mkdir(parents=True, exist_ok=True)
    path = output / 'report.json'
    with open(path, 'w') as f:
        json.dump(report, f, indent=2)
    print(f"\nReport written to: {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='spvproofs',
        description='Calculates proof length for SPV chains of block headers, '
                    'using various different prevtree topologies',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    spvproofs 100000                      # Every topology along one path
    spvproofs 100000 --no-maaku           # Skip tree-building topologies
    spvproofs 100000 --mode optimal       # Per-topology optimal DP
    spvproofs 100000 --mode incremental   # Incremental per-block paths
        """
    )

    parser.add_argument('num_blocks', type=int, help='Number of blocks in the chain')
    parser.add_argument('--target', type=int, default=0,
                        help='Block number to terminate SPV proof at')
    parser.add_argument('--seed', type=int, default=0,
                        help='Seed for deterministic RNG')
    parser.add_argument('--no-maaku', dest='include_slow', action='store_false',
                        help='Skip the maaku tree (and other tree-building topologies)')
    parser.add_argument('--batch-size', type=int, default=DEFAULT_BATCH_SIZE,
                        help=f'Subtree size for batched topologies (default: {DEFAULT_BATCH_SIZE})')
    parser.add_argument('--mode', choices=MODES, default='path',
                        help='What to compute (default: path)')
    parser.add_argument('--topology', '-t', type=Topology.parse, nargs='+',
                        metavar='NAME', help='Topologies to evaluate (default: all applicable)')
    parser.add_argument('--output', '-o', type=Path,
                        help='Directory to write report.json into')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    params = SimParams(
        num_blocks=args.num_blocks,
        target=args.target,
        seed=args.seed,
        batch_size=args.batch_size,
        include_slow=args.include_slow,
    )
    try:
        params.validate()
    except ValueError as e:
        parser.error(str(e))

    report: Dict[str, Any] = {'params': params.to_dict()}

    if args.mode == 'bench':
        if args.topology:
            parser.error("--topology does not apply to --mode bench")
        bench = run_all_benchmarks(params)
        report['benchmarks'] = bench.to_dict()
        report['receipt'] = bench.receipt()
        if args.output:
            write_report(args.output, report)
        return 0 if bench.all_passed else 1

    usable = {
        'path': default_topologies(params.include_slow),
        'optimal': [t for t in Topology if t.fast],
        'incremental': incremental_topologies(params.include_slow),
    }
    modes = list(usable) if args.mode == 'all' else [args.mode]
    selected = {}
    for mode in modes:
        selected[mode], skipped = _select(args.topology, usable[mode])
        if not skipped:
            continue
        if args.mode != 'all':
            parser.error(f"--mode {mode} cannot evaluate: {_names(skipped)}")
        print(f"{mode}: skipping {_names(skipped)}")

    if 'path' in selected or 'optimal' in selected:
        chain = Chain(params)
        if 'path' in selected:
            report['path'] = run_path(chain, selected['path'])
        if 'optimal' in selected:
            report['optimal'] = run_optimal(chain, selected['optimal'])

    if 'incremental' in selected:
        report['incremental'] = run_incremental(params, selected['incremental'])

    if args.output:
        write_report(args.output, report)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
