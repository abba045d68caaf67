# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Command line entry point.

"""
Lay out a graph from the command line.

Reads a graph from a file or stdin (one JSON document with "nodes" and
"edges", or JSON Lines node/edge objects), runs a layout and writes one
position object per line.

Examples:
    raptorgraph graph.json --algorithm radial
    cat graph.jsonl | raptorgraph -a phased --iterations 500 --preset spread
    raptorgraph graph.json -a hierarchical --direction left-right --fit
"""

import sys
import logging
from typing import Dict, Any, List, Optional

from .config import PRESETS, load_physics_params
from .errors import RaptorGraphError
from .io import load_graph, write_positions
from .layout import LAYOUTS, compute_layout
from .optimize import fit_to_viewport

logger = logging.getLogger(__name__)


def build_options(args) -> Dict[str, Any]:
    """Translate parsed arguments into layout options."""
    options: Dict[str, Any] = {
        'width': args.width,
        'height': args.height,
        'seed': args.seed,
    }
    if args.iterations is not None:
        # stress counts sweeps, the others count iterations
        options['iterations'] = args.iterations
        options['max_iterations'] = args.iterations
    if args.direction is not None:
        options['direction'] = args.direction

    if args.algorithm == 'phased':
        if args.params:
            options['physics'] = load_physics_params(args.params, preset=args.preset)
        elif args.preset:
            if args.preset not in PRESETS:
                raise RaptorGraphError(
                    f"Unknown preset '{args.preset}'. Available: {', '.join(PRESETS)}")
            options['physics'] = PRESETS[args.preset]

    return options


def main(argv: Optional[List[str]] = None) -> int:
    """CLI interface for graph layout."""
    import argparse

    parser = argparse.ArgumentParser(description='RaptorGraph layout engine')
    parser.add_argument('input', nargs='?', help='Graph file (default: stdin)')
    parser.add_argument('--algorithm', '-a', default='phased', choices=sorted(LAYOUTS),
                        help='Layout algorithm (default: phased)')
    parser.add_argument('--output', '-o', help='Write positions here (default: stdout)')
    parser.add_argument('--width', type=float, default=800, help='Canvas width')
    parser.add_argument('--height', type=float, default=600, help='Canvas height')
    parser.add_argument('--iterations', '-n', type=int,
                        help='Iterations or frames to run')
    parser.add_argument('--direction', '-d',
                        help='Direction for hierarchical, tree and sugiyama layouts')
    parser.add_argument('--seed', type=int, default=0, help='Random seed')
    parser.add_argument('--params', '-p', help='YAML file with physics parameters')
    parser.add_argument('--preset', help='Physics preset name')
    parser.add_argument('--fit', action='store_true',
                        help='Scale and center the result to the canvas')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    try:
        options = build_options(args)

        if args.input:
            with open(args.input) as f:
                graph = load_graph(f)
        else:
            graph = load_graph(sys.stdin)

        positions = compute_layout(args.algorithm, graph, options)
    except (RaptorGraphError, ValueError, OSError) as e:
        logger.error(str(e))
        return 1

    if args.fit:
        positions = fit_to_viewport(positions, {'width': args.width, 'height': args.height})

    logger.info(f"{args.algorithm}: placed {len(positions)} nodes")

    if args.output:
        with open(args.output, 'w') as f:
            write_positions(positions, f)
    else:
        write_positions(positions, sys.stdout)

    return 0


if __name__ == '__main__':
    sys.exit(main())
