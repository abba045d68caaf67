# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Stress-minimizing spring layout with NumPy acceleration.

"""
Stress layout in the Kamada-Kawai style.

Graph-theoretic distance (hop count) times the spring length is the ideal
Euclidean distance for every node pair. Nodes start evenly spaced on a
circle and are moved one at a time against the gradient of their spring
energy until no node moves more than epsilon in a sweep.

All-pairs shortest paths use scipy's Floyd-Warshall, O(n^3), which is
fine for the few-hundred-node graphs this layout targets.

A node only moves when its gradient exceeds epsilon. Springs are weak
(spring_constant / ideal^2), so with the defaults a long path whose
starting circle already roughly fits its hop distances can stay exactly
where it started; raise spring_constant or lower epsilon to let it move.
"""

import logging
from typing import Dict, List, Tuple, Optional, Any

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import shortest_path

from ..graph import LayoutResult, unpack_graph, centered

logger = logging.getLogger(__name__)


def shortest_path_lengths(ids: List[str], edges: List[Tuple[str, str]]) -> np.ndarray:
    """
    Unweighted all-pairs hop counts (Floyd-Warshall via scipy csgraph).

    Unreachable pairs (disconnected components) get one more than the
    largest finite distance so they sit just beyond the farthest pair.
    """
    n = len(ids)
    index = {nid: i for i, nid in enumerate(ids)}

    rows = np.array([index[src] for src, _ in edges], dtype=np.intp)
    cols = np.array([index[tgt] for _, tgt in edges], dtype=np.intp)
    adjacency = csr_matrix((np.ones(len(edges)), (rows, cols)), shape=(n, n))

    dist = shortest_path(adjacency, method='FW', directed=False, unweighted=True)

    unreachable = ~np.isfinite(dist)
    if unreachable.any():
        dist[unreachable] = dist[~unreachable].max() + 1.0

    return dist


def stress(
    graph: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """
    Compute stress-minimizing layout.

    Args:
        graph: Dictionary with 'nodes' and 'edges' keys.
        options: Optional parameters:
            - spring_constant: Spring constant (default: 1.0)
            - spring_length: Ideal length of one hop (default: 50)
            - max_iterations: Maximum sweeps (default: 100)
            - epsilon: Convergence threshold (default: 0.1)
            - width: Canvas width (default: 800)
            - height: Canvas height (default: 600)
            - margin: Distance kept from canvas edges (default: 50)

    Returns:
        Dictionary mapping node IDs to (x, y) positions.
    """
    options = options or {}
    spring_constant = options.get('spring_constant', 1.0)
    spring_length = options.get('spring_length', 50.0)
    max_iterations = options.get('max_iterations', 100)
    epsilon = options.get('epsilon', 0.1)
    width = options.get('width', 800)
    height = options.get('height', 600)
    margin = options.get('margin', 50)

    ids, edges = unpack_graph(graph)

    if not ids:
        return {}
    if len(ids) == 1:
        return centered(ids, width, height)

    n = len(ids)

    # Evenly spaced on a circle
    angles = np.arange(n) * (2 * np.pi / n)
    radius = min(width, height) / 3
    positions = np.column_stack([
        width / 2 + np.cos(angles) * radius,
        height / 2 + np.sin(angles) * radius,
    ])

    ideal = shortest_path_lengths(ids, edges) * spring_length
    np.fill_diagonal(ideal, 1.0)  # self terms are masked out below
    stiffness = spring_constant / (ideal * ideal)

    low = np.array([margin, margin], dtype=float)
    high = np.array([width - margin, height - margin], dtype=float)

    for iteration in range(max_iterations):
        max_delta = 0.0

        # Gauss-Seidel sweep: each move sees the ones before it
        for i in range(n):
            diff = positions[i] - positions          # (n, 2)
            dist = np.hypot(diff[:, 0], diff[:, 1])
            dist[dist == 0] = 0.01

            force = stiffness[i] * (dist - ideal[i])
            force[i] = 0.0
            gradient = (diff * (force / dist)[:, np.newaxis]).sum(axis=0)

            magnitude = float(np.hypot(gradient[0], gradient[1]))
            if magnitude > epsilon:
                move = min(10.0, magnitude * 0.1)
                positions[i] -= gradient / magnitude * move
                np.clip(positions[i], low, high, out=positions[i])
                max_delta = max(max_delta, move)

        if max_delta < epsilon:
            logger.debug(f"Stress layout converged after {iteration + 1} sweeps")
            break

    return {nid: (float(positions[i, 0]), float(positions[i, 1]))
            for i, nid in enumerate(ids)}


# Convenience function matching the layout binding interface
def compute(nodes, edges, **options):
    """Compute layout from node and edge lists."""
    graph = {'nodes': nodes, 'edges': edges}
    return stress(graph, options)
