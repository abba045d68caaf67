# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Spectral layout from the graph Laplacian.

"""
Spectral layout using two eigenvectors of the graph Laplacian as x and y.

The Laplacian L = D - A gets a little seeded noise off the diagonal so
disconnected graphs do not collapse onto identical coordinates. The first
vector comes from plain power iteration, the second from power iteration
on L with the first vector deflated out.

Power iteration runs a fixed number of steps and never checks residuals;
raise `power_iterations` if the result looks unsettled.
"""

import logging
from typing import Dict, Optional, Any

import numpy as np

from ..graph import LayoutResult, unpack_graph, centered

logger = logging.getLogger(__name__)


def power_iteration(
    matrix: np.ndarray,
    iterations: int = 100,
    rng: Optional[np.random.Generator] = None
) -> np.ndarray:
    """
    Approximate the dominant eigenvector of `matrix`.

    Starts from a random vector and normalizes after every multiply.
    A zero product leaves the vector unchanged.
    """
    rng = rng if rng is not None else np.random.default_rng(0)
    vector = rng.random(matrix.shape[0])

    for _ in range(iterations):
        product = matrix @ vector
        magnitude = np.linalg.norm(product)
        if magnitude > 0:
            vector = product / magnitude

    return vector


def laplacian_matrix(ids, edges) -> np.ndarray:
    """Unweighted Laplacian D - A with edges symmetrized."""
    n = len(ids)
    index = {nid: i for i, nid in enumerate(ids)}
    adjacency = np.zeros((n, n))
    for src, tgt in edges:
        i, j = index[src], index[tgt]
        adjacency[i, j] = adjacency[j, i] = 1.0
    return np.diag(adjacency.sum(axis=1)) - adjacency


def _normalize(values: np.ndarray, size: float, margin: float) -> np.ndarray:
    low = values.min()
    span = values.max() - low
    if span == 0:
        span = 1.0
    return (values - low) / span * (size - 2 * margin) + margin


def spectral(
    graph: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """
    Compute spectral layout.

    Args:
        graph: Dictionary with 'nodes' and 'edges' keys.
        options: Optional parameters:
            - width: Canvas width (default: 800)
            - height: Canvas height (default: 600)
            - margin: Distance kept from canvas edges (default: 50)
            - power_iterations: Steps per eigenvector (default: 100)
            - noise: Upper bound of off-diagonal perturbation (default: 0.001)
            - seed: Random seed for perturbation and start vectors (default: 0)

    Returns:
        Dictionary mapping node IDs to (x, y) positions.
    """
    options = options or {}
    width = options.get('width', 800)
    height = options.get('height', 600)
    margin = options.get('margin', 50)
    iterations = options.get('power_iterations', 100)
    noise = options.get('noise', 0.001)
    seed = options.get('seed', 0)

    ids, edges = unpack_graph(graph)

    if not ids:
        return {}
    if len(ids) == 1:
        return centered(ids, width, height)

    rng = np.random.default_rng(seed)
    n = len(ids)

    laplacian = laplacian_matrix(ids, edges)
    perturbation = rng.random((n, n)) * noise
    np.fill_diagonal(perturbation, 0.0)
    laplacian += perturbation

    first = power_iteration(laplacian, iterations, rng)
    deflated = laplacian - np.outer(first, first)
    second = power_iteration(deflated, iterations, rng)

    xs = _normalize(first, width, margin)
    ys = _normalize(second, height, margin)

    logger.debug(f"Spectral layout: {n} nodes, {len(edges)} edges")
    return {nid: (float(xs[i]), float(ys[i])) for i, nid in enumerate(ids)}


# Convenience function matching the layout binding interface
def compute(nodes, edges, **options):
    """Compute layout from node and edge lists."""
    graph = {'nodes': nodes, 'edges': edges}
    return spectral(graph, options)
