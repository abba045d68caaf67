# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Fruchterman-Reingold layout with NumPy acceleration.

"""
Fruchterman-Reingold force-directed layout.

Every pair repels with k^2/d and every edge attracts with d^2/k, where
k = sqrt(area / n) is the ideal edge length for the canvas. Displacement
per iteration is capped by a temperature that cools linearly to zero.

Forces are computed with vectorized (n, n) arrays, so each iteration is
O(n^2) in NumPy rather than in Python loops.
"""

import logging
from typing import Dict, Optional, Any

import numpy as np

from ..graph import LayoutResult, unpack_graph, centered

logger = logging.getLogger(__name__)


def fruchterman(
    graph: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """
    Compute Fruchterman-Reingold layout.

    Args:
        graph: Dictionary with 'nodes' and 'edges' keys.
        options: Optional parameters:
            - iterations: Number of iterations (default: 50)
            - temperature: Initial displacement cap (default: 100)
            - width: Canvas width (default: 800)
            - height: Canvas height (default: 600)
            - margin: Distance kept from canvas edges (default: 50)
            - seed: Random seed for initial positions (default: 0)

    Returns:
        Dictionary mapping node IDs to (x, y) positions.
    """
    options = options or {}
    iterations = options.get('iterations', 50)
    initial_temperature = options.get('temperature', 100.0)
    width = options.get('width', 800)
    height = options.get('height', 600)
    margin = options.get('margin', 50)
    seed = options.get('seed', 0)

    ids, edges = unpack_graph(graph)

    if not ids:
        return {}
    if len(ids) == 1:
        return centered(ids, width, height)

    n = len(ids)
    index = {nid: i for i, nid in enumerate(ids)}
    k = np.sqrt(width * height / n)

    rng = np.random.default_rng(seed)
    low = np.array([margin, margin], dtype=float)
    high = np.array([width - margin, height - margin], dtype=float)
    positions = low + rng.random((n, 2)) * (high - low)

    # Parallel edges pull once each
    edge_count = np.zeros((n, n))
    for src, tgt in edges:
        i, j = index[src], index[tgt]
        edge_count[i, j] += 1
        edge_count[j, i] += 1

    for iteration in range(iterations):
        diff = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]  # (n, n, 2)
        dist = np.sqrt(np.sum(diff ** 2, axis=2))
        dist[dist == 0] = 0.01
        direction = diff / dist[:, :, np.newaxis]

        repulsion = k * k / dist
        np.fill_diagonal(repulsion, 0)
        attraction = dist * dist / k * edge_count

        magnitude = repulsion - attraction
        displacement = np.sum(direction * magnitude[:, :, np.newaxis], axis=1)

        temperature = initial_temperature * (1 - iteration / iterations)
        length = np.sqrt(np.sum(displacement ** 2, axis=1))
        length[length == 0] = 0.01
        limited = np.minimum(length, temperature)

        positions += displacement / length[:, np.newaxis] * limited[:, np.newaxis]
        np.clip(positions, low, high, out=positions)

    logger.debug(f"Fruchterman-Reingold: {n} nodes, {iterations} iterations, k={k:.1f}")
    return {nid: (float(positions[i, 0]), float(positions[i, 1]))
            for i, nid in enumerate(ids)}


# Convenience function matching the layout binding interface
def compute(nodes, edges, **options):
    """Compute layout from node and edge lists."""
    graph = {'nodes': nodes, 'edges': edges}
    return fruchterman(graph, options)
