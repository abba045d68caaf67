# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Layered (Sugiyama-style) layout for directed graphs.

"""
Layered layout with fixed rank and node separation.

Layers come from a breadth-first walk starting at every source node (no
incoming edges); a node lands on the layer at which it is first reached.
Nodes that no source reaches, including every node of a fully cyclic
graph, go on layer 0. Each layer is centered along its axis, and the
stack of layers is centered along the other, so the drawing is centered
on the canvas whatever its size.

No crossing reduction is performed: nodes keep input order within a layer.
"""

from collections import deque
from typing import Dict, List, Optional, Any

from ..graph import LayoutResult, unpack_graph

DIRECTIONS = ('TB', 'BT', 'LR', 'RL')


def sugiyama_layers(graph: Dict[str, Any]) -> Dict[str, int]:
    """
    Assign every node a layer index.

    Returns:
        Dictionary mapping node IDs to layer numbers, 0 for sources.
    """
    ids, edges = unpack_graph(graph)

    outgoing: Dict[str, List[str]] = {nid: [] for nid in ids}
    has_incoming = {nid: False for nid in ids}
    for src, tgt in edges:
        outgoing[src].append(tgt)
        has_incoming[tgt] = True

    layers: Dict[str, int] = {}
    queue = deque((nid, 0) for nid in ids if not has_incoming[nid])

    while queue:
        nid, layer = queue.popleft()
        if nid in layers:
            continue
        layers[nid] = layer
        for child in outgoing[nid]:
            if child not in layers:
                queue.append((child, layer + 1))

    return {nid: layers.get(nid, 0) for nid in ids}


def sugiyama(
    graph: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """
    Compute layered layout.

    Args:
        graph: Dictionary with 'nodes' and 'edges' keys.
        options: Optional parameters:
            - direction: 'TB', 'BT', 'LR' or 'RL' (default: 'TB')
            - rank_separation: Distance between layers (default: 100)
            - node_separation: Distance between nodes in a layer (default: 80)
            - width: Canvas width (default: 800)
            - height: Canvas height (default: 600)

    Returns:
        Dictionary mapping node IDs to (x, y) positions.

    Raises:
        ValueError: If direction is not one of TB, BT, LR, RL.
    """
    options = options or {}
    direction = options.get('direction', 'TB')
    rank_separation = options.get('rank_separation', 100)
    node_separation = options.get('node_separation', 80)
    width = options.get('width', 800)
    height = options.get('height', 600)

    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown sugiyama direction: {direction!r}")

    assignment = sugiyama_layers(graph)
    if not assignment:
        return {}

    layers: List[List[str]] = [[] for _ in range(max(assignment.values()) + 1)]
    for nid, layer in assignment.items():
        layers[layer].append(nid)

    vertical = direction in ('TB', 'BT')
    rank_span = (len(layers) - 1) * rank_separation

    positions: LayoutResult = {}
    for rank, members in enumerate(layers):
        node_span = (len(members) - 1) * node_separation
        for i, nid in enumerate(members):
            if vertical:
                x = (width - node_span) / 2 + i * node_separation
                y = (height - rank_span) / 2 + rank * rank_separation
                if direction == 'BT':
                    y = height - y
            else:
                x = (width - rank_span) / 2 + rank * rank_separation
                y = (height - node_span) / 2 + i * node_separation
                if direction == 'RL':
                    x = width - x
            positions[nid] = (x, y)

    return positions


# Convenience function matching the layout binding interface
def compute(nodes, edges, **options):
    """Compute layout from node and edge lists."""
    graph = {'nodes': nodes, 'edges': edges}
    return sugiyama(graph, options)
