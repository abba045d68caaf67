# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Level-based hierarchical layout for directed graphs.

"""
Hierarchical layout arranging a directed graph as a spanning forest.

Roots are the nodes nobody points at; a fully cyclic graph uses the nodes
with the smallest in-degree instead. A depth-first walk from each root
claims unvisited nodes, which breaks cycles in visitation order. Anything
no root reaches becomes its own single-node tree at level 0.

Levels run along the primary axis and each level is spread evenly along
the secondary axis in depth-first preorder.
"""

from enum import Enum
from typing import Dict, List, Tuple, Optional, Any, Union

from ..graph import LayoutResult, unpack_graph, centered


class Direction(str, Enum):
    """Direction the levels grow in."""
    TOP_BOTTOM = 'top-bottom'
    BOTTOM_TOP = 'bottom-top'
    LEFT_RIGHT = 'left-right'
    RIGHT_LEFT = 'right-left'

    @property
    def horizontal(self) -> bool:
        return self in (Direction.LEFT_RIGHT, Direction.RIGHT_LEFT)

    @property
    def reversed(self) -> bool:
        return self in (Direction.BOTTOM_TOP, Direction.RIGHT_LEFT)


def spanning_forest(
    ids: List[str],
    edges: List[Tuple[str, str]]
) -> List[Tuple[str, int]]:
    """
    Walk the graph depth-first from its roots.

    Returns:
        (node_id, level) pairs in preorder, one per node.
    """
    in_degree = {nid: 0 for nid in ids}
    out_edges: Dict[str, List[str]] = {nid: [] for nid in ids}
    for src, tgt in edges:
        in_degree[tgt] += 1
        out_edges[src].append(tgt)

    lowest = min(in_degree.values())
    roots = [nid for nid in ids if in_degree[nid] == lowest]

    visited = set()
    order: List[Tuple[str, int]] = []

    for root in roots:
        if root in visited:
            continue
        stack = [(root, 0)]
        while stack:
            nid, level = stack.pop()
            if nid in visited:
                continue
            visited.add(nid)
            order.append((nid, level))
            # Reversed so the first child is popped first
            for child in reversed(out_edges[nid]):
                if child not in visited:
                    stack.append((child, level + 1))

    for nid in ids:
        if nid not in visited:
            order.append((nid, 0))

    return order


def hierarchical(
    graph: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """
    Compute hierarchical layout.

    Args:
        graph: Dictionary with 'nodes' and 'edges' keys. Edge direction
            matters: source is the parent.
        options: Optional parameters:
            - direction: A Direction or its string value (default: 'top-bottom')
            - width: Canvas width (default: 800)
            - height: Canvas height (default: 600)
            - margin: Distance kept from canvas edges (default: 50)

    Returns:
        Dictionary mapping node IDs to (x, y) positions.

    Raises:
        ValueError: If direction is not one of the four Direction values.
    """
    options = options or {}
    direction: Union[Direction, str] = options.get('direction', Direction.TOP_BOTTOM)
    width = options.get('width', 800)
    height = options.get('height', 600)
    margin = options.get('margin', 50)

    direction = Direction(direction)

    ids, edges = unpack_graph(graph)

    if not ids:
        return {}
    if len(ids) == 1:
        return centered(ids, width, height)

    order = spanning_forest(ids, edges)

    levels: Dict[int, List[str]] = {}
    for nid, level in order:
        levels.setdefault(level, []).append(nid)
    max_level = max(levels)

    if direction.horizontal:
        primary_size, secondary_size = width, height
    else:
        primary_size, secondary_size = height, width

    positions: LayoutResult = {}

    for level, nids in levels.items():
        rank = max_level - level if direction.reversed else level
        primary = rank / max(max_level, 1) * (primary_size - 2 * margin) + margin

        count = len(nids)
        for i, nid in enumerate(nids):
            if count > 1:
                secondary = i / (count - 1) * (secondary_size - 2 * margin) + margin
            else:
                secondary = secondary_size / 2

            if direction.horizontal:
                positions[nid] = (primary, secondary)
            else:
                positions[nid] = (secondary, primary)

    return positions


# Convenience function matching the layout binding interface
def compute(nodes, edges, **options):
    """Compute layout from node and edge lists."""
    graph = {'nodes': nodes, 'edges': edges}
    return hierarchical(graph, options)
