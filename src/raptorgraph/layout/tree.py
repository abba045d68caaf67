# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Tidy tree layout with subtree-width spacing.

"""
Tree layout in the spirit of Reingold-Tilford, simplified.

Each leaf takes one slot; a parent spans the slots of its children and
sits midway between its first and last child. Trees of a forest are laid
side by side with a two-slot gap, then the whole drawing is centered on
the canvas. Slots and levels are scaled by node_spacing and level_spacing,
so large trees may extend beyond the canvas.

All passes are iterative, so a long chain cannot exhaust the stack.
"""

import math
from typing import Dict, List, Tuple, Optional, Any

from ..graph import LayoutResult, unpack_graph
from ..optimize.centering import centering

TREE_GAP = 2


def _roots(ids: List[str], children: Dict[str, List[str]],
           has_parent: Dict[str, bool]) -> List[str]:
    roots = [nid for nid in ids if not has_parent[nid]]
    if roots:
        return roots
    # Every node has a parent: use the tenth with the most children
    by_children = sorted(ids, key=lambda nid: -len(children[nid]))
    return by_children[:max(1, math.floor(len(ids) / 10))]


def _walk(ids: List[str], edges: List[Tuple[str, str]]):
    """Return preorder (node, level) and the spanning-tree child lists."""
    children: Dict[str, List[str]] = {nid: [] for nid in ids}
    has_parent = {nid: False for nid in ids}
    for src, tgt in edges:
        if tgt not in children[src]:
            children[src].append(tgt)
        has_parent[tgt] = True

    visited = set()
    preorder: List[Tuple[str, int]] = []
    tree_children: Dict[str, List[str]] = {nid: [] for nid in ids}
    tops: List[str] = []

    for root in _roots(ids, children, has_parent) + ids:
        if root in visited:
            continue
        tops.append(root)
        stack: List[Tuple[str, int, Optional[str]]] = [(root, 0, None)]
        while stack:
            nid, level, parent = stack.pop()
            if nid in visited:
                continue
            visited.add(nid)
            preorder.append((nid, level))
            if parent is not None:
                tree_children[parent].append(nid)
            for child in reversed(children[nid]):
                if child not in visited:
                    stack.append((child, level + 1, nid))

    return preorder, tree_children, tops


def tree(
    graph: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """
    Compute tidy tree layout.

    Args:
        graph: Dictionary with 'nodes' and 'edges' keys. Source is parent.
        options: Optional parameters:
            - direction: 'vertical' (top-down) or 'horizontal' (left-right)
              (default: 'vertical')
            - level_spacing: Distance between levels (default: 150)
            - node_spacing: Distance between adjacent slots (default: 120)
            - width: Canvas width (default: 800)
            - height: Canvas height (default: 600)

    Returns:
        Dictionary mapping node IDs to (x, y) positions.

    Raises:
        ValueError: If direction is neither 'vertical' nor 'horizontal'.
    """
    options = options or {}
    direction = options.get('direction', 'vertical')
    level_spacing = options.get('level_spacing', 150)
    node_spacing = options.get('node_spacing', 120)
    width = options.get('width', 800)
    height = options.get('height', 600)

    if direction not in ('vertical', 'horizontal'):
        raise ValueError(f"Unknown tree direction: {direction!r}")

    ids, edges = unpack_graph(graph)
    if not ids:
        return {}

    preorder, tree_children, tops = _walk(ids, edges)

    # Subtree widths, children before parents
    widths: Dict[str, int] = {}
    for nid, _ in reversed(preorder):
        kids = tree_children[nid]
        widths[nid] = sum(widths[c] for c in kids) if kids else 1

    # Left offsets, parents before children
    offsets: Dict[str, float] = {}
    cursor = 0
    for top in tops:
        offsets[top] = cursor
        cursor += widths[top] + TREE_GAP
    for nid, _ in preorder:
        child_offset = offsets[nid]
        for child in tree_children[nid]:
            offsets[child] = child_offset
            child_offset += widths[child]

    # Slots: leaves at their offset, parents centered over children
    slots: Dict[str, float] = {}
    for nid, _ in reversed(preorder):
        kids = tree_children[nid]
        if kids:
            slots[nid] = (slots[kids[0]] + slots[kids[-1]]) / 2
        else:
            slots[nid] = offsets[nid]

    positions: LayoutResult = {}
    for nid, level in preorder:
        along = 50 + slots[nid] * node_spacing
        depth = 50 + level * level_spacing
        if direction == 'vertical':
            positions[nid] = (along, depth)
        else:
            positions[nid] = (depth, along)

    return centering(positions, {'width': width, 'height': height})


# Convenience function matching the layout binding interface
def compute(nodes, edges, **options):
    """Compute layout from node and edge lists."""
    graph = {'nodes': nodes, 'edges': edges}
    return tree(graph, options)
