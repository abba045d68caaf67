# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Hub-centered radial layout.

"""
Radial layout placing hubs at the center and everything else in rings.

The top fifth of nodes by degree (at least one) form ring 0. Each further
ring holds the unplaced nodes adjacent to the previous ring; when none are
adjacent (a disconnected remainder) the lowest-degree unplaced node starts
the ring on its own. Nodes in a ring are spread evenly by angle.
"""

import math
from typing import Dict, List, Optional, Any

from ..graph import LayoutResult, unpack_graph, build_adjacency, degree_map

HUB_FRACTION = 0.2


def radial_rings(graph: Dict[str, Any]) -> Dict[str, int]:
    """
    Assign every node a ring index.

    Returns:
        Dictionary mapping node IDs to ring numbers, 0 for hubs.
    """
    ids, edges = unpack_graph(graph)
    if not ids:
        return {}

    degrees = degree_map(ids, edges)
    adjacency = build_adjacency(ids, edges)

    # sorted() is stable, so equal degrees keep input order
    by_degree = sorted(ids, key=lambda nid: -degrees[nid])
    hub_count = max(1, math.ceil(len(ids) * HUB_FRACTION))

    rings: Dict[str, int] = {nid: 0 for nid in by_degree[:hub_count]}
    previous = set(rings)
    ring = 1

    while len(rings) < len(ids):
        current = [nid for nid in ids
                   if nid not in rings and adjacency[nid] & previous]

        if not current:
            remaining = [nid for nid in ids if nid not in rings]
            current = [min(remaining, key=lambda nid: degrees[nid])]

        for nid in current:
            rings[nid] = ring
        previous = set(current)
        ring += 1

    return rings


def radial(
    graph: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """
    Compute radial layout around the highest-degree nodes.

    Args:
        graph: Dictionary with 'nodes' and 'edges' keys.
        options: Optional parameters:
            - width: Canvas width (default: 800)
            - height: Canvas height (default: 600)
            - inner_radius: Offset added to every ring radius (default: 100)
            - radius_step: Distance between rings (default: 120)
            - start_angle: Angle of the first node in each ring (default: 0)

    Returns:
        Dictionary mapping node IDs to (x, y) positions.
    """
    options = options or {}
    width = options.get('width', 800)
    height = options.get('height', 600)
    inner_radius = options.get('inner_radius', 100)
    radius_step = options.get('radius_step', 120)
    start_angle = options.get('start_angle', 0)

    center_x = width / 2
    center_y = height / 2

    rings = radial_rings(graph)
    if not rings:
        return {}

    # Group by ring, keeping assignment order
    ring_nodes: Dict[int, List[str]] = {}
    for nid, ring in rings.items():
        ring_nodes.setdefault(ring, []).append(nid)

    positions: LayoutResult = {}

    for ring, nids in ring_nodes.items():
        if ring == 0:
            if len(nids) == 1:
                positions[nids[0]] = (center_x, center_y)
                continue
            radius = inner_radius / 2
        else:
            radius = inner_radius + ring * radius_step

        count = len(nids)
        for i, nid in enumerate(nids):
            angle = start_angle + 2 * math.pi * i / count
            positions[nid] = (center_x + radius * math.cos(angle),
                              center_y + radius * math.sin(angle))

    return positions


# Convenience function matching the layout binding interface
def compute(nodes, edges, **options):
    """Compute layout from node and edge lists."""
    graph = {'nodes': nodes, 'edges': edges}
    return radial(graph, options)
