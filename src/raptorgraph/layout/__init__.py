# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Graph layout algorithms.

"""
One-shot layout algorithms.

Provides NumPy-accelerated implementations of:
- Stress layout (shortest-path distances as spring lengths)
- Spectral layout (Laplacian eigenvectors)
- Fruchterman-Reingold layout (cooling force-directed)

and pure Python implementations of:
- Radial layout (hubs at the center, rings outward)
- Hierarchical layout (depth-first spanning forest by level)
- Tree layout (subtree-width spacing)
- Sugiyama layout (breadth-first layers)

Every layout has the signature `name(graph, options) -> {id: (x, y)}`.
The phased physics simulation is registered here too, run to completion.

Usage:
    from raptorgraph.layout import compute_layout

    positions = compute_layout('radial', graph, {'width': 1200})
"""

from typing import Callable, Dict, Any, Optional

from ..errors import UnknownLayoutError
from ..graph import LayoutResult
from ..physics import phased
from .stress import stress
from .spectral import spectral
from .radial import radial, radial_rings
from .hierarchical import hierarchical, Direction
from .fruchterman import fruchterman
from .tree import tree
from .sugiyama import sugiyama, sugiyama_layers

LayoutFunction = Callable[[Dict[str, Any], Optional[Dict[str, Any]]], LayoutResult]

LAYOUTS: Dict[str, LayoutFunction] = {
    'stress': stress,
    'spectral': spectral,
    'radial': radial,
    'hierarchical': hierarchical,
    'fruchterman': fruchterman,
    'tree': tree,
    'sugiyama': sugiyama,
    'phased': phased,
}


def get_layout(name: str) -> LayoutFunction:
    """Look up a layout by name, raising UnknownLayoutError if absent."""
    try:
        return LAYOUTS[name]
    except KeyError:
        raise UnknownLayoutError(name, sorted(LAYOUTS)) from None


def compute_layout(
    name: str,
    graph: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """Run the named layout on a graph dict."""
    return get_layout(name)(graph, options)


__all__ = [
    'LAYOUTS',
    'get_layout',
    'compute_layout',
    'stress',
    'spectral',
    'radial',
    'radial_rings',
    'hierarchical',
    'Direction',
    'fruchterman',
    'tree',
    'sugiyama',
    'sugiyama_layers',
]
