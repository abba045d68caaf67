# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Graph data model shared by every layout algorithm.

"""
Node and edge records plus the helpers layouts use to read them.

Layouts accept loosely-typed input, the same way the mind map layouts do:
a graph dict with 'nodes' and 'edges' lists. Nodes may be plain strings,
dicts with an 'id' key, or GraphNode instances. Edges may be dicts with
'source'/'target' (or 'from'/'to') keys, 2-tuples, or GraphEdge instances.

Usage:
    from raptorgraph.graph import node_ids, valid_edges, build_adjacency

    ids = node_ids(graph['nodes'])
    edges = valid_edges(graph['edges'], set(ids))
    adjacency = build_adjacency(ids, edges)
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Optional, Any, Iterable, Set

logger = logging.getLogger(__name__)

Position = Tuple[float, float]
LayoutResult = Dict[str, Position]
Adjacency = Dict[str, Set[str]]


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class GraphNode:
    """A graph node. Only the id matters for layout."""
    id: str
    props: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"type": "node", "id": self.id, "props": self.props}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'GraphNode':
        """Create from JSON dict."""
        return cls(id=str(d["id"]), props=d.get("props", {}))


@dataclass
class GraphEdge:
    """A graph edge. Direction only matters for hierarchical layouts."""
    source: str
    target: str
    props: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "type": "edge",
            "source": self.source,
            "target": self.target,
            "props": self.props
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'GraphEdge':
        """Create from JSON dict. Accepts 'source'/'target' or 'from'/'to'."""
        source = d.get("source", d.get("from"))
        target = d.get("target", d.get("to"))
        return cls(source=str(source), target=str(target),
                   props=d.get("props", {}))


# ============================================================================
# NORMALIZATION
# ============================================================================

def node_id(node: Any) -> str:
    """Return the id of a node given in any accepted form."""
    if isinstance(node, GraphNode):
        return node.id
    if isinstance(node, dict):
        return str(node['id'])
    return str(node)


def node_ids(nodes: Iterable[Any]) -> List[str]:
    """Return node ids in input order."""
    return [node_id(n) for n in nodes]


def edge_endpoints(edge: Any) -> Tuple[Optional[str], Optional[str]]:
    """Return (source, target) of an edge given in any accepted form."""
    if isinstance(edge, GraphEdge):
        return edge.source, edge.target
    if isinstance(edge, dict):
        src = edge.get('source', edge.get('from'))
        tgt = edge.get('target', edge.get('to'))
        return (None if src is None else str(src),
                None if tgt is None else str(tgt))
    src, tgt = edge
    return str(src), str(tgt)


def valid_edges(edges: Iterable[Any], known: Set[str]) -> List[Tuple[str, str]]:
    """
    Return (source, target) pairs whose endpoints are both known.

    Dangling edges and self-loops are dropped; duplicates are kept so that
    callers counting incidence see every parallel edge.
    """
    result = []
    dropped = 0
    for edge in edges:
        src, tgt = edge_endpoints(edge)
        if src in known and tgt in known and src != tgt:
            result.append((src, tgt))
        else:
            dropped += 1
    if dropped:
        logger.debug(f"Ignored {dropped} dangling or self-loop edges")
    return result


def unpack_graph(graph: Dict[str, Any]) -> Tuple[List[str], List[Tuple[str, str]]]:
    """
    Split a graph dict into node ids and valid (source, target) pairs.

    Duplicate ids violate the input contract; only the first is kept.
    """
    ids = list(dict.fromkeys(node_ids(graph.get('nodes', []))))
    return ids, valid_edges(graph.get('edges', []), set(ids))


# ============================================================================
# DERIVED STRUCTURES
# ============================================================================

def build_adjacency(ids: Iterable[str], edges: Iterable[Tuple[str, str]]) -> Adjacency:
    """Build a symmetric adjacency map; every id gets an entry."""
    adjacency: Adjacency = {nid: set() for nid in ids}
    for src, tgt in edges:
        adjacency[src].add(tgt)
        adjacency[tgt].add(src)
    return adjacency


def degree_map(ids: Iterable[str], edges: Iterable[Tuple[str, str]]) -> Dict[str, int]:
    """Count edge incidence per node (parallel edges count separately)."""
    degrees = {nid: 0 for nid in ids}
    for src, tgt in edges:
        degrees[src] += 1
        degrees[tgt] += 1
    return degrees


def centered(ids: List[str], width: float, height: float) -> LayoutResult:
    """Place every id at the canvas center."""
    return {nid: (width / 2, height / 2) for nid in ids}
