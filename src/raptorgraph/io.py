# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# JSON Lines I/O for graph objects
#
# Streaming readers and writers so layouts can sit in a Unix pipeline.

"""
JSON Lines I/O for nodes, edges and positions.

Each line is one object tagged with a "type" field:

    {"type": "node", "id": "a", "props": {}}
    {"type": "edge", "source": "a", "target": "b", "props": {}}
    {"type": "position", "id": "a", "x": 400.0, "y": 300.0}

Usage:
    from raptorgraph.io import read_all, write_positions

    nodes, edges, _ = read_all(sys.stdin)
    write_positions(positions, sys.stdout)
"""

import json
import sys
import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple, Any, Iterator, TextIO, Union

from .graph import GraphNode, GraphEdge, LayoutResult

logger = logging.getLogger(__name__)


@dataclass
class NodePosition:
    """A node position."""
    id: str
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"type": "position", "id": self.id, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'NodePosition':
        """Create from JSON dict."""
        return cls(id=str(d["id"]), x=float(d["x"]), y=float(d["y"]))


GraphObject = Union[GraphNode, GraphEdge, NodePosition]

_TYPES = {
    "node": GraphNode,
    "edge": GraphEdge,
    "position": NodePosition,
}


# ============================================================================
# READERS
# ============================================================================

def read_jsonl(stream: TextIO = sys.stdin) -> Iterator[Dict[str, Any]]:
    """Read raw JSON objects, skipping blank and malformed lines."""
    for lineno, line in enumerate(stream, 1):
        line = line.strip()
        if not line:
            continue
        try:
            yield json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping malformed JSON on line {lineno}: {e}")


def read_objects(stream: TextIO = sys.stdin) -> Iterator[GraphObject]:
    """Read typed objects; lines with an unknown type are skipped."""
    for obj in read_jsonl(stream):
        cls = _TYPES.get(obj.get("type"))
        if cls is None:
            logger.debug(f"Skipping object of type {obj.get('type')!r}")
            continue
        try:
            yield cls.from_dict(obj)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping invalid {obj.get('type')} object: {e}")


def read_all(stream: TextIO = sys.stdin) -> Tuple[
    List[GraphNode], List[GraphEdge], List[NodePosition]
]:
    """Read all objects, grouped by type."""
    nodes: List[GraphNode] = []
    edges: List[GraphEdge] = []
    positions: List[NodePosition] = []

    for obj in read_objects(stream):
        if isinstance(obj, GraphNode):
            nodes.append(obj)
        elif isinstance(obj, GraphEdge):
            edges.append(obj)
        else:
            positions.append(obj)

    return nodes, edges, positions


def read_positions_dict(stream: TextIO = sys.stdin) -> LayoutResult:
    """Read positions as dict {id: (x, y)}."""
    _, _, positions = read_all(stream)
    return {pos.id: (pos.x, pos.y) for pos in positions}


def load_graph(stream: TextIO = sys.stdin) -> Dict[str, Any]:
    """
    Read a graph given either as one JSON document with 'nodes' and
    'edges' lists, or as a JSON Lines stream of node and edge objects.

    Returns:
        Graph dict accepted by every layout.
    """
    text = stream.read()
    try:
        document = json.loads(text)
    except json.JSONDecodeError:
        document = None

    if isinstance(document, dict) and ('nodes' in document or 'edges' in document):
        return {'nodes': document.get('nodes', []), 'edges': document.get('edges', [])}

    nodes, edges, _ = read_all(text.splitlines())
    return {'nodes': nodes, 'edges': edges}


# ============================================================================
# WRITERS
# ============================================================================

def write_jsonl(obj: Dict[str, Any], stream: TextIO = sys.stdout) -> None:
    """Write a JSON object as a single line."""
    print(json.dumps(obj, ensure_ascii=False), file=stream)


def write_object(obj: GraphObject, stream: TextIO = sys.stdout) -> None:
    """Write a node, edge or position as a JSON line."""
    write_jsonl(obj.to_dict(), stream)


def write_positions(positions: LayoutResult, stream: TextIO = sys.stdout) -> None:
    """Write positions dict as JSON Lines."""
    for node_id, (x, y) in positions.items():
        write_object(NodePosition(id=node_id, x=float(x), y=float(y)), stream)
