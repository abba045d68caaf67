# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Four-phase force simulation stepped once per animation frame.

"""
Phased force-directed simulation ("phased annealing").

One call to step() computes one frame. The caller owns the state between
frames and decides when to stop; the engine keeps no timers or globals.

The run is split into four equal windows of normalized progress
t = iteration / max_iterations:

    EXPLOSION   [0.00, 0.25)  weak leaf springs, graph spreads out
    RETRACTION  [0.25, 0.50)  leaves pulled back toward parents
    SPACING     [0.50, 0.75)  collisions enforced between all nodes
    SNAP        [0.75, 1.00]  very strong leaf springs and magnets

Every phase uses the same force formulas; only scalar multipliers change,
so trajectories stay continuous across phase boundaries.

Forces per node:
    1. Hooke springs along edges (leaf, hub-to-hub and ordinary classes)
    2. Coulomb-like repulsion F = k / d from nodes inside repulsion_radius,
       found through a SpatialHashGrid rebuilt every frame. The constant k
       of each pair is fixed for a run and cached on the PreparedGraph
    3. Leaf magnet pulling a degree-1 node toward its only neighbor
    4. Cluster gravity toward the highest-degree neighbor
    5. Center gravity toward the canvas center

Integration: v = (v + F) * damping, speed capped by an annealing
temperature, p = p + v, clamped inside the canvas, then hard collisions.
Forces and integration run on NumPy arrays, one row per node.

Usage:
    from raptorgraph.physics import initial_state, prepare_graph, step

    graph = prepare_graph({'nodes': nodes, 'edges': edges})
    state = initial_state(graph.ids, 800, 600, max_iterations=300, seed=7)
    while not state.done:
        state = step(state, graph, params, options)
        render(state.positions)
"""

import math
import random
import hashlib
import logging
from enum import IntEnum
from functools import lru_cache
from dataclasses import dataclass, field, replace
from typing import Dict, Tuple, Optional, Any, Callable, FrozenSet, Iterable

import numpy as np

from ..config import PhysicsParams, DEFAULT_PHYSICS_PARAMS
from ..graph import LayoutResult, unpack_graph, build_adjacency, centered
from ..spatial_hash import SpatialHashGrid, SpatialPoint

logger = logging.getLogger(__name__)

HUB_DEGREE = 3                 # degree above which a node counts as a hub
HUB_IDEAL_LENGTH = 500.0
EDGE_IDEAL_LENGTH = 250.0
CLUSTER_GRAVITY = 0.05
LEAF_REPULSION_FACTOR = 0.15   # connected leaf/parent pairs keep 15%
MIN_REPULSION = 1000.0
MAX_CHAOS_REPULSION = 30000.0
COLLISION_FACTOR = 4.0         # min separation in node radii
CRITICAL_DISTANCE = 300.0      # leaf-magnet repulsion grows inside this range
PROXIMITY_BOOST = 2.0


# ============================================================================
# PHASES
# ============================================================================

class Phase(IntEnum):
    EXPLOSION = 1
    RETRACTION = 2
    SPACING = 3
    SNAP = 4


@dataclass(frozen=True)
class PhasePreset:
    """Scalar multipliers for one phase."""
    leaf_ideal_length: float
    leaf_spring: float
    leaf_magnet: float
    collide_all: bool


PHASE_PRESETS: Dict[Phase, PhasePreset] = {
    Phase.EXPLOSION: PhasePreset(30.0, 2.0, 1.0, False),
    Phase.RETRACTION: PhasePreset(40.0, 2.0, 1.5, False),
    Phase.SPACING: PhasePreset(20.0, 8.0, 5.0, True),
    Phase.SNAP: PhasePreset(5.0, 20.0, 10.0, True),
}


def progress_of(iteration: int, max_iterations: int) -> float:
    """Normalized progress in [0, 1]."""
    if max_iterations <= 0:
        return 1.0
    return min(1.0, max(0.0, iteration / max_iterations))


def phase_for(iteration: int, max_iterations: int) -> Phase:
    """Select the phase purely from normalized progress."""
    t = progress_of(iteration, max_iterations)
    if t < 0.25:
        return Phase.EXPLOSION
    if t < 0.5:
        return Phase.RETRACTION
    if t < 0.75:
        return Phase.SPACING
    return Phase.SNAP


# ============================================================================
# STATE
# ============================================================================

@dataclass
class NodeState:
    """Position and velocity of one node."""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0

    def copy(self) -> 'NodeState':
        return NodeState(self.x, self.y, self.vx, self.vy)


@dataclass
class SimulationState:
    """Everything that must survive between frames."""
    positions: Dict[str, NodeState] = field(default_factory=dict)
    iteration: int = 0
    max_iterations: int = 300

    @property
    def progress(self) -> float:
        return progress_of(self.iteration, self.max_iterations)

    @property
    def phase(self) -> Phase:
        return phase_for(self.iteration, self.max_iterations)

    @property
    def done(self) -> bool:
        """True once iteration has reached max_iterations."""
        return self.iteration >= self.max_iterations

    def layout(self) -> LayoutResult:
        """Positions without velocities."""
        return {nid: (s.x, s.y) for nid, s in self.positions.items()}


@dataclass(frozen=True, eq=False)
class PreparedGraph:
    """
    Adjacency, degrees and index arrays, built once per simulation run.

    Row i of every array belongs to ids[i]. `cache` keeps per-pair
    repulsion strengths, spring tables and seeded chaos factors, so frames
    stepped on the same PreparedGraph do not rebuild them.
    """
    ids: Tuple[str, ...]
    neighbors: Dict[str, Tuple[str, ...]]
    degree: Dict[str, int]
    leaf_count: Dict[str, int]      # neighbors of degree 1
    edges: np.ndarray               # (m, 2) unique undirected row pairs
    leaf_parent: np.ndarray         # row of a leaf's only neighbor, else -1
    cluster_target: np.ndarray      # row of the highest-degree neighbor, else -1
    cache: Dict[Any, Any] = field(default_factory=dict, repr=False)

    def is_leaf(self, nid: str) -> bool:
        return self.degree[nid] == 1

    def is_hub(self, nid: str) -> bool:
        return self.degree[nid] > HUB_DEGREE


def prepare_graph(graph: Dict[str, Any]) -> PreparedGraph:
    """Normalize a graph dict into the structure step() iterates over."""
    ids, edges = unpack_graph(graph)
    adjacency = build_adjacency(ids, edges)
    neighbors = {nid: tuple(sorted(adj)) for nid, adj in adjacency.items()}
    degree = {nid: len(adj) for nid, adj in neighbors.items()}
    index = {nid: i for i, nid in enumerate(ids)}

    pairs = sorted({tuple(sorted((index[src], index[tgt]))) for src, tgt in edges})
    edge_rows = np.array(pairs, dtype=np.intp).reshape(-1, 2)

    leaf_parent = np.full(len(ids), -1, dtype=np.intp)
    cluster_target = np.full(len(ids), -1, dtype=np.intp)
    for i, nid in enumerate(ids):
        adj = neighbors[nid]
        if not adj:
            continue
        if degree[nid] == 1:
            leaf_parent[i] = index[adj[0]]
        hub = adj[0]
        for other in adj[1:]:
            if degree[other] > degree[hub]:
                hub = other
        cluster_target[i] = index[hub]

    leaf_count = {nid: sum(1 for other in neighbors[nid] if degree[other] == 1)
                  for nid in ids}

    return PreparedGraph(
        ids=tuple(ids),
        neighbors=neighbors,
        degree=degree,
        leaf_count=leaf_count,
        edges=edge_rows,
        leaf_parent=leaf_parent,
        cluster_target=cluster_target,
    )


# ============================================================================
# DETERMINISTIC RANDOMNESS
# ============================================================================

def _stable_hash(text: str) -> int:
    return int.from_bytes(hashlib.md5(text.encode('utf-8')).digest()[:4], 'big')


@lru_cache(maxsize=65536)
def pair_variation(a: str, b: str) -> float:
    """
    Repulsion variation in [0.5, 1.5) for an unordered node pair.

    Derived from a hash of the ids, so it is stable across frames and runs.
    """
    first, second = (a, b) if a <= b else (b, a)
    return 0.5 + (_stable_hash(f"{first}\x00{second}") % 100) / 100.0


def make_deviation_factors(ids: Iterable[str], seed: Optional[int] = 0) -> Dict[str, float]:
    """Per-node random factors in [-1, 1] feeding the chaos term."""
    rng = random.Random(seed)
    return {nid: rng.uniform(-1.0, 1.0) for nid in ids}


def _seed_position(nid: str, width: float, height: float) -> NodeState:
    h = _stable_hash(nid)
    angle = (h % 3600) / 3600.0 * 2 * math.pi
    radius = 10.0 + (h // 3600) % 40
    return NodeState(width / 2 + radius * math.cos(angle),
                     height / 2 + radius * math.sin(angle))


def initial_state(
    ids: Iterable[str],
    width: float = 800.0,
    height: float = 600.0,
    max_iterations: int = 300,
    seed: Optional[int] = 0
) -> SimulationState:
    """
    Scatter nodes in a disc around the canvas center, at rest.

    The disc is a quarter of the shorter canvas side so the explosion
    phase has room to spread the graph out.
    """
    rng = random.Random(seed)
    radius = min(width, height) / 4
    positions = {}
    for nid in ids:
        angle = rng.uniform(0.0, 2 * math.pi)
        r = radius * math.sqrt(rng.random())
        positions[nid] = NodeState(width / 2 + r * math.cos(angle),
                                   height / 2 + r * math.sin(angle))
    return SimulationState(positions=positions, iteration=0, max_iterations=max_iterations)


# ============================================================================
# OPTIONS
# ============================================================================

@dataclass
class SimulationOptions:
    """
    Per-run settings that are not physics knobs.

    When node_chaos_factor is non-zero and deviation_factors is empty,
    step() draws the factors from `seed` once per PreparedGraph and reuses
    them on every later frame.
    """
    width: float = 800.0
    height: float = 600.0
    node_radius: float = 10.0
    pinned: FrozenSet[str] = frozenset()
    deviation_factors: Dict[str, float] = field(default_factory=dict)
    pair_variation: Callable[[str, str], float] = pair_variation
    seed: Optional[int] = 0
    cell_size: float = 500.0
    anneal: bool = True

    def __post_init__(self):
        if isinstance(self.pinned, str):
            self.pinned = frozenset([self.pinned])
        else:
            self.pinned = frozenset(self.pinned or ())


# ============================================================================
# FORCES
# ============================================================================

def _spring(
    degree: int,
    other_degree: int,
    params: PhysicsParams,
    preset: PhasePreset
) -> Tuple[float, float]:
    """(ideal_length, strength) for an edge between nodes of given degrees."""
    if degree == 1 or other_degree == 1:
        return preset.leaf_ideal_length, preset.leaf_spring * params.leaf_spring_strength
    if degree > HUB_DEGREE and other_degree > HUB_DEGREE:
        return HUB_IDEAL_LENGTH, params.hub_edge_strength * params.attraction_strength
    return EDGE_IDEAL_LENGTH, params.attraction_strength


def _magnetic_pair(nid: str, other: str, graph: PreparedGraph, params: PhysicsParams) -> bool:
    """True when both nodes are non-leaf parents of leaves and the push is on."""
    return (params.leaf_magnet_repulsion > 0
            and not graph.is_leaf(nid) and not graph.is_leaf(other)
            and graph.leaf_count[nid] > 0 and graph.leaf_count[other] > 0)


def _repulsion_strength(
    nid: str,
    other: str,
    graph: PreparedGraph,
    params: PhysicsParams,
    options: SimulationOptions,
    deviation: Optional[Dict[str, float]] = None
) -> float:
    """
    Distance-independent constant k of the k / distance repulsion.

    Magnetic pairs get a further boost inside CRITICAL_DISTANCE, which
    depends on the frame's positions and is applied in _forces().
    """
    strength = params.repulsion_strength * options.pair_variation(nid, other)

    if params.node_chaos_factor:
        factors = options.deviation_factors if deviation is None else deviation
        average = (factors.get(nid, 0.0) + factors.get(other, 0.0)) / 2
        strength += average * (params.node_chaos_factor / 100) * MAX_CHAOS_REPULSION
    strength = max(MIN_REPULSION, strength)

    if other in graph.neighbors[nid]:
        if graph.is_leaf(nid):
            strength *= LEAF_REPULSION_FACTOR
        if graph.is_leaf(other):
            strength *= LEAF_REPULSION_FACTOR

    if graph.is_hub(nid) and graph.is_hub(other) and params.hub_repulsion_boost > 0:
        average_degree = (graph.degree[nid] + graph.degree[other]) / 2
        strength *= 1.0 + math.sqrt(max(0.0, average_degree - HUB_DEGREE) / HUB_DEGREE) \
            * params.hub_repulsion_boost

    if _magnetic_pair(nid, other, graph, params):
        strength *= 1.0 + math.sqrt(graph.leaf_count[nid] * graph.leaf_count[other]) \
            * params.leaf_magnet_repulsion

    if params.sibling_repulsion != 1.0 \
            and not set(graph.neighbors[nid]).isdisjoint(graph.neighbors[other]):
        strength *= params.sibling_repulsion

    return strength


def _deviation_factors(
    graph: PreparedGraph,
    params: PhysicsParams,
    options: SimulationOptions
) -> Dict[str, float]:
    """The caller's chaos factors, or ones seeded once per graph."""
    if not params.node_chaos_factor:
        return {}
    if options.deviation_factors:
        return options.deviation_factors
    key = ('deviation', options.seed)
    factors = graph.cache.get(key)
    if factors is None:
        factors = graph.cache[key] = make_deviation_factors(graph.ids, options.seed)
    return factors


def _repulsion_tables(
    graph: PreparedGraph,
    params: PhysicsParams,
    options: SimulationOptions
) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """Symmetric (n, n) strength matrix and magnetic-pair mask, cached on the graph."""
    deviation = _deviation_factors(graph, params, options)
    key = (params, options.pair_variation, tuple(sorted(deviation.items())))
    cached = graph.cache.get('repulsion')
    if cached is not None and cached[0] == key:
        return cached[1], cached[2]

    ids = graph.ids
    n = len(ids)
    strength = np.zeros((n, n))
    magnetic = np.zeros((n, n), dtype=bool) if params.leaf_magnet_repulsion > 0 else None
    for i in range(n):
        for j in range(i + 1, n):
            strength[i, j] = strength[j, i] = _repulsion_strength(
                ids[i], ids[j], graph, params, options, deviation)
            if magnetic is not None and _magnetic_pair(ids[i], ids[j], graph, params):
                magnetic[i, j] = magnetic[j, i] = True

    logger.debug(f"Built repulsion table for {n} nodes")
    graph.cache['repulsion'] = (key, strength, magnetic)
    return strength, magnetic


def _spring_table(
    graph: PreparedGraph,
    params: PhysicsParams,
    preset: PhasePreset
) -> np.ndarray:
    """(m, 2) ideal lengths and strengths for graph.edges, cached per phase."""
    key = ('springs', params, preset)
    table = graph.cache.get(key)
    if table is None:
        degrees = [graph.degree[nid] for nid in graph.ids]
        table = np.array([_spring(degrees[i], degrees[j], params, preset)
                          for i, j in graph.edges.tolist()], dtype=float).reshape(-1, 2)
        graph.cache[key] = table
    return table


def _forces(
    positions: np.ndarray,
    graph: PreparedGraph,
    grid: SpatialHashGrid,
    params: PhysicsParams,
    options: SimulationOptions,
    preset: PhasePreset
) -> np.ndarray:
    """Net force on every node as an (n, 2) array, rows in graph.ids order."""
    forces = np.zeros_like(positions)

    # 1. Springs
    if len(graph.edges):
        a = graph.edges[:, 0]
        b = graph.edges[:, 1]
        table = _spring_table(graph, params, preset)
        delta = positions[b] - positions[a]
        dist = np.hypot(delta[:, 0], delta[:, 1])
        stretched = dist > 0
        scale = np.zeros_like(dist)
        scale[stretched] = (dist[stretched] - table[stretched, 0]) \
            * table[stretched, 1] / dist[stretched]
        pull = delta * scale[:, np.newaxis]
        np.add.at(forces, a, pull)
        np.subtract.at(forces, b, pull)

    # 2. Repulsion from nodes inside the query radius only
    strength, magnetic = _repulsion_tables(graph, params, options)
    rows, cols = grid.pairs_within(params.repulsion_radius)
    if rows.size:
        delta = positions[rows] - positions[cols]
        dist = np.hypot(delta[:, 0], delta[:, 1])
        apart = dist > 0
        rows, cols, delta, dist = rows[apart], cols[apart], delta[apart], dist[apart]
        k = strength[rows, cols]
        if magnetic is not None:
            close = magnetic[rows, cols] & (dist < CRITICAL_DISTANCE)
            k = np.where(close,
                         k * (1.0 + (CRITICAL_DISTANCE - dist) / CRITICAL_DISTANCE * PROXIMITY_BOOST),
                         k)
        np.add.at(forces, rows, delta * (k / (dist * dist))[:, np.newaxis])

    # 3. Leaf magnet: magnet * dist along the unit vector is magnet * delta
    leaves = np.nonzero(graph.leaf_parent >= 0)[0]
    if leaves.size:
        forces[leaves] += (positions[graph.leaf_parent[leaves]] - positions[leaves]) \
            * preset.leaf_magnet

    # 4. Cluster gravity toward the highest-degree neighbor
    members = np.nonzero(graph.cluster_target >= 0)[0]
    if members.size:
        forces[members] += (positions[graph.cluster_target[members]] - positions[members]) \
            * CLUSTER_GRAVITY

    # 5. Center gravity
    if params.center_gravity > 0:
        center = np.array([options.width / 2, options.height / 2])
        forces += (center - positions) * params.center_gravity

    return forces


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _resolve_collisions(
    positions: Dict[str, NodeState],
    graph: PreparedGraph,
    options: SimulationOptions,
    collide_all: bool
) -> int:
    """Push apart pairs closer than the minimum separation. Returns push count."""
    min_distance = options.node_radius * COLLISION_FACTOR
    if min_distance <= 0:
        return 0

    order = {nid: i for i, nid in enumerate(graph.ids)}
    grid = SpatialHashGrid(min_distance)
    grid.build(SpatialPoint(nid, s.x, s.y) for nid, s in positions.items())
    pinned = options.pinned
    pushes = 0

    for nid in graph.ids:
        if not collide_all and not graph.is_hub(nid):
            continue
        p1 = positions[nid]
        # Stored points go stale as pairs are pushed; widen the net.
        for point in grid.query(p1.x, p1.y, min_distance * 2):
            other = point.id
            if order[other] <= order[nid]:
                continue
            if not collide_all and not graph.is_hub(other):
                continue
            p2 = positions[other]
            dx = p2.x - p1.x
            dy = p2.y - p1.y
            dist = math.hypot(dx, dy)
            if 0 < dist < min_distance:
                push = (min_distance - dist) / 2
                nx = dx / dist
                ny = dy / dist
                if nid not in pinned:
                    p1.x -= nx * push
                    p1.y -= ny * push
                if other not in pinned:
                    p2.x += nx * push
                    p2.y += ny * push
                pushes += 1

    return pushes


# ============================================================================
# FRAME STEP
# ============================================================================

def step(
    state: SimulationState,
    graph: Any,
    params: Optional[PhysicsParams] = None,
    options: Optional[SimulationOptions] = None
) -> SimulationState:
    """
    Compute one frame and return the next state.

    Args:
        state: Positions/velocities from the previous frame. Not mutated.
        graph: PreparedGraph, or a graph dict with 'nodes' and 'edges'.
            Pass the same PreparedGraph every frame so its cached
            repulsion table and chaos factors are reused.
        params: Physics knobs (default: DEFAULT_PHYSICS_PARAMS).
        options: Canvas size, node radius, pinned ids, randomness sources.

    Returns:
        New SimulationState with iteration advanced by one. Every graph
        node is present; nodes missing from `state` are seeded near the
        canvas center.
    """
    params = params or DEFAULT_PHYSICS_PARAMS
    options = options or SimulationOptions()
    if not isinstance(graph, PreparedGraph):
        graph = prepare_graph(graph)

    next_iteration = state.iteration + 1
    ids = graph.ids
    if not ids:
        return SimulationState({}, next_iteration, state.max_iterations)

    prev: Dict[str, NodeState] = {}
    for nid in ids:
        current = state.positions.get(nid)
        prev[nid] = current.copy() if current is not None \
            else _seed_position(nid, options.width, options.height)

    phase = phase_for(state.iteration, state.max_iterations)
    preset = PHASE_PRESETS[phase]

    grid = SpatialHashGrid(options.cell_size)
    grid.build(SpatialPoint(nid, prev[nid].x, prev[nid].y, data=i) for i, nid in enumerate(ids))

    positions = np.array([(prev[nid].x, prev[nid].y) for nid in ids], dtype=float)
    velocities = np.array([(prev[nid].vx, prev[nid].vy) for nid in ids], dtype=float)

    forces = _forces(positions, graph, grid, params, options, preset)
    velocities = (velocities + forces) * params.damping

    if options.anneal:
        optimal = math.sqrt(options.width * options.height / len(ids))
        temperature = optimal * (1.0 - progress_of(state.iteration, state.max_iterations)) ** 2
        speed = np.hypot(velocities[:, 0], velocities[:, 1])
        fast = speed > temperature
        velocities[fast] *= (temperature / speed[fast])[:, np.newaxis]

    margin = options.node_radius
    low = np.array([margin, margin])
    high = np.array([options.width - margin, options.height - margin])
    moved = np.maximum(low, np.minimum(high, positions + velocities))

    updated: Dict[str, NodeState] = {}
    for i, nid in enumerate(ids):
        if nid in options.pinned:
            updated[nid] = NodeState(prev[nid].x, prev[nid].y, 0.0, 0.0)
        else:
            updated[nid] = NodeState(float(moved[i, 0]), float(moved[i, 1]),
                                     float(velocities[i, 0]), float(velocities[i, 1]))

    _resolve_collisions(updated, graph, options, preset.collide_all)
    for nid, s in updated.items():
        if nid not in options.pinned:
            s.x = _clamp(s.x, margin, options.width - margin)
            s.y = _clamp(s.y, margin, options.height - margin)

    return SimulationState(updated, next_iteration, state.max_iterations)


# ============================================================================
# BATCH HELPERS
# ============================================================================

def run(
    graph: Dict[str, Any],
    params: Optional[PhysicsParams] = None,
    options: Optional[SimulationOptions] = None,
    max_iterations: int = 300,
    seed: Optional[int] = 0,
    state: Optional[SimulationState] = None
) -> SimulationState:
    """
    Step a simulation to completion without a render loop.

    Useful for precomputing layouts and for tests. Interactive callers
    should drive step() themselves so they can stop at any frame.
    `seed` drives both the initial scatter and the chaos factors, and
    replaces options.seed.
    """
    options = replace(options or SimulationOptions(), seed=seed)
    prepared = graph if isinstance(graph, PreparedGraph) else prepare_graph(graph)

    if state is None:
        state = initial_state(prepared.ids, options.width, options.height,
                              max_iterations=max_iterations, seed=seed)

    logger.debug(f"Phased simulation: {len(prepared.ids)} nodes, "
                 f"{state.max_iterations - state.iteration} frames")

    phase = None
    while not state.done:
        if state.phase != phase:
            phase = state.phase
            logger.debug(f"Entering phase {phase.name} at frame {state.iteration}")
        state = step(state, prepared, params, options)

    return state


def phased(
    graph: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """
    Compute a full phased-simulation layout for a graph.

    Args:
        graph: Dictionary with 'nodes' and 'edges' keys.
        options: Optional parameters:
            - width: Canvas width (default: 800)
            - height: Canvas height (default: 600)
            - iterations: Number of frames (default: 300)
            - node_radius: Node radius for margins/collisions (default: 10)
            - seed: Seed for initial positions and chaos (default: 0)
            - physics: PhysicsParams or dict of knob overrides

    Returns:
        Dictionary mapping node IDs to (x, y) positions.
    """
    options = options or {}
    physics = options.get('physics')
    if physics is None:
        params = DEFAULT_PHYSICS_PARAMS
    elif isinstance(physics, PhysicsParams):
        params = physics
    else:
        params = PhysicsParams.from_dict(physics)

    sim_options = SimulationOptions(
        width=options.get('width', 800),
        height=options.get('height', 600),
        node_radius=options.get('node_radius', 10.0),
    )
    ids, _ = unpack_graph(graph)
    if not ids:
        return {}
    if len(ids) == 1:
        return centered(ids, sim_options.width, sim_options.height)

    final = run(graph, params, sim_options,
                max_iterations=options.get('iterations', 300),
                seed=options.get('seed', 0))
    return final.layout()


# Convenience function matching the one-shot layout interface
def compute(nodes, edges, **options):
    """Compute layout from node and edge lists."""
    graph = {'nodes': nodes, 'edges': edges}
    return phased(graph, options)
