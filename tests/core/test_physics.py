# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""
Unit tests for physics/phased.py - four-phase force simulation.
"""

import math
import unittest
import sys
import os

# Add source paths
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../src'))

from raptorgraph.config import PhysicsParams
from raptorgraph.physics import (
    Phase,
    PHASE_PRESETS,
    NodeState,
    SimulationState,
    SimulationOptions,
    prepare_graph,
    initial_state,
    make_deviation_factors,
    pair_variation,
    phase_for,
    step,
    run,
    phased,
)
from raptorgraph.physics.phased import _repulsion_strength, _spring


FLAT = SimulationOptions(pair_variation=lambda a, b: 1.0)


def sample_graph():
    """A hub with leaves, a short chain and a dangling edge."""
    nodes = ['hub', 'l1', 'l2', 'l3', 'l4', 'a', 'b', 'c', 'lonely']
    edges = [
        ('hub', 'l1'), ('hub', 'l2'), ('hub', 'l3'), ('hub', 'l4'),
        ('hub', 'a'), ('a', 'b'), ('b', 'c'),
        ('c', 'ghost'),
    ]
    return {'nodes': nodes, 'edges': edges}


class TestPhases(unittest.TestCase):
    """Tests for phase selection."""

    def test_boundaries(self):
        """Phase windows are half-open quarters of progress."""
        self.assertEqual(phase_for(0, 100), Phase.EXPLOSION)
        self.assertEqual(phase_for(24, 100), Phase.EXPLOSION)
        self.assertEqual(phase_for(25, 100), Phase.RETRACTION)
        self.assertEqual(phase_for(50, 100), Phase.SPACING)
        self.assertEqual(phase_for(74, 100), Phase.SPACING)
        self.assertEqual(phase_for(75, 100), Phase.SNAP)
        self.assertEqual(phase_for(100, 100), Phase.SNAP)

    def test_past_end_and_zero_budget_are_snap(self):
        """Progress beyond 1 or no budget at all stays in SNAP."""
        self.assertEqual(phase_for(500, 100), Phase.SNAP)
        self.assertEqual(phase_for(0, 0), Phase.SNAP)

    def test_presets_strengthen_leaves(self):
        """Leaf springs and magnets never weaken from phase to phase."""
        phases = sorted(PHASE_PRESETS)
        for earlier, later in zip(phases, phases[1:]):
            self.assertLessEqual(PHASE_PRESETS[earlier].leaf_spring,
                                 PHASE_PRESETS[later].leaf_spring)
            self.assertLessEqual(PHASE_PRESETS[earlier].leaf_magnet,
                                 PHASE_PRESETS[later].leaf_magnet)
        self.assertFalse(PHASE_PRESETS[Phase.EXPLOSION].collide_all)
        self.assertTrue(PHASE_PRESETS[Phase.SNAP].collide_all)


class TestRandomness(unittest.TestCase):
    """Tests for deterministic variation sources."""

    def test_pair_variation_symmetric_and_bounded(self):
        """Pair variation ignores order and stays in [0.5, 1.5)."""
        for a, b in [('a', 'b'), ('hub', 'leaf'), ('x1', 'x2')]:
            v = pair_variation(a, b)
            self.assertEqual(v, pair_variation(b, a))
            self.assertGreaterEqual(v, 0.5)
            self.assertLess(v, 1.5)

    def test_deviation_factors_seeded(self):
        """Same seed gives the same factors, all within [-1, 1]."""
        ids = [f"n{i}" for i in range(20)]
        first = make_deviation_factors(ids, seed=5)
        second = make_deviation_factors(ids, seed=5)
        self.assertEqual(first, second)
        for value in first.values():
            self.assertGreaterEqual(value, -1.0)
            self.assertLessEqual(value, 1.0)


class TestForceRules(unittest.TestCase):
    """Tests for repulsion constants and spring classes."""

    def test_connected_leaf_keeps_fraction(self):
        """A leaf and its parent repel at 15% of the base strength."""
        graph = prepare_graph(sample_graph())
        self.assertAlmostEqual(
            _repulsion_strength('hub', 'l1', graph, PhysicsParams(), FLAT), 3750.0)

    def test_hub_pairs_boosted(self):
        """Two unconnected hubs repel harder with their average degree."""
        graph = prepare_graph({
            'nodes': ['h1', 'h2'] + [f"p{i}" for i in range(4)] + [f"q{i}" for i in range(6)],
            'edges': [('h1', f"p{i}") for i in range(4)] + [('h2', f"q{i}") for i in range(6)],
        })
        expected = 25000.0 * (1.0 + math.sqrt(2.0 / 3.0) * 0.5)
        self.assertAlmostEqual(
            _repulsion_strength('h1', 'h2', graph, PhysicsParams(), FLAT), expected)

    def test_strength_floor(self):
        graph = prepare_graph({'nodes': ['a', 'b'], 'edges': []})
        params = PhysicsParams(repulsion_strength=10.0)
        self.assertEqual(_repulsion_strength('a', 'b', graph, params, FLAT), 1000.0)

    def test_chaos_shifts_strength(self):
        """Full chaos with both factors at 1 adds the whole chaos range."""
        graph = prepare_graph({'nodes': ['a', 'b'], 'edges': []})
        params = PhysicsParams(node_chaos_factor=100.0)
        strength = _repulsion_strength('a', 'b', graph, params, FLAT,
                                       deviation={'a': 1.0, 'b': 1.0})
        self.assertAlmostEqual(strength, 55000.0)

    def test_siblings_can_be_silenced(self):
        """Nodes sharing a neighbor stop repelling when sibling_repulsion is 0."""
        graph = prepare_graph(sample_graph())
        self.assertAlmostEqual(
            _repulsion_strength('l1', 'l2', graph, PhysicsParams(), FLAT), 25000.0)
        params = PhysicsParams(sibling_repulsion=0.0)
        self.assertEqual(_repulsion_strength('l1', 'l2', graph, params, FLAT), 0.0)

    def test_leaf_parents_push_apart(self):
        """Parents of leaves repel by 1 + sqrt(leaf counts product) when enabled."""
        graph = prepare_graph({
            'nodes': ['h1', 'h2', 'x1', 'x2', 'y1', 'y2'],
            'edges': [('h1', 'x1'), ('h1', 'x2'), ('h2', 'y1'), ('h2', 'y2')],
        })
        self.assertAlmostEqual(
            _repulsion_strength('h1', 'h2', graph, PhysicsParams(), FLAT), 25000.0)
        params = PhysicsParams(leaf_magnet_repulsion=1.0)
        self.assertAlmostEqual(
            _repulsion_strength('h1', 'h2', graph, params, FLAT), 75000.0)

    def test_spring_classes(self):
        params = PhysicsParams()
        snap = PHASE_PRESETS[Phase.SNAP]
        self.assertEqual(_spring(1, 5, params, snap), (5.0, 20.0 * 0.8))
        self.assertEqual(_spring(4, 6, params, snap), (500.0, 0.05 * 0.1))
        self.assertEqual(_spring(2, 3, params, snap), (250.0, 0.1))


class TestCollisions(unittest.TestCase):
    """Tests for which pairs collide in which phase."""

    STILL = PhysicsParams(damping=0.0)

    def two_nodes(self, graph, iteration):
        state = SimulationState(
            positions={'a': NodeState(400.0, 300.0), 'b': NodeState(401.0, 300.0)},
            iteration=iteration,
            max_iterations=300,
        )
        after = step(state, graph, self.STILL, SimulationOptions(node_radius=10))
        a, b = after.positions['a'], after.positions['b']
        return math.hypot(a.x - b.x, a.y - b.y)

    def test_explosion_ignores_ordinary_pairs(self):
        graph = prepare_graph({'nodes': ['a', 'b'], 'edges': []})
        self.assertAlmostEqual(self.two_nodes(graph, 0), 1.0)

    def test_spacing_and_snap_separate_all_pairs(self):
        graph = prepare_graph({'nodes': ['a', 'b'], 'edges': []})
        for iteration in (150, 250):
            self.assertGreaterEqual(self.two_nodes(graph, iteration), 40.0 - 1e-6)

    def test_explosion_separates_hubs(self):
        """Hub pairs collide from the first frame on."""
        leaves = [f"{hub}{i}" for hub in ('p', 'q') for i in range(4)]
        graph = prepare_graph({
            'nodes': ['hp', 'hq'] + leaves,
            'edges': [('h' + leaf[0], leaf) for leaf in leaves],
        })
        positions = {leaf: NodeState(50.0 + 80 * i, 550.0) for i, leaf in enumerate(leaves)}
        positions['hp'] = NodeState(400.0, 300.0)
        positions['hq'] = NodeState(401.0, 300.0)
        state = SimulationState(positions=positions, iteration=0, max_iterations=300)

        after = step(state, graph, self.STILL, SimulationOptions(node_radius=10))

        hp, hq = after.positions['hp'], after.positions['hq']
        self.assertGreaterEqual(math.hypot(hp.x - hq.x, hp.y - hq.y), 40.0 - 1e-6)


class TestStep(unittest.TestCase):
    """Tests for single-frame stepping."""

    def setUp(self):
        self.graph = prepare_graph(sample_graph())
        self.options = SimulationOptions(width=800, height=600, node_radius=10)

    def test_prepare_ignores_dangling_edges(self):
        """Dangling endpoints are not nodes and add no degree."""
        self.assertNotIn('ghost', self.graph.ids)
        self.assertEqual(self.graph.degree['c'], 1)
        self.assertEqual(self.graph.degree['hub'], 5)
        self.assertTrue(self.graph.is_hub('hub'))
        self.assertTrue(self.graph.is_leaf('l1'))

    def test_step_does_not_mutate_input(self):
        """step() returns a new state and leaves the old one alone."""
        state = initial_state(self.graph.ids, 800, 600, max_iterations=50, seed=1)
        before = {nid: (s.x, s.y, s.vx, s.vy) for nid, s in state.positions.items()}

        after = step(state, self.graph, PhysicsParams(), self.options)

        self.assertEqual(state.iteration, 0)
        self.assertEqual(after.iteration, 1)
        self.assertEqual(
            {nid: (s.x, s.y, s.vx, s.vy) for nid, s in state.positions.items()},
            before)

    def test_missing_nodes_are_seeded(self):
        """Nodes absent from the state still get a position."""
        state = SimulationState(positions={}, iteration=0, max_iterations=10)
        after = step(state, self.graph, PhysicsParams(), self.options)
        self.assertEqual(set(after.positions), set(self.graph.ids))

    def test_pinned_node_holds_still(self):
        """A pinned node keeps its position and has zero velocity."""
        state = initial_state(self.graph.ids, 800, 600, max_iterations=40, seed=2)
        anchor = state.positions['hub']
        x, y = anchor.x, anchor.y
        options = SimulationOptions(width=800, height=600, pinned={'hub'})

        for _ in range(40):
            state = step(state, self.graph, PhysicsParams(), options)

        self.assertEqual((state.positions['hub'].x, state.positions['hub'].y), (x, y))
        self.assertEqual((state.positions['hub'].vx, state.positions['hub'].vy), (0.0, 0.0))

    def test_pinned_node_still_pushes(self):
        """A pinned node repels its neighbors without moving itself."""
        graph = prepare_graph({'nodes': ['a', 'b'], 'edges': []})
        state = SimulationState(
            positions={'a': NodeState(400.0, 300.0), 'b': NodeState(420.0, 300.0)},
            iteration=0,
            max_iterations=300,
        )
        after = step(state, graph, PhysicsParams(), SimulationOptions(pinned={'a'}))
        self.assertEqual((after.positions['a'].x, after.positions['a'].y), (400.0, 300.0))
        self.assertGreater(after.positions['b'].x, 420.0)

    def test_chaos_changes_stepped_frames(self):
        """Chaos reaches step() through seeded factors and stays reproducible."""
        graph = prepare_graph({'nodes': list('abcdef'),
                               'edges': [('a', 'b'), ('b', 'c'), ('c', 'd'),
                                         ('d', 'e'), ('e', 'f')]})
        start = initial_state(graph.ids, 800, 600, max_iterations=100, seed=11)

        def frames(chaos):
            state = start
            params = PhysicsParams(node_chaos_factor=chaos)
            for _ in range(20):
                state = step(state, graph, params, SimulationOptions())
            return state.layout()

        calm = frames(0.0)
        wild = frames(100.0)
        self.assertNotEqual(calm, wild)
        self.assertEqual(wild, frames(100.0))

    def test_pinned_accepts_single_id(self):
        """A bare string is treated as one pinned id."""
        options = SimulationOptions(pinned='hub')
        self.assertEqual(options.pinned, frozenset({'hub'}))

    def test_snap_phase_separates_overlapping_nodes(self):
        """In SNAP every pair is pushed to the minimum separation."""
        graph = prepare_graph({'nodes': ['a', 'b'], 'edges': []})
        state = SimulationState(
            positions={'a': NodeState(400.0, 300.0), 'b': NodeState(401.0, 300.0)},
            iteration=299,
            max_iterations=300,
        )
        after = step(state, graph, PhysicsParams(), SimulationOptions(node_radius=10))
        a, b = after.positions['a'], after.positions['b']
        self.assertGreaterEqual(math.hypot(a.x - b.x, a.y - b.y), 40.0 - 1e-6)

    def test_positions_stay_inside_canvas(self):
        """Every node is clamped to the canvas minus the node radius."""
        state = initial_state(self.graph.ids, 800, 600, max_iterations=30, seed=3)
        params = PhysicsParams(repulsion_strength=500000.0)
        for _ in range(30):
            state = step(state, self.graph, params, self.options)
        for s in state.positions.values():
            self.assertTrue(10 <= s.x <= 790)
            self.assertTrue(10 <= s.y <= 590)


class TestRun(unittest.TestCase):
    """Tests for batch runs and the layout wrapper."""

    def test_deterministic_without_chaos(self):
        """Two runs from the same start give identical positions."""
        params = PhysicsParams(node_chaos_factor=0)
        first = run(sample_graph(), params, SimulationOptions(), max_iterations=60, seed=9)
        second = run(sample_graph(), params, SimulationOptions(), max_iterations=60, seed=9)
        self.assertEqual(first.layout(), second.layout())

    def test_deterministic_with_fixed_variation_source(self):
        """A caller-supplied variation function keeps runs reproducible."""
        options = SimulationOptions(pair_variation=lambda a, b: 1.0)
        first = run(sample_graph(), PhysicsParams(), options, max_iterations=40)
        second = run(sample_graph(), PhysicsParams(), options, max_iterations=40)
        self.assertEqual(first.layout(), second.layout())

    def test_chaos_reproducible_with_seed(self):
        """Chaos draws from the seeded deviation factors only."""
        params = PhysicsParams(node_chaos_factor=60)
        first = run(sample_graph(), params, SimulationOptions(), max_iterations=40, seed=4)
        second = run(sample_graph(), params, SimulationOptions(), max_iterations=40, seed=4)
        self.assertEqual(first.layout(), second.layout())

    def test_run_finishes(self):
        """run() stops exactly at max_iterations."""
        final = run(sample_graph(), max_iterations=25)
        self.assertTrue(final.done)
        self.assertEqual(final.iteration, 25)
        self.assertEqual(final.phase, Phase.SNAP)

    def test_phased_total_and_finite(self):
        """Every input node gets a finite position."""
        result = phased(sample_graph(), {'iterations': 80})
        self.assertEqual(set(result), set(sample_graph()['nodes']))
        for x, y in result.values():
            self.assertTrue(math.isfinite(x) and math.isfinite(y))

    def test_phased_accepts_physics_dict(self):
        """Physics overrides may be a plain dict with camelCase keys."""
        result = phased(sample_graph(), {'iterations': 20,
                                         'physics': {'repulsionStrength': 10000}})
        self.assertEqual(len(result), len(sample_graph()['nodes']))

    def test_phased_empty_and_single(self):
        """Empty graph is empty; a lone node sits at the center."""
        self.assertEqual(phased({'nodes': [], 'edges': []}), {})
        self.assertEqual(phased({'nodes': ['x'], 'edges': []}, {'width': 1000, 'height': 500}),
                         {'x': (500.0, 250.0)})


if __name__ == '__main__':
    unittest.main()
