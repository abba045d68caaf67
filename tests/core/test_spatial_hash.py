# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""
Unit tests for spatial_hash.py - uniform grid radius queries.
"""

import unittest
import random
import sys
import os

# Add source paths
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../../src'))

from raptorgraph.spatial_hash import SpatialHashGrid, SpatialPoint


def brute_force(points, x, y, radius):
    return {p.id for p in points
            if (p.x - x) ** 2 + (p.y - y) ** 2 <= radius * radius}


class TestSpatialHashGrid(unittest.TestCase):
    """Tests for grid construction and queries."""

    def test_empty_grid_returns_nothing(self):
        """Query on an empty grid is an empty list."""
        grid = SpatialHashGrid(100)
        self.assertEqual(grid.query(0, 0, 1000), [])
        self.assertEqual(len(grid), 0)

    def test_non_positive_cell_size_rejected(self):
        """Zero or negative cell size is a construction error."""
        with self.assertRaises(ValueError):
            SpatialHashGrid(0)
        with self.assertRaises(ValueError):
            SpatialHashGrid(-5)

    def test_boundary_distance_included(self):
        """A point exactly at the radius is returned."""
        grid = SpatialHashGrid(2)
        grid.build([SpatialPoint('a', 3.0, 4.0)])
        self.assertEqual([p.id for p in grid.query(0, 0, 5)], ['a'])

    def test_build_replaces_contents(self):
        """build() clears earlier points."""
        grid = SpatialHashGrid(10)
        grid.build([SpatialPoint('a', 0, 0), SpatialPoint('b', 5, 5)])
        grid.build([SpatialPoint('c', 1, 1)])
        self.assertEqual(len(grid), 1)
        self.assertEqual([p.id for p in grid.query(0, 0, 100)], ['c'])

    def test_cell_key_uses_floor(self):
        """Negative coordinates fall in negative cells, never double-counted."""
        grid = SpatialHashGrid(10)
        self.assertEqual(grid.cell_key(-0.5, 0), (-1, 0))
        self.assertEqual(grid.cell_key(10, 19.99), (1, 1))
        grid.build([SpatialPoint('edge', 10.0, 10.0)])
        self.assertEqual(len(grid.query(10, 10, 0)), 1)

    def test_payload_is_kept(self):
        """SpatialPoint.data comes back with the query result."""
        grid = SpatialHashGrid(50)
        grid.insert(SpatialPoint('a', 1, 1, data={'degree': 3}))
        self.assertEqual(grid.query(0, 0, 5)[0].data, {'degree': 3})

    def test_matches_brute_force(self):
        """Randomized queries agree with a linear scan."""
        rng = random.Random(1234)
        points = [SpatialPoint(f"n{i}", rng.uniform(-500, 1500), rng.uniform(-500, 1500))
                  for i in range(400)]

        for cell_size in (25.0, 150.0, 500.0):
            grid = SpatialHashGrid(cell_size)
            grid.build(points)
            for _ in range(120):
                x = rng.uniform(-600, 1600)
                y = rng.uniform(-600, 1600)
                radius = rng.uniform(0, 400)
                found = [p.id for p in grid.query(x, y, radius)]
                self.assertEqual(len(found), len(set(found)))
                self.assertEqual(set(found), brute_force(points, x, y, radius))

    def test_pairs_within_matches_brute_force(self):
        """Bulk pair search finds every ordered pair inside the radius."""
        rng = random.Random(99)
        points = [SpatialPoint(f"n{i}", rng.uniform(0, 1000), rng.uniform(0, 800), data=i)
                  for i in range(150)]

        for cell_size, radius in ((50.0, 120.0), (500.0, 2000.0), (100.0, 0.0)):
            grid = SpatialHashGrid(cell_size)
            grid.build(points)
            rows, cols = grid.pairs_within(radius)
            found = list(zip(rows.tolist(), cols.tolist()))
            self.assertEqual(len(found), len(set(found)))

            expected = {(a.data, b.data) for a in points for b in points
                        if a is not b
                        and (a.x - b.x) ** 2 + (a.y - b.y) ** 2 <= radius * radius}
            self.assertEqual(set(found), expected)

    def test_pairs_within_empty_grid(self):
        rows, cols = SpatialHashGrid(10).pairs_within(50)
        self.assertEqual((rows.size, cols.size), (0, 0))

    def test_huge_radius_returns_everything(self):
        """A radius covering the whole grid finds every point."""
        rng = random.Random(7)
        points = [SpatialPoint(str(i), rng.uniform(0, 100), rng.uniform(0, 100))
                  for i in range(50)]
        grid = SpatialHashGrid(1)
        grid.build(points)
        self.assertEqual(len(grid.query(50, 50, 10_000)), 50)


if __name__ == '__main__':
    unittest.main()
