# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Uniform-cell spatial index for radius queries.

"""
Spatial hash grid for fast "who is near this point" queries.

Space is divided into square cells of a fixed size. Each point is stored
in the bucket of its cell, so a radius query only inspects the ring of
cells overlapping the query circle instead of every point.

The grid does not track moving points: call build() once per frame with
the current positions before querying.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple, Any, Iterable, Iterator, Optional

import numpy as np

CellKey = Tuple[int, int]


@dataclass
class SpatialPoint:
    """A point stored in the grid, with an optional payload."""
    id: str
    x: float
    y: float
    data: Optional[Any] = None


class SpatialHashGrid:
    """
    Uniform spatial hash over 2D points.

    Args:
        cell_size: Edge length of a cell. Pick it close to the typical
            query radius; much larger cells degrade toward a linear scan,
            much smaller ones visit many empty cells per query.
    """

    def __init__(self, cell_size: float = 150.0):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = float(cell_size)
        self._cells: Dict[CellKey, List[SpatialPoint]] = {}
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def cell_key(self, x: float, y: float) -> CellKey:
        """Cell coordinates containing (x, y)."""
        return (math.floor(x / self.cell_size), math.floor(y / self.cell_size))

    def clear(self) -> None:
        """Remove every point."""
        self._cells.clear()
        self._count = 0

    def insert(self, point: SpatialPoint) -> None:
        """Add a point to the bucket of its cell."""
        key = self.cell_key(point.x, point.y)
        bucket = self._cells.get(key)
        if bucket is None:
            bucket = self._cells[key] = []
        bucket.append(point)
        self._count += 1

    def build(self, points: Iterable[SpatialPoint]) -> None:
        """Replace the grid contents with the given points."""
        self.clear()
        for point in points:
            self.insert(point)

    def query(self, x: float, y: float, radius: float) -> List[SpatialPoint]:
        """
        Return all points within `radius` of (x, y), boundary included.

        Candidates come from every cell within ceil(radius / cell_size)
        of the center cell and are filtered by exact squared distance.
        """
        if not self._cells or radius < 0:
            return []

        cell_radius = math.ceil(radius / self.cell_size)
        cx, cy = self.cell_key(x, y)
        radius_sq = radius * radius
        nearby: List[SpatialPoint] = []

        for key in self._candidate_keys(cx, cy, cell_radius):
            for point in self._cells[key]:
                ddx = point.x - x
                ddy = point.y - y
                if ddx * ddx + ddy * ddy <= radius_sq:
                    nearby.append(point)

        return nearby

    def pairs_within(self, radius: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        Every ordered pair (i, j), i != j, of points within `radius`.

        Points must carry their integer row index in `data`. The same
        cells query() would visit are compared bucket against bucket with
        NumPy, so callers get index arrays instead of one list per point.

        Returns:
            (rows, cols) index arrays; each unordered pair appears twice.
        """
        empty = np.empty(0, dtype=np.intp)
        if not self._cells or radius < 0:
            return empty, empty

        cell_radius = math.ceil(radius / self.cell_size)
        radius_sq = radius * radius

        arrays = {}
        for key, bucket in self._cells.items():
            arrays[key] = (
                np.array([p.x for p in bucket], dtype=float),
                np.array([p.y for p in bucket], dtype=float),
                np.array([p.data for p in bucket], dtype=np.intp),
            )

        rows: List[np.ndarray] = []
        cols: List[np.ndarray] = []
        for (cx, cy), (xs, ys, index) in arrays.items():
            candidates = [arrays[key] for key in self._candidate_keys(cx, cy, cell_radius)]
            other_x = np.concatenate([c[0] for c in candidates])
            other_y = np.concatenate([c[1] for c in candidates])
            other_index = np.concatenate([c[2] for c in candidates])

            dx = xs[:, np.newaxis] - other_x[np.newaxis, :]
            dy = ys[:, np.newaxis] - other_y[np.newaxis, :]
            i, j = np.nonzero(dx * dx + dy * dy <= radius_sq)
            a = index[i]
            b = other_index[j]
            distinct = a != b
            rows.append(a[distinct])
            cols.append(b[distinct])

        return np.concatenate(rows), np.concatenate(cols)

    def _candidate_keys(self, cx: int, cy: int, cell_radius: int) -> Iterator[CellKey]:
        span = 2 * cell_radius + 1
        if span * span <= len(self._cells):
            for dx in range(-cell_radius, cell_radius + 1):
                for dy in range(-cell_radius, cell_radius + 1):
                    key = (cx + dx, cy + dy)
                    if key in self._cells:
                        yield key
        else:
            # Query ring larger than the occupied grid: walk occupied cells.
            for kx, ky in self._cells:
                if abs(kx - cx) <= cell_radius and abs(ky - cy) <= cell_radius:
                    yield (kx, ky)
