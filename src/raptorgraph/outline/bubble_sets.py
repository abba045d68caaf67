# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Bubble set outlines around groups of points.

"""
Smooth, organic outlines around a group of points.

One point gets a circle and two points get a pill. For three or more,
each point radiates a Gaussian-like influence over a coarse grid and the
0.5 iso-line of the summed field is traced with marching squares. The
largest traced loop is used when it encloses every point; otherwise the
group is too spread out for one blob and the outline falls back to the
convex hull pushed outward by the radius. Either way the result is
rounded off with a few rounds of Chaikin corner cutting.

The returned polygon is ordered but may self-intersect.

Usage:
    from raptorgraph.outline import bubble_set

    outline = bubble_set([(100, 100), (160, 120), (130, 180)], radius=60)
"""

import math
import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .hull import (
    Point, gift_wrap, expand_hull, subdivide, chaikin, polygon_area, point_in_polygon,
)

logger = logging.getLogger(__name__)

GRID_SIZE = 20.0
THRESHOLD = 0.5
CIRCLE_SEGMENTS = 32
SMOOTHING_ITERATIONS = 3

# Crossing edges of a marching-squares cell
TOP, RIGHT, BOTTOM, LEFT = range(4)

# Case index is tl*8 + tr*4 + br*2 + bl. Saddles (5, 10) are resolved
# separately from the cell center value.
_SEGMENTS = {
    1: [(LEFT, BOTTOM)],
    2: [(BOTTOM, RIGHT)],
    3: [(LEFT, RIGHT)],
    4: [(TOP, RIGHT)],
    6: [(TOP, BOTTOM)],
    7: [(LEFT, TOP)],
    8: [(LEFT, TOP)],
    9: [(TOP, BOTTOM)],
    11: [(TOP, RIGHT)],
    12: [(LEFT, RIGHT)],
    13: [(BOTTOM, RIGHT)],
    14: [(LEFT, BOTTOM)],
}

_CUT_TL_BR = [(LEFT, TOP), (BOTTOM, RIGHT)]
_CUT_TR_BL = [(TOP, RIGHT), (LEFT, BOTTOM)]

EdgeKey = Tuple[str, int, int]


def circle(center: Point, radius: float, segments: int = CIRCLE_SEGMENTS) -> List[Point]:
    """Regular polygon approximating a circle."""
    cx, cy = center
    return [(cx + math.cos(2 * math.pi * i / segments) * radius,
             cy + math.sin(2 * math.pi * i / segments) * radius)
            for i in range(segments)]


def pill(p1: Point, p2: Point, radius: float, segments: int = CIRCLE_SEGMENTS) -> List[Point]:
    """
    Stadium around the segment p1-p2: two semicircles of
    segments / 2 + 1 points each, joined by straight sides.
    """
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    dist = math.hypot(dx, dy)
    if dist < 0.01:
        return circle(p1, radius, segments)

    ux, uy = dx / dist, dy / dist   # along the segment
    px, py = -uy, ux                # perpendicular
    half = segments // 2

    outline: List[Point] = []
    for center, start in ((p1, 0.0), (p2, math.pi)):
        for i in range(half + 1):
            angle = start + math.pi * i / half
            ox = math.cos(angle) * px - math.sin(angle) * ux
            oy = math.cos(angle) * py - math.sin(angle) * uy
            outline.append((center[0] + ox * radius, center[1] + oy * radius))
    return outline


def influence_field(
    points: Sequence[Point],
    radius: float,
    smoothness: float,
    grid_size: float = GRID_SIZE
) -> Tuple[np.ndarray, float, float]:
    """
    Sample summed point influence on a grid over the padded bounding box.

    Returns:
        (field, origin_x, origin_y) where field[row, col] is the value at
        (origin_x + col * grid_size, origin_y + row * grid_size).
    """
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    min_x = min(xs) - 2 * radius
    min_y = min(ys) - 2 * radius
    cols = math.ceil((max(xs) + 2 * radius - min_x) / grid_size) + 1
    rows = math.ceil((max(ys) + 2 * radius - min_y) / grid_size) + 1

    gx = min_x + np.arange(cols) * grid_size
    gy = min_y + np.arange(rows) * grid_size
    grid_x, grid_y = np.meshgrid(gx, gy)

    field = np.zeros((rows, cols))
    cutoff_sq = (2 * radius) ** 2
    scale = radius * radius * smoothness
    for x, y in points:
        dist_sq = (grid_x - x) ** 2 + (grid_y - y) ** 2
        field += np.where(dist_sq < cutoff_sq, np.exp(-dist_sq / scale), 0.0)

    return field, min_x, min_y


def _edge_key(row: int, col: int, side: int) -> EdgeKey:
    """Global id of a cell side, shared with the neighbouring cell."""
    if side == TOP:
        return ('h', row, col)
    if side == BOTTOM:
        return ('h', row + 1, col)
    if side == LEFT:
        return ('v', row, col)
    return ('v', row, col + 1)


def _crossing(key: EdgeKey, field: np.ndarray, threshold: float,
              origin_x: float, origin_y: float, grid_size: float) -> Point:
    """Linearly interpolated threshold crossing along a grid edge."""
    kind, row, col = key
    row2, col2 = (row, col + 1) if kind == 'h' else (row + 1, col)
    va = field[row, col]
    vb = field[row2, col2]
    t = (threshold - va) / (vb - va)
    x = origin_x + (col + t * (col2 - col)) * grid_size
    y = origin_y + (row + t * (row2 - row)) * grid_size
    return (float(x), float(y))


def marching_squares(
    field: np.ndarray,
    threshold: float = THRESHOLD,
    origin_x: float = 0.0,
    origin_y: float = 0.0,
    grid_size: float = GRID_SIZE
) -> List[List[Point]]:
    """
    Trace iso-lines of `field` at `threshold`.

    Segments from every cell are joined through their shared grid edges
    into polylines; closed loops come back without repeating the first
    point. A field that stays below threshold on its border yields only
    closed loops.
    """
    inside = field >= threshold
    rows, cols = field.shape
    links: Dict[EdgeKey, List[EdgeKey]] = {}

    for row in range(rows - 1):
        for col in range(cols - 1):
            case = int(8 * inside[row, col] + 4 * inside[row, col + 1]
                        + 2 * inside[row + 1, col + 1] + inside[row + 1, col])
            if case in (0, 15):
                continue
            if case in (5, 10):
                center = (field[row, col] + field[row, col + 1]
                          + field[row + 1, col + 1] + field[row + 1, col]) / 4
                joined = center >= threshold
                # 5 joined and 10 separated both cut off the tl and br corners
                if (case == 5) == joined:
                    segments = _CUT_TL_BR
                else:
                    segments = _CUT_TR_BL
            else:
                segments = _SEGMENTS[case]

            for a, b in segments:
                ka = _edge_key(row, col, a)
                kb = _edge_key(row, col, b)
                links.setdefault(ka, []).append(kb)
                links.setdefault(kb, []).append(ka)

    loops: List[List[Point]] = []
    visited = set()

    # Open chains first, from their ends, then whatever closed loops remain
    starts = [k for k, v in links.items() if len(v) == 1] + list(links)
    for start in starts:
        if start in visited:
            continue
        chain = [start]
        visited.add(start)
        current = start
        while True:
            nxt = next((k for k in links[current] if k not in visited), None)
            if nxt is None:
                break
            visited.add(nxt)
            chain.append(nxt)
            current = nxt
        loops.append([_crossing(k, field, threshold, origin_x, origin_y, grid_size)
                      for k in chain])

    return loops


def hull_outline(points: Sequence[Point], radius: float) -> List[Point]:
    """Convex hull grown by `radius`; collinear points give a pill."""
    hull = gift_wrap(points)
    if len(hull) == 1:
        return circle(hull[0], radius)
    if len(hull) == 2:
        return pill(hull[0], hull[1], radius)
    # Short edges keep corner cutting from reaching back inside the hull
    return subdivide(expand_hull(hull, radius), radius / 2)


def bubble_set(
    points: Sequence[Point],
    radius: float = 60.0,
    smoothness: float = 0.5
) -> List[Point]:
    """
    Outline a group of points.

    Args:
        points: (x, y) positions of the group members.
        radius: Padding around members and influence falloff scale.
        smoothness: Width of the Gaussian falloff relative to radius.

    Returns:
        Ordered list of (x, y) outline points; empty for no points.
    """
    pts = [(float(p[0]), float(p[1])) for p in points]
    if not pts:
        return []
    if len(pts) == 1:
        return circle(pts[0], radius)
    if len(pts) == 2:
        return pill(pts[0], pts[1], radius)

    field, origin_x, origin_y = influence_field(pts, radius, smoothness)
    loops = [loop for loop in marching_squares(field, THRESHOLD, origin_x, origin_y)
             if len(loop) >= 3]

    contour = None
    if loops:
        largest = max(loops, key=lambda loop: abs(polygon_area(loop)))
        if all(point_in_polygon(p, largest) for p in pts):
            contour = largest
        else:
            logger.debug(f"Group splits into {len(loops)} blobs, using hull outline")

    if contour is None:
        contour = hull_outline(pts, radius)

    return chaikin(contour, SMOOTHING_ITERATIONS)
