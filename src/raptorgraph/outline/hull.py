# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Convex hulls and polygon helpers for group outlines.

"""
Polygon utilities used to draw boxes around groups of nodes.

Points are (x, y) tuples. Orientation words (counter-clockwise, left)
refer to the usual math axes with y pointing up; on a y-down screen the
same polygons appear clockwise. expand_hull works for either orientation.
"""

import math
from typing import List, Sequence, Tuple

Point = Tuple[float, float]


def _cross(o: Point, a: Point, b: Point) -> float:
    """Z component of (a - o) x (b - o); positive when b is left of o->a."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def _dist_sq(a: Point, b: Point) -> float:
    return (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2


def convex_hull(points: Sequence[Point]) -> List[Point]:
    """
    Andrew's monotone chain. Returns hull vertices counter-clockwise.

    Fewer than three points are returned unchanged. Collinear vertices
    on the hull boundary are dropped.
    """
    pts = [tuple(p) for p in points]
    if len(pts) < 3:
        return pts

    pts = sorted(set(pts))
    if len(pts) < 3:
        return pts

    lower: List[Point] = []
    for p in pts:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: List[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    return lower[:-1] + upper[:-1]


def gift_wrap(points: Sequence[Point]) -> List[Point]:
    """
    Jarvis march. Returns hull vertices counter-clockwise from the leftmost.

    When every point is collinear the result is the two extremes; a single
    distinct point comes back alone.
    """
    pts = sorted(set(tuple(p) for p in points))
    if len(pts) < 3:
        return pts

    start = pts[0]
    hull: List[Point] = []
    current = start

    while True:
        hull.append(current)
        candidate = pts[1] if pts[0] == current else pts[0]
        for p in pts:
            if p == current:
                continue
            turn = _cross(current, candidate, p)
            # p right of current->candidate, or collinear and farther
            if turn < 0 or (turn == 0 and _dist_sq(current, p) > _dist_sq(current, candidate)):
                candidate = p
        current = candidate
        if current == start or len(hull) >= len(pts):
            break

    return hull


def polygon_area(polygon: Sequence[Point]) -> float:
    """Signed shoelace area; positive for counter-clockwise."""
    area = 0.0
    n = len(polygon)
    for i in range(n):
        x1, y1 = polygon[i]
        x2, y2 = polygon[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return area / 2


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Even-odd ray casting test."""
    x, y = point
    inside = False
    n = len(polygon)
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > y) != (yj > y):
            x_cross = xi + (y - yi) * (xj - xi) / (yj - yi)
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def expand_hull(hull: Sequence[Point], margin: float) -> List[Point]:
    """
    Push every vertex outward by `margin` along the averaged normal of its
    two adjacent edges. Hulls with fewer than three vertices are returned
    unchanged.
    """
    n = len(hull)
    if n < 3:
        return list(hull)

    # Left normal points outward for clockwise, inward for counter-clockwise
    sign = -1.0 if polygon_area(hull) > 0 else 1.0

    expanded: List[Point] = []
    for i in range(n):
        prev = hull[i - 1]
        curr = hull[i]
        nxt = hull[(i + 1) % n]

        nx = ny = 0.0
        for a, b in ((prev, curr), (curr, nxt)):
            ex, ey = b[0] - a[0], b[1] - a[1]
            length = math.hypot(ex, ey) or 1.0
            nx += -ey / length
            ny += ex / length

        length = math.hypot(nx, ny) or 1.0
        expanded.append((curr[0] + sign * nx / length * margin,
                         curr[1] + sign * ny / length * margin))

    return expanded


def subdivide(polygon: Sequence[Point], max_length: float) -> List[Point]:
    """Split closed-polygon edges so none is longer than `max_length`."""
    if max_length <= 0:
        return list(polygon)
    result: List[Point] = []
    n = len(polygon)
    for i in range(n):
        x1, y1 = polygon[i]
        x2, y2 = polygon[(i + 1) % n]
        pieces = max(1, math.ceil(math.hypot(x2 - x1, y2 - y1) / max_length))
        for k in range(pieces):
            t = k / pieces
            result.append((x1 + (x2 - x1) * t, y1 + (y2 - y1) * t))
    return result


def centroid(points: Sequence[Point]) -> Point:
    """Mean of the points; (0, 0) for an empty sequence."""
    if not points:
        return (0.0, 0.0)
    n = len(points)
    return (sum(p[0] for p in points) / n, sum(p[1] for p in points) / n)


def chaikin(points: Sequence[Point], iterations: int = 3) -> List[Point]:
    """
    Chaikin corner cutting on a closed polygon.

    Every edge (p1, p2) becomes the points 1/4 and 3/4 along it, so each
    iteration doubles the vertex count.
    """
    smoothed = [tuple(p) for p in points]
    for _ in range(iterations):
        n = len(smoothed)
        if n < 2:
            break
        cut: List[Point] = []
        for i in range(n):
            x1, y1 = smoothed[i]
            x2, y2 = smoothed[(i + 1) % n]
            cut.append((0.75 * x1 + 0.25 * x2, 0.75 * y1 + 0.25 * y2))
            cut.append((0.25 * x1 + 0.75 * x2, 0.25 * y1 + 0.75 * y2))
        smoothed = cut
    return smoothed
