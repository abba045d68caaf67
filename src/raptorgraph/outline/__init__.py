# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Group outlines.

"""
Outlines drawn around groups of nodes:
- Bubble sets (influence-field iso-line, smoothed)
- Convex hulls, optionally grown by a margin
"""

from .bubble_sets import bubble_set, circle, pill, influence_field, marching_squares
from .hull import (
    convex_hull,
    gift_wrap,
    expand_hull,
    subdivide,
    centroid,
    chaikin,
    polygon_area,
    point_in_polygon,
)

__all__ = [
    'bubble_set',
    'circle',
    'pill',
    'influence_field',
    'marching_squares',
    'convex_hull',
    'gift_wrap',
    'expand_hull',
    'subdivide',
    'centroid',
    'chaikin',
    'polygon_area',
    'point_in_polygon',
]
