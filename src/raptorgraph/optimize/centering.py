# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Post-layout centering and viewport fitting.

"""
Move or rescale a finished layout so it sits in the middle of a canvas.

Both passes work on the bounding box of the positions and keep relative
placement intact: centering only translates, fitting also scales
uniformly (capped by max_scale so tiny graphs are not blown up).
"""

from typing import Dict, Optional, Any, Tuple

from ..graph import LayoutResult

BoundingBox = Tuple[float, float, float, float]


def bounding_box(positions: LayoutResult) -> BoundingBox:
    """Return (min_x, min_y, max_x, max_y). Positions must be non-empty."""
    xs = [p[0] for p in positions.values()]
    ys = [p[1] for p in positions.values()]
    return min(xs), min(ys), max(xs), max(ys)


def centering(
    positions: LayoutResult,
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """
    Translate positions so their bounding box is centered on the canvas.

    Args:
        positions: Dictionary mapping node IDs to (x, y) positions.
        options: Optional parameters:
            - width: Canvas width (default: 800)
            - height: Canvas height (default: 600)

    Returns:
        New dictionary with translated positions.
    """
    options = options or {}
    width = options.get('width', 800)
    height = options.get('height', 600)

    if not positions:
        return {}

    min_x, min_y, max_x, max_y = bounding_box(positions)
    offset_x = width / 2 - (min_x + max_x) / 2
    offset_y = height / 2 - (min_y + max_y) / 2

    return {nid: (x + offset_x, y + offset_y)
            for nid, (x, y) in positions.items()}


def fit_to_viewport(
    positions: LayoutResult,
    options: Optional[Dict[str, Any]] = None
) -> LayoutResult:
    """
    Scale uniformly and center so the layout fills the canvas.

    Args:
        positions: Dictionary mapping node IDs to (x, y) positions.
        options: Optional parameters:
            - width: Canvas width (default: 800)
            - height: Canvas height (default: 600)
            - padding: Space left on every side (default: 50)
            - max_scale: Upper bound on the scale factor (default: 2.0)

    Returns:
        New dictionary with fitted positions.
    """
    options = options or {}
    width = options.get('width', 800)
    height = options.get('height', 600)
    padding = options.get('padding', 50)
    max_scale = options.get('max_scale', 2.0)

    if not positions:
        return {}

    min_x, min_y, max_x, max_y = bounding_box(positions)
    span_x = (max_x - min_x) or 1.0
    span_y = (max_y - min_y) or 1.0

    scale = min((width - 2 * padding) / span_x,
                (height - 2 * padding) / span_y,
                max_scale)

    mid_x = (min_x + max_x) / 2
    mid_y = (min_y + max_y) / 2

    return {
        nid: (width / 2 + (x - mid_x) * scale, height / 2 + (y - mid_y) * scale)
        for nid, (x, y) in positions.items()
    }


def compute(positions, **options):
    """Center positions on the canvas."""
    return centering(positions, options)
