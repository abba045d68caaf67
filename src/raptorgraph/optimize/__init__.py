# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Post-layout passes.

"""
Passes applied to a finished LayoutResult:
- Centering (translate bounding box to canvas center)
- Fit to viewport (uniform scale plus centering)
"""

from .centering import centering, fit_to_viewport, bounding_box

__all__ = [
    'centering',
    'fit_to_viewport',
    'bounding_box',
]
