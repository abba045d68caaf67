# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# RaptorGraph layout engine.

"""
Graph layout engine for 2D visual inspection of small and medium graphs.

Subpackages:
    physics  - phased force simulation, stepped one frame per call
    layout   - one-shot layouts (stress, spectral, radial, hierarchical, ...)
    outline  - bubble sets and convex hulls around node groups
    optimize - centering and fit-to-viewport passes
    config   - PhysicsParams, presets and YAML loading

The io module reads and writes JSON Lines so layouts can run in a pipe.
"""

from . import config
from . import physics
from . import layout
from . import outline
from . import optimize
from . import io
from .errors import RaptorGraphError, UnknownLayoutError, ConfigError
from .layout import compute_layout, LAYOUTS

__version__ = '0.1.0'

__all__ = [
    'config',
    'physics',
    'layout',
    'outline',
    'optimize',
    'io',
    'compute_layout',
    'LAYOUTS',
    'RaptorGraphError',
    'UnknownLayoutError',
    'ConfigError',
]
