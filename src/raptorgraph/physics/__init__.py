# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Frame-stepped physics simulation.

"""
Phased force simulation driven one frame at a time by the caller.
"""

from .phased import (
    Phase,
    PhasePreset,
    PHASE_PRESETS,
    NodeState,
    SimulationState,
    SimulationOptions,
    PreparedGraph,
    prepare_graph,
    initial_state,
    make_deviation_factors,
    pair_variation,
    phase_for,
    step,
    run,
    phased,
)

__all__ = [
    'Phase',
    'PhasePreset',
    'PHASE_PRESETS',
    'NodeState',
    'SimulationState',
    'SimulationOptions',
    'PreparedGraph',
    'prepare_graph',
    'initial_state',
    'make_deviation_factors',
    'pair_variation',
    'phase_for',
    'step',
    'run',
    'phased',
]
