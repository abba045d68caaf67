"""raptorgraph configuration modules."""

from .physics_params import (
    PhysicsParams,
    DEFAULT_PHYSICS_PARAMS,
    PRESETS,
    load_physics_params,
)

__all__ = ['PhysicsParams', 'DEFAULT_PHYSICS_PARAMS', 'PRESETS', 'load_physics_params']
