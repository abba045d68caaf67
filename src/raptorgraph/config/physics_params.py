# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""
Physics parameters for the phased force simulation.

Usage:
    from raptorgraph.config.physics_params import PhysicsParams, load_physics_params

    params = PhysicsParams(repulsion_strength=30000)

    # Or from a YAML file, optionally selecting a named section
    params = load_physics_params('config/physics.yaml', preset='spread')

    # Or a built-in preset
    params = PRESETS['compact']

YAML layout:

    physics:
      repulsion_strength: 25000
      damping: 0.85
    presets:
      spread:
        repulsion_strength: 40000

Keys may be snake_case or camelCase (repulsionStrength). Values are not
range-checked: negative damping is the caller's problem, not the engine's.
"""

import re
import logging
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path
from typing import Dict, Any, Optional, Union

from ..errors import ConfigError

logger = logging.getLogger(__name__)


def _load_yaml():
    """Lazy import yaml to avoid dependency at import time."""
    try:
        import yaml
        return yaml
    except ImportError as e:
        raise ConfigError("PyYAML not installed. Install with: pip install pyyaml") from e


def _snake_case(key: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', '_', key).lower()


@dataclass(frozen=True)
class PhysicsParams:
    """Independently tunable knobs for the phased simulation."""
    repulsion_strength: float = 25000.0   # base Coulomb constant
    attraction_strength: float = 0.1      # spring constant for ordinary edges
    leaf_spring_strength: float = 0.8     # multiplier on phase leaf springs
    hub_edge_strength: float = 0.05       # hub-to-hub spring, fraction of attraction
    damping: float = 0.85                 # velocity retained per frame
    center_gravity: float = 0.0001        # pull toward canvas center
    node_chaos_factor: float = 0.0        # 0-100, scales per-node deviation
    hub_repulsion_boost: float = 0.5      # extra repulsion between hubs
    repulsion_radius: float = 2000.0      # spatial hash query radius
    sibling_repulsion: float = 1.0        # multiplier for pairs sharing a neighbor; 0 silences them
    leaf_magnet_repulsion: float = 0.0    # extra push between parents of leaves, 0 disables

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PhysicsParams':
        """Build params from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in (data or {}).items():
            name = _snake_case(key)
            if name not in known:
                logger.warning(f"Ignoring unknown physics parameter: {key}")
                continue
            values[name] = float(value)
        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        """Convert to JSON/YAML-serializable dict."""
        return asdict(self)

    def with_overrides(self, **overrides) -> 'PhysicsParams':
        """Return a copy with some knobs replaced."""
        return replace(self, **overrides)


DEFAULT_PHYSICS_PARAMS = PhysicsParams()

PRESETS: Dict[str, PhysicsParams] = {
    'default': DEFAULT_PHYSICS_PARAMS,
    'compact': DEFAULT_PHYSICS_PARAMS.with_overrides(
        repulsion_strength=12000.0,
        leaf_spring_strength=1.2,
        center_gravity=0.001,
        repulsion_radius=1000.0,
    ),
    'spread': DEFAULT_PHYSICS_PARAMS.with_overrides(
        repulsion_strength=40000.0,
        hub_repulsion_boost=1.0,
        center_gravity=0.0,
    ),
    # Siblings ignore each other and leaf-bearing parents shove apart
    'clustered': DEFAULT_PHYSICS_PARAMS.with_overrides(
        sibling_repulsion=0.0,
        leaf_magnet_repulsion=1.0,
    ),
}


def load_physics_params(
    path: Union[str, Path],
    preset: Optional[str] = None
) -> PhysicsParams:
    """
    Load PhysicsParams from a YAML file.

    Args:
        path: YAML file containing a 'physics' mapping (or a bare mapping).
        preset: Optional name under 'presets' whose values override 'physics'.

    Returns:
        PhysicsParams with file values layered over the defaults.
    """
    yaml = _load_yaml()
    path = Path(path)

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")

    if 'physics' in data or 'presets' in data:
        values = dict(data.get('physics') or {})
    else:
        values = dict(data)

    if preset is not None:
        presets = data.get('presets') or {}
        if preset not in presets:
            raise ConfigError(f"Preset '{preset}' not found in {path}")
        values.update(presets[preset] or {})

    logger.debug(f"Loaded {len(values)} physics parameters from {path}")
    return PhysicsParams.from_dict(values)
