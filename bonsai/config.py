"""
Configuration for bonsai generation, normalization and animation.

Every tunable threshold lives here as a named field. JSON files can
override any subset of fields; missing files fall back to the defaults.
"""

from dataclasses import dataclass, asdict, fields
from typing import Tuple, Optional, Literal
from pathlib import Path
import json
import math

import numpy as np

Strategy = Literal['recursive', 'curved']
LeafStyle = Literal['disc', 'band']

STRATEGIES = ('recursive', 'curved')
LEAF_STYLES = ('disc', 'band')
MAX_SEED = 2 ** 64


@dataclass
class BonsaiConfig:
    # Target canvas
    width: int = 50
    height: int = 50
    seed: Optional[int] = None       # None = fresh entropy each run
    strategy: Strategy = 'recursive'

    # Tiered growth
    tiers: int = 4                   # Branch generations; 0 = root only
    growth: int = 8                  # Growth steps of the trunk's first tier
    branch_cooldown: int = 2         # A branch may spawn every N growth steps
    max_x_growth: int = 3            # Horizontal jitter sub-steps per growth step
    x_step: float = 1.0
    y_step: float = 1.0

    # Leaf clusters
    leaf_style: LeafStyle = 'disc'
    leaf_radius: float = 3.0
    leaf_depth: int = 3              # Rings (disc) or half the rows (band)
    leaf_density: float = 0.6        # Keep probability for band leaves

    # Curved rejection-sampling growth
    max_dist: float = 12.0           # Target cumulative length of a branch
    min_dist: float = 1.0            # Shortest allowed segment
    radius_sigma: float = 0.35       # Relative spread of segment lengths
    max_depth: int = 6               # Segments per branch from its origin
    max_attempts: int = 200          # Direction draws before giving up
    branch_probability: float = 0.6
    distance_decay: float = 0.7      # max_dist multiplier per branch generation
    phi_tolerance: float = 0.15      # Min turn away from the incoming edge (rad)
    phi_neigh_tolerance: float = 0.6 # Min angle between siblings (rad)
    bow_angles: Tuple[float, ...] = (0.3, -0.3, 0.15, -0.15, 0.0)
    intersect_margin: float = 0.01
    min_height: float = 0.0          # Ground line above the origin

    # Normalization
    symmetric: bool = False
    container: bool = False
    container_fraction: float = 0.2  # Share of the height reserved for the pot

    # Animation
    edge_samples: int = 1000         # Samples per edge (t step = 1 / edge_samples)
    samples_per_tick: int = 100
    leaves_per_tick: int = 5

    def __post_init__(self):
        self.bow_angles = tuple(float(a) for a in self.bow_angles)
        self.validate()

    def validate(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Bounds must be positive, got {self.width}x{self.height}")
        if self.seed is not None and not 0 <= self.seed < MAX_SEED:
            raise ValueError(f"Seed must be a 64-bit unsigned integer, got {self.seed}")
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy '{self.strategy}', expected one of {STRATEGIES}")
        if self.leaf_style not in LEAF_STYLES:
            raise ValueError(f"Unknown leaf style '{self.leaf_style}', expected one of {LEAF_STYLES}")
        if self.tiers < 0:
            raise ValueError(f"tiers must be >= 0, got {self.tiers}")
        if self.growth < 0:
            raise ValueError(f"growth must be >= 0, got {self.growth}")
        if self.branch_cooldown <= 0:
            raise ValueError(f"branch_cooldown must be positive, got {self.branch_cooldown}")
        if self.max_x_growth < 0:
            raise ValueError(f"max_x_growth must be >= 0, got {self.max_x_growth}")
        if self.leaf_radius < 0 or self.leaf_depth < 0:
            raise ValueError("leaf_radius and leaf_depth must be >= 0")
        if not 0.0 <= self.leaf_density <= 1.0:
            raise ValueError(f"leaf_density must be within [0, 1], got {self.leaf_density}")
        if self.min_dist <= 0 or self.max_dist < self.min_dist:
            raise ValueError(f"Need 0 < min_dist <= max_dist, got {self.min_dist}, {self.max_dist}")
        if self.radius_sigma < 0:
            raise ValueError(f"radius_sigma must be >= 0, got {self.radius_sigma}")
        if self.max_depth < 0 or self.max_attempts <= 0:
            raise ValueError("max_depth must be >= 0 and max_attempts positive")
        if not 0.0 <= self.branch_probability <= 1.0:
            raise ValueError(f"branch_probability must be within [0, 1], got {self.branch_probability}")
        if not 0.0 < self.distance_decay <= 1.0:
            raise ValueError(f"distance_decay must be within (0, 1], got {self.distance_decay}")
        if self.phi_tolerance < 0 or self.phi_neigh_tolerance < 0:
            raise ValueError("Angular tolerances must be >= 0")
        if not self.bow_angles:
            raise ValueError("bow_angles needs at least one angle")
        if any(abs(a) >= math.pi / 2 for a in self.bow_angles):
            raise ValueError(f"Bow angles must lie in (-pi/2, pi/2), got {self.bow_angles}")
        if not 0.0 <= self.intersect_margin < 0.5:
            raise ValueError(f"intersect_margin must be within [0, 0.5), got {self.intersect_margin}")
        if not 0.0 <= self.container_fraction < 1.0:
            raise ValueError(f"container_fraction must be within [0, 1), got {self.container_fraction}")
        if self.edge_samples <= 0 or self.samples_per_tick <= 0 or self.leaves_per_tick <= 0:
            raise ValueError("edge_samples, samples_per_tick and leaves_per_tick must be positive")

    @property
    def bounds(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def reserved_fraction(self) -> float:
        return self.container_fraction if self.container else 0.0

    def resolve_seed(self) -> int:
        """The configured seed, or a fresh one drawn from OS entropy."""
        if self.seed is not None:
            return int(self.seed)
        return int(np.random.SeedSequence().generate_state(1, dtype=np.uint64)[0])

    def to_dict(self) -> dict:
        data = asdict(self)
        data['bow_angles'] = list(self.bow_angles)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'BonsaiConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)


def load_config(path: str = 'bonsai.json', **overrides) -> BonsaiConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    data = {}
    if config_path.exists():
        with open(config_path, 'r') as f:
            data = json.load(f)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return BonsaiConfig.from_dict(data)


def save_config(config: BonsaiConfig, path: str = 'bonsai.json'):
    """Save config to JSON file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
