"""
Leaf cluster generation.

Offsets are relative to the node they hang from and are produced in the
order the animation reveals them.
"""

import math
from typing import List

import numpy as np

from .config import BonsaiConfig
from .vector import Vector2D


def disc_cluster(rng: np.random.Generator, radius: float, rings: int) -> List[Vector2D]:
    """Concentric rings, ring i carrying 6*i evenly spaced leaves."""
    offsets: List[Vector2D] = []
    for i in range(1, rings + 1):
        r = radius * i / rings
        count = 6 * i
        phase = rng.uniform(0.0, 2 * math.pi)
        for k in range(count):
            offsets.append(Vector2D.from_polar(phase + 2 * math.pi * k / count, r))
    return offsets


def band_cluster(rng: np.random.Generator, radius: float, depth: int,
                 density: float) -> List[Vector2D]:
    """
    Rows swept from the top of the canopy downward, thinned at random.

    Candidates sit on a grid clipped to the circle of the given radius; each
    is kept with a probability that falls off toward the rim, which gives the
    canopy its ragged outline.
    """
    if depth == 0 or radius == 0:
        return [Vector2D(0.0, 0.0)]

    spacing = radius / depth
    offsets: List[Vector2D] = []
    for row in range(2 * depth + 1):
        dy = radius - row * spacing
        half = math.sqrt(max(radius * radius - dy * dy, 0.0))
        steps = int(half // spacing)
        for col in range(-steps, steps + 1):
            offset = Vector2D(col * spacing, dy)
            keep = density * (1.0 - 0.5 * offset.magnitude / radius)
            if rng.random() < keep:
                offsets.append(offset)

    if not offsets:
        offsets.append(Vector2D(0.0, 0.0))
    return offsets


def generate_leaves(rng: np.random.Generator, config: BonsaiConfig) -> List[Vector2D]:
    if config.leaf_depth == 0 or config.leaf_radius == 0:
        return [Vector2D(0.0, 0.0)]
    if config.leaf_style == 'band':
        return band_cluster(rng, config.leaf_radius, config.leaf_depth, config.leaf_density)
    return disc_cluster(rng, config.leaf_radius, config.leaf_depth)
