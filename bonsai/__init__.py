"""
Procedural bonsai trees and their growth animation.

A generator grows a TreeGraph (trunk, branches, leaf clusters) in free
units, the normalizer fits it into a display rectangle and the animation
engine replays its construction as batches of typed points.
"""

from .vector import Vector2D
from .segment import GrowthSegment
from .tree import TreeGraph, TreeIntegrityError
from .config import BonsaiConfig, load_config, save_config
from .generator import generate, build_tree
from .normalize import normalize, container_outline
from .animation import (
    AnimationEngine,
    PointType,
    StaticFrame,
    EdgeGrowth,
    LeafReveal,
    ContainerReveal,
    static_render,
)

__all__ = [
    'Vector2D',
    'GrowthSegment',
    'TreeGraph',
    'TreeIntegrityError',
    'BonsaiConfig',
    'load_config',
    'save_config',
    'generate',
    'build_tree',
    'normalize',
    'container_outline',
    'AnimationEngine',
    'PointType',
    'StaticFrame',
    'EdgeGrowth',
    'LeafReveal',
    'ContainerReveal',
    'static_render',
]
