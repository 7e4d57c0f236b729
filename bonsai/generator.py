"""
Tree generation entry points.

`generate` grows a fresh TreeGraph in generation units with node 0 at the
origin; `build_tree` also normalizes it into the configured canvas.
"""

import logging
from typing import Optional

import numpy as np

from .config import BonsaiConfig
from .growth import grow_tiered
from .normalize import normalize
from .profiling import profile
from .sampling import grow_curved
from .tree import TreeGraph
from .vector import Vector2D

logger = logging.getLogger(__name__)

STRATEGY_FUNCS = {
    'recursive': grow_tiered,
    'curved': grow_curved,
}


@profile
def generate(config: BonsaiConfig, rng: Optional[np.random.Generator] = None) -> TreeGraph:
    """
    Grow a tree according to `config`.

    With `rng` omitted a generator is seeded from `config.seed`, or from fresh
    entropy when no seed is set; the seed used is stored on the graph.
    """
    graph = TreeGraph()
    if rng is None:
        graph.seed = config.resolve_seed()
        rng = np.random.default_rng(graph.seed)

    graph.add_node(Vector2D(0.0, 0.0))
    if config.tiers > 0:
        STRATEGY_FUNCS[config.strategy](graph, config, rng)

    logger.info("Generated %s tree: %d nodes, %d leaf clusters (seed=%s)",
                config.strategy, len(graph), len(graph.leaf_clusters), graph.seed)
    return graph


def build_tree(config: BonsaiConfig, rng: Optional[np.random.Generator] = None) -> TreeGraph:
    """Generate and normalize into the configured bounds."""
    graph = generate(config, rng)
    normalize(graph, config.bounds, symmetric=config.symmetric,
              container_fraction=config.reserved_fraction)
    return graph
