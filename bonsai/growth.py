"""
Direction-biased tiered growth.

The trunk climbs in growth steps: a few horizontal jitters in the current
direction, then one step up. A tier ends when its growth budget runs out and
the next tier starts with budget 1 << (tier - 1); reaching tier 0 hangs a
leaf cluster on the current node. Every `branch_cooldown` steps a branch may
spawn with probability 1/tier. Branches are queued and grown breadth-first
instead of recursing.
"""

import logging
from collections import deque
from dataclasses import dataclass

import numpy as np

from .config import BonsaiConfig
from .leaves import generate_leaves
from .tree import TreeGraph
from .vector import Vector2D

logger = logging.getLogger(__name__)


@dataclass
class GrowthTask:
    node: int
    growth: int
    tier: int
    xdir: int


def random_direction(rng: np.random.Generator) -> int:
    return int(rng.integers(-1, 2))


def new_direction(xdir: int, rng: np.random.Generator) -> int:
    """Direction for a new branch: flip the parent's bias or draw a fresh one."""
    if xdir == 0:
        return -1 if rng.integers(0, 2) == 0 else 1
    if rng.integers(0, 2) == 0:
        return -xdir
    return random_direction(rng)


def _grow_step(graph: TreeGraph, node: int, xdir: int, config: BonsaiConfig,
               rng: np.random.Generator) -> int:
    """One growth step from `node`; returns the id of the topmost new node."""
    pos = graph.nodes[node]
    for _ in range(config.max_x_growth):
        dx = xdir * config.x_step * int(rng.integers(0, 2))
        if dx:
            pos = pos + Vector2D(dx, 0.0)
            node = graph.add_node(pos, parent=node)
    pos = pos + Vector2D(0.0, config.y_step)
    return graph.add_node(pos, parent=node)


def _run_task(graph: TreeGraph, task: GrowthTask, config: BonsaiConfig,
              rng: np.random.Generator, queue: deque):
    node, growth, tier, xdir = task.node, task.growth, task.tier, task.xdir

    while tier > 0:
        if growth == 0:
            growth, tier = 1 << (tier - 1), tier - 1
            continue

        node = _grow_step(graph, node, xdir, config, rng)

        if growth % config.branch_cooldown == 0 and rng.integers(0, tier) == 0:
            branch_dir = new_direction(xdir, rng)
            queue.append(GrowthTask(node, 1 << (tier - 1), tier - 1, branch_dir))

        growth -= 1

    graph.add_leaves(node, generate_leaves(rng, config))


def grow_tiered(graph: TreeGraph, config: BonsaiConfig, rng: np.random.Generator):
    """Grow the whole tree from the graph's root."""
    xdir = random_direction(rng)
    queue = deque([GrowthTask(graph.root, config.growth, config.tiers, xdir)])
    branches = 0

    while queue:
        task = queue.popleft()
        _run_task(graph, task, config, rng, queue)
        branches += 1

    logger.debug("Tiered growth: %d branch tasks, initial xdir=%d", branches, xdir)
