"""
Angle-constrained rejection-sampling growth with curved segments.

Each new segment is drawn as a random direction and length from its parent
node and kept only if it turns away from the parent's incoming edge, keeps
clear of an already placed sibling, stays above the ground line and, for one
of the configured bow angles, crosses no segment placed so far. A placement
that fails `max_attempts` draws is abandoned and the branch simply stops.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import BonsaiConfig
from .leaves import generate_leaves
from .segment import GrowthSegment
from .spatial import SegmentIndex
from .tree import TreeGraph
from .vector import angle_between

logger = logging.getLogger(__name__)


@dataclass
class BranchTask:
    node: int
    depth: int          # Segments since the branch's originating node
    generation: int     # Divergent branchings between the trunk and this branch
    distance: float     # Path length since the originating node
    max_dist: float


@dataclass
class Placement:
    segment: GrowthSegment
    direction: float
    radius: float


class CurvedGrower:
    def __init__(self, graph: TreeGraph, config: BonsaiConfig, rng: np.random.Generator):
        self.graph = graph
        self.config = config
        self.rng = rng
        self.index = SegmentIndex(margin=config.intersect_margin)
        self.ground = graph.nodes[graph.root].y + config.min_height
        self.abandoned = 0

    def _sample_radius(self, task: BranchTask) -> float:
        cfg = self.config
        steps_left = max(cfg.max_depth - task.depth, 1)
        mean = max(cfg.min_dist, (task.max_dist - task.distance) / steps_left)
        return max(cfg.min_dist, float(self.rng.normal(mean, cfg.radius_sigma * mean)))

    def _direction_ok(self, phi: float, incoming: Optional[float],
                      neighbor: Optional[float]) -> bool:
        if incoming is not None and angle_between(phi, incoming) <= self.config.phi_tolerance:
            return False
        if neighbor is not None and angle_between(phi, neighbor) <= self.config.phi_neigh_tolerance:
            return False
        return True

    def place(self, task: BranchTask, neighbor: Optional[float] = None) -> Optional[Placement]:
        """Rejection-sample one segment from the task's node, or None when every draw failed."""
        start = self.graph.nodes[task.node]
        incoming = self.graph.incoming_direction(task.node)

        for _ in range(self.config.max_attempts):
            phi = float(self.rng.uniform(0.0, 2 * math.pi))
            radius = self._sample_radius(task)
            end = start.add_polar(phi, radius)

            if end.y <= self.ground:
                continue
            # Chord angle as the graph will report it
            direction = (end - start).angle
            if not self._direction_ok(direction, incoming, neighbor):
                continue

            segment = self.index.first_clear(
                [GrowthSegment(start, end, bow) for bow in self.config.bow_angles])
            if segment is not None:
                return Placement(segment, direction, radius)

        self.abandoned += 1
        logger.debug("No placement found from node %d after %d attempts",
                     task.node, self.config.max_attempts)
        return None

    def _commit(self, task: BranchTask, placement: Placement) -> int:
        self.index.add(placement.segment)
        return self.graph.add_node(placement.segment.end, parent=task.node,
                                   segment=placement.segment)

    def _expand(self, task: BranchTask, queue: deque) -> bool:
        """Grow the children of one task; False when the node stays a tip."""
        cfg = self.config
        if task.depth >= cfg.max_depth or task.max_dist - task.distance < cfg.min_dist:
            return False

        primary = self.place(task)
        if primary is None:
            return False

        child = self._commit(task, primary)
        queue.append(BranchTask(child, task.depth + 1, task.generation,
                                task.distance + primary.radius, task.max_dist))

        if task.generation + 1 < cfg.tiers and self.rng.random() < cfg.branch_probability:
            divergent = self.place(task, neighbor=primary.direction)
            if divergent is not None:
                child = self._commit(task, divergent)
                queue.append(BranchTask(child, 0, task.generation + 1, 0.0,
                                        task.max_dist * cfg.distance_decay))
        return True

    def grow(self):
        root = self.graph.root
        queue = deque([BranchTask(root, 0, 0, 0.0, self.config.max_dist)])

        while queue:
            task = queue.popleft()
            if not self._expand(task, queue) and task.node != root:
                self.graph.add_leaves(task.node, generate_leaves(self.rng, self.config))

        logger.debug("Curved growth: %d segments, %d abandoned placements",
                     len(self.index), self.abandoned)


def grow_curved(graph: TreeGraph, config: BonsaiConfig, rng: np.random.Generator):
    CurvedGrower(graph, config, rng).grow()
