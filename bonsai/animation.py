"""
Growth animation and static rendering of a finished TreeGraph.

The engine replays the tree breadth-first: each edge is swept from t = 0 to
t = 1 a fixed number of samples per tick, and only when it completes are its
child edges and its leaf cluster queued. Each tick returns just the points
revealed during that tick. Across all ticks the points are exactly those of
`static_render` for the same sample count.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Iterator, List, Tuple, Union

from .profiling import profile
from .tree import TreeGraph
from .vector import Vector2D

logger = logging.getLogger(__name__)


class PointType(Enum):
    BRANCH = 'branch'
    LEAF = 'leaf'
    CONTAINER = 'container'


TaggedPoint = Tuple[Vector2D, PointType]


@dataclass(frozen=True)
class EdgeGrowth:
    parent: int
    child: int
    step: int = 0
    total: int = 1000

    @property
    def progress(self) -> float:
        return self.step / self.total


@dataclass(frozen=True)
class LeafReveal:
    node: int
    index: int = 0


@dataclass(frozen=True)
class ContainerReveal:
    pass


AnimationItem = Union[EdgeGrowth, LeafReveal, ContainerReveal]


@dataclass
class StaticFrame:
    branches: List[Tuple[float, float]] = field(default_factory=list)
    leaves: List[Tuple[float, float]] = field(default_factory=list)
    container: List[Tuple[float, float]] = field(default_factory=list)

    def tagged(self) -> List[TaggedPoint]:
        points: List[TaggedPoint] = []
        for coords, kind in ((self.branches, PointType.BRANCH),
                             (self.leaves, PointType.LEAF),
                             (self.container, PointType.CONTAINER)):
            points.extend((Vector2D(x, y), kind) for x, y in coords)
        return points

    def extend(self, points: List[TaggedPoint]):
        """Accumulate a tick's tagged points into the matching lists."""
        for point, kind in points:
            if kind is PointType.BRANCH:
                self.branches.append(point.to_tuple())
            elif kind is PointType.LEAF:
                self.leaves.append(point.to_tuple())
            else:
                self.container.append(point.to_tuple())

    def __len__(self) -> int:
        return len(self.branches) + len(self.leaves) + len(self.container)


def static_render(graph: TreeGraph, edge_samples: int = 1000) -> StaticFrame:
    """Every edge sampled at t = k / edge_samples for k = 0..edge_samples, plus leaves and container."""
    if edge_samples <= 0:
        raise ValueError(f"edge_samples must be positive, got {edge_samples}")
    frame = StaticFrame()
    for parent, child in graph.edges():
        frame.branches.extend(
            graph.edge_point(parent, child, k / edge_samples).to_tuple()
            for k in range(edge_samples + 1)
        )
    for node in graph.leaf_clusters:
        frame.leaves.extend(p.to_tuple() for p in graph.leaf_points(node))
    frame.container.extend(p.to_tuple() for p in graph.container)
    return frame


class AnimationEngine:
    def __init__(self, graph: TreeGraph, edge_samples: int = 1000,
                 samples_per_tick: int = 100, leaves_per_tick: int = 5):
        if edge_samples <= 0 or samples_per_tick <= 0 or leaves_per_tick <= 0:
            raise ValueError("edge_samples, samples_per_tick and leaves_per_tick must be positive")
        self.graph = graph
        self.edge_samples = edge_samples
        self.samples_per_tick = samples_per_tick
        self.leaves_per_tick = leaves_per_tick
        self.ticks = 0
        self.queue: Deque[AnimationItem] = deque()
        self._start()

    @classmethod
    def from_config(cls, graph: TreeGraph, config) -> 'AnimationEngine':
        return cls(graph, edge_samples=config.edge_samples,
                   samples_per_tick=config.samples_per_tick,
                   leaves_per_tick=config.leaves_per_tick)

    def _start(self):
        if not self.graph.nodes:
            return
        root = self.graph.root
        if self.graph.container:
            self.queue.append(ContainerReveal())
        if self.graph.leaves_of(root):
            self.queue.append(LeafReveal(root))
        self._enqueue_children(root)

    def _enqueue_children(self, node: int):
        for child in self.graph.children_of(node):
            self.queue.append(EdgeGrowth(node, child, 0, self.edge_samples))

    @property
    def done(self) -> bool:
        return not self.queue

    def _edge_points(self, item: EdgeGrowth, stop: int) -> List[TaggedPoint]:
        return [
            (self.graph.edge_point(item.parent, item.child, k / self.edge_samples), PointType.BRANCH)
            for k in range(item.step, stop)
        ]

    def _advance_edge(self, item: EdgeGrowth, out: List[TaggedPoint]):
        next_step = item.step + self.samples_per_tick
        if next_step < self.edge_samples:
            out.extend(self._edge_points(item, next_step))
            self.queue.append(EdgeGrowth(item.parent, item.child, next_step, item.total))
            return

        # Edge complete: include the t = 1 sample, then hand over to the child
        out.extend(self._edge_points(item, self.edge_samples + 1))
        self._enqueue_children(item.child)
        if self.graph.leaves_of(item.child):
            self.queue.append(LeafReveal(item.child))

    def _advance_leaves(self, item: LeafReveal, out: List[TaggedPoint]):
        points = self.graph.leaf_points(item.node)
        stop = min(item.index + self.leaves_per_tick, len(points))
        out.extend((p, PointType.LEAF) for p in points[item.index:stop])
        if stop < len(points):
            self.queue.append(LeafReveal(item.node, stop))

    @profile
    def tick(self) -> List[TaggedPoint]:
        """Advance one frame and return the points revealed by it."""
        out: List[TaggedPoint] = []
        if not self.queue:
            return out

        for _ in range(len(self.queue)):
            item = self.queue.popleft()
            if isinstance(item, EdgeGrowth):
                self._advance_edge(item, out)
            elif isinstance(item, LeafReveal):
                self._advance_leaves(item, out)
            elif isinstance(item, ContainerReveal):
                out.extend((p, PointType.CONTAINER) for p in self.graph.container)
            else:
                raise TypeError(f"Unknown animation item {item!r}")

        self.ticks += 1
        if not self.queue:
            logger.debug("Animation finished after %d ticks", self.ticks)
        return out

    def __iter__(self) -> Iterator[List[TaggedPoint]]:
        while not self.done:
            yield self.tick()

    def run(self) -> StaticFrame:
        """Drain the animation, accumulating every batch."""
        frame = StaticFrame()
        for batch in self:
            frame.extend(batch)
        return frame
