"""
TreeGraph - the node/edge model every generator fills in.

Nodes are appended in construction order and never removed, so a node id is
also its creation index. Each non-root node has exactly one parent whose id
is smaller than its own. Straight edges are implicit; curved edges carry a
GrowthSegment keyed by the child id.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional, Tuple

from .vector import Vector2D, lerp
from .segment import GrowthSegment


class TreeIntegrityError(RuntimeError):
    """Raised when an operation would break the tree invariants."""


class TreeGraph:
    def __init__(self):
        self.nodes: List[Vector2D] = []
        self.parents: List[Optional[int]] = []
        self.children: Dict[int, List[int]] = {}
        self.leaf_clusters: Dict[int, List[Vector2D]] = {}
        self.segments: Dict[int, GrowthSegment] = {}
        self.container: List[Vector2D] = []
        self.seed: Optional[int] = None

    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return (f"TreeGraph(nodes={len(self.nodes)}, "
                f"leaf_clusters={len(self.leaf_clusters)}, seed={self.seed})")

    @property
    def root(self) -> int:
        self._check_node(0)
        return 0

    def _check_node(self, node_id: int):
        if not 0 <= node_id < len(self.nodes):
            raise TreeIntegrityError(f"Unknown node id {node_id} (graph has {len(self.nodes)} nodes)")

    def add_node(self, position: Vector2D, parent: Optional[int] = None,
                 segment: Optional[GrowthSegment] = None) -> int:
        if parent is None:
            if self.nodes:
                raise TreeIntegrityError("Graph already has a root; new nodes need a parent")
            if segment is not None:
                raise TreeIntegrityError("The root cannot have an incoming segment")
        else:
            self._check_node(parent)

        node_id = len(self.nodes)
        self.nodes.append(position)
        self.parents.append(parent)
        self.children[node_id] = []
        if parent is not None:
            self.children[parent].append(node_id)
        if segment is not None:
            self.segments[node_id] = segment
        return node_id

    def add_leaves(self, node_id: int, offsets: List[Vector2D]):
        """Attach leaf offsets to a node, extending any cluster it already has."""
        self._check_node(node_id)
        if not offsets:
            return
        self.leaf_clusters.setdefault(node_id, []).extend(offsets)

    def parent_of(self, node_id: int) -> Optional[int]:
        self._check_node(node_id)
        return self.parents[node_id]

    def children_of(self, node_id: int) -> List[int]:
        self._check_node(node_id)
        return self.children[node_id]

    def leaves_of(self, node_id: int) -> List[Vector2D]:
        self._check_node(node_id)
        return self.leaf_clusters.get(node_id, [])

    def leaf_points(self, node_id: int) -> List[Vector2D]:
        """Leaf offsets of a node translated to absolute positions."""
        self._check_node(node_id)
        base = self.nodes[node_id]
        return [base + offset for offset in self.leaf_clusters.get(node_id, [])]

    def is_tip(self, node_id: int) -> bool:
        return not self.children_of(node_id)

    def depth(self, node_id: int) -> int:
        self._check_node(node_id)
        depth = 0
        while self.parents[node_id] is not None:
            node_id = self.parents[node_id]
            depth += 1
        return depth

    def incoming_direction(self, node_id: int) -> Optional[float]:
        """Chord angle of the edge arriving at a node, None for the root."""
        parent = self.parent_of(node_id)
        if parent is None:
            return None
        return (self.nodes[node_id] - self.nodes[parent]).angle

    def edge_point(self, parent: int, child: int, t: float) -> Vector2D:
        """Point at parameter t along the edge parent -> child."""
        self._check_node(child)
        if self.parents[child] != parent:
            raise TreeIntegrityError(f"No edge {parent} -> {child}")
        segment = self.segments.get(child)
        if segment is not None:
            return segment.point_at(t)
        return lerp(self.nodes[parent], self.nodes[child], t)

    def edges(self) -> Iterator[Tuple[int, int]]:
        """(parent, child) pairs in breadth-first order from the root."""
        if not self.nodes:
            return
        queue = deque([0])
        while queue:
            node_id = queue.popleft()
            for child in self.children[node_id]:
                yield node_id, child
                queue.append(child)

    def control_points(self) -> List[Vector2D]:
        """All node positions plus every curve control point."""
        points = list(self.nodes)
        for segment in self.segments.values():
            points.append(segment.control)
        return points

    def validate(self):
        """Check the tree invariants, raising TreeIntegrityError on the first violation."""
        if len(self.parents) != len(self.nodes):
            raise TreeIntegrityError("Parent table out of sync with node list")
        for node_id, parent in enumerate(self.parents):
            if node_id == 0:
                if parent is not None:
                    raise TreeIntegrityError("Root node has a parent")
                continue
            if parent is None or not 0 <= parent < node_id:
                raise TreeIntegrityError(f"Node {node_id} has invalid parent {parent}")
            if self.children[parent].count(node_id) != 1:
                raise TreeIntegrityError(f"Node {node_id} missing from children of {parent}")
        if sum(len(c) for c in self.children.values()) != max(len(self.nodes) - 1, 0):
            raise TreeIntegrityError("Children map lists an edge more than once")
        for node_id in list(self.leaf_clusters) + list(self.segments):
            self._check_node(node_id)
