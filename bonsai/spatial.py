"""
Spatial pruning for segment intersection queries.

Every segment lies inside the disc centred on its start point with radius
`reach`, so two segments can only intersect when their start points are
closer than the sum of their reaches. Start points are kept in a scipy
cKDTree; segments added since the last rebuild are checked linearly.
"""

import numpy as np
from scipy.spatial import cKDTree
from typing import List, Optional

from .segment import GrowthSegment
from .profiling import profile


class SegmentIndex:
    """KD-Tree backed collection of placed growth segments."""

    def __init__(self, margin: float = 0.01, rebuild_every: int = 32):
        self.margin = margin
        self.rebuild_every = rebuild_every
        self._segments: List[GrowthSegment] = []
        self._tree: Optional[cKDTree] = None
        self._indexed = 0
        self._max_reach = 0.0

    def __len__(self) -> int:
        return len(self._segments)

    @property
    def segments(self) -> List[GrowthSegment]:
        return self._segments

    def add(self, segment: GrowthSegment):
        self._segments.append(segment)
        self._max_reach = max(self._max_reach, segment.reach)
        if len(self._segments) - self._indexed >= self.rebuild_every:
            self.rebuild()

    @profile
    def rebuild(self):
        if not self._segments:
            self._tree = None
            self._indexed = 0
            return
        starts = np.array([[s.start.x, s.start.y] for s in self._segments])
        self._tree = cKDTree(starts)
        self._indexed = len(self._segments)

    def candidates(self, segment: GrowthSegment,
                   reach: Optional[float] = None) -> List[GrowthSegment]:
        """Placed segments that may cross anything within `reach` of the segment's start."""
        found: List[GrowthSegment] = []
        if self._tree is not None:
            radius = (segment.reach if reach is None else reach) + self._max_reach
            idx = self._tree.query_ball_point([segment.start.x, segment.start.y], r=radius)
            found.extend(self._segments[i] for i in sorted(idx))
        found.extend(self._segments[self._indexed:])
        return found

    @profile
    def intersects(self, segment: GrowthSegment) -> bool:
        return any(segment.intersects(other, self.margin) for other in self.candidates(segment))

    @profile
    def first_clear(self, segments: List[GrowthSegment]) -> Optional[GrowthSegment]:
        """
        First of `segments` that crosses no placed segment, or None.

        The segments share a start point, so one candidate query with the
        largest reach serves all of them.
        """
        if not segments:
            return None
        found = self.candidates(segments[0], reach=max(s.reach for s in segments))
        for segment in segments:
            if not any(segment.intersects(other, self.margin) for other in found):
                return segment
        return None
