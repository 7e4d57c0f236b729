"""
GrowthSegment - a bowed curve between two tree nodes.
"""

import math
from typing import Callable, List, Optional, Tuple

from .vector import Vector2D, quadratic_bezier, segments_cross


def bow_control(start: Vector2D, end: Vector2D, bow: float) -> Vector2D:
    """
    Control point on the perpendicular bisector of start-end.

    The chord direction is rotated by `bow` and stretched so the point lands
    on the bisector; bow == 0 gives the chord midpoint.
    """
    chord = end - start
    radius = chord.magnitude / (2.0 * math.cos(bow))
    return start.add_polar(chord.angle + bow, radius)


class GrowthSegment:
    __slots__ = ('start', 'end', 'bow', 'control')

    def __init__(self, start: Vector2D, end: Vector2D, bow: float = 0.0,
                 control: Optional[Vector2D] = None):
        if abs(bow) >= math.pi / 2:
            raise ValueError(f"Bow angle must be within (-pi/2, pi/2), got {bow}")
        self.start = start
        self.end = end
        self.bow = bow
        self.control = control if control is not None else bow_control(start, end, bow)

    @property
    def points(self) -> Tuple[Vector2D, Vector2D, Vector2D]:
        return (self.start, self.control, self.end)

    @property
    def direction(self) -> float:
        """Chord angle from start to end."""
        return (self.end - self.start).angle

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def reach(self) -> float:
        """Radius around `start` containing all three control points."""
        return max(self.start.distance_to(self.control), self.length)

    @property
    def edges(self) -> Tuple[Tuple[Vector2D, Vector2D], ...]:
        s, c, e = self.points
        return ((s, c), (s, e), (c, e))

    def point_at(self, t: float) -> Vector2D:
        return quadratic_bezier(self.start, self.control, self.end, t)

    def sample(self, count: int) -> List[Vector2D]:
        """`count` points evenly spaced in t, both endpoints included."""
        if count < 2:
            return [self.start]
        return [self.point_at(i / (count - 1)) for i in range(count)]

    def intersects(self, other: 'GrowthSegment', margin: float = 0.01) -> bool:
        for a1, a2 in self.edges:
            for b1, b2 in other.edges:
                if segments_cross(a1, a2, b1, b2, margin):
                    return True
        return False

    def mapped(self, fn: Callable[[Vector2D], Vector2D]) -> 'GrowthSegment':
        """Affine image of the segment; all three control points are mapped."""
        return GrowthSegment(fn(self.start), fn(self.end), self.bow, control=fn(self.control))

    def __repr__(self) -> str:
        return f"GrowthSegment({self.start} -> {self.end}, bow={self.bow:.2f})"
