"""
2D vector class and the interpolation / intersection helpers built on it.
"""

import math
from typing import Union


class Vector2D:
    __slots__ = ('x', 'y')

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = float(x)
        self.y = float(y)

    def __add__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x - other.x, self.y - other.y)

    def __neg__(self) -> 'Vector2D':
        return Vector2D(-self.x, -self.y)

    def __mul__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> 'Vector2D':
        return self.__mul__(scalar)

    def __truediv__(self, other: Union[float, 'Vector2D']) -> 'Vector2D':
        # Vector divisor divides component-wise
        if isinstance(other, Vector2D):
            return Vector2D(self.x / other.x, self.y / other.y)
        return Vector2D(self.x / other, self.y / other)

    def __repr__(self) -> str:
        return f"Vector2D({self.x:.2f}, {self.y:.2f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def is_close(self, other: 'Vector2D', tol: float = 1e-6) -> bool:
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> float:
        """Direction in radians, measured counter-clockwise from +x."""
        return math.atan2(self.y, self.x)

    def add_polar(self, angle: float, radius: float) -> 'Vector2D':
        return self + Vector2D.from_polar(angle, radius)

    def distance_to(self, other: 'Vector2D') -> float:
        return (self - other).magnitude

    def to_tuple(self) -> tuple:
        return (self.x, self.y)

    @classmethod
    def from_polar(cls, angle: float, radius: float) -> 'Vector2D':
        return cls(math.cos(angle) * radius, math.sin(angle) * radius)


def lerp(a: Vector2D, b: Vector2D, t: float) -> Vector2D:
    return a + (b - a) * t


def quadratic_bezier(p0: Vector2D, p1: Vector2D, p2: Vector2D, t: float) -> Vector2D:
    """De Casteljau evaluation of the quadratic curve p0 -> p2 pulled toward p1."""
    return lerp(lerp(p0, p1, t), lerp(p1, p2, t), t)


def cubic_bezier(p0: Vector2D, p1: Vector2D, p2: Vector2D, p3: Vector2D, t: float) -> Vector2D:
    return lerp(quadratic_bezier(p0, p1, p2, t), quadratic_bezier(p1, p2, p3, t), t)


def angle_between(a: float, b: float) -> float:
    """Smallest absolute difference between two angles, in [0, pi]."""
    diff = (a - b) % (2 * math.pi)
    return min(diff, 2 * math.pi - diff)


def segments_cross(p1: Vector2D, p2: Vector2D, q1: Vector2D, q2: Vector2D,
                   margin: float = 0.01) -> bool:
    """
    True when the straight edges p1-p2 and q1-q2 cross.

    Both crossing parameters must lie in [margin, 1 - margin], so edges that
    only touch at an endpoint are not reported. Parallel edges never cross.
    """
    d = (q2.y - q1.y) * (p2.x - p1.x) - (q2.x - q1.x) * (p2.y - p1.y)
    u = (q2.x - q1.x) * (p1.y - q1.y) - (q2.y - q1.y) * (p1.x - q1.x)
    v = (p2.x - p1.x) * (p1.y - q1.y) - (p2.y - p1.y) * (p1.x - q1.x)

    if d < 0.0:
        d, u, v = -d, -u, -v
    if d == 0.0:
        return False

    lo = margin * d
    hi = d - lo
    return lo <= u <= hi and lo <= v <= hi
