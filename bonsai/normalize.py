"""
Rescale a generated tree into the display rectangle.

Generation happens in free units around the origin; this maps every node,
curve control point and leaf offset linearly onto [0, width] x [y0, height],
where y0 is the band kept free for the container. y grows upward.
"""

import logging
import math
from typing import Callable, List, Tuple

from .profiling import profile
from .tree import TreeGraph
from .vector import Vector2D, lerp

logger = logging.getLogger(__name__)

AxisMap = Tuple[Callable[[float], float], float]

CONTAINER_RIM = 0.25    # Rim half-width as a share of the canvas width
CONTAINER_TAPER = 0.75  # Base half-width relative to the rim


def _clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def _axis_map(lo: float, hi: float, target_lo: float, target_hi: float) -> AxisMap:
    """Linear map of [lo, hi] onto the target range, plus its scale factor."""
    extent = target_hi - target_lo
    span = hi - lo
    if span == 0:
        mid = target_lo + extent / 2
        return (lambda v: mid), extent

    # Divide before scaling so lo and hi land exactly on the target edges
    return (lambda v: _clamp(target_lo + (v - lo) / span * extent, target_lo, target_hi)), extent / span


def _symmetric_axis_map(lo: float, hi: float, center: float, extent: float) -> AxisMap:
    """Map centred on `center`, using the larger side as the half-width."""
    half = max(abs(lo - center), abs(hi - center))
    mid = extent / 2
    if half == 0:
        return (lambda v: mid), mid

    return (lambda v: _clamp(mid + (v - center) / half * mid, 0.0, extent)), mid / half


def container_outline(bounds: Tuple[int, int], top: float, root_x: float) -> List[Vector2D]:
    """Trapezoid pot below the trunk, sampled roughly once per unit of length."""
    width, _ = bounds
    rim = width * CONTAINER_RIM
    base = rim * CONTAINER_TAPER
    corners = [
        Vector2D(_clamp(root_x - rim, 0.0, width), top),
        Vector2D(_clamp(root_x + rim, 0.0, width), top),
        Vector2D(_clamp(root_x + base, 0.0, width), 0.0),
        Vector2D(_clamp(root_x - base, 0.0, width), 0.0),
    ]

    outline: List[Vector2D] = []
    for a, b in zip(corners, corners[1:] + corners[:1]):
        count = max(int(math.ceil(a.distance_to(b))), 1)
        outline.extend(lerp(a, b, i / count) for i in range(count))
    return outline


@profile
def normalize(graph: TreeGraph, bounds: Tuple[int, int], symmetric: bool = False,
              container_fraction: float = 0.0):
    """Rescale the graph in place to fit `bounds` = (width, height)."""
    width, height = bounds
    if width <= 0 or height <= 0:
        raise ValueError(f"Bounds must be positive, got {width}x{height}")
    if not 0.0 <= container_fraction < 1.0:
        raise ValueError(f"container_fraction must be within [0, 1), got {container_fraction}")
    if not graph.nodes:
        return

    points = graph.control_points()
    min_x, max_x = min(p.x for p in points), max(p.x for p in points)
    min_y, max_y = min(p.y for p in points), max(p.y for p in points)
    y0 = height * container_fraction

    if symmetric:
        map_x, scale_x = _symmetric_axis_map(min_x, max_x, graph.nodes[graph.root].x, width)
    else:
        map_x, scale_x = _axis_map(min_x, max_x, 0.0, width)
    map_y, scale_y = _axis_map(min_y, max_y, y0, height)

    def transform(p: Vector2D) -> Vector2D:
        return Vector2D(map_x(p.x), map_y(p.y))

    graph.nodes = [transform(p) for p in graph.nodes]
    graph.segments = {node: seg.mapped(transform) for node, seg in graph.segments.items()}
    graph.leaf_clusters = {
        node: [Vector2D(o.x * scale_x, o.y * scale_y) for o in offsets]
        for node, offsets in graph.leaf_clusters.items()
    }

    if container_fraction > 0:
        graph.container = container_outline(bounds, y0, graph.nodes[graph.root].x)

    logger.debug("Normalized %d nodes from [%.2f, %.2f]x[%.2f, %.2f] into %dx%d",
                 len(graph.nodes), min_x, max_x, min_y, max_y, width, height)
