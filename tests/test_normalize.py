# File: tests/test_normalize.py
"""
Test rescaling of trees into the display rectangle.
"""

import pytest

from bonsai.normalize import container_outline, normalize
from bonsai.segment import GrowthSegment
from bonsai.tree import TreeGraph
from bonsai.vector import Vector2D


def _graph(*points):
    """Root at points[0]; every other point hangs directly from the root."""
    graph = TreeGraph()
    graph.add_node(Vector2D(*points[0]))
    for p in points[1:]:
        graph.add_node(Vector2D(*p), parent=0)
    return graph


def test_bounding_box_maps_onto_bounds():
    graph = _graph((0, 0), (2, 4), (-2, 2))
    normalize(graph, (10, 20))

    assert graph.nodes[0].is_close(Vector2D(5, 0))
    assert graph.nodes[1].is_close(Vector2D(10, 20))
    assert graph.nodes[2].is_close(Vector2D(0, 10))


def test_single_node_lands_at_midpoint():
    graph = _graph((3, -7))
    normalize(graph, (50, 30))
    assert graph.nodes[0].is_close(Vector2D(25, 15))


def test_degenerate_axis_is_centred():
    graph = _graph((0, 0), (0, 5))
    normalize(graph, (10, 10))

    assert graph.nodes[0].is_close(Vector2D(5, 0))
    assert graph.nodes[1].is_close(Vector2D(5, 10))


def test_symmetric_keeps_root_centred():
    graph = _graph((0, 0), (1, 2), (-3, 1))
    normalize(graph, (12, 10), symmetric=True)

    assert graph.nodes[0].x == pytest.approx(6.0)
    assert graph.nodes[1].x == pytest.approx(8.0)
    assert graph.nodes[2].x == pytest.approx(0.0)
    assert graph.nodes[1].y == pytest.approx(10.0)


def test_leaf_offsets_are_scaled():
    graph = _graph((0, 0), (4, 2))
    graph.add_leaves(1, [Vector2D(1, 1)])
    normalize(graph, (8, 8))

    assert graph.leaves_of(1)[0].is_close(Vector2D(2, 4))
    assert graph.leaf_points(1)[0].is_close(Vector2D(10, 12))


def test_container_band_reserved():
    graph = _graph((0, 0), (2, 4), (-2, 2))
    normalize(graph, (40, 20), container_fraction=0.25)

    assert graph.nodes[0].y == pytest.approx(5.0)
    assert min(p.y for p in graph.nodes) >= 5.0
    assert max(p.y for p in graph.nodes) == pytest.approx(20.0)

    assert graph.container
    for p in graph.container:
        assert 0.0 <= p.x <= 40.0
        assert 0.0 <= p.y <= 5.0


def test_no_container_without_fraction():
    graph = _graph((0, 0), (1, 1))
    normalize(graph, (10, 10))
    assert graph.container == []


def test_curved_segments_follow_nodes():
    graph = TreeGraph()
    graph.add_node(Vector2D(0, 0))
    seg = GrowthSegment(Vector2D(0, 0), Vector2D(3, 4), bow=0.4)
    graph.add_node(Vector2D(3, 4), parent=0, segment=seg)
    normalize(graph, (20, 20))

    moved = graph.segments[1]
    assert moved.start.is_close(graph.nodes[0])
    assert moved.end.is_close(graph.nodes[1])
    # The control point is part of the bounding box
    for p in moved.points:
        assert 0.0 <= p.x <= 20.0
        assert 0.0 <= p.y <= 20.0


def test_container_outline_shape():
    outline = container_outline((40, 20), top=5.0, root_x=20.0)

    xs = [p.x for p in outline]
    assert min(xs) == pytest.approx(10.0)
    assert max(xs) == pytest.approx(30.0)
    assert {round(p.y, 6) for p in outline} >= {0.0, 5.0}


def test_invalid_arguments():
    graph = _graph((0, 0), (1, 1))
    with pytest.raises(ValueError, match="Bounds must be positive"):
        normalize(graph, (0, 10))
    with pytest.raises(ValueError, match="container_fraction"):
        normalize(graph, (10, 10), container_fraction=1.5)


def test_symmetric_degenerate_axis_scales_leaves_by_half_width():
    """
    A vertical trunk has zero half-width; a unit offset then spans half the canvas.
    """
    graph = _graph((0, 0), (0, 2))
    graph.add_leaves(1, [Vector2D(1, 0)])
    normalize(graph, (10, 10), symmetric=True)

    assert graph.nodes[1].x == pytest.approx(5.0)
    assert graph.leaves_of(1)[0].x == pytest.approx(5.0)
