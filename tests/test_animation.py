# File: tests/test_animation.py
"""
Test the growth animation engine against the static render.
"""

from collections import Counter

import pytest

from bonsai import BonsaiConfig, build_tree
from bonsai.animation import (
    AnimationEngine,
    EdgeGrowth,
    PointType,
    StaticFrame,
    static_render,
)
from bonsai.tree import TreeGraph
from bonsai.vector import Vector2D


def _fork():
    """
    Trunk 0 -> 1 splitting into 1 -> 2 (with three leaves) and 1 -> 3.
    """
    graph = TreeGraph()
    graph.add_node(Vector2D(0, 0))
    graph.add_node(Vector2D(0, 10), parent=0)
    graph.add_node(Vector2D(5, 15), parent=1)
    graph.add_node(Vector2D(-5, 15), parent=1)
    graph.add_leaves(2, [Vector2D(1, 0), Vector2D(0, 1), Vector2D(-1, 0)])
    return graph


def _counts(frame: StaticFrame):
    return Counter((p.to_tuple(), kind) for p, kind in frame.tagged())


def test_static_render_counts():
    graph = _fork()
    frame = static_render(graph, edge_samples=10)

    assert len(frame.branches) == 3 * 11
    assert len(frame.leaves) == 3
    assert frame.container == []
    assert frame.branches[0] == (0.0, 0.0)
    assert frame.branches[10] == (0.0, 10.0)


def test_tick_schedule():
    """
    An edge's children and leaves only start after the edge is complete.
    """
    engine = AnimationEngine(_fork(), edge_samples=10, samples_per_tick=4, leaves_per_tick=2)
    batches = list(engine)

    assert [len(b) for b in batches] == [4, 4, 3, 8, 8, 6, 2, 1]
    assert engine.ticks == 8
    assert engine.done

    # Trunk first: everything on x == 0
    for batch in batches[:3]:
        assert all(p.x == 0.0 and kind is PointType.BRANCH for p, kind in batch)
    # Leaves appear only after the branch they hang from
    for batch in batches[:6]:
        assert all(kind is PointType.BRANCH for _, kind in batch)
    for batch in batches[6:]:
        assert all(kind is PointType.LEAF for _, kind in batch)


def test_union_of_ticks_equals_static_render():
    graph = _fork()
    engine = AnimationEngine(graph, edge_samples=10, samples_per_tick=3, leaves_per_tick=2)
    assert _counts(engine.run()) == _counts(static_render(graph, edge_samples=10))


def test_union_for_generated_tree_with_container():
    config = BonsaiConfig(seed=8, container=True, edge_samples=20,
                          samples_per_tick=7, leaves_per_tick=4)
    graph = build_tree(config)

    animated = AnimationEngine.from_config(graph, config).run()
    static = static_render(graph, config.edge_samples)

    assert animated.container
    assert _counts(animated) == _counts(static)


def test_container_revealed_first():
    config = BonsaiConfig(seed=8, container=True, edge_samples=20, samples_per_tick=7)
    graph = build_tree(config)
    first = AnimationEngine.from_config(graph, config).tick()

    kinds = [kind for _, kind in first]
    assert kinds[:len(graph.container)] == [PointType.CONTAINER] * len(graph.container)


def test_ticks_after_done_are_empty():
    graph = _fork()
    nodes_before = list(graph.nodes)
    engine = AnimationEngine(graph, edge_samples=5, samples_per_tick=5)
    engine.run()

    ticks = engine.ticks
    for _ in range(3):
        assert engine.tick() == []
    assert engine.ticks == ticks
    assert graph.nodes == nodes_before


def test_single_node_tree_renders_nothing():
    graph = TreeGraph()
    graph.add_node(Vector2D(25, 25))

    engine = AnimationEngine(graph)
    assert engine.done
    assert engine.tick() == []
    assert len(static_render(graph)) == 0


def test_edge_growth_progress():
    assert EdgeGrowth(0, 1, 250, 1000).progress == pytest.approx(0.25)


def test_invalid_engine_settings():
    with pytest.raises(ValueError, match="must be positive"):
        AnimationEngine(_fork(), samples_per_tick=0)
    with pytest.raises(ValueError, match="edge_samples"):
        static_render(_fork(), edge_samples=0)


def test_static_frame_extend_and_tagged():
    frame = StaticFrame()
    frame.extend([(Vector2D(1, 2), PointType.BRANCH),
                  (Vector2D(3, 4), PointType.LEAF),
                  (Vector2D(5, 6), PointType.CONTAINER)])

    assert frame.branches == [(1.0, 2.0)]
    assert frame.leaves == [(3.0, 4.0)]
    assert frame.container == [(5.0, 6.0)]
    assert len(frame) == 3
    assert [kind for _, kind in frame.tagged()] == [PointType.BRANCH, PointType.LEAF,
                                                    PointType.CONTAINER]
