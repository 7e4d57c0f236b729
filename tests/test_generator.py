# File: tests/test_generator.py
"""
Test tiered growth, leaf clusters and the generate / build_tree entry points.
"""

import numpy as np
import pytest

from bonsai import BonsaiConfig, build_tree, generate
from bonsai.growth import new_direction, random_direction
from bonsai.leaves import band_cluster, disc_cluster, generate_leaves
from bonsai.vector import Vector2D


def _snapshot(graph):
    return (
        [p.to_tuple() for p in graph.nodes],
        list(graph.parents),
        {k: [o.to_tuple() for o in v] for k, v in graph.leaf_clusters.items()},
    )


def test_seeded_tree_fits_bounds():
    """
    50x50 canvas, seed 42: a non-trivial tree whose nodes fill the canvas.
    """
    config = BonsaiConfig(width=50, height=50, seed=42)
    graph = build_tree(config)
    graph.validate()

    assert len(graph) > 1
    assert graph.seed == 42
    assert graph.leaf_clusters

    xs = [p.x for p in graph.nodes]
    ys = [p.y for p in graph.nodes]
    assert min(xs) >= 0.0 and max(xs) <= 50.0
    assert min(ys) >= 0.0 and max(ys) <= 50.0

    # The trunk only climbs, so the root sits on the bottom edge and the top is reached
    assert graph.nodes[0].y == pytest.approx(0.0)
    assert max(ys) == pytest.approx(50.0)


def test_same_seed_same_tree():
    config = BonsaiConfig(seed=2024)
    assert _snapshot(build_tree(config)) == _snapshot(build_tree(config))


def test_parents_precede_children():
    for seed in range(5):
        graph = generate(BonsaiConfig(seed=seed))
        graph.validate()
        for node_id, parent in enumerate(graph.parents[1:], start=1):
            assert parent < node_id


def test_tiered_growth_never_descends():
    graph = generate(BonsaiConfig(seed=11))
    assert graph.nodes[0] == Vector2D(0.0, 0.0)
    for parent, child in graph.edges():
        assert graph.nodes[child].y >= graph.nodes[parent].y
        step = graph.nodes[child] - graph.nodes[parent]
        # Either one horizontal jitter or one step up
        assert (step.x, step.y) in {(1.0, 0.0), (-1.0, 0.0), (0.0, 1.0)}


def test_zero_tiers_gives_single_node():
    graph = build_tree(BonsaiConfig(width=50, height=50, seed=1, tiers=0))
    assert len(graph) == 1
    assert graph.leaf_clusters == {}
    # A lone node lands in the middle of the canvas
    assert graph.nodes[0].is_close(Vector2D(25.0, 25.0))


def test_generate_with_explicit_rng():
    config = BonsaiConfig(tiers=2)
    a = generate(config, rng=np.random.default_rng(5))
    b = generate(config, rng=np.random.default_rng(5))
    assert a.seed is None
    assert _snapshot(a) == _snapshot(b)


def test_unseeded_generation_records_seed():
    graph = generate(BonsaiConfig(tiers=1))
    assert isinstance(graph.seed, int)
    replay = generate(BonsaiConfig(tiers=1, seed=graph.seed))
    assert _snapshot(replay) == _snapshot(graph)


def test_branch_directions():
    rng = np.random.default_rng(0)
    for _ in range(50):
        assert random_direction(rng) in (-1, 0, 1)
        assert new_direction(0, rng) in (-1, 1)
        assert new_direction(1, rng) in (-1, 0, 1)


def test_disc_cluster_rings():
    rng = np.random.default_rng(3)
    offsets = disc_cluster(rng, radius=3.0, rings=3)

    # 6 + 12 + 18 leaves on rings of radius 1, 2 and 3
    assert len(offsets) == 36
    radii = sorted({round(o.magnitude, 6) for o in offsets})
    assert radii == [1.0, 2.0, 3.0]


def test_band_cluster_stays_inside_radius():
    rng = np.random.default_rng(3)
    offsets = band_cluster(rng, radius=4.0, depth=4, density=0.8)

    assert offsets
    assert all(o.magnitude <= 4.0 + 1e-9 for o in offsets)
    # Nothing kept at all still yields the node itself
    assert band_cluster(rng, radius=4.0, depth=4, density=0.0) == [Vector2D(0.0, 0.0)]


def test_generate_leaves_degenerate():
    rng = np.random.default_rng(0)
    assert generate_leaves(rng, BonsaiConfig(leaf_depth=0)) == [Vector2D(0.0, 0.0)]
    assert len(generate_leaves(rng, BonsaiConfig(leaf_style='disc', leaf_depth=2))) == 18
