"""
Visualization utilities for generated bonsai trees.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from tqdm import tqdm
from typing import List, NamedTuple, Optional, Tuple
from pathlib import Path

from .animation import AnimationEngine, StaticFrame, static_render
from .config import BonsaiConfig
from .tree import TreeGraph

BRANCH_COLOR = 'saddlebrown'
LEAF_COLOR = 'forestgreen'
CONTAINER_COLOR = 'dimgray'


def _as_array(points) -> np.ndarray:
    return np.array(points, dtype=float) if points else np.empty((0, 2))


def _setup_axes(ax, bounds: Tuple[int, int]):
    width, height = bounds
    ax.set_xlim(0, width)
    ax.set_ylim(0, height)
    ax.set_aspect('equal')
    ax.axis('off')


def visualize_tree(
    frame: StaticFrame,
    bounds: Tuple[int, int],
    point_size: float = 2.0,
    figsize: Tuple[int, int] = (8, 8),
    save_path: Optional[str] = None,
    show: bool = True
):
    """Draw a static frame, one scatter layer per point type."""
    fig, ax = plt.subplots(figsize=figsize)

    for points, color in ((frame.container, CONTAINER_COLOR),
                          (frame.branches, BRANCH_COLOR),
                          (frame.leaves, LEAF_COLOR)):
        arr = _as_array(points)
        if len(arr) > 0:
            ax.scatter(arr[:, 0], arr[:, 1], c=color, s=point_size, linewidths=0)

    _setup_axes(ax, bounds)
    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor='white', edgecolor='none')
        print(f"Saved visualization to {save_path}")

    if show:
        plt.show()
    return fig, ax


class GrowthFrame(NamedTuple):
    """Point counts visible after a tick; each frame is a prefix of the final lists."""
    branches: int
    leaves: int
    container: int
    tick: int


def collect_growth_frames(
    graph: TreeGraph,
    config: BonsaiConfig,
    frame_skip: int = 1
) -> Tuple[StaticFrame, List[GrowthFrame]]:
    """
    Drain the animation engine once, keeping every Nth tick as a frame.

    Engine batches only ever append, so a frame is stored as counts into the
    accumulated lists rather than as a copy of the points. The final state is
    always kept.
    """
    if frame_skip < 1:
        raise ValueError(f"frame_skip must be >= 1, got {frame_skip}")

    engine = AnimationEngine.from_config(graph, config)
    accumulated = StaticFrame()
    frames: List[GrowthFrame] = []

    def mark():
        frames.append(GrowthFrame(len(accumulated.branches), len(accumulated.leaves),
                                  len(accumulated.container), engine.ticks))

    mark()
    with tqdm(desc="Collecting growth frames", unit="tick") as progress:
        for batch in engine:
            accumulated.extend(batch)
            if engine.ticks % frame_skip == 0:
                mark()
            progress.update(1)
    if frames[-1].tick != engine.ticks:
        mark()
    return accumulated, frames


def animate_growth(
    graph: TreeGraph,
    config: BonsaiConfig,
    interval: int = 50,
    point_size: float = 2.0,
    figsize: Tuple[int, int] = (8, 8),
    save_path: Optional[str] = None,
    frame_skip: int = 1,
    show: bool = True
) -> FuncAnimation:
    """
    Animate the growth of a generated tree.

    frame_skip: Only keep every Nth engine tick as a frame. The final state is always kept.
    """
    accumulated, frames_data = collect_growth_frames(graph, config, frame_skip)
    branches = _as_array(accumulated.branches)
    leaves = _as_array(accumulated.leaves)
    container = _as_array(accumulated.container)

    print(f"Collected {len(frames_data)} frames for animation")

    fig, ax = plt.subplots(figsize=figsize)
    _setup_axes(ax, config.bounds)

    container_scatter = ax.scatter([], [], c=CONTAINER_COLOR, s=point_size, linewidths=0)
    branch_scatter = ax.scatter([], [], c=BRANCH_COLOR, s=point_size, linewidths=0)
    leaf_scatter = ax.scatter([], [], c=LEAF_COLOR, s=point_size, linewidths=0)
    title = ax.set_title('Tick: 0')

    def init():
        for scatter in (container_scatter, branch_scatter, leaf_scatter):
            scatter.set_offsets(np.empty((0, 2)))
        return [container_scatter, branch_scatter, leaf_scatter]

    def update(frame_idx):
        frame = frames_data[frame_idx]
        container_scatter.set_offsets(container[:frame.container])
        branch_scatter.set_offsets(branches[:frame.branches])
        leaf_scatter.set_offsets(leaves[:frame.leaves])
        title.set_text(f"Tick: {frame.tick}")
        return [container_scatter, branch_scatter, leaf_scatter]

    anim = FuncAnimation(
        fig, update,
        frames=len(frames_data),
        init_func=init,
        interval=interval,
        blit=False,
        repeat=False
    )

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        print(f"Saving animation ({len(frames_data)} frames)...")
        anim.save(save_path, writer='pillow', fps=max(1, 1000 // interval))
        print(f"Saved animation to {save_path}")

    if show:
        plt.show()
    return anim


def plot_growth_statistics(graph: TreeGraph, save_path: Optional[str] = None, show: bool = True):
    """Plot edge lengths and nodes per depth of a generated tree."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    edge_lengths = [
        graph.nodes[parent].distance_to(graph.nodes[child])
        for parent, child in graph.edges()
    ]
    axes[0].hist(edge_lengths, bins=30, color=BRANCH_COLOR, edgecolor='black')
    axes[0].set_xlabel('Edge Length')
    axes[0].set_ylabel('Count')
    axes[0].set_title('Edge Length Distribution')

    depths = [graph.depth(node) for node in range(len(graph))]
    max_depth = max(depths) if depths else 0
    depth_counts = np.bincount(depths, minlength=max_depth + 1) if depths else np.zeros(1)
    axes[1].bar(range(max_depth + 1), depth_counts, color=LEAF_COLOR, edgecolor='black')
    axes[1].set_xlabel('Tree Depth')
    axes[1].set_ylabel('Node Count')
    axes[1].set_title('Nodes per Depth Level')

    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved statistics to {save_path}")

    if show:
        plt.show()
    return fig, axes


def preview(graph: TreeGraph, config: BonsaiConfig, **kwargs):
    """Static render of a graph drawn with `visualize_tree`."""
    return visualize_tree(static_render(graph, config.edge_samples), config.bounds, **kwargs)
