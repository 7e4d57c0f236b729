"""
Data exporters to convert generated trees into renderer-friendly format.
Keeps external renderers decoupled from generation code.
"""

import json
from pathlib import Path
from typing import Any, Dict, Tuple

from bonsai.animation import StaticFrame
from bonsai.tree import TreeGraph


def export_frame_data(graph: TreeGraph, frame: StaticFrame, output_path: str,
                      bounds: Tuple[int, int]) -> Dict[str, Any]:
    """
    Export a static frame to JSON format for rendering.

    Format:
    {
        "width": int,
        "height": int,
        "seed": int | null,
        "num_nodes": int,
        "branches": [[x, y], ...],
        "leaves": [[x, y], ...],
        "container": [[x, y], ...]
    }
    """
    width, height = bounds
    data = {
        "width": width,
        "height": height,
        "seed": graph.seed,
        "num_nodes": len(graph),
        "branches": [list(p) for p in frame.branches],
        "leaves": [list(p) for p in frame.leaves],
        "container": [list(p) for p in frame.container],
    }

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(data, f)

    return data


def load_frame_data(path: str) -> Dict[str, Any]:
    with open(path, 'r') as f:
        return json.load(f)


def frame_from_data(data: Dict[str, Any]) -> StaticFrame:
    return StaticFrame(
        branches=[tuple(p) for p in data.get('branches', [])],
        leaves=[tuple(p) for p in data.get('leaves', [])],
        container=[tuple(p) for p in data.get('container', [])],
    )
