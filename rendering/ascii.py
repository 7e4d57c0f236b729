"""
Character-buffer rendering of bonsai frames for plain terminals.
"""

import math
from typing import Iterable, List, Tuple

from bonsai.animation import PointType, StaticFrame

GLYPHS = {
    PointType.BRANCH: '*',
    PointType.LEAF: '&',
    PointType.CONTAINER: '=',
}


def empty_buffer(width: int, height: int) -> List[List[str]]:
    """Grid of (height + 1) rows by (width + 1) columns so the far edges are drawable."""
    return [[' '] * (width + 1) for _ in range(height + 1)]


def plot_points(buffer: List[List[str]], points: Iterable[Tuple[float, float]], glyph: str):
    """Stamp points into the buffer; y grows upward, so row 0 is the top edge."""
    rows = len(buffer)
    cols = len(buffer[0]) if rows else 0
    for x, y in points:
        col = math.floor(x)
        row = rows - 1 - math.floor(y)
        if 0 <= col < cols and 0 <= row < rows:
            buffer[row][col] = glyph


def fill_buffer(frame: StaticFrame, width: int, height: int) -> List[List[str]]:
    buffer = empty_buffer(width, height)
    plot_points(buffer, frame.container, GLYPHS[PointType.CONTAINER])
    plot_points(buffer, frame.branches, GLYPHS[PointType.BRANCH])
    plot_points(buffer, frame.leaves, GLYPHS[PointType.LEAF])
    return buffer


def render_text(frame: StaticFrame, width: int, height: int) -> str:
    return '\n'.join(''.join(row).rstrip() for row in fill_buffer(frame, width, height))
