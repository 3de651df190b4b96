"""Helpers that turn pointer input into source buffers.

The solver only consumes ``Sources``; these functions are one way of
filling them from a pointer dragged across a canvas, following the
interactive demo the solver was built for.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from ..datastructures import Sources


@dataclass(frozen=True)
class PointerStroke:
    """Pointer movement between two input events, in canvas pixels.

    ``speed`` is in pixels per millisecond.
    """

    prev: Tuple[float, float]
    current: Tuple[float, float]
    speed: Tuple[float, float]


def pointer_speed(prev, current, elapsed_ms: float) -> Tuple[int, int]:
    """Pointer speed in whole pixels per millisecond, truncated toward zero."""
    if elapsed_ms <= 0:
        return (0, 0)
    return (
        int((current[0] - prev[0]) / elapsed_ms),
        int((current[1] - prev[1]) / elapsed_ms),
    )


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def canvas_to_cell(x: float, y: float, n: int, canvas_size) -> Tuple[int, int]:
    """Map canvas pixel coordinates to a cell index ``(i, j)``."""
    width, height = canvas_size
    return _round_half_up(n * x / width), _round_half_up(n * y / height)


def inside_inset(point, canvas_size, inset: float) -> bool:
    """True when ``point`` lies strictly inside the canvas shrunk by ``inset`` pixels."""
    width, height = canvas_size
    x, y = point
    return inset < x < width - inset and inset < y < height - inset


def point_source(sources: Sources, grid, i: int, j: int, density: float = 0.0, force=(0.0, 0.0)):
    """Set density and force sources at cell ``(i, j)`` and its four neighbours.

    Density is written to the centre cell only. The cell is clamped to
    ``[1, N]`` so the five-point footprint stays inside storage.
    """
    n = grid.n
    i = min(max(int(i), 1), n)
    j = min(max(int(j), 1), n)
    fx, fy = force

    centre = grid.index(i, j)
    if density:
        sources.density[centre] = density
    for di, dj in ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1)):
        c = grid.index(i + di, j + dj)
        sources.velocity_x[c] = fx
        sources.velocity_y[c] = fy
    return sources


def inject_stroke(
    sources: Sources,
    grid,
    stroke: PointerStroke,
    canvas_size,
    fluid_speed: float = 500.0,
    density: float = 1000.0,
    inset: float = 50.0,
) -> bool:
    """Write sources along a pointer stroke.

    Ten points are sampled along the stroke at parameters ``k/5`` for
    ``k = 0..9``, so the trail extends past the current pointer position.
    Nothing is written unless the previous pointer position lies inside the
    inset region of the canvas.

    Returns
    -------
    bool
        Whether anything was injected.
    """
    if not inside_inset(stroke.prev, canvas_size, inset):
        return False

    n = grid.n
    prev_i, prev_j = canvas_to_cell(*stroke.prev, n, canvas_size)
    now_i, now_j = canvas_to_cell(*stroke.current, n, canvas_size)
    force = (stroke.speed[0] * fluid_speed, stroke.speed[1] * fluid_speed)

    for k in range(10):
        i = _round_half_up(prev_i + (now_i - prev_i) * (k / 5))
        j = _round_half_up(prev_j + (now_j - prev_j) * (k / 5))
        point_source(sources, grid, i, j, density=density, force=force)
    return True
