"""Scripted source scenarios for non-interactive runs.

A scenario is called once per frame as ``scenario(frame_index, sources)``
with freshly cleared sources and fills whatever it wants injected.
"""

import logging

from .sources import PointerStroke, inject_stroke, point_source

log = logging.getLogger(__name__)


class PointSourceScenario:
    """Constant density emission and force at one cell for the first frames.

    Parameters
    ----------
    grid : Grid
        Grid the sources belong to.
    i, j : int, optional
        Emitter cell. Defaults to the grid centre.
    density : float
        Density source rate.
    force : tuple of float
        Velocity source rate ``(fx, fy)`` applied to the five-point footprint.
    frames : int
        Number of frames the emitter stays on; negative means forever.
    """

    def __init__(self, grid, i=None, j=None, density=1000.0, force=(0.0, 0.0), frames=-1):
        self.grid = grid
        self.i = grid.n // 2 if i is None else int(i)
        self.j = grid.n // 2 if j is None else int(j)
        self.density = float(density)
        self.force = (float(force[0]), float(force[1]))
        self.frames = int(frames)

    def __call__(self, frame: int, sources):
        if 0 <= self.frames <= frame:
            return
        point_source(sources, self.grid, self.i, self.j, density=self.density, force=self.force)


class StrokeScenario:
    """A pointer dragged in a straight line across a canvas at constant speed.

    The pointer moves from ``start`` to ``end`` (canvas pixels) over
    ``frames`` frames, producing one input event per frame that is turned
    into sources with ``inject_stroke``.
    """

    def __init__(
        self,
        grid,
        start=(100.0, 250.0),
        end=(400.0, 250.0),
        canvas_size=(500.0, 500.0),
        frames=30,
        frame_ms=1000.0 / 30.0,
        fluid_speed=500.0,
        density=1000.0,
        inset=50.0,
    ):
        self.grid = grid
        self.start = (float(start[0]), float(start[1]))
        self.end = (float(end[0]), float(end[1]))
        self.canvas_size = (float(canvas_size[0]), float(canvas_size[1]))
        self.frames = max(int(frames), 1)
        self.frame_ms = float(frame_ms)
        self.fluid_speed = float(fluid_speed)
        self.density = float(density)
        self.inset = float(inset)

    def position(self, frame: int):
        t = min(frame / self.frames, 1.0)
        return (
            self.start[0] + (self.end[0] - self.start[0]) * t,
            self.start[1] + (self.end[1] - self.start[1]) * t,
        )

    def __call__(self, frame: int, sources):
        if frame >= self.frames:
            return
        prev, current = self.position(frame), self.position(frame + 1)
        speed = (
            (current[0] - prev[0]) / self.frame_ms,
            (current[1] - prev[1]) / self.frame_ms,
        )
        stroke = PointerStroke(prev=prev, current=current, speed=speed)
        inject_stroke(
            sources,
            self.grid,
            stroke,
            self.canvas_size,
            fluid_speed=self.fluid_speed,
            density=self.density,
            inset=self.inset,
        )
