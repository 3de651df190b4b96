"""Stable Fluids solver.

Semi-Lagrangian solver for incompressible flow on the unit square with a
passive density tracer, following Stam's "Real-Time Fluid Dynamics for
Games" (GDC 2003): velocity is projected both before and after it advects
itself.
"""

import logging

import numpy as np

from ..base import FluidSolver
from ..datastructures import FieldsView, Sources, StableFluidsParameters, StableFluidsSolverFields
from .advection import advect
from .boundary import BoundaryType
from .diffusion import diffuse
from .grid import Grid
from .projection import project

log = logging.getLogger(__name__)


def add_source(x: np.ndarray, s: np.ndarray, dt: float):
    """``x += dt * s`` in place, evaluated in double precision and stored once."""
    np.add(x, dt * s.astype(np.float64), out=x, casting="same_kind")


class StableFluidsSolver(FluidSolver):
    """Stable Fluids solver on an ``N x N`` grid with a ghost border.

    Parameters
    ----------
    params : StableFluidsParameters
        Grid resolution, sub-steps, frame rate, diffusion rate and the
        Gauss-Seidel iteration counts.

    Examples
    --------
    >>> solver = StableFluidsSolver(N=32)
    >>> solver.sources.density[solver.grid.index(16, 16)] = 1000.0
    >>> fields = solver.frame()
    """

    Parameters = StableFluidsParameters

    def __init__(self, params=None, **kwargs):
        """Initialize Stable Fluids solver."""
        super().__init__(params=params, **kwargs)

        self.grid = Grid(self.params.N)
        self.arrays = StableFluidsSolverFields.allocate(self.grid)

        x, y = self.grid.cell_centers(include_ghosts=False)
        self._init_fields(x=x, y=y)

        log.debug(
            f"Allocated {self.grid} with {self.grid.size} cells per field, dt={self.dt:.6g}"
        )

    @property
    def sources(self) -> Sources:
        return self.arrays.sources

    def set_sources(self, sources: Sources):
        """Adopt ``sources`` as the buffers read by the following ticks."""
        sources.validate(self.grid)
        self.arrays.sources = sources

    def view(self) -> FieldsView:
        a = self.arrays
        return FieldsView(density=a.density, velocity_x=a.u, velocity_y=a.v, n=self.grid.n)

    # ------------------------------------------------------------------
    # Sub-steps
    # ------------------------------------------------------------------

    def velocity_step(self):
        """Diffuse, project, self-advect and re-project the velocity field."""
        a = self.arrays
        n = self.grid.n
        dt = self.dt
        p = self.params

        a.swap_velocity()
        diffuse(a.u, a.u_prev, n, BoundaryType.LEFT_RIGHT_WALLS, p.diffusion_rate, dt, p.diffusion_iterations)
        diffuse(a.v, a.v_prev, n, BoundaryType.TOP_BOTTOM_WALLS, p.diffusion_rate, dt, p.diffusion_iterations)

        # Prev buffers are free here: use them as pressure/divergence scratch
        project(a.u, a.v, a.u_prev, a.v_prev, n, p.projection_iterations)

        a.swap_velocity()
        advect(a.u, a.u_prev, a.u_prev, a.v_prev, n, BoundaryType.LEFT_RIGHT_WALLS, dt)
        advect(a.v, a.v_prev, a.u_prev, a.v_prev, n, BoundaryType.TOP_BOTTOM_WALLS, dt)

        project(a.u, a.v, a.u_prev, a.v_prev, n, p.projection_iterations)

    def density_step(self):
        """Diffuse the density tracer, then advect it along the current velocity."""
        a = self.arrays
        n = self.grid.n
        dt = self.dt
        p = self.params

        a.swap_density()
        diffuse(a.density, a.density_prev, n, BoundaryType.CONTINUOUS, p.diffusion_rate, dt, p.diffusion_iterations)

        a.swap_density()
        advect(a.density, a.density_prev, a.u, a.v, n, BoundaryType.CONTINUOUS, dt)

    def step(self):
        """Advance one sub-step: inject sources, update velocity, then density."""
        a = self.arrays
        s = a.sources
        add_source(a.u, s.velocity_x, self.dt)
        add_source(a.v, s.velocity_y, self.dt)
        add_source(a.density, s.density, self.dt)

        self.velocity_step()
        self.density_step()
        return self.view()
