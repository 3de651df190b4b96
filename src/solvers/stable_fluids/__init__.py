"""Stable Fluids building blocks.

Grid addressing, boundary conditions and the diffusion, advection and
projection kernels composed by ``solvers.stable_fluids.solver``.
The solver itself is exported from ``solvers``.
"""

from .grid import Grid
from .boundary import BoundaryType, enforce
from .diffusion import diffuse
from .advection import advect
from .projection import compute_divergence, project

__all__ = [
    "Grid",
    "BoundaryType",
    "enforce",
    "diffuse",
    "advect",
    "compute_divergence",
    "project",
]
