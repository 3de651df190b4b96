"""Fluid solver framework.

Solver Hierarchy:
-----------------
FluidSolver (abstract base - frame loop, diagnostics, persistence)
└── StableFluidsSolver (semi-Lagrangian Stable Fluids on a ghost-bordered grid)
"""

from .datastructures import (
    # Base classes (shared by all solvers)
    Parameters,
    Metrics,
    Fields,
    FieldsView,
    TimeSeries,
    Sources,
    # Stable Fluids specific
    StableFluidsParameters,
    StableFluidsSolverFields,
)
from .base import FluidSolver
from solvers.stable_fluids.solver import StableFluidsSolver


__all__ = [
    # Base solver
    "FluidSolver",
    # Shared data structures
    "Parameters",
    "Metrics",
    "Fields",
    "FieldsView",
    "TimeSeries",
    "Sources",
    # Stable Fluids solver
    "StableFluidsSolver",
    "StableFluidsParameters",
    "StableFluidsSolverFields",
]
