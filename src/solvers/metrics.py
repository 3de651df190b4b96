"""Shared diagnostics for solver fields.

All functions take flat fields in the grid's storage order and only look
at interior cells.
"""

from __future__ import annotations

import numpy as np

from solvers.stable_fluids.projection import compute_divergence


# -----------------------------------------------------------------------------
# Norms
# -----------------------------------------------------------------------------


def discrete_l2_norm(values: np.ndarray, h: float) -> float:
    """Approximate L2 norm of cell values on a uniform 2D grid of spacing h."""
    return float(np.sqrt(h * h * np.sum(np.abs(values, dtype=np.float64) ** 2)))


# -----------------------------------------------------------------------------
# Field diagnostics
# -----------------------------------------------------------------------------


def total_density(density: np.ndarray, grid) -> float:
    """Sum of density over the interior cells."""
    return float(np.sum(grid.interior(density), dtype=np.float64))


def kinetic_energy(u: np.ndarray, v: np.ndarray, grid) -> float:
    """Kinetic energy ``0.5 * integral(u^2 + v^2) dA`` over the interior."""
    u_norm = discrete_l2_norm(grid.interior(u), grid.h)
    v_norm = discrete_l2_norm(grid.interior(v), grid.h)
    return 0.5 * (u_norm**2 + v_norm**2)


def max_abs_divergence(u: np.ndarray, v: np.ndarray, grid, out: np.ndarray | None = None) -> float:
    """Largest interior magnitude of the projector's divergence measure.

    Parameters
    ----------
    out : np.ndarray, optional
        Scratch buffer of the grid's size. Allocated if not given.
    """
    if out is None:
        out = grid.zeros()
    compute_divergence(out, u, v, grid.n)
    return float(np.max(np.abs(grid.interior(out))))


def vorticity(u: np.ndarray, v: np.ndarray, grid) -> np.ndarray:
    """Interior vorticity ``dv/dx - du/dy`` by central differences, shape (N, N)."""
    u2 = grid.as_2d(u).astype(np.float64)
    v2 = grid.as_2d(v).astype(np.float64)
    dv_dx = (v2[1:-1, 2:] - v2[1:-1, :-2]) / (2 * grid.h)
    du_dy = (u2[2:, 1:-1] - u2[:-2, 1:-1]) / (2 * grid.h)
    return dv_dx - du_dy


def enstrophy(u: np.ndarray, v: np.ndarray, grid) -> float:
    """Enstrophy ``0.5 * integral(omega^2) dA`` over the interior."""
    return 0.5 * discrete_l2_norm(vorticity(u, v, grid), grid.h) ** 2


def is_finite(*fields: np.ndarray) -> bool:
    return all(bool(np.all(np.isfinite(f))) for f in fields)
