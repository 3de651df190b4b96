"""Tests for field diagnostics."""

import numpy as np
import pytest

from solvers.metrics import (
    discrete_l2_norm,
    enstrophy,
    is_finite,
    kinetic_energy,
    max_abs_divergence,
    total_density,
    vorticity,
)
from solvers.stable_fluids import Grid


@pytest.fixture
def grid():
    return Grid(8)


def solid_rotation(grid):
    """Rigid rotation about the domain centre with unit angular velocity."""
    x, y = grid.cell_centers()
    return (-(y - 0.5)).astype(np.float32), (x - 0.5).astype(np.float32)


class TestNorms:
    def test_l2_norm_of_ones(self):
        assert discrete_l2_norm(np.ones((16, 16)), 1.0 / 16) == pytest.approx(1.0)


class TestFieldDiagnostics:
    """Tests for the scalar diagnostics recorded per frame."""

    def test_total_density_ignores_ghosts(self, grid):
        density = grid.zeros()
        grid.interior(density)[...] = 1.0
        density[grid.index(0, 3)] = 100.0
        assert total_density(density, grid) == pytest.approx(64.0)

    def test_kinetic_energy_uniform_flow(self, grid):
        u = np.ones(grid.size, dtype=np.float32)
        assert kinetic_energy(u, grid.zeros(), grid) == pytest.approx(0.5)
        assert kinetic_energy(u, u, grid) == pytest.approx(1.0)

    def test_vorticity_of_solid_rotation(self, grid):
        u, v = solid_rotation(grid)
        omega = vorticity(u, v, grid)
        assert omega.shape == (grid.n, grid.n)
        np.testing.assert_allclose(omega, 2.0, rtol=1e-5)
        assert enstrophy(u, v, grid) == pytest.approx(2.0, rel=1e-5)

    def test_energy_and_enstrophy_are_squared_l2_norms(self, small_solver):
        grid = small_solver.grid
        rng = np.random.default_rng(9)
        small_solver.arrays.u[:] = rng.uniform(-1.0, 1.0, grid.size)
        small_solver.arrays.v[:] = rng.uniform(-1.0, 1.0, grid.size)
        u, v = small_solver.arrays.u, small_solver.arrays.v

        ui = grid.interior(u).astype(np.float64)
        vi = grid.interior(v).astype(np.float64)
        omega = vorticity(u, v, grid)
        values = small_solver.diagnostics()

        assert values["kinetic_energy"] == pytest.approx(0.5 * np.sum(ui**2 + vi**2) * grid.h**2)
        assert values["enstrophy"] == pytest.approx(0.5 * np.sum(omega**2) * grid.h**2)
        assert values["kinetic_energy"] == pytest.approx(
            0.5 * (discrete_l2_norm(ui, grid.h) ** 2 + discrete_l2_norm(vi, grid.h) ** 2)
        )

    def test_divergence_of_uniform_flow(self, grid):
        u = np.ones(grid.size, dtype=np.float32)
        assert max_abs_divergence(u, u, grid) == 0.0

    def test_divergence_of_expanding_flow(self, grid):
        x, _ = grid.cell_centers()
        u = x.astype(np.float32)
        scratch = grid.zeros()
        # -0.5*h*(2h) per cell
        assert max_abs_divergence(u, grid.zeros(), grid, out=scratch) == pytest.approx(grid.h**2, rel=1e-4)
        assert scratch.any()

    def test_is_finite(self, grid):
        field = grid.zeros()
        assert is_finite(field, field)
        field[3] = np.nan
        assert not is_finite(grid.zeros(), field)
        field[3] = np.inf
        assert not is_finite(field)
