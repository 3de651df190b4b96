"""Tests for semi-Lagrangian advection."""

import numpy as np
import pytest

from solvers.stable_fluids import BoundaryType, Grid, advect


@pytest.fixture
def grid():
    return Grid(8)


@pytest.fixture
def field(grid):
    rng = np.random.default_rng(11)
    return rng.uniform(0.0, 1.0, grid.size).astype(np.float32)


def uniform(grid, value):
    return np.full(grid.size, value, dtype=np.float32)


class TestAdvect:
    """Tests for advect()."""

    def test_zero_velocity_is_identity(self, grid, field):
        out = grid.zeros()
        advect(out, field, grid.zeros(), grid.zeros(), grid.n, BoundaryType.CONTINUOUS, dt=0.1)
        np.testing.assert_array_equal(grid.interior(out), grid.interior(field))

    def test_shift_by_one_cell(self, grid, field):
        """u * dt * N == 1 samples the left neighbour."""
        out = grid.zeros()
        advect(out, field, uniform(grid, 1.0), grid.zeros(), grid.n, BoundaryType.CONTINUOUS, dt=0.125)

        src, dst = grid.as_2d(field), grid.as_2d(out)
        np.testing.assert_array_equal(dst[1:-1, 2:-1], src[1:-1, 1:-2])
        # i = 1 traces back to x = 0, clamped to 0.5
        np.testing.assert_allclose(dst[1:-1, 1], 0.5 * (src[1:-1, 0] + src[1:-1, 1]), rtol=1e-6)

    def test_bilinear_reproduces_linear_field(self, grid):
        s = grid.stride
        i, j = np.meshgrid(np.arange(s), np.arange(s))
        linear = (2.0 * i + 3.0 * j).astype(np.float32).ravel()
        u, v, dt = np.float32(0.3), np.float32(-0.2), 0.1

        out = grid.zeros()
        advect(out, linear, uniform(grid, u), uniform(grid, v), grid.n, BoundaryType.CONTINUOUS, dt)

        expected = 2.0 * (i - dt * float(u) * grid.n) + 3.0 * (j - dt * float(v) * grid.n)
        np.testing.assert_allclose(grid.interior(out), expected[1:-1, 1:-1], rtol=1e-5)

    def test_trace_clamped_low(self, grid, field):
        out = grid.zeros()
        advect(out, field, uniform(grid, 1e6), grid.zeros(), grid.n, BoundaryType.CONTINUOUS, dt=0.1)

        src, dst = grid.as_2d(field), grid.as_2d(out)
        expected = np.repeat((0.5 * (src[1:-1, 0] + src[1:-1, 1]))[:, None], grid.n, axis=1)
        np.testing.assert_allclose(dst[1:-1, 1:-1], expected, rtol=1e-6)

    def test_trace_clamped_high(self, grid, field):
        n = grid.n
        out = grid.zeros()
        advect(out, field, uniform(grid, -1e6), grid.zeros(), n, BoundaryType.CONTINUOUS, dt=0.1)

        src, dst = grid.as_2d(field), grid.as_2d(out)
        expected = np.repeat((0.5 * (src[1:-1, n] + src[1:-1, n + 1]))[:, None], n, axis=1)
        np.testing.assert_allclose(dst[1:-1, 1:-1], expected, rtol=1e-6)

    def test_trace_clamped_to_corner(self, grid, field):
        out = grid.zeros()
        big = uniform(grid, 1e6)
        advect(out, field, big, big, grid.n, BoundaryType.CONTINUOUS, dt=0.1)

        src = grid.as_2d(field)
        corner = 0.25 * (src[0, 0] + src[0, 1] + src[1, 0] + src[1, 1])
        np.testing.assert_allclose(grid.interior(out), corner, rtol=1e-6)

    def test_boundary_applied(self, grid, field):
        out = grid.zeros()
        advect(out, field, uniform(grid, 0.5), uniform(grid, 0.5), grid.n, BoundaryType.LEFT_RIGHT_WALLS, 0.05)
        f = grid.as_2d(out)
        np.testing.assert_array_equal(f[1:-1, 0], -f[1:-1, 1])
        np.testing.assert_array_equal(f[0, 1:-1], f[1, 1:-1])
