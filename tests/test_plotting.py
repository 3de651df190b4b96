"""Tests for density colouring and plot output."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from shared.plotting.fluids import density_to_rgb, plot_density, plot_diagnostics, plot_velocity
from solvers.stable_fluids import Grid


def jet(value):
    return tuple(np.round(np.array(matplotlib.colormaps["jet"](value)[:3]) * 255).astype(np.uint8))


class TestDensityToRGB:
    """Tests for the density colour mapping."""

    def test_shape_and_dtype(self):
        grid = Grid(8)
        image = density_to_rgb(grid.zeros(), grid.n)
        assert image.shape == (8, 8, 3)
        assert image.dtype == np.uint8

    def test_scale_and_clamp(self):
        grid = Grid(4)
        density = grid.zeros()
        density[grid.index(1, 1)] = 6.25  # 0.5 after scaling
        density[grid.index(2, 1)] = 1000.0
        density[grid.index(3, 1)] = -5.0
        image = density_to_rgb(density, grid.n)

        assert tuple(image[0, 0]) == jet(0.5)
        assert tuple(image[0, 1]) == jet(1.0)
        assert tuple(image[0, 2]) == jet(0.0)
        assert tuple(image[3, 3]) == jet(0.0)

    def test_ghost_cells_not_drawn(self):
        grid = Grid(4)
        density = grid.zeros()
        grid.as_2d(density)[0, :] = 1000.0
        assert (density_to_rgb(density, grid.n) == np.array(jet(0.0))).all()


class TestPlots:
    """Tests that the plot helpers write their files."""

    @pytest.fixture
    def view(self, small_solver):
        small_solver.sources.density[small_solver.grid.index(4, 4)] = 1000.0
        small_solver.sources.velocity_x[small_solver.grid.index(4, 4)] = 50.0
        return small_solver.frame()

    @pytest.mark.parametrize("upsample", [1, 4])
    def test_plot_density(self, view, tmp_path, upsample):
        path = plot_density(view, tmp_path / "density.png", upsample=upsample)
        assert path.exists()

    def test_plot_velocity(self, view, tmp_path):
        path = plot_velocity(view, tmp_path / "plots" / "velocity.png", stride=2)
        assert path.exists()

    def test_plot_diagnostics(self, small_solver, tmp_path):
        small_solver.run(n_frames=2)
        path = plot_diagnostics(small_solver.time_series.to_dataframe(), 8, tmp_path)
        assert path.name == "diagnostics.pdf"
        assert path.exists()

    def test_plot_diagnostics_without_data(self, tmp_path):
        import pandas as pd

        assert plot_diagnostics(pd.DataFrame(), 8, tmp_path) is None
