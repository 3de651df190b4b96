"""Tests for pointer input mapping, source helpers and scripted scenarios."""

import numpy as np
import pytest

from solvers import Sources
from solvers.stable_fluids import Grid
from solvers.stable_fluids.scenarios import PointSourceScenario, StrokeScenario
from solvers.stable_fluids.sources import (
    PointerStroke,
    canvas_to_cell,
    inject_stroke,
    inside_inset,
    point_source,
    pointer_speed,
)

CANVAS = (500.0, 500.0)


@pytest.fixture
def grid():
    return Grid(50)


@pytest.fixture
def sources(grid):
    return Sources.allocate(grid)


class TestPointerMapping:
    """Tests for canvas-to-grid conversion and pointer speed."""

    def test_canvas_to_cell(self):
        assert canvas_to_cell(250.0, 250.0, 50, CANVAS) == (25, 25)
        assert canvas_to_cell(0.0, 500.0, 50, CANVAS) == (0, 50)

    def test_halves_round_up(self):
        assert canvas_to_cell(255.0, 245.0, 50, CANVAS) == (26, 25)

    def test_inset_is_strict(self):
        assert not inside_inset((50.0, 250.0), CANVAS, 50.0)
        assert inside_inset((51.0, 250.0), CANVAS, 50.0)
        assert not inside_inset((250.0, 460.0), CANVAS, 50.0)

    def test_pointer_speed_truncates_toward_zero(self):
        assert pointer_speed((0.0, 0.0), (-15.0, 25.0), 10.0) == (-1, 2)

    def test_pointer_speed_without_elapsed_time(self):
        assert pointer_speed((0.0, 0.0), (30.0, 30.0), 0.0) == (0, 0)


class TestPointSource:
    """Tests for point_source()."""

    def test_five_point_footprint(self, grid, sources):
        point_source(sources, grid, 10, 20, density=5.0, force=(1.0, -2.0))

        assert np.count_nonzero(sources.density) == 1
        assert sources.density[grid.index(10, 20)] == 5.0
        assert np.count_nonzero(sources.velocity_x) == 5
        for i, j in ((10, 20), (9, 20), (11, 20), (10, 19), (10, 21)):
            assert sources.velocity_x[grid.index(i, j)] == 1.0
            assert sources.velocity_y[grid.index(i, j)] == -2.0

    def test_cell_clamped_into_interior(self, grid, sources):
        point_source(sources, grid, 0, 60, density=1.0, force=(3.0, 0.0))

        assert sources.density[grid.index(1, 50)] == 1.0
        # Footprint may touch the ghost border, never beyond it
        assert sources.velocity_x[grid.index(0, 50)] == 3.0
        assert sources.velocity_x[grid.index(1, 51)] == 3.0

    def test_zero_density_not_written(self, grid, sources):
        sources.density[grid.index(5, 5)] = 9.0
        point_source(sources, grid, 5, 5, force=(1.0, 1.0))
        assert sources.density[grid.index(5, 5)] == 9.0


class TestInjectStroke:
    """Tests for inject_stroke()."""

    def test_stationary_pointer(self, grid, sources):
        stroke = PointerStroke(prev=(250.0, 250.0), current=(250.0, 250.0), speed=(1.0, 0.0))
        assert inject_stroke(sources, grid, stroke, CANVAS)

        assert np.count_nonzero(sources.density) == 1
        assert sources.density[grid.index(25, 25)] == 1000.0
        assert np.count_nonzero(sources.velocity_x) == 5
        assert sources.velocity_x.max() == 500.0
        assert not sources.velocity_y.any()

    def test_trail_overshoots_current_position(self, grid, sources):
        stroke = PointerStroke(prev=(200.0, 250.0), current=(250.0, 250.0), speed=(0.0, 0.0))
        inject_stroke(sources, grid, stroke, CANVAS)

        row = [sources.density[grid.index(i, 25)] for i in range(18, 32)]
        assert row == [0.0, 0.0] + [1000.0] * 10 + [0.0, 0.0]

    def test_outside_inset_injects_nothing(self, grid, sources):
        stroke = PointerStroke(prev=(40.0, 250.0), current=(250.0, 250.0), speed=(1.0, 1.0))
        assert not inject_stroke(sources, grid, stroke, CANVAS)
        assert not sources.density.any()
        assert not sources.velocity_x.any()


class TestScenarios:
    """Tests for the scripted source scenarios."""

    def test_point_scenario_defaults_to_centre(self, grid, sources):
        scenario = PointSourceScenario(grid, force=(0.0, 50.0))
        scenario(0, sources)
        assert sources.density[grid.index(25, 25)] == 1000.0
        assert sources.velocity_y[grid.index(25, 26)] == 50.0

    def test_point_scenario_switches_off(self, grid, sources):
        scenario = PointSourceScenario(grid, i=10, j=10, frames=2)
        scenario(1, sources)
        assert sources.density.any()

        sources.clear()
        scenario(2, sources)
        assert not sources.density.any()

    def test_stroke_scenario(self, grid, sources):
        scenario = StrokeScenario(grid, frames=30)
        assert scenario.position(0) == (100.0, 250.0)
        assert scenario.position(30) == (400.0, 250.0)

        scenario(0, sources)
        # 10 px per frame at 30 fps is 0.3 px/ms
        assert sources.velocity_x.max() == pytest.approx(0.3 * 500.0, rel=1e-5)
        assert sources.density[grid.index(10, 25)] == 1000.0

        sources.clear()
        scenario(30, sources)
        assert not sources.density.any()
