"""Pytest configuration and fixtures for Stable Fluids tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def small_grid():
    """Grid with a 6x6 interior."""
    from solvers.stable_fluids import Grid

    return Grid(6)


@pytest.fixture
def random_field(small_grid):
    """Reproducible float32 field on the small grid."""
    rng = np.random.default_rng(42)
    return rng.uniform(-1.0, 1.0, small_grid.size).astype(np.float32)


@pytest.fixture
def small_params():
    """Parameters for a small 8x8 test solver."""
    return {
        "N": 8,
        "sub_steps": 8,
        "frame_rate": 30.0,
        "n_frames": 3,
        "diffusion_rate": 1e-4,
    }


@pytest.fixture
def small_solver(small_params):
    """Fresh StableFluidsSolver on an 8x8 interior."""
    from solvers import StableFluidsSolver

    return StableFluidsSolver(**small_params)
