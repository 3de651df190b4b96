"""Data structures for solver configuration and results.

This module defines the configuration and result data structures
for the fluid solvers.

Structure:
- Parameters: Input configuration (logged to MLflow at start)
- Metrics: Output results (logged to MLflow at end)
- Fields: Spatial solution data
- TimeSeries: Per-frame diagnostics history
"""

import time
from dataclasses import dataclass, asdict, field
from typing import List

import numpy as np
import pandas as pd


# ========================================================
# Parameters (Input Configuration)
# ========================================================


@dataclass
class Parameters:
    """Base solver parameters - input configuration for all solvers."""

    N: int = 50
    sub_steps: int = 8
    frame_rate: float = 30.0
    n_frames: int = 120
    method: str = ""

    def __post_init__(self):
        self.validate()

    @property
    def dt(self) -> float:
        """Fixed sub-step size ``1 / (sub_steps * frame_rate)``."""
        return 1.0 / (self.sub_steps * self.frame_rate)

    def validate(self):
        """Raise ValueError on configuration the solver cannot run with."""
        if int(self.N) != self.N or self.N <= 0:
            raise ValueError(f"N must be a positive integer, got {self.N!r}")
        if int(self.sub_steps) != self.sub_steps or self.sub_steps <= 0:
            raise ValueError(f"sub_steps must be a positive integer, got {self.sub_steps!r}")
        if not self.frame_rate > 0:
            raise ValueError(f"frame_rate must be positive, got {self.frame_rate!r}")
        if self.n_frames < 0:
            raise ValueError(f"n_frames must be non-negative, got {self.n_frames!r}")

    def to_dataframe(self):
        return pd.DataFrame([asdict(self)])

    def to_mlflow(self) -> dict:
        """Flat parameter dict for ``mlflow.log_params`` (derived dt included)."""
        return {**asdict(self), "dt": self.dt}


# ========================================================
# Metrics (Output Results)
# ========================================================


@dataclass
class Metrics:
    """Solver metrics - output results computed during/after a run."""

    frames: int = 0
    ticks: int = 0
    finite: bool = True
    wall_time_seconds: float = 0.0
    total_density: float = 0.0
    kinetic_energy: float = 0.0
    enstrophy: float = 0.0
    max_divergence: float = 0.0

    def to_dataframe(self):
        return pd.DataFrame([asdict(self)])

    def to_mlflow(self) -> dict:
        return {k: float(v) for k, v in asdict(self).items()}


# ========================================================
# Fields (Spatial Solution Data)
# ========================================================


@dataclass
class Fields:
    """Interior solution fields (density, u, v) at cell centres (x, y)."""

    density: np.ndarray
    u: np.ndarray
    v: np.ndarray
    x: np.ndarray
    y: np.ndarray

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to DataFrame with one row per grid point."""
        return pd.DataFrame(asdict(self))


@dataclass(frozen=True)
class FieldsView:
    """Read access to the live simulation state after a completed tick.

    The arrays alias the solver's buffers; they are valid until the next
    tick swaps or mutates them. Copy them to keep a snapshot.
    """

    density: np.ndarray
    velocity_x: np.ndarray
    velocity_y: np.ndarray
    n: int

    def copy(self) -> "FieldsView":
        return FieldsView(
            density=self.density.copy(),
            velocity_x=self.velocity_x.copy(),
            velocity_y=self.velocity_y.copy(),
            n=self.n,
        )


# ========================================================
# Time Series (Per-frame Diagnostics)
# ========================================================


@dataclass
class TimeSeries:
    """Diagnostics history (one value per recorded frame)."""

    frame: List[int] = field(default_factory=list)
    total_density: List[float] = field(default_factory=list)
    kinetic_energy: List[float] = field(default_factory=list)
    enstrophy: List[float] = field(default_factory=list)
    max_divergence: List[float] = field(default_factory=list)

    def append(self, frame: int, **values):
        self.frame.append(frame)
        for name, value in values.items():
            getattr(self, name).append(float(value))

    def __len__(self):
        return len(self.frame)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to DataFrame with one row per frame."""
        return pd.DataFrame(asdict(self))

    def to_mlflow_batch(self) -> list:
        """Convert to a list of ``mlflow.entities.Metric`` for batch logging."""
        from mlflow.entities import Metric

        timestamp = int(time.time() * 1000)
        batch = []
        for name, values in asdict(self).items():
            if name == "frame":
                continue
            for step, value in zip(self.frame, values):
                batch.append(Metric(key=name, value=float(value), timestamp=timestamp, step=int(step)))
        return batch


# =============================================================
# Stable Fluids Specific
# ============================================================


@dataclass
class StableFluidsParameters(Parameters):
    """Stable Fluids parameters (extends Parameters with relaxation settings)."""

    diffusion_rate: float = 1e-4  # shared by velocity and density
    diffusion_iterations: int = 4
    projection_iterations: int = 10
    method: str = "Stable-Fluids"

    def validate(self):
        super().validate()
        if not self.diffusion_rate >= 0:
            raise ValueError(f"diffusion_rate must be non-negative, got {self.diffusion_rate!r}")
        counts = (self.diffusion_iterations, self.projection_iterations)
        if any(int(c) != c or c < 0 for c in counts):
            raise ValueError(
                "iteration counts must be non-negative integers, got "
                f"diffusion={self.diffusion_iterations!r}, projection={self.projection_iterations!r}"
            )


@dataclass
class Sources:
    """Per-frame source buffers filled by an input layer.

    Each buffer has the grid's flat size. Values are rates: a tick adds
    ``dt * source`` to the matching field, so sources left in place are
    applied again on every sub-step and frame until cleared.
    """

    density: np.ndarray
    velocity_x: np.ndarray
    velocity_y: np.ndarray

    @classmethod
    def allocate(cls, grid):
        return cls(density=grid.zeros(), velocity_x=grid.zeros(), velocity_y=grid.zeros())

    def clear(self):
        self.density.fill(0.0)
        self.velocity_x.fill(0.0)
        self.velocity_y.fill(0.0)

    def validate(self, grid):
        grid.check(self.density, "density source")
        grid.check(self.velocity_x, "velocity_x source")
        grid.check(self.velocity_y, "velocity_y source")


@dataclass
class StableFluidsSolverFields:
    """Internal solver buffers - current state and double buffers.

    All buffers are flat float32 arrays of size ``(N+2)**2``. The ``*_prev``
    buffers trade places with their partners every step (attribute rebinding,
    never a copy) and double as projection scratch space.
    """

    # Current solution state
    density: np.ndarray
    u: np.ndarray
    v: np.ndarray

    # Double buffers
    density_prev: np.ndarray
    u_prev: np.ndarray
    v_prev: np.ndarray

    # Externally populated sources
    sources: Sources

    @classmethod
    def allocate(cls, grid):
        """Allocate all buffers zero-filled for ``grid``."""
        return cls(
            density=grid.zeros(),
            u=grid.zeros(),
            v=grid.zeros(),
            density_prev=grid.zeros(),
            u_prev=grid.zeros(),
            v_prev=grid.zeros(),
            sources=Sources.allocate(grid),
        )

    def swap_velocity(self):
        self.u, self.u_prev = self.u_prev, self.u
        self.v, self.v_prev = self.v_prev, self.v

    def swap_density(self):
        self.density, self.density_prev = self.density_prev, self.density
