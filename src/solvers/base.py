"""Abstract base solver for time-stepped 2D fluid simulations."""

from abc import ABC, abstractmethod
import logging
import time
from pathlib import Path

import numpy as np
import mlflow

from .datastructures import Fields, FieldsView, Metrics, TimeSeries
from .metrics import enstrophy, is_finite, kinetic_energy, max_abs_divergence, total_density

log = logging.getLogger(__name__)


class FluidSolver(ABC):
    """Abstract base solver for a fluid simulation driven frame by frame.

    Handles:
    - Parameter management (input configuration)
    - Frame loop (sub-steps per frame, externally supplied sources)
    - Diagnostics and metrics tracking (output results)
    - Persistence and live MLflow logging

    Subclasses must:
    - Set Parameters class attribute (e.g., StableFluidsParameters)
    - Set ``self.grid`` and call _init_fields(x, y) after allocating buffers
    - Implement step() - advance one sub-step
    - Implement set_sources() and view(), and expose ``self.sources``
    """

    Parameters = None  # Subclasses set this to their parameter dataclass

    def __init__(self, params=None, **kwargs):
        """Initialize solver with parameters.

        Parameters
        ----------
        params : Parameters, optional
            Parameters object. If not provided, kwargs are used to create params.
        **kwargs
            Configuration parameters passed to Parameters class if params is None.
        """
        if params is None:
            if self.Parameters is None:
                raise ValueError("Subclass must define Parameters class attribute")
            params = self.Parameters(**kwargs)
        else:
            params.validate()

        self.params = params
        self.metrics = Metrics()
        self.fields = None  # Initialized by subclass via _init_fields()
        self.time_series = TimeSeries()
        self.ticks = 0
        self.frames = 0

    def _init_fields(self, x: np.ndarray, y: np.ndarray):
        """Pre-allocate the output Fields at the given interior coordinates."""
        n_points = len(x)
        self.fields = Fields(
            density=np.zeros(n_points),
            u=np.zeros(n_points),
            v=np.zeros(n_points),
            x=x.copy(),
            y=y.copy(),
        )

    @property
    def dt(self) -> float:
        return self.params.dt

    @abstractmethod
    def step(self):
        """Advance the simulation by one sub-step of size ``dt``."""
        pass

    @abstractmethod
    def set_sources(self, sources):
        """Replace the source buffers consumed by the following ticks."""
        pass

    @abstractmethod
    def view(self) -> FieldsView:
        """Read access to the current density and velocity fields."""
        pass

    def frame(self, sources=None) -> FieldsView:
        """Run one rendered frame (``sub_steps`` ticks) and return the fields.

        Parameters
        ----------
        sources : Sources, optional
            Sources for this frame. If omitted, the sources already held by
            the solver are applied again.
        """
        if sources is not None:
            self.set_sources(sources)
        for _ in range(int(self.params.sub_steps)):
            self.step()
            self.ticks += 1
        self.frames += 1
        return self.view()

    def _finalize_fields(self):
        """Copy the interior of the live buffers to the output fields."""
        view = self.view()
        self.fields.density[:] = self.grid.interior(view.density).ravel()
        self.fields.u[:] = self.grid.interior(view.velocity_x).ravel()
        self.fields.v[:] = self.grid.interior(view.velocity_y).ravel()

    def diagnostics(self) -> dict:
        """Scalar diagnostics of the current state."""
        view = self.view()
        u, v = view.velocity_x, view.velocity_y
        return {
            "total_density": total_density(view.density, self.grid),
            "kinetic_energy": kinetic_energy(u, v, self.grid),
            "enstrophy": enstrophy(u, v, self.grid),
            "max_divergence": max_abs_divergence(u, v, self.grid),
        }

    def run(self, n_frames: int = None, source_fn=None, log_every: int = 10):
        """Run the simulation for a number of frames.

        Stores results in solver attributes:
        - self.fields : Fields dataclass with the final interior fields
        - self.time_series : TimeSeries with per-frame diagnostics
        - self.metrics : Metrics dataclass with run metrics

        Parameters
        ----------
        n_frames : int, optional
            Number of frames. If None, uses params.n_frames.
        source_fn : callable, optional
            ``source_fn(frame_index, sources)`` fills the solver's source
            buffers (already cleared) before each frame. Without it, no
            sources are injected.
        log_every : int
            Log progress (and live MLflow metrics) every this many frames.
            Zero or less logs the final frame only.
        """
        if n_frames is None:
            n_frames = self.params.n_frames

        time_start = time.time()
        mlflow_time = 0.0  # Track time spent on MLflow logging
        finite = True
        values = {}

        for k in range(n_frames):
            sources = self.sources
            sources.clear()
            if source_fn is not None:
                source_fn(k, sources)
            view = self.frame()

            values = self.diagnostics()
            self.time_series.append(self.frames, **values)

            if not is_finite(view.density, view.velocity_x, view.velocity_y):
                log.warning(f"Non-finite field values at frame {self.frames}; stopping run")
                finite = False
                break

            periodic = log_every > 0 and k % log_every == 0
            if periodic or k == n_frames - 1:
                log.info(
                    f"Frame {self.frames}: density={values['total_density']:.4e}, "
                    f"energy={values['kinetic_energy']:.4e}, div={values['max_divergence']:.3e}"
                )

                if mlflow.active_run():
                    t_log_start = time.time()
                    mlflow.log_metrics(values, step=self.frames)
                    mlflow_time += time.time() - t_log_start

        wall_time = time.time() - time_start - mlflow_time  # Exclude MLflow logging time
        log.info(f"Run finished in {wall_time:.2f} seconds (excl. {mlflow_time:.2f}s logging).")

        self._finalize_fields()
        if not values:
            values = self.diagnostics()
        self.metrics = Metrics(
            frames=self.frames,
            ticks=self.ticks,
            finite=finite,
            wall_time_seconds=wall_time,
            total_density=values["total_density"],
            kinetic_energy=values["kinetic_energy"],
            enstrophy=values["enstrophy"],
            max_divergence=values["max_divergence"],
        )
        return self.metrics

    def save(self, filepath):
        """Save complete solver results to an HDF5 file.

        Saves params, metrics, time_series, and fields for later analysis.

        Parameters
        ----------
        filepath : str or Path
            Output file path (use .h5 extension).
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        if self.fields is not None:
            self._finalize_fields()

        import pandas as pd

        with pd.HDFStore(filepath, mode="w", complevel=5) as store:
            store["params"] = self.params.to_dataframe()
            store["metrics"] = self.metrics.to_dataframe()
            store["time_series"] = self.time_series.to_dataframe()
            store["fields"] = self.fields.to_dataframe()
        return filepath
