"""Saving and loading simulation state and results."""

import logging
from pathlib import Path

import numpy as np
import pandas as pd
import zarr

log = logging.getLogger(__name__)

FIELD_NAMES = ("density", "velocity_x", "velocity_y")


def ensure_output_dir(path) -> Path:
    """Create ``path`` (and parents) if needed and return it as a Path."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_fields_zarr(view, directory) -> list:
    """Save the raw buffers of a FieldsView as ``(N+2, N+2)`` zarr arrays.

    Returns
    -------
    list of Path
        One ``<name>.zarr`` store per field.
    """
    directory = ensure_output_dir(directory)
    stride = view.n + 2
    paths = []
    for name in FIELD_NAMES:
        arr = np.asarray(getattr(view, name)).reshape(stride, stride)
        zarr_path = directory / f"{name}.zarr"
        zarr.save(str(zarr_path), arr)
        paths.append(zarr_path)
    log.info(f"Saved fields {', '.join(FIELD_NAMES)} to {directory}")
    return paths


def load_fields_zarr(directory) -> dict:
    """Load fields written by save_fields_zarr as flat arrays keyed by name."""
    directory = Path(directory)
    fields = {}
    for name in FIELD_NAMES:
        zarr_path = directory / f"{name}.zarr"
        if not zarr_path.exists():
            raise FileNotFoundError(f"Field store not found: {zarr_path}")
        fields[name] = np.asarray(zarr.load(str(zarr_path))).ravel()
    return fields


def load_simulation_data(filepath) -> dict:
    """Load a result file written by ``FluidSolver.save``.

    Returns
    -------
    dict
        DataFrames keyed ``params``, ``metrics``, ``time_series`` and ``fields``.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Result file not found: {filepath}")

    with pd.HDFStore(filepath, mode="r") as store:
        return {key: store[key] for key in ("params", "metrics", "time_series", "fields")}
