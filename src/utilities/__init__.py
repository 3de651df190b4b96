"""Cross-project utilities (Hydra/MLflow, IO)."""

# Keep __init__ lightweight to avoid circular imports during Hydra callback loading.
from utilities.io import (  # noqa: F401
    ensure_output_dir,
    load_fields_zarr,
    load_simulation_data,
    save_fields_zarr,
)

__all__ = [
    "ensure_output_dir",
    "load_fields_zarr",
    "load_simulation_data",
    "save_fields_zarr",
]
