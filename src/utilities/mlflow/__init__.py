"""MLflow utilities for experiment tracking."""

from .io import experiment_name_from_config, setup_mlflow_tracking

__all__ = [
    "experiment_name_from_config",
    "setup_mlflow_tracking",
]
