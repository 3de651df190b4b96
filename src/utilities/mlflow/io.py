"""MLflow I/O utilities for experiment tracking."""

import logging
import os

import mlflow

log = logging.getLogger(__name__)


def experiment_name_from_config(cfg) -> str:
    """Build full experiment name with optional project prefix."""
    name = cfg.experiment_name
    prefix = cfg.mlflow.get("project_prefix", "")
    if prefix and not name.startswith("/"):
        return f"{prefix}/{name}"
    return name


def setup_mlflow_tracking(cfg) -> str:
    """Configure the MLflow tracking URI and experiment from the Hydra config.

    Parameters
    ----------
    cfg : DictConfig
        Config with ``experiment_name`` and an ``mlflow`` group holding
        ``tracking_uri``, ``mode`` and ``project_prefix``.

    Returns
    -------
    str
        The experiment name actually in use.
    """
    tracking_uri = cfg.mlflow.get("tracking_uri", "./mlruns")
    # Local file backend: ignore any URI inherited from the environment
    if str(cfg.mlflow.get("mode", "")).lower() in ("files", "local"):
        os.environ.pop("MLFLOW_TRACKING_URI", None)
    os.environ["MLFLOW_TRACKING_URI"] = str(tracking_uri)
    mlflow.set_tracking_uri(tracking_uri)

    experiment_name = experiment_name_from_config(cfg)
    try:
        mlflow.set_experiment(experiment_name)
    except Exception as exc:
        # A deleted experiment keeps its name reserved
        fallback = f"{experiment_name}-restored"
        log.warning(
            "MLflow set_experiment failed for '%s' (%s); falling back to '%s'",
            experiment_name,
            exc,
            fallback,
        )
        experiment_name = fallback
        mlflow.set_experiment(experiment_name)
    return experiment_name
