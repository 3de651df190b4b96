"""Hydra callback for MLflow parent run management during sweeps."""

import logging
import os
from typing import Dict, Optional

from hydra.experimental.callback import Callback
from omegaconf import DictConfig, OmegaConf

log = logging.getLogger(__name__)


def resolve_sweep_name(template: str, config: DictConfig) -> str:
    """Substitute ``${N}``/``{N}`` in a sweep name with the job's grid size."""
    if "${N}" in template or "{N}" in template:
        n_value = str(int(config.get("N", 50)))
        return template.replace("${N}", n_value).replace("{N}", n_value)
    return template


class MLflowSweepCallback(Callback):
    """Creates or reuses parent MLflow runs for Hydra multiruns.

    Supports grouping by grid resolution:
    - If sweep_name contains {N}, separate parent runs are created per N value
    - Child runs are nested under their respective parent

    Example sweep_name patterns:
    - "my-sweep"          -> Single parent for all runs
    - "my-sweep-N{N}"     -> Separate parent per grid resolution
    """

    def __init__(self) -> None:
        self._parent_runs: Dict[str, str] = {}  # sweep_name -> run_id
        self._tracking_uri: Optional[str] = None
        self._full_experiment_name: Optional[str] = None
        self._base_sweep_name: Optional[str] = None

    def _find_existing_parent(self, experiment_name: str, sweep_name: str) -> Optional[str]:
        """Find an existing parent run with the same sweep_name."""
        import mlflow

        try:
            runs = mlflow.search_runs(
                experiment_names=[experiment_name],
                filter_string=f"tags.sweep = 'parent' AND tags.`mlflow.runName` = '{sweep_name}'",
                order_by=["start_time DESC"],
                max_results=1,
            )
        except Exception as e:
            log.warning(f"Error searching for parent run: {e}")
            return None

        if runs.empty:
            return None
        return runs.iloc[0]["run_id"]

    def _get_or_create_parent(self, sweep_name: str, config: DictConfig) -> str:
        """Get existing parent run or create a new one for this sweep_name."""
        import mlflow

        if sweep_name in self._parent_runs:
            return self._parent_runs[sweep_name]

        existing_id = self._find_existing_parent(self._full_experiment_name, sweep_name)
        if existing_id:
            self._parent_runs[sweep_name] = existing_id
            log.info(f"Reusing existing parent run '{sweep_name}': {existing_id}")
            return existing_id

        parent_run = mlflow.start_run(run_name=sweep_name)
        parent_id = parent_run.info.run_id
        self._parent_runs[sweep_name] = parent_id

        mlflow.log_dict(OmegaConf.to_container(config), "sweep_config.yaml")
        mlflow.set_tag("sweep", "parent")
        if "{N}" in (self._base_sweep_name or ""):
            mlflow.set_tag("N", str(int(config.get("N", 50))))

        # End the run context (we'll reference it by ID)
        mlflow.end_run()

        log.info(f"Created parent run '{sweep_name}': {parent_id}")
        return parent_id

    def on_multirun_start(self, config: DictConfig, **kwargs) -> None:
        """Setup MLflow tracking before sweep starts."""
        from dotenv import load_dotenv

        from utilities.mlflow.io import setup_mlflow_tracking

        load_dotenv()

        self._tracking_uri = config.mlflow.get("tracking_uri", "./mlruns")
        self._full_experiment_name = setup_mlflow_tracking(config)
        self._base_sweep_name = config.get("sweep_name", "sweep")

        # Flag child jobs that a sweep is active (Hydra mode inside jobs is RUN)
        os.environ["MLFLOW_SWEEP_ACTIVE"] = "1"

        log.info(f"MLflow sweep callback initialized for experiment: {self._full_experiment_name}")

    def on_job_start(self, config: DictConfig, **kwargs) -> None:
        """Set parent run ID for each job based on its resolved sweep name."""
        import mlflow

        if os.environ.get("MLFLOW_SWEEP_ACTIVE") != "1":
            return

        if self._tracking_uri:
            mlflow.set_tracking_uri(self._tracking_uri)
        if self._full_experiment_name:
            mlflow.set_experiment(self._full_experiment_name)

        template = self._base_sweep_name or config.get("sweep_name", "sweep")
        parent_id = self._get_or_create_parent(resolve_sweep_name(template, config), config)

        # Child run reads this to nest itself
        os.environ["MLFLOW_PARENT_RUN_ID"] = parent_id

    def on_multirun_end(self, config: DictConfig, **kwargs) -> None:
        """Clean up after sweep completes."""
        if os.environ.get("MLFLOW_SWEEP_ACTIVE") != "1":
            return

        os.environ.pop("MLFLOW_PARENT_RUN_ID", None)
        os.environ.pop("MLFLOW_SWEEP_ACTIVE", None)

        log.info(f"Multirun sweep completed ({len(self._parent_runs)} parent run(s))")
