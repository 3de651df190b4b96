"""
Stable Fluids runner - Hydra + MLflow entry point.

Usage:
    uv run python main.py
    uv run python main.py N=64 n_frames=240 scenario=stroke
    uv run python main.py -m N=32,64,128 sweep_name='resolution-N{N}'
    uv run python main.py mlflow.enabled=false
"""

import logging
import os
import sys
from pathlib import Path

import hydra
import mlflow
from dotenv import load_dotenv
from hydra.utils import instantiate
from mlflow.tracking import MlflowClient
from omegaconf import DictConfig, OmegaConf

# Load .env file (for MLflow credentials)
load_dotenv()

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

log = logging.getLogger(__name__)


def create_solver(cfg: DictConfig):
    """Instantiate solver using Hydra's instantiate on solver subtree.

    Common parameters from root config are passed to the solver constructor;
    the solver group's display ``name`` is not.
    """
    solver_cfg = OmegaConf.create({k: v for k, v in cfg.solver.items() if k != "name"})
    return instantiate(
        solver_cfg,
        N=cfg.N,
        sub_steps=cfg.sub_steps,
        frame_rate=cfg.frame_rate,
        n_frames=cfg.n_frames,
        _convert_="partial",
    )


def create_scenario(cfg: DictConfig, solver):
    """Instantiate the source scenario bound to the solver's grid."""
    return instantiate(cfg.scenario, grid=solver.grid, _convert_="all")


def save_outputs(solver, output_dir: Path, cfg: DictConfig) -> list:
    """Write HDF5 results, zarr fields and plots; return the written paths."""
    from shared.plotting.fluids import plot_density, plot_diagnostics, plot_velocity
    from utilities.io import save_fields_zarr

    paths = [solver.save(output_dir / "results.h5")]
    paths += save_fields_zarr(solver.view(), output_dir / "fields")

    plots = cfg.get("plots", {})
    if plots.get("enabled", True):
        view = solver.view()
        paths.append(
            plot_density(
                view,
                output_dir / "density.png",
                scale=plots.get("density_scale", 0.08),
                cmap=plots.get("cmap", "jet"),
                upsample=plots.get("upsample", 1),
            )
        )
        paths.append(plot_velocity(view, output_dir / "velocity.png", stride=plots.get("quiver_stride", 2)))
        diagnostics_path = plot_diagnostics(solver.time_series.to_dataframe(), cfg.N, output_dir)
        if diagnostics_path is not None:
            paths.append(diagnostics_path)
    return paths


def run(cfg: DictConfig, output_dir: Path):
    """Build the solver and scenario, run all frames and save the outputs."""
    solver = create_solver(cfg)
    scenario = create_scenario(cfg, solver)

    log.info(f"Running {cfg.solver.name}: N={cfg.N}, frames={cfg.n_frames}, dt={solver.dt:.6g}")
    solver.run(source_fn=scenario, log_every=cfg.get("log_every", 10))
    paths = save_outputs(solver, output_dir, cfg)
    return solver, paths


@hydra.main(config_path="conf", config_name="config", version_base=None)
def main(cfg: DictConfig) -> None:
    """Hydra entry point - runs the simulation with optional MLflow tracking."""
    from cli.console import dim, header, print_summary
    from utilities.mlflow import setup_mlflow_tracking

    output_dir = Path(hydra.core.hydra_config.HydraConfig.get().runtime.output_dir)

    if not cfg.mlflow.get("enabled", True):
        solver, _ = run(cfg, output_dir)
        header(f"{cfg.solver.name}, N={cfg.N}")
        print_summary(solver.metrics.to_mlflow())
        dim(f"Outputs written to {output_dir}")
        return

    experiment_name = setup_mlflow_tracking(cfg)
    log.info(f"MLflow experiment: {experiment_name}")

    solver_name = cfg.solver.name
    run_name = f"{solver_name}_N{cfg.N}"

    # Parent run tagging for sweeps (set by MLflowSweepCallback)
    parent_run_id = os.environ.get("MLFLOW_PARENT_RUN_ID")
    scenario_name = hydra.core.hydra_config.HydraConfig.get().runtime.choices.get("scenario", "custom")
    tags = {"solver": solver_name, "scenario": scenario_name}
    if parent_run_id:
        tags.update({"mlflow.parentRunId": parent_run_id, "parent_run_id": parent_run_id, "sweep": "child"})

    with mlflow.start_run(run_name=run_name, tags=tags, nested=bool(parent_run_id)) as active:
        mlflow.log_dict(OmegaConf.to_container(cfg), "config.yaml")

        solver, paths = run(cfg, output_dir)
        mlflow.log_params(solver.params.to_mlflow())
        mlflow.log_metrics(solver.metrics.to_mlflow())

        batch = solver.time_series.to_mlflow_batch()
        if batch:
            MlflowClient().log_batch(active.info.run_id, metrics=batch)

        for path in paths:
            if path.is_dir():
                mlflow.log_artifacts(str(path), artifact_path=f"fields/{path.name}")
            else:
                mlflow.log_artifact(str(path))

        log.info(
            f"Done: {solver.metrics.frames} frames, {solver.metrics.ticks} ticks, "
            f"time={solver.metrics.wall_time_seconds:.2f}s"
        )

    header(f"{run_name} ({experiment_name})")
    print_summary(solver.metrics.to_mlflow())
    dim(f"Outputs written to {output_dir}")


if __name__ == "__main__":
    main()
