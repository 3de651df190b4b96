"""
Diagnostics Plots for fluid simulations.

Plots the per-frame diagnostics recorded by the run loop.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

log = logging.getLogger(__name__)


def plot_diagnostics(timeseries_df: pd.DataFrame, N: int, output_dir: Path) -> Path:
    """Plot diagnostics history (one panel per quantity) over frames."""
    if timeseries_df.empty:
        log.warning("No timeseries data available for diagnostics plot")
        return None

    sns.set_style("darkgrid")

    columns = [c for c in timeseries_df.columns if c != "frame"]
    fig, axes = plt.subplots(len(columns), 1, figsize=(7, 2.2 * len(columns)), sharex=True, squeeze=False)

    for ax, col in zip(axes[:, 0], columns):
        sns.lineplot(data=timeseries_df, x="frame", y=col, ax=ax)
        ax.set_ylabel(col.replace("_", " ").capitalize())

    axes[-1, 0].set_xlabel("Frame")
    fig.suptitle(rf"Diagnostics, $N={N}$")
    fig.tight_layout()

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "diagnostics.pdf"
    fig.savefig(output_path)
    plt.close(fig)

    return output_path
