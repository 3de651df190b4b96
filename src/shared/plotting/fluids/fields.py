"""
Field Visualization Plots for fluid simulations.

Color-maps the density tracer the way the interactive demo draws it and
overlays the velocity field as arrows.
"""

import logging
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from scipy.interpolate import RectBivariateSpline

log = logging.getLogger(__name__)


def _interior(field: np.ndarray, n: int) -> np.ndarray:
    return np.asarray(field).reshape(n + 2, n + 2)[1:-1, 1:-1]


def density_to_rgb(density: np.ndarray, n: int, scale: float = 0.08, cmap: str = "jet") -> np.ndarray:
    """Map interior density to 8-bit RGB.

    Each cell's colour is ``cmap(clamp(density * scale, 0, 1))``.

    Returns
    -------
    np.ndarray
        ``(N, N, 3)`` uint8 image indexed ``[j-1, i-1]`` (row ``j`` grows
        downwards, as on a canvas).
    """
    values = np.clip(_interior(density, n).astype(np.float64) * scale, 0.0, 1.0)
    rgba = matplotlib.colormaps[cmap](values)
    return np.round(rgba[..., :3] * 255).astype(np.uint8)


def plot_density(
    view,
    output_path: Path,
    scale: float = 0.08,
    cmap: str = "jet",
    upsample: int = 1,
    title: str = None,
) -> Path:
    """Render the density field of a FieldsView to an image file.

    Parameters
    ----------
    view : FieldsView
        Fields to render.
    output_path : Path
        Destination file; the suffix selects the format.
    scale : float
        Density multiplier applied before clamping to the colormap range.
    upsample : int
        If greater than 1, resample the interior with a bicubic spline onto
        a grid ``upsample`` times finer before colouring.
    """
    n = view.n
    if upsample > 1:
        coords = (np.arange(1, n + 1) - 0.5) / n
        fine = np.linspace(coords[0], coords[-1], n * upsample)
        spline = RectBivariateSpline(coords, coords, _interior(view.density, n).astype(np.float64))
        values = np.clip(spline(fine, fine) * scale, 0.0, 1.0)
        image = matplotlib.colormaps[cmap](values)[..., :3]
    else:
        image = density_to_rgb(view.density, n, scale=scale, cmap=cmap)

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.imshow(image, origin="upper", extent=(0.0, 1.0, 1.0, 0.0), interpolation="nearest")
    ax.set_xlabel(r"$x$")
    ax.set_ylabel(r"$y$")
    ax.set_title(title or rf"Density, $N={n}$")
    ax.grid(False)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return output_path


def plot_velocity(view, output_path: Path, stride: int = 1, title: str = None) -> Path:
    """Quiver plot of the interior velocity over its magnitude."""
    n = view.n
    u = _interior(view.velocity_x, n).astype(np.float64)
    v = _interior(view.velocity_y, n).astype(np.float64)
    coords = (np.arange(1, n + 1) - 0.5) / n
    X, Y = np.meshgrid(coords, coords)
    speed = np.sqrt(u**2 + v**2)

    fig, ax = plt.subplots(figsize=(7, 6))
    mesh = ax.pcolormesh(X, Y, speed, cmap="coolwarm", shading="nearest")
    s = slice(None, None, max(1, int(stride)))
    ax.quiver(X[s, s], Y[s, s], u[s, s], v[s, s], color=(1, 1, 1, 0.7), zorder=2)
    ax.invert_yaxis()
    ax.set_aspect("equal")
    ax.set_xlabel(r"$x$")
    ax.set_ylabel(r"$y$")
    ax.set_title(title or rf"Velocity, $N={n}$")
    plt.colorbar(mesh, ax=ax, label=r"$|\mathbf{u}|$")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return output_path
