"""
Fluid Plotting Package.

Renders simulation fields and diagnostics for the fluid solvers.
"""

from .fields import density_to_rgb, plot_density, plot_velocity
from .diagnostics import plot_diagnostics

# Import style module to trigger sns.set_theme() on package import
from . import style  # noqa: F401

__all__ = [
    "density_to_rgb",
    "plot_density",
    "plot_velocity",
    "plot_diagnostics",
]
