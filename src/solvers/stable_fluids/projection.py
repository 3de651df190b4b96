"""Pressure projection onto (approximately) divergence-free velocity.

The velocity field is split as ``w = u + grad(p)``: solving
``lap(p) = div(w)`` with Gauss-Seidel and subtracting ``grad(p)`` leaves
the (nearly) divergence-free part ``u``.
"""

from numba import njit

from .boundary import CONTINUOUS, LEFT_RIGHT_WALLS, TOP_BOTTOM_WALLS, set_boundary


@njit(cache=True, nogil=True)
def central_divergence(div, u, v, n):
    """Scaled central-difference divergence ``-h^2 * div(u, v)`` on the interior."""
    stride = n + 2
    h = 1.0 / n
    for i in range(1, n + 1):
        for j in range(1, n + 1):
            c = i + stride * j
            div[c] = -0.5 * h * ((u[c + 1] - u[c - 1]) + (v[c + stride] - v[c - stride]))
    set_boundary(div, n, CONTINUOUS)


@njit(cache=True, nogil=True)
def gauss_seidel_poisson(p, div, n, iterations):
    """Relax the five-point Poisson problem ``4p - sum(neighbours) = div`` in place."""
    stride = n + 2
    for _ in range(iterations):
        for i in range(1, n + 1):
            for j in range(1, n + 1):
                c = i + stride * j
                p[c] = (p[c - 1] + p[c + 1] + p[c - stride] + p[c + stride] + div[c]) / 4.0
        set_boundary(p, n, CONTINUOUS)


@njit(cache=True, nogil=True)
def subtract_gradient(u, v, p, n):
    stride = n + 2
    h = 1.0 / n
    for i in range(1, n + 1):
        for j in range(1, n + 1):
            c = i + stride * j
            u[c] -= (p[c + 1] - p[c - 1]) / (2.0 * h)
            v[c] -= (p[c + stride] - p[c - stride]) / (2.0 * h)
    set_boundary(u, n, LEFT_RIGHT_WALLS)
    set_boundary(v, n, TOP_BOTTOM_WALLS)


def compute_divergence(div, velocity_x, velocity_y, n: int):
    """Write the projector's divergence measure into ``div`` and return it.

    Interior cells hold ``-0.5*h*((u[i+1,j]-u[i-1,j]) + (v[i,j+1]-v[i,j-1]))``;
    the ghost border is mirrored (``CONTINUOUS``).
    """
    central_divergence(div, velocity_x, velocity_y, n)
    return div


def project(velocity_x, velocity_y, p, div, n: int, iterations: int = 10):
    """Remove the divergent part of ``(velocity_x, velocity_y)`` in place.

    Parameters
    ----------
    velocity_x, velocity_y : np.ndarray
        Velocity components, updated in place.
    p, div : np.ndarray
        Scratch buffers for the pressure potential and the divergence.
        Their previous content is discarded.
    n : int
        Interior cells per axis.
    iterations : int
        Number of Gauss-Seidel sweeps for the Poisson solve.
    """
    p.fill(0.0)
    central_divergence(div, velocity_x, velocity_y, n)
    gauss_seidel_poisson(p, div, n, int(iterations))
    subtract_gradient(velocity_x, velocity_y, p, n)
    return velocity_x, velocity_y
