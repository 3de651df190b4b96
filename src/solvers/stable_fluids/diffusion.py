"""Implicit diffusion by Gauss-Seidel relaxation."""

from numba import njit

from .boundary import BoundaryType, set_boundary


@njit(cache=True, nogil=True)
def gauss_seidel_diffuse(x, x0, n, a, iterations, boundary_type):
    """Relax ``x - a*lap(x) = x0`` in place with a fixed number of sweeps.

    Sweeps visit ``i`` in the outer loop and ``j`` in the inner loop and read
    ``x`` in place, so later cells see already-updated neighbours.
    """
    stride = n + 2
    denom = 1.0 + 4.0 * a
    for _ in range(iterations):
        for i in range(1, n + 1):
            for j in range(1, n + 1):
                c = i + stride * j
                x[c] = (
                    x0[c] + a * (x[c - 1] + x[c + 1] + x[c - stride] + x[c + stride])
                ) / denom
        set_boundary(x, n, boundary_type)


def diffuse(out, x0, n: int, policy: BoundaryType, rate: float, dt: float, iterations: int = 4):
    """Diffuse ``x0`` into ``out`` at ``rate`` over one time step ``dt``.

    Parameters
    ----------
    out : np.ndarray
        Destination field; its current content is the initial guess.
    x0 : np.ndarray
        Field before diffusion.
    n : int
        Interior cells per axis (``h = 1/n``).
    policy : BoundaryType
        Boundary reapplied after every sweep.
    rate : float
        Diffusion (or kinematic viscosity) coefficient.
    dt : float
        Time step.
    iterations : int
        Number of Gauss-Seidel sweeps.
    """
    h = 1.0 / n
    a = dt * rate / (h * h)
    gauss_seidel_diffuse(out, x0, n, a, int(iterations), int(policy))
    return out
