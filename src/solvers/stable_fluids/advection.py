"""Semi-Lagrangian advection.

Each destination cell is traced one forward-Euler step backwards along the
velocity field and the source field is sampled there by bilinear
interpolation. Trace points are clamped to ``[0.5, N+0.5]`` so the
interpolation stencil never leaves the allocated storage.
"""

import math

from numba import njit

from .boundary import BoundaryType, set_boundary


@njit(cache=True, nogil=True)
def semi_lagrangian_advect(x, x0, u, v, n, dt, boundary_type):
    stride = n + 2
    lo = 0.5
    hi = n + 0.5
    for i in range(1, n + 1):
        for j in range(1, n + 1):
            c = i + stride * j
            p_x = i - dt * u[c] * n
            p_y = j - dt * v[c] * n

            if p_x < lo:
                p_x = lo
            if p_x > hi:
                p_x = hi
            if p_y < lo:
                p_y = lo
            if p_y > hi:
                p_y = hi

            i0 = int(math.floor(p_x))
            i1 = i0 + 1
            j0 = int(math.floor(p_y))
            j1 = j0 + 1

            s1 = p_x - i0
            s0 = 1.0 - s1
            t1 = p_y - j0
            t0 = 1.0 - t1

            x[c] = s0 * (t0 * x0[i0 + stride * j0] + t1 * x0[i0 + stride * j1]) + s1 * (
                t0 * x0[i1 + stride * j0] + t1 * x0[i1 + stride * j1]
            )

    set_boundary(x, n, boundary_type)


def advect(out, x0, velocity_x, velocity_y, n: int, policy: BoundaryType, dt: float):
    """Transport ``x0`` along ``(velocity_x, velocity_y)`` into ``out``.

    ``out`` must not alias ``x0``, ``velocity_x`` or ``velocity_y``.
    """
    semi_lagrangian_advect(out, x0, velocity_x, velocity_y, n, dt, int(policy))
    return out
