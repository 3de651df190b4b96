"""Ghost-cell boundary conditions.

Velocity components are wall-bound: ``u`` flips sign across the left/right
walls and ``v`` across the top/bottom walls. Scalars (density, pressure,
divergence) are simply mirrored into the ghost border.
"""

from enum import IntEnum

import numpy as np
from numba import njit


class BoundaryType(IntEnum):
    """Boundary policy applied to a field's ghost border."""

    CONTINUOUS = 0
    LEFT_RIGHT_WALLS = 1
    TOP_BOTTOM_WALLS = 2


# Plain ints for use inside compiled kernels
CONTINUOUS = int(BoundaryType.CONTINUOUS)
LEFT_RIGHT_WALLS = int(BoundaryType.LEFT_RIGHT_WALLS)
TOP_BOTTOM_WALLS = int(BoundaryType.TOP_BOTTOM_WALLS)


@njit(cache=True, nogil=True)
def set_boundary(x, n, boundary_type):
    """Overwrite the ghost border of flat field ``x`` in place.

    Parameters
    ----------
    x : np.ndarray
        Flat field of size ``(n+2)**2``.
    n : int
        Interior cells per axis.
    boundary_type : int
        A ``BoundaryType`` value.
    """
    stride = n + 2
    top = n + 1

    # Top and bottom ghost rows
    for i in range(1, n + 1):
        if boundary_type == TOP_BOTTOM_WALLS:
            x[i] = -x[i + stride]
            x[i + stride * top] = -x[i + stride * n]
        else:
            x[i] = x[i + stride]
            x[i + stride * top] = x[i + stride * n]

    # Left and right ghost columns
    for j in range(1, n + 1):
        if boundary_type == LEFT_RIGHT_WALLS:
            x[stride * j] = -x[1 + stride * j]
            x[top + stride * j] = -x[n + stride * j]
        else:
            x[stride * j] = x[1 + stride * j]
            x[top + stride * j] = x[n + stride * j]

    # Corners: mean of the two adjacent edge ghosts
    x[0] = 0.5 * (x[stride] + x[1])
    x[top] = 0.5 * (x[top + stride] + x[n])
    x[stride * top] = 0.5 * (x[stride * n] + x[1 + stride * top])
    x[top + stride * top] = 0.5 * (x[top + stride * n] + x[n + stride * top])


def enforce(field: np.ndarray, n: int, policy: BoundaryType) -> np.ndarray:
    """Apply ``policy`` to the ghost border of ``field`` in place and return it."""
    set_boundary(field, n, int(BoundaryType(policy)))
    return field
