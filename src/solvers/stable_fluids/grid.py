"""Cell-centred grid with a one-cell ghost border.

All fields live in flat float32 buffers of size ``(N+2)**2``. The cell at
``(i, j)`` (column ``i``, row ``j``, ghost cells included) lives at offset
``i + (N+2)*j``, so a field reshaped to ``(N+2, N+2)`` is indexed ``[j, i]``.
"""

import numpy as np


FIELD_DTYPE = np.float32


class Grid:
    """Addressing for an ``N x N`` interior surrounded by ghost cells.

    Parameters
    ----------
    n : int
        Number of interior cells per axis. Must be positive.
    """

    def __init__(self, n: int):
        if int(n) != n or n <= 0:
            raise ValueError(f"Grid resolution must be a positive integer, got {n!r}")
        self.n = int(n)
        self.stride = self.n + 2
        self.size = self.stride * self.stride
        self.h = 1.0 / self.n

    def __repr__(self):
        return f"Grid(n={self.n})"

    @property
    def shape(self) -> tuple:
        """Storage shape (rows, cols) including ghost cells."""
        return (self.stride, self.stride)

    def index(self, i: int, j: int) -> int:
        """Linear offset of cell ``(i, j)`` for ``0 <= i, j <= N+1``."""
        return i + self.stride * j

    def zeros(self) -> np.ndarray:
        """Allocate a zero-filled field buffer."""
        return np.zeros(self.size, dtype=FIELD_DTYPE)

    def as_2d(self, field: np.ndarray) -> np.ndarray:
        """Zero-copy ``(N+2, N+2)`` view of a flat field, indexed ``[j, i]``."""
        return field.reshape(self.shape)

    def interior(self, field: np.ndarray) -> np.ndarray:
        """Zero-copy view of the ``N x N`` interior, indexed ``[j-1, i-1]``."""
        return self.as_2d(field)[1:-1, 1:-1]

    def check(self, field: np.ndarray, name: str = "field"):
        """Raise ValueError unless ``field`` is a flat buffer of this grid's size."""
        if field.ndim != 1 or field.shape[0] != self.size:
            raise ValueError(
                f"{name} must be a flat buffer of size {self.size}, got shape {field.shape}"
            )

    def cell_centers(self, include_ghosts: bool = True):
        """Physical cell-centre coordinates on the unit square.

        Interior cell ``i`` sits at ``(i - 0.5) * h``; ghost cells sit half a
        cell outside the domain.

        Returns
        -------
        x, y : np.ndarray
            Flat coordinate arrays in field order.
        """
        coords = (np.arange(self.stride) - 0.5) * self.h
        x, y = np.meshgrid(coords, coords)
        if not include_ghosts:
            x, y = x[1:-1, 1:-1], y[1:-1, 1:-1]
        return x.ravel(), y.ravel()
