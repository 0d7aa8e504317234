"""
Triangular storage of spherical harmonic coefficients.

Gaussian coefficients are indexed by degree n >= 1 and order 0 <= m <= n.
Pairs are packed by ascending degree, then ascending order, so that the
(n, m) pair sits at index (n - 1) * (n + 2) / 2 + m. This is also the order
in which the field synthesis iterates over the coefficients.
"""

import numpy as np

def coefficient_count(order: int) -> int:
    """Number of (n, m) pairs with 1 <= n <= order."""
    return (order * (order + 3)) // 2

def coefficient_index(degree: int, order: int, max_degree: int) -> int:
    """
    Index of the (degree, order) pair in the packed layout.

    Raises:
        IndexError: Unless 0 <= order <= degree <= max_degree, with degree >= 1
    """
    if degree < 1 or order < 0 or order > degree or degree > max_degree:
        raise IndexError(
            f"invalid coefficient indices ({degree}, {order}) for order {max_degree}")
    return ((degree - 1) * (degree + 2)) // 2 + order

class CoefficientStore:
    """
    Flat buffer of coefficients, `width` values per (n, m) pair.

    The loader uses a width of 4 in order to hold the raw values of two
    epochs, or of one epoch and its secular variation. The table is then
    collapsed to the final width of 2, i.e. (g, h).
    """

    def __init__(self, order: int, width: int = 4):
        if order < 1:
            raise ValueError(f"invalid order {order}")
        self.order = order
        self.width = width
        self.data = np.zeros(coefficient_count(order) * width)

    def offset(self, degree: int, order: int) -> int:
        """Offset of the (degree, order) slot in the flat buffer."""
        return self.width * coefficient_index(degree, order, self.order)

    def slot(self, degree: int, order: int) -> np.ndarray:
        """Writable view of the (degree, order) slot."""
        start = self.offset(degree, order)
        return self.data[start:start + self.width]

    def table(self) -> np.ndarray:
        """View of the buffer with one row per (n, m) pair."""
        return self.data.reshape(-1, self.width)

    def extrapolate(self, dt: float) -> np.ndarray:
        """Collapse (g, h, dg, dh) slots to (g + dg * dt, h + dh * dt)."""
        rows = self.table()
        return rows[:, 0:2] + rows[:, 2:4] * dt

    def interpolate(self, t: float) -> np.ndarray:
        """Collapse (g0, h0, g1, h1) slots to (1 - t) * c0 + t * c1."""
        rows = self.table()
        return rows[:, 0:2] * (1. - t) + rows[:, 2:4] * t
