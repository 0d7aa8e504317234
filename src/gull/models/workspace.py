import numpy as np

from ..exceptions import AllocationError
from .coefficients import coefficient_count

class Workspace:
    """
    Scratch memory for field computations.

    A single buffer of order * (order + 5) values is split into the
    longitude sine and cosine multiples (sl, cl) and the Legendre
    recurrence terms (p, q). A workspace can be reused for successive
    computations but must not be shared between concurrent ones.
    """

    def __init__(self, order: int = 0):
        self.order = 0
        self.buffer = np.empty(0)
        if order > 0:
            self.resize_for(order)

    def resize_for(self, order: int) -> "Workspace":
        """Size the workspace for the given order, reallocating only if needed."""
        if order == self.order:
            return self
        try:
            self.buffer = np.empty(order * (order + 5))
        except MemoryError:
            raise AllocationError("could not allocate memory")
        self.order = order
        return self

    @property
    def sl(self) -> np.ndarray:
        return self.buffer[:self.order]

    @property
    def cl(self) -> np.ndarray:
        return self.buffer[self.order:2 * self.order]

    @property
    def p(self) -> np.ndarray:
        npq = coefficient_count(self.order)
        return self.buffer[2 * self.order:2 * self.order + npq]

    @property
    def q(self) -> np.ndarray:
        npq = coefficient_count(self.order)
        return self.buffer[2 * self.order + npq:]
