"""
Coordinate Transforms
=====================

Maps from the plane to itself. A transform is not a region: to move a region,
wrap it in a TransformedRegion, which evaluates region(transform(x)).
"""

import numpy as np
from typing import Sequence


class Rotation:
    """
    Counterclockwise rotation by `angle` radians about `pivot`.

        x -> R(angle) (x - pivot) + pivot

    Example:
        >>> Rotation(np.pi / 2)(np.array([1.0, 0.0]))
        array([6.123234e-17, 1.000000e+00])
    """

    def __init__(self, angle: float, pivot: Sequence[float] = (0.0, 0.0)):
        self.angle = float(angle)
        self.pivot = np.asarray(pivot, dtype=np.float64)
        c, s = np.cos(self.angle), np.sin(self.angle)
        self.matrix = np.array([[c, -s], [s, c]])

    def __call__(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        return (x - self.pivot) @ self.matrix.T + self.pivot

    def inverse(self) -> "Rotation":
        """Rotation by -angle about the same pivot."""
        return Rotation(-self.angle, self.pivot)

    def __repr__(self):
        return f"Rotation(angle={self.angle}, pivot={self.pivot})"


class Translation:
    """Shift by -offset, i.e. a region moved by +offset when composed."""

    def __init__(self, offset: Sequence[float]):
        self.offset = np.asarray(offset, dtype=np.float64)

    def __call__(self, x: np.ndarray) -> np.ndarray:
        return np.asarray(x, dtype=np.float64) - self.offset

    def inverse(self) -> "Translation":
        return Translation(-self.offset)

    def __repr__(self):
        return f"Translation(offset={self.offset})"
