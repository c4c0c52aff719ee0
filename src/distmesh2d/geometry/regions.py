"""
Signed Distance Regions
=======================

Planar regions described by signed distance functions (SDFs).

An SDF returns a negative value inside the region, zero on its boundary and a
positive value outside. Away from the boundary the value only needs to have
the right sign; near it, the magnitude should approximate the Euclidean
distance.

Regions compose with union (min), intersect (max) and setdiff (max(f, -g)).
Any callable f(point) -> float is accepted as an operand, so ad-hoc regions
such as `lambda x: -x[1]` can be mixed with the classes below.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, Union

import numpy as np

from . import polygon as _polygon

RegionLike = Union["SignedDistanceFunction", Callable[[np.ndarray], float]]


def evaluate_points(d: RegionLike, points: np.ndarray) -> np.ndarray:
    """
    Evaluate a region at many points.

    Uses the vectorized `evaluate_many` of SignedDistanceFunction instances
    and falls back to one call per point for plain callables.

    Args:
        d: region or callable
        points: shape (n, 2)

    Returns:
        values: shape (n,)
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if isinstance(d, SignedDistanceFunction):
        return np.asarray(d.evaluate_many(points), dtype=np.float64)
    return np.array([d(p) for p in points], dtype=np.float64)


def bounding_box(d: RegionLike) -> Optional[np.ndarray]:
    """Bounding box [[xmin, ymin], [xmax, ymax]] of a region, if known."""
    if isinstance(d, SignedDistanceFunction):
        return d.bounding_box()
    return None


class SignedDistanceFunction(ABC):
    """
    Base class for all signed distance regions.

    Subclasses implement `__call__` for a single point and may override
    `evaluate_many` with a vectorized version.
    """

    @abstractmethod
    def __call__(self, x: np.ndarray) -> float:
        """Signed distance at a single point x, shape (2,)."""

    def evaluate_many(self, points: np.ndarray) -> np.ndarray:
        """Signed distance at each row of points, shape (n, 2)."""
        return np.array([self(p) for p in points], dtype=np.float64)

    def bounding_box(self) -> Optional[np.ndarray]:
        """Axis-aligned box [[xmin, ymin], [xmax, ymax]] or None if unbounded/unknown."""
        return None

    # Set-operation sugar: f | g, f & g, f - g
    def __or__(self, other: RegionLike) -> "CombinedRegion":
        return union(self, other)

    def __ror__(self, other: RegionLike) -> "CombinedRegion":
        return union(other, self)

    def __and__(self, other: RegionLike) -> "CombinedRegion":
        return intersect(self, other)

    def __rand__(self, other: RegionLike) -> "CombinedRegion":
        return intersect(other, self)

    def __sub__(self, other: RegionLike) -> "CombinedRegion":
        return setdiff(self, other)

    def __rsub__(self, other: RegionLike) -> "CombinedRegion":
        return setdiff(other, self)


# ------------------------------------------------------------------------------
# Primitives
# ------------------------------------------------------------------------------
class Circle(SignedDistanceFunction):
    """
    Disk with center `center` and radius `radius`.

        d(x) = |x - center| - radius
    """

    def __init__(self, center: Sequence[float], radius: float):
        self.center = np.asarray(center, dtype=np.float64)
        self.radius = float(radius)

        if self.center.shape != (2,):
            raise ValueError(f"center must have shape (2,), got {self.center.shape}")
        if self.radius <= 0:
            raise ValueError(f"Circle radius must be positive, got {self.radius}")

    def __call__(self, x: np.ndarray) -> float:
        return float(np.linalg.norm(np.asarray(x, dtype=np.float64) - self.center)
                     - self.radius)

    def evaluate_many(self, points: np.ndarray) -> np.ndarray:
        return np.linalg.norm(points - self.center, axis=1) - self.radius

    def bounding_box(self) -> np.ndarray:
        return np.array([self.center - self.radius, self.center + self.radius])

    def __repr__(self):
        return f"Circle(center={self.center}, radius={self.radius})"


class Rect(SignedDistanceFunction):
    """
    Axis-aligned rectangle [x1, x2] × [y1, y2].

    The value is minus the smallest margin to the four sides. It is exact
    inside and along the sides, and underestimates the distance outside near
    the corners.
    """

    def __init__(self, x1: float, x2: float, y1: float, y2: float):
        self.x1, self.x2 = float(x1), float(x2)
        self.y1, self.y2 = float(y1), float(y2)

        if not self.x1 < self.x2:
            raise ValueError(f"Rect requires x1 < x2, got x1={x1}, x2={x2}")
        if not self.y1 < self.y2:
            raise ValueError(f"Rect requires y1 < y2, got y1={y1}, y2={y2}")

    def __call__(self, x: np.ndarray) -> float:
        return -min(x[1] - self.y1, self.y2 - x[1], x[0] - self.x1, self.x2 - x[0])

    def evaluate_many(self, points: np.ndarray) -> np.ndarray:
        x, y = points[:, 0], points[:, 1]
        return -np.minimum.reduce([y - self.y1, self.y2 - y, x - self.x1, self.x2 - x])

    def bounding_box(self) -> np.ndarray:
        return np.array([[self.x1, self.y1], [self.x2, self.y2]])

    def __repr__(self):
        return f"Rect(x1={self.x1}, x2={self.x2}, y1={self.y1}, y2={self.y2})"


class Polygon(SignedDistanceFunction):
    """
    Closed polygon given by its vertices in boundary order.

    The sign comes from the even-odd containment test, the magnitude from the
    distance to the nearest edge. This is exact for convex polygons and
    sign-correct for concave ones.

    Example:
        >>> triangle = Polygon([[0, 0], [1, 0], [0, 1]])
        >>> triangle([0.25, 0.25]) < 0
        True
    """

    def __init__(self, vertices: Sequence[Sequence[float]]):
        self.vertices = np.asarray(vertices, dtype=np.float64)

        if self.vertices.ndim != 2 or self.vertices.shape[1] != 2:
            raise ValueError("vertices must have shape (n_vertices, 2)")
        if len(self.vertices) < 3:
            raise ValueError("A polygon must have at least 3 vertices.")

    def __call__(self, x: np.ndarray) -> float:
        sign = -1.0 if self.contains(x) else 1.0
        return sign * _polygon.distance(self.vertices, x)

    def __contains__(self, x) -> bool:
        return self.contains(x)

    def contains(self, x: np.ndarray) -> bool:
        """Even-odd point-in-polygon test."""
        return _polygon.contains(self.vertices, x)

    def winding_number(self, x: np.ndarray) -> int:
        return _polygon.winding_number(self.vertices, x)

    def distance(self, x: np.ndarray) -> float:
        """Unsigned distance to the boundary."""
        return _polygon.distance(self.vertices, x)

    def bounding_box(self) -> np.ndarray:
        return np.array([self.vertices.min(axis=0), self.vertices.max(axis=0)])

    @classmethod
    def regular(cls, n_sides: int, radius: float,
                center: Sequence[float] = (0.0, 0.0),
                phase: float = 0.0) -> "Polygon":
        """
        Regular n-gon inscribed in a circle.

        Args:
            n_sides: number of sides (>= 3)
            radius: circumradius
            center: center of the circumcircle
            phase: angle of the first vertex [rad]
        """
        theta = phase + 2.0 * np.pi * np.arange(n_sides) / n_sides
        center = np.asarray(center, dtype=np.float64)
        return cls(center + radius * np.column_stack([np.cos(theta), np.sin(theta)]))

    def __repr__(self):
        return f"Polygon(n_vertices={len(self.vertices)})"


class HalfPlane(SignedDistanceFunction):
    """
    Half plane through `point` whose outward normal is `normal`.

        d(x) = (x - point) · n / |n|

    HalfPlane((0, 0), (0, -1)) is the upper half plane y >= 0.
    """

    def __init__(self, point: Sequence[float], normal: Sequence[float]):
        self.point = np.asarray(point, dtype=np.float64)
        normal = np.asarray(normal, dtype=np.float64)
        norm = np.linalg.norm(normal)
        if norm == 0:
            raise ValueError("HalfPlane normal must be non-zero.")
        self.normal = normal / norm

    def __call__(self, x: np.ndarray) -> float:
        return float(np.dot(np.asarray(x, dtype=np.float64) - self.point, self.normal))

    def evaluate_many(self, points: np.ndarray) -> np.ndarray:
        return (points - self.point) @ self.normal

    def __repr__(self):
        return f"HalfPlane(point={self.point}, normal={self.normal})"


# ------------------------------------------------------------------------------
# Combinators
# ------------------------------------------------------------------------------
_OPERATIONS = {
    "union": lambda a, b: np.minimum(a, b),
    "intersect": lambda a, b: np.maximum(a, b),
    "setdiff": lambda a, b: np.maximum(a, -b),
}


class CombinedRegion(SignedDistanceFunction):
    """
    Boolean combination of two regions.

    Attributes:
        op: 'union', 'intersect' or 'setdiff'
        left: first operand
        right: second operand (removed from `left` for 'setdiff')
    """

    def __init__(self, op: str, left: RegionLike, right: RegionLike):
        if op not in _OPERATIONS:
            raise ValueError(f"Unknown operation: {op}")
        if not callable(left) or not callable(right):
            raise ValueError("Operands must be callable regions")
        self.op = op
        self.left = left
        self.right = right

    def __call__(self, x: np.ndarray) -> float:
        return float(_OPERATIONS[self.op](self.left(x), self.right(x)))

    def evaluate_many(self, points: np.ndarray) -> np.ndarray:
        return _OPERATIONS[self.op](evaluate_points(self.left, points),
                                    evaluate_points(self.right, points))

    def bounding_box(self) -> Optional[np.ndarray]:
        left = bounding_box(self.left)
        right = bounding_box(self.right)

        if self.op == "setdiff":
            return left
        if self.op == "union":
            if left is None or right is None:
                return None
            return np.array([np.minimum(left[0], right[0]),
                             np.maximum(left[1], right[1])])
        # intersect
        if left is None:
            return right
        if right is None:
            return left
        return np.array([np.maximum(left[0], right[0]),
                         np.minimum(left[1], right[1])])

    def __repr__(self):
        return f"CombinedRegion({self.op!r}, {self.left!r}, {self.right!r})"


def union(f: RegionLike, g: RegionLike) -> CombinedRegion:
    """Union of the regions of f and g: min(f, g)."""
    return CombinedRegion("union", f, g)


def intersect(f: RegionLike, g: RegionLike) -> CombinedRegion:
    """Intersection of the regions of f and g: max(f, g)."""
    return CombinedRegion("intersect", f, g)


def setdiff(f: RegionLike, g: RegionLike) -> CombinedRegion:
    """Region of f with the region of g removed: max(f, -g)."""
    return CombinedRegion("setdiff", f, g)


# ------------------------------------------------------------------------------
# Transformed regions
# ------------------------------------------------------------------------------
class TransformedRegion(SignedDistanceFunction):
    """
    Region evaluated in transformed coordinates: d(x) = region(transform(x)).

    With transform = Rotation(phi, p0), the resulting region is the original
    one rotated by -phi about p0. Rigid transforms preserve distances, so the
    result is still a signed distance function.
    """

    def __init__(self, region: RegionLike, transform: Callable[[np.ndarray], np.ndarray]):
        self.region = region
        self.transform = transform

    def __call__(self, x: np.ndarray) -> float:
        return float(self.region(self.transform(np.asarray(x, dtype=np.float64))))

    def evaluate_many(self, points: np.ndarray) -> np.ndarray:
        mapped = np.array([self.transform(p) for p in points]).reshape(-1, 2)
        return evaluate_points(self.region, mapped)

    def bounding_box(self) -> Optional[np.ndarray]:
        box = bounding_box(self.region)
        inverse = getattr(self.transform, "inverse", None)
        if box is None or inverse is None:
            return None
        corners = np.array([[box[0, 0], box[0, 1]], [box[1, 0], box[0, 1]],
                            [box[1, 0], box[1, 1]], [box[0, 0], box[1, 1]]])
        mapped = inverse()(corners)
        return np.array([mapped.min(axis=0), mapped.max(axis=0)])

    def __repr__(self):
        return f"TransformedRegion({self.region!r}, {self.transform!r})"
