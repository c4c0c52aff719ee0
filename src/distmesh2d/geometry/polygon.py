"""
Polygon Geometry
================

Distance and containment predicates for closed polygons.

Vertices are given as an array of shape (n_vertices, 2) in boundary order; the
last vertex is implicitly connected back to the first.
"""

import numpy as np


def triangle_area(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> float:
    """
    Signed area of the triangle abc.

    Positive when a, b, c are ordered counterclockwise.
    """
    return 0.5 * ((a[0] - c[0]) * (b[1] - c[1]) - (a[1] - c[1]) * (b[0] - c[0]))


def distance(vertices: np.ndarray, x: np.ndarray) -> float:
    """
    Minimal Euclidean distance from x to the polygon boundary.

    Each edge a->b is treated as a segment: the projection parameter
    t = (b-a)·(x-a) / |b-a|² is clamped to [0, 1].

    Args:
        vertices: shape (n_vertices, 2)
        x: shape (2,)

    Returns:
        Distance to the nearest edge
    """
    x = np.asarray(x, dtype=np.float64)
    d = np.inf
    a = vertices[-1]
    for b in vertices:
        ab = b - a
        # Repeated vertex: the edge is a point already covered by its neighbours
        if not ab.any():
            a = b
            continue
        t = np.dot(ab, x - a) / np.dot(ab, ab)

        if t <= 0:
            dp = np.linalg.norm(x - a)
        elif t >= 1:
            dp = np.linalg.norm(x - b)
        else:
            dp = np.linalg.norm(a - x + ab * t)

        if dp < d:
            d = dp
        a = b
    return float(d)


def winding_number(vertices: np.ndarray, x: np.ndarray) -> int:
    """
    Winding number of the polygon about x.

    Counts signed crossings of the horizontal ray from x. An upward edge
    counts when a.y <= x.y < b.y with x strictly left of the edge, a
    downward edge when b.y <= x.y < a.y with x strictly right of it. The
    half-open interval keeps a vertex on the ray from being counted twice.

    Args:
        vertices: shape (n_vertices, 2)
        x: shape (2,)

    Returns:
        Signed number of turns of the boundary around x
    """
    wn = 0
    a = vertices[-1]
    for b in vertices:
        if a[1] <= x[1]:
            if x[1] < b[1] and triangle_area(a, b, x) > 0:
                wn += 1
        elif b[1] <= x[1] and triangle_area(a, b, x) < 0:
            wn -= 1
        a = b
    return wn


def contains(vertices: np.ndarray, x: np.ndarray) -> bool:
    """
    Point-in-polygon test with the even-odd rule.

    A point is inside iff the winding number is odd. For self-intersecting
    polygons this differs from the nonzero rule: regions wound twice are
    reported as outside.
    """
    return winding_number(vertices, x) % 2 == 1
