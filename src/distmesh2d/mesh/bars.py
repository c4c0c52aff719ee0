"""
Bar Extraction
==============

Delaunay triangulation of the current nodes, filtered to the region interior,
and the unique edges ("bars") of the retained triangles.
"""

import numpy as np
from scipy.spatial import Delaunay, QhullError
from typing import Callable, Tuple

from ..errors import TriangulationError
from ..geometry.regions import RegionLike, evaluate_points

Triangulator = Callable[[np.ndarray], np.ndarray]


def delaunay_triangulate(points: np.ndarray) -> np.ndarray:
    """
    Delaunay triangulation of a point set.

    Args:
        points: shape (n, 2)

    Returns:
        triangles: shape (m, 3), node indices

    Raises:
        TriangulationError: fewer than 3 distinct points, or Qhull failure
            (e.g. all points collinear)
    """
    points = np.asarray(points, dtype=np.float64)
    if len(np.unique(points, axis=0)) < 3:
        raise TriangulationError(
            f"Need at least 3 distinct nodes to triangulate, got {len(points)} nodes"
        )
    try:
        tri = Delaunay(points)
    except QhullError as exc:
        raise TriangulationError(f"Delaunay triangulation failed: {exc}") from exc
    return tri.simplices.astype(np.int64)


def find_bars(d: RegionLike, geps: float, nodes: np.ndarray,
              triangulate: Triangulator = delaunay_triangulate
              ) -> Tuple[np.ndarray, np.ndarray]:
    """
    Triangulate the nodes and return interior bars and triangles.

    A triangle is kept only if its centroid satisfies d < -geps; this drops
    triangles outside the region and those spanning concavities.

    Args:
        d: signed distance function
        geps: geometric tolerance
        nodes: shape (n, 2)
        triangulate: points -> triangles (default: scipy Delaunay)

    Returns:
        (bars, triangles):
            bars: shape (n_bars, 2), unique (low, high) pairs in sorted order
            triangles: shape (n_triangles, 3)
    """
    triangles = np.asarray(triangulate(nodes), dtype=np.int64).reshape(-1, 3)

    centroids = nodes[triangles].mean(axis=1)
    triangles = triangles[evaluate_points(d, centroids) < -geps]

    t = np.sort(triangles, axis=1)
    bars = np.vstack([t[:, [0, 1]], t[:, [0, 2]], t[:, [1, 2]]])
    bars = np.unique(bars, axis=0).reshape(-1, 2)
    return bars, triangles
