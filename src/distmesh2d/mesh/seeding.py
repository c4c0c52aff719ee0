"""
Node Seeding
============

Initial point cloud for the relaxation: an equilateral lattice over the
bounding box, thinned by rejection sampling to follow the size function.
"""

import numpy as np
from typing import Callable, Optional, Tuple

from ..errors import EmptySampleError, InvalidConfigurationError
from ..geometry.regions import RegionLike, evaluate_points

SizeFunction = Callable[[np.ndarray], float]


def uniform_size(value: float = 1.0) -> SizeFunction:
    """
    Constant size function h(x) = value.

    Only ratios of h matter to the mesher, so uniform_size() is the usual
    choice for a uniform mesh.
    """
    if value <= 0:
        raise ValueError(f"size must be positive, got {value}")

    def h(x: np.ndarray) -> float:
        return value

    return h


def evaluate_size(h: SizeFunction, points: np.ndarray) -> np.ndarray:
    """
    Evaluate the size function at each point and check it is usable.

    Raises:
        InvalidConfigurationError: if h is non-positive or non-finite anywhere
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    values = np.array([h(p) for p in points], dtype=np.float64)
    bad = ~(np.isfinite(values) & (values > 0))
    if np.any(bad):
        idx = int(np.argmax(bad))
        raise InvalidConfigurationError(
            f"Size function must be positive and finite, got h={values[idx]} "
            f"at {points[idx].tolist()}"
        )
    return values


def _inclusive_range(start: float, stop: float, step: float) -> np.ndarray:
    """start, start + step, ... up to and including stop when it is hit."""
    n = int(np.floor((stop - start) / step + 1e-10)) + 1
    return start + step * np.arange(max(n, 0))


def grid_uniform_triangles(bounds: np.ndarray, h0: float) -> np.ndarray:
    """
    Nodes of an equilateral triangle lattice with side length h0.

    Rows are h0·√3/2 apart; every second row is shifted by h0/2 in x.

    Args:
        bounds: [[x_min, y_min], [x_max, y_max]]
        h0: lattice spacing

    Returns:
        nodes: shape (n_nodes, 2)
    """
    bounds = np.asarray(bounds, dtype=np.float64)
    if bounds.shape != (2, 2):
        raise ValueError(f"bounds must have shape (2, 2), got {bounds.shape}")
    if h0 <= 0:
        raise ValueError(f"h0 must be positive, got {h0}")
    if np.any(bounds[1] < bounds[0]):
        raise ValueError(f"bounds must be [[x_min, y_min], [x_max, y_max]], got {bounds.tolist()}")

    xs = _inclusive_range(bounds[0, 0], bounds[1, 0], h0)
    ys = _inclusive_range(bounds[0, 1], bounds[1, 1], h0 * np.sqrt(3) / 2)

    xx, yy = np.meshgrid(xs, ys)
    xx[1::2, :] += 0.5 * h0
    return np.column_stack([xx.ravel(), yy.ravel()])


def rejection_method(d: RegionLike, h: SizeFunction, geps: float, nodes: np.ndarray,
                     rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Keep interior nodes with probability proportional to 1/h².

    Nodes with d < geps are candidates. Each candidate gets the weight
    1/h(x)², normalized by the largest weight, and survives one uniform draw
    against it. The resulting density is roughly proportional to 1/h².

    Args:
        d: signed distance function
        h: size function
        geps: geometric tolerance
        nodes: candidate nodes, shape (n, 2)
        rng: random generator (default: fresh unseeded generator)

    Returns:
        accepted nodes, shape (m, 2)

    Raises:
        InvalidConfigurationError: if h <= 0 at a candidate
        EmptySampleError: if no node survives
    """
    rng = rng if rng is not None else np.random.default_rng()
    nodes = np.asarray(nodes, dtype=np.float64).reshape(-1, 2)

    inside = nodes[evaluate_points(d, nodes) < geps]
    if len(inside) == 0:
        raise EmptySampleError(
            "No candidate node lies inside the region; check bounds and h0"
        )

    r0 = 1.0 / evaluate_size(h, inside) ** 2
    r0 /= r0.max()

    accepted = inside[rng.random(len(inside)) < r0]
    if len(accepted) == 0:
        raise EmptySampleError("Rejection sampling discarded every node")
    return accepted


def unique_rows(points: np.ndarray) -> np.ndarray:
    """Remove exact duplicate rows, keeping first occurrences in order."""
    if len(points) == 0:
        return points
    _, first = np.unique(points, axis=0, return_index=True)
    return points[np.sort(first)]


def add_fixed_nodes(fixed_nodes: Optional[np.ndarray],
                    nodes: np.ndarray) -> Tuple[np.ndarray, int]:
    """
    Prepend fixed nodes and drop exact duplicates among the sampled nodes.

    Sampled nodes that coincide with a fixed node are dropped; the fixed
    rows themselves are kept as given.

    Args:
        fixed_nodes: shape (k, 2) or None
        nodes: sampled nodes, shape (n, 2)

    Returns:
        (nodes, n_fixed): the first n_fixed rows are the fixed nodes,
        bit-identical to the input

    Raises:
        InvalidConfigurationError: if a fixed node is repeated
    """
    nodes = np.asarray(nodes, dtype=np.float64).reshape(-1, 2)
    if fixed_nodes is None:
        return unique_rows(nodes), 0

    fixed = np.asarray(fixed_nodes, dtype=np.float64).reshape(-1, 2)
    if len(unique_rows(fixed)) != len(fixed):
        raise InvalidConfigurationError(
            "Fixed nodes must be distinct; remove repeated rows from fixed_nodes"
        )
    combined = unique_rows(np.vstack([fixed, nodes]))
    return combined, len(fixed)
