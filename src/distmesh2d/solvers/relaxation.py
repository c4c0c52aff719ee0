"""
Force Relaxation
================

One step of the truss analogy behind DistMesh: bars push their end nodes apart
until they reach a target length, positions advance by an explicit Euler step,
and nodes that leave the region are pulled back onto the boundary.
"""

import numpy as np
from typing import Callable, Tuple

from ..errors import InvalidConfigurationError, ProjectionError
from ..geometry.regions import RegionLike, evaluate_points
from ..mesh.seeding import SizeFunction, evaluate_size

GradientFunction = Callable[[Callable[[np.ndarray], float], np.ndarray], np.ndarray]


def compute_bar_forces(nodes: np.ndarray, bars: np.ndarray, h: SizeFunction,
                       fscale: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Repulsive force carried by each bar.

    Target lengths follow the size function at the bar midpoints, rescaled
    by one global factor so that sum(L0²) matches fscale² · sum(L²):

        L0 = h(mid) · fscale · sqrt(sum(L²) / sum(h(mid)²))

    The force on the first node is max(L0 - L, 0) along (p1 - p2) / L. Bars
    shorter than their target push; bars longer than it do nothing.

    Args:
        nodes: shape (n_nodes, 2)
        bars: shape (n_bars, 2)
        h: size function
        fscale: internal pressure factor

    Returns:
        (forces, lengths, target_lengths), shapes (n_bars, 2), (n_bars,), (n_bars,)

    Raises:
        InvalidConfigurationError: no bars, or h <= 0 at a midpoint
    """
    if len(bars) == 0:
        raise InvalidConfigurationError(
            "No interior bars to relax; the region is too small for h0 or geps too large"
        )

    p1 = nodes[bars[:, 0]]
    p2 = nodes[bars[:, 1]]
    vectors = p1 - p2
    lengths = np.linalg.norm(vectors, axis=1)
    hbars = evaluate_size(h, 0.5 * (p1 + p2))

    denominator = np.sum(hbars ** 2)
    if not denominator > 0:
        raise InvalidConfigurationError("Sum of squared sizes at bar midpoints is zero")

    target_lengths = hbars * fscale * np.sqrt(np.sum(lengths ** 2) / denominator)

    magnitude = np.maximum(target_lengths - lengths, 0.0)
    # Coincident nodes have no direction to push along
    scale = np.divide(magnitude, lengths, out=np.zeros_like(lengths), where=lengths > 0)
    forces = scale[:, None] * vectors
    return forces, lengths, target_lengths


def relax_mesh(nodes: np.ndarray, bars: np.ndarray, d: RegionLike, h: SizeFunction,
               n_fixed_nodes: int, gradient: GradientFunction,
               fscale: float = 1.2, dt: float = 0.2) -> float:
    """
    Move the nodes one relaxation step, in place.

    1. Sum the bar forces at both end nodes (np.add.at, unbuffered).
    2. Zero the forces on the first n_fixed_nodes nodes.
    3. Euler step: nodes += dt * forces.
    4. Each free node now outside (d > 0) gets one correction
       x -= d(x) * gradient(d, x). This is not iterated.

    Args:
        nodes: shape (n_nodes, 2), modified in place
        bars: shape (n_bars, 2)
        d: signed distance function
        h: size function
        n_fixed_nodes: number of leading nodes that never move
        gradient: gradient(f, x) -> shape (2,)
        fscale: internal pressure factor
        dt: Euler time step

    Returns:
        Largest displacement dt·|F| among nodes that were not projected

    Raises:
        ProjectionError: a projection produced a non-finite position
    """
    forces, _, _ = compute_bar_forces(nodes, bars, h, fscale)

    node_forces = np.zeros_like(nodes)
    np.add.at(node_forces, bars[:, 0], forces)
    np.add.at(node_forces, bars[:, 1], -forces)
    node_forces[:n_fixed_nodes] = 0.0

    nodes += dt * node_forces

    distances = evaluate_points(d, nodes)
    outside = distances > 0
    outside[:n_fixed_nodes] = False

    for i in np.flatnonzero(outside):
        nodes[i] -= distances[i] * np.asarray(gradient(d, nodes[i]), dtype=np.float64)
        if not np.all(np.isfinite(nodes[i])):
            raise ProjectionError(
                f"Boundary projection of node {i} produced a non-finite position"
            )

    displacement = dt * np.linalg.norm(node_forces[~outside], axis=1)
    return float(displacement.max()) if displacement.size else 0.0
