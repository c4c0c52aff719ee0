"""
Complex Geometries Example
==========================

Polygons with fixed vertices, size functions built from distance
functions, and regions given only as level sets.

The implicit regions project every evaluated point with Newton-Raphson, and
the graded half-disk uses a fine h0, so a full run takes a few minutes. The
graded run is capped at 300 iterations.
"""

import numpy as np
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from distmesh2d import (
    Circle, Polygon, HalfPlane, ImplicitRegion, setdiff, intersect,
    uniform_size, generate_mesh, compute_mesh_statistics
)


def report(name, result, h=None):
    """Print a short summary of one meshing run."""
    print(f"\n{name}")
    print("-" * 60)
    print(f"Status: {result.status.value} after {result.n_iterations} iterations")
    print(compute_mesh_statistics(result.mesh, h).summary())


def run_hexagon_ring():
    """Hexagon with a rotated hexagonal hole whose corners are kept."""
    outer = Polygon.regular(6, 1.0)
    inner = Polygon.regular(6, 0.5, phase=np.pi / 6)
    d = setdiff(outer, inner)

    result = generate_mesh(d, uniform_size(), 0.1, fixed_nodes=inner.vertices,
                           seed=0, verbose=False)
    report("Hexagon ring", result)
    return result


def run_geometric_adaptivity():
    """Upper half of a disk minus an offset disk, refined near the narrow gap."""
    d1 = Circle((0.0, 0.0), 1.0)
    d2 = Circle((-0.4, 0.0), 0.55)
    d = intersect(setdiff(d1, d2), HalfPlane((0.0, 0.0), (0.0, -1.0)))

    def h(x):
        h1 = 0.15 - 0.2 * d1(x)
        h2 = 0.06 + 0.2 * d2(x)
        h3 = (d2(x) - d1(x)) / 3
        return min(h1, h2, h3)

    fixed = np.array([[-1.0, 0.0], [-0.95, 0.0], [0.15, 0.0], [1.0, 0.0]])
    result = generate_mesh(d, h, 0.05 / 3, bounds=[[-1, 0], [1, 1]],
                           fixed_nodes=fixed, max_iters=300, seed=0, verbose=True)
    report("Geometric adaptivity", result, h)
    return result


def run_superellipse():
    """Annulus between two level sets of the 4-norm."""
    norm4 = lambda x: (x[0] ** 4 + x[1] ** 4) ** 0.25
    d = setdiff(ImplicitRegion(norm4, level=1.0), ImplicitRegion(norm4, level=0.5))

    result = generate_mesh(d, uniform_size(), 0.1, bounds=[[-1, -1], [1, 1]],
                           seed=0, verbose=True)
    report("Superellipse annulus", result)
    return result


def run_wavy_region():
    """Region between y = cos(x) and a quartic, meshed through projections only."""
    upper = ImplicitRegion(lambda x: x[1] - np.cos(x[0]))
    lower = ImplicitRegion(lambda x: -x[1] + 5 * ((2 * x[0] / (5 * np.pi)) ** 4 - 1))
    d = intersect(upper, lower)

    fixed = np.array([[-2.5 * np.pi, 0.0], [2.5 * np.pi, 0.0]])
    result = generate_mesh(d, uniform_size(), 0.6,
                           bounds=[[-2.5 * np.pi, -5.0], [2.5 * np.pi, 1.0]],
                           fixed_nodes=fixed, seed=0, verbose=True)
    report("Wavy region", result)
    print(f"Unconverged projections: {upper.n_unconverged + lower.n_unconverged}")
    return result


if __name__ == "__main__":
    print("=" * 60)
    print("distmesh2d: Complex Geometries")
    print("=" * 60)

    run_hexagon_ring()
    run_geometric_adaptivity()
    run_superellipse()
    run_wavy_region()
