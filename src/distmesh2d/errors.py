"""
Errors
======

Exception types raised while building a mesh.

Invalid arguments to value objects (regions, configs, meshes) raise a plain
ValueError. The types below cover failures that happen while the mesh is
being constructed.
"""

__all__ = [
    "DistMeshError",
    "InvalidConfigurationError",
    "TriangulationError",
    "ProjectionError",
    "EmptySampleError",
]


class DistMeshError(Exception):
    """Base class for all mesh-construction errors."""


class InvalidConfigurationError(DistMeshError, ValueError):
    """
    Size function or target-length normalization is unusable.

    Raised when h(x) <= 0 (or non-finite) at a sampled point, or when the
    sum of squared sizes over the bar midpoints is zero.
    """


class TriangulationError(DistMeshError, RuntimeError):
    """Delaunay triangulation failed (too few or degenerate nodes)."""


class ProjectionError(DistMeshError, ArithmeticError):
    """
    Projection onto the boundary produced an unusable point.

    Raised for non-finite node positions after a projection step, and by
    ImplicitRegion in strict mode when Newton-Raphson does not converge.
    """


class EmptySampleError(DistMeshError, ValueError):
    """No candidate node survived the rejection sampling."""
