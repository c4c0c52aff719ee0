"""
distmesh2d
==========

Unstructured triangle meshes of planar regions described by signed distance
functions, generated by force relaxation (DistMesh).

Modules:
    geometry: Signed distance regions, combinators, polygons, implicit regions
    mesh: Mesh container, node seeding, Delaunay bar extraction, mesh I/O
    solvers: Force relaxation and the iteration driver
    postprocess: Mesh statistics
    errors: Exceptions raised during mesh construction

Example:
    >>> from distmesh2d import Circle, Rect, generate_mesh, uniform_size
    >>> region = Rect(-1, 1, -1, 1) - Circle((0, 0), 0.3)
    >>> corners = [[-1, -1], [-1, 1], [1, -1], [1, 1]]
    >>> result = generate_mesh(region, uniform_size(), 0.15,
    ...                        fixed_nodes=corners, seed=0, verbose=False)
"""

from . import geometry
from . import mesh
from . import solvers
from . import postprocess
from . import errors

from .geometry import (
    SignedDistanceFunction,
    Circle,
    Rect,
    Polygon,
    HalfPlane,
    ImplicitRegion,
    TransformedRegion,
    Rotation,
    Translation,
    union,
    intersect,
    setdiff,
)
from .mesh import Mesh, uniform_size, write_mesh, read_mesh
from .solvers import DistMeshConfig, DistMeshGenerator, MeshResult, MeshStatus, generate_mesh
from .postprocess import compute_mesh_statistics
from .errors import (
    DistMeshError,
    InvalidConfigurationError,
    TriangulationError,
    ProjectionError,
    EmptySampleError,
)

__version__ = "0.1.0"
__all__ = [
    "geometry", "mesh", "solvers", "postprocess", "errors",
    "SignedDistanceFunction", "Circle", "Rect", "Polygon", "HalfPlane",
    "ImplicitRegion", "TransformedRegion", "Rotation", "Translation",
    "union", "intersect", "setdiff",
    "Mesh", "uniform_size", "write_mesh", "read_mesh",
    "DistMeshConfig", "DistMeshGenerator", "MeshResult", "MeshStatus", "generate_mesh",
    "compute_mesh_statistics",
    "DistMeshError", "InvalidConfigurationError", "TriangulationError",
    "ProjectionError", "EmptySampleError",
]
