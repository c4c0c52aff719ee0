"""
Mesh Module
===========

Mesh container, node seeding, Delaunay bar extraction and mesh I/O.
"""

from .mesh import Mesh
from .seeding import (
    grid_uniform_triangles,
    rejection_method,
    add_fixed_nodes,
    unique_rows,
    uniform_size,
    evaluate_size,
)
from .bars import delaunay_triangulate, find_bars
from .mesh_io import write_mesh, read_mesh

__all__ = [
    "Mesh",
    "grid_uniform_triangles",
    "rejection_method",
    "add_fixed_nodes",
    "unique_rows",
    "uniform_size",
    "evaluate_size",
    "delaunay_triangulate",
    "find_bars",
    "write_mesh",
    "read_mesh",
]
