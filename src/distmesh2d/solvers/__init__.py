"""
Solvers Module
==============

Force relaxation and the DistMesh iteration driver.
"""

from .relaxation import compute_bar_forces, relax_mesh
from .distmesh import (
    DistMeshConfig,
    DistMeshGenerator,
    MeshResult,
    MeshStatus,
    generate_mesh,
)

__all__ = [
    "compute_bar_forces",
    "relax_mesh",
    "DistMeshConfig",
    "DistMeshGenerator",
    "MeshResult",
    "MeshStatus",
    "generate_mesh",
]
