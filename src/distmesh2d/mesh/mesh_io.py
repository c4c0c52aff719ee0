"""
Mesh I/O Functions
==================

Read and write meshes through meshio (VTK, VTU, Gmsh, XDMF, ...).
"""

import meshio
import numpy as np
from typing import Dict, Optional

from .mesh import Mesh


def write_mesh(mesh: Mesh, filename: str,
               node_data: Optional[Dict[str, np.ndarray]] = None,
               cell_data: Optional[Dict[str, np.ndarray]] = None,
               file_format: Optional[str] = None) -> None:
    """
    Write a mesh to disk; the format follows the file extension.

    Points are written with z = 0.

    Args:
        mesh: Mesh instance
        filename: output filename (e.g. .vtk, .vtu, .msh)
        node_data: dict of node-based scalar/vector fields
        cell_data: dict of element-based scalar fields
        file_format: meshio format name, overriding the extension
    """
    points = np.column_stack([mesh.nodes, np.zeros(mesh.n_nodes)])
    cells = [("triangle", np.asarray(mesh.elements))]

    cell_data_dict = None
    if cell_data:
        cell_data_dict = {name: [np.asarray(data)] for name, data in cell_data.items()}

    meshio_mesh = meshio.Mesh(
        points=points,
        cells=cells,
        point_data=node_data or {},
        cell_data=cell_data_dict,
    )
    meshio.write(filename, meshio_mesh, file_format=file_format)


def read_mesh(filename: str, file_format: Optional[str] = None) -> Mesh:
    """
    Read a triangle mesh from disk.

    Only x, y coordinates and "triangle" cells are used.

    Args:
        filename: path to the mesh file

    Returns:
        Mesh instance

    Raises:
        ValueError: if the file contains no triangle cells
    """
    mesh_data = meshio.read(filename, file_format=file_format)

    elements = [block.data for block in mesh_data.cells if block.type == "triangle"]
    if not elements:
        raise ValueError(f"No triangle elements found in {filename}")

    return Mesh(mesh_data.points[:, :2], np.vstack(elements))
