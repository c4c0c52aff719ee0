"""
Postprocessing Module
=====================

Mesh size and quality statistics.
"""

from .statistics import MeshStatistics, compute_mesh_statistics, element_min_angles

__all__ = ["MeshStatistics", "compute_mesh_statistics", "element_min_angles"]
