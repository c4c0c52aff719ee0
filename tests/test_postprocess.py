"""
Tests for Mesh Statistics
=========================
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from distmesh2d.mesh.mesh import Mesh
from distmesh2d.mesh.seeding import uniform_size
from distmesh2d.postprocess.statistics import (
    MeshStatistics, compute_mesh_statistics, element_min_angles
)


def hexagon_mesh(side=0.5):
    """Six equilateral triangles around the origin."""
    angles = np.arange(6) * np.pi / 3
    ring = side * np.column_stack([np.cos(angles), np.sin(angles)])
    nodes = np.vstack([[0.0, 0.0], ring])
    elements = [[0, 1 + i, 1 + (i + 1) % 6] for i in range(6)]
    return Mesh(nodes, np.array(elements))


class TestMeshStatistics:
    """Tests for compute_mesh_statistics."""

    def test_equilateral_mesh(self):
        mesh = hexagon_mesh(0.5)
        stats = compute_mesh_statistics(mesh, uniform_size())

        assert stats.n_nodes == 7
        assert stats.n_elements == 6
        assert stats.n_edges == 12
        assert stats.n_boundary_edges == 6
        assert np.isclose(stats.min_edge_length, 0.5)
        assert np.isclose(stats.max_edge_length, 0.5)
        assert np.isclose(stats.min_quality, 1.0)
        assert np.isclose(stats.min_angle, 60.0)
        assert np.isclose(stats.mean_relative_length, 1.0)
        assert np.isclose(stats.std_relative_length, 0.0, atol=1e-12)

    def test_without_size_function(self):
        stats = compute_mesh_statistics(hexagon_mesh())
        assert stats.mean_relative_length is None
        assert "Relative length" not in stats.summary()

    def test_skewed_element(self):
        mesh = Mesh(np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]), np.array([[0, 1, 2]]))
        assert np.isclose(element_min_angles(mesh)[0], 45.0)
        stats = compute_mesh_statistics(mesh)
        assert stats.min_quality < 1.0
        assert np.isclose(stats.max_edge_length, np.sqrt(2))

    def test_summary_and_dict(self):
        stats = compute_mesh_statistics(hexagon_mesh(), uniform_size())
        assert isinstance(stats, MeshStatistics)
        text = stats.summary()
        assert "Nodes: 7" in text
        assert "min angle=60.0" in text
        assert stats.to_dict()["n_elements"] == 6

    def test_empty_mesh(self):
        mesh = Mesh(np.array([[0.0, 0.0], [1.0, 0.0]]), np.zeros((0, 3), dtype=int))
        with pytest.raises(ValueError):
            compute_mesh_statistics(mesh)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
