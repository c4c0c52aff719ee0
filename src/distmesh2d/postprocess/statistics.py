"""
Mesh Statistics
===============

Summary numbers for a generated mesh: sizes, edge lengths relative to the
size function, and element shape quality.
"""

import numpy as np
from dataclasses import dataclass, asdict
from typing import Dict, Optional

from ..mesh.mesh import Mesh
from ..mesh.seeding import SizeFunction, evaluate_size


@dataclass
class MeshStatistics:
    """Summary of mesh size and quality."""
    n_nodes: int
    n_elements: int
    n_edges: int
    n_boundary_edges: int
    min_edge_length: float
    max_edge_length: float
    mean_edge_length: float
    min_quality: float            # Radius ratio, 1 = equilateral
    mean_quality: float
    min_angle: float              # Smallest interior angle [deg]
    mean_relative_length: Optional[float] = None  # mean of L / h(mid), rescaled
    std_relative_length: Optional[float] = None

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    def summary(self) -> str:
        """Multi-line human readable report."""
        lines = [
            f"Nodes: {self.n_nodes}, elements: {self.n_elements}, "
            f"edges: {self.n_edges} ({self.n_boundary_edges} on boundary)",
            f"Edge length: min={self.min_edge_length:.4g}, "
            f"mean={self.mean_edge_length:.4g}, max={self.max_edge_length:.4g}",
            f"Quality: min={self.min_quality:.3f}, mean={self.mean_quality:.3f}, "
            f"min angle={self.min_angle:.1f} deg",
        ]
        if self.mean_relative_length is not None:
            lines.append(f"Relative length L/h: mean={self.mean_relative_length:.3f}, "
                         f"std={self.std_relative_length:.3f}")
        return "\n".join(lines)


def element_min_angles(mesh: Mesh) -> np.ndarray:
    """
    Smallest interior angle of each element, in degrees.

    Returns:
        angles: shape (n_elements,)
    """
    X = mesh.nodes[mesh.elements]
    a = np.linalg.norm(X[:, 1] - X[:, 2], axis=1)
    b = np.linalg.norm(X[:, 2] - X[:, 0], axis=1)
    c = np.linalg.norm(X[:, 0] - X[:, 1], axis=1)

    angA = np.degrees(np.arccos(np.clip((b**2 + c**2 - a**2) / (2 * b * c), -1.0, 1.0)))
    angB = np.degrees(np.arccos(np.clip((a**2 + c**2 - b**2) / (2 * a * c), -1.0, 1.0)))
    angC = 180.0 - angA - angB
    return np.minimum.reduce([angA, angB, angC])


def compute_mesh_statistics(mesh: Mesh, h: Optional[SizeFunction] = None) -> MeshStatistics:
    """
    Compute size and quality statistics.

    When a size function is given, edge lengths are compared with h at the
    edge midpoints. The ratios L/h are divided by sqrt(sum(L²)/sum(h²)), the
    same global factor the relaxation uses, so a perfect match gives mean 1
    and std 0.

    Args:
        mesh: Mesh instance with at least one element
        h: size function (optional)

    Returns:
        MeshStatistics
    """
    if mesh.n_elements == 0:
        raise ValueError("Cannot compute statistics of a mesh without elements")

    lengths = mesh.edge_lengths
    quality = mesh.element_quality()

    mean_rel = std_rel = None
    if h is not None:
        hmid = evaluate_size(h, mesh.edge_midpoints)
        scale = np.sqrt(np.sum(lengths ** 2) / np.sum(hmid ** 2))
        relative = lengths / (hmid * scale)
        mean_rel = float(np.mean(relative))
        std_rel = float(np.std(relative))

    return MeshStatistics(
        n_nodes=mesh.n_nodes,
        n_elements=mesh.n_elements,
        n_edges=mesh.n_edges,
        n_boundary_edges=len(mesh.boundary_edges),
        min_edge_length=float(lengths.min()),
        max_edge_length=float(lengths.max()),
        mean_edge_length=float(lengths.mean()),
        min_quality=float(quality.min()),
        mean_quality=float(quality.mean()),
        min_angle=float(element_min_angles(mesh).min()),
        mean_relative_length=mean_rel,
        std_relative_length=std_rel,
    )
