"""
Triangle Mesh
=============

Immutable result of mesh generation: node positions, triangles and the edge
connectivity derived from them.
"""

import numpy as np


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class Mesh:
    """
    Unstructured triangle mesh.

    All arrays are read-only; a Mesh never changes after construction.

    Attributes:
        nodes: np.ndarray, shape (n_nodes, 2)
            Node coordinates
        elements: np.ndarray, shape (n_elements, 3)
            Node indices of each triangle, counterclockwise
        edges: np.ndarray, shape (n_edges, 2)
            Unique edges as (low, high) node index pairs, sorted
        boundary_edges: np.ndarray
            Indices into `edges` of edges belonging to a single element
        boundary_nodes: np.ndarray
            Indices of nodes on the boundary
        element_areas, edge_lengths, edge_midpoints: np.ndarray
            Geometric quantities per element / per edge
    """

    def __init__(self, nodes: np.ndarray, elements: np.ndarray):
        """
        Copy the inputs, orient triangles and compute connectivity.

        Args:
            nodes: shape (n_nodes, 2), node coordinates
            elements: shape (n_elements, 3), node indices for each element
        """
        nodes = np.array(nodes, dtype=np.float64)
        elements = np.array(elements, dtype=np.int64).reshape(-1, 3)

        if nodes.ndim != 2 or nodes.shape[1] != 2:
            raise ValueError("nodes must have shape (n_nodes, 2)")
        if elements.size and (elements.min() < 0 or elements.max() >= len(nodes)):
            raise ValueError("elements reference nodes outside the node array")

        self.nodes = _read_only(nodes)
        self.elements = _read_only(self._orient_counterclockwise(nodes, elements))

        self._build_edges()
        self._compute_geometric_quantities()

    @property
    def n_nodes(self) -> int:
        """Number of nodes in the mesh."""
        return len(self.nodes)

    @property
    def n_elements(self) -> int:
        """Number of elements in the mesh."""
        return len(self.elements)

    @property
    def n_edges(self) -> int:
        """Number of unique edges in the mesh."""
        return len(self.edges)

    @staticmethod
    def _orient_counterclockwise(nodes: np.ndarray, elements: np.ndarray) -> np.ndarray:
        """Swap two vertices of every clockwise triangle."""
        if len(elements) == 0:
            return elements
        X = nodes[elements]
        signed = ((X[:, 1, 0] - X[:, 0, 0]) * (X[:, 2, 1] - X[:, 0, 1]) -
                  (X[:, 2, 0] - X[:, 0, 0]) * (X[:, 1, 1] - X[:, 0, 1]))
        clockwise = signed < 0
        elements[clockwise] = elements[clockwise][:, [0, 2, 1]]
        return elements

    def _build_edges(self) -> None:
        """
        Create the unique edge list and identify the boundary.

        Edges use canonical ordering (smaller node index first). An edge is on
        the boundary if it belongs to exactly one element.
        """
        if self.n_elements == 0:
            self.edges = _read_only(np.zeros((0, 2), dtype=np.int64))
            self.boundary_edges = _read_only(np.zeros(0, dtype=np.int64))
            self.boundary_nodes = _read_only(np.zeros(0, dtype=np.int64))
            return

        local_edge_nodes = [(1, 2), (2, 0), (0, 1)]
        all_edges = np.vstack([self.elements[:, [i, j]] for i, j in local_edge_nodes])
        edges, counts = np.unique(np.sort(all_edges, axis=1), axis=0, return_counts=True)

        self.edges = _read_only(edges.astype(np.int64))
        self.boundary_edges = _read_only(np.flatnonzero(counts == 1).astype(np.int64))
        self.boundary_nodes = _read_only(
            np.unique(self.edges[self.boundary_edges]).astype(np.int64))

    def _compute_geometric_quantities(self) -> None:
        """Compute areas and edge lengths."""
        self.element_areas = _read_only(self.compute_element_areas())
        self.edge_lengths = _read_only(self.compute_edge_lengths())
        self.edge_midpoints = _read_only(self.compute_edge_midpoints())

    def compute_element_areas(self) -> np.ndarray:
        """
        Compute area of all elements.

        Uses the cross product formula:
        A = 0.5 * |det([x1-x0, y1-y0; x2-x0, y2-y0])|

        Returns:
            areas: shape (n_elements,)
        """
        X = self.nodes[self.elements]
        return 0.5 * np.abs(
            (X[:, 1, 0] - X[:, 0, 0]) * (X[:, 2, 1] - X[:, 0, 1]) -
            (X[:, 2, 0] - X[:, 0, 0]) * (X[:, 1, 1] - X[:, 0, 1])
        )

    def compute_edge_lengths(self) -> np.ndarray:
        """
        Compute length of all edges.

        Returns:
            lengths: shape (n_edges,)
        """
        return np.linalg.norm(self.nodes[self.edges[:, 1]] - self.nodes[self.edges[:, 0]],
                              axis=1)

    def compute_edge_midpoints(self) -> np.ndarray:
        """
        Compute midpoint of all edges.

        Returns:
            midpoints: shape (n_edges, 2)
        """
        return 0.5 * (self.nodes[self.edges[:, 0]] + self.nodes[self.edges[:, 1]])

    def element_quality(self) -> np.ndarray:
        """
        Radius ratio 2 r_in / r_circ of every element.

        Equals 1 for an equilateral triangle and tends to 0 as the triangle
        degenerates.

        Returns:
            quality: shape (n_elements,)
        """
        X = self.nodes[self.elements]
        a = np.linalg.norm(X[:, 1] - X[:, 2], axis=1)
        b = np.linalg.norm(X[:, 2] - X[:, 0], axis=1)
        c = np.linalg.norm(X[:, 0] - X[:, 1], axis=1)
        return (b + c - a) * (c + a - b) * (a + b - c) / (a * b * c)

    def __repr__(self):
        return (f"Mesh(n_nodes={self.n_nodes}, n_elements={self.n_elements}, "
                f"n_edges={self.n_edges})")
