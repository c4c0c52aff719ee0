"""
DistMesh Driver
===============

Outer iteration of the mesh generator: seed the nodes, then alternate
retriangulation and force relaxation until the interior nodes stop moving.
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..geometry.differentiation import finite_difference_gradient
from ..geometry.regions import RegionLike, bounding_box
from ..mesh.bars import Triangulator, delaunay_triangulate, find_bars
from ..mesh.mesh import Mesh
from ..mesh.seeding import (
    SizeFunction, add_fixed_nodes, grid_uniform_triangles, rejection_method
)
from .relaxation import GradientFunction, relax_mesh


class MeshStatus(Enum):
    """State of a DistMeshGenerator."""
    INITIALIZING = "initializing"
    RELAXING = "relaxing"
    CONVERGED = "converged"
    MAX_ITERS_REACHED = "max_iters_reached"


@dataclass
class DistMeshConfig:
    """Configuration for the mesh generator."""
    fscale: float = 1.2          # Internal pressure: target/actual bar length ratio
    dt: float = 0.2              # Euler time step
    geps: Optional[float] = None # Geometric tolerance (default: 0.001 * h0)
    dptol: float = 0.001         # Stop when interior nodes move less than dptol * h0
    ttol: float = 0.1            # Retriangulate after a node moves ttol * h0
    max_iters: int = 1000        # Maximum relaxation iterations
    seed: Optional[int] = None   # Seed for rejection sampling
    verbose: bool = True         # Print progress info

    def __post_init__(self):
        """Validate parameters."""
        if self.fscale <= 0:
            raise ValueError(f"fscale must be positive, got {self.fscale}")
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.geps is not None and self.geps < 0:
            raise ValueError(f"geps must be non-negative, got {self.geps}")
        if self.dptol <= 0:
            raise ValueError(f"dptol must be positive, got {self.dptol}")
        if self.ttol < 0:
            raise ValueError(f"ttol must be non-negative, got {self.ttol}")
        if self.max_iters < 1:
            raise ValueError(f"max_iters must be at least 1, got {self.max_iters}")

    def resolve_geps(self, h0: float) -> float:
        """Geometric tolerance for spacing h0."""
        return 0.001 * h0 if self.geps is None else self.geps


@dataclass
class MeshResult:
    """Result of a mesh generation run."""
    mesh: Mesh
    status: MeshStatus
    n_iterations: int
    n_retriangulations: int
    interior_displacement: float  # Last interior displacement (convergence signal)
    n_fixed_nodes: int = 0

    @property
    def converged(self) -> bool:
        return self.status is MeshStatus.CONVERGED


class DistMeshGenerator:
    """
    Force-relaxation mesh generator for a region given by a signed distance function.

    Algorithm:
        1. Lay an equilateral lattice of spacing h0 over the bounds.
        2. Keep interior lattice nodes with probability ~ 1/h², then prepend
           the fixed nodes.
        3. Repeat up to max_iters times:
            a. If any node moved more than ttol·h0 since the last
               triangulation, retriangulate and rebuild the bars.
            b. Relax: push bars apart, Euler step, project escaped nodes
               back onto the boundary.
            c. Stop if the interior nodes moved less than dptol·h0.

    Attributes:
        d: signed distance function
        h: size function (relative edge length)
        h0: initial spacing
        bounds: [[x_min, y_min], [x_max, y_max]]
        fixed_nodes: shape (k, 2) or None
        config: DistMeshConfig
        gradient: gradient(f, x) used for boundary projection
        triangulate: points -> triangles
        rng: numpy random Generator for rejection sampling
        status: current MeshStatus
        nodes: live node positions
        snapshot: node positions at the last triangulation
        bars, triangles: connectivity from the last triangulation
    """

    def __init__(self, d: RegionLike, h: SizeFunction, h0: float,
                 bounds: Optional[np.ndarray] = None,
                 fixed_nodes: Optional[np.ndarray] = None,
                 config: Optional[DistMeshConfig] = None,
                 gradient: Optional[GradientFunction] = None,
                 triangulate: Optional[Triangulator] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize the generator.

        Args:
            d: signed distance function (negative inside)
            h: size function, strictly positive over the bounds
            h0: initial spacing
            bounds: bounding box; taken from d.bounding_box() when omitted
            fixed_nodes: nodes that must appear unchanged in the mesh
            config: DistMeshConfig (optional)
            gradient: gradient provider (default: central finite differences)
            triangulate: triangulation provider (default: scipy Delaunay)
            rng: random generator (default: seeded from config.seed)
        """
        if h0 <= 0:
            raise ValueError(f"h0 must be positive, got {h0}")
        if bounds is None:
            bounds = bounding_box(d)
            if bounds is None:
                raise ValueError("bounds are required when the region has no bounding box")

        self.d = d
        self.h = h
        self.h0 = float(h0)
        self.bounds = np.asarray(bounds, dtype=np.float64)
        self.fixed_nodes = fixed_nodes
        self.config = config or DistMeshConfig()
        self.gradient = gradient or finite_difference_gradient
        self.triangulate = triangulate or delaunay_triangulate
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.geps = self.config.resolve_geps(self.h0)

        self.status = MeshStatus.INITIALIZING
        self.n_fixed_nodes = 0
        self.nodes: Optional[np.ndarray] = None
        self.snapshot: Optional[np.ndarray] = None
        self.bars: Optional[np.ndarray] = None
        self.triangles: Optional[np.ndarray] = None
        self.n_retriangulations = 0

    def initialize_nodes(self) -> np.ndarray:
        """
        Seed the node set: lattice, rejection sampling, fixed nodes.

        Returns:
            nodes: shape (n_nodes, 2), fixed nodes first
        """
        candidates = grid_uniform_triangles(self.bounds, self.h0)
        sampled = rejection_method(self.d, self.h, self.geps, candidates, self.rng)
        nodes, self.n_fixed_nodes = add_fixed_nodes(self.fixed_nodes, sampled)

        if self.config.verbose:
            print(f"Seeded {len(nodes)} nodes ({self.n_fixed_nodes} fixed) "
                  f"from {len(candidates)} lattice points")
        return nodes

    def retriangulate(self) -> None:
        """Rebuild bars and triangles from the live nodes and refresh the snapshot."""
        self.snapshot = self.nodes.copy()
        self.bars, self.triangles = find_bars(self.d, self.geps, self.nodes,
                                              self.triangulate)
        self.n_retriangulations += 1

    def max_displacement_since_triangulation(self) -> float:
        """Largest node movement since the last triangulation, in units of h0."""
        return float(np.max(np.linalg.norm(self.nodes - self.snapshot, axis=1))) / self.h0

    def step(self) -> float:
        """
        One relaxation iteration.

        Returns:
            Largest interior node displacement
        """
        if self.max_displacement_since_triangulation() > self.config.ttol:
            self.retriangulate()

        return relax_mesh(self.nodes, self.bars, d=self.d, h=self.h,
                          n_fixed_nodes=self.n_fixed_nodes,
                          gradient=self.gradient,
                          fscale=self.config.fscale, dt=self.config.dt)

    def generate(self) -> MeshResult:
        """
        Run the generator to convergence or to the iteration cap.

        Returns:
            MeshResult with status CONVERGED or MAX_ITERS_REACHED
        """
        self.status = MeshStatus.INITIALIZING
        self.n_retriangulations = 0
        self.nodes = self.initialize_nodes()
        self.retriangulate()

        self.status = MeshStatus.RELAXING
        displacement = np.inf
        iteration = 0

        for iteration in range(1, self.config.max_iters + 1):
            displacement = self.step()

            if displacement < self.config.dptol * self.h0:
                self.status = MeshStatus.CONVERGED
                if self.config.verbose:
                    print(f"Successfully converged after {iteration} iterations.")
                break
        else:
            self.status = MeshStatus.MAX_ITERS_REACHED
            if self.config.verbose:
                print("Maximum number of iterations reached. Terminating.")

        return MeshResult(
            mesh=Mesh(self.nodes, self.triangles),
            status=self.status,
            n_iterations=iteration,
            n_retriangulations=self.n_retriangulations,
            interior_displacement=displacement,
            n_fixed_nodes=self.n_fixed_nodes,
        )


def generate_mesh(d: RegionLike, h: SizeFunction, h0: float,
                  bounds: Optional[np.ndarray] = None,
                  fixed_nodes: Optional[np.ndarray] = None,
                  config: Optional[DistMeshConfig] = None,
                  gradient: Optional[GradientFunction] = None,
                  triangulate: Optional[Triangulator] = None,
                  rng: Optional[np.random.Generator] = None,
                  **config_kwargs) -> MeshResult:
    """
    Generate a triangle mesh of the region d with edge lengths following h.

    Args:
        d: signed distance function (negative inside)
        h: size function
        h0: initial spacing
        bounds: [[x_min, y_min], [x_max, y_max]] (default: d.bounding_box())
        fixed_nodes: shape (k, 2), kept bit-identical as the first k nodes
        config: DistMeshConfig; mutually exclusive with config_kwargs
        gradient: gradient provider for boundary projection
        triangulate: triangulation provider
        rng: random generator for rejection sampling
        **config_kwargs: DistMeshConfig fields, e.g. max_iters=500, seed=0

    Returns:
        MeshResult

    Example:
        >>> from distmesh2d import Circle, uniform_size
        >>> result = generate_mesh(Circle((0, 0), 1), uniform_size(), 0.2,
        ...                        seed=0, verbose=False)
        >>> result.converged
        True
    """
    if config is not None and config_kwargs:
        raise ValueError("Pass either config or individual config fields, not both")
    if config is None:
        config = DistMeshConfig(**config_kwargs)

    generator = DistMeshGenerator(d, h, h0, bounds, fixed_nodes=fixed_nodes,
                                  config=config, gradient=gradient,
                                  triangulate=triangulate, rng=rng)
    return generator.generate()
