"""
Implicit Regions
================

Regions bounded by a level set {x : f(x) = level} of an arbitrary scalar field.

The signed distance at x0 is obtained by projecting x0 onto the level set with
Newton-Raphson. The closest point x satisfies two conditions:

    f(x) = 0                      (on the level set)
    (x - x0) × ∇f(x) = 0          (displacement parallel to the normal)

where a × b = a_x b_y - a_y b_x. Differentiating both conditions gives the
2×2 Jacobian

    J = [[f_x,                              f_y                             ],
         [f_y + Δx H_yx - Δy H_xx,          Δx H_yy - f_x - Δy H_xy         ]]

with Δ = x - x0 and H the Hessian of f.
"""

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..errors import ProjectionError
from .differentiation import Differentiator, FiniteDifference
from .regions import SignedDistanceFunction


@dataclass
class ProjectionResult:
    """Outcome of projecting a point onto a level set."""
    point: np.ndarray         # Last Newton iterate
    distance: float           # sign(f(x0)) * |point - x0|
    converged: bool           # Step size fell below tolerance
    n_iterations: int
    residual: float           # |[f(x), (x - x0) × ∇f(x)]| at the last iterate


def _residual(f_value: float, grad: np.ndarray, delta: np.ndarray) -> np.ndarray:
    return np.array([f_value, delta[0] * grad[1] - delta[1] * grad[0]])


def project_to_level_set(f: Callable[[np.ndarray], float], x0: np.ndarray,
                         derivatives: Optional[Differentiator] = None,
                         max_iters: int = 1000, tol: float = 1e-8,
                         alpha: float = 1.0) -> ProjectionResult:
    """
    Project x0 onto the zero level set of f by Newton-Raphson.

    Iteration stops when the squared step length drops below `tol`, when the
    Jacobian becomes singular, or after `max_iters` iterations. In the last two
    cases the result is flagged as not converged and holds the last iterate.

    Args:
        f: scalar field
        x0: starting point, shape (2,)
        derivatives: gradient/Hessian provider (default: FiniteDifference())
        max_iters: iteration cap
        tol: tolerance on the squared step length
        alpha: step relaxation factor (1.0 = plain Newton)

    Returns:
        ProjectionResult
    """
    derivatives = derivatives or FiniteDifference()
    x0 = np.asarray(x0, dtype=np.float64)
    x = x0.copy()

    converged = False
    n_iterations = 0

    for iteration in range(1, max_iters + 1):
        n_iterations = iteration
        grad = derivatives.gradient(f, x)
        H = derivatives.hessian(f, x)
        delta = x - x0

        r = _residual(f(x), grad, delta)
        J = np.array([
            [grad[0], grad[1]],
            [grad[1] + delta[0] * H[1, 0] - delta[1] * H[0, 0],
             delta[0] * H[1, 1] - grad[0] - delta[1] * H[0, 1]],
        ])

        try:
            step = alpha * np.linalg.solve(J, r)
        except np.linalg.LinAlgError:
            break
        if not np.all(np.isfinite(step)):
            break

        x = x - step
        if np.dot(step, step) < tol:
            converged = True
            break

    residual = float(np.linalg.norm(
        _residual(f(x), derivatives.gradient(f, x), x - x0)))
    distance = float(np.sign(f(x0)) * np.linalg.norm(x - x0))

    return ProjectionResult(point=x, distance=distance, converged=converged,
                            n_iterations=n_iterations, residual=residual)


class ImplicitRegion(SignedDistanceFunction):
    """
    Region {x : field(x) < level}.

    Evaluating the region projects the point onto the boundary, which makes it
    far more expensive than the closed-form primitives.

    Attributes:
        field: scalar field
        level: boundary level
        derivatives: gradient/Hessian provider
        max_iters, tol, alpha: Newton-Raphson settings
        strict: raise ProjectionError when a projection does not converge
        n_unconverged: number of non-converged projections seen so far

    Example:
        >>> superellipse = ImplicitRegion(lambda x: np.sum(x ** 4) ** 0.25 - 1)
    """

    def __init__(self, field: Callable[[np.ndarray], float], level: float = 0.0,
                 derivatives: Optional[Differentiator] = None,
                 max_iters: int = 1000, tol: float = 1e-8, alpha: float = 1.0,
                 strict: bool = False):
        if max_iters < 1:
            raise ValueError(f"max_iters must be at least 1, got {max_iters}")
        if not 0 < alpha <= 1:
            raise ValueError(f"alpha must be in (0, 1], got {alpha}")

        self.field = field
        self.level = float(level)
        self.derivatives = derivatives or FiniteDifference()
        self.max_iters = max_iters
        self.tol = tol
        self.alpha = alpha
        self.strict = strict
        self.n_unconverged = 0

    def shifted_field(self, x: np.ndarray) -> float:
        """field(x) - level, whose zero set is the boundary."""
        return self.field(x) - self.level

    def project(self, x: np.ndarray) -> ProjectionResult:
        """Closest boundary point to x, with convergence diagnostics."""
        result = project_to_level_set(self.shifted_field, x, self.derivatives,
                                      max_iters=self.max_iters, tol=self.tol,
                                      alpha=self.alpha)
        if not result.converged:
            self.n_unconverged += 1
            if self.strict:
                raise ProjectionError(
                    f"Projection of {np.asarray(x).tolist()} did not converge after "
                    f"{result.n_iterations} iterations (residual {result.residual:.3e})"
                )
        return result

    def __call__(self, x: np.ndarray) -> float:
        return self.project(x).distance

    def __repr__(self):
        return f"ImplicitRegion(field={self.field!r}, level={self.level})"
