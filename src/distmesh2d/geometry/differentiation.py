"""
Differentiation
===============

Gradient and Hessian providers for scalar fields on the plane.

The mesh driver only needs `gradient(f, x)`; implicit regions also need
`hessian(f, x)`. Any object with these two methods can be injected, so
finite-difference, analytic or automatic derivatives are interchangeable.
"""

import numpy as np
from typing import Callable, Optional, Protocol

Field = Callable[[np.ndarray], float]

# Step sizes that balance truncation against round-off for central differences
_GRADIENT_STEP = np.finfo(np.float64).eps ** (1.0 / 3.0)
_HESSIAN_STEP = np.finfo(np.float64).eps ** (1.0 / 4.0)


class Differentiator(Protocol):
    """Capability required by ImplicitRegion."""

    def gradient(self, f: Field, x: np.ndarray) -> np.ndarray:
        ...

    def hessian(self, f: Field, x: np.ndarray) -> np.ndarray:
        ...


def _relative_step(base: float, x: np.ndarray) -> np.ndarray:
    return base * np.maximum(1.0, np.abs(x))


def finite_difference_gradient(f: Field, x: np.ndarray,
                               step: Optional[float] = None) -> np.ndarray:
    """
    Central-difference gradient of f at x.

    Args:
        f: scalar field, f(x) -> float
        x: shape (2,)
        step: base step (default: cbrt(machine epsilon)), scaled by max(1, |x_i|)

    Returns:
        gradient: shape (2,)
    """
    x = np.asarray(x, dtype=np.float64)
    steps = _relative_step(_GRADIENT_STEP if step is None else step, x)
    grad = np.zeros_like(x)
    for i in range(x.size):
        e = np.zeros_like(x)
        e[i] = steps[i]
        grad[i] = (f(x + e) - f(x - e)) / (2.0 * steps[i])
    return grad


def finite_difference_hessian(f: Field, x: np.ndarray,
                              step: Optional[float] = None) -> np.ndarray:
    """
    Central-difference Hessian of f at x.

    Diagonal entries use the three-point second difference; mixed entries use
    the four-point stencil. The result is symmetric by construction.

    Returns:
        hessian: shape (2, 2)
    """
    x = np.asarray(x, dtype=np.float64)
    steps = _relative_step(_HESSIAN_STEP if step is None else step, x)
    n = x.size
    H = np.zeros((n, n))
    f0 = f(x)
    for i in range(n):
        ei = np.zeros_like(x)
        ei[i] = steps[i]
        H[i, i] = (f(x + ei) - 2.0 * f0 + f(x - ei)) / steps[i] ** 2
        for j in range(i + 1, n):
            ej = np.zeros_like(x)
            ej[j] = steps[j]
            H[i, j] = (f(x + ei + ej) - f(x + ei - ej)
                       - f(x - ei + ej) + f(x - ei - ej)) / (4.0 * steps[i] * steps[j])
            H[j, i] = H[i, j]
    return H


class FiniteDifference:
    """
    Finite-difference derivative provider.

    Attributes:
        gradient_step: base step for gradients (None = default)
        hessian_step: base step for Hessians (None = default)
    """

    def __init__(self, gradient_step: Optional[float] = None,
                 hessian_step: Optional[float] = None):
        self.gradient_step = gradient_step
        self.hessian_step = hessian_step

    def gradient(self, f: Field, x: np.ndarray) -> np.ndarray:
        return finite_difference_gradient(f, x, self.gradient_step)

    def hessian(self, f: Field, x: np.ndarray) -> np.ndarray:
        return finite_difference_hessian(f, x, self.hessian_step)


class AnalyticDerivatives:
    """
    Derivative provider backed by user-supplied closed forms.

    The supplied callables take only the point; the field argument passed by
    callers is ignored, so an instance is tied to one field.

    Args:
        gradient: x -> shape (2,)
        hessian: x -> shape (2, 2); falls back to finite differences of
            `gradient` when omitted
    """

    def __init__(self, gradient: Callable[[np.ndarray], np.ndarray],
                 hessian: Optional[Callable[[np.ndarray], np.ndarray]] = None):
        self._gradient = gradient
        self._hessian = hessian

    def gradient(self, f: Field, x: np.ndarray) -> np.ndarray:
        return np.asarray(self._gradient(np.asarray(x, dtype=np.float64)),
                          dtype=np.float64)

    def hessian(self, f: Field, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        if self._hessian is not None:
            return np.asarray(self._hessian(x), dtype=np.float64)
        # Jacobian of the analytic gradient, column by column
        steps = _relative_step(_GRADIENT_STEP, x)
        H = np.zeros((x.size, x.size))
        for j in range(x.size):
            e = np.zeros_like(x)
            e[j] = steps[j]
            H[:, j] = (self.gradient(f, x + e) - self.gradient(f, x - e)) / (2.0 * steps[j])
        return 0.5 * (H + H.T)
