"""
Geometry Module
===============

Signed distance regions, boolean combinators, polygon predicates, coordinate
transforms and the implicit level-set projector.
"""

from .regions import (
    SignedDistanceFunction,
    Circle,
    Rect,
    Polygon,
    HalfPlane,
    CombinedRegion,
    TransformedRegion,
    union,
    intersect,
    setdiff,
    evaluate_points,
    bounding_box,
)
from .polygon import distance, winding_number, contains, triangle_area
from .transforms import Rotation, Translation
from .differentiation import (
    Differentiator,
    FiniteDifference,
    AnalyticDerivatives,
    finite_difference_gradient,
    finite_difference_hessian,
)
from .implicit import ImplicitRegion, ProjectionResult, project_to_level_set

__all__ = [
    "SignedDistanceFunction",
    "Circle",
    "Rect",
    "Polygon",
    "HalfPlane",
    "CombinedRegion",
    "TransformedRegion",
    "union",
    "intersect",
    "setdiff",
    "evaluate_points",
    "bounding_box",
    "distance",
    "winding_number",
    "contains",
    "triangle_area",
    "Rotation",
    "Translation",
    "Differentiator",
    "FiniteDifference",
    "AnalyticDerivatives",
    "finite_difference_gradient",
    "finite_difference_hessian",
    "ImplicitRegion",
    "ProjectionResult",
    "project_to_level_set",
]
