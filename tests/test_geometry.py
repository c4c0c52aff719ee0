"""
Tests for Geometry Module
=========================
"""

import numpy as np
import pytest
import sys
import warnings
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from distmesh2d.geometry.regions import (
    Circle, Rect, Polygon, HalfPlane, CombinedRegion, TransformedRegion,
    union, intersect, setdiff, evaluate_points, bounding_box
)
from distmesh2d.geometry.polygon import (
    distance, winding_number, contains, triangle_area
)
from distmesh2d.geometry.transforms import Rotation, Translation


UNIT_SQUARE = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


def sample_points(n=200, seed=0):
    rng = np.random.default_rng(seed)
    return rng.uniform(-2, 2, size=(n, 2))


class TestPrimitives:
    """Tests for the primitive regions."""

    def test_circle_values(self):
        """Circle is |x - c| - r."""
        c = Circle((1.0, 0.0), 0.5)
        assert np.isclose(c([1.0, 0.0]), -0.5)
        assert np.isclose(c([2.0, 0.0]), 0.5)
        assert np.isclose(c([1.5, 0.0]), 0.0)

    def test_circle_invalid_radius(self):
        with pytest.raises(ValueError):
            Circle((0, 0), 0)
        with pytest.raises(ValueError):
            Circle((0, 0), -1)

    def test_rect_values(self):
        """Rect is minus the smallest margin to the sides."""
        r = Rect(-1, 1, -1, 1)
        assert np.isclose(r([0.0, 0.0]), -1.0)
        assert np.isclose(r([0.5, 0.0]), -0.5)
        assert np.isclose(r([1.0, 0.3]), 0.0)
        assert np.isclose(r([2.0, 0.0]), 1.0)

    def test_rect_invalid(self):
        with pytest.raises(ValueError):
            Rect(1, -1, -1, 1)
        with pytest.raises(ValueError):
            Rect(-1, 1, 0, 0)

    def test_halfplane(self):
        """HalfPlane((0,0), (0,-1)) is the upper half plane."""
        upper = HalfPlane((0, 0), (0, -1))
        assert np.isclose(upper([3.0, 1.0]), -1.0)
        assert np.isclose(upper([3.0, -2.0]), 2.0)

    def test_halfplane_zero_normal(self):
        with pytest.raises(ValueError):
            HalfPlane((0, 0), (0, 0))

    @pytest.mark.parametrize("region", [
        Circle((0.2, -0.1), 0.7),
        Rect(-1, 0.5, -0.3, 1.2),
        Polygon(UNIT_SQUARE),
        HalfPlane((0.1, 0.2), (1, 1)),
    ])
    def test_evaluate_many_matches_single(self, region):
        """Vectorized evaluation agrees with point-wise evaluation."""
        points = sample_points(50)
        expected = np.array([region(p) for p in points])
        assert np.allclose(region.evaluate_many(points), expected)
        assert np.allclose(evaluate_points(region, points), expected)

    def test_evaluate_points_plain_callable(self):
        """Plain callables are evaluated one point at a time."""
        points = np.array([[0.0, 1.0], [2.0, -3.0]])
        values = evaluate_points(lambda x: -x[1], points)
        assert np.allclose(values, [-1.0, 3.0])


class TestCombinators:
    """Tests for union, intersect and setdiff."""

    @pytest.mark.parametrize("f", [
        Circle((0, 0), 1.0),
        Rect(-1, 1, -0.5, 0.5),
        Polygon([[0, 0], [1, 0], [0.3, 1]]),
    ])
    def test_idempotence(self, f):
        """f ∪ f = f, f ∩ f = f and f \\ f is never inside."""
        points = sample_points()
        fx = f.evaluate_many(points)

        assert np.allclose(union(f, f).evaluate_many(points), fx)
        assert np.allclose(intersect(f, f).evaluate_many(points), fx)
        assert np.all(setdiff(f, f).evaluate_many(points) >= 0)

    def test_annulus(self):
        """Disk minus a smaller disk."""
        annulus = setdiff(Circle((0, 0), 1.0), Circle((0, 0), 0.3))
        assert annulus([0.0, 0.0]) > 0          # in the hole
        assert np.isclose(annulus([0.6, 0.0]), -0.3)
        assert annulus([1.5, 0.0]) > 0          # outside the disk

    def test_union_and_intersection_values(self):
        a = Circle((-0.5, 0), 1.0)
        b = Circle((0.5, 0), 1.0)
        x = np.array([1.2, 0.0])
        assert np.isclose(union(a, b)(x), min(a(x), b(x)))
        assert np.isclose(intersect(a, b)(x), max(a(x), b(x)))

    def test_operator_sugar(self):
        """f | g, f & g and f - g build the same regions as the functions."""
        a = Circle((0, 0), 1.0)
        b = Rect(0, 2, -0.5, 0.5)
        points = sample_points(30)
        assert np.allclose((a | b).evaluate_many(points), union(a, b).evaluate_many(points))
        assert np.allclose((a & b).evaluate_many(points), intersect(a, b).evaluate_many(points))
        assert np.allclose((a - b).evaluate_many(points), setdiff(a, b).evaluate_many(points))

    def test_mixed_with_callable(self):
        """Regions combine with plain functions on either side."""
        upper = lambda x: -x[1]
        half_disk = Circle((0, 0), 1.0) & upper
        assert isinstance(half_disk, CombinedRegion)
        assert half_disk([0.0, 0.5]) < 0
        assert half_disk([0.0, -0.5]) > 0

        reversed_half_disk = upper & Circle((0, 0), 1.0)
        assert reversed_half_disk([0.0, 0.5]) < 0

    def test_nested_composition(self):
        """Combinators are closed under composition."""
        square = Rect(-1, 1, -1, 1)
        holes = union(Circle((-0.5, 0), 0.2), Circle((0.5, 0), 0.2))
        region = setdiff(square, holes)
        assert region([0.0, 0.0]) < 0
        assert region([0.5, 0.0]) > 0
        assert region([-0.5, 0.0]) > 0

    def test_unknown_operation(self):
        with pytest.raises(ValueError):
            CombinedRegion("xor", Circle((0, 0), 1), Circle((1, 0), 1))

    def test_bounding_boxes(self):
        a = Circle((0, 0), 1.0)
        b = Rect(0, 3, -0.5, 0.5)
        assert np.allclose(union(a, b).bounding_box(), [[-1, -1], [3, 1]])
        assert np.allclose(intersect(a, b).bounding_box(), [[0, -0.5], [1, 0.5]])
        assert np.allclose(setdiff(a, b).bounding_box(), [[-1, -1], [1, 1]])
        assert union(a, lambda x: -x[1]).bounding_box() is None
        assert np.allclose(intersect(a, lambda x: -x[1]).bounding_box(), [[-1, -1], [1, 1]])
        assert bounding_box(lambda x: 0.0) is None


class TestPolygon:
    """Tests for polygon predicates."""

    def test_triangle_area(self):
        assert np.isclose(triangle_area([0.0, 0.0], [1.0, 0.0], [0.0, 1.0]), 0.5)
        assert np.isclose(triangle_area([0.0, 0.0], [0.0, 1.0], [1.0, 0.0]), -0.5)

    def test_winding_number(self):
        assert winding_number(UNIT_SQUARE, [0.5, 0.5]) == 1
        assert winding_number(UNIT_SQUARE, [-0.5, 0.5]) == 0
        assert winding_number(UNIT_SQUARE, [1.5, 0.5]) == 0

    def test_winding_number_clockwise(self):
        """Reversing the orientation flips the sign, not the parity."""
        clockwise = UNIT_SQUARE[::-1]
        assert winding_number(clockwise, [0.5, 0.5]) == -1
        assert contains(clockwise, [0.5, 0.5])

    def test_vertex_aligned_ray(self):
        """A ray through a vertex is counted once."""
        diamond = np.array([[1.0, 0.0], [2.0, 1.0], [1.0, 2.0], [0.0, 1.0]])
        assert winding_number(diamond, [1.0, 1.0]) == 1
        assert winding_number(diamond, [-1.0, 1.0]) == 0
        assert winding_number(diamond, [3.0, 1.0]) == 0

    def test_even_odd_rule(self):
        """A boundary traversed twice winds twice: even, so outside."""
        doubled = np.vstack([UNIT_SQUARE, UNIT_SQUARE])
        assert winding_number(doubled, [0.5, 0.5]) == 2
        assert not contains(doubled, [0.5, 0.5])

    def test_contains(self):
        assert contains(UNIT_SQUARE, [0.5, 0.5])
        assert not contains(UNIT_SQUARE, [-0.5, 0.5])
        assert not contains(UNIT_SQUARE, [1.5, 0.5])

    def test_distance(self):
        assert np.isclose(distance(UNIT_SQUARE, [-0.5, 0.1]), 0.5)
        assert np.isclose(distance(UNIT_SQUARE, [0.5, 0.5]), 0.5)
        # Nearest feature is a vertex
        assert np.isclose(distance(UNIT_SQUARE, [2.0, 2.0]), np.sqrt(2))

    def test_distance_repeated_vertex(self):
        """A zero-length edge is skipped without a division warning."""
        repeated = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert np.isclose(distance(repeated, [-0.5, 0.1]), 0.5)
            assert np.isclose(distance(repeated, [1.5, 0.0]), 0.5)
            assert np.isclose(Polygon(repeated)([0.5, 0.5]), -0.5)

    def test_polygon_sdf(self):
        square = Polygon(UNIT_SQUARE)
        assert np.isclose(square([0.5, 0.5]), -0.5)
        assert np.isclose(square([0.5, 0.9]), -0.1)
        assert np.isclose(square([-0.5, 0.1]), 0.5)
        assert [0.5, 0.5] in square
        assert [1.5, 0.5] not in square

    def test_concave_polygon(self):
        """L-shaped polygon: the notch is outside."""
        l_shape = Polygon([[0, 0], [2, 0], [2, 1], [1, 1], [1, 2], [0, 2]])
        assert l_shape([0.5, 1.5]) < 0
        assert l_shape([1.5, 0.5]) < 0
        assert np.isclose(l_shape([1.5, 1.5]), 0.5)

    def test_regular_polygon(self):
        hexagon = Polygon.regular(6, 1.0)
        assert len(hexagon.vertices) == 6
        assert np.allclose(np.linalg.norm(hexagon.vertices, axis=1), 1.0)
        assert hexagon([0.0, 0.0]) < 0
        assert np.isclose(hexagon([0.0, 0.0]), -np.sqrt(3) / 2)

    def test_polygon_validation(self):
        with pytest.raises(ValueError):
            Polygon([[0, 0], [1, 0]])
        with pytest.raises(ValueError):
            Polygon([0, 1, 2])

    def test_polygon_bounding_box(self):
        assert np.allclose(Polygon(UNIT_SQUARE).bounding_box(), [[0, 0], [1, 1]])


class TestTransforms:
    """Tests for rotations, translations and transformed regions."""

    def test_rotation_about_origin(self):
        rot = Rotation(np.pi / 2)
        assert np.allclose(rot(np.array([1.0, 0.0])), [0.0, 1.0])

    def test_rotation_about_pivot(self):
        rot = Rotation(np.pi / 2, (1.0, 1.0))
        assert np.allclose(rot(np.array([2.0, 1.0])), [1.0, 2.0])
        assert np.allclose(rot(np.array([1.0, 1.0])), [1.0, 1.0])

    def test_rotation_inverse(self):
        rot = Rotation(0.7, (0.3, -0.2))
        x = np.array([1.3, 2.1])
        assert np.allclose(rot.inverse()(rot(x)), x)

    def test_rotation_batch(self):
        """Rotations apply row-wise to (n, 2) arrays."""
        rot = Rotation(np.pi)
        points = np.array([[1.0, 0.0], [0.0, 2.0]])
        assert np.allclose(rot(points), [[-1.0, 0.0], [0.0, -2.0]])

    def test_rotated_rect(self):
        """A long horizontal bar evaluated in rotated coordinates stands upright."""
        bar = Rect(-2, 2, -0.5, 0.5)
        upright = TransformedRegion(bar, Rotation(np.pi / 2))
        assert upright([0.0, 1.5]) < 0
        assert upright([1.5, 0.0]) > 0
        assert np.allclose(upright.bounding_box(), [[-0.5, -2], [0.5, 2]])

    def test_translated_circle(self):
        moved = TransformedRegion(Circle((0, 0), 1.0), Translation((2.0, 0.0)))
        assert np.isclose(moved([2.0, 0.0]), -1.0)
        assert np.isclose(moved([0.0, 0.0]), 1.0)
        assert np.allclose(moved.bounding_box(), [[1, -1], [3, 1]])

    def test_transformed_evaluate_many(self):
        region = TransformedRegion(Rect(-1, 1, -0.2, 0.2), Rotation(0.3, (0.1, 0.1)))
        points = sample_points(20)
        expected = np.array([region(p) for p in points])
        assert np.allclose(region.evaluate_many(points), expected)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
