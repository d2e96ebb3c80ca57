"""Tests for the ray casting module."""

import numpy as np
import pytest

from drag_area_simulator.core.models import Mesh, Ray
from drag_area_simulator.core.ray_casting import (
    count_hits,
    ray_intersects_mesh,
    ray_intersects_triangle,
    ray_triangle_intersection,
    resolve_triangle,
)


def create_test_triangle(x=10.0):
    """Triangle in the plane x = const, straddling the X axis."""
    return (
        np.array([x, -5.0, -5.0]),
        np.array([x, 5.0, -5.0]),
        np.array([x, 0.0, 5.0]),
    )


def create_test_ray(origin=(0, 0, 0), direction=(1, 0, 0)) -> Ray:
    """Create a ray for testing."""
    return Ray(origin=np.array(origin, dtype=float), direction=np.array(direction, dtype=float))


class TestRayTriangleIntersection:
    """Tests for ray_triangle_intersection function."""

    def test_direct_hit(self):
        """Ray along +X through the triangle should hit at t = 10."""
        v0, v1, v2 = create_test_triangle()
        result = ray_triangle_intersection(np.zeros(3), np.array([1.0, 0, 0]), v0, v1, v2)

        assert result.intersects
        assert result.t == pytest.approx(10.0)
        np.testing.assert_array_almost_equal(result.point, [10, 0, 0])

    def test_barycentric_coordinates(self):
        """Hitting a vertex gives the matching barycentric corner."""
        v0, v1, v2 = create_test_triangle()
        result = ray_triangle_intersection(
            np.array([0.0, 0.0, 5.0]), np.array([1.0, 0, 0]), v0, v1, v2
        )
        assert result.intersects
        assert result.u == pytest.approx(0.0, abs=1e-12)
        assert result.v == pytest.approx(1.0)

    def test_miss_outside(self):
        v0, v1, v2 = create_test_triangle()
        assert not ray_intersects_triangle(
            np.array([0.0, 20.0, 0.0]), np.array([1.0, 0, 0]), v0, v1, v2
        )

    def test_behind_origin(self):
        """Triangle behind the ray origin is not hit."""
        v0, v1, v2 = create_test_triangle(x=-10.0)
        assert not ray_intersects_triangle(np.zeros(3), np.array([1.0, 0, 0]), v0, v1, v2)

    def test_backface_is_hit(self):
        """Winding does not matter: rays hit triangles from either side."""
        v0, v1, v2 = create_test_triangle()
        assert ray_intersects_triangle(np.zeros(3), np.array([1.0, 0, 0]), v0, v2, v1)

    def test_parallel_ray_rejected(self):
        """Ray lying in the triangle's plane is rejected by the determinant test."""
        v0 = np.array([0.0, 0.0, 0.0])
        v1 = np.array([1.0, 0.0, 0.0])
        v2 = np.array([0.0, 1.0, 0.0])
        result = ray_triangle_intersection(
            np.array([-1.0, 0.2, 0.0]), np.array([1.0, 0, 0]), v0, v1, v2
        )
        assert not result.intersects
        assert result.t is None

    def test_degenerate_triangle_rejected(self):
        """A zero-area triangle never counts as a hit and never divides by zero."""
        v0 = np.array([5.0, 0.0, 0.0])
        v1 = np.array([5.0, 1.0, 0.0])
        v2 = np.array([5.0, 2.0, 0.0])
        assert not ray_intersects_triangle(np.zeros(3), np.array([1.0, 0, 0]), v0, v1, v2)

    def test_min_distance_excludes_origin(self):
        """A triangle at the ray origin is excluded by min_distance."""
        v0, v1, v2 = create_test_triangle(x=0.0)
        assert not ray_intersects_triangle(
            np.zeros(3), np.array([1.0, 0, 0]), v0, v1, v2, min_distance=1e-6
        )

    def test_edge_is_inclusive(self):
        """A ray through a shared edge counts as a hit."""
        v0 = np.array([1.0, 0.0, 0.0])
        v1 = np.array([1.0, 1.0, 0.0])
        v2 = np.array([1.0, 0.0, 1.0])
        # Midpoint of edge v1-v2 (u + v == 1)
        assert ray_intersects_triangle(
            np.array([0.0, 0.5, 0.5]), np.array([1.0, 0, 0]), v0, v1, v2
        )


class TestResolveTriangle:
    """Tests for resolve_triangle function."""

    def test_valid_indices(self):
        mesh = Mesh.unit_cube()
        v0, v1, v2 = resolve_triangle(mesh, (0, 1, 2))
        np.testing.assert_array_equal(v0, mesh.vertices[0])
        np.testing.assert_array_equal(v2, mesh.vertices[2])

    @pytest.mark.parametrize("indices", [(-1, 0, 1), (0, 8, 1), (0, 1, 100)])
    def test_invalid_indices(self, indices):
        assert resolve_triangle(Mesh.unit_cube(), indices) is None


class TestRayIntersectsMesh:
    """Tests for ray_intersects_mesh function."""

    def test_hits_cube(self):
        ray = create_test_ray(origin=(-10, 0.1, 0.2))
        assert ray_intersects_mesh(ray, Mesh.unit_cube())

    def test_misses_cube(self):
        ray = create_test_ray(origin=(-10, 2.0, 0.0))
        assert not ray_intersects_mesh(ray, Mesh.unit_cube())

    def test_empty_mesh(self):
        assert not ray_intersects_mesh(create_test_ray(), Mesh())

    def test_bad_indices_are_skipped(self):
        """Out-of-range and negative indices skip the triangle without raising."""
        mesh = Mesh(
            vertices=[(5, -1, -1), (5, 1, -1), (5, 0, 1)],
            triangles=[(0, 1, 7), (-1, 0, 1)],
        )
        assert not ray_intersects_mesh(create_test_ray(), mesh)

    def test_valid_triangle_after_bad_one(self):
        mesh = Mesh(
            vertices=[(5, -1, -1), (5, 1, -1), (5, 0, 1)],
            triangles=[(0, 1, 7), (0, 1, 2)],
        )
        assert ray_intersects_mesh(create_test_ray(), mesh)

    def test_count_hits(self):
        rays = [
            create_test_ray(origin=(-10, 0, 0)),
            create_test_ray(origin=(-10, 3, 0)),
            create_test_ray(origin=(-10, -0.4, 0.4)),
        ]
        assert count_hits(rays, Mesh.unit_cube()) == 2
