"""Ray casting utilities for triangle mesh intersection detection.

This module decides whether a ray (one sample of the wind sweeping past the
object) hits a triangle mesh. Every triangle is tested for every ray with the
Möller–Trumbore algorithm; there is no acceleration structure.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .geometry import cross, dot
from .models import Mesh, Ray

# Determinant magnitude below which a ray counts as parallel to a triangle
PARALLEL_EPSILON = 1e-9

# Hits closer than this to the ray origin are ignored (self-intersection)
DEFAULT_MIN_DISTANCE = 1e-6


@dataclass
class RayTriangleIntersection:
    """Result of a ray-triangle intersection test.

    Attributes:
        intersects: Whether the ray hits the triangle.
        t: The parameter t such that hit point = origin + t * direction.
        u: First barycentric coordinate of the hit point.
        v: Second barycentric coordinate of the hit point.
        point: The hit point (if intersects is True).
    """

    intersects: bool
    t: Optional[float] = None
    u: Optional[float] = None
    v: Optional[float] = None
    point: Optional[np.ndarray] = None


def ray_triangle_intersection(
    ray_origin: np.ndarray,
    ray_direction: np.ndarray,
    v0: np.ndarray,
    v1: np.ndarray,
    v2: np.ndarray,
    min_distance: float = DEFAULT_MIN_DISTANCE,
    epsilon: float = PARALLEL_EPSILON,
) -> RayTriangleIntersection:
    """Compute a detailed Möller–Trumbore ray-triangle intersection.

    For a hit to occur:
    1. The ray must not be parallel to the triangle plane (|det| >= epsilon)
    2. The barycentric coordinates must satisfy u in [0, 1], v >= 0, u + v <= 1
    3. The hit must lie in front of the origin, beyond min_distance

    Args:
        ray_origin: Starting point of the ray.
        ray_direction: Direction of the ray (should be normalized).
        v0: First triangle vertex.
        v1: Second triangle vertex.
        v2: Third triangle vertex.
        min_distance: Smallest accepted ray parameter t.
        epsilon: Parallel rejection threshold for the determinant.

    Returns:
        RayTriangleIntersection with details about the intersection.
    """
    edge1 = v1 - v0
    edge2 = v2 - v0

    h = cross(ray_direction, edge2)
    det = dot(edge1, h)

    # Ray parallel to triangle plane (also catches zero-area triangles)
    if abs(det) < epsilon:
        return RayTriangleIntersection(intersects=False)

    inv_det = 1.0 / det
    s = ray_origin - v0
    u = inv_det * dot(s, h)
    if u < 0.0 or u > 1.0:
        return RayTriangleIntersection(intersects=False, u=u)

    q = cross(s, edge1)
    v = inv_det * dot(ray_direction, q)
    if v < 0.0 or u + v > 1.0:
        return RayTriangleIntersection(intersects=False, u=u, v=v)

    t = inv_det * dot(edge2, q)
    if t <= min_distance:
        return RayTriangleIntersection(intersects=False, t=t, u=u, v=v)

    return RayTriangleIntersection(
        intersects=True,
        t=t,
        u=u,
        v=v,
        point=ray_origin + t * ray_direction,
    )


def ray_intersects_triangle(
    ray_origin: np.ndarray,
    ray_direction: np.ndarray,
    v0: np.ndarray,
    v1: np.ndarray,
    v2: np.ndarray,
    min_distance: float = DEFAULT_MIN_DISTANCE,
    epsilon: float = PARALLEL_EPSILON,
) -> bool:
    """Check if a ray hits a triangle.

    Args:
        ray_origin: Starting point of the ray.
        ray_direction: Direction of the ray (should be normalized).
        v0: First triangle vertex.
        v1: Second triangle vertex.
        v2: Third triangle vertex.
        min_distance: Smallest accepted ray parameter t.
        epsilon: Parallel rejection threshold for the determinant.

    Returns:
        True if the ray hits the triangle, False otherwise.
    """
    result = ray_triangle_intersection(
        ray_origin, ray_direction, v0, v1, v2, min_distance, epsilon
    )
    return result.intersects


def resolve_triangle(
    mesh: Mesh, indices: Sequence[int]
) -> Optional[tuple[np.ndarray, np.ndarray, np.ndarray]]:
    """Look up the three vertices of a triangle.

    Args:
        mesh: Mesh holding the vertex array.
        indices: Index triple into the mesh's vertices.

    Returns:
        Tuple of three vertex positions, or None if any index is negative or
        out of range.
    """
    n = mesh.n_vertices
    i0, i1, i2 = indices
    if i0 < 0 or i1 < 0 or i2 < 0:
        return None
    if i0 >= n or i1 >= n or i2 >= n:
        return None
    vertices = mesh.vertices
    return vertices[i0], vertices[i1], vertices[i2]


def ray_intersects_mesh(
    ray: Ray,
    mesh: Mesh,
    min_distance: float = DEFAULT_MIN_DISTANCE,
) -> bool:
    """Check if a ray hits any triangle of a mesh.

    Triangles are scanned in order and the scan stops at the first hit; the
    closest hit is not needed to tell whether a ray is blocked. Triangles with
    invalid indices are skipped.

    Args:
        ray: The ray to test.
        mesh: The mesh to test against.
        min_distance: Smallest accepted ray parameter t.

    Returns:
        True if any triangle is hit beyond min_distance, False otherwise.
    """
    for indices in mesh.triangles:
        triangle = resolve_triangle(mesh, indices)
        if triangle is None:
            continue
        v0, v1, v2 = triangle
        if ray_intersects_triangle(ray.origin, ray.direction, v0, v1, v2, min_distance):
            return True
    return False


def count_hits(
    rays: list[Ray],
    mesh: Mesh,
    min_distance: float = DEFAULT_MIN_DISTANCE,
) -> int:
    """Count how many rays hit the mesh.

    Args:
        rays: Rays to test.
        mesh: The mesh to test against.
        min_distance: Smallest accepted ray parameter t.

    Returns:
        Number of rays hitting at least one triangle.
    """
    return sum(1 for ray in rays if ray_intersects_mesh(ray, mesh, min_distance))
