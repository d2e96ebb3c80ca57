"""Sampling plane, grid and ray construction for shadow sampling.

The plane is placed perpendicular to the wind, flush with the most upwind
point of the mesh, and sized to contain the mesh's silhouette. A square grid
of sample points covers it, and one ray per sample point is cast from a
single point far upwind.
"""

from typing import Optional

import numpy as np

from .geometry import cross, dot, length, normalize
from .models import Mesh, Ray, SamplingPlane

# Distance of the shared ray origin upwind of the sampling plane
FAR_DISTANCE = 1e6

# Above this |u.y| the wind is treated as parallel to world up
_UP_PARALLEL_THRESHOLD = 0.999

_WORLD_UP = np.array([0.0, 1.0, 0.0])
_WORLD_RIGHT = np.array([1.0, 0.0, 0.0])


def compute_mesh_bounds(mesh: Mesh) -> tuple[np.ndarray, np.ndarray]:
    """Axis-aligned bounding box of a mesh.

    Args:
        mesh: The mesh.

    Returns:
        Tuple of (min_corner, max_corner); a zero box for an empty mesh.
    """
    return mesh.bounds()


def build_sampling_plane(mesh: Mesh, wind_direction: np.ndarray) -> SamplingPlane:
    """Build the square sampling plane for a mesh and wind direction.

    The plane normal points against the wind. The plane passes through the
    point ``u * max(v · u)`` so every vertex lies at or behind it along the
    wind. The square is centered laterally on the mesh centroid and its
    half-extent is half the bounding-box diagonal. That bound is
    conservative: it always covers the silhouette but oversizes the square
    for elongated or rotated shapes.

    Args:
        mesh: The mesh to sample.
        wind_direction: Wind direction (need not be normalized).

    Returns:
        SamplingPlane for the mesh. An empty mesh yields a unit square at the
        origin with default axes.
    """
    u = normalize(wind_direction)

    if mesh.is_empty:
        return SamplingPlane(
            center=np.zeros(3),
            normal=-u,
            axis_u=_WORLD_RIGHT.copy(),
            axis_v=_WORLD_UP.copy(),
            half_extent=0.5,
        )

    min_corner, max_corner = compute_mesh_bounds(mesh)

    # Flush with the most upwind vertex
    max_projection = float(np.max(mesh.vertices @ u))
    plane_point = u * max_projection

    helper = _WORLD_RIGHT if abs(u[1]) > _UP_PARALLEL_THRESHOLD else _WORLD_UP
    axis_u = normalize(cross(helper, u))
    axis_v = normalize(cross(u, axis_u))

    # Shift the square sideways so it is centered on the mesh
    offset = mesh.centroid() - plane_point
    center = plane_point + axis_u * dot(offset, axis_u) + axis_v * dot(offset, axis_v)

    diagonal = length(max_corner - min_corner)
    half_extent = 0.5 * diagonal if diagonal > 0.0 else 0.5

    return SamplingPlane(
        center=center,
        normal=-u,
        axis_u=axis_u,
        axis_v=axis_v,
        half_extent=half_extent,
    )


def generate_sample_points(
    plane: SamplingPlane,
    resolution: int,
    rng: Optional[np.random.Generator] = None,
) -> list[np.ndarray]:
    """Generate a square grid of sample points on the sampling plane.

    Points are spread uniformly over [-half_extent, +half_extent] along both
    plane axes, in row-major order: the outer loop walks axis_v, the inner
    loop walks axis_u.

    Args:
        plane: The sampling plane.
        resolution: Points per side; resolution² points are produced.
        rng: Optional random generator. When given, each point is jittered
            within its grid cell and clipped to the square. Without it the
            grid is fully deterministic.

    Returns:
        List of 3D points on the plane. A single point (the center) for
        resolution 1, and no points for resolution < 1.
    """
    if resolution < 1:
        return []
    if resolution == 1:
        return [plane.center.copy()]

    half = plane.half_extent
    step = 2.0 * half / (resolution - 1)

    points = []
    for j in range(resolution):
        for i in range(resolution):
            offset_u = -half + i * step
            offset_v = -half + j * step
            if rng is not None:
                du, dv = rng.uniform(-0.5, 0.5, size=2) * step
                offset_u = min(max(offset_u + du, -half), half)
                offset_v = min(max(offset_v + dv, -half), half)
            points.append(plane.point_at(offset_u, offset_v))

    return points


def generate_rays(
    plane: SamplingPlane,
    sample_points: list[np.ndarray],
    wind_direction: np.ndarray,
    distance: float = FAR_DISTANCE,
) -> list[Ray]:
    """Create rays from one distant upwind point toward each sample point.

    The rays share a single origin, so they fan out slightly rather than
    being exactly parallel. With the origin far away compared to the plane's
    size this is a close approximation of a parallel projection.

    Args:
        plane: The sampling plane.
        sample_points: Points on the plane to aim at.
        wind_direction: Wind direction (need not be normalized).
        distance: Distance of the shared origin upwind of the plane center.

    Returns:
        One ray per sample point, in the same order.
    """
    direction = normalize(wind_direction)
    origin = plane.center - direction * distance

    return [Ray(origin=origin, direction=normalize(p - origin)) for p in sample_points]
