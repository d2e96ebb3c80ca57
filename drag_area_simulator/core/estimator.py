"""Frontal area estimation by ray-traced shadow sampling.

This module contains the main algorithm: it determines how much of a square
sampling plane, placed across the wind in front of the mesh, is covered by
the mesh's silhouette, and scales the plane area by that fraction.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .geometry import normalize
from .models import AreaEstimate, Mesh
from .ray_casting import DEFAULT_MIN_DISTANCE, count_hits, ray_intersects_mesh
from .sampling import (
    FAR_DISTANCE,
    build_sampling_plane,
    generate_rays,
    generate_sample_points,
)

logger = logging.getLogger(__name__)


class FrontalAreaEstimator(ABC):
    """Capability interface for frontal area estimators.

    Implementations must return a non-negative area for every input,
    including empty meshes and degenerate wind directions.
    """

    @abstractmethod
    def estimate(
        self,
        mesh: Mesh,
        wind_direction: np.ndarray,
        samples: int,
        rng_seed: Optional[int] = None,
        keep_samples: bool = False,
    ) -> AreaEstimate:
        """Estimate the frontal area and return the full result."""

    def estimate_frontal_area(
        self,
        mesh: Mesh,
        wind_direction: np.ndarray,
        samples: int,
        rng_seed: Optional[int] = None,
    ) -> float:
        """Estimate the projected area of ``mesh`` seen along ``wind_direction``.

        Args:
            mesh: The mesh to measure.
            wind_direction: Direction the wind blows toward.
            samples: Sampling resolution.
            rng_seed: Seed for estimators that sample randomly.

        Returns:
            Estimated frontal area (>= 0).
        """
        return self.estimate(mesh, wind_direction, samples, rng_seed).frontal_area


class RayTracedShadowSamplerEstimator(FrontalAreaEstimator):
    """Estimate frontal area from the fraction of grid rays blocked by the mesh.

    Attributes:
        jitter: Jitter each sample within its grid cell. Off by default, in
            which case the grid is deterministic and ``rng_seed`` is ignored.
        far_distance: Distance of the shared ray origin upwind of the plane.
        min_distance: Smallest accepted ray parameter for a hit.
    """

    def __init__(
        self,
        jitter: bool = False,
        far_distance: float = FAR_DISTANCE,
        min_distance: float = DEFAULT_MIN_DISTANCE,
    ):
        self.jitter = jitter
        self.far_distance = far_distance
        self.min_distance = min_distance

    def estimate(
        self,
        mesh: Mesh,
        wind_direction: np.ndarray,
        samples: int,
        rng_seed: Optional[int] = None,
        keep_samples: bool = False,
    ) -> AreaEstimate:
        """Run the full plane → grid → rays → hits pipeline.

        Args:
            mesh: The mesh to measure. Only read, never modified.
            wind_direction: Direction the wind blows toward.
            samples: Grid points per side (samples² rays).
            rng_seed: Seed for jittered sampling; unused without jitter.
            keep_samples: Keep sample points and per-ray hit flags in the
                result (for debugging and visualization).

        Returns:
            AreaEstimate with the area and hit statistics.
        """
        direction = normalize(wind_direction)
        plane = build_sampling_plane(mesh, direction)

        rng = np.random.default_rng(rng_seed) if self.jitter else None
        sample_points = generate_sample_points(plane, samples, rng)
        rays = generate_rays(plane, sample_points, direction, self.far_distance)

        if keep_samples:
            hits = [ray_intersects_mesh(ray, mesh, self.min_distance) for ray in rays]
            hit_count = sum(hits)
        else:
            hits = []
            hit_count = count_hits(rays, mesh, self.min_distance)

        hit_ratio = hit_count / len(rays) if rays else 0.0
        frontal_area = plane.area * hit_ratio

        logger.debug(
            "Sampled %d rays over %.4f m² plane (half-extent %.4f): %d hits, area %.6f",
            len(rays),
            plane.area,
            plane.half_extent,
            hit_count,
            frontal_area,
        )

        return AreaEstimate(
            frontal_area=frontal_area,
            hit_count=hit_count,
            total_rays=len(rays),
            plane=plane,
            wind_direction=direction,
            sample_points=sample_points if keep_samples else [],
            hits=hits,
        )


def estimate_frontal_area(
    mesh: Mesh,
    wind_direction: np.ndarray,
    sample_resolution: int,
) -> float:
    """Estimate frontal area with the default deterministic estimator.

    Args:
        mesh: The mesh to measure.
        wind_direction: Direction the wind blows toward.
        sample_resolution: Grid points per side.

    Returns:
        Estimated frontal area (>= 0).
    """
    return RayTracedShadowSamplerEstimator().estimate_frontal_area(
        mesh, wind_direction, sample_resolution
    )


def get_detailed_estimate_info(
    mesh: Mesh,
    wind_direction: np.ndarray,
    sample_resolution: int,
    estimator: Optional[RayTracedShadowSamplerEstimator] = None,
) -> dict:
    """Get detailed information about a frontal area estimate.

    Useful for debugging and visualization. All values are JSON-serializable.

    Args:
        mesh: The mesh to measure.
        wind_direction: Direction the wind blows toward.
        sample_resolution: Grid points per side.
        estimator: Estimator to use (default: deterministic grid).

    Returns:
        Dictionary with the area, hit statistics and the sampling plane.
    """
    estimator = estimator or RayTracedShadowSamplerEstimator()
    result = estimator.estimate(mesh, wind_direction, sample_resolution, keep_samples=True)
    plane = result.plane

    return {
        "frontal_area": result.frontal_area,
        "hit_count": result.hit_count,
        "total_rays": result.total_rays,
        "hit_ratio": result.hit_ratio,
        "wind_direction": result.wind_direction.tolist(),
        "n_vertices": mesh.n_vertices,
        "n_triangles": mesh.n_triangles,
        "plane": {
            "center": plane.center.tolist(),
            "normal": plane.normal.tolist(),
            "axis_u": plane.axis_u.tolist(),
            "axis_v": plane.axis_v.tolist(),
            "half_extent": plane.half_extent,
            "area": plane.area,
        },
        "hit_points": [
            p.tolist() for p, hit in zip(result.sample_points, result.hits) if hit
        ],
    }
