"""Core frontal area estimation components."""

from .models import Mesh, Ray, SamplingPlane, AreaEstimate, Config
from .geometry import normalize, wind_direction_from_angles
from .ray_casting import ray_intersects_mesh, ray_triangle_intersection
from .sampling import build_sampling_plane, generate_sample_points, generate_rays
from .estimator import (
    FrontalAreaEstimator,
    RayTracedShadowSamplerEstimator,
    estimate_frontal_area,
)
from .aerodynamics import compute_drag_magnitude

__all__ = [
    "Mesh",
    "Ray",
    "SamplingPlane",
    "AreaEstimate",
    "Config",
    "normalize",
    "wind_direction_from_angles",
    "ray_intersects_mesh",
    "ray_triangle_intersection",
    "build_sampling_plane",
    "generate_sample_points",
    "generate_rays",
    "FrontalAreaEstimator",
    "RayTracedShadowSamplerEstimator",
    "estimate_frontal_area",
    "compute_drag_magnitude",
]
