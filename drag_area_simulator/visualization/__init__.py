"""Plotly 3D visualization module."""

from .scene_builder import (
    build_scene,
    create_mesh_trace,
    create_sampling_plane_trace,
    create_heading_sweep_figure,
)

__all__ = [
    "build_scene",
    "create_mesh_trace",
    "create_sampling_plane_trace",
    "create_heading_sweep_figure",
]
