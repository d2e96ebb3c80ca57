"""Plotly 3D visualization for the frontal area simulation.

This module provides functions to create interactive 3D views of the mesh,
the sampling plane, the sample grid colored by hit status, and the wind.
"""

from typing import Optional

import numpy as np
import plotly.graph_objects as go

from ..core.estimator import RayTracedShadowSamplerEstimator
from ..core.geometry import normalize
from ..core.models import AreaEstimate, Mesh, SamplingPlane


def create_mesh_trace(mesh: Mesh, color: str = "steelblue", opacity: float = 0.8) -> go.Mesh3d:
    """Create a Plotly mesh for a triangle mesh.

    Triangles with out-of-range indices are left out, matching what the
    intersection engine sees.

    Args:
        mesh: The mesh to draw.
        color: Fill color.
        opacity: Transparency (0-1).

    Returns:
        Plotly Mesh3d trace.
    """
    n = mesh.n_vertices
    valid = [t for t in mesh.triangles if all(0 <= idx < n for idx in t)]

    return go.Mesh3d(
        x=mesh.vertices[:, 0],
        y=mesh.vertices[:, 1],
        z=mesh.vertices[:, 2],
        i=[t[0] for t in valid],
        j=[t[1] for t in valid],
        k=[t[2] for t in valid],
        color=color,
        opacity=opacity,
        flatshading=True,
        name="Mesh",
        showlegend=True,
    )


def create_sampling_plane_trace(
    plane: SamplingPlane,
    color: str = "lightgray",
    opacity: float = 0.3,
) -> go.Mesh3d:
    """Create a Plotly mesh for the square sampling plane.

    Args:
        plane: The sampling plane.
        color: Fill color.
        opacity: Transparency (0-1).

    Returns:
        Plotly Mesh3d trace.
    """
    corners = plane.get_corners()

    x = [c[0] for c in corners]
    y = [c[1] for c in corners]
    z = [c[2] for c in corners]

    # Two triangles for the square
    return go.Mesh3d(
        x=x,
        y=y,
        z=z,
        i=[0, 0],
        j=[1, 2],
        k=[2, 3],
        color=color,
        opacity=opacity,
        name="Sampling plane",
        showlegend=True,
    )


def create_sample_points_markers(
    points: list[np.ndarray],
    hits: Optional[list[bool]] = None,
    hit_color: str = "crimson",
    miss_color: str = "lightgray",
    size: int = 2,
) -> go.Scatter3d:
    """Create markers for the sample grid, colored by hit status.

    Args:
        points: Sample points on the plane.
        hits: Per-point hit flags, aligned with points.
        hit_color: Color for points whose ray hit the mesh.
        miss_color: Color for points whose ray missed.
        size: Marker size.

    Returns:
        Plotly Scatter3d trace.
    """
    if hits:
        colors = [hit_color if hit else miss_color for hit in hits]
    else:
        colors = [miss_color] * len(points)

    return go.Scatter3d(
        x=[p[0] for p in points],
        y=[p[1] for p in points],
        z=[p[2] for p in points],
        mode="markers",
        marker=dict(size=size, color=colors),
        name="Sample points",
        showlegend=True,
    )


def create_wind_indicator(
    plane: SamplingPlane,
    wind_direction: np.ndarray,
    arrow_length: Optional[float] = None,
    color: str = "darkorange",
) -> go.Scatter3d:
    """Create a line showing the wind arriving at the plane center.

    Args:
        plane: The sampling plane.
        wind_direction: Direction the wind blows toward.
        arrow_length: Length of the line (default: the plane's side length).
        color: Line color.

    Returns:
        Plotly Scatter3d trace.
    """
    direction = normalize(wind_direction)
    if arrow_length is None:
        arrow_length = plane.side_length
    start = plane.center - arrow_length * direction
    end = plane.center

    return go.Scatter3d(
        x=[start[0], end[0]],
        y=[start[1], end[1]],
        z=[start[2], end[2]],
        mode="lines+markers",
        line=dict(color=color, width=6),
        marker=dict(size=[0, 6], color=color),
        name="Wind",
        showlegend=True,
    )


def create_coordinate_axes(
    origin: tuple[float, float, float] = (0, 0, 0),
    length: float = 1.0,
) -> list[go.Scatter3d]:
    """Create coordinate axis indicators.

    Args:
        origin: Origin point for axes.
        length: Length of each axis line.

    Returns:
        List of Plotly Scatter3d traces (X=red, Y=green, Z=blue).
    """
    ox, oy, oz = origin
    axes = [
        ((length, 0, 0), "red", "X"),
        ((0, length, 0), "green", "Y"),
        ((0, 0, length), "blue", "Z"),
    ]
    return [
        go.Scatter3d(
            x=[ox, ox + dx],
            y=[oy, oy + dy],
            z=[oz, oz + dz],
            mode="lines+text",
            line=dict(color=color, width=4),
            text=["", label],
            textposition="top center",
            name=f"{label} axis",
            showlegend=False,
        )
        for (dx, dy, dz), color, label in axes
    ]


def build_scene(
    mesh: Mesh,
    estimate: Optional[AreaEstimate] = None,
    show_plane: bool = True,
    show_sample_points: bool = True,
    show_wind: bool = True,
    show_axes: bool = True,
    title: str = "Frontal Area Sampling",
) -> go.Figure:
    """Build a complete Plotly 3D scene.

    Args:
        mesh: The mesh to draw.
        estimate: Optional estimate; supplies the plane, wind and hit flags.
            Sample points are only drawn if the estimate kept them.
        show_plane: Whether to show the sampling plane.
        show_sample_points: Whether to show the sample grid.
        show_wind: Whether to show the wind indicator.
        show_axes: Whether to show coordinate axes.
        title: Plot title.

    Returns:
        Plotly Figure object.
    """
    fig = go.Figure()

    if show_axes:
        for trace in create_coordinate_axes():
            fig.add_trace(trace)

    if not mesh.is_empty:
        fig.add_trace(create_mesh_trace(mesh))

    if estimate is not None:
        if show_plane:
            fig.add_trace(create_sampling_plane_trace(estimate.plane))
        if show_sample_points and estimate.sample_points:
            fig.add_trace(create_sample_points_markers(estimate.sample_points, estimate.hits))
        if show_wind:
            fig.add_trace(create_wind_indicator(estimate.plane, estimate.wind_direction))
        title = f"{title} (A ≈ {estimate.frontal_area:.4f} m², {estimate.total_rays} rays)"

    fig.update_layout(
        title=dict(text=title, x=0.5),
        scene=dict(
            xaxis_title="X (m)",
            yaxis_title="Y (m)",
            zaxis_title="Z (m)",
            aspectmode="data",
            camera=dict(
                eye=dict(x=1.5, y=1.5, z=1.0),
            ),
        ),
        legend=dict(
            yanchor="top",
            y=0.99,
            xanchor="left",
            x=0.01,
        ),
        margin=dict(l=0, r=0, t=40, b=0),
    )

    return fig


def visualize_estimate(
    mesh: Mesh,
    wind_direction: np.ndarray,
    samples: int = 32,
    estimator: Optional[RayTracedShadowSamplerEstimator] = None,
) -> go.Figure:
    """Convenience function to visualize a single estimate.

    Runs the estimator and creates a visualization with the results.

    Args:
        mesh: The mesh to measure.
        wind_direction: Direction the wind blows toward.
        samples: Sampling resolution.
        estimator: Estimator to use (default: deterministic grid).

    Returns:
        Plotly Figure with the sampling visualization.
    """
    estimator = estimator or RayTracedShadowSamplerEstimator()
    estimate = estimator.estimate(mesh, wind_direction, samples, keep_samples=True)
    return build_scene(mesh, estimate)


def create_heading_sweep_figure(
    sweep: list[tuple[float, float]],
    title: str = "Frontal Area vs Wind Heading",
) -> go.Figure:
    """Create a polar plot of frontal area against wind heading.

    Args:
        sweep: (heading_deg, frontal_area) pairs.
        title: Plot title.

    Returns:
        Plotly Figure object.
    """
    headings = [h for h, _ in sweep]
    areas = [a for _, a in sweep]

    fig = go.Figure(
        go.Scatterpolar(
            theta=headings,
            r=areas,
            mode="lines+markers",
            name="Frontal area (m²)",
        )
    )
    fig.update_layout(
        title=dict(text=title, x=0.5),
        polar=dict(angularaxis=dict(direction="counterclockwise", rotation=0)),
    )
    return fig
