#!/usr/bin/env python3
"""Generate the interactive visualizations from the current config.

Run this script after editing config/default_config.json to update the
visualizations: a 3D view of the sampling grid and a polar plot of frontal
area against wind heading.

Usage:
    python generate_visualization.py              # Use config resolution
    python generate_visualization.py 48           # Use a specific resolution
"""

import sys
from pathlib import Path

from drag_area_simulator.core.estimator import RayTracedShadowSamplerEstimator
from drag_area_simulator.core.geometry import angles_from_wind_direction
from drag_area_simulator.core.models import Config
from drag_area_simulator.simulator.run import sweep_wind_headings
from drag_area_simulator.visualization.scene_builder import (
    build_scene,
    create_heading_sweep_figure,
)


def main():
    config_path = Path("config/default_config.json")
    scene_path = Path("examples/sampling_scene.html")
    sweep_path = Path("examples/heading_sweep.html")

    print("=" * 60)
    print("Drag Area Visualization Generator")
    print("=" * 60)

    print("\nLoading config...")
    config = Config.from_json_file(config_path)

    samples = config.simulation.samples
    if len(sys.argv) > 1:
        try:
            samples = int(sys.argv[1])
        except ValueError:
            print(f"Invalid resolution: {sys.argv[1]}")
            sys.exit(1)

    heading, pitch = angles_from_wind_direction(config.wind)
    print(f"\nWind: {config.wind.tolist()} m/s (heading {heading:.0f}°, pitch {pitch:.0f}°)")
    print(f"Mesh: {config.mesh.n_vertices} vertices, {config.mesh.n_triangles} triangles")
    print(f"Resolution: {samples}x{samples}")

    estimator = RayTracedShadowSamplerEstimator(far_distance=config.simulation.far_distance)

    print("\nEstimating frontal area...")
    estimate = estimator.estimate(config.mesh, config.wind, samples, keep_samples=True)
    print(f"  Area: {estimate.frontal_area:.4f} m² ({estimate.hit_count}/{estimate.total_rays} hits)")

    fig = build_scene(config.mesh, estimate)
    fig.write_html(str(scene_path))

    print("\nSweeping wind heading (every 10°)...")
    sweep = sweep_wind_headings(
        config.mesh, estimator, list(range(0, 360, 10)), pitch_deg=pitch, samples=min(samples, 32)
    )
    create_heading_sweep_figure(sweep).write_html(str(sweep_path))

    print(f"\n{'=' * 60}")
    print(f"Saved to: {scene_path.absolute()}")
    print(f"Saved to: {sweep_path.absolute()}")
    print("Open these files in your browser")
    print("=" * 60)


if __name__ == "__main__":
    main()
