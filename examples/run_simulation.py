#!/usr/bin/env python3
"""Example script demonstrating the drag area simulator.

This script shows how to:
1. Load configuration
2. Run a single frontal area estimate
3. Run a step simulation with drag
4. Sweep the wind heading around the object
5. Generate 3D visualizations

Usage:
    python examples/run_simulation.py
"""

from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from drag_area_simulator.core.estimator import (
    RayTracedShadowSamplerEstimator,
    get_detailed_estimate_info,
)
from drag_area_simulator.core.geometry import normalize
from drag_area_simulator.core.models import Config
from drag_area_simulator.simulator.run import simulate_from_config, sweep_wind_headings
from drag_area_simulator.visualization.scene_builder import visualize_estimate


def main():
    """Run example simulation."""
    project_root = Path(__file__).parent.parent
    config_path = project_root / "config" / "default_config.json"

    print("=" * 60)
    print("Drag Area Simulator - Example")
    print("=" * 60)

    # Load configuration
    print("\n1. Loading configuration...")
    config = Config.from_json_file(config_path)
    print(f"   - Mesh: {config.mesh.n_vertices} vertices, {config.mesh.n_triangles} triangles")
    print(f"   - Wind: {config.wind.tolist()} m/s")
    print(f"   - Sampling: {config.simulation.samples}x{config.simulation.samples} rays")

    estimator = RayTracedShadowSamplerEstimator(far_distance=config.simulation.far_distance)

    # Single estimate
    print("\n2. Running single estimate...")
    result = estimator.estimate(config.mesh, config.wind, config.simulation.samples)
    print(f"   - Frontal area: {result.frontal_area:.4f} m²")
    print(f"   - Hits: {result.hit_count}/{result.total_rays} ({result.hit_ratio:.1%})")
    print(f"   - Sampling plane area: {result.plane.area:.4f} m²")

    # Step simulation
    print("\n3. Running step simulation...")
    sim_result = simulate_from_config(config, estimator)
    print(f"   - Steps: {sim_result.total_steps}")
    print(f"   - Mean area: {sim_result.mean_area:.4f} m²")
    print(f"   - Max drag: {sim_result.max_drag:.4f} N")

    # Heading sweep
    print("\n4. Sweeping wind heading...")
    sweep = sweep_wind_headings(config.mesh, estimator, list(range(0, 91, 15)), samples=32)
    for heading, area in sweep:
        print(f"   - {heading:5.1f}°: {area:.4f} m²")

    # Visualization
    print("\n5. Creating visualization...")
    try:
        fig = visualize_estimate(config.mesh, config.wind, samples=24, estimator=estimator)

        output_path = project_root / "examples" / "visualization.html"
        fig.write_html(str(output_path))
        print(f"   - Saved interactive visualization to: {output_path}")
        print("   - Open this file in a web browser to explore the 3D scene")
    except OSError as e:
        print(f"   - Visualization skipped (error: {e})")

    # Detailed info (for debugging)
    print("\n6. Detailed estimate analysis...")
    details = get_detailed_estimate_info(config.mesh, normalize(config.wind), 16, estimator)
    print(f"   - Rays cast: {details['total_rays']}")
    print(f"   - Rays hitting mesh: {details['hit_count']}")
    print(f"   - Plane half-extent: {details['plane']['half_extent']:.3f} m")

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
