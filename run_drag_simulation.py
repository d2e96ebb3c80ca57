#!/usr/bin/env python3
"""Command-line tool for frontal area and drag simulation.

Builds a world holding one rigid mesh under a constant wind, steps it, and
prints the estimated frontal area and drag force at every step.

Usage:
    # Defaults: unit cube, wind (1, 0, 0), 10 steps
    python run_drag_simulation.py

    # Override parameters:
    python run_drag_simulation.py --wind 10 0 0 --samples 128 --cd 1.05
    python run_drag_simulation.py --config config/default_config.json --json

Returns:
    CSV on stdout (step,time,wind_x,wind_y,wind_z,area_est,drag_mag), or
    JSON with --json. Exit code 1 on invalid configuration.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np

# Add project to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from drag_area_simulator.core.estimator import RayTracedShadowSamplerEstimator
from drag_area_simulator.core.models import Config, Mesh
from drag_area_simulator.simulator.run import (
    save_simulation_result,
    simulate_from_config,
    write_csv,
)

logger = logging.getLogger("drag_area_simulator.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Estimate frontal area and drag of a mesh in wind")
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--mesh", type=str, help="Mesh file (not supported; unit cube is used)")
    parser.add_argument("--samples", type=int, help="Sampling grid resolution per side")
    parser.add_argument("--seed", type=int, help="RNG seed (used with --jitter)")
    parser.add_argument("--rho", type=float, help="Air density (kg/m³)")
    parser.add_argument("--cd", type=float, help="Drag coefficient")
    parser.add_argument(
        "--wind", type=float, nargs=3, metavar=("X", "Y", "Z"), help="Wind velocity vector (m/s)"
    )
    parser.add_argument("--steps", type=int, help="Number of simulation steps")
    parser.add_argument("--dt", type=float, help="Time step (s)")
    parser.add_argument("--jitter", action="store_true", help="Jitter samples within grid cells")
    parser.add_argument("--json", action="store_true", help="Output JSON format")
    parser.add_argument("--output", type=str, help="Write results to this file instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Load the config file (if any) and apply command-line overrides."""
    config = Config.from_json_file(args.config) if args.config else Config()

    if args.mesh:
        # Mesh file loading is not implemented
        logger.warning("Mesh loading not implemented; using unit cube instead of %s", args.mesh)
        config.mesh = Mesh.unit_cube()

    sim = config.simulation
    if args.samples is not None:
        sim.samples = args.samples
    if args.seed is not None:
        sim.seed = args.seed
    if args.steps is not None:
        sim.steps = args.steps
    if args.dt is not None:
        sim.dt = args.dt
    if args.jitter:
        sim.jitter = True
    if args.rho is not None:
        config.drag.air_density = args.rho
    if args.cd is not None:
        config.drag.drag_coefficient = args.cd
    if args.wind is not None:
        config.wind = np.array(args.wind, dtype=float)

    config.validate()
    return config


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    estimator = RayTracedShadowSamplerEstimator(
        jitter=config.simulation.jitter,
        far_distance=config.simulation.far_distance,
    )
    result = simulate_from_config(config, estimator)

    if args.json:
        if args.output:
            save_simulation_result(result, args.output)
        else:
            print(json.dumps(result.to_dict(), indent=2))
    else:
        write_csv(result, args.output or sys.stdout)

    return 0


if __name__ == "__main__":
    sys.exit(main())
