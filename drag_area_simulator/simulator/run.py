"""Step simulation for computing frontal area and drag over time.

This module advances a world in fixed time steps, estimates the frontal area
of an object under the current wind at every step, and turns it into a drag
force. Results can be written as CSV or JSON.
"""

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Optional

import numpy as np

from ..core.aerodynamics import compute_drag_magnitude
from ..core.estimator import FrontalAreaEstimator
from ..core.geometry import length, normalize, wind_direction_from_angles
from ..core.models import Config, Mesh
from .world import MeshObject, PhysicsObject, WindField, World

logger = logging.getLogger(__name__)

CSV_HEADER = ["step", "time", "wind_x", "wind_y", "wind_z", "area_est", "drag_mag"]


@dataclass
class StepResult:
    """Result for a single simulation step.

    Attributes:
        step: Zero-based step index.
        time: Simulation time at the start of the step (s).
        wind: Wind velocity vector during the step (m/s).
        frontal_area: Estimated frontal area (m²).
        drag_magnitude: Drag force magnitude (N).
    """

    step: int
    time: float
    wind: np.ndarray
    frontal_area: float
    drag_magnitude: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "step": self.step,
            "time": self.time,
            "wind": self.wind.tolist(),
            "area_est": self.frontal_area,
            "drag_mag": self.drag_magnitude,
        }


@dataclass
class SimulationResult:
    """Result of a step simulation.

    Attributes:
        steps: Per-step results in order.
    """

    steps: list[StepResult] = field(default_factory=list)

    @property
    def total_steps(self) -> int:
        """Number of steps simulated."""
        return len(self.steps)

    @property
    def mean_area(self) -> float:
        """Mean frontal area over all steps."""
        if not self.steps:
            return 0.0
        return sum(s.frontal_area for s in self.steps) / len(self.steps)

    @property
    def max_drag(self) -> float:
        """Largest drag magnitude over all steps."""
        if not self.steps:
            return 0.0
        return max(s.drag_magnitude for s in self.steps)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total_steps": self.total_steps,
            "mean_area": self.mean_area,
            "max_drag": self.max_drag,
            "steps": [s.to_dict() for s in self.steps],
        }


def simulate_steps(
    world: World,
    obj: PhysicsObject,
    estimator: FrontalAreaEstimator,
    config: Config,
) -> SimulationResult:
    """Run the simulation for ``config.simulation.steps`` steps.

    Each step updates the world, reads the current wind, estimates the
    object's frontal area along the wind, and computes the drag from the
    wind speed.

    Args:
        world: World holding the object and the wind field.
        obj: Object whose frontal area and drag are tracked.
        estimator: Frontal area estimator.
        config: Simulation, sampling and drag parameters.

    Returns:
        SimulationResult with one StepResult per step.
    """
    sim = config.simulation
    steps = []
    time = 0.0

    for step in range(sim.steps):
        world.update(sim.dt)

        wind = world.wind.wind
        speed = length(wind)
        area = estimator.estimate_frontal_area(obj.mesh, normalize(wind), sim.samples, sim.seed)
        drag = compute_drag_magnitude(
            config.drag.air_density, config.drag.drag_coefficient, speed, area
        )

        logger.debug("Step %d t=%.3f: area=%.6f drag=%.6f", step, time, area, drag)
        steps.append(
            StepResult(step=step, time=time, wind=wind, frontal_area=area, drag_magnitude=drag)
        )
        time += sim.dt

    return SimulationResult(steps=steps)


def simulate_from_config(
    config: Config,
    estimator: FrontalAreaEstimator,
) -> SimulationResult:
    """Build a world with one mesh object from a config and simulate it.

    Args:
        config: Configuration with mesh, wind and simulation parameters.
        estimator: Frontal area estimator.

    Returns:
        SimulationResult for the configured object.
    """
    world = World(WindField(config.wind))
    obj = MeshObject(config.mesh)
    world.add_object(obj)
    return simulate_steps(world, obj, estimator, config)


def sweep_wind_headings(
    mesh: Mesh,
    estimator: FrontalAreaEstimator,
    headings_deg: list[float],
    pitch_deg: float = 0.0,
    samples: int = 64,
    rng_seed: Optional[int] = None,
) -> list[tuple[float, float]]:
    """Estimate frontal area for a range of wind headings.

    Args:
        mesh: The mesh to measure.
        estimator: Frontal area estimator.
        headings_deg: Wind headings to evaluate, in degrees.
        pitch_deg: Wind pitch above the horizontal plane.
        samples: Sampling resolution.
        rng_seed: Seed passed to the estimator.

    Returns:
        List of (heading_deg, frontal_area) pairs in input order.
    """
    sweep = []
    for heading in headings_deg:
        direction = wind_direction_from_angles(heading, pitch_deg)
        area = estimator.estimate_frontal_area(mesh, direction, samples, rng_seed)
        sweep.append((heading, area))
    return sweep


def write_csv(result: SimulationResult, out: str | Path | IO[str]) -> None:
    """Write per-step results as CSV.

    Args:
        result: The simulation result.
        out: Output file path or an open text stream.
    """
    if isinstance(out, (str, Path)):
        with open(out, "w", newline="") as f:
            write_csv(result, f)
        return

    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for s in result.steps:
        writer.writerow(
            [s.step, s.time, s.wind[0], s.wind[1], s.wind[2], s.frontal_area, s.drag_magnitude]
        )


def save_simulation_result(result: SimulationResult, path: str | Path) -> None:
    """Save simulation result to a JSON file.

    Args:
        result: The simulation result.
        path: Output file path.
    """
    with open(path, "w") as f:
        json.dump(result.to_dict(), f, indent=2)
