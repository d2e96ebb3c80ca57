"""World and step simulation module."""

from .world import WindField, PhysicsObject, MeshObject, World
from .run import simulate_steps, sweep_wind_headings, StepResult, SimulationResult

__all__ = [
    "WindField",
    "PhysicsObject",
    "MeshObject",
    "World",
    "simulate_steps",
    "sweep_wind_headings",
    "StepResult",
    "SimulationResult",
]
