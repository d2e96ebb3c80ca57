"""Data models for the frontal area and drag simulation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import numpy as np

from .aerodynamics import SEA_LEVEL_AIR_DENSITY

# Unit cube centered at origin, side length 1
_UNIT_CUBE_VERTICES = [
    (-0.5, -0.5, -0.5), (0.5, -0.5, -0.5), (0.5, 0.5, -0.5), (-0.5, 0.5, -0.5),
    (-0.5, -0.5, 0.5), (0.5, -0.5, 0.5), (0.5, 0.5, 0.5), (-0.5, 0.5, 0.5),
]

# Two triangles per face
_UNIT_CUBE_TRIANGLES = [
    (0, 1, 2), (0, 2, 3), (4, 6, 5), (4, 7, 6),
    (0, 4, 5), (0, 5, 1), (1, 5, 6), (1, 6, 2),
    (2, 6, 7), (2, 7, 3), (3, 7, 4), (3, 4, 0),
]


def _as_dict(value, name: str) -> dict:
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be an object, got {value!r}")
    return value


def _as_list(value, name: str) -> list:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{name} must be a list, got {value!r}")
    return list(value)


def _to_number(value, name: str, kind: type = float):
    """Convert a config value to ``kind``, raising ValueError naming the field."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return kind(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass
class Mesh:
    """A rigid triangle mesh.

    The estimator only reads from a mesh; it never modifies the vertex array
    or the triangle list.

    Attributes:
        vertices: Vertex positions as an (N, 3) array.
        triangles: Index triples into ``vertices``. Indices are not validated
            here; the intersection engine skips triangles with bad indices.
    """

    vertices: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    triangles: list[tuple[int, int, int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.vertices = np.asarray(self.vertices, dtype=float).reshape(-1, 3)
        self.triangles = [tuple(int(i) for i in tri) for tri in self.triangles]

    @property
    def n_vertices(self) -> int:
        """Number of vertices."""
        return len(self.vertices)

    @property
    def n_triangles(self) -> int:
        """Number of triangles."""
        return len(self.triangles)

    @property
    def is_empty(self) -> bool:
        """True when the mesh has no vertices."""
        return self.n_vertices == 0

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Axis-aligned bounding box as (min_corner, max_corner).

        An empty mesh has a zero box at the origin.
        """
        if self.is_empty:
            return np.zeros(3), np.zeros(3)
        return self.vertices.min(axis=0), self.vertices.max(axis=0)

    def centroid(self) -> np.ndarray:
        """Mean of all vertex positions (origin for an empty mesh)."""
        if self.is_empty:
            return np.zeros(3)
        return self.vertices.mean(axis=0)

    def translated(self, offset) -> Mesh:
        """Return a copy of this mesh moved by ``offset``."""
        return Mesh(
            vertices=self.vertices + np.asarray(offset, dtype=float),
            triangles=list(self.triangles),
        )

    @classmethod
    def unit_cube(cls) -> Mesh:
        """Build a unit cube centered at the origin (12 triangles)."""
        return cls(vertices=_UNIT_CUBE_VERTICES, triangles=_UNIT_CUBE_TRIANGLES)

    @classmethod
    def square_plate(cls, side: float) -> Mesh:
        """Build a flat square plate in the Y-Z plane, centered at the origin."""
        h = 0.5 * side
        return cls(
            vertices=[(0.0, -h, -h), (0.0, h, -h), (0.0, h, h), (0.0, -h, h)],
            triangles=[(0, 1, 2), (0, 2, 3)],
        )

    @classmethod
    def single_triangle(cls, a, b, c) -> Mesh:
        """Build a mesh holding one triangle."""
        return cls(vertices=[a, b, c], triangles=[(0, 1, 2)])

    @classmethod
    def from_dict(cls, data: dict | str) -> Mesh:
        """Create a mesh from inline config geometry.

        Accepts either a shape name (``"unit_cube"``), a shape block
        (``{"shape": "square_plate", "side": 2.0}``) or explicit
        ``vertices`` and ``triangles`` lists.
        """
        if isinstance(data, str):
            data = {"shape": data}
        if not isinstance(data, dict):
            raise ValueError(f"Mesh must be a shape name or an object, got {data!r}")

        shape = data.get("shape")
        if shape == "unit_cube":
            return cls.unit_cube()
        if shape == "square_plate":
            return cls.square_plate(_to_number(data.get("side", 1.0), "mesh.side", float))
        if shape is not None:
            raise ValueError(f"Unknown mesh shape: {shape}")

        if "vertices" not in data or "triangles" not in data:
            raise ValueError("Mesh must define a shape or both vertices and triangles")

        vertices = _as_list(data["vertices"], "mesh.vertices")
        for v in vertices:
            if not isinstance(v, (list, tuple)) or len(v) != 3:
                raise ValueError(f"Mesh vertex must have 3 coordinates, got {v}")
        vertices = [[_to_number(c, "mesh.vertices", float) for c in v] for v in vertices]

        triangles = _as_list(data["triangles"], "mesh.triangles")
        for t in triangles:
            if not isinstance(t, (list, tuple)) or len(t) != 3:
                raise ValueError(f"Mesh triangle must have 3 indices, got {t}")
        triangles = [[_to_number(i, "mesh.triangles", int) for i in t] for t in triangles]

        return cls(vertices=vertices, triangles=triangles)

    def to_dict(self) -> dict:
        """Convert mesh to a dictionary."""
        return {
            "vertices": self.vertices.tolist(),
            "triangles": [list(t) for t in self.triangles],
        }


@dataclass
class Ray:
    """A ray with an origin and a direction.

    Attributes:
        origin: Start point of the ray.
        direction: Direction of travel, normalized by the caller.
    """

    origin: np.ndarray
    direction: np.ndarray


@dataclass
class SamplingPlane:
    """Square sampling region perpendicular to the wind.

    Attributes:
        center: Center point of the square on the plane.
        normal: Unit plane normal, pointing against the wind.
        axis_u: First in-plane unit axis.
        axis_v: Second in-plane unit axis.
        half_extent: Half the side length of the square.
    """

    center: np.ndarray
    normal: np.ndarray
    axis_u: np.ndarray
    axis_v: np.ndarray
    half_extent: float

    @property
    def side_length(self) -> float:
        """Full side length of the square."""
        return 2.0 * self.half_extent

    @property
    def area(self) -> float:
        """Area of the sampling square."""
        return self.side_length * self.side_length

    def point_at(self, offset_u: float, offset_v: float) -> np.ndarray:
        """Point on the plane at the given in-plane offsets from the center."""
        return self.center + self.axis_u * offset_u + self.axis_v * offset_v

    def get_corners(self) -> list[np.ndarray]:
        """Get the four corners of the square.

        Returns corners in order (-u,-v), (+u,-v), (+u,+v), (-u,+v).
        """
        h = self.half_extent
        return [
            self.point_at(-h, -h),
            self.point_at(h, -h),
            self.point_at(h, h),
            self.point_at(-h, h),
        ]


@dataclass
class AreaEstimate:
    """Result of a frontal area estimation.

    Attributes:
        frontal_area: Estimated projected area.
        hit_count: Number of rays that hit the mesh.
        total_rays: Number of rays cast.
        plane: Sampling plane the rays were aimed at.
        wind_direction: Normalized wind direction used.
        sample_points: Grid points on the plane (kept only on request).
        hits: Per-ray hit flags, aligned with ``sample_points``.
    """

    frontal_area: float
    hit_count: int
    total_rays: int
    plane: SamplingPlane
    wind_direction: np.ndarray
    sample_points: list[np.ndarray] = field(default_factory=list)
    hits: list[bool] = field(default_factory=list)

    @property
    def hit_ratio(self) -> float:
        """Fraction of rays that hit the mesh."""
        if self.total_rays == 0:
            return 0.0
        return self.hit_count / self.total_rays


@dataclass
class SimulationConfig:
    """Sampling and stepping parameters.

    Attributes:
        samples: Grid resolution per side (samples² rays).
        seed: RNG seed, only used when jitter is enabled.
        steps: Number of simulation steps.
        dt: Time step in seconds.
        jitter: Jitter sample points within their grid cells.
        far_distance: Distance of the shared ray origin upwind of the plane.
    """

    samples: int = 64
    seed: Optional[int] = 1337
    steps: int = 10
    dt: float = 0.1
    jitter: bool = False
    far_distance: float = 1e6


@dataclass
class DragConfig:
    """Drag formula parameters.

    Attributes:
        air_density: Air density in kg/m³.
        drag_coefficient: Dimensionless drag coefficient.
    """

    air_density: float = SEA_LEVEL_AIR_DENSITY
    drag_coefficient: float = 1.0


@dataclass
class Config:
    """Complete configuration for the simulation.

    Attributes:
        wind: Constant wind velocity vector (m/s).
        mesh: Geometry of the simulated object.
        simulation: Sampling and stepping parameters.
        drag: Drag formula parameters.
    """

    wind: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0]))
    mesh: Mesh = field(default_factory=Mesh.unit_cube)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    drag: DragConfig = field(default_factory=DragConfig)

    @classmethod
    def from_json_file(cls, path: str | Path) -> Config:
        """Load configuration from a JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        """Create configuration from a dictionary."""
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a JSON object, got {type(data).__name__}")

        wind = _as_list(data.get("wind", [1.0, 0.0, 0.0]), "wind")
        if len(wind) != 3:
            raise ValueError(f"Wind must have 3 components, got {len(wind)}")

        mesh = Mesh.from_dict(data.get("mesh", "unit_cube"))

        sim_data = _as_dict(data.get("simulation", {}), "simulation")
        seed = sim_data.get("seed", 1337)
        simulation = SimulationConfig(
            samples=_to_number(sim_data.get("samples", 64), "simulation.samples", int),
            seed=_to_number(seed, "simulation.seed", int) if seed is not None else None,
            steps=_to_number(sim_data.get("steps", 10), "simulation.steps", int),
            dt=_to_number(sim_data.get("dt", 0.1), "simulation.dt", float),
            jitter=bool(sim_data.get("jitter", False)),
            far_distance=_to_number(
                sim_data.get("far_distance", 1e6), "simulation.far_distance", float
            ),
        )

        drag_data = _as_dict(data.get("drag", {}), "drag")
        drag = DragConfig(
            air_density=_to_number(
                drag_data.get("air_density", SEA_LEVEL_AIR_DENSITY), "drag.air_density", float
            ),
            drag_coefficient=_to_number(
                drag_data.get("drag_coefficient", 1.0), "drag.drag_coefficient", float
            ),
        )

        config = cls(
            wind=np.array([_to_number(c, "wind", float) for c in wind]),
            mesh=mesh,
            simulation=simulation,
            drag=drag,
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ValueError: If a parameter is out of range.
        """
        if self.simulation.samples < 1:
            raise ValueError(f"samples must be >= 1, got {self.simulation.samples}")
        if self.simulation.steps < 0:
            raise ValueError(f"steps must be >= 0, got {self.simulation.steps}")
        if self.simulation.dt < 0:
            raise ValueError(f"dt must be >= 0, got {self.simulation.dt}")
        if self.simulation.far_distance <= 0:
            raise ValueError(
                f"far_distance must be > 0, got {self.simulation.far_distance}"
            )

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return {
            "wind": self.wind.tolist(),
            "mesh": self.mesh.to_dict(),
            "simulation": {
                "samples": self.simulation.samples,
                "seed": self.simulation.seed,
                "steps": self.simulation.steps,
                "dt": self.simulation.dt,
                "jitter": self.simulation.jitter,
                "far_distance": self.simulation.far_distance,
            },
            "drag": {
                "air_density": self.drag.air_density,
                "drag_coefficient": self.drag.drag_coefficient,
            },
        }
