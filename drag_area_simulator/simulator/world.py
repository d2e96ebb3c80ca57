"""World container for physical objects and the wind acting on them.

Objects are standstill for now: ``update(dt)`` exists so moving objects can
be plugged in later without changing the simulation loop.
"""

from abc import ABC, abstractmethod

import numpy as np

from ..core.models import Mesh


class WindField:
    """A spatially and temporally constant wind velocity."""

    def __init__(self, wind):
        self._wind = np.asarray(wind, dtype=float)

    @property
    def wind(self) -> np.ndarray:
        """Current wind velocity vector (m/s)."""
        return self._wind.copy()

    def set_wind(self, wind) -> None:
        """Replace the wind velocity vector."""
        self._wind = np.asarray(wind, dtype=float)


class PhysicsObject(ABC):
    """Base class for objects in the world.

    Owns geometry and exposes an update hook.
    """

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance the object's state by dt seconds."""

    @property
    @abstractmethod
    def mesh(self) -> Mesh:
        """Geometry of the object."""


class MeshObject(PhysicsObject):
    """A rigid, standstill object described by a triangle mesh."""

    def __init__(self, mesh: Mesh):
        self._mesh = mesh

    def update(self, dt: float) -> None:
        pass

    @property
    def mesh(self) -> Mesh:
        return self._mesh


class World:
    """Collection of physical objects under a wind field."""

    def __init__(self, wind: WindField):
        self._wind = wind
        self._objects: list[PhysicsObject] = []

    def add_object(self, obj: PhysicsObject) -> None:
        """Add an object to the world."""
        self._objects.append(obj)

    def update(self, dt: float) -> None:
        """Advance every object by dt seconds."""
        for obj in self._objects:
            obj.update(dt)

    @property
    def objects(self) -> list[PhysicsObject]:
        """Objects in insertion order."""
        return list(self._objects)

    @property
    def wind(self) -> WindField:
        """The world's wind field."""
        return self._wind
