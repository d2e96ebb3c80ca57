"""Frontal area and aerodynamic drag estimation for rigid triangle meshes."""

__version__ = "0.1.0"
