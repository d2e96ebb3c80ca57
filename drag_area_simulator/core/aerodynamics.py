"""Scalar aerodynamic drag formula."""

# kg/m³ at 15 °C, sea level
SEA_LEVEL_AIR_DENSITY = 1.225


def dynamic_pressure(air_density: float, wind_speed: float) -> float:
    """Dynamic pressure q = 0.5 * rho * v²."""
    return 0.5 * air_density * wind_speed * wind_speed


def compute_drag_magnitude(
    air_density: float,
    drag_coefficient: float,
    wind_speed: float,
    frontal_area: float,
) -> float:
    """Compute the drag force magnitude 0.5 * rho * v² * Cd * A.

    Args:
        air_density: Air density in kg/m³.
        drag_coefficient: Dimensionless drag coefficient.
        wind_speed: Wind speed magnitude in m/s.
        frontal_area: Projected frontal area in m².

    Returns:
        Drag force in newtons.
    """
    return dynamic_pressure(air_density, wind_speed) * drag_coefficient * frontal_area
