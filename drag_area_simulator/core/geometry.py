"""Geometric utilities for vector math and wind direction transforms.

All points and directions are numpy arrays of shape (3,).

Coordinate System:
    - x = downstream reference axis (wind heading 0°)
    - y = lateral axis (wind heading 90°)
    - z = up

Heading Convention:
    - 0° = wind blowing toward +X
    - 90° = wind blowing toward +Y
    - Counter-clockwise seen from above
"""

import math

import numpy as np

# Below this length a vector is treated as zero
ZERO_LENGTH = 1e-12


def vec3(x: float, y: float, z: float) -> np.ndarray:
    """Build a float 3-vector."""
    return np.array([x, y, z], dtype=float)


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """Compute dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        Scalar dot product.
    """
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Compute cross product of two 3D vectors.

    Written out per component; np.cross carries a lot of overhead for
    single vectors and this sits in the innermost intersection loop.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        Cross product vector a × b.
    """
    return np.array(
        [
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ],
        dtype=float,
    )


def length(v: np.ndarray) -> float:
    """Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


def normalize(v: np.ndarray) -> np.ndarray:
    """Normalize a vector to unit length.

    A zero-length vector normalizes to the zero vector instead of raising,
    so degenerate wind directions flow through the estimator as a
    well-defined (zero-area) case.

    Args:
        v: Input vector.

    Returns:
        Unit vector in the same direction, or the zero vector.
    """
    v = np.asarray(v, dtype=float)
    n = length(v)
    if n < ZERO_LENGTH:
        return np.zeros(3)
    return v / n


def angle_between_vectors(a: np.ndarray, b: np.ndarray) -> float:
    """Compute the angle between two vectors in degrees.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        Angle in degrees [0, 180]. 0 if either vector has zero length.
    """
    a_norm = normalize(a)
    b_norm = normalize(b)
    if not a_norm.any() or not b_norm.any():
        return 0.0
    cos_angle = np.clip(dot(a_norm, b_norm), -1.0, 1.0)
    return math.degrees(math.acos(cos_angle))


def project_onto_plane(v: np.ndarray, plane_normal: np.ndarray) -> np.ndarray:
    """Project a vector onto a plane defined by its normal.

    Args:
        v: Vector to project.
        plane_normal: Normal vector of the plane.

    Returns:
        Component of v that lies in the plane.
    """
    n = normalize(plane_normal)
    return v - dot(v, n) * n


def wind_direction_from_angles(heading_deg: float, pitch_deg: float = 0.0) -> np.ndarray:
    """Convert wind heading and pitch to a direction vector.

    Computes the unit vector the wind blows TOWARD.

    Args:
        heading_deg: Heading in degrees, counter-clockwise from +X in the
            horizontal plane.
        pitch_deg: Angle above the horizontal plane in degrees [-90, +90].

    Returns:
        Unit vector [x, y, z] along the wind.

    Examples:
        >>> wind_direction_from_angles(0, 0)
        array([1., 0., 0.])
    """
    h_rad = math.radians(heading_deg)
    p_rad = math.radians(pitch_deg)

    cos_p = math.cos(p_rad)

    x = cos_p * math.cos(h_rad)
    y = cos_p * math.sin(h_rad)
    z = math.sin(p_rad)

    return np.array([x, y, z])


def angles_from_wind_direction(direction: np.ndarray) -> tuple[float, float]:
    """Convert a wind direction vector back to heading and pitch.

    This is the inverse of wind_direction_from_angles.

    Args:
        direction: Vector along the wind (need not be unit length).

    Returns:
        Tuple of (heading_deg, pitch_deg), heading in [0, 360).
    """
    x, y, z = direction

    horizontal_distance = math.sqrt(x * x + y * y)
    pitch_deg = math.degrees(math.atan2(z, horizontal_distance))

    heading_deg = math.degrees(math.atan2(y, x))
    if heading_deg < 0:
        heading_deg += 360.0

    return heading_deg, pitch_deg
