"""
Vector math helpers for blueprint placement.

Plain functions over (x, y, z) float tuples. Rotations are radians; the
game applies them as X, then Y, then Z (composite matrix Rz·Ry·Rx).
"""

import math

from trackgen.errors import DegenerateVectorError
from trackgen.models import Vec3


TAU = math.tau
HALF_PI = math.pi / 2

UP: Vec3 = (0.0, 1.0, 0.0)


# ============================================================================
# Scalars
# ============================================================================

def tidy_float(value: float) -> float:
    """Round away float noise below 1e-15 and collapse -0.0 to 0.0."""
    return round(value, 15) + 0.0


def radians_to_degrees(value: float) -> float:
    return value * 360 / TAU


def degrees_to_radians(value: float) -> float:
    return value * TAU / 360


# ============================================================================
# Vectors
# ============================================================================

def tidy(v: Vec3) -> Vec3:
    return (tidy_float(v[0]), tidy_float(v[1]), tidy_float(v[2]))


def add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(amount: float, v: Vec3) -> Vec3:
    return (amount * v[0], amount * v[1], amount * v[2])


def magnitude(v: Vec3) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def distance(a: Vec3, b: Vec3) -> float:
    return magnitude(sub(a, b))


def unit(v: Vec3) -> Vec3:
    """Unit vector in the direction of v. A zero vector has no direction."""
    length = magnitude(v)
    if length == 0:
        raise DegenerateVectorError(f"Cannot normalize zero-length vector {v}")
    return scale(1 / length, v)


def rotate_z(theta: float, v: Vec3) -> Vec3:
    """Rotate v around the Z axis by theta radians."""
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return (
        v[0] * cos_t - v[1] * sin_t,
        v[0] * sin_t + v[1] * cos_t,
        v[2],
    )


def spherical_to_rect(radius: float, azimuth: float, elevation: float) -> Vec3:
    """
    Convert spherical coordinates to a Y-up cartesian vector.

    azimuth is measured in the XZ plane from +Z towards +X,
    elevation from the XZ plane towards +Y.
    """
    horizontal = radius * math.cos(elevation)
    return (
        horizontal * math.sin(azimuth),
        radius * math.sin(elevation),
        horizontal * math.cos(azimuth),
    )


def direction_to_angles(direction: Vec3) -> Vec3:
    """
    Euler angles that turn the canonical +Y segment axis onto `direction`.

    Roll around the direction is ambiguous, so it is fixed to zero and the
    other two angles come from the spherical coordinates of the direction:
    tilt off vertical around X, then heading around Y.
    """
    dx, dy, dz = unit(direction)
    rx = math.acos(max(-1.0, min(1.0, dy)))
    ry = math.atan2(dx, dz)
    return tidy((rx, ry, 0.0))


def rotate_euler(angles: Vec3, v: Vec3) -> Vec3:
    """Apply X, then Y, then Z rotations (radians) to v."""
    a, b, c = angles
    x, y, z = v
    # Rx
    y, z = y * math.cos(a) - z * math.sin(a), y * math.sin(a) + z * math.cos(a)
    # Ry
    x, z = x * math.cos(b) + z * math.sin(b), -x * math.sin(b) + z * math.cos(b)
    # Rz
    x, y = x * math.cos(c) - y * math.sin(c), x * math.sin(c) + y * math.cos(c)
    return tidy((x, y, z))
