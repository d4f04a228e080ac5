"""
Grid and rotation helpers shared by the component model and the canvas.

Positions are plain (x, y) tuples; no Qt types.
"""

import math

# Spacing of the placement grid in scene units
GRID_SIZE = 20


def snap_to_grid(value: float, grid_size: int = GRID_SIZE) -> float:
    """Round a coordinate to the nearest grid line (halves round up)."""
    return math.floor(value / grid_size + 0.5) * grid_size


def snap_point(point: tuple[float, float], grid_size: int = GRID_SIZE) -> tuple[float, float]:
    return (snap_to_grid(point[0], grid_size), snap_to_grid(point[1], grid_size))


def rotate_point(point: tuple[float, float], angle: float) -> tuple[float, float]:
    """
    Rotate a point about the origin.

    Args:
        point: (x, y) in local coordinates.
        angle: Rotation in degrees (clockwise on screen, since y grows downward).

    Returns:
        The rotated (x, y) tuple.
    """
    rad = math.radians(angle)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    x, y = point
    return (x * cos_a - y * sin_a, x * sin_a + y * cos_a)
