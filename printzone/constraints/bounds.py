"""Containment tests shared by every constraint.

`all_inside` is the single feasibility test: a candidate transform is legal
when every point it produces lies inside the mapped delimitation, edges
included.
"""

import math
from typing import Iterable

from printzone.dsl.schema import PixelRect

Point = tuple[float, float]

# Sign pattern for the four corners, walked clockwise from top-left
_CORNER_SIGNS = ((-1, -1), (1, -1), (1, 1), (-1, 1))


def all_inside(bounds: PixelRect, points: Iterable[Point]) -> bool:
    """Check that every point lies within the bounds (inclusive).

    Args:
        bounds: Mapped delimitation in viewport pixels.
        points: Candidate points in viewport pixels.

    Returns:
        True if no point falls outside.
    """
    return all(bounds.contains(p) for p in points)


def rotate_point(dx: float, dy: float, radians: float) -> Point:
    """Rotate an offset about the origin."""
    cos_r = math.cos(radians)
    sin_r = math.sin(radians)
    return dx * cos_r - dy * sin_r, dx * sin_r + dy * cos_r


def rotated_corners(
    center: Point,
    half_width: float,
    half_height: float,
    rotation_degrees: float,
) -> list[Point]:
    """Corners of a rectangle rotated about its center.

    Args:
        center: Rectangle center in viewport pixels.
        half_width: Half the responsive width.
        half_height: Half the responsive height.
        rotation_degrees: Clockwise rotation in screen coordinates.

    Returns:
        The four corners in viewport pixels.
    """
    radians = math.radians(rotation_degrees)
    cx, cy = center
    corners = []
    for sx, sy in _CORNER_SIGNS:
        ox, oy = rotate_point(sx * half_width, sy * half_height, radians)
        corners.append((cx + ox, cy + oy))
    return corners


def corners_inside(
    bounds: PixelRect,
    center: Point,
    half_width: float,
    half_height: float,
    rotation_degrees: float,
) -> bool:
    """Whether a rotated rectangle lies entirely within the bounds."""
    return all_inside(bounds, rotated_corners(center, half_width, half_height, rotation_degrees))


def outside_edges(bounds: PixelRect, points: Iterable[Point]) -> list[str]:
    """Names of the region edges crossed by any of the points."""
    crossed = []
    points = list(points)
    if any(px < bounds.x for px, _ in points):
        crossed.append("left")
    if any(px > bounds.right for px, _ in points):
        crossed.append("right")
    if any(py < bounds.y for _, py in points):
        crossed.append("top")
    if any(py > bounds.bottom for _, py in points):
        crossed.append("bottom")
    return crossed
