"""Safety-margin test of a floor point against the maze walls.

A wall counts as near when the point lies inside the strip of half-width
``margin`` around the wall's span, or inside the ``margin`` circle around
either end of the wall. The end caps cover the corner regions where two
perpendicular walls meet. All comparisons are strict.
"""

import math
from typing import Sequence, Tuple

from mazegen import MazeLike
from walls import WallSegment, iter_wall_segments


Point = Tuple[float, float]  # (x, z)


def _near_strip(seg: WallSegment, x: float, z: float, margin: float) -> bool:
    if seg.horizontal:
        return abs(z - seg.z0) < margin and seg.x0 <= x <= seg.x1
    return abs(x - seg.x0) < margin and seg.z0 <= z <= seg.z1


def _near_caps(seg: WallSegment, x: float, z: float, margin: float) -> bool:
    return any(
        math.hypot(x - ex, z - ez) < margin for ex, ez in seg.endpoints()
    )


def segment_distance(seg: WallSegment, x: float, z: float) -> float:
    """Return the distance from (x, z) to the wall line segment."""

    if seg.horizontal:
        cx = min(max(x, seg.x0), seg.x1)
        return math.hypot(x - cx, z - seg.z0)
    cz = min(max(z, seg.z0), seg.z1)
    return math.hypot(x - seg.x0, z - cz)


def is_within_margin(
    point: Point,
    maze: MazeLike,
    pos_x: Sequence[float],
    pos_z: Sequence[float],
    margin: float,
) -> bool:
    """Return True if *point* is closer than *margin* to any wall."""

    if margin < 0:
        raise ValueError(f"margin must be >= 0, got {margin}")
    x, z = point
    # Brute force over every wall; mazes here are small.
    for seg in iter_wall_segments(maze, pos_x, pos_z):
        if _near_strip(seg, x, z, margin) or _near_caps(seg, x, z, margin):
            return True
    return False


def nearest_wall_distance(
    point: Point,
    maze: MazeLike,
    pos_x: Sequence[float],
    pos_z: Sequence[float],
) -> float:
    """Return the distance from *point* to the closest wall line."""

    x, z = point
    return min(
        (segment_distance(seg, x, z) for seg in iter_wall_segments(maze, pos_x, pos_z)),
        default=math.inf,
    )
