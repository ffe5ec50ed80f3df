"""Circular bodies bouncing off maze walls.

Walls are treated as axis-aligned strips of the wall thickness centred on
the boundary line. Each tick a body is first moved by `integrate` and then
pushed back out of any wall it entered by `resolve`. Overlaps on both axes
in the same tick are resolved independently per axis.
"""

from dataclasses import dataclass
import math
from typing import Sequence

from mazegen import MazeLike
from walls import WALL_THIN, WallSegment, iter_wall_segments


MIN_SPEED = 0.05


@dataclass
class Body:
    """A moving circular body on the floor plane."""

    x: float
    z: float
    vx: float = 0.0
    vz: float = 0.0

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vz)

    def stop(self) -> None:
        self.vx = 0.0
        self.vz = 0.0


def integrate(body: Body, dt: float, friction: float = 0.0) -> Body:
    """Advance *body* by ``velocity * dt`` and apply friction."""

    body.x += body.vx * dt
    body.z += body.vz * dt
    if friction:
        damp = max(0.0, 1.0 - friction * dt)
        body.vx *= damp
        body.vz *= damp
    return body


def _bounce_axis(pos: float, vel: float, line: float, half: float,
                 radius: float, restitution: float):
    """Return the corrected ``(pos, vel)`` for one wall line, or None."""

    if vel > 0:
        surface = line - half
        if surface - radius < pos <= line:
            return surface - radius, -vel * restitution
    elif vel < 0:
        surface = line + half
        if line <= pos < surface + radius:
            return surface + radius, -vel * restitution
    return None


def _collide(body: Body, seg: WallSegment, radius: float, restitution: float) -> None:
    half = seg.thickness / 2
    if seg.horizontal:
        if not seg.x0 <= body.x <= seg.x1:
            return
        hit = _bounce_axis(body.z, body.vz, seg.z0, half, radius, restitution)
        if hit is not None:
            body.z, body.vz = hit
    else:
        if not seg.z0 <= body.z <= seg.z1:
            return
        hit = _bounce_axis(body.x, body.vx, seg.x0, half, radius, restitution)
        if hit is not None:
            body.x, body.vx = hit


def resolve(
    body: Body,
    maze: MazeLike,
    pos_x: Sequence[float],
    pos_z: Sequence[float],
    radius: float,
    restitution: float,
    *,
    thickness: float = WALL_THIN,
    min_speed: float = MIN_SPEED,
) -> Body:
    """Bounce *body* off every wall it overlaps, in place.

    The perpendicular velocity is reversed and scaled by *restitution*;
    the along-wall velocity is left unchanged. A body slower than
    *min_speed* afterwards is stopped.
    """

    if radius <= 0:
        raise ValueError(f"radius must be > 0, got {radius}")
    if not 0.0 <= restitution <= 1.0:
        raise ValueError(f"restitution must be in [0, 1], got {restitution}")

    for seg in iter_wall_segments(maze, pos_x, pos_z, thickness):
        _collide(body, seg, radius, restitution)

    if body.speed < min_speed:
        body.stop()
    return body


def kick(body: Body, from_x: float, from_z: float, kick_speed: float) -> Body:
    """Push *body* away from ``(from_x, from_z)`` at *kick_speed*.

    Only the outward velocity component is raised to *kick_speed*, so a
    body already moving away at least that fast is left alone.
    """

    dx = body.x - from_x
    dz = body.z - from_z
    dist = math.hypot(dx, dz)
    if dist == 0:
        return body
    ux, uz = dx / dist, dz / dist
    outward = body.vx * ux + body.vz * uz
    if outward < kick_speed:
        body.vx += (kick_speed - outward) * ux
        body.vz += (kick_speed - outward) * uz
    return body
