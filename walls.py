"""Wall segments derived from a maze grid and its layout.

Each true wall flag becomes one `WallSegment`: a line on the cell boundary
plus a thin thickness centred on it. Segments are recomputed from the grid
and the boundary arrays whenever they are needed.
"""

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from layout import check_layout, floor_row
from mazegen import SIDES, MazeLike, maze_size


WALL_THIN = 0.1


@dataclass(frozen=True)
class WallSegment:
    """One wall of one cell, on the floor plane."""

    row: int
    col: int
    side: str
    x0: float
    z0: float
    x1: float
    z1: float
    thickness: float = WALL_THIN

    @property
    def horizontal(self) -> bool:
        """True for top/bottom walls, which run along x."""

        return self.side in ("top", "bottom")

    @property
    def length(self) -> float:
        return (self.x1 - self.x0) + (self.z1 - self.z0)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x0 + self.x1) / 2, (self.z0 + self.z1) / 2

    @property
    def size(self) -> Tuple[float, float]:
        """Return ``(width, depth)`` of the renderable box.

        The span is extended by the thickness so neighbouring walls
        overlap at corners.
        """

        if self.horizontal:
            return self.length + self.thickness, self.thickness
        return self.thickness, self.length + self.thickness

    def endpoints(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        return (self.x0, self.z0), (self.x1, self.z1)


def _segment(
    row: int,
    col: int,
    side: str,
    pos_x: Sequence[float],
    pos_z: Sequence[float],
    thickness: float,
) -> WallSegment:
    k = floor_row(pos_z, row)
    x0, x1 = pos_x[col], pos_x[col + 1]
    z0, z1 = pos_z[k], pos_z[k + 1]
    if side == "top":
        return WallSegment(row, col, side, x0, z1, x1, z1, thickness)
    if side == "bottom":
        return WallSegment(row, col, side, x0, z0, x1, z0, thickness)
    if side == "left":
        return WallSegment(row, col, side, x0, z0, x0, z1, thickness)
    return WallSegment(row, col, side, x1, z0, x1, z1, thickness)


def iter_wall_segments(
    maze: MazeLike,
    pos_x: Sequence[float],
    pos_z: Sequence[float],
    thickness: float = WALL_THIN,
) -> Iterator[WallSegment]:
    """Yield one segment per true wall flag, cell by cell."""

    width, height = maze_size(maze)
    check_layout(pos_x, pos_z, width, height)
    if thickness <= 0:
        raise ValueError(f"Wall thickness must be > 0, got {thickness}")

    for r, row in enumerate(maze):
        for c, walls in enumerate(row):
            for side in SIDES:
                if walls[side]:
                    yield _segment(r, c, side, pos_x, pos_z, thickness)


def _is_shared_copy(maze: MazeLike, seg: WallSegment) -> bool:
    # Shared walls are kept on the top/left owner.
    if seg.side == "top" and seg.row > 0:
        return bool(maze[seg.row - 1][seg.col]["bottom"])
    if seg.side == "left" and seg.col > 0:
        return bool(maze[seg.row][seg.col - 1]["right"])
    return False


def emit_walls(
    maze: MazeLike,
    pos_x: Sequence[float],
    pos_z: Sequence[float],
    thickness: float = WALL_THIN,
    *,
    dedupe: bool = False,
) -> List[WallSegment]:
    """Return the wall segments of a maze for rendering.

    Without ``dedupe`` there is exactly one segment per true flag. With
    ``dedupe`` a closed wall between two cells is emitted once.
    """

    segments = iter_wall_segments(maze, pos_x, pos_z, thickness)
    if not dedupe:
        return list(segments)
    return [seg for seg in segments if not _is_shared_copy(maze, seg)]


def count_wall_flags(maze: MazeLike) -> int:
    """Return the number of true wall flags in the grid."""

    return sum(1 for row in maze for walls in row for side in SIDES if walls[side])
