"""Hexadecimal writer for maze grids.

Converts a maze grid into hexadecimal representation and writes it to an
output file together with the entry, the exit, the solution path and
optionally the layout boundaries.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, List, Mapping, Optional, Sequence

if TYPE_CHECKING:
    from mazegen import Coord, MazeLike


HEX_BITS = (("top", 1), ("right", 2), ("bottom", 4), ("left", 8))

DIRECTION_LETTERS = {(-1, 0): "T", (1, 0): "B", (0, -1): "L", (0, 1): "R"}


def cell_to_hex(walls: Mapping[str, bool]) -> str:
    """Encode a cell's closed walls as a single hexadecimal digit.

    Each wall is one bit: top=1, right=2, bottom=4, left=8.
    """
    value = 0
    for side, bit in HEX_BITS:
        if walls[side]:
            value |= bit
    return f"{value:X}"


def maze_to_hex_lines(maze: MazeLike) -> List[str]:
    """Return one hex string per maze row."""
    return ["".join(cell_to_hex(walls) for walls in row) for row in maze]


def path_to_directions(path: Sequence[Coord]) -> str:
    """Convert a coordinate path into T/B/L/R directions."""
    out: List[str] = []
    for (r0, c0), (r1, c1) in zip(path, path[1:]):
        letter = DIRECTION_LETTERS.get((r1 - r0, c1 - c0))
        if letter is None:
            raise ValueError("Non-adjacent steps in path")
        out.append(letter)
    return "".join(out)


def _format_positions(pos: Sequence[float]) -> str:
    return ",".join(f"{p:.4f}" for p in pos)


def write_output_file(
    path: Path,
    maze: MazeLike,
    entry: Coord,
    exit_: Coord,
    directions: str,
    pos_x: Optional[Sequence[float]] = None,
    pos_z: Optional[Sequence[float]] = None,
) -> None:
    """Write the maze output file.

    Layout: hex rows, a blank line, entry ``x,y``, exit ``x,y``, the
    directions string, then ``pos_x`` and ``pos_z`` when given.
    """
    lines = maze_to_hex_lines(maze)
    lines.append("")
    # Coordinates are written as (x,y) == (col,row)
    lines.append(f"{entry[1]},{entry[0]}")
    lines.append(f"{exit_[1]},{exit_[0]}")
    lines.append(directions)
    if pos_x is not None and pos_z is not None:
        lines.append(_format_positions(pos_x))
        lines.append(_format_positions(pos_z))

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
