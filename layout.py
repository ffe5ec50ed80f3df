"""Floor-plane layout of a maze grid.

The layout is a pair of cumulative boundary arrays ``(pos_x, pos_z)``:
``pos_x[i + 1] - pos_x[i]`` is the physical width of column ``i`` and
``pos_z[k + 1] - pos_z[k]`` the depth of floor row ``k``. Both start at 0
and are strictly increasing.

Grid rows are laid out flipped along z: grid row ``r`` occupies floor row
``rows - 1 - r``, so the top row of the grid is the farthest from the
origin. Only the grid dimensions are used here, never the wall flags.
"""

from itertools import accumulate
import random
from typing import List, Optional, Sequence, Tuple


Layout = Tuple[List[float], List[float]]


def _check_dims(cols: int, rows: int) -> None:
    if cols < 1 or rows < 1:
        raise ValueError(f"Layout dimensions must be >= 1, got {cols}x{rows}")


def plan_fixed(cols: int, rows: int) -> Layout:
    """Return unit-width boundaries ``[0, 1, ..., n]`` for both axes."""

    _check_dims(cols, rows)
    pos_x = [float(i) for i in range(cols + 1)]
    pos_z = [float(k) for k in range(rows + 1)]
    return pos_x, pos_z


def _running_sum(widths: Sequence[float]) -> List[float]:
    return list(accumulate(widths, initial=0.0))


def plan_variable(
    cols: int,
    rows: int,
    min_width: float,
    max_width: float,
    rng: Optional[random.Random] = None,
) -> Layout:
    """Return boundaries for independently drawn corridor widths.

    One width per column and one per row is drawn uniformly from
    ``[min_width, max_width]``; the arrays are their running sums.
    """

    _check_dims(cols, rows)
    if min_width <= 0:
        raise ValueError(f"min_width must be > 0, got {min_width}")
    if min_width > max_width:
        raise ValueError(
            f"min_width ({min_width}) must not exceed max_width ({max_width})"
        )

    rng = rng if rng is not None else random.Random()
    col_widths = [rng.uniform(min_width, max_width) for _ in range(cols)]
    row_widths = [rng.uniform(min_width, max_width) for _ in range(rows)]
    return _running_sum(col_widths), _running_sum(row_widths)


def check_layout(pos_x: Sequence[float], pos_z: Sequence[float], width: int, height: int) -> None:
    """Raise ValueError unless the arrays match a ``width`` x ``height`` grid."""

    if len(pos_x) != width + 1 or len(pos_z) != height + 1:
        raise ValueError(
            f"Layout of {len(pos_x) - 1}x{len(pos_z) - 1} cells does not "
            f"match a {width}x{height} maze"
        )
    for axis, pos in (("x", pos_x), ("z", pos_z)):
        if any(b <= a for a, b in zip(pos, pos[1:])):
            raise ValueError(f"pos_{axis} must be strictly increasing")


def floor_row(pos_z: Sequence[float], row: int) -> int:
    """Map a grid row to its floor row index along z."""

    return len(pos_z) - 2 - row


def cell_bounds(
    pos_x: Sequence[float],
    pos_z: Sequence[float],
    row: int,
    col: int,
) -> Tuple[float, float, float, float]:
    """Return ``(x0, x1, z0, z1)`` of grid cell (row, col)."""

    k = floor_row(pos_z, row)
    return pos_x[col], pos_x[col + 1], pos_z[k], pos_z[k + 1]


def cell_center(
    pos_x: Sequence[float],
    pos_z: Sequence[float],
    row: int,
    col: int,
) -> Tuple[float, float]:
    """Return the floor-plane centre ``(x, z)`` of grid cell (row, col)."""

    x0, x1, z0, z1 = cell_bounds(pos_x, pos_z, row, col)
    return (x0 + x1) / 2, (z0 + z1) / 2


def _bucket(pos: Sequence[float], value: float) -> Optional[int]:
    if value < pos[0] or value > pos[-1]:
        return None
    for i in range(len(pos) - 1):
        if value <= pos[i + 1]:
            return i
    return None


def locate_cell(
    pos_x: Sequence[float],
    pos_z: Sequence[float],
    x: float,
    z: float,
) -> Optional[Tuple[int, int]]:
    """Return the grid cell ``(row, col)`` containing a floor point.

    Points outside the laid-out area give None.
    """

    col = _bucket(pos_x, x)
    k = _bucket(pos_z, z)
    if col is None or k is None:
        return None
    return floor_row(pos_z, k), col
