"""Perfect maze generator.

Basic usage:

    from mazegen import MazeGenerator, solve_bfs

    gen = MazeGenerator(width=10, height=10, seed=42)
    maze = gen.maze()
    path = solve_bfs(maze, (0, 0), (9, 9))

The generator stores a 2D list of `Cell` instances (`grid[row][col]`). Each
`Cell` has a `walls` mapping with keys "top", "bottom", "left", "right" where
True means the wall exists. Row 0 is the top row: moving "top" decreases the
row index.

`MazeGenerator.maze()` / `generate_maze()` return the public form of the
grid: the wall mappings only, without the transient `visited` flag.
"""

from collections import deque
from dataclasses import dataclass
import random
from typing import (
    Callable,
    Deque,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)


Coord = Tuple[int, int]  # (row, col)
Walls = Dict[str, bool]
Maze = List[List[Walls]]
MazeLike = Sequence[Sequence[Mapping[str, bool]]]


SIDES: Tuple[str, ...] = ("top", "bottom", "left", "right")

OPPOSITE: Mapping[str, str] = {
    "top": "bottom",
    "bottom": "top",
    "left": "right",
    "right": "left",
}

# Neighbour offsets in candidate order: top, left, bottom, right.
MOVES: Tuple[Tuple[str, int, int], ...] = (
    ("top", -1, 0),
    ("left", 0, -1),
    ("bottom", 1, 0),
    ("right", 0, 1),
)

STEP: Mapping[str, Coord] = {side: (dr, dc) for side, dr, dc in MOVES}


@dataclass
class Cell:
    """A single maze cell."""

    row: int
    col: int
    walls: Walls
    visited: bool

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        self.walls = {"top": True, "bottom": True, "left": True, "right": True}
        self.visited = False


class MazeGenerator:
    """Generate a perfect maze with randomized depth-first backtracking.

    Every generated maze is a spanning tree of the grid graph: connected,
    without cycles, exactly one path between any two cells.
    """

    width: int
    height: int
    grid: List[List[Cell]]
    visited_count: int
    _rng: random.Random
    _on_step: Optional[Callable[["MazeGenerator"], None]]

    def __init__(
        self,
        width: int,
        height: int,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        on_step: Optional[Callable[["MazeGenerator"], None]] = None,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError(
                f"Maze dimensions must be >= 1, got {width}x{height}"
            )

        self.width = width
        self.height = height
        self.grid = [[Cell(r, c) for c in range(width)] for r in range(height)]
        self.visited_count = 0
        self._rng = rng if rng is not None else random.Random(seed)
        self._on_step = on_step

        self._generate_perfect_maze()

        if self._on_step is not None:
            self._on_step(self)

    def _neighbors_unvisited(self, r: int, c: int) -> List[Tuple[str, Coord]]:
        candidates: List[Tuple[str, Coord]] = []
        for side, dr, dc in MOVES:
            nr, nc = r + dr, c + dc
            if not (0 <= nr < self.height and 0 <= nc < self.width):
                continue
            if self.grid[nr][nc].visited:
                continue
            candidates.append((side, (nr, nc)))
        return candidates

    def _carve(self, a: Coord, side: str) -> Coord:
        ar, ac = a
        dr, dc = STEP[side]
        br, bc = ar + dr, ac + dc
        self.grid[ar][ac].walls[side] = False
        self.grid[br][bc].walls[OPPOSITE[side]] = False

        if self._on_step is not None:
            self._on_step(self)
        return (br, bc)

    def _generate_perfect_maze(self) -> None:
        total = self.width * self.height
        start = (
            self._rng.randrange(self.height),
            self._rng.randrange(self.width),
        )

        current = start
        path: List[Coord] = [start]
        self.grid[start[0]][start[1]].visited = True
        self.visited_count = 1

        while self.visited_count < total:
            unvisited = self._neighbors_unvisited(*current)
            if not unvisited:
                # The current cell is always the top of the path.
                path.pop()
                current = path[-1]
                continue
            side, nxt = self._rng.choice(unvisited)
            self._carve(current, side)
            self.grid[nxt[0]][nxt[1]].visited = True
            path.append(nxt)
            current = nxt
            self.visited_count += 1

    def maze(self) -> Maze:
        """Return the wall mappings of the grid (``visited`` dropped)."""

        return [[dict(cell.walls) for cell in row] for row in self.grid]


def generate_maze(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
) -> Maze:
    """Generate a perfect maze and return its wall mappings."""

    return MazeGenerator(width, height, rng=rng).maze()


def maze_size(maze: MazeLike) -> Tuple[int, int]:
    """Return ``(width, height)`` of a maze grid."""

    if not maze or not maze[0]:
        raise ValueError("Invalid maze: empty grid")
    return len(maze[0]), len(maze)


def is_border_side(maze: MazeLike, row: int, col: int, side: str) -> bool:
    """Return True if *side* of cell (row, col) faces outside the maze."""

    width, height = maze_size(maze)
    dr, dc = STEP[side]
    nr, nc = row + dr, col + dc
    return not (0 <= nr < height and 0 <= nc < width)


def open_boundary(maze: Maze, row: int, col: int, side: str) -> None:
    """Clear an outer wall to make an entrance or exit.

    After this edit the maze is no longer a pure tree: it gains an opening
    to the outside.
    """

    if side not in OPPOSITE:
        raise ValueError(f"Unknown side: {side!r}")
    width, height = maze_size(maze)
    if not (0 <= row < height and 0 <= col < width):
        raise ValueError(f"Cell ({row},{col}) is outside the maze")
    if not is_border_side(maze, row, col, side):
        raise ValueError(
            f"Side {side!r} of cell ({row},{col}) is not on the border"
        )
    maze[row][col][side] = False


def border_side(maze: MazeLike, row: int, col: int) -> Optional[str]:
    """Return the first side of (row, col) that lies on the border."""

    for side in SIDES:
        if is_border_side(maze, row, col, side):
            return side
    return None


def neighbors_open(maze: MazeLike, row: int, col: int) -> Iterable[Coord]:
    """Yield neighboring coordinates reachable from (row,col).

    Uses open walls only; openings to the outside are skipped.
    """

    cell = maze[row][col]
    for side, dr, dc in MOVES:
        if cell[side]:
            continue
        nr, nc = row + dr, col + dc
        if 0 <= nr < len(maze) and 0 <= nc < len(maze[0]):
            yield (nr, nc)


def solve_bfs(maze: MazeLike, start: Coord, goal: Coord) -> Optional[List[Coord]]:
    """Compute a shortest path using BFS (returns list of coords or None)."""

    if start == goal:
        return [start]

    q: Deque[Coord] = deque([start])
    came_from: Dict[Coord, Optional[Coord]] = {start: None}

    while q:
        cur = q.popleft()
        if cur == goal:
            break
        for nxt in neighbors_open(maze, cur[0], cur[1]):
            if nxt in came_from:
                continue
            came_from[nxt] = cur
            q.append(nxt)

    if goal not in came_from:
        return None

    path: List[Coord] = [goal]
    while path[-1] != start:
        prev = came_from[path[-1]]
        if prev is None:
            return None
        path.append(prev)
    path.reverse()
    return path


def count_open_edges(maze: MazeLike) -> int:
    """Count internal openings (each shared passage counted once)."""

    width, height = maze_size(maze)
    edges = 0
    for r in range(height):
        for c in range(width):
            if c + 1 < width and not maze[r][c]["right"]:
                edges += 1
            if r + 1 < height and not maze[r][c]["bottom"]:
                edges += 1
    return edges


def validate_maze(maze: MazeLike, *, perfect: bool = True) -> None:
    """Validate the maze structure.

    Checks:
    - Neighboring cells have coherent walls.
    - Full connectivity over open sides.
    - If perfect=True: open edges == cells - 1 (no loops).
    """

    width, height = maze_size(maze)

    for r in range(height):
        for c in range(width):
            cell = maze[r][c]
            if r + 1 < height and cell["bottom"] != maze[r + 1][c]["top"]:
                raise RuntimeError("Invalid maze: incoherent bottom/top walls")
            if c + 1 < width and cell["right"] != maze[r][c + 1]["left"]:
                raise RuntimeError("Invalid maze: incoherent right/left walls")

    reachable = {(0, 0)}
    q: Deque[Coord] = deque([(0, 0)])
    while q:
        cur = q.popleft()
        for nxt in neighbors_open(maze, cur[0], cur[1]):
            if nxt in reachable:
                continue
            reachable.add(nxt)
            q.append(nxt)

    if len(reachable) != width * height:
        raise RuntimeError("Invalid maze: disconnected cells exist")

    if perfect and count_open_edges(maze) != width * height - 1:
        raise RuntimeError("Invalid maze: perfect maze contains loops")
