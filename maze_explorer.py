"""Command-line front end.

Reads a configuration file, builds the level, writes the hex output file
and prints a block-character dump of the maze with a short summary.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from hexa_writer import path_to_directions, write_output_file
from mazegen import Coord, MazeLike, count_open_edges, solve_bfs, validate_maze
from parsing import Config, ConfigError, parse_config
from proximity import nearest_wall_distance
from world import World


WALL_CHAR = "█"
TICK_DT = 1 / 60


def render_block(
    maze: MazeLike,
    *,
    marks: Optional[Dict[Coord, str]] = None,
) -> List[str]:
    """Render the maze as block characters for terminal display."""

    marks = marks or {}
    h = len(maze)
    w = len(maze[0]) if h else 0

    out_h = 2 * h + 1
    out_w = 2 * w + 1
    canvas: List[List[str]] = [
        [WALL_CHAR for _ in range(out_w)]
        for _ in range(out_h)
    ]

    for r in range(h):
        for c in range(w):
            cr = 2 * r + 1
            cc = 2 * c + 1
            canvas[cr][cc] = " "

            walls = maze[r][c]
            # carve passages
            if not walls["top"]:
                canvas[cr - 1][cc] = " "
            if not walls["bottom"]:
                canvas[cr + 1][cc] = " "
            if not walls["left"]:
                canvas[cr][cc - 1] = " "
            if not walls["right"]:
                canvas[cr][cc + 1] = " "

            m = marks.get((r, c))
            if m is not None and len(m) == 1:
                canvas[cr][cc] = m

    return ["".join(row) for row in canvas]


def simulate(world: World, ticks: int) -> None:
    """Run *ticks* idle frames so the balls settle."""

    for _ in range(ticks):
        world.tick(TICK_DT)


def summary(world: World) -> List[str]:
    """Describe the level in a few lines for the terminal."""

    cfg = world.config
    walls = world.walls()
    lines = [
        f"Maze {cfg.width}x{cfg.height} ({cfg.layout} layout, "
        f"{world.mode.value} mode)",
        f"Floor size: {world.pos_x[-1]:.2f} x {world.pos_z[-1]:.2f}",
        f"Wall segments: {len(walls)} "
        f"({len(world.walls(dedupe=True))} unique), "
        f"internal openings: {count_open_edges(world.maze)}",
        f"Start clearance: "
        f"{nearest_wall_distance(world.start, world.maze, world.pos_x, world.pos_z):.3f}",
    ]
    for i, ball in enumerate(world.balls):
        lines.append(
            f"Ball {i}: pos=({ball.x:.2f}, {ball.z:.2f}) speed={ball.speed:.2f}"
        )
    if world.ticks:
        lines.append(f"Simulated {world.ticks} ticks")
    return lines


def run(config: Config) -> int:
    """Generate the level, write the output file, print a summary."""

    world = World.from_config(config)
    # Entrance and exit openings only touch the border.
    validate_maze(world.maze, perfect=True)

    path = solve_bfs(world.maze, world.entry, world.exit)
    if path is None:
        raise RuntimeError("No valid path from ENTRY to EXIT")

    if config.output_file is not None:
        write_output_file(
            config.output_file,
            world.maze,
            world.entry,
            world.exit,
            path_to_directions(path),
            world.pos_x,
            world.pos_z,
        )

    simulate(world, config.ticks)

    marks = {cell: "." for cell in path}
    marks[world.entry] = "S"
    marks[world.exit] = "E"
    for line in render_block(world.maze, marks=marks):
        print(line)
    for line in summary(world):
        print(line)
    return 0


def main(argv: Sequence[str]) -> int:
    """CLI entrypoint."""

    if len(argv) != 2:
        print("Usage: python3 maze_explorer.py config.txt", file=sys.stderr)
        return 2

    try:
        config = parse_config(Path(argv[1]))
        return run(config)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except (ConfigError, OSError, RuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        print(f"Unexpected error: "
              f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1


def cli() -> int:
    return main(sys.argv)


if __name__ == "__main__":
    raise SystemExit(cli())
