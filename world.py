"""Simulation state for one maze level.

`World` owns the maze, its layout, the player and the balls. It builds
everything up front, so per-tick queries always see a generated maze and a
matching layout. An outer frame loop calls `World.tick` once per frame.
"""

from dataclasses import dataclass, field
import enum
import math
import random
from typing import List, Optional, Tuple

from collider import Body, integrate, kick, resolve
from layout import Layout, cell_center, locate_cell, plan_fixed, plan_variable
from mazegen import Coord, Maze, border_side, generate_maze, open_boundary
from parsing import Config
from proximity import is_within_margin
from walls import WallSegment, emit_walls


EYE_HEIGHT = 0.5


class Mode(enum.Enum):
    """Movement mode of the player."""

    EXPLORE = "explore"
    FREE_FLY = "free_fly"


@dataclass
class MoveIntent:
    """Direction keys held during one tick."""

    forward: bool = False
    backward: bool = False
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False


@dataclass
class Player:
    x: float
    z: float
    y: float = EYE_HEIGHT


@dataclass
class World:
    """Maze, layout and bodies of one level."""

    config: Config
    rng: random.Random = field(default_factory=random.Random)
    mode: Mode = field(init=False)
    maze: Maze = field(init=False)
    pos_x: List[float] = field(init=False)
    pos_z: List[float] = field(init=False)
    player: Player = field(init=False)
    balls: List[Body] = field(init=False)
    ticks: int = field(init=False, default=0)
    resets: int = field(init=False, default=0)
    completed: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        self.mode = Mode(self.config.mode)
        self.reset()

    @classmethod
    def from_config(cls, config: Config) -> "World":
        return cls(config, rng=random.Random(config.seed))

    @property
    def entry(self) -> Coord:
        return self.config.start_cell()

    @property
    def exit(self) -> Coord:
        return self.config.goal_cell()

    @property
    def start(self) -> Tuple[float, float]:
        return cell_center(self.pos_x, self.pos_z, *self.entry)

    def _plan(self) -> Layout:
        cfg = self.config
        if cfg.layout == "variable":
            return plan_variable(
                cfg.width, cfg.height, cfg.min_width, cfg.max_width, self.rng
            )
        return plan_fixed(cfg.width, cfg.height)

    def reset(self, regenerate: bool = True) -> None:
        """Rebuild the level; keep the current maze if not *regenerate*."""

        cfg = self.config
        if regenerate:
            self.maze = generate_maze(cfg.width, cfg.height, self.rng)
            self._open_entrances()
            self.pos_x, self.pos_z = self._plan()
        x, z = self.start
        self.player = Player(x, z)
        self.balls = [self._spawn_ball() for _ in range(cfg.balls)]
        self.ticks = 0
        self.completed = False

    def _open_entrances(self) -> None:
        if self.config.width * self.config.height < 2:
            return
        for row, col in (self.entry, self.exit):
            side = border_side(self.maze, row, col)
            if side is not None:
                open_boundary(self.maze, row, col, side)

    def _spawn_ball(self) -> Body:
        row = self.rng.randrange(self.config.height)
        col = self.rng.randrange(self.config.width)
        x, z = cell_center(self.pos_x, self.pos_z, row, col)
        return Body(x, z)

    def walls(self, *, dedupe: bool = False) -> List[WallSegment]:
        """Return the wall segments for the renderer."""

        return emit_walls(
            self.maze, self.pos_x, self.pos_z, self.config.wall_thickness,
            dedupe=dedupe,
        )

    def toggle_mode(self) -> Mode:
        if self.mode is Mode.EXPLORE:
            self.mode = Mode.FREE_FLY
        else:
            self.mode = Mode.EXPLORE
            self.player.y = EYE_HEIGHT
        return self.mode

    def player_cell(self) -> Optional[Coord]:
        return locate_cell(self.pos_x, self.pos_z, self.player.x, self.player.z)

    def _move_player(self, dt: float, intent: MoveIntent) -> None:
        step = self.config.move_speed * dt
        dx = (intent.right - intent.left) * step
        dz = (intent.forward - intent.backward) * step
        self.player.x += dx
        self.player.z += dz
        if self.mode is Mode.FREE_FLY:
            self.player.y += (intent.up - intent.down) * step

    def _too_close(self) -> bool:
        return is_within_margin(
            (self.player.x, self.player.z),
            self.maze, self.pos_x, self.pos_z, self.config.margin,
        )

    def _step_ball(self, ball: Body, dt: float) -> None:
        cfg = self.config
        integrate(ball, dt, cfg.friction)
        reach = cfg.ball_radius * 2
        if math.hypot(ball.x - self.player.x, ball.z - self.player.z) < reach:
            kick(ball, self.player.x, self.player.z, cfg.kick_speed)
        resolve(
            ball, self.maze, self.pos_x, self.pos_z,
            cfg.ball_radius, cfg.restitution,
            thickness=cfg.wall_thickness, min_speed=cfg.min_speed,
        )

    def tick(self, dt: float, intent: Optional[MoveIntent] = None) -> None:
        """Advance the simulation by *dt* seconds."""

        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self._move_player(dt, intent or MoveIntent())

        if self.mode is Mode.EXPLORE and self.config.margin_reset and self._too_close():
            self.player.x, self.player.z = self.start
            self.resets += 1

        for ball in self.balls:
            self._step_ball(ball, dt)

        if self.player_cell() == self.exit:
            self.completed = True
        self.ticks += 1
