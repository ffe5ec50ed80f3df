"""Parsing module for maze configuration files.

The file holds one ``KEY=VALUE`` pair per line; ``#`` starts a comment.
WIDTH and HEIGHT are required, every other key has a default. Coordinates
are written ``x,y`` (column,row) and stored internally as (row,col).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple


Coord = Tuple[int, int]  # (row, col)


class ConfigError(ValueError):
    """Configuration and validation error."""

    pass


@dataclass(frozen=True)
class Config:
    """Parsed configuration for maze generation and simulation."""

    width: int
    height: int
    layout: str = "fixed"
    min_width: float = 0.8
    max_width: float = 1.6
    wall_thickness: float = 0.1
    margin: float = 0.15
    margin_reset: bool = False
    balls: int = 0
    ball_radius: float = 0.15
    friction: float = 0.5
    restitution: float = 0.7
    kick_speed: float = 3.0
    min_speed: float = 0.05
    move_speed: float = 2.0
    entry: Optional[Coord] = None
    exit: Optional[Coord] = None
    output_file: Optional[Path] = None
    seed: Optional[int] = None
    mode: str = "explore"
    ticks: int = 0

    def start_cell(self) -> Coord:
        """Return the entry cell, the top-left cell by default."""

        return self.entry if self.entry is not None else (0, 0)

    def goal_cell(self) -> Coord:
        """Return the exit cell, the bottom-right cell by default."""

        if self.exit is not None:
            return self.exit
        return (self.height - 1, self.width - 1)

    def narrowest_corridor(self) -> float:
        return self.min_width if self.layout == "variable" else 1.0


LAYOUTS = ("fixed", "variable")
MODES = ("explore", "free_fly")


def parse_bool(value: str, *, key: str) -> bool:
    """Parse a boolean from a config value."""

    v = value.strip().lower()
    if v in {"true", "1", "yes", "y", "on"}:
        return True
    if v in {"false", "0", "no", "n", "off"}:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def parse_int(value: str, *, key: str) -> int:
    """Parse an integer from a config value."""

    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigError(f"Invalid integer for {key}: {value!r}") from exc


def parse_float(value: str, *, key: str) -> float:
    """Parse a float from a config value."""

    try:
        return float(value.strip())
    except ValueError as exc:
        raise ConfigError(f"Invalid number for {key}: {value!r}") from exc


def parse_coord(value: str, *, key: str) -> Coord:
    """Parse coordinates as (x,y) and return internal (row,col)."""

    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 2:
        raise ConfigError(
            f"Invalid coordinate for {key}: {value!r} (expected 'x,y')"
        )
    x = parse_int(parts[0], key=key)
    y = parse_int(parts[1], key=key)
    return (y, x)


def parse_choice(value: str, *, key: str, choices: Tuple[str, ...]) -> str:
    v = value.strip().lower()
    if v not in choices:
        raise ConfigError(
            f"Invalid value for {key}: {value!r} "
            f"(expected one of {', '.join(choices)})"
        )
    return v


_FIELDS: Dict[str, Tuple[str, Callable[[str, str], object]]] = {
    "WIDTH": ("width", lambda v, k: parse_int(v, key=k)),
    "HEIGHT": ("height", lambda v, k: parse_int(v, key=k)),
    "LAYOUT": ("layout", lambda v, k: parse_choice(v, key=k, choices=LAYOUTS)),
    "MIN_WIDTH": ("min_width", lambda v, k: parse_float(v, key=k)),
    "MAX_WIDTH": ("max_width", lambda v, k: parse_float(v, key=k)),
    "WALL_THICKNESS": ("wall_thickness", lambda v, k: parse_float(v, key=k)),
    "MARGIN": ("margin", lambda v, k: parse_float(v, key=k)),
    "MARGIN_RESET": ("margin_reset", lambda v, k: parse_bool(v, key=k)),
    "BALLS": ("balls", lambda v, k: parse_int(v, key=k)),
    "BALL_RADIUS": ("ball_radius", lambda v, k: parse_float(v, key=k)),
    "FRICTION": ("friction", lambda v, k: parse_float(v, key=k)),
    "RESTITUTION": ("restitution", lambda v, k: parse_float(v, key=k)),
    "KICK_SPEED": ("kick_speed", lambda v, k: parse_float(v, key=k)),
    "MIN_SPEED": ("min_speed", lambda v, k: parse_float(v, key=k)),
    "MOVE_SPEED": ("move_speed", lambda v, k: parse_float(v, key=k)),
    "ENTRY": ("entry", lambda v, k: parse_coord(v, key=k)),
    "EXIT": ("exit", lambda v, k: parse_coord(v, key=k)),
    "OUTPUT_FILE": ("output_file", lambda v, k: Path(v).expanduser()),
    "SEED": ("seed", lambda v, k: parse_int(v, key=k)),
    "MODE": ("mode", lambda v, k: parse_choice(v, key=k, choices=MODES)),
    "TICKS": ("ticks", lambda v, k: parse_int(v, key=k)),
}

_REQUIRED = ("WIDTH", "HEIGHT")


def parse_config_text(text: str) -> Config:
    """Parse configuration text and return a validated Config."""

    values: Dict[str, object] = {}
    for line_no, line in enumerate(text.splitlines(), start=1):
        stripped = line.split("#", 1)[0].strip()
        if not stripped:
            continue
        if "=" not in stripped:
            raise ConfigError(
                f"Line {line_no}: Invalid syntax (expected KEY=VALUE)\n"
                f"→ {line}"
            )
        k, v = stripped.split("=", 1)
        key = k.strip().upper()
        if key not in _FIELDS:
            raise ConfigError(
                f"Line {line_no}: Unknown configuration key '{key}'\n"
                f"→ {line}"
            )
        name, convert = _FIELDS[key]
        try:
            values[name] = convert(v.strip(), key)
        except ConfigError as exc:
            raise ConfigError(f"Line {line_no}: {exc}\n→ {line}") from exc

    missing = [key for key in _REQUIRED if _FIELDS[key][0] not in values]
    if missing:
        raise ConfigError(
            f"Missing required config keys: {', '.join(missing)}"
        )

    config = Config(**values)  # type: ignore[arg-type]
    validate_config(config)
    return config


def validate_config(config: Config) -> None:
    """Check value ranges and cross-field constraints."""

    if config.width <= 0 or config.height <= 0:
        raise ConfigError("WIDTH and HEIGHT must be > 0")
    if config.min_width <= 0:
        raise ConfigError("MIN_WIDTH must be > 0")
    if config.min_width > config.max_width:
        raise ConfigError("MIN_WIDTH must not exceed MAX_WIDTH")
    if config.wall_thickness <= 0:
        raise ConfigError("WALL_THICKNESS must be > 0")
    if config.margin < 0:
        raise ConfigError("MARGIN must be >= 0")
    if config.balls < 0:
        raise ConfigError("BALLS must be >= 0")
    if config.ball_radius <= 0:
        raise ConfigError("BALL_RADIUS must be > 0")
    if config.friction < 0:
        raise ConfigError("FRICTION must be >= 0")
    if not 0.0 <= config.restitution <= 1.0:
        raise ConfigError("RESTITUTION must be between 0 and 1")
    if config.ticks < 0:
        raise ConfigError("TICKS must be >= 0")

    for name, point in (("ENTRY", config.entry), ("EXIT", config.exit)):
        if point is None:
            continue
        r, c = point
        if not (0 <= r < config.height and 0 <= c < config.width):
            raise ConfigError(
                f"{name} coordinates out of bounds "
                f"(0 ≤ x < WIDTH, 0 ≤ y < HEIGHT)"
            )
    if config.start_cell() == config.goal_cell():
        raise ConfigError("ENTRY and EXIT must be different")

    # The start cell centre and the corridors must fit the clearances.
    corridor = config.narrowest_corridor()
    if config.margin_reset and config.margin >= corridor / 2:
        raise ConfigError(
            f"MARGIN must be below half the narrowest corridor ({corridor})"
        )
    if config.balls and 2 * (config.ball_radius + config.wall_thickness / 2) >= corridor:
        raise ConfigError(
            f"BALL_RADIUS and WALL_THICKNESS leave no room in a corridor "
            f"of width {corridor}"
        )


def parse_config(path: Path) -> Config:
    """Read and validate the configuration file."""

    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read config file: {path}: {exc}") from exc
    return parse_config_text(text)
