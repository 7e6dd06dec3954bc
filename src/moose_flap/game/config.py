# src/moose_flap/game/config.py
from __future__ import annotations
from dataclasses import dataclass

# --- Display ---
WIDTH = 500
HEIGHT = 500
FPS = 60

# --- Player ---
PLAYER_X = 50               # player's fixed x (pipes scroll left)
PLAYER_SIZE = 30            # square bounding box edge
GRAVITY = 0.45              # px/tick^2
LIFT = -10.0                # velocity override on flap (px/tick), negative = up

# --- Pipes ---
PIPE_WIDTH = 50
PIPE_GAP = 160
PIPE_SPAWN_TICKS = 98       # one pipe every N ticks
PIPE_SPEED = 1.7            # px/tick
GAP_MARGIN_TOP = 50
GAP_MARGIN_BOTTOM = 50

# --- Background ---
BACKGROUND_SCROLL = 0.5     # slower than pipes, gives depth

# --- Env / observations ---
MAX_VY = 15.0               # velocity normalization bound

# --- Colors (RGB) ---
COLOR_SKY = (135, 206, 235)
COLOR_PLAYER = (255, 0, 0)
COLOR_PIPE = (0, 128, 0)
COLOR_TEXT = (0, 0, 0)
COLOR_OVERLAY_TEXT = (255, 255, 255)
COLOR_OVERLAY = (0, 0, 0, 178)

# --- Assets (optional, shapes are drawn when missing) ---
ASSET_PLAYER = "moose.png"
ASSET_PIPE = "door.png"
ASSET_BACKGROUND = "background.jpg"


class ConfigError(ValueError):
    """Raised at startup when a GameConfig can't produce a playable field."""


@dataclass(frozen=True)
class GameConfig:
    width: int = WIDTH
    height: int = HEIGHT
    gravity: float = GRAVITY
    lift: float = LIFT
    player_size: int = PLAYER_SIZE
    player_x: float = PLAYER_X
    pipe_width: int = PIPE_WIDTH
    gap: int = PIPE_GAP
    spawn_interval: int = PIPE_SPAWN_TICKS
    scroll_speed: float = PIPE_SPEED
    margin_top: int = GAP_MARGIN_TOP
    margin_bottom: int = GAP_MARGIN_BOTTOM
    background_scroll: float = BACKGROUND_SCROLL

    def __post_init__(self):
        self.validate()

    @property
    def gap_y_range(self) -> tuple[float, float]:
        """Inclusive bounds for a pipe's gap anchor."""
        return float(self.margin_top), float(self.height - self.gap - self.margin_bottom)

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"playfield must be positive, got {self.width}x{self.height}")
        if self.player_size <= 0 or self.player_size >= self.height:
            raise ConfigError(f"player_size must be in (0, {self.height}), got {self.player_size}")
        if not (0 <= self.player_x <= self.width - self.player_size):
            raise ConfigError(f"player_x={self.player_x} puts the player off the playfield")
        if self.gravity <= 0:
            raise ConfigError(f"gravity must be > 0, got {self.gravity}")
        if self.lift >= 0:
            raise ConfigError(f"lift must be negative (upward), got {self.lift}")
        if self.pipe_width <= 0:
            raise ConfigError(f"pipe_width must be > 0, got {self.pipe_width}")
        if self.gap <= 0 or self.gap >= self.height:
            raise ConfigError(f"gap must be in (0, {self.height}), got {self.gap}")
        if isinstance(self.spawn_interval, bool) or not isinstance(self.spawn_interval, int) \
                or self.spawn_interval < 1:
            raise ConfigError(f"spawn_interval must be an int >= 1, got {self.spawn_interval!r}")
        if self.scroll_speed <= 0:
            raise ConfigError(f"scroll_speed must be > 0, got {self.scroll_speed}")
        if self.margin_top < 0 or self.margin_bottom < 0:
            raise ConfigError("gap margins must be >= 0")
        lo, hi = self.gap_y_range
        if hi < lo:
            raise ConfigError(
                f"gap {self.gap} with margins {self.margin_top}/{self.margin_bottom} "
                f"doesn't fit in height {self.height}"
            )
        if self.background_scroll < 0:
            raise ConfigError(f"background_scroll must be >= 0, got {self.background_scroll}")
