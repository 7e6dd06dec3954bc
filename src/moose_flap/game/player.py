# src/moose_flap/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from .config import PLAYER_X, PLAYER_SIZE, GRAVITY, LIFT, HEIGHT


@dataclass
class Player:
    """
    Square player at a fixed x, only moves vertically:
    - gravity is added to velocity every tick
    - flap() overrides velocity with the (negative) lift
    """
    x: float = PLAYER_X
    y: float = HEIGHT / 2
    velocity: float = 0.0
    size: int = PLAYER_SIZE
    gravity: float = GRAVITY
    lift: float = LIFT

    @property
    def bottom(self) -> float:
        return self.y + self.size

    def flap(self):
        self.velocity = self.lift

    def update_physics(self):
        """Integrate one tick: velocity first, then position."""
        self.velocity += self.gravity
        self.y += self.velocity

    def out_of_bounds(self, height: float) -> bool:
        return self.bottom > height or self.y < 0

    def respawn(self, height: float):
        self.y = height / 2
        self.velocity = 0.0
