# src/moose_flap/game/state.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .collision import collides, score_pipe
from .config import GameConfig
from .pipes import PipeField
from .player import Player

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of one committed tick, handed to the renderer."""
    width: int
    height: int
    player_x: float
    player_y: float
    player_size: int
    pipes: Tuple[Tuple[float, float], ...]   # (x, gap_y)
    pipe_width: int
    gap: int
    score: int
    best_score: int
    active: bool
    background_x: float


class GameState:
    """
    One process-lifetime game. Owns the player and the pipe field.

    States: active (playing) and game over. The same input action flaps while
    active and restarts while game over, see handle_action().
    """
    def __init__(self, cfg: Optional[GameConfig] = None, seed: int | None = None):
        self.cfg = cfg if cfg is not None else GameConfig()
        self.player = Player(
            x=float(self.cfg.player_x),
            y=self.cfg.height / 2,
            velocity=0.0,
            size=self.cfg.player_size,
            gravity=self.cfg.gravity,
            lift=self.cfg.lift,
        )
        self.field = PipeField(self.cfg, seed)
        self.active = True
        self.score = 0
        self.best_score = 0
        self.frame = 0
        self.background_x = 0.0
        self.background_width = float(self.cfg.width)  # renderer swaps in the image width

    @property
    def pipes(self):
        return self.field.pipes

    @property
    def seed(self) -> int:
        return self.field.seed

    # -------------------- Transitions --------------------

    def handle_action(self):
        """SPACE / click: flap while playing, restart after game over."""
        if self.active:
            self.player.flap()
        else:
            self.reset()

    def game_over(self):
        if not self.active:
            return
        self.active = False
        if self.score > self.best_score:
            self.best_score = self.score
        logger.debug("game over at frame %d: score=%d best=%d", self.frame, self.score, self.best_score)

    def reset(self):
        self.player.respawn(self.cfg.height)
        self.field.clear()
        self.score = 0
        self.frame = 0
        self.background_x = 0.0
        self.active = True
        logger.debug("restart (best=%d)", self.best_score)

    # -------------------- Tick --------------------

    def update(self) -> int:
        """
        Advance one tick. Returns the points scored during it.
        Order: physics, wall check, spawn, advance/collide/score, prune.
        Collision and scoring both see pre-prune positions.
        """
        if not self.active:
            return 0

        cfg = self.cfg
        self.player.update_physics()

        if self.player.out_of_bounds(cfg.height):
            self.game_over()
            return 0

        self.field.maybe_spawn(self.frame)

        self.field.advance()

        crashed = False
        gained = 0
        for pipe in self.field:
            if collides(self.player, pipe, cfg):
                crashed = True
            gained += score_pipe(self.player, pipe, cfg)

        if gained:
            self.score += gained
            logger.debug("frame %d: score %d", self.frame, self.score)
        if crashed:
            self.game_over()

        self.field.prune()

        self.background_x -= cfg.background_scroll
        if self.background_x <= -self.background_width:
            self.background_x = 0.0

        self.frame += 1
        return gained

    def snapshot(self) -> Snapshot:
        return Snapshot(
            width=self.cfg.width,
            height=self.cfg.height,
            player_x=self.player.x,
            player_y=self.player.y,
            player_size=self.player.size,
            pipes=tuple((p.x, p.gap_y) for p in self.field),
            pipe_width=self.cfg.pipe_width,
            gap=self.cfg.gap,
            score=self.score,
            best_score=self.best_score,
            active=self.active,
            background_x=self.background_x,
        )
