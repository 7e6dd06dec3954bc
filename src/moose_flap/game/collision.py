# src/moose_flap/game/collision.py
from __future__ import annotations
from .config import GameConfig
from .pipes import Pipe
from .player import Player


def _overlaps_x(player: Player, pipe: Pipe, cfg: GameConfig) -> bool:
    return player.x < pipe.x + cfg.pipe_width and player.x + player.size > pipe.x


def collides(player: Player, pipe: Pipe, cfg: GameConfig) -> bool:
    """
    Strict AABB test of the player against both segments of a pipe.
    Touching edges (equal coordinates) don't count.
      top segment:    x in [pipe.x, pipe.x + w], y in [0, gap_y]
      bottom segment: x in [pipe.x, pipe.x + w], y in [gap_y + gap, height]
    """
    if not _overlaps_x(player, pipe, cfg):
        return False
    hits_top = player.y < pipe.gap_y
    hits_bottom = player.bottom > pipe.gap_y + cfg.gap
    return hits_top or hits_bottom


def has_passed(player: Player, pipe: Pipe, cfg: GameConfig) -> bool:
    return pipe.x + cfg.pipe_width < player.x


def score_pipe(player: Player, pipe: Pipe, cfg: GameConfig) -> int:
    """Flag the pipe as passed the first time it clears the player. Returns points earned."""
    if pipe.passed or not has_passed(player, pipe, cfg):
        return 0
    pipe.passed = True
    return 1
