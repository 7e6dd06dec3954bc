# src/moose_flap/env/observations.py
"""
Compact observation vector for agents.

    [y_norm, vy_norm, dx_next, gap_top_rel, gap_bot_rel, pipe_present]

- y_norm       : player top in [0, 1] over [0, height - size]
- vy_norm      : velocity clipped to [-MAX_VY, MAX_VY], scaled to [-1, 1]
- dx_next      : horizontal distance from the player to the next pipe's left
                 edge, over the playfield width, in [0, 1]
- gap_top_rel  : (gap top - player top) / height, in [-1, 1]
- gap_bot_rel  : (gap bottom - player bottom) / height, in [-1, 1]
- pipe_present : 1.0 if a pipe lies ahead, else 0.0 (the three pipe fields
                 are then neutral: dx=1, rel=0)
"""
from __future__ import annotations
from typing import Optional

import numpy as np

from ..game.config import MAX_VY
from ..game.pipes import Pipe
from ..game.state import GameState

OBS_SIZE = 6
OBS_LOW = np.array([0.0, -1.0, 0.0, -1.0, -1.0, 0.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def next_pipe(state: GameState) -> Optional[Pipe]:
    """First pipe whose right edge hasn't gone behind the player yet."""
    p = state.player
    w = state.cfg.pipe_width
    ahead = [pipe for pipe in state.pipes if pipe.x + w >= p.x]
    if not ahead:
        return None
    return min(ahead, key=lambda pipe: pipe.x)


def build_observation(state: GameState) -> np.ndarray:
    cfg = state.cfg
    p = state.player

    y_norm = _clamp(p.y / max(1.0, cfg.height - p.size), 0.0, 1.0)
    vy_norm = _clamp(p.velocity, -MAX_VY, MAX_VY) / MAX_VY

    pipe = next_pipe(state)
    if pipe is None:
        dx, gap_top, gap_bot, present = 1.0, 0.0, 0.0, 0.0
    else:
        dx = _clamp((pipe.x - p.x) / cfg.width, 0.0, 1.0)
        gap_top = _clamp((pipe.gap_y - p.y) / cfg.height, -1.0, 1.0)
        gap_bot = _clamp((pipe.gap_y + cfg.gap - p.bottom) / cfg.height, -1.0, 1.0)
        present = 1.0

    return np.array([y_norm, vy_norm, dx, gap_top, gap_bot, present], dtype=np.float32)
