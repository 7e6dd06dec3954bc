# src/moose_flap/game/pipes.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from .config import GameConfig

logger = logging.getLogger(__name__)


@dataclass
class Pipe:
    """A top/bottom barrier pair. The gap spans [gap_y, gap_y + cfg.gap]."""
    x: float
    gap_y: float
    passed: bool = False


class PipeField:
    """
    Live pipes scrolling left. Spawns on a fixed tick cadence, so spacing
    doesn't depend on the render frame rate.
    """
    def __init__(self, cfg: GameConfig, seed: int | None = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.cfg = cfg
        self.seed = seed
        self.rng = random.Random(seed)
        self.pipes: List[Pipe] = []

    def __len__(self) -> int:
        return len(self.pipes)

    def __iter__(self):
        return iter(self.pipes)

    def _rand_gap_y(self) -> float:
        lo, hi = self.cfg.gap_y_range
        return self.rng.uniform(lo, hi)

    def maybe_spawn(self, frame: int) -> Optional[Pipe]:
        if frame % self.cfg.spawn_interval != 0:
            return None
        pipe = Pipe(x=float(self.cfg.width), gap_y=self._rand_gap_y())
        self.pipes.append(pipe)
        logger.debug("frame %d: spawned pipe gap_y=%.1f (%d live)", frame, pipe.gap_y, len(self.pipes))
        return pipe

    def advance(self):
        for pipe in self.pipes:
            pipe.x -= self.cfg.scroll_speed

    def prune(self):
        """Drop pipes whose right edge is at or past the left border."""
        w = self.cfg.pipe_width
        self.pipes = [p for p in self.pipes if p.x + w > 0]

    def clear(self):
        self.pipes = []
