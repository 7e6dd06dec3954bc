# src/moose_flap/game/render.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

import pygame

from .config import (
    ASSET_PLAYER, ASSET_PIPE, ASSET_BACKGROUND,
    COLOR_SKY, COLOR_PLAYER, COLOR_PIPE, COLOR_TEXT,
    COLOR_OVERLAY, COLOR_OVERLAY_TEXT,
)
from .state import Snapshot

logger = logging.getLogger(__name__)


def load_image(assets_dir: Optional[Path], name: str) -> Optional[pygame.Surface]:
    """Load an optional sprite. Returns None (shape fallback) if it can't be read."""
    if assets_dir is None:
        return None
    path = Path(assets_dir) / name
    if not path.exists():
        logger.warning("Asset not found: %s (drawing shapes instead)", path)
        return None
    try:
        img = pygame.image.load(path.as_posix())
    except (pygame.error, OSError) as e:
        logger.warning("Couldn't load %s: %s (drawing shapes instead)", path, e)
        return None
    if pygame.display.get_surface() is not None:
        img = img.convert_alpha()
    return img


class Renderer:
    """Draws a Snapshot. Never touches game state."""

    def __init__(self, surface: pygame.Surface, assets_dir: Optional[Path] = None):
        self.surface = surface
        self.player_img = load_image(assets_dir, ASSET_PLAYER)
        self.pipe_img = load_image(assets_dir, ASSET_PIPE)
        self.background_img = load_image(assets_dir, ASSET_BACKGROUND)
        self.font = pygame.font.SysFont("arial", 20)
        self.big_font = pygame.font.SysFont("arial", 40)
        # (asset name, w, h) -> scaled surface; sprite sizes only change with gap_y
        self._scaled: Dict[Tuple[str, int, int], pygame.Surface] = {}

    def scaled(self, name: str, img: pygame.Surface, size: Tuple[int, int]) -> pygame.Surface:
        key = (name, int(size[0]), int(size[1]))
        surf = self._scaled.get(key)
        if surf is None:
            surf = pygame.transform.scale(img, key[1:])
            self._scaled[key] = surf
        return surf

    @property
    def background_width(self) -> Optional[int]:
        """Wrap width for background scrolling, None when no image is loaded."""
        return self.background_img.get_width() if self.background_img is not None else None

    def draw(self, snap: Snapshot):
        self._draw_background(snap)
        self._draw_player(snap)
        for x, gap_y in snap.pipes:
            self._draw_pipe(snap, x, gap_y)
        self._draw_hud(snap)
        if not snap.active:
            self._draw_game_over(snap)

    # -------------------- Pieces --------------------

    def _draw_background(self, snap: Snapshot):
        if self.background_img is None:
            self.surface.fill(COLOR_SKY)
            return
        img = self.scaled(ASSET_BACKGROUND, self.background_img, (self.background_img.get_width(), snap.height))
        bx = int(snap.background_x)
        self.surface.blit(img, (bx, 0))
        # second tile covers the gap left by scrolling
        if img.get_width() < snap.width or bx < 0:
            self.surface.blit(img, (bx + img.get_width(), 0))

    def _draw_player(self, snap: Snapshot):
        rect = pygame.Rect(int(snap.player_x), int(snap.player_y), snap.player_size, snap.player_size)
        if self.player_img is not None:
            self.surface.blit(self.scaled(ASSET_PLAYER, self.player_img, rect.size), rect)
        else:
            pygame.draw.rect(self.surface, COLOR_PLAYER, rect)

    def _draw_pipe(self, snap: Snapshot, x: float, gap_y: float):
        bottom_y = int(gap_y + snap.gap)
        top = pygame.Rect(int(x), 0, snap.pipe_width, int(gap_y))
        bottom = pygame.Rect(int(x), bottom_y, snap.pipe_width, snap.height - bottom_y)
        for rect in (top, bottom):
            if rect.height <= 0:
                continue
            if self.pipe_img is not None:
                self.surface.blit(self.scaled(ASSET_PIPE, self.pipe_img, rect.size), rect)
            else:
                pygame.draw.rect(self.surface, COLOR_PIPE, rect)

    def _draw_hud(self, snap: Snapshot):
        self.surface.blit(self.font.render(f"Score: {snap.score}", True, COLOR_TEXT), (10, 10))
        best = self.font.render(f"High Score: {snap.best_score}", True, COLOR_TEXT)
        self.surface.blit(best, (snap.width - 150, 10))

    def _draw_game_over(self, snap: Snapshot):
        panel = pygame.Surface((snap.width, snap.height), pygame.SRCALPHA)
        panel.fill(COLOR_OVERLAY)
        self.surface.blit(panel, (0, 0))

        cx, cy = snap.width // 2, snap.height // 2
        lines = [
            (self.big_font, "GAME OVER", cy - 20),
            (self.font, f"Final Score: {snap.score}", cy + 20),
            (self.font, "Press SPACE or Click to Restart", cy + 60),
        ]
        for font, msg, y in lines:
            txt = font.render(msg, True, COLOR_OVERLAY_TEXT)
            self.surface.blit(txt, txt.get_rect(center=(cx, y)))
