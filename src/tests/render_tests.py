# src/tests/render_tests.py
"""
Headless rendering tests (SDL dummy video driver, no window opens).

Usage (from repo root):
  python -m pytest src/tests/render_tests.py
  PYTHONPATH=src python -m tests.render_tests
"""

from __future__ import annotations
import logging
import os
import sys

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from moose_flap.env.flappy_env import FlappyEnv
from moose_flap.game.config import ASSET_PLAYER, ASSET_PIPE
from moose_flap.game.render import Renderer
from moose_flap.game.state import GameState, Snapshot


@pytest.fixture
def surface():
    pygame.init()
    yield pygame.Surface((500, 500))
    pygame.quit()


def game_over_snapshot() -> Snapshot:
    state = GameState(seed=3)
    state.update()
    state.pipes[0].x = 200.0
    state.pipes[0].gap_y = 100.0
    state.score = 2
    state.game_over()
    return state.snapshot()


def test_missing_assets_fall_back_to_shapes(surface, tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="moose_flap.game.render"):
        renderer = Renderer(surface, tmp_path)
    assert renderer.player_img is None
    assert renderer.pipe_img is None
    assert renderer.background_img is None
    assert renderer.background_width is None
    assert any("Asset not found" in r.getMessage() for r in caplog.records)


def test_corrupt_asset_is_skipped(surface, tmp_path, caplog):
    (tmp_path / ASSET_PLAYER).write_bytes(b"not a png")
    with caplog.at_level(logging.WARNING, logger="moose_flap.game.render"):
        renderer = Renderer(surface, tmp_path)
    assert renderer.player_img is None
    assert any("Couldn't load" in r.getMessage() for r in caplog.records)


def test_draw_game_over_with_shapes(surface):
    renderer = Renderer(surface)
    snap = game_over_snapshot()
    assert not snap.active
    renderer.draw(snap)
    # the player square sits under the translucent overlay: red still dominates
    r, g, b, _ = surface.get_at((int(snap.player_x) + 2, int(snap.player_y) + 2))
    assert r > g and r > b


def test_scaled_sprites_are_cached(surface, tmp_path):
    sprite = pygame.Surface((8, 8))
    sprite.fill((10, 20, 30))
    pygame.image.save(sprite, str(tmp_path / ASSET_PLAYER))
    pygame.image.save(sprite, str(tmp_path / ASSET_PIPE))
    renderer = Renderer(surface, tmp_path)
    assert renderer.player_img is not None

    snap = game_over_snapshot()
    renderer.draw(snap)
    cached = dict(renderer._scaled)
    renderer.draw(snap)
    assert renderer._scaled.keys() == cached.keys()
    for key, surf in cached.items():
        assert renderer._scaled[key] is surf
    # one player sprite plus the two segments of the single pipe
    assert len(cached) == 3


def test_env_rgb_array_render():
    env = FlappyEnv(render_mode="rgb_array")
    try:
        env.reset(seed=3)
        env.step(0)
        frame = env.render()
        assert isinstance(frame, np.ndarray)
        assert frame.shape == (500, 500, 3)
        assert frame.dtype == np.uint8
    finally:
        env.close()


def main():
    sys.exit(pytest.main([__file__, "-q"]))


if __name__ == "__main__":
    main()
