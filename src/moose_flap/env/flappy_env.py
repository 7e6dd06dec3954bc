# src/moose_flap/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from ..game.config import FPS, GameConfig
from ..game.render import Renderer
from ..game.state import GameState
from .observations import build_observation, OBS_LOW, OBS_HIGH


class FlappyEnv(gym.Env):
    """
    Moose Flap Gymnasium environment (vector observations).
    - One sim tick per game frame (60 Hz reference).
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Observation: shape (6,), float32, see observations.py.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    REWARD_ALIVE = 1.0
    REWARD_PIPE = 5.0
    REWARD_DEATH = -1.0

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 max_decisions: Optional[int] = 2000,
                 config: Optional[GameConfig] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unknown render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.max_decisions = max_decisions
        self.cfg = config if config is not None else GameConfig()

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.state: Optional[GameState] = None
        self.timestep: int = 0                   # number of *decision* steps elapsed
        self.death_cause: Optional[str] = None   # "pipe" | "wall" | None

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer: Optional[Renderer] = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # A given seed fixes the pipe layout; None lets the field randomize.
        self.state = GameState(self.cfg, seed=int(seed) if seed is not None else None)
        self.timestep = 0
        self.death_cause = None

        obs = build_observation(self.state)
        info = {"seed": self.state.seed, "score": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None, "Call reset() before step()"
        state = self.state

        if action == 1 and state.active:
            state.handle_action()

        scored = 0
        for _ in range(self.frame_skip):
            scored += state.update()
            if not state.active:
                self.death_cause = "wall" if state.player.out_of_bounds(self.cfg.height) else "pipe"
                break

        if state.active:
            reward = self.REWARD_ALIVE + self.REWARD_PIPE * scored
        else:
            reward = self.REWARD_DEATH

        self.timestep += 1
        terminated = not state.active
        truncated = (self.max_decisions is not None) and (self.timestep >= self.max_decisions)

        obs = build_observation(state)
        info = {
            "score": state.score,
            "best_score": state.best_score,
            "frame": state.frame,
            "timestep": self.timestep,
            "seed": state.seed,
            "death_cause": self.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                pygame.display.set_caption("Moose Flap — Gym Env")
                self.screen = pygame.display.set_mode((self.cfg.width, self.cfg.height))
            else:
                self.screen = pygame.Surface((self.cfg.width, self.cfg.height))
            self.clock = pygame.time.Clock()
            self.renderer = Renderer(self.screen)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()

        self.renderer.draw(self.state.snapshot())

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
