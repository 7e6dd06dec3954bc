# experiments/replay.py
"""
Replay a trace saved by experiments.sanity_rollout in a window.

  python -m experiments.replay --policy heuristic --seed 105
  python -m experiments.replay --trace experiments/runs/random/112.npz --slow

Controls: SPACE pause/resume, R restart, ESC quit.
Same seed + frame_skip + actions reproduce the recorded run exactly.
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Optional

import numpy as np
import pygame

from moose_flap.env.flappy_env import FlappyEnv


def _draw_overlay(env: FlappyEnv, step_idx: int, action: Optional[int]):
    surf = pygame.display.get_surface()
    if surf is None or env.state is None:
        return
    font = pygame.font.SysFont("arial", 16)
    label = "-" if action is None else ("FLAP" if action == 1 else "NOOP")
    lines = [
        f"Step={step_idx}  Action={label}",
        f"Frame={env.state.frame}  Cause={env.death_cause or '—'}",
    ]
    panel = pygame.Surface((260, 20 * (len(lines) + 1)), pygame.SRCALPHA)
    panel.fill((10, 20, 35, 160))
    surf.blit(panel, (10, 40))
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, (210, 230, 255)), (18, 46 + i * 20))
    pygame.display.flip()

def replay_episode(seed: int, actions: np.ndarray, frame_skip: int, slow: bool = False):
    """
    Replays an episode deterministically with an on-screen overlay.
    Controls: SPACE pause/resume, R restart, ESC quit.
    """
    env = FlappyEnv(render_mode="human", frame_skip=frame_skip, max_decisions=None)
    env.reset(seed=seed)

    paused = False
    step_idx = 0
    action: Optional[int] = None
    clock = pygame.time.Clock()

    try:
        running = True
        while running and step_idx < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        paused = False

            if paused:
                env.render()
                _draw_overlay(env, step_idx, action=None)
                clock.tick(60)
                continue

            action = int(actions[step_idx])
            _, _, term, trunc, _ = env.step(action)
            _draw_overlay(env, step_idx, action)
            step_idx += 1

            clock.tick(15 if slow else 60)

            if term or trunc:
                pygame.time.delay(600)
                break
    finally:
        env.close()

def main():
    ap = argparse.ArgumentParser(description="Replay a recorded FlappyEnv episode with overlay.")
    ap.add_argument("--trace", type=Path, default=None, help="Path to a <seed>.npz trace")
    ap.add_argument("--policy", default="random", help="Trace subfolder when --trace is omitted")
    ap.add_argument("--seed", type=int, default=None, help="Trace seed when --trace is omitted")
    ap.add_argument("--out-dir", type=Path, default=Path("experiments/runs"))
    ap.add_argument("--slow", action="store_true", help="Slow display (~15 fps) for readability")
    args = ap.parse_args()

    trace_path = args.trace
    if trace_path is None:
        if args.seed is None:
            raise SystemExit("Please provide --seed or --trace")
        trace_path = args.out_dir / args.policy / f"{args.seed}.npz"
    if not trace_path.exists():
        raise SystemExit(f"Trace not found: {trace_path}")

    with np.load(trace_path) as trace:
        actions = trace["actions"]
        seed = int(trace["seed"])
        frame_skip = int(trace["frame_skip"])
    if actions.ndim != 1:
        raise ValueError(f"Expected 1D action array, got shape {actions.shape}")

    print(f"Replaying {trace_path}  seed={seed}  steps={len(actions)}  frame_skip={frame_skip}")
    print("Controls: SPACE pause/resume | R restart | ESC quit")

    replay_episode(seed=seed, actions=actions, frame_skip=frame_skip, slow=args.slow)

if __name__ == "__main__":
    main()
