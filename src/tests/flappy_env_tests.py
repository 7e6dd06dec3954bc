# src/tests/flappy_env_tests.py
"""
Quick tests for FlappyEnv (Gymnasium environment).

Usage (from repo root):
  python -m pytest src/tests/flappy_env_tests.py
  PYTHONPATH=src python -m tests.flappy_env_tests
  PYTHONPATH=src python -m tests.flappy_env_tests --render
  PYTHONPATH=src python -m tests.flappy_env_tests --no-api-check --no-determinism
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from moose_flap.env.flappy_env import FlappyEnv


def test_api_check(frame_skip: int = 4) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlappyEnv(frame_skip=frame_skip)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()
    print("✓ API check ok")


def test_smoke(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlappyEnv(frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == seed

        for t in range(steps):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term:
                assert r == FlappyEnv.REWARD_DEATH
                assert info["death_cause"] in ("wall", "pipe")
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Smoke test ok")


def test_noop_falls_to_floor(seed: int = 5) -> None:
    """Without flapping the player hits the floor long before the first pipe arrives."""
    env = FlappyEnv(frame_skip=1)
    try:
        env.reset(seed=seed)
        term = False
        for _ in range(200):
            _, r, term, trunc, info = env.step(0)
            if term:
                break
        assert term, "Free fall should end the episode"
        assert info["death_cause"] == "wall"
        assert info["score"] == 0
    finally:
        env.close()
    print("✓ Free fall ok")


def test_truncation(seed: int = 1) -> None:
    env = FlappyEnv(frame_skip=1, max_decisions=3)
    try:
        env.reset(seed=seed)
        results = [env.step(1) for _ in range(3)]
        assert [trunc for *_, trunc, _ in results] == [False, False, True]
        assert not any(term for _, _, term, _, _ in results)
    finally:
        env.close()
    print("✓ Truncation ok")


def test_determinism(steps: int = 300, seed: int = 123, frame_skip: int = 4) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlappyEnv(frame_skip=frame_skip)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    # Fixed action sequence using a local RNG (not numpy global)
    rng = np.random.RandomState(42)
    action_seq = [int(rng.rand() < 0.15) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        if not np.allclose(o1, o2):
            raise AssertionError(f"Determinism: obs mismatch at step {i}")
        if not (r1 == r2 and te1 == te2 and tr1 == tr2):
            raise AssertionError(f"Determinism: transition mismatch at step {i}")

    print("✓ Determinism ok")


def render_demo(steps: int, seed: int, frame_skip: int) -> None:
    """Open a window and run a short demo so you can visually verify behavior."""
    env = FlappyEnv(render_mode="human", frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        for _ in range(steps):
            # flap whenever the player drops below the next gap's centre
            a = 1 if (obs[5] > 0.5 and obs[4] < 0.05) or (obs[5] == 0.0 and obs[0] > 0.6) else 0
            obs, r, term, trunc, info = env.step(a)
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Render demo finished")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=300, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=4, help="Sim frames per decision step")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    ap.add_argument("--no-api-check", action="store_true", help="Skip Gym API compliance check")
    ap.add_argument("--no-smoke", action="store_true", help="Skip smoke test")
    ap.add_argument("--no-determinism", action="store_true", help="Skip determinism test")
    args = ap.parse_args()

    try:
        if not args.no_api_check:
            test_api_check(frame_skip=args.frame_skip)
        if not args.no_smoke:
            test_smoke(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        test_noop_falls_to_floor()
        test_truncation()
        if not args.no_determinism:
            test_determinism(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
        if args.render:
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=args.frame_skip)
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
