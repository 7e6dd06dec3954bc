# experiments/sanity_rollout.py
"""
Scripted rollouts of FlappyEnv with a random and a rule-based player.

Prints one summary line per episode and, with --save-traces, stores
<out-dir>/<policy>/<seed>.npz holding the actions, seed and frame_skip
(plus observations with --save-obs) for experiments.replay.

  python -m experiments.sanity_rollout --policies both --save-traces
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222 --save-obs --save-traces
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np

from moose_flap.env.flappy_env import FlappyEnv

Policy = Callable[[np.ndarray], int]


def random_policy(seed: int, flap_prob: float = 0.15) -> Policy:
    rng = np.random.RandomState(10_000 + seed)
    return lambda _obs: int(rng.rand() < flap_prob)


def heuristic_policy(_seed: int) -> Policy:
    """Flap while falling once the player's bottom nears the gap's lower edge."""
    def act(obs: np.ndarray) -> int:
        y_norm, vy_norm, _, _, gap_bot, present = obs
        if vy_norm <= 0.0:
            return 0
        if present > 0.5:
            return int(gap_bot < 0.06)
        return int(y_norm > 0.66)
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": random_policy,
    "heuristic": heuristic_policy,
}


def rollout(policy: Policy, seed: int, frame_skip: int, max_steps: int) -> dict:
    env = FlappyEnv(frame_skip=frame_skip, max_decisions=max_steps)
    actions: List[int] = []
    observations: List[np.ndarray] = []
    ret = 0.0
    try:
        obs, info = env.reset(seed=seed)
        observations.append(obs)
        done = False
        while not done:
            a = policy(obs)
            obs, r, term, trunc, info = env.step(a)
            actions.append(a)
            observations.append(obs)
            ret += r
            done = term or trunc
    finally:
        env.close()
    return {
        "actions": np.asarray(actions, dtype=np.int8),
        "observations": np.asarray(observations, dtype=np.float32),
        "return": ret,
        "score": info["score"],
        "terminated": term,
        "death_cause": info["death_cause"],
    }


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", choices=["random", "heuristic", "both"], default="both")
    ap.add_argument("--seeds", default="", help="Comma-separated seeds (default 101..120)")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=5_000, help="Decision-step cap per episode")
    ap.add_argument("--out-dir", type=Path, default=Path("experiments/runs"))
    ap.add_argument("--save-traces", action="store_true")
    ap.add_argument("--save-obs", action="store_true")
    args = ap.parse_args()

    seeds = [int(s) for s in args.seeds.split(",") if s.strip()] or list(range(101, 121))
    names = list(POLICIES) if args.policies == "both" else [args.policies]

    for name in names:
        scores = []
        for seed in seeds:
            ep = rollout(POLICIES[name](seed), seed, args.frame_skip, args.steps)
            scores.append(ep["score"])
            print(f"[{name}] seed={seed} len={len(ep['actions'])} score={ep['score']} "
                  f"ret={ep['return']:.1f} cause={ep['death_cause'] or 'timeout'}")

            if args.save_traces:
                trace_dir = args.out_dir / name
                trace_dir.mkdir(parents=True, exist_ok=True)
                extra = {"observations": ep["observations"]} if args.save_obs else {}
                np.savez(trace_dir / f"{seed}.npz", actions=ep["actions"],
                         seed=seed, frame_skip=args.frame_skip, **extra)
        print(f"[{name}] mean score {np.mean(scores):.2f} over {len(seeds)} seeds")


if __name__ == "__main__":
    main()
