"""
Headless evaluation of the scripted autopilot (and a random-action baseline)
"""

import csv
import os
from typing import Dict, List, Optional

import numpy as np

from .configs.arena_config import make_config, EVAL_CONFIG
from .env import WaveArenaEnv
from .simulation import Simulation


def _summarize(rows: List[Dict[str, float]]) -> Dict[str, float]:
    summary = {}
    for key in ("wave", "kos", "coins", "ticks"):
        values = np.array([r[key] for r in rows], dtype=np.float64)
        summary[f"mean_{key}"] = float(np.mean(values))
        summary[f"std_{key}"] = float(np.std(values))
    summary["completion_rate"] = float(np.mean([r["completed"] for r in rows]))
    summary["survival_rate"] = float(np.mean([r["alive"] for r in rows]))
    return summary


def write_csv(path: str, rows: List[Dict[str, float]]):
    """Write one line per episode"""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=["episode", "seed", "wave", "kos", "coins",
                                               "ticks", "completed", "alive"])
        writer.writeheader()
        writer.writerows(rows)


def evaluate_autopilot(
    profile: str = "ranged",
    n_episodes: int = EVAL_CONFIG["n_episodes"],
    max_steps: int = EVAL_CONFIG["max_steps"],
    seed: Optional[int] = EVAL_CONFIG["seed"],
    csv_path: Optional[str] = None,
    verbose: int = 1,
) -> Dict[str, float]:
    """
    Run the autopilot for several episodes without rendering.

    Args:
        profile: Build profile name ('ranged' or 'melee')
        n_episodes: Number of episodes
        max_steps: Tick limit per episode
        seed: Base seed; episode i uses seed + i
        csv_path: Optional per-episode CSV output
        verbose: 0 silent, 1 per-episode lines
    """
    cfg = make_config(profile, autopilot_start_enabled=True)
    if not cfg.autopilot_available:
        raise ValueError(f"Profile {profile!r} has no autopilot")

    rows = []
    for episode in range(n_episodes):
        ep_seed = seed + episode if seed is not None else None
        sim = Simulation(cfg, seed=ep_seed)
        ticks = sim.run(max_steps)
        s = sim.state

        rows.append({
            "episode": episode,
            "seed": ep_seed,
            "wave": s.wave,
            "kos": s.kos,
            "coins": s.coins,
            "ticks": ticks,
            "completed": int(s.completed),
            "alive": int(not s.game_over),
        })

        if verbose > 0:
            print(f"[Evaluate] Episode {episode + 1}/{n_episodes}: "
                  f"wave={s.wave} kos={s.kos} coins={s.coins} ticks={ticks}")

    if csv_path:
        write_csv(csv_path, rows)
        if verbose > 0:
            print(f"[Evaluate] Wrote {csv_path}")

    summary = _summarize(rows)
    if verbose > 0:
        print("\n" + "=" * 50)
        print(f"Autopilot Results ({n_episodes} episodes, profile={profile}):")
        print(f"Mean Wave: {summary['mean_wave']:.2f} ± {summary['std_wave']:.2f}")
        print(f"Mean KOs: {summary['mean_kos']:.1f}")
        print(f"Mean Episode Length: {summary['mean_ticks']:.1f} ticks")
        print(f"Completion Rate: {summary['completion_rate']:.0%}")
        print("=" * 50)
    return summary


def compare_with_random(
    profile: str = "ranged",
    n_episodes: int = EVAL_CONFIG["n_episodes"],
    max_steps: int = EVAL_CONFIG["max_steps"],
    seed: Optional[int] = EVAL_CONFIG["seed"],
    verbose: int = 1,
) -> Dict[str, float]:
    """Random policy baseline through the gymnasium environment"""
    if verbose > 0:
        print("Evaluating random policy baseline...")

    env = WaveArenaEnv(render_mode=None, profile=profile, max_steps=max_steps)
    if seed is not None:
        env.action_space.seed(seed)

    rows = []
    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)
        terminated = truncated = False
        steps = 0
        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            steps += 1
        rows.append({
            "episode": episode,
            "seed": seed + episode if seed is not None else None,
            "wave": info["wave"],
            "kos": info["kos"],
            "coins": info["coins"],
            "ticks": steps,
            "completed": int(info["completed"]),
            "alive": int(info["hp"] > 0),
        })
    env.close()

    summary = _summarize(rows)
    if verbose > 0:
        print(f"\nRandom Policy Results ({n_episodes} episodes):")
        print(f"Mean Wave: {summary['mean_wave']:.2f} ± {summary['std_wave']:.2f}")
        print(f"Mean KOs: {summary['mean_kos']:.1f}")
    return summary
