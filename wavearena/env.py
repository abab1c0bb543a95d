"""
WaveArenaEnv - gymnasium wrapper around the wave arena simulation
------------------------------------------------------------------
- Gymnasium API, one agent controlling the player
- Same simulation as the interactive game (autopilot switched off)
- Vector observation: player state + wave features + top-K nearest enemies
- MultiDiscrete action space: [move(9), attack(2), aim(8), dash(2), teleport(2)]

Quick test:
    python -m wavearena evaluate --compare-random
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Union

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .configs.arena_config import GameConfig, make_config, REWARD_CONFIGS, TICKS_PER_SECOND
from .inputs import InputFrame, ManualInput
from .simulation import Simulation, RenderSnapshot
from .utils import clamp, normalize

# move: 0 stay, 1 up, 2 down, 3 left, 4 right, 5-8 diagonals
MOVE_DIRS = [
    (0.0, 0.0),
    (0.0, -1.0), (0.0, 1.0), (-1.0, 0.0), (1.0, 0.0),
    (-1.0, -1.0), (1.0, -1.0), (-1.0, 1.0), (1.0, 1.0),
]

AIM_DISTANCE = 100.0


class ActionInput(ManualInput):
    """Input source fed directly from agent actions"""

    def __init__(self):
        super().__init__()
        self.pending = InputFrame()

    def direction(self):
        return self.pending.move

    def frame(self, state):
        return self.pending


class WaveArenaEnv(gym.Env):
    """Wave survival environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": TICKS_PER_SECOND}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        profile: str = "ranged",
        max_steps: int = 18_000,
        frame_skip: int = 1,
        k_enemies: int = 5,
        reward_config: Union[str, Dict[str, Any]] = "baseline",
        config: Optional[GameConfig] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render mode: {render_mode}"
        assert frame_skip >= 1, "frame_skip must be >= 1"
        self.render_mode = render_mode

        if config is None:
            config = make_config(profile, autopilot_start_enabled=False)
        self.cfg = config
        self.max_steps = max_steps
        self.frame_skip = frame_skip
        self.k_enemies = k_enemies

        if isinstance(reward_config, str):
            reward_config = REWARD_CONFIGS[reward_config]
        self.reward_config = reward_config

        self.action_space = spaces.MultiDiscrete([9, 2, 8, 2, 2])

        # Player: pos(2) hp(1) cooldowns(3) in_break(1) wave(1) teleports(1)
        # Each enemy: rel pos(2) hp(1) present(1)
        obs_dim = 2 + 1 + 3 + 1 + 1 + 1 + (self.k_enemies * 4)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        # Precompute aim directions (8-way)
        self._aim_dirs = []
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._aim_dirs.append((math.cos(ang), math.sin(ang)))

        self._window = None
        self._input = ActionInput()
        self.sim: Simulation = None  # type: ignore
        self._step_count = 0
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))

        self._input = ActionInput()
        self.sim = Simulation(self.cfg, seed=seed, manual=self._input)
        self.sim.state.autopilot = False
        self._step_count = 0
        self._events = {}

        if self._window is not None:
            self._window.attach(self.sim)

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self.action_space.contains(np.asarray(action, dtype=np.int64)), \
            f"Invalid action: {action}"
        move, attack, aim, dash, teleport = (int(a) for a in action)

        p = self.sim.state.player
        mx, my = normalize(*MOVE_DIRS[move])
        ax, ay = self._aim_dirs[aim]
        frame = InputFrame(
            move=(mx, my),
            aim=(p.x + ax * AIM_DISTANCE, p.y + ay * AIM_DISTANCE),
            attack=bool(attack),
            dash=(mx, my) if dash and (mx or my) else None,
            teleport=bool(teleport),
        )

        events = {"kills": 0.0, "coins": 0.0, "damage": 0.0, "shots": 0.0, "waves": 0.0}
        for i in range(self.frame_skip):
            self._input.pending = frame
            self.sim.step()
            for k, v in self.sim.events.items():
                events[k] += v
            # one-shot abilities only on the first tick of a skipped block
            frame = InputFrame(move=frame.move, aim=frame.aim, attack=frame.attack)
            if self.sim.is_over:
                break
        self._events = events

        reward = self._compute_reward()

        terminated = self.sim.is_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.cfg
        s = self.sim.state
        p = s.player

        max_wave = cfg.max_wave if cfg.max_wave is not None else 50
        obs_parts = [
            (p.x / cfg.width) * 2 - 1,
            (p.y / cfg.height) * 2 - 1,
            (p.hp / p.hp_max) * 2 - 1,
            clamp(p.attack_cooldown / max(1, cfg.attack_cooldown), 0, 1) * 2 - 1,
            clamp(p.dash_cooldown / max(1, cfg.dash_cooldown), 0, 1) * 2 - 1,
            clamp(p.invuln / max(1, cfg.invuln_ticks), 0, 1) * 2 - 1,
            1.0 if s.in_break else -1.0,
            clamp(s.wave / max_wave, 0, 1) * 2 - 1,
            clamp(s.teleport_charges / max(1, cfg.teleport_per_wave), 0, 1) * 2 - 1,
        ]

        enemies_sorted = sorted(
            s.enemies,
            key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - p.x) / cfg.width, -1, 1),
                    clamp((e.y - p.y) / cfg.height, -1, 1),
                    clamp(e.hp / e.hp_max, 0, 1) * 2 - 1,
                    1.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, -1.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        rc = self.reward_config
        ev = self._events

        reward = 0.0
        reward += rc["R_KILL"] * ev.get("kills", 0.0)
        reward += rc["R_COIN"] * ev.get("coins", 0.0)
        reward += rc["R_WAVE"] * ev.get("waves", 0.0)
        reward -= rc["R_DAMAGE"] * ev.get("damage", 0.0)
        reward -= rc["R_SHOT"] * ev.get("shots", 0.0)
        reward -= rc["R_TIME"]

        if self.sim.state.game_over:
            reward -= rc["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.sim.state
        return {
            "hp": s.player.hp,
            "wave": s.wave,
            "kos": s.kos,
            "coins": s.coins,
            "num_enemies": len(s.enemies),
            "num_bullets": len(s.bullets),
            "in_break": s.in_break,
            "completed": s.completed,
            "enemies_killed": self._events.get("kills", 0.0),
            "damage_taken": self._events.get("damage", 0.0),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return rasterize(self.sim.snapshot(), self.cfg.width, self.cfg.height)

        if self._window is None:
            from .window import ArenaWindow
            self._window = ArenaWindow(self.sim, drive=False)
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def rasterize(snap: RenderSnapshot, width: int, height: int) -> np.ndarray:
    """Cheap numpy rendering of the snapshot as filled circles (HxWx3 uint8)"""
    frame = np.empty((height, width, 3), dtype=np.uint8)
    frame[:] = (43, 157, 244)
    yy, xx = np.mgrid[0:height, 0:width]

    def disc(x, y, r, color):
        mask = (xx - x) ** 2 + (yy - y) ** 2 <= r * r
        frame[mask] = color

    for c in snap.coin_drops:
        disc(c.x, c.y, 4, (255, 215, 120))
    for e in snap.enemies:
        disc(e.x, e.y, e.radius, (255, 127, 163))
    for b in snap.bullets:
        disc(b.x, b.y, b.radius, (255, 255, 255))
    p = snap.player
    disc(p.x, p.y, p.radius, (255, 143, 184))
    return frame
