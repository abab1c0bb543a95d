"""
Player movement, dash and teleport
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Sequence, Tuple

from .configs.arena_config import GameConfig
from .entities import Enemy
from .state import GameState
from .utils import clamp, dist, normalize

Vec = Tuple[float, float]


def min_enemy_distance(x: float, y: float, enemies: Sequence[Enemy]) -> float:
    """Distance to the nearest enemy (inf with no enemies)"""
    nearest = math.inf
    for e in enemies:
        nearest = min(nearest, dist(x, y, e.x, e.y))
    return nearest


def pick_safest_point(candidates: Sequence[Vec], enemies: Sequence[Enemy]) -> Vec:
    """Max-min search: the candidate whose nearest enemy is farthest away.
    Ties keep the earliest candidate."""
    best = candidates[0]
    best_score = -math.inf
    for cx, cy in candidates:
        score = min_enemy_distance(cx, cy, enemies)
        if score > best_score:
            best_score = score
            best = (cx, cy)
    return best


class PlayerController:
    """Applies movement and movement abilities to the player"""

    def __init__(self, cfg: GameConfig, state: GameState, rng: random.Random):
        self.cfg = cfg
        self.state = state
        self.rng = rng

    def _clamp_to_arena(self):
        p = self.state.player
        r = p.radius
        p.x = clamp(p.x, r, self.cfg.width - r)
        p.y = clamp(p.y, r, self.cfg.height - r)

    def move(self, direction: Vec):
        """Integrate one tick of movement and cool down the player's timers"""
        p = self.state.player
        dx, dy = direction
        p.x += dx * p.speed
        p.y += dy * p.speed
        self._clamp_to_arena()

        if p.dash_cooldown > 0:
            p.dash_cooldown -= 1
        if p.attack_cooldown > 0:
            p.attack_cooldown -= 1
        if p.invuln > 0:
            p.invuln -= 1

    def dash(self, direction: Optional[Vec]) -> bool:
        p = self.state.player
        if p.dash_cooldown > 0 or direction is None:
            return False

        dx, dy = normalize(*direction)
        if dx == 0.0 and dy == 0.0:
            return False

        p.x += dx * self.cfg.dash_distance
        p.y += dy * self.cfg.dash_distance
        self._clamp_to_arena()
        p.dash_cooldown = self.cfg.dash_cooldown
        return True

    def sample_teleport_candidates(self) -> List[Vec]:
        cfg = self.cfg
        m = cfg.teleport_margin
        return [
            (m + self.rng.random() * (cfg.width - 2 * m),
             m + self.rng.random() * (cfg.height - 2 * m))
            for _ in range(cfg.teleport_candidates)
        ]

    def can_teleport(self) -> bool:
        s = self.state
        return self.cfg.teleport_enabled and s.teleport_charges > 0 and s.teleport_cooldown == 0

    def teleport(self) -> bool:
        if not self.can_teleport():
            return False

        s = self.state
        x, y = pick_safest_point(self.sample_teleport_candidates(), s.enemies)
        s.player.x = x
        s.player.y = y
        s.teleport_charges -= 1
        s.teleport_cooldown = self.cfg.teleport_cooldown
        s.shake = self.cfg.teleport_shake
        return True
