"""
Input sources
-------------
Every source turns the current game state into an InputFrame once per tick:

- ManualInput: held movement keys + pointer, fed by the window
- AutopilotPolicy: scripted nearest-target kiting behaviour

One-shot commands coming from a human (click, space, t, ...) go through the
simulation's command queue instead of the frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Set, Tuple

from .configs.arena_config import GameConfig
from .entities import Enemy
from .state import GameState
from .utils import dist, angle_to, normalize

Vec = Tuple[float, float]

KEY_DIRECTIONS = {
    "w": (0.0, -1.0),
    "s": (0.0, 1.0),
    "a": (-1.0, 0.0),
    "d": (1.0, 0.0),
    "up": (0.0, -1.0),
    "down": (0.0, 1.0),
    "left": (-1.0, 0.0),
    "right": (1.0, 0.0),
}


def keys_direction(keys: Set[str]) -> Vec:
    """Unit direction from held movement keys (diagonals normalized)"""
    dx, dy = 0.0, 0.0
    for k in keys:
        kd = KEY_DIRECTIONS.get(k)
        if kd is None:
            continue
        dx += kd[0]
        dy += kd[1]
    # opposite keys or arrow+letter duplicates
    dx = max(-1.0, min(1.0, dx))
    dy = max(-1.0, min(1.0, dy))
    return normalize(dx, dy)


@dataclass
class InputFrame:
    """What the player wants to do this tick"""
    move: Vec = (0.0, 0.0)
    aim: Optional[Vec] = None
    attack: bool = False
    dash: Optional[Vec] = None
    teleport: bool = False


class InputSource:
    def frame(self, state: GameState) -> InputFrame:
        raise NotImplementedError


class ManualInput(InputSource):
    """Logical input state maintained by the window's event handlers"""

    def __init__(self, hold_to_fire: bool = False):
        self.keys: Set[str] = set()
        self.pointer: Vec = (0.0, 0.0)
        self.pointer_held = False
        self.hold_to_fire = hold_to_fire

    def key_down(self, key: str):
        self.keys.add(key.lower())

    def key_up(self, key: str):
        self.keys.discard(key.lower())

    def move_pointer(self, x: float, y: float):
        self.pointer = (x, y)

    def set_pointer_held(self, held: bool):
        self.pointer_held = held

    def direction(self) -> Vec:
        return keys_direction(self.keys)

    def frame(self, state: GameState) -> InputFrame:
        return InputFrame(
            move=self.direction(),
            aim=self.pointer,
            attack=self.hold_to_fire and self.pointer_held,
        )


class AutopilotPolicy(InputSource):
    """
    Kiting bot: keeps the nearest enemy inside a distance band, orbits it,
    shoots it when in range, dashes away when it gets too close and teleports
    out when hp runs low.
    """

    def __init__(self, cfg: GameConfig):
        self.cfg = cfg

    def target(self, state: GameState) -> Optional[Enemy]:
        p = state.player
        best = None
        best_dist = math.inf
        for e in state.enemies:
            d = dist(p.x, p.y, e.x, e.y)
            if d < best_dist:
                best = e
                best_dist = d
        return best

    def movement(self, state: GameState, target: Optional[Enemy]) -> Vec:
        cfg = self.cfg
        p = state.player

        if state.in_break or target is None:
            return normalize(cfg.width / 2 - p.x, cfg.height / 2 - p.y)

        d = dist(p.x, p.y, target.x, target.y)
        if d > cfg.approach_distance:
            return normalize(target.x - p.x, target.y - p.y)
        if d < cfg.retreat_distance:
            return normalize(p.x - target.x, p.y - target.y)

        a = angle_to(p.x, p.y, target.x, target.y) + math.pi / 2
        return math.cos(a), math.sin(a)

    def frame(self, state: GameState) -> InputFrame:
        cfg = self.cfg
        p = state.player
        target = self.target(state)
        out = InputFrame(move=self.movement(state, target))

        if state.in_break:
            return out

        if target is not None:
            out.aim = (target.x, target.y)
            d = dist(p.x, p.y, target.x, target.y)
            out.attack = d <= cfg.bullet_range
            if d < cfg.dash_trigger_distance and p.dash_cooldown == 0:
                out.dash = (p.x - target.x, p.y - target.y)

        out.teleport = (
            p.hp < cfg.teleport_hp_fraction * p.hp_max
            and cfg.teleport_enabled
            and state.teleport_charges > 0
            and state.teleport_cooldown == 0
        )
        return out
