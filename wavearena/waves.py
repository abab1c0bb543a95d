"""
Wave Director
-------------
Break / Combat state machine with a terminal Completed state:

- Break: countdown, passive regeneration, shop is open
- Combat: enemies spawn (all at once or one every `spawn_interval` ticks)
- Wave cleared: wave += 1, level-up rewards, back to Break
- Completed: wave counter went past `max_wave` (capped builds only)
"""

from __future__ import annotations

import math
import random
from typing import Tuple

from .configs.arena_config import GameConfig
from .entities import Enemy
from .state import GameState


def wave_enemy_count(cfg: GameConfig, wave: int) -> int:
    return cfg.wave_start_enemies + (wave - 1) * cfg.wave_enemy_add


def wave_enemy_hp(cfg: GameConfig, wave: int) -> int:
    return int(math.floor(cfg.enemy_base_hp * cfg.wave_hp_mult ** (wave - 1)))


def wave_enemy_speed(cfg: GameConfig, wave: int) -> float:
    return cfg.enemy_base_speed * cfg.wave_speed_mult ** (wave - 1)


def edge_spawn_point(cfg: GameConfig, rng: random.Random) -> Tuple[float, float]:
    """Random point just outside one of the four arena edges"""
    pad = cfg.spawn_padding
    side = rng.randrange(4)
    if side == 0:  # top
        return rng.random() * cfg.width, -pad
    if side == 1:  # right
        return cfg.width + pad, rng.random() * cfg.height
    if side == 2:  # bottom
        return rng.random() * cfg.width, cfg.height + pad
    return -pad, rng.random() * cfg.height  # left


class WaveDirector:
    """Drives wave progression for one GameState"""

    def __init__(self, cfg: GameConfig, state: GameState, rng: random.Random, verbose: int = 0):
        self.cfg = cfg
        self.state = state
        self.rng = rng
        self.verbose = verbose

    # ----------------------------
    # Break
    # ----------------------------

    def begin_break(self):
        self.state.in_break = True
        self.state.break_timer = self.cfg.break_ticks

    def update_break(self) -> bool:
        """Advance one break tick. Returns True when the next wave started."""
        s = self.state
        p = s.player
        s.break_timer -= 1
        p.hp = min(p.hp_max, p.hp + self.cfg.break_heal_per_tick)

        if s.break_timer <= 0:
            self.start_wave(s.wave)
            return True
        return False

    # ----------------------------
    # Combat
    # ----------------------------

    def start_wave(self, wave: int):
        cfg = self.cfg
        s = self.state
        s.enemies.clear()

        count = wave_enemy_count(cfg, wave)
        s.spawn_hp = wave_enemy_hp(cfg, wave)
        s.spawn_speed = wave_enemy_speed(cfg, wave)
        s.spawn_timer = 0
        if cfg.teleport_enabled:
            s.teleport_charges = cfg.teleport_per_wave
        s.in_break = False

        if cfg.spawn_mode == "instant":
            s.pending_spawns = 0
            for _ in range(count):
                self.spawn_enemy()
        else:
            s.pending_spawns = count

        if self.verbose > 0:
            print(f"[WaveDirector] Wave {wave} started: {count} enemies "
                  f"(hp={s.spawn_hp}, speed={s.spawn_speed:.2f})")

    def spawn_enemy(self) -> Enemy:
        x, y = edge_spawn_point(self.cfg, self.rng)
        hp = self.state.spawn_hp
        enemy = Enemy(
            x=x, y=y,
            hp=hp, hp_max=hp,
            speed=self.state.spawn_speed,
            radius=self.cfg.enemy_radius,
        )
        self.state.enemies.append(enemy)
        return enemy

    def update_spawns(self):
        s = self.state
        if s.pending_spawns <= 0:
            return
        if s.spawn_timer > 0:
            s.spawn_timer -= 1
            return

        self.spawn_enemy()
        s.pending_spawns -= 1
        s.spawn_timer = self.cfg.spawn_interval

    def wave_cleared(self) -> bool:
        return not self.state.enemies and self.state.pending_spawns <= 0

    def check_wave_clear(self) -> bool:
        """Close the wave when nothing is left alive or pending. Returns True on transition."""
        if not self.wave_cleared():
            return False

        s = self.state
        cleared = s.wave
        s.wave += 1
        if self.cfg.max_wave is not None and s.wave > self.cfg.max_wave:
            s.wave = self.cfg.max_wave
            s.completed = True
            if self.verbose > 0:
                print(f"[WaveDirector] Final wave {cleared} cleared - run completed")
            return True

        self.apply_level_rewards()
        self.begin_break()
        if self.verbose > 0:
            print(f"[WaveDirector] Wave {cleared} cleared (kos={s.kos}, coins={s.coins})")
        return True

    def apply_level_rewards(self):
        cfg = self.cfg
        p = self.state.player
        p.damage += cfg.level_damage
        p.speed += cfg.level_speed
        p.hp_max += cfg.level_hp_max
        p.hp = min(p.hp_max, p.hp + cfg.level_heal)
