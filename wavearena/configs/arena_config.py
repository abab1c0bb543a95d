"""
Configuration for the wave arena
Baseline tuning constants, the two build profiles and reward shaping settings
"""

import math
from dataclasses import dataclass, fields
from typing import Optional

# Simulation is stepped at a fixed rate; every timer below is in ticks
TICKS_PER_SECOND = 60

# ==============================================================================
# BASELINE CONSTANTS
# ==============================================================================

BASE_CONFIG = {
    # Arena
    "width": 960,
    "height": 540,

    # Player
    "player_radius": 14.0,
    "player_hp": 100.0,
    "player_speed": 2.2,        # units per tick
    "player_damage": 10.0,
    "attack_cooldown": 14,
    "invuln_ticks": 18,         # immunity after taking a hit
    "dash_distance": 85.0,
    "dash_cooldown": 90,

    # Enemies
    "enemy_radius": 13.0,
    "enemy_base_hp": 25,
    "enemy_base_speed": 1.2,
    "enemy_damage": 8.0,        # contact damage
    "enemy_hit_cooldown": 30,   # ticks between hits from the same enemy
    "contact_margin": 2.0,
    "coin_per_kill": 3,

    # Waves
    "wave_start_enemies": 4,
    "wave_enemy_add": 3,        # + enemies each wave
    "wave_hp_mult": 1.12,       # hp scaling per wave
    "wave_speed_mult": 1.03,    # speed scaling per wave
    "wave_break_seconds": 3,
    "max_wave": 50,             # None -> endless
    "spawn_mode": "throttled",  # "throttled" or "instant"
    "spawn_interval": 38,
    "spawn_padding": 20.0,
    "break_heal_per_second": 10.0,

    # Level-up rewards after each cleared wave
    "level_damage": 1.0,
    "level_speed": 0.05,
    "level_hp_max": 2.0,
    "level_heal": 10.0,

    # Shop
    "damage_cost": 10,
    "speed_cost": 10,
    "heal_cost": 12,
    "damage_cost_mult": 1.35,
    "speed_cost_mult": 1.35,
    "heal_cost_mult": 1.25,
    "damage_upgrade": 2.0,
    "speed_upgrade": 0.25,
    "heal_kit_amount": 30.0,

    # Combat model
    "combat_model": "projectile",  # "projectile" or "arc"
    "bullet_speed": 7.5,
    "bullet_range": 320.0,
    "bullet_radius": 4.0,
    "attack_range": 60.0,          # arc sweep reach beyond the enemy radius
    "attack_arc": math.radians(100),

    # Teleport
    "teleport_enabled": True,
    "teleport_per_wave": 3,
    "teleport_cooldown": 40,
    "teleport_candidates": 12,
    "teleport_margin": 40.0,

    # Autopilot
    "autopilot_available": True,
    "autopilot_start_enabled": True,
    "approach_distance": 90.0,
    "retreat_distance": 50.0,
    "dash_trigger_distance": 40.0,
    "teleport_hp_fraction": 0.35,

    # Cosmetics
    "coin_drop_ticks": 40,
    "coin_drop_drift": 0.35,
    "hit_shake": 10,
    "bullet_hit_shake": 4,
    "teleport_shake": 6,
    "muzzle_flash_ticks": 4,
    "swing_ticks": 8,
}

# ==============================================================================
# BUILD PROFILES
# The ranged build is the superset; the melee build swaps projectiles for an
# instant arc sweep, spawns the whole wave at once and never ends.
# ==============================================================================

PROFILE_RANGED = {
    "combat_model": "projectile",
    "spawn_mode": "throttled",
    "max_wave": 50,
    "teleport_enabled": True,
    "autopilot_available": True,
    "autopilot_start_enabled": True,
}

PROFILE_MELEE = {
    "combat_model": "arc",
    "spawn_mode": "instant",
    "max_wave": None,
    "teleport_enabled": False,
    "autopilot_available": False,
    "autopilot_start_enabled": False,
}

PROFILES = {
    "ranged": PROFILE_RANGED,
    "melee": PROFILE_MELEE,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS (gymnasium environment)
# ==============================================================================

REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced reward shaping",
    "R_KILL": 1.0,       # Reward per kill
    "R_COIN": 0.0,       # Reward per coin earned
    "R_WAVE": 5.0,       # Reward for clearing a wave
    "R_DAMAGE": 0.05,    # Penalty per hp lost
    "R_SHOT": 0.01,      # Penalty per attack (encourage efficiency)
    "R_TIME": 0.001,     # Small time penalty
    "R_DEATH": 10.0,     # Death penalty
}

REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize survival - heavy damage/death penalties",
    "R_KILL": 0.5,
    "R_COIN": 0.0,
    "R_WAVE": 5.0,
    "R_DAMAGE": 0.2,
    "R_SHOT": 0.02,
    "R_TIME": 0.0,
    "R_DEATH": 25.0,
}

REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Prioritize kills and coins - accept risk",
    "R_KILL": 2.0,
    "R_COIN": 0.1,
    "R_WAVE": 3.0,
    "R_DAMAGE": 0.02,
    "R_SHOT": 0.005,
    "R_TIME": 0.002,
    "R_DEATH": 5.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# ENVIRONMENT / EVALUATION SETTINGS
# ==============================================================================

ENV_CONFIG = {
    "profile": "ranged",
    "max_steps": 18_000,  # 5 minutes at 60 ticks/s
    "k_enemies": 5,
    "reward_config": "baseline",
}

EVAL_CONFIG = {
    "n_episodes": 10,
    "max_steps": 36_000,
    "seed": 42,
}


@dataclass(frozen=True)
class GameConfig:
    """Immutable set of tuning constants used by every simulation component"""
    width: int
    height: int

    player_radius: float
    player_hp: float
    player_speed: float
    player_damage: float
    attack_cooldown: int
    invuln_ticks: int
    dash_distance: float
    dash_cooldown: int

    enemy_radius: float
    enemy_base_hp: int
    enemy_base_speed: float
    enemy_damage: float
    enemy_hit_cooldown: int
    contact_margin: float
    coin_per_kill: int

    wave_start_enemies: int
    wave_enemy_add: int
    wave_hp_mult: float
    wave_speed_mult: float
    wave_break_seconds: float
    max_wave: Optional[int]
    spawn_mode: str
    spawn_interval: int
    spawn_padding: float
    break_heal_per_second: float

    level_damage: float
    level_speed: float
    level_hp_max: float
    level_heal: float

    damage_cost: int
    speed_cost: int
    heal_cost: int
    damage_cost_mult: float
    speed_cost_mult: float
    heal_cost_mult: float
    damage_upgrade: float
    speed_upgrade: float
    heal_kit_amount: float

    combat_model: str
    bullet_speed: float
    bullet_range: float
    bullet_radius: float
    attack_range: float
    attack_arc: float

    teleport_enabled: bool
    teleport_per_wave: int
    teleport_cooldown: int
    teleport_candidates: int
    teleport_margin: float

    autopilot_available: bool
    autopilot_start_enabled: bool
    approach_distance: float
    retreat_distance: float
    dash_trigger_distance: float
    teleport_hp_fraction: float

    coin_drop_ticks: int
    coin_drop_drift: float
    hit_shake: int
    bullet_hit_shake: int
    teleport_shake: int
    muzzle_flash_ticks: int
    swing_ticks: int

    @property
    def break_ticks(self) -> int:
        return int(math.floor(self.wave_break_seconds * TICKS_PER_SECOND))

    @property
    def break_heal_per_tick(self) -> float:
        return self.break_heal_per_second / TICKS_PER_SECOND


def make_config(profile: str = "ranged", **overrides) -> GameConfig:
    """
    Build a GameConfig from the baseline constants, a named profile and
    explicit overrides (applied in that order).
    """
    if profile not in PROFILES:
        raise ValueError(f"Unknown profile: {profile!r} (expected one of {sorted(PROFILES)})")

    values = dict(BASE_CONFIG)
    values.update(PROFILES[profile])

    known = {f.name for f in fields(GameConfig)}
    for key in overrides:
        if key not in known:
            raise KeyError(f"Unknown config key: {key}")
    values.update(overrides)

    if values["combat_model"] not in ("projectile", "arc"):
        raise ValueError(f"Unknown combat model: {values['combat_model']!r}")
    if values["spawn_mode"] not in ("throttled", "instant"):
        raise ValueError(f"Unknown spawn mode: {values['spawn_mode']!r}")

    return GameConfig(**values)


# Print a short summary when loaded directly
if __name__ == "__main__":
    for name in PROFILES:
        cfg = make_config(name)
        print(f"{name:8} | combat={cfg.combat_model:10} spawn={cfg.spawn_mode:9} "
              f"max_wave={cfg.max_wave}")
