"""
Simulation state container
"""

from dataclasses import dataclass, field
from typing import List, Dict

from .entities import Player, Enemy, Bullet, CoinDrop
from .configs.arena_config import GameConfig


@dataclass
class Pointer:
    """Aim point in simulation space"""
    x: float = 0.0
    y: float = 0.0


@dataclass
class GameState:
    """All mutable gameplay data of one run"""
    player: Player
    coins: int = 0
    kos: int = 0
    wave: int = 1
    in_break: bool = True
    break_timer: int = 0
    completed: bool = False
    paused: bool = False
    autopilot: bool = False

    enemies: List[Enemy] = field(default_factory=list)
    bullets: List[Bullet] = field(default_factory=list)
    coin_drops: List[CoinDrop] = field(default_factory=list)
    pointer: Pointer = field(default_factory=Pointer)

    # Spawn schedule for the current wave
    pending_spawns: int = 0
    spawn_timer: int = 0
    spawn_hp: float = 0.0
    spawn_speed: float = 0.0

    teleport_charges: int = 0
    teleport_cooldown: int = 0

    prices: Dict[str, int] = field(default_factory=dict)

    # Cosmetic pulses
    shake: int = 0
    muzzle_flash: int = 0
    swing: int = 0

    tick: int = 0

    @property
    def game_over(self) -> bool:
        return self.player.hp <= 0

    @property
    def frozen(self) -> bool:
        """True while no gameplay state may change"""
        return self.paused or self.game_over or self.completed


def initial_state(cfg: GameConfig) -> GameState:
    """Fresh state for a new run: player centred, wave 1 break pending"""
    player = Player(
        x=cfg.width / 2,
        y=cfg.height / 2,
        radius=cfg.player_radius,
        hp=cfg.player_hp,
        hp_max=cfg.player_hp,
        speed=cfg.player_speed,
        damage=cfg.player_damage,
    )
    return GameState(
        player=player,
        break_timer=cfg.break_ticks,
        spawn_hp=cfg.enemy_base_hp,
        spawn_speed=cfg.enemy_base_speed,
        teleport_charges=cfg.teleport_per_wave if cfg.teleport_enabled else 0,
        autopilot=cfg.autopilot_available and cfg.autopilot_start_enabled,
        pointer=Pointer(x=cfg.width / 2, y=cfg.height / 2),
        prices={
            "damage": cfg.damage_cost,
            "speed": cfg.speed_cost,
            "heal": cfg.heal_cost,
        },
    )
