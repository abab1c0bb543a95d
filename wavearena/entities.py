"""
Game entity dataclasses
"""

from dataclasses import dataclass


@dataclass
class Player:
    """Player character. Never removed; hp <= 0 ends the run."""
    x: float
    y: float
    radius: float = 14.0
    hp: float = 100.0
    hp_max: float = 100.0
    speed: float = 2.2  # units per tick
    damage: float = 10.0
    dash_cooldown: int = 0
    attack_cooldown: int = 0
    invuln: int = 0  # ticks of immunity after being hit

    @property
    def alive(self) -> bool:
        return self.hp > 0


@dataclass
class Enemy:
    """Enemy that walks straight at the player"""
    x: float
    y: float
    hp: float
    hp_max: float
    speed: float
    radius: float = 13.0
    hit_cooldown: int = 0


@dataclass
class Bullet:
    """Projectile with a distance budget instead of a lifetime"""
    x: float
    y: float
    vx: float
    vy: float
    damage: float
    life: float  # distance units left
    radius: float = 4.0


@dataclass
class CoinDrop:
    """Floating '+coins' popup left where an enemy died"""
    x: float
    y: float
    ttl: int = 40
